"""
AST nodes of the slot template language.

Nodes are immutable. Block nodes keep their exact ``source`` text so a block
that cannot be expanded (loop depth exceeded) is emitted as written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class TemplateNode:
    """Base class of all template nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Literal text, emitted as is."""
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """
    ``{{path}}`` (escaped) or ``{{{path}}}`` (raw) substitution.
    """
    path: str
    raw: bool = False


@dataclass(frozen=True)
class TranslationNode(TemplateNode):
    """``{{t 'key'}}``: UI string looked up in the active language."""
    key: str


@dataclass(frozen=True)
class EachNode(TemplateNode):
    """``{{#each path}}body{{/each}}``."""
    path: str
    body: List[TemplateNode] = field(default_factory=list)
    source: str = ""


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """
    ``{{#if cond}}then{{else}}otherwise{{/if}}``.

    ``inverted`` marks ``{{#unless}}``: the first branch is shown when the
    condition is false.
    """
    condition: str
    then_body: List[TemplateNode] = field(default_factory=list)
    else_body: List[TemplateNode] = field(default_factory=list)
    inverted: bool = False
    source: str = ""


# Alias for a node list (AST)
TemplateAST = List[TemplateNode]


__all__ = [
    "TemplateNode",
    "TextNode",
    "VariableNode",
    "TranslationNode",
    "EachNode",
    "IfNode",
    "TemplateAST",
]
