"""
Lexical types of the slot template language.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Token kinds produced by TemplateLexer."""

    TEXT = "TEXT"
    RAW_VARIABLE = "RAW_VARIABLE"        # {{{path}}}
    VARIABLE = "VARIABLE"                # {{path}}
    TRANSLATION = "TRANSLATION"          # {{t 'key'}}
    BLOCK_OPEN = "BLOCK_OPEN"            # {{#each path}} {{#if cond}} {{#unless cond}}
    BLOCK_CLOSE = "BLOCK_CLOSE"          # {{/each}} {{/if}} {{/unless}}
    ELSE = "ELSE"                        # {{else}}
    EOF = "EOF"


class BlockKind(enum.Enum):
    EACH = "each"
    IF = "if"
    UNLESS = "unless"


@dataclass(frozen=True)
class Token:
    """
    Token with position information.

    ``value`` is the exact source text of the token. ``argument`` carries the
    parsed payload: the path of a variable, the key of a translation, the
    path/condition of a block opener. ``block`` is set for block tokens.
    """
    type: TokenType
    value: str
    position: int        # offset in the source text
    line: int            # 1-based
    column: int          # 1-based
    argument: str = ""
    block: BlockKind | None = None

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "BlockKind", "Token"]
