"""
Parser of the slot template language.

Builds the AST from the token stream in one pass. Blocks are matched by
counting nesting depth of the same block kind: the closing token that brings
the depth back to zero closes the block.

``{{else}}`` binding rules:
- an else belongs to the block being matched only at depth 1 of that block
  kind, and only the first such else counts;
- an {{#if}} scan does not count {{#unless}} blocks, so an else directly
  inside an unless nested in an if at depth 1 is taken by the if;
- an {{#unless}} scan skips elses inside nested {{#if}} blocks;
- elses inside nested {{#each}} bodies stay with the blocks in that body.

Unmatched openers and stray closers are kept as literal text; a stray else
produces no output.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .lexer import TemplateLexer
from .nodes import EachNode, IfNode, TemplateAST, TemplateNode, TextNode, TranslationNode, VariableNode
from .tokens import BlockKind, Token, TokenType

logger = logging.getLogger(__name__)


class TemplateParser:
    """Turns template text into a TemplateAST."""

    def __init__(self):
        self.lexer = TemplateLexer()
        self._tokens: List[Token] = []

    def parse(self, text: str) -> TemplateAST:
        """
        Parse a template.

        Never fails: markup that cannot be matched becomes text.
        """
        self._tokens = self.lexer.tokenize(text)
        # EOF is not part of any range
        ast = self._parse_range(0, len(self._tokens) - 1)
        logger.debug(f"Parsed template into {len(ast)} top-level nodes")
        return ast

    def _parse_range(self, start: int, end: int) -> TemplateAST:
        nodes: List[TemplateNode] = []
        i = start

        while i < end:
            token = self._tokens[i]

            if token.type == TokenType.TEXT:
                self._append_text(nodes, token.value)
            elif token.type == TokenType.VARIABLE:
                nodes.append(VariableNode(path=token.argument))
            elif token.type == TokenType.RAW_VARIABLE:
                nodes.append(VariableNode(path=token.argument, raw=True))
            elif token.type == TokenType.TRANSLATION:
                nodes.append(TranslationNode(key=token.argument))
            elif token.type == TokenType.ELSE:
                logger.debug(f"Dropping stray {{{{else}}}} at {token.line}:{token.column}")
            elif token.type == TokenType.BLOCK_CLOSE:
                logger.debug(f"Unmatched {token.value} at {token.line}:{token.column}, kept as text")
                self._append_text(nodes, token.value)
            elif token.type == TokenType.BLOCK_OPEN:
                match = self._find_block_end(i, end)
                if match is None:
                    logger.debug(f"Unclosed {token.value} at {token.line}:{token.column}, kept as text")
                    self._append_text(nodes, token.value)
                else:
                    close_index, else_index = match
                    nodes.append(self._build_block(i, close_index, else_index))
                    i = close_index
            i += 1

        return nodes

    def _build_block(self, open_index: int, close_index: int, else_index: Optional[int]) -> TemplateNode:
        opener = self._tokens[open_index]
        source = "".join(t.value for t in self._tokens[open_index:close_index + 1])

        if opener.block == BlockKind.EACH:
            return EachNode(
                path=opener.argument,
                body=self._parse_range(open_index + 1, close_index),
                source=source,
            )

        split = else_index if else_index is not None else close_index
        return IfNode(
            condition=opener.argument,
            then_body=self._parse_range(open_index + 1, split),
            else_body=self._parse_range(else_index + 1, close_index) if else_index is not None else [],
            inverted=opener.block == BlockKind.UNLESS,
            source=source,
        )

    def _find_block_end(self, open_index: int, end: int) -> Optional[Tuple[int, Optional[int]]]:
        """
        Index of the matching close token and of the else bound to the block.

        Returns:
            (close_index, else_index) or None when the block is never closed
        """
        kind = self._tokens[open_index].block
        depth = 1
        each_depth = 0
        if_depth = 0
        else_index: Optional[int] = None

        for j in range(open_index + 1, end):
            token = self._tokens[j]

            if token.type == TokenType.BLOCK_OPEN:
                if token.block == kind:
                    depth += 1
                elif token.block == BlockKind.EACH:
                    each_depth += 1
                elif token.block == BlockKind.IF and kind == BlockKind.UNLESS:
                    if_depth += 1

            elif token.type == TokenType.BLOCK_CLOSE:
                if token.block == kind:
                    depth -= 1
                    if depth == 0:
                        return j, else_index
                elif token.block == BlockKind.EACH and each_depth > 0:
                    each_depth -= 1
                elif token.block == BlockKind.IF and kind == BlockKind.UNLESS and if_depth > 0:
                    if_depth -= 1

            elif token.type == TokenType.ELSE and kind != BlockKind.EACH:
                if depth == 1 and else_index is None and each_depth == 0 and if_depth == 0:
                    else_index = j

        return None

    @staticmethod
    def _append_text(nodes: List[TemplateNode], text: str) -> None:
        if nodes and isinstance(nodes[-1], TextNode):
            nodes[-1] = TextNode(nodes[-1].text + text)
        else:
            nodes.append(TextNode(text))


def parse_template(text: str) -> TemplateAST:
    """Convenience wrapper around TemplateParser."""
    return TemplateParser().parse(text)


__all__ = ["TemplateParser", "parse_template"]
