"""
Lexer of the slot template language.

Everything outside a recognized directive is TEXT. A ``{{`` that does not
start a valid directive stays part of the surrounding text, so malformed
markup survives untouched.
"""

from __future__ import annotations

import bisect
import logging
import re
from typing import List, Optional, Tuple

from .tokens import BlockKind, Token, TokenType

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Tokenizer for slot templates.

    Directive patterns are tried in priority order at every ``{{``:
    raw variable, block open, block close, else, translation, variable.
    """

    TOKEN_SPECS: List[Tuple[TokenType, "re.Pattern[str]"]] = [
        (TokenType.RAW_VARIABLE, re.compile(r"\{\{\{([^#/][^}]*)\}\}\}")),
        (TokenType.BLOCK_OPEN, re.compile(r"\{\{#(each|if|unless)\b(.*?)\}\}", re.DOTALL)),
        (TokenType.BLOCK_CLOSE, re.compile(r"\{\{/(each|if|unless)\s*\}\}")),
        (TokenType.ELSE, re.compile(r"\{\{\s*else\s*\}\}")),
        (TokenType.TRANSLATION, re.compile(r"\{\{t\s+['\"]([^'\"]+)['\"]\}\}")),
        (TokenType.VARIABLE, re.compile(r"\{\{([^#/][^}]*)\}\}")),
    ]

    def __init__(self):
        self.text = ""
        self._line_starts: List[int] = [0]

    def tokenize(self, text: str) -> List[Token]:
        """
        Split a template into tokens.

        Returns:
            Token list terminated by an EOF token
        """
        self._initialize(text)
        tokens: List[Token] = []
        text_start = 0
        search_from = 0

        while True:
            idx = text.find("{{", search_from)
            if idx == -1:
                break

            token = self._match_directive(idx)
            if token is None:
                search_from = idx + 1
                continue

            if idx > text_start:
                tokens.append(self._make(TokenType.TEXT, text_start, idx))
            tokens.append(token)
            text_start = search_from = idx + len(token.value)

        if text_start < len(text):
            tokens.append(self._make(TokenType.TEXT, text_start, len(text)))

        line, column = self._line_col(len(text))
        tokens.append(Token(TokenType.EOF, "", len(text), line, column))

        logger.debug(f"Tokenized template of length {len(text)} into {len(tokens)} tokens")
        return tokens

    def _initialize(self, text: str) -> None:
        self.text = text
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def _match_directive(self, position: int) -> Optional[Token]:
        for token_type, pattern in self.TOKEN_SPECS:
            match = pattern.match(self.text, position)
            if not match:
                continue

            line, column = self._line_col(position)
            value = match.group(0)

            if token_type in (TokenType.BLOCK_OPEN, TokenType.BLOCK_CLOSE):
                block = BlockKind(match.group(1))
                argument = match.group(2).strip() if token_type == TokenType.BLOCK_OPEN else ""
                return Token(token_type, value, position, line, column, argument=argument, block=block)

            if token_type == TokenType.ELSE:
                return Token(token_type, value, position, line, column)

            return Token(token_type, value, position, line, column, argument=match.group(1).strip())
        return None

    def _make(self, token_type: TokenType, start: int, end: int) -> Token:
        line, column = self._line_col(start)
        return Token(token_type, self.text[start:end], start, line, column)

    def _line_col(self, position: int) -> Tuple[int, int]:
        line_index = bisect.bisect_right(self._line_starts, position) - 1
        return line_index + 1, position - self._line_starts[line_index] + 1


__all__ = ["TemplateLexer"]
