"""
Lexer for template condition expressions.

Splits the text of ``{{#if ...}}`` into tokens:
- SYMBOL: ( )
- OPERATOR: >= <= == != > <
- STRING: "..." or '...'
- NUMBER: 10, -3, 4.5
- IDENTIFIER: variable paths (product.price, this.[0], @index) and helper names
- whitespace is skipped
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


class ConditionLexError(ValueError):
    """Condition text contains a character no token accepts."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Lex error at position {position}: {message}")


@dataclass
class Token:
    """
    Condition token.

    Attributes:
        type: SYMBOL, OPERATOR, STRING, NUMBER, IDENTIFIER or EOF
        value: Token text (quotes stripped for STRING)
        position: Offset in the condition text
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ConditionLexer:
    """Regex driven tokenizer; specs are tried in order at every position."""

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r"\s+", "WHITESPACE", True),
        (r"[()]", "SYMBOL", False),
        (r">=|<=|==|!=|>|<", "OPERATOR", False),
        (r'"[^"]*"', "STRING", False),
        (r"'[^']*'", "STRING", False),
        (r"-?\d+(?:\.\d+)?(?![\w.\[\]@])", "NUMBER", False),
        (r"[^\s()\"'<>=!]+", "IDENTIFIER", False),
        (r".", "UNKNOWN", False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Tokenize a condition.

        Returns:
            Tokens with a trailing EOF token

        Raises:
            ConditionLexError: on a stray '!', '=' or an unterminated quote
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue
                value = match.group(0)
                if token_type == "UNKNOWN":
                    raise ConditionLexError(f"Unexpected character '{value}'", position)
                if not ignore:
                    if token_type == "STRING":
                        value = value[1:-1]
                    tokens.append(Token(type=token_type, value=value, position=position))
                position = match.end()
                break

        tokens.append(Token(type="EOF", value="", position=position))
        return tokens


__all__ = ["ConditionLexer", "ConditionLexError", "Token"]
