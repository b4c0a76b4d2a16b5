"""
Parser of template condition expressions.

Grammar:
condition   → helper | comparison | path
helper      → "(" "eq" IDENTIFIER STRING ")"
            | "(" "gt" IDENTIFIER NUMBER ")"
comparison  → operand OPERATOR operand
operand     → IDENTIFIER | NUMBER | STRING
path        → IDENTIFIER

Only double quoted literals are accepted by the eq helper.
"""

from __future__ import annotations

from typing import List

from .lexer import ConditionLexer, Token
from .model import (
    Condition,
    ComparisonCondition,
    EqualsCondition,
    GreaterThanCondition,
    LiteralOperand,
    Operand,
    PathOperand,
    TruthCondition,
)


class ConditionParseError(ValueError):
    """Syntax error in a condition expression."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


HELPERS = ("eq", "gt")


class ConditionParser:
    """
    Recursive descent parser for conditions.

    One instance may parse many conditions; state is reset on every call.
    """

    def __init__(self):
        self.lexer = ConditionLexer()
        self._text = ""
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, condition_str: str) -> Condition:
        """
        Parse a condition string into its model.

        Raises:
            ConditionParseError: on a syntax error
            ConditionLexError: on a tokenization error
        """
        self._text = condition_str
        self._tokens = self.lexer.tokenize(condition_str)
        self._position = 0

        if self._is_at_end():
            raise ConditionParseError("Empty condition", 0)

        if self._check("SYMBOL", "("):
            result = self._parse_helper()
        else:
            result = self._parse_comparison_or_path()

        if not self._is_at_end():
            current = self._current_token()
            raise ConditionParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_helper(self) -> Condition:
        """(eq path "literal") | (gt path number)"""
        self._advance()  # (
        name = self._consume("IDENTIFIER", "Expected helper name after '('")
        if name.value not in HELPERS:
            raise ConditionParseError(f"Unknown helper '{name.value}'", name.position)

        path = self._consume("IDENTIFIER", f"Expected variable path after '{name.value}'")

        if name.value == "eq":
            literal = self._current_token()
            if literal.type != "STRING" or not literal.value or self._raw_quote(literal) != '"':
                raise ConditionParseError('Expected non-empty "literal" in eq helper', literal.position)
            self._advance()
            result: Condition = EqualsCondition(path=path.value, expected=literal.value)
        else:
            number = self._consume("NUMBER", "Expected number in gt helper")
            result = GreaterThanCondition(path=path.value, threshold=float(number.value))

        if not self._match("SYMBOL", ")"):
            raise ConditionParseError("Expected ')' after helper arguments", self._current_token().position)
        return result

    def _parse_comparison_or_path(self) -> Condition:
        left_token = self._current_token()
        left = self._parse_operand()

        if self._check("OPERATOR"):
            operator = self._advance().value
            right = self._parse_operand()
            return ComparisonCondition(left=left, operator=operator, right=right)

        if not isinstance(left, PathOperand):
            raise ConditionParseError("Condition must be a variable path", left_token.position)
        return TruthCondition(path=left.path)

    def _parse_operand(self) -> Operand:
        token = self._current_token()
        if token.type == "IDENTIFIER":
            self._advance()
            return PathOperand(token.value)
        if token.type == "NUMBER":
            self._advance()
            return LiteralOperand(float(token.value))
        if token.type == "STRING":
            self._advance()
            return LiteralOperand(token.value)
        if token.type == "EOF":
            raise ConditionParseError("Unexpected end of condition", token.position)
        raise ConditionParseError(f"Unexpected token '{token.value}'", token.position)

    # Token helpers

    def _raw_quote(self, token: Token) -> str:
        return self._text[token.position] if token.position < len(self._text) else ""

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type="EOF", value="", position=len(self._text))
        return self._tokens[self._position]

    def _is_at_end(self) -> bool:
        return self._current_token().type == "EOF"

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _check(self, token_type: str, value: str | None = None) -> bool:
        current = self._current_token()
        return current.type == token_type and (value is None or current.value == value)

    def _match(self, token_type: str, value: str | None = None) -> bool:
        if self._check(token_type, value):
            self._advance()
            return True
        return False

    def _consume(self, token_type: str, error_message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise ConditionParseError(error_message, self._current_token().position)


__all__ = ["ConditionParser", "ConditionParseError"]
