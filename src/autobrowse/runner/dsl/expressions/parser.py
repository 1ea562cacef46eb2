"""Recursive-descent parser for condition expressions.

Grammar, lowest precedence first::

    or         := and ( "||" and )*
    and        := comparison ( "&&" comparison )*
    comparison := unary ( ( "==" | "!=" | ">" | ">=" | "<" | "<=" ) unary )?
    unary      := "!" unary | primary
    primary    := NUMBER | STRING | BOOLEAN | IDENTIFIER | "(" or ")"
"""

import logging

from ....exceptions import ExpressionParseError
from .binary_operation_expression import COMPARISON_OPERATORS, BinaryOperationExpression
from .expression import Expression
from .literal_expression import LiteralExpression
from .tokenizer import Token, TokenType, tokenize
from .unary_operation_expression import UnaryOperationExpression
from .variable_expression import VariableExpression

logger = logging.getLogger(__name__)


class ExpressionParser:
    """Builds an :class:`Expression` tree from expression text.

    Example:
        >>> tree = ExpressionParser("i >= 2 && !done").parse()
        >>> tree.evaluate({"i": 3, "done": False})
        True
    """

    def __init__(self, expression: str):
        self.expression = expression
        self.tokens: list[Token] = []
        self.pos = 0

    def parse(self) -> Expression:
        """Parse the whole expression.

        Raises:
            ExpressionParseError: On empty input, malformed syntax, or tokens
                left over after a complete expression
        """
        if not self.expression.strip():
            raise ExpressionParseError("Empty expression")

        self.tokens = tokenize(self.expression)
        self.pos = 0

        tree = self._parse_or()

        if self._peek().type != TokenType.EOF:
            token = self._peek()
            raise self._error(f"Unexpected token '{token.value}' at position {token.position}")

        logger.debug("Parsed expression '%s'", self.expression)
        return tree

    def _parse_or(self) -> Expression:
        left = self._parse_and()
        while self._match_operator("||"):
            right = self._parse_and()
            left = BinaryOperationExpression("||", left, right)
        return left

    def _parse_and(self) -> Expression:
        left = self._parse_comparison()
        while self._match_operator("&&"):
            right = self._parse_comparison()
            left = BinaryOperationExpression("&&", left, right)
        return left

    def _parse_comparison(self) -> Expression:
        left = self._parse_unary()
        token = self._peek()
        if token.type == TokenType.OPERATOR and token.value in COMPARISON_OPERATORS:
            self._advance()
            right = self._parse_unary()
            return BinaryOperationExpression(token.value, left, right)
        return left

    def _parse_unary(self) -> Expression:
        if self._match_operator("!"):
            return UnaryOperationExpression("!", self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_or()
            if self._peek().type != TokenType.RPAREN:
                raise self._error(f"Expected ')' at position {self._peek().position}")
            self._advance()
            return inner

        if token.type == TokenType.NUMBER:
            self._advance()
            try:
                return LiteralExpression(float(token.value))
            except ValueError as e:
                raise self._error(f"Invalid number '{token.value}'", e) from e

        if token.type == TokenType.STRING:
            self._advance()
            return LiteralExpression(token.value)

        if token.type == TokenType.BOOLEAN:
            self._advance()
            return LiteralExpression(token.value == "true")

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return VariableExpression(token.value)

        if token.type == TokenType.EOF:
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token '{token.value}' at position {token.position}")

    def _match_operator(self, operator: str) -> bool:
        token = self._peek()
        if token.type == TokenType.OPERATOR and token.value == operator:
            self._advance()
            return True
        return False

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> None:
        if self.pos < len(self.tokens) - 1:
            self.pos += 1

    def _error(self, message: str, cause: Exception | None = None) -> ExpressionParseError:
        return ExpressionParseError(message, cause=cause, context={"expression": self.expression})


def parse_expression(expression: str) -> Expression:
    """Parse expression text into an expression tree."""
    return ExpressionParser(expression).parse()
