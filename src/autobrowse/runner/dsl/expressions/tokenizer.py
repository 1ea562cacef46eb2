"""Tokenizer for condition expressions."""

from dataclasses import dataclass
from enum import Enum

from ....exceptions import ExpressionParseError

TWO_CHAR_OPERATORS = ("==", "!=", ">=", "<=", "&&", "||")
ONE_CHAR_OPERATORS = (">", "<", "!")


class TokenType(Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """One lexical token and the offset it starts at."""

    type: TokenType
    value: str
    position: int = 0


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens in a single left-to-right scan.

    Whitespace is skipped. Two-character operators are matched before
    one-character ones. ``true`` and ``false`` are boolean tokens, any other
    word is an identifier. The returned list always ends with an EOF token.

    Args:
        expression: Expression text such as ``count > 0 && name != ""``

    Returns:
        List of tokens

    Raises:
        ExpressionParseError: On an unterminated string, a lone ``=``, ``&``
            or ``|``, or any other character outside the grammar
    """
    tokens: list[Token] = []
    pos = 0
    length = len(expression)

    while pos < length:
        char = expression[pos]

        if char.isspace():
            pos += 1
            continue

        if char.isdigit() or (char == "." and pos + 1 < length and expression[pos + 1].isdigit()):
            start = pos
            while pos < length and (expression[pos].isdigit() or expression[pos] == "."):
                pos += 1
            tokens.append(Token(TokenType.NUMBER, expression[start:pos], start))
            continue

        if char in ("'", '"'):
            start = pos
            end = expression.find(char, pos + 1)
            if end == -1:
                raise ExpressionParseError(
                    f"Unterminated string starting at position {start}",
                    context={"expression": expression, "position": start},
                )
            tokens.append(Token(TokenType.STRING, expression[pos + 1 : end], start))
            pos = end + 1
            continue

        if _is_identifier_start(char):
            start = pos
            while pos < length and _is_identifier_part(expression[pos]):
                pos += 1
            word = expression[start:pos]
            if word in ("true", "false"):
                tokens.append(Token(TokenType.BOOLEAN, word, start))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, word, start))
            continue

        if char == "(":
            tokens.append(Token(TokenType.LPAREN, char, pos))
            pos += 1
            continue
        if char == ")":
            tokens.append(Token(TokenType.RPAREN, char, pos))
            pos += 1
            continue

        pair = expression[pos : pos + 2]
        if pair in TWO_CHAR_OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, pair, pos))
            pos += 2
            continue
        if char in ONE_CHAR_OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, char, pos))
            pos += 1
            continue

        raise ExpressionParseError(
            f"Unexpected character '{char}' at position {pos}",
            context={"expression": expression, "position": pos},
        )

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens
