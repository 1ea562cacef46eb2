"""DSL expressions package.

Tokenizer, parser and evaluator for loop and branch conditions, plus
``{{name}}`` template substitution.
"""

from .binary_operation_expression import BinaryOperationExpression
from .evaluator import evaluate_boolean, evaluate_expression
from .expression import EvaluationScope, Expression, VariableLookup
from .literal_expression import LiteralExpression
from .parser import ExpressionParser, parse_expression
from .template import substitute_variables
from .tokenizer import Token, TokenType, tokenize
from .unary_operation_expression import UnaryOperationExpression
from .values import to_boolean, to_display_string, to_number
from .variable_expression import VariableExpression

__all__ = [
    "BinaryOperationExpression",
    "EvaluationScope",
    "Expression",
    "ExpressionParser",
    "LiteralExpression",
    "Token",
    "TokenType",
    "UnaryOperationExpression",
    "VariableExpression",
    "VariableLookup",
    "evaluate_boolean",
    "evaluate_expression",
    "parse_expression",
    "substitute_variables",
    "to_boolean",
    "to_display_string",
    "to_number",
    "tokenize",
]
