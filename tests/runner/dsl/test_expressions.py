"""Tests for the condition expression language.

Covers the tokenizer, the parser's precedence and error handling, and the
evaluation rules for equality, ordering and truthiness.
"""

import pytest

from autobrowse.exceptions import ExpressionEvalError, ExpressionParseError
from autobrowse.runner.dsl.executor import ExecutionContext
from autobrowse.runner.dsl.expressions import (
    BinaryOperationExpression,
    LiteralExpression,
    TokenType,
    UnaryOperationExpression,
    VariableExpression,
    evaluate_boolean,
    evaluate_expression,
    parse_expression,
    to_boolean,
    to_display_string,
    to_number,
    tokenize,
)


@pytest.fixture
def sample_context():
    """Provide a context with variables of every supported type."""
    context = ExecutionContext()
    context.set_variable("count", 5)
    context.set_variable("name", "alice")
    context.set_variable("price", "19.5")
    context.set_variable("enabled", True)
    context.set_variable("empty", "")
    return context


class TestTokenizer:
    """Test tokenize."""

    def test_tokenizes_comparison(self):
        """Test a simple comparison yields identifier, operator, number, EOF."""
        tokens = tokenize("count >= 10")

        assert [t.type for t in tokens] == [
            TokenType.IDENTIFIER,
            TokenType.OPERATOR,
            TokenType.NUMBER,
            TokenType.EOF,
        ]
        assert tokens[1].value == ">="

    def test_two_char_operators_are_greedy(self):
        """Test that '!=' is one token, not '!' followed by '='."""
        tokens = tokenize("a!=b")

        assert [t.value for t in tokens[:3]] == ["a", "!=", "b"]

    def test_quoted_strings(self):
        """Test single and double quoted strings."""
        tokens = tokenize("'it''s' \"x y\"")

        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "it"
        assert tokens[2].value == "x y"

    def test_boolean_literals(self):
        """Test true/false are boolean tokens."""
        tokens = tokenize("true && false_flag")

        assert tokens[0].type == TokenType.BOOLEAN
        assert tokens[2].type == TokenType.IDENTIFIER

    def test_unterminated_string(self):
        """Test an unterminated string is rejected."""
        with pytest.raises(ExpressionParseError, match="Unterminated"):
            tokenize("name == 'bob")

    @pytest.mark.parametrize("text", ["a = b", "a & b", "a | b", "a + b", "a @ b"])
    def test_invalid_characters(self, text):
        """Test lone '=', '&', '|' and foreign characters are rejected."""
        with pytest.raises(ExpressionParseError):
            tokenize(text)


class TestParser:
    """Test parse_expression."""

    def test_and_binds_tighter_than_or(self):
        """Test 'a || b && c' parses as 'a || (b && c)'."""
        tree = parse_expression("a || b && c")

        assert isinstance(tree, BinaryOperationExpression)
        assert tree.operator == "||"
        assert isinstance(tree.right, BinaryOperationExpression)
        assert tree.right.operator == "&&"

    def test_parentheses_override_precedence(self):
        """Test parentheses group before precedence applies."""
        tree = parse_expression("(a || b) && c")

        assert tree.operator == "&&"
        assert tree.left.operator == "||"

    def test_not_applies_to_primary(self):
        """Test '!' binds to the following primary."""
        tree = parse_expression("!done")

        assert isinstance(tree, UnaryOperationExpression)
        assert isinstance(tree.operand, VariableExpression)
        assert tree.operand.name == "done"

    def test_number_literal_is_float(self):
        """Test numeric literals parse as floats."""
        tree = parse_expression("42")

        assert isinstance(tree, LiteralExpression)
        assert tree.value == 42.0

    @pytest.mark.parametrize("text", ["", "   ", "a ==", "(a", "a b", "1 == 1 == 1", "1.2.3", ")"])
    def test_malformed_expressions(self, text):
        """Test malformed input raises ExpressionParseError."""
        with pytest.raises(ExpressionParseError):
            parse_expression(text)

    def test_tree_shape(self):
        """Test the parsed tree for a mixed expression, compared structurally."""
        tree = parse_expression("!(count > 3) || name == 'bob'")

        assert tree == BinaryOperationExpression(
            "||",
            UnaryOperationExpression(
                "!",
                BinaryOperationExpression(">", VariableExpression("count"), LiteralExpression(3.0)),
            ),
            BinaryOperationExpression("==", VariableExpression("name"), LiteralExpression("bob")),
        )
        assert tree.evaluate({"count": 1, "name": "x"}) is True


class TestEvaluation:
    """Test evaluation semantics."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('"5" > "3"', True),
            ('"abc" > "3"', False),
            ('1 == "1"', True),
            ("!false", True),
            ("true && false", False),
            ("true || false", True),
            ("2 <= 2", True),
            ("2 < 2", False),
            ("3 != 3", False),
        ],
    )
    def test_literal_expressions(self, text, expected):
        """Test the documented literal examples."""
        assert evaluate_boolean(text, {}) is expected

    def test_variables(self, sample_context):
        """Test variables resolve through the context."""
        assert evaluate_boolean("count > 3 && name == 'alice'", sample_context) is True
        assert evaluate_boolean("price >= 19.5", sample_context) is True
        assert evaluate_boolean("enabled == true", sample_context) is True

    def test_whole_float_equals_integer(self, sample_context):
        """Test 5.0 and 5 compare equal through their display strings."""
        assert evaluate_boolean("count == 5.0", sample_context) is True

    def test_booleans_are_not_ordered(self, sample_context):
        """Test ordering with a boolean operand is false."""
        assert evaluate_boolean("enabled > 0", sample_context) is False

    def test_truthiness_of_strings(self, sample_context):
        """Test empty strings are falsy and non-empty strings truthy."""
        assert evaluate_boolean("!empty", sample_context) is True
        assert evaluate_boolean("name", sample_context) is True

    def test_evaluate_expression_returns_typed_value(self, sample_context):
        """Test a bare variable evaluates to its stored value."""
        assert evaluate_expression("count", sample_context) == 5
        assert evaluate_expression("'text'", sample_context) == "text"

    def test_undefined_variable(self, sample_context):
        """Test an undefined variable raises ExpressionEvalError."""
        with pytest.raises(ExpressionEvalError, match="missing"):
            evaluate_boolean("missing > 1", sample_context)

    def test_both_operands_are_evaluated(self, sample_context):
        """Test logical operators do not short-circuit undefined variables."""
        with pytest.raises(ExpressionEvalError):
            evaluate_boolean("true || missing", sample_context)

    def test_unsupported_operator(self):
        """Test a hand-built tree with an unknown operator fails to evaluate."""
        tree = BinaryOperationExpression("+", LiteralExpression(1.0), LiteralExpression(2.0))

        with pytest.raises(ExpressionEvalError, match="Unsupported"):
            tree.evaluate({})


class TestValueCoercion:
    """Test the coercion helpers."""

    def test_display_string(self):
        """Test rendering of each value type."""
        assert to_display_string(True) == "true"
        assert to_display_string(3.0) == "3"
        assert to_display_string(2.5) == "2.5"
        assert to_display_string(7) == "7"
        assert to_display_string("x") == "x"

    def test_to_number(self):
        """Test numbers and numeric strings convert, booleans do not."""
        assert to_number(4) == 4.0
        assert to_number(" 2.5 ") == 2.5
        assert to_number("abc") is None
        assert to_number(True) is None

    def test_to_boolean(self):
        """Test truthiness rules."""
        assert to_boolean(0) is False
        assert to_boolean(0.5) is True
        assert to_boolean("") is False
        assert to_boolean("false") is True
        assert to_boolean(None) is False
