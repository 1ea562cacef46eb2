"""Tests for the control flow interpreter.

Tests cover for loops (range, step, break, continue, nesting), if/else
branching, flow control outside loops, error propagation and pacing.
"""

import pytest

from autobrowse.actions.control_flow import (
    BreakLoop,
    ConditionalExecutor,
    ControlFlowExecutor,
    FlowControlExecutor,
    LoopExecutor,
)
from autobrowse.exceptions import (
    ActionError,
    ExpressionEvalError,
    UnsupportedOperationError,
    ValidationError,
)
from autobrowse.mock import MockBrowser
from autobrowse.model import Action, ControlNode, NodeItem


def clicked(browser):
    """Selectors of all recorded clicks, in order."""
    return [op["selector"] for op in browser.find_operations("click")]


# ============================================================================
# FOR Loop Tests
# ============================================================================


class TestForLoop:
    """Test for loop execution."""

    def test_binds_values_in_order(self, run_nodes, mock_browser):
        """Test for i in 1..3 binds 1, 2, 3 in order."""
        executor = run_nodes(
            [
                {
                    "type": "for",
                    "variable": "i",
                    "from": 1,
                    "to": 3,
                    "children": [{"type": "click", "selector": "#item-{{i}}"}],
                }
            ]
        )

        assert clicked(mock_browser) == ["#item-1", "#item-2", "#item-3"]
        assert executor.context.get_variable("i") == 3
        assert executor.context.is_in_loop() is False

    def test_step(self, run_nodes, mock_browser):
        """Test the loop advances by step."""
        run_nodes(
            [
                {
                    "type": "for",
                    "from": 0,
                    "to": 6,
                    "step": 3,
                    "children": [{"type": "click", "selector": "#c{{i}}"}],
                }
            ]
        )

        assert clicked(mock_browser) == ["#c0", "#c3", "#c6"]

    def test_empty_range(self, run_nodes, mock_browser):
        """Test from greater than to runs no iterations."""
        run_nodes(
            [{"type": "for", "from": 5, "to": 1, "children": [{"type": "click", "selector": "a"}]}]
        )

        assert clicked(mock_browser) == []

    def test_negative_step_rejected(self, context):
        """Test a non-positive step is a validation error."""
        executor = LoopExecutor(context, run_sequence=lambda items: None)

        with pytest.raises(ValidationError, match="step"):
            executor.execute_for(ControlNode(type="for", to=3, step=-1))

    def test_break_ends_loop(self, run_nodes, mock_browser):
        """Test break stops the loop and skips the rest of the iteration."""
        executor = run_nodes(
            [
                {
                    "type": "for",
                    "from": 1,
                    "to": 5,
                    "children": [
                        {"type": "click", "selector": "#before-{{i}}"},
                        {
                            "type": "if",
                            "condition": "i == 2",
                            "children": [{"type": "break"}],
                        },
                        {"type": "click", "selector": "#after-{{i}}"},
                    ],
                },
                {"type": "click", "selector": "#done"},
            ]
        )

        assert clicked(mock_browser) == ["#before-1", "#after-1", "#before-2", "#done"]
        assert executor.context.get_variable("i") == 2

    def test_continue_skips_rest_of_iteration(self, run_nodes, mock_browser):
        """Test continue moves on to the next iteration."""
        run_nodes(
            [
                {
                    "type": "for",
                    "from": 1,
                    "to": 3,
                    "children": [
                        {
                            "type": "if",
                            "condition": "i == 2",
                            "children": [{"type": "continue"}],
                        },
                        {"type": "click", "selector": "#row-{{i}}"},
                    ],
                }
            ]
        )

        assert clicked(mock_browser) == ["#row-1", "#row-3"]

    def test_break_only_exits_innermost_loop(self, run_nodes, mock_browser):
        """Test break in a nested loop leaves the outer loop running."""
        run_nodes(
            [
                {
                    "type": "for",
                    "variable": "i",
                    "from": 1,
                    "to": 2,
                    "children": [
                        {
                            "type": "for",
                            "variable": "j",
                            "from": 1,
                            "to": 3,
                            "children": [
                                {"type": "click", "selector": "#{{i}}-{{j}}"},
                                {"type": "break"},
                            ],
                        }
                    ],
                }
            ]
        )

        assert clicked(mock_browser) == ["#1-1", "#2-1"]

    def test_outer_loop_sees_value_refreshed_by_inner_loop(self, run_nodes):
        """Test an output overwritten inside an inner loop reaches the outer loop."""
        browser = MockBrowser(texts={"#a": "old", "#b": "new"})

        run_nodes(
            [
                {
                    "type": "for",
                    "variable": "o",
                    "to": 0,
                    "children": [
                        {"type": "get_text", "selector": "#a", "output_key": "status"},
                        {
                            "type": "for",
                            "variable": "n",
                            "to": 0,
                            "children": [
                                {"type": "get_text", "selector": "#b", "output_key": "status"}
                            ],
                        },
                        {"type": "click", "selector": "#after-{{status}}"},
                    ],
                }
            ],
            browser=browser,
        )

        assert clicked(browser) == ["#after-new"]

    def test_loop_scope_popped_after_error(self, run_nodes, context):
        """Test a failing child still pops the loop scope."""
        browser = MockBrowser(failing_selectors={"#bad"})

        with pytest.raises(ActionError):
            run_nodes(
                [{"type": "for", "to": 2, "children": [{"type": "click", "selector": "#bad"}]}],
                browser=browser,
            )

        assert context.is_in_loop() is False

    def test_loop_result(self, context):
        """Test execute_for reports iterations and early stop."""
        calls = []

        def run_sequence(items):
            calls.append(context.get_variable("k"))
            if len(calls) == 2:
                raise BreakLoop()

        result = LoopExecutor(context, run_sequence).execute_for(
            ControlNode(type="for", variable="k", from_=1, to=4)
        )

        assert calls == [1, 2]
        assert result["iterations_completed"] == 2
        assert result["stopped_early"] is True

    def test_while_is_unsupported(self, run_nodes):
        """Test executing a while node raises UnsupportedOperationError."""
        with pytest.raises(UnsupportedOperationError):
            run_nodes([{"type": "while", "condition": "true", "children": []}])


# ============================================================================
# BREAK / CONTINUE Outside Loops
# ============================================================================


class TestFlowControlOutsideLoop:
    """Test break/continue with no enclosing loop."""

    def test_break_is_noop(self, run_nodes, mock_browser):
        """Test break at top level does not stop the sequence."""
        run_nodes(
            [
                {"type": "break"},
                {"type": "click", "selector": "#still-runs"},
                {"type": "continue"},
                {"type": "click", "selector": "#also-runs"},
            ]
        )

        assert clicked(mock_browser) == ["#still-runs", "#also-runs"]

    def test_executor_raises_only_inside_loop(self, context):
        """Test FlowControlExecutor consults the loop stack."""
        executor = FlowControlExecutor(context)
        executor.execute_break(Action(type="break"))

        loop_id = context.push_loop("i")
        with pytest.raises(BreakLoop) as exc_info:
            executor.execute_break(Action(type="break"))

        assert exc_info.value.loop_id == loop_id


# ============================================================================
# IF / ELSE Tests
# ============================================================================


class TestConditionals:
    """Test if/else branching."""

    def test_if_runs_when_condition_holds(self, run_nodes, mock_browser, context):
        """Test if children run only when the condition is true."""
        context.set_variable("count", 3)

        run_nodes(
            [
                {"type": "if", "condition": "count > 2", "children": [{"type": "click", "selector": "#yes"}]},
                {"type": "if", "condition": "count > 5", "children": [{"type": "click", "selector": "#no"}]},
            ]
        )

        assert clicked(mock_browser) == ["#yes"]

    def test_empty_condition_is_true(self, run_nodes, mock_browser):
        """Test an if without condition runs its children."""
        run_nodes([{"type": "if", "children": [{"type": "click", "selector": "#x"}]}])

        assert clicked(mock_browser) == ["#x"]

    def test_else_runs_when_if_fails(self, run_nodes, mock_browser, context):
        """Test else pairs with the preceding if."""
        context.set_variable("status", "pending")

        run_nodes(
            [
                {"type": "if", "condition": "status == 'done'", "children": [{"type": "click", "selector": "#done"}]},
                {"type": "else", "children": [{"type": "click", "selector": "#retry"}]},
                {"type": "if", "condition": "status == 'pending'", "children": [{"type": "click", "selector": "#wait"}]},
                {"type": "else", "children": [{"type": "click", "selector": "#never"}]},
            ]
        )

        assert clicked(mock_browser) == ["#retry", "#wait"]

    def test_orphan_else_rejected_at_runtime(self, run_nodes):
        """Test an else not preceded by an if fails with ValidationError."""
        with pytest.raises(ValidationError, match="else"):
            run_nodes(
                [
                    {"type": "click", "selector": "#a"},
                    {"type": "else", "children": [{"type": "click", "selector": "#b"}]},
                ]
            )

    def test_undefined_variable_halts(self, run_nodes, mock_browser):
        """Test an undefined condition variable halts after earlier side effects."""
        with pytest.raises(ExpressionEvalError):
            run_nodes(
                [
                    {"type": "click", "selector": "#first"},
                    {"type": "if", "condition": "ghost > 1", "children": []},
                    {"type": "click", "selector": "#never"},
                ]
            )

        assert clicked(mock_browser) == ["#first"]

    def test_conditional_executor_else_result(self, context):
        """Test execute_else reports whether it ran."""
        ran = []
        executor = ConditionalExecutor(context, run_sequence=ran.append)
        node = ControlNode(type="else", children=[NodeItem(action=Action(type="click", selector="a"))])

        assert executor.execute_else(node, previous_if_result=True) is False
        assert executor.execute_else(node, previous_if_result=False) is True
        assert len(ran) == 1


# ============================================================================
# Interpreter Behaviour
# ============================================================================


class TestControlFlowExecutor:
    """Test sequence execution."""

    def test_first_failure_stops_sequence(self, run_nodes):
        """Test execution halts at the first failing node."""
        browser = MockBrowser(failing_selectors={"#broken"})

        with pytest.raises(ActionError):
            run_nodes(
                [
                    {"type": "click", "selector": "#ok"},
                    {"type": "click", "selector": "#broken"},
                    {"type": "click", "selector": "#skipped"},
                ],
                browser=browser,
            )

        assert clicked(browser) == ["#ok", "#broken"]

    def test_pacing_after_each_node(self, mock_browser):
        """Test the interpreter sleeps action_delay after every executed node."""
        sleeps = []
        executor = ControlFlowExecutor(mock_browser, action_delay=0.5, sleep=sleeps.append)
        items = [
            NodeItem.from_document({"type": "click", "selector": "a"}),
            NodeItem.from_document(
                {"type": "for", "to": 1, "children": [{"type": "hover", "selector": "b"}]}
            ),
        ]

        executor.execute_sequence(items)

        # click, two loop iterations of hover, the loop itself
        assert sleeps == [0.5, 0.5, 0.5, 0.5]
        assert executor.nodes_executed == 4

    def test_no_pacing_when_disabled(self, mock_browser):
        """Test a zero delay never sleeps."""
        sleeps = []
        executor = ControlFlowExecutor(mock_browser, action_delay=0, sleep=sleeps.append)
        executor.execute_sequence([NodeItem.from_document({"type": "click", "selector": "a"})])

        assert sleeps == []

    def test_unvalidated_empty_item_rejected(self, mock_browser):
        """Test an item holding no variant raises instead of being skipped."""
        executor = ControlFlowExecutor(mock_browser, action_delay=0)

        with pytest.raises(UnsupportedOperationError, match="neither"):
            executor.execute_item(NodeItem.model_construct(action=None, control_node=None))

        assert mock_browser.operations == []
