"""
test_recursion_simulator.py

Unit tests for recursion classification and the canned call-stack traces.
"""

import pytest
from memory_model import CallFrame, RecursionPattern
from recursion_simulator import (
    classify_recursion,
    render_trace,
    synthesize_call_frames,
    synthesize_call_tree,
    visualize_recursion,
)
from topics import RECURSION_CODE

FACTORIAL_TRACE = """Recursion Execution Trace:
━━━━━━━━━━━━━━━━━━━━━━━━
Call Phase (Going Down):
  factorial(5) → factorial(4)
  factorial(4) → factorial(3)
  factorial(3) → factorial(2)
  factorial(2) → factorial(1)
  factorial(1) → BASE CASE

Return Phase (Coming Back Up):
  factorial(1) = 1
  factorial(2) = 2 × 1 = 2
  factorial(3) = 3 × 2 = 6
  factorial(4) = 4 × 6 = 24
  factorial(5) = 5 × 24 = 120

Final Result: 120"""


# ============================================================
# Classification Tests
# ============================================================

class TestClassifyRecursion:
    """Tests for classify_recursion."""

    def test_lesson_code(self):
        """Test the recursion lesson is factorial."""
        assert classify_recursion(RECURSION_CODE) is RecursionPattern.FACTORIAL

    def test_fibonacci(self):
        """Test a fibonacci function."""
        code = "int fibonacci(int n) { return fibonacci(n-1) + fibonacci(n-2); }"
        assert classify_recursion(code) is RecursionPattern.FIBONACCI

    def test_factorial_wins_tie(self):
        """Test factorial is chosen when both names appear."""
        code = "int fibonacci(int n); int factorial(int n);"
        assert classify_recursion(code) is RecursionPattern.FACTORIAL

    @pytest.mark.parametrize("code", ["", "int sum(int n) { return n + sum(n - 1); }", "FACTORIAL"])
    def test_unknown(self, code):
        """Test anything else falls back to unknown."""
        assert classify_recursion(code) is RecursionPattern.UNKNOWN


# ============================================================
# Call Frame Tests
# ============================================================

class TestSynthesizeCallFrames:
    """Tests for synthesize_call_frames."""

    def test_factorial(self):
        """Test five frames n = 5..1 with the base case last."""
        frames = synthesize_call_frames(RecursionPattern.FACTORIAL)
        assert [f.parameter_value for f in frames] == [5, 4, 3, 2, 1]
        assert [f.is_base_case for f in frames] == [False, False, False, False, True]
        assert frames[0].label == "factorial(5)"
        assert frames[0].return_expression == "5 × factorial(4)"
        assert frames[-1].return_expression == 1

    def test_fibonacci(self):
        """Test the fixed fibonacci sequence."""
        frames = synthesize_call_frames(RecursionPattern.FIBONACCI)
        assert [f.parameter_value for f in frames] == [4, 3, 2, 1, 0]
        assert [f.return_expression for f in frames] == [
            "fibonacci(3) + fibonacci(2)",
            "fibonacci(2) + fibonacci(1)",
            "fibonacci(1) + fibonacci(0)",
            1,
            0,
        ]
        assert [f.is_base_case for f in frames] == [False, False, False, True, True]

    def test_unknown(self):
        """Test the generic six-frame template."""
        frames = synthesize_call_frames(RecursionPattern.UNKNOWN)
        assert [f.label for f in frames] == [f"func({n})" for n in range(5, -1, -1)]
        assert frames[0].return_expression == "func(4) + func(3)"
        assert frames[-2].return_expression == 1
        assert frames[-1].return_expression == 0

    def test_independent_of_input_numbers(self):
        """Test the trace ignores the number in the code."""
        code = RECURSION_CODE.replace("factorial(5)", "factorial(9)")
        frames = visualize_recursion(code).frames
        assert frames[0].parameter_value == 5


# ============================================================
# Call Tree Tests
# ============================================================

class TestSynthesizeCallTree:
    """Tests for synthesize_call_tree."""

    def test_factorial_chain(self):
        """Test a linear chain of depth 5 ending in the base leaf."""
        tree = synthesize_call_tree(RecursionPattern.FACTORIAL)
        nodes = list(tree.walk())
        assert tree.depth() == 5
        assert all(len(node.children) == 1 for node in nodes[:-1])
        assert [n.label for n in nodes] == [
            "factorial(5)", "factorial(4)", "factorial(3)",
            "factorial(2)", "factorial(1)", "Base: return 1",
        ]
        assert nodes[-1].children == []

    def test_fibonacci_split(self):
        """Test a root with exactly two leaf children."""
        tree = synthesize_call_tree(RecursionPattern.FIBONACCI)
        assert tree.label == "fib(5)"
        assert [c.label for c in tree.children] == ["fib(4)", "fib(3)"]
        assert tree.depth() == 1

    def test_unknown_minimal(self):
        """Test the unknown tree has no branches."""
        tree = synthesize_call_tree(RecursionPattern.UNKNOWN)
        assert tree.children == []


# ============================================================
# Trace Tests
# ============================================================

class TestRenderTrace:
    """Tests for render_trace."""

    def test_factorial_narrative(self):
        """Test the full factorial narrative."""
        assert render_trace(RecursionPattern.FACTORIAL) == FACTORIAL_TRACE

    def test_narrative_matches_frames(self):
        """Test passing the frames gives the same text."""
        frames = synthesize_call_frames(RecursionPattern.FACTORIAL)
        assert render_trace(RecursionPattern.FACTORIAL, frames) == FACTORIAL_TRACE

    def test_shorter_chain(self):
        """Test a custom frame list is narrated from its own values."""
        frames = [
            CallFrame("factorial(2)", 2, False, "2 × factorial(1)"),
            CallFrame("factorial(1)", 1, True, 1),
        ]
        text = render_trace(RecursionPattern.FACTORIAL, frames)
        assert "  factorial(2) → factorial(1)" in text
        assert "  factorial(2) = 2 × 1 = 2" in text
        assert text.endswith("Final Result: 2")

    def test_frames_without_base_case(self):
        """Test frames that never reach a base case give no narrative."""
        frames = [CallFrame("factorial(3)", 3, False, "3 × factorial(2)")]
        assert render_trace(RecursionPattern.FACTORIAL, frames) is None

    def test_empty_frames(self):
        """Test an empty frame list gives no narrative."""
        assert render_trace(RecursionPattern.FACTORIAL, []) is None

    def test_symbolic_base_value(self):
        """Test a base case without a numeric value gives no narrative."""
        frames = [CallFrame("factorial(1)", 1, True, "one")]
        assert render_trace(RecursionPattern.FACTORIAL, frames) is None

    @pytest.mark.parametrize("pattern", [RecursionPattern.FIBONACCI, RecursionPattern.UNKNOWN])
    def test_no_narrative(self, pattern):
        """Test other patterns have no narrative."""
        assert render_trace(pattern) is None


# ============================================================
# Pipeline Tests
# ============================================================

class TestVisualizeRecursion:
    """Tests for the whole recursion pipeline."""

    def test_lesson_code(self):
        """Test the default recursion lesson end to end."""
        result = visualize_recursion(RECURSION_CODE)
        assert result.pattern is RecursionPattern.FACTORIAL
        assert len(result.frames) == 5
        assert result.tree.depth() == 5
        assert result.narrative == FACTORIAL_TRACE

    def test_unknown_still_traced(self):
        """Test unrecognized code still gets frames."""
        result = visualize_recursion("int f(int n) { return f(n - 1); }")
        assert result.pattern is RecursionPattern.UNKNOWN
        assert len(result.frames) == 6
        assert result.narrative is None
