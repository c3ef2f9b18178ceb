"""
test_memory_model.py

Unit tests for the memory_model data classes and console rendering.
"""

import pytest
from memory_model import (
    # Records
    Declaration,
    StackCell,
    SimulatedOutput,
    PointerVisualization,
    CallFrame,
    CallTreeNode,
    RecursionVisualization,
    RecursionPattern,
    # Constants
    STACK_BASE_ADDRESS,
    NO_OUTPUT_MESSAGE,
    # Functions
    format_address,
    render_config,
)


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def value_cell():
    """Create a stack cell holding an int."""
    return StackCell(
        address=STACK_BASE_ADDRESS,
        name="x",
        is_pointer=False,
        display_value="25",
        points_to_address=None,
        size_bytes=4,
        type_name="int",
    )


@pytest.fixture
def pointer_cell():
    """Create a stack cell pointing at value_cell."""
    return StackCell(
        address=STACK_BASE_ADDRESS + 8,
        name="ptr",
        is_pointer=True,
        display_value="&x",
        points_to_address=STACK_BASE_ADDRESS,
        size_bytes=8,
        type_name="int*",
    )


@pytest.fixture
def restore_render_config():
    """Put the global render configuration back after a test."""
    saved = (render_config.show_addresses_hex, render_config.compact_mode)
    yield render_config
    render_config.show_addresses_hex, render_config.compact_mode = saved


# ============================================================
# Declaration Tests
# ============================================================

class TestDeclaration:
    """Tests for Declaration."""

    def test_type_label_value(self):
        """Test type label of a plain variable."""
        decl = Declaration("int", False, "x", "25")
        assert decl.type_label == "int"

    def test_type_label_pointer(self):
        """Test type label of a pointer."""
        decl = Declaration("int", True, "ptr", "&x")
        assert decl.type_label == "int*"

    def test_immutable(self):
        """Test declarations cannot be modified."""
        decl = Declaration("int", False, "x", "25")
        with pytest.raises(AttributeError):
            decl.name = "y"


# ============================================================
# SimulatedOutput Tests
# ============================================================

class TestSimulatedOutput:
    """Tests for SimulatedOutput."""

    def test_default_is_not_detected(self):
        """Test the default output is the nothing-found state."""
        output = SimulatedOutput()
        assert not output.detected
        assert output.text == ""

    def test_text_one_line_per_statement(self):
        """Test lines are joined with newlines."""
        output = SimulatedOutput(lines=["a", "b"], detected=True)
        assert output.text == "a\nb\n"

    def test_to_console_sentinel(self):
        """Test console rendering of the nothing-found state."""
        assert NO_OUTPUT_MESSAGE in SimulatedOutput().to_console()

    def test_to_console_detected_empty_line(self):
        """Test a detected statement with empty text is not the sentinel."""
        output = SimulatedOutput(lines=[""], detected=True)
        assert NO_OUTPUT_MESSAGE not in output.to_console()


# ============================================================
# PointerVisualization Tests
# ============================================================

class TestPointerVisualization:
    """Tests for PointerVisualization."""

    def test_cell_at(self, value_cell, pointer_cell):
        """Test looking up a cell by address."""
        result = PointerVisualization([value_cell, pointer_cell], SimulatedOutput())
        assert result.cell_at(STACK_BASE_ADDRESS) is value_cell
        assert result.cell_at(STACK_BASE_ADDRESS - 8) is None

    def test_to_console(self, value_cell, pointer_cell):
        """Test console rendering lists every cell."""
        output = SimulatedOutput(lines=["Value of 25: %d"], detected=True)
        text = PointerVisualization([value_cell, pointer_cell], output).to_console()
        assert "Higher Memory" in text
        assert "Lower Memory" in text
        assert hex(STACK_BASE_ADDRESS) in text
        assert "ptr" in text
        assert "Variable Analysis" in text
        assert "4 bytes" in text
        assert "8 bytes" in text
        assert "Value of 25: %d" in text

    def test_rendered_value(self, value_cell, pointer_cell):
        """Test pointers render as an arrow to their target at display time."""
        assert value_cell.rendered_value() == "25"
        assert pointer_cell.rendered_value() == f"→ {hex(STACK_BASE_ADDRESS)}"
        saved = render_config.pointer_arrow
        render_config.pointer_arrow = "->"
        try:
            assert pointer_cell.rendered_value() == f"-> {hex(STACK_BASE_ADDRESS)}"
        finally:
            render_config.pointer_arrow = saved
        assert pointer_cell.display_value == "&x"

    def test_to_console_empty(self):
        """Test console rendering with no variables."""
        text = PointerVisualization([], SimulatedOutput()).to_console()
        assert "(no variables)" in text
        assert NO_OUTPUT_MESSAGE in text

    def test_to_console_dangling_pointer(self):
        """Test a pointer whose target holds no variable is flagged."""
        cell = StackCell(
            address=STACK_BASE_ADDRESS,
            name="p",
            is_pointer=True,
            display_value="&y",
            points_to_address=STACK_BASE_ADDRESS - 8,
            size_bytes=8,
            type_name="int*",
        )
        text = PointerVisualization([cell], SimulatedOutput()).to_console()
        assert "(no variable)" in text

    def test_compact_mode(self, value_cell, restore_render_config):
        """Test compact mode hides the variable analysis."""
        restore_render_config.compact_mode = True
        text = PointerVisualization([value_cell], SimulatedOutput()).to_console()
        assert "Variable Analysis" not in text

    def test_decimal_addresses(self, value_cell, restore_render_config):
        """Test decimal address rendering."""
        restore_render_config.show_addresses_hex = False
        assert format_address(STACK_BASE_ADDRESS) == str(STACK_BASE_ADDRESS)
        text = PointerVisualization([value_cell], SimulatedOutput()).to_console()
        assert str(STACK_BASE_ADDRESS) in text


# ============================================================
# CallTreeNode Tests
# ============================================================

class TestCallTreeNode:
    """Tests for CallTreeNode."""

    def test_leaf_depth(self):
        """Test a single node has depth 0."""
        assert CallTreeNode("f(0)").depth() == 0

    def test_depth_uses_longest_branch(self):
        """Test depth follows the deepest child."""
        tree = CallTreeNode("f(3)", [
            CallTreeNode("f(2)", [CallTreeNode("f(1)")]),
            CallTreeNode("f(1)"),
        ])
        assert tree.depth() == 2

    def test_walk_order(self):
        """Test depth-first iteration."""
        tree = CallTreeNode("a", [CallTreeNode("b", [CallTreeNode("c")]), CallTreeNode("d")])
        assert [node.label for node in tree.walk()] == ["a", "b", "c", "d"]

    def test_to_console_indents_children(self):
        """Test console rendering indents each level."""
        tree = CallTreeNode("a", [CallTreeNode("b")])
        lines = tree.to_console().splitlines()
        assert lines[0] == "a"
        assert lines[1].strip() == "└─ b"
        assert lines[1].startswith(" ")


# ============================================================
# RecursionVisualization Tests
# ============================================================

class TestRecursionVisualization:
    """Tests for RecursionVisualization."""

    def test_to_console(self):
        """Test console rendering of frames and tree."""
        frames = [
            CallFrame("factorial(2)", 2, False, "2 × factorial(1)"),
            CallFrame("factorial(1)", 1, True, 1),
        ]
        result = RecursionVisualization(
            pattern=RecursionPattern.FACTORIAL,
            frames=frames,
            tree=CallTreeNode("factorial(2)", [CallTreeNode("factorial(1)")]),
            narrative="Final Result: 2",
        )
        text = result.to_console()
        assert "Function Call Tree" in text
        assert "BASE CASE" in text
        assert "Returns: 2 × factorial(1)" in text
        assert "Final Result: 2" in text

    def test_to_console_without_narrative(self):
        """Test rendering when there is no narrative."""
        result = RecursionVisualization(
            pattern=RecursionPattern.UNKNOWN,
            frames=[],
            tree=CallTreeNode("func(5)"),
        )
        text = result.to_console()
        assert "func(5)" in text
        assert "Final Result" not in text
