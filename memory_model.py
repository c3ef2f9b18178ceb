"""
memory_model.py

Data model for the C learning visualizer, with console rendering.

This module provides:
- Records produced by the code extractors (Declaration, PrintStatement)
- The synthetic stack layout for the pointer topic (StackCell)
- Call frames and call trees for the recursion topic
- Result payloads handed to renderers (PointerVisualization, RecursionVisualization)
- Console rendering with configurable output

Example:
    >>> from memory_model import *
    >>>
    >>> cell = StackCell(
    ...     address=0x7fff5fbff8c0,
    ...     name="x",
    ...     is_pointer=False,
    ...     display_value="25",
    ...     points_to_address=None,
    ...     size_bytes=4,
    ...     type_name="int",
    ... )
    >>> PointerVisualization(stack_cells=[cell], output=SimulatedOutput()).print()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union


# ============================================================
#  Configuration du rendu console
# ============================================================

@dataclass
class ConsoleRenderConfig:
    """Configuration for console rendering output.

    Attributes:
        pointer_arrow: Symbol to use for pointer visualization (→ or ->)
        show_addresses_hex: Display addresses in hexadecimal format
        indent_size: Number of spaces per call tree level
        compact_mode: Skip the variable analysis section
    """
    pointer_arrow: str = "→"
    show_addresses_hex: bool = True
    indent_size: int = 2
    compact_mode: bool = False


# Instance globale de configuration
render_config = ConsoleRenderConfig()

# Synthetic stack layout
STACK_BASE_ADDRESS = 0x7fff5fbff8c0
STACK_SLOT_SIZE = 8

NO_OUTPUT_MESSAGE = "No printf output detected. Add printf statements to see execution output."


def format_address(address: int) -> str:
    """Format an address according to the render configuration."""
    if render_config.show_addresses_hex:
        return hex(address)
    return str(address)


# ============================================================
#  Extracted source records
# ============================================================

@dataclass(frozen=True)
class Declaration:
    """A variable or pointer definition found in the source text.

    Attributes:
        declared_type: Base type token (e.g. "int")
        is_pointer: Whether the name was declared with '*'
        name: Variable name
        initializer_text: Literal text of the initializer expression
    """
    declared_type: str
    is_pointer: bool
    name: str
    initializer_text: str

    @property
    def type_label(self) -> str:
        """Type as written in the details panel (e.g. "int*")."""
        return f"{self.declared_type}*" if self.is_pointer else self.declared_type


@dataclass(frozen=True)
class PrintStatement:
    """A printf call; format_text has its escape sequences decoded."""
    format_text: str


# ============================================================
#  Pointer topic: stack cells and program output
# ============================================================

@dataclass(frozen=True)
class StackCell:
    """One declared variable placed in a synthetic stack slot.

    Attributes:
        address: Slot address
        name: Variable name
        is_pointer: Whether the variable is a pointer
        display_value: Initializer text as written in the source
        points_to_address: Target slot for pointers, None otherwise
        size_bytes: 4 for int, 8 for everything else
        type_name: Declared type, with '*' for pointers
    """
    address: int
    name: str
    is_pointer: bool
    display_value: str
    points_to_address: Optional[int]
    size_bytes: int
    type_name: str = ""

    def rendered_value(self) -> str:
        """Value as shown in a stack diagram: the arrow to the target for pointers."""
        if self.is_pointer:
            return f"{render_config.pointer_arrow} {format_address(self.points_to_address)}"
        return self.display_value


@dataclass
class SimulatedOutput:
    """Console text produced by the printf statements of a snippet.

    Attributes:
        lines: One rendered line per printf statement
        detected: False when the snippet contains no printf at all
    """
    lines: List[str] = field(default_factory=list)
    detected: bool = False

    @property
    def text(self) -> str:
        """Concatenated program output, one line per statement."""
        return "".join(f"{line}\n" for line in self.lines)

    def to_console(self) -> str:
        """Render program output to console format."""
        lines: List[str] = ["=== Program Output ==="]
        if not self.detected:
            lines.append(NO_OUTPUT_MESSAGE)
            return "\n".join(lines)
        lines.extend(self.lines)
        return "\n".join(lines)


@dataclass
class PointerVisualization:
    """Result of the pointer pipeline, ready for a renderer.

    Attributes:
        stack_cells: Cells in declaration order
        output: Simulated console output
        base_address: Address of the first slot
    """
    stack_cells: List[StackCell]
    output: SimulatedOutput
    base_address: int = STACK_BASE_ADDRESS

    def cell_at(self, address: int) -> Optional[StackCell]:
        """Get the cell occupying an address, if any."""
        for cell in self.stack_cells:
            if cell.address == address:
                return cell
        return None

    def to_console(self) -> str:
        """Render stack layout, variable analysis and output."""
        lines: List[str] = []
        lines.append("=== Stack ===")
        lines.append("Higher Memory ↑")
        if not self.stack_cells:
            lines.append("(no variables)")
        else:
            header = f"{'Address':16} {'Name':12} {'Value'}"
            lines.append(header)
            lines.append("-" * len(header))
            for cell in self.stack_cells:
                value = cell.rendered_value()
                if cell.is_pointer and self.cell_at(cell.points_to_address) is None:
                    value += " (no variable)"
                lines.append(f"{format_address(cell.address):16} {cell.name:12} {value}")
        lines.append("Lower Memory ↓")

        if self.stack_cells and not render_config.compact_mode:
            lines.append("")
            lines.append("=== Variable Analysis ===")
            for cell in self.stack_cells:
                lines.append(f"{cell.name}")
                lines.append(f"  Type:  {cell.type_name}")
                lines.append(f"  Value: {cell.display_value}")
                lines.append(f"  Size:  {cell.size_bytes} bytes")

        lines.append("")
        lines.append(self.output.to_console())
        return "\n".join(lines)

    def print(self) -> None:
        """Print the visualization to console."""
        print(self.to_console())


# ============================================================
#  Recursion topic: call frames and call tree
# ============================================================

class RecursionPattern(Enum):
    """Recognized shape of a recursive function."""
    FACTORIAL = "factorial"
    FIBONACCI = "fibonacci"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CallFrame:
    """One step of the recursive descent.

    Attributes:
        label: Call as written, e.g. "factorial(5)"
        parameter_value: Value of n in this call
        is_base_case: Whether this call stops the recursion
        return_expression: Symbolic expression, or a literal for base cases
    """
    label: str
    parameter_value: int
    is_base_case: bool
    return_expression: Union[str, int]


@dataclass
class CallTreeNode:
    """A node of the function call tree."""
    label: str
    children: List[CallTreeNode] = field(default_factory=list)

    def depth(self) -> int:
        """Number of edges on the longest path down from this node."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children)

    def walk(self) -> Iterator[CallTreeNode]:
        """Iterate over this node and its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_console(self, level: int = 0) -> str:
        """Render the subtree as an indented outline."""
        indent = " " * (render_config.indent_size * level)
        marker = "" if level == 0 else "└─ "
        lines = [f"{indent}{marker}{self.label}"]
        for child in self.children:
            lines.append(child.to_console(level + 1))
        return "\n".join(lines)


@dataclass
class RecursionVisualization:
    """Result of the recursion pipeline, ready for a renderer.

    Attributes:
        pattern: Classified recursion shape
        frames: Call frames from the first call down to the base case
        tree: Call tree
        narrative: Step-by-step trace, None when no narrative exists
    """
    pattern: RecursionPattern
    frames: List[CallFrame]
    tree: CallTreeNode
    narrative: Optional[str] = None

    def to_console(self) -> str:
        """Render call tree, call stack and trace to console format."""
        lines: List[str] = []
        lines.append("=== Function Call Tree ===")
        lines.append(self.tree.to_console())
        lines.append("")
        lines.append("=== Call Stack (Down) & Return (Up) ===")
        for i, frame in enumerate(self.frames):
            state = f"n = {frame.parameter_value}"
            if frame.is_base_case:
                state += "  BASE CASE"
            lines.append(f"{frame.label:16} {state}")
            lines.append(f"  Returns: {frame.return_expression}")
            if i < len(self.frames) - 1:
                lines.append("  ↓")
        if self.narrative:
            lines.append("")
            lines.append(self.narrative)
        return "\n".join(lines)

    def print(self) -> None:
        """Print the visualization to console."""
        print(self.to_console())


# ============================================================
#  Topics
# ============================================================

@dataclass(frozen=True)
class Topic:
    """A lesson with its starting code.

    Attributes:
        key: Registry key ("pointers", "recursion")
        title: Heading shown above the editor
        description: One-line summary of the lesson
        default_source_text: Code loaded on selection and on reset
    """
    key: str
    title: str
    description: str
    default_source_text: str
