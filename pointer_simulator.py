"""
pointer_simulator.py

Builds the synthetic stack layout and program output for the pointer topic.

Addresses are fabricated: every declaration gets the next 8-byte slot above
STACK_BASE_ADDRESS, whatever its size, and a pointer is assumed to point at
the variable declared just before it.

Usage:
    from pointer_simulator import visualize_pointers

    result = visualize_pointers(code)
    result.print()
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Sequence

from code_extractor import extract_declarations, extract_print_statements
from memory_model import (
    STACK_BASE_ADDRESS,
    STACK_SLOT_SIZE,
    Declaration,
    PointerVisualization,
    PrintStatement,
    SimulatedOutput,
    StackCell,
)

logger = logging.getLogger(__name__)

NARROW_INT_TYPE = "int"


def slot_address(index: int, base_address: int = STACK_BASE_ADDRESS) -> int:
    """Address of the stack slot at a declaration index."""
    return base_address + STACK_SLOT_SIZE * index


def size_of(declared_type: str) -> int:
    """Size shown for a declared type: 4 for int, 8 otherwise."""
    return 4 if declared_type == NARROW_INT_TYPE else 8


def build_stack_cells(
    declarations: Sequence[Declaration],
    base_address: int = STACK_BASE_ADDRESS,
) -> List[StackCell]:
    """Assign stack slots and pointer targets to declarations.

    A pointer targets the slot of the previous declaration. For a pointer
    declared first that slot (index -1) holds no variable; the address is
    still computed and left dangling.

    Args:
        declarations: Declarations in source order
        base_address: Address of slot 0

    Returns:
        One StackCell per declaration, in the same order
    """
    cells: List[StackCell] = []
    for index, decl in enumerate(declarations):
        address = slot_address(index, base_address)
        target = slot_address(index - 1, base_address) if decl.is_pointer else None

        cells.append(StackCell(
            address=address,
            name=decl.name,
            is_pointer=decl.is_pointer,
            display_value=decl.initializer_text,
            points_to_address=target,
            size_bytes=size_of(decl.declared_type),
            type_name=decl.type_label,
        ))
    return cells


def substitute_variables(text: str, declarations: Sequence[Declaration]) -> str:
    """Replace whole-token variable names with their initializer text.

    All names are replaced in a single pass, so inserted initializers are
    never substituted again. For a name declared twice the first
    declaration wins.
    """
    initializers: Dict[str, str] = {}
    for decl in declarations:
        initializers.setdefault(decl.name, decl.initializer_text)
    if not initializers:
        return text

    pattern = re.compile(r"\b(" + "|".join(map(re.escape, initializers)) + r")\b")
    return pattern.sub(lambda match: initializers[match.group(1)], text)


def simulate_output(
    statements: Sequence[PrintStatement],
    declarations: Sequence[Declaration],
) -> SimulatedOutput:
    """Produce the console text the printf statements would show.

    Values are never computed: a name is replaced by the literal text of
    its initializer.

    Returns:
        SimulatedOutput with detected=False if there were no statements
    """
    if not statements:
        return SimulatedOutput(lines=[], detected=False)

    lines = []
    for statement in statements:
        text = substitute_variables(statement.format_text, declarations)
        # The format's own trailing newline ends the line
        if text.endswith("\n"):
            text = text[:-1]
        lines.append(text)
    return SimulatedOutput(lines=lines, detected=True)


def visualize_pointers(source: str) -> PointerVisualization:
    """Run the whole pointer pipeline on a snippet."""
    declarations = extract_declarations(source)
    statements = extract_print_statements(source)
    cells = build_stack_cells(declarations)
    output = simulate_output(statements, declarations)
    logger.debug(
        f"Pointer model: {len(cells)} stack cells, {len(output.lines)} output lines"
    )
    return PointerVisualization(
        stack_cells=cells,
        output=output,
        base_address=STACK_BASE_ADDRESS,
    )
