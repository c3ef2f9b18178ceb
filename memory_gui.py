"""
memory_gui.py

Canvas rendering for the learning visualizer.

This module provides a tkinter-based renderer for:
- The synthetic stack of the pointer topic, with pointer arrows
- The call tree and call stack of the recursion topic
- Tracking drawn items so the application can show details on click

Usage:
    from memory_gui import LearningRenderer, ColorScheme

    renderer = LearningRenderer(canvas, ColorScheme())
    renderer.render(session.visualize())
"""

import tkinter as tk
from typing import Any, Dict, List, Optional, Tuple, Union

from memory_model import (
    CallFrame,
    CallTreeNode,
    PointerVisualization,
    RecursionVisualization,
    StackCell,
    format_address,
)


# ============================================================
# Color Scheme
# ============================================================

class ColorScheme:
    """Color scheme for the visualizations."""

    # Stack cells
    STACK_BG = "#E3F2FD"           # Light blue
    VALUE_CELL = "#90CAF9"          # Blue
    POINTER_CELL = "#CE93D8"        # Purple

    # Call stack
    RECURSIVE_FRAME = "#81C784"     # Green
    BASE_FRAME = "#FFD54F"          # Yellow
    TREE_NODE = "#E8F5E9"           # Light green
    TREE_BASE = "#FFF59D"           # Light yellow

    # UI elements
    POINTER_ARROW = "#FF6B6B"       # Red
    TEXT = "#212121"                # Dark gray
    BORDER = "#757575"              # Gray
    CANVAS_BG = "#FAFAFA"           # Very light gray


# ============================================================
# Renderer
# ============================================================

class LearningRenderer:
    """Renders visualization results onto a tkinter canvas."""

    def __init__(self, canvas: tk.Canvas, colors: ColorScheme):
        """Initialize renderer.

        Args:
            canvas: tkinter Canvas to draw on
            colors: Color scheme to use
        """
        self.canvas = canvas
        self.colors = colors
        self.offset_x = 20
        self.offset_y = 20

        # Layout configuration
        self.cell_width = 320
        self.cell_height = 36
        self.node_width = 150
        self.node_height = 28
        self.level_spacing = 48

        # canvas_id -> (type, object)
        self.item_map: Dict[int, Tuple[str, Any]] = {}

        # address -> (x, y, width, height) bounding box
        self.item_positions: Dict[int, Tuple[int, int, int, int]] = {}

    def clear(self) -> None:
        """Clear the canvas."""
        self.canvas.delete("all")
        self.item_map.clear()
        self.item_positions.clear()

    def render(self, result: Union[PointerVisualization, RecursionVisualization]) -> None:
        """Render whichever visualization the session produced."""
        if isinstance(result, PointerVisualization):
            self.render_pointers(result)
        else:
            self.render_recursion(result)

    # ------------- Pointer topic ------------- #

    def render_pointers(self, result: PointerVisualization) -> None:
        """Render the stack diagram with pointer arrows.

        Args:
            result: Output of the pointer pipeline
        """
        self.clear()
        x = self.offset_x
        y = self._render_title("Stack", self.offset_y)

        y = self._render_label("Higher Memory ↑", x, y)
        if not result.stack_cells:
            y = self._render_label("(no variables)", x, y)
        for cell in result.stack_cells:
            y += self._render_stack_cell(x, y, cell) + 4
        self._render_label("Lower Memory ↓", x, y)

        # Arrows last so they're drawn over the cells
        for cell in result.stack_cells:
            if cell.is_pointer:
                self._draw_arrow(cell.address, cell.points_to_address)

        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _render_stack_cell(self, x: int, y: int, cell: StackCell) -> int:
        """Render one stack cell.

        Returns:
            Height of the rendered cell
        """
        color = self.colors.POINTER_CELL if cell.is_pointer else self.colors.VALUE_CELL
        box_id = self.canvas.create_rectangle(
            x, y,
            x + self.cell_width, y + self.cell_height,
            fill=color,
            outline=self.colors.BORDER,
            width=1,
        )
        self.item_map[box_id] = ("cell", cell)

        self.canvas.create_text(
            x + 5, y + 5,
            text=format_address(cell.address),
            font=("Courier", 8),
            anchor="nw",
            fill=self.colors.BORDER,
        )
        self.canvas.create_text(
            x + 5, y + 19,
            text=f"{cell.name}: {cell.type_name}",
            font=("Arial", 9, "bold"),
            anchor="nw",
            fill=self.colors.TEXT,
        )
        self.canvas.create_text(
            x + self.cell_width - 5, y + self.cell_height // 2,
            text=cell.rendered_value(),
            font=("Courier", 9),
            anchor="e",
            fill=self.colors.TEXT,
        )

        self.item_positions[cell.address] = (x, y, self.cell_width, self.cell_height)
        return self.cell_height

    def _draw_arrow(self, from_addr: int, to_addr: Optional[int]) -> None:
        """Draw an arrow from a pointer cell to its target cell.

        Targets without a cell (a pointer declared first) get no arrow.
        """
        if from_addr not in self.item_positions or to_addr not in self.item_positions:
            return
        src_x, src_y, src_w, src_h = self.item_positions[from_addr]
        tgt_x, tgt_y, tgt_w, tgt_h = self.item_positions[to_addr]

        # Loop around the right edge of the column
        start_x = src_x + src_w
        start_y = src_y + src_h // 2
        end_x = tgt_x + tgt_w
        end_y = tgt_y + tgt_h // 2
        bend_x = start_x + 40

        arrow_id = self.canvas.create_line(
            start_x, start_y,
            bend_x, start_y,
            bend_x, end_y,
            end_x, end_y,
            arrow=tk.LAST,
            fill=self.colors.POINTER_ARROW,
            width=2,
            arrowshape=(10, 12, 5),
        )
        self.canvas.tag_lower(arrow_id)

    # ------------- Recursion topic ------------- #

    def render_recursion(self, result: RecursionVisualization) -> None:
        """Render the call tree above the call stack.

        Args:
            result: Output of the recursion pipeline
        """
        self.clear()
        x = self.offset_x
        y = self._render_title("Function Call Tree", self.offset_y)
        y = self._render_tree(result.tree, x, y)

        y = self._render_title("Call Stack (Down) & Return (Up)", y + 20)
        self._render_frames(result.frames, x, y)

        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _render_tree(self, root: CallTreeNode, x: int, y: int) -> int:
        """Render the call tree level by level.

        Returns:
            Y coordinate below the tree
        """
        level: List[Tuple[CallTreeNode, Optional[Tuple[int, int]]]] = [(root, None)]
        while level:
            next_level = []
            for i, (node, parent_anchor) in enumerate(level):
                node_x = x + i * (self.node_width + 20)
                is_leaf = not node.children
                color = self.colors.TREE_BASE if is_leaf else self.colors.TREE_NODE
                box_id = self.canvas.create_rectangle(
                    node_x, y,
                    node_x + self.node_width, y + self.node_height,
                    fill=color,
                    outline=self.colors.BORDER,
                )
                self.item_map[box_id] = ("node", node)
                self.canvas.create_text(
                    node_x + self.node_width // 2, y + self.node_height // 2,
                    text=node.label,
                    font=("Courier", 9),
                    fill=self.colors.TEXT,
                )
                if parent_anchor is not None:
                    self.canvas.create_line(
                        parent_anchor[0], parent_anchor[1],
                        node_x + self.node_width // 2, y,
                        fill=self.colors.BORDER,
                    )
                anchor = (node_x + self.node_width // 2, y + self.node_height)
                next_level.extend((child, anchor) for child in node.children)
            level = next_level
            y += self.level_spacing
        return y

    def _render_frames(self, frames: List[CallFrame], x: int, y: int) -> int:
        """Render the call frames top to bottom.

        Returns:
            Y coordinate below the last frame
        """
        for i, frame in enumerate(frames):
            color = self.colors.BASE_FRAME if frame.is_base_case else self.colors.RECURSIVE_FRAME
            box_id = self.canvas.create_rectangle(
                x, y,
                x + self.cell_width, y + self.cell_height,
                fill=color,
                outline=self.colors.BORDER,
            )
            self.item_map[box_id] = ("frame", frame)

            state = f"n = {frame.parameter_value}"
            if frame.is_base_case:
                state += "   BASE CASE"
            self.canvas.create_text(
                x + 5, y + 5,
                text=f"{frame.label}    {state}",
                font=("Arial", 9, "bold"),
                anchor="nw",
                fill=self.colors.TEXT,
            )
            self.canvas.create_text(
                x + 5, y + 20,
                text=f"Returns: {frame.return_expression}",
                font=("Courier", 8),
                anchor="nw",
                fill=self.colors.TEXT,
            )
            y += self.cell_height
            if i < len(frames) - 1:
                self.canvas.create_text(
                    x + self.cell_width // 2, y + 8,
                    text="↓",
                    font=("Arial", 10),
                    fill=self.colors.BORDER,
                )
                y += 16
        return y

    # ------------- Helpers ------------- #

    def _render_title(self, text: str, y: int) -> int:
        self.canvas.create_text(
            self.offset_x, y,
            text=text,
            font=("Arial", 14, "bold"),
            anchor="nw",
            fill=self.colors.TEXT,
        )
        return y + 32

    def _render_label(self, text: str, x: int, y: int) -> int:
        self.canvas.create_text(
            x, y,
            text=text,
            font=("Arial", 9, "italic"),
            anchor="nw",
            fill=self.colors.BORDER,
        )
        return y + 20
