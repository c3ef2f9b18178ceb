"""
interactive_gui.py

C Learning Visualizer - a desktop front end for the simulators.

This module provides an interface where users can:
- Pick a lesson (pointers or recursion)
- Edit the lesson's C code
- Visualize the stack layout or the recursive call stack
- Reset the code to the lesson default
- Ask for an explanation of the code

Usage:
    from interactive_gui import LearningVisualizerApp

    app = LearningVisualizerApp()
    app.run()
"""

import logging
import tkinter as tk
from tkinter import ttk, scrolledtext, filedialog, messagebox
from typing import Any, Dict

from explain_client import explain_code
from memory_gui import LearningRenderer, ColorScheme
from memory_model import (
    CallFrame,
    CallTreeNode,
    PointerVisualization,
    StackCell,
    format_address,
)
from topics import TOPICS, LearningSession

OUTPUT_PLACEHOLDER = 'Click "Visualize Memory" to see output...'


class LearningVisualizerApp:
    """Main window: lessons, code editor, canvas and output panes."""

    def __init__(self):
        """Initialize the application."""
        self.root = tk.Tk()
        self.root.title("C Learning Visualizer")
        self.root.geometry("1400x900")

        self.session = LearningSession()
        self.colors = ColorScheme()
        self.topic_buttons: Dict[str, ttk.Button] = {}

        self._create_ui()
        self.load_topic(self.session.topic_key)

    def _create_ui(self):
        """Create the user interface."""
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        # Left panel - Lessons
        self._create_topic_panel(main_frame)

        # Center - Editor and output
        self._create_editor_panel(main_frame)

        # Right - Canvas
        self._create_canvas_panel(main_frame)

        self._create_status_bar()

    def _create_topic_panel(self, parent):
        """Create the lesson list."""
        topic_frame = ttk.LabelFrame(parent, text="Lessons", width=200)
        topic_frame.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 5))
        topic_frame.pack_propagate(False)

        for key, topic in TOPICS.items():
            button = ttk.Button(
                topic_frame,
                text=topic.title,
                command=lambda k=key: self.load_topic(k),
                width=25
            )
            button.pack(fill=tk.X, padx=5, pady=2)
            self.topic_buttons[key] = button

    def _create_editor_panel(self, parent):
        """Create title, code editor, buttons and text panes."""
        editor_frame = ttk.Frame(parent, width=520)
        editor_frame.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 5))
        editor_frame.pack_propagate(False)

        self.title_label = ttk.Label(editor_frame, font=("Arial", 16, "bold"))
        self.title_label.pack(anchor=tk.W)
        self.description_label = ttk.Label(editor_frame, wraplength=500)
        self.description_label.pack(anchor=tk.W, pady=(0, 5))

        self.code_editor = scrolledtext.ScrolledText(
            editor_frame,
            wrap=tk.NONE,
            height=18,
            font=("Courier", 10)
        )
        self.code_editor.pack(fill=tk.X)

        button_frame = ttk.Frame(editor_frame)
        button_frame.pack(fill=tk.X, pady=5)
        ttk.Button(button_frame, text="Visualize Memory", command=self.visualize).pack(side=tk.LEFT, padx=2)
        ttk.Button(button_frame, text="Reset", command=self.reset).pack(side=tk.LEFT, padx=2)
        ttk.Button(button_frame, text="Explain", command=self.explain).pack(side=tk.LEFT, padx=2)
        ttk.Button(button_frame, text="Export Image", command=self.export_image).pack(side=tk.LEFT, padx=2)

        output_frame = ttk.LabelFrame(editor_frame, text="Output")
        output_frame.pack(fill=tk.BOTH, expand=True)
        self.output_text = scrolledtext.ScrolledText(
            output_frame,
            wrap=tk.WORD,
            height=12,
            font=("Courier", 9)
        )
        self.output_text.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        self.explanation_frame = ttk.LabelFrame(editor_frame, text="Explanation")
        self.explanation_text = scrolledtext.ScrolledText(
            self.explanation_frame,
            wrap=tk.WORD,
            height=8,
            font=("Arial", 9)
        )
        self.explanation_text.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

    def _create_canvas_panel(self, parent):
        """Create the canvas panel for visualization."""
        canvas_frame = ttk.LabelFrame(parent, text="Memory Visualization")
        canvas_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self.canvas = tk.Canvas(
            canvas_frame,
            bg=self.colors.CANVAS_BG,
            scrollregion=(0, 0, 800, 1200)
        )

        h_scroll = ttk.Scrollbar(canvas_frame, orient=tk.HORIZONTAL, command=self.canvas.xview)
        v_scroll = ttk.Scrollbar(canvas_frame, orient=tk.VERTICAL, command=self.canvas.yview)
        self.canvas.configure(xscrollcommand=h_scroll.set, yscrollcommand=v_scroll.set)

        h_scroll.pack(side=tk.BOTTOM, fill=tk.X)
        v_scroll.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.canvas.bind("<Button-1>", self._on_canvas_click)

        self.renderer = LearningRenderer(self.canvas, self.colors)

    def _create_status_bar(self):
        """Create status bar."""
        self.status_label = ttk.Label(
            self.root,
            text="Ready",
            relief=tk.SUNKEN,
            anchor=tk.W
        )
        self.status_label.pack(side=tk.BOTTOM, fill=tk.X, padx=5, pady=2)

    # ============================================================
    # Actions
    # ============================================================

    def load_topic(self, key: str):
        """Show a lesson with its default code."""
        topic = self.session.load_topic(key)

        for topic_key, button in self.topic_buttons.items():
            button.state(["pressed"] if topic_key == key else ["!pressed"])

        self.title_label.config(text=topic.title)
        self.description_label.config(text=topic.description)
        self._set_editor(self.session.source_text)
        self._clear_results()
        self.explanation_frame.pack_forget()
        self.status_label.config(text=f"Loaded lesson: {topic.title}")

    def visualize(self):
        """Run the simulator on the edited code."""
        self.session.edit(self.code_editor.get("1.0", "end-1c"))
        result = self.session.visualize()
        self.renderer.render(result)

        if isinstance(result, PointerVisualization):
            output = result.output.to_console()
        else:
            output = result.narrative or ""
        self._set_output(output)
        self.status_label.config(text="Visualization updated")

    def reset(self):
        """Restore the lesson code."""
        self.session.reset()
        self._set_editor(self.session.source_text)
        self._clear_results()
        self.status_label.config(text="Code reset to lesson default")

    def explain(self):
        """Show an explanation of the edited code."""
        self.explanation_frame.pack(fill=tk.BOTH, expand=True, pady=(5, 0))
        self.explanation_text.delete("1.0", tk.END)
        self.explanation_text.insert("1.0", "Analyzing code...")
        self.root.update_idletasks()

        code = self.code_editor.get("1.0", "end-1c")
        explanation = explain_code(code, self.session.topic_key)

        self.explanation_text.delete("1.0", tk.END)
        self.explanation_text.insert("1.0", explanation.text)
        if explanation.is_fallback:
            self.status_label.config(text="Explanation service unavailable - showing offline explanation")
        else:
            self.status_label.config(text="Explanation received")

    def export_image(self):
        """Export to image."""
        filename = filedialog.asksaveasfilename(
            defaultextension=".ps",
            filetypes=[("PostScript", "*.ps"), ("All Files", "*.*")]
        )
        if filename:
            try:
                bbox = self.canvas.bbox("all")
                if bbox:
                    self.canvas.postscript(
                        file=filename,
                        colormode="color",
                        x=bbox[0], y=bbox[1],
                        width=bbox[2] - bbox[0],
                        height=bbox[3] - bbox[1]
                    )
                    messagebox.showinfo("Success", f"Exported to {filename}")
            except tk.TclError as e:
                messagebox.showerror("Error", str(e))

    # ============================================================
    # Helper Methods
    # ============================================================

    def _set_editor(self, text: str):
        self.code_editor.delete("1.0", tk.END)
        self.code_editor.insert("1.0", text)

    def _set_output(self, text: str):
        self.output_text.delete("1.0", tk.END)
        self.output_text.insert("1.0", text)

    def _clear_results(self):
        self.renderer.clear()
        self._set_output(OUTPUT_PLACEHOLDER)

    def _on_canvas_click(self, event):
        """Show details of the clicked cell, frame or node."""
        x = self.canvas.canvasx(event.x)
        y = self.canvas.canvasy(event.y)
        for item in reversed(self.canvas.find_overlapping(x, y, x, y)):
            if item in self.renderer.item_map:
                item_type, item_data = self.renderer.item_map[item]
                self.status_label.config(text=self._describe(item_type, item_data))
                return

    def _describe(self, item_type: str, item_data: Any) -> str:
        if item_type == "cell":
            cell: StackCell = item_data
            text = f"{cell.name} ({cell.type_name}, {cell.size_bytes} bytes) @ {format_address(cell.address)}"
            if cell.is_pointer:
                text += f" points to {format_address(cell.points_to_address)}"
            return text
        if item_type == "frame":
            frame: CallFrame = item_data
            return f"{frame.label} returns {frame.return_expression}"
        node: CallTreeNode = item_data
        return f"{node.label}: {len(node.children)} call(s)"

    def run(self):
        """Run the application."""
        self.root.mainloop()


# ============================================================
# Main
# ============================================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app = LearningVisualizerApp()
    app.run()
