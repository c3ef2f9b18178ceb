"""
recursion_simulator.py

Canned call-stack traces for the recursion topic.

The snippet is only inspected for a known function name; frames, tree and
narrative come from a fixed template per RecursionPattern and do not depend
on the numbers written in the code.

Usage:
    from recursion_simulator import visualize_recursion

    result = visualize_recursion(code)
    result.print()
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from memory_model import (
    CallFrame,
    CallTreeNode,
    RecursionPattern,
    RecursionVisualization,
)

logger = logging.getLogger(__name__)

FACTORIAL_START = 5

# Checked in order; the first marker found wins
PATTERN_MARKERS = [
    ("factorial", RecursionPattern.FACTORIAL),
    ("fibonacci", RecursionPattern.FIBONACCI),
]

TRACE_RULE = "━" * 24


def classify_recursion(source: str) -> RecursionPattern:
    """Pick the trace template from the function names in the source."""
    for marker, pattern in PATTERN_MARKERS:
        if marker in source:
            return pattern
    return RecursionPattern.UNKNOWN


def _double_recursion_frames(name: str, start: int) -> List[CallFrame]:
    frames = []
    for n in range(start, -1, -1):
        if n <= 1:
            frames.append(CallFrame(f"{name}({n})", n, True, n))
        else:
            frames.append(CallFrame(
                f"{name}({n})", n, False, f"{name}({n - 1}) + {name}({n - 2})"
            ))
    return frames


def synthesize_call_frames(pattern: RecursionPattern) -> List[CallFrame]:
    """Call frames from the first call down to the base case.

    Factorial runs n = 5..1, Fibonacci n = 4..0 and the generic
    template n = 5..0 under the name "func".
    """
    if pattern is RecursionPattern.FACTORIAL:
        return [
            CallFrame(
                label=f"factorial({n})",
                parameter_value=n,
                is_base_case=n == 1,
                return_expression=1 if n == 1 else f"{n} × factorial({n - 1})",
            )
            for n in range(FACTORIAL_START, 0, -1)
        ]
    if pattern is RecursionPattern.FIBONACCI:
        return _double_recursion_frames("fibonacci", 4)
    return _double_recursion_frames("func", 5)


def synthesize_call_tree(pattern: RecursionPattern) -> CallTreeNode:
    """Build the call tree shown above the call stack.

    Factorial is a single chain ending in a base-case leaf; Fibonacci
    shows only the first two-way split; anything else is a lone root.
    """
    if pattern is RecursionPattern.FACTORIAL:
        node = CallTreeNode("Base: return 1")
        for n in range(1, FACTORIAL_START + 1):
            node = CallTreeNode(f"factorial({n})", [node])
        return node
    if pattern is RecursionPattern.FIBONACCI:
        return CallTreeNode("fib(5)", [CallTreeNode("fib(4)"), CallTreeNode("fib(3)")])
    return CallTreeNode("func(5)")


def _ends_in_base_case(frames: Sequence[CallFrame]) -> bool:
    if not frames or not frames[-1].is_base_case:
        return False
    return all(isinstance(f.return_expression, int) for f in frames if f.is_base_case)


def render_trace(
    pattern: RecursionPattern,
    frames: Optional[Sequence[CallFrame]] = None,
) -> Optional[str]:
    """Write the step-by-step execution narrative.

    Only factorial has a narrative. It is derived from the factorial
    frames, so it always agrees with the call stack.

    Args:
        pattern: Classified recursion shape
        frames: Frames to narrate (synthesized from pattern if None)

    Returns:
        The narrative text, or None for patterns without one and for
        frames that do not end in a base case with a numeric value
    """
    if pattern is not RecursionPattern.FACTORIAL:
        return None
    if frames is None:
        frames = synthesize_call_frames(pattern)
    if not _ends_in_base_case(frames):
        return None

    lines = ["Recursion Execution Trace:", TRACE_RULE, "Call Phase (Going Down):"]
    for i, frame in enumerate(frames):
        if frame.is_base_case:
            lines.append(f"  {frame.label} → BASE CASE")
        else:
            lines.append(f"  {frame.label} → {frames[i + 1].label}")

    lines.append("")
    lines.append("Return Phase (Coming Back Up):")
    result = None
    for frame in reversed(frames):
        if frame.is_base_case:
            result = int(frame.return_expression)
            lines.append(f"  {frame.label} = {result}")
        else:
            product = frame.parameter_value * result
            lines.append(f"  {frame.label} = {frame.parameter_value} × {result} = {product}")
            result = product

    lines.append("")
    lines.append(f"Final Result: {result}")
    return "\n".join(lines)


def visualize_recursion(source: str) -> RecursionVisualization:
    """Run the whole recursion pipeline on a snippet."""
    pattern = classify_recursion(source)
    frames = synthesize_call_frames(pattern)
    logger.debug(f"Recursion pattern {pattern.value}: {len(frames)} frames")
    return RecursionVisualization(
        pattern=pattern,
        frames=frames,
        tree=synthesize_call_tree(pattern),
        narrative=render_trace(pattern, frames),
    )
