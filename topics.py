"""
topics.py

Lesson registry and the learning session that runs the simulators.

The session is an explicit value holding the selected topic, the code being
edited and the last visualization; nothing here is module-level state.

Usage:
    from topics import LearningSession

    session = LearningSession()
    session.load_topic("recursion")
    session.visualize().print()
    session.reset()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from memory_model import PointerVisualization, RecursionVisualization, Topic
from pointer_simulator import visualize_pointers
from recursion_simulator import visualize_recursion

logger = logging.getLogger(__name__)

Visualization = Union[PointerVisualization, RecursionVisualization]


POINTERS_CODE = """#include <stdio.h>

int main() {
    int x = 25;
    int *ptr = &x;

    printf("Value of x: %d\\n", x);
    printf("Address of x: %p\\n", &x);
    printf("Pointer ptr: %p\\n", ptr);
    printf("Dereferenced ptr: %d\\n", *ptr);

    return 0;
}"""

RECURSION_CODE = """#include <stdio.h>

int factorial(int n) {
    if (n <= 1) return 1;
    return n * factorial(n - 1);
}

int main() {
    int result = factorial(5);
    printf("Factorial of 5: %d\\n", result);
    return 0;
}"""


TOPICS: Dict[str, Topic] = {
    "pointers": Topic(
        key="pointers",
        title="Pointers & Memory",
        description="Understand memory addresses and how pointers reference data",
        default_source_text=POINTERS_CODE,
    ),
    "recursion": Topic(
        key="recursion",
        title="Recursion",
        description="Master recursive functions and understand the call stack",
        default_source_text=RECURSION_CODE,
    ),
}

DEFAULT_TOPIC = "pointers"

SIMULATORS: Dict[str, Callable[[str], Visualization]] = {
    "pointers": visualize_pointers,
    "recursion": visualize_recursion,
}


def get_topic(key: str) -> Topic:
    """Look up a topic by key.

    Raises:
        KeyError: If no topic has this key
    """
    topic = TOPICS.get(key)
    if topic is None:
        raise KeyError(f"Unknown topic '{key}'")
    return topic


@dataclass
class LearningSession:
    """Current topic, working code and last result of one learner.

    Attributes:
        topic_key: Key of the selected topic
        source_text: Code in the editor (a copy, topics are never modified)
        result: Last visualization, None until visualize() runs
    """
    topic_key: str = DEFAULT_TOPIC
    source_text: Optional[str] = None
    result: Optional[Visualization] = None

    def __post_init__(self) -> None:
        topic = get_topic(self.topic_key)
        if self.source_text is None:
            self.source_text = topic.default_source_text

    @property
    def topic(self) -> Topic:
        """The selected topic."""
        return get_topic(self.topic_key)

    def load_topic(self, key: str) -> Topic:
        """Switch topic, load its default code and drop the last result."""
        topic = get_topic(key)
        self.topic_key = key
        self.source_text = topic.default_source_text
        self.result = None
        logger.info(f"Loaded topic '{key}'")
        return topic

    def edit(self, source_text: str) -> None:
        """Replace the working code."""
        self.source_text = source_text

    def visualize(self) -> Visualization:
        """Run the current topic's simulator on the working code."""
        simulate = SIMULATORS[self.topic_key]
        self.result = simulate(self.source_text)
        logger.info(f"Visualized topic '{self.topic_key}'")
        return self.result

    def reset(self) -> None:
        """Restore the topic's default code and clear the last result."""
        self.source_text = self.topic.default_source_text
        self.result = None
        logger.info(f"Reset topic '{self.topic_key}'")
