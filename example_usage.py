"""
example_usage.py

Console walkthrough of both lessons.
Runs each topic's default code, then an edited snippet, and prints the
stack layout, call stack and explanation the application would show.
"""

import logging

from explain_client import explain_code
from memory_model import render_config
from topics import TOPICS, LearningSession


def main():
    """Run the walkthrough."""
    print("=" * 70)
    print("C Learning Visualizer - Console Walkthrough")
    print("=" * 70)
    print()

    render_config.pointer_arrow = "→"
    render_config.show_addresses_hex = True

    session = LearningSession()

    for key, topic in TOPICS.items():
        session.load_topic(key)
        print("=" * 70)
        print(f"{topic.title}: {topic.description}")
        print("=" * 70)
        print(session.source_text)
        print()
        session.visualize().print()
        print()

    # Edited code: a pointer declared before any variable
    print("=" * 70)
    print("Edited pointer lesson")
    print("=" * 70)
    session.load_topic("pointers")
    session.edit(
        "int *p = &y;\n"
        "int y = 7;\n"
        "double *d = &z;\n"
        'printf("y is y\\tp is p\\n", y, p);\n'
    )
    session.visualize().print()
    print()

    # Edited code: Fibonacci instead of factorial
    print("=" * 70)
    print("Edited recursion lesson")
    print("=" * 70)
    session.load_topic("recursion")
    session.edit("int fibonacci(int n) { return fibonacci(n - 1) + fibonacci(n - 2); }")
    session.visualize().print()
    print()

    session.reset()
    print("After reset, the editor holds the lesson code again:")
    print(session.source_text == TOPICS["recursion"].default_source_text)
    print()

    print("=" * 70)
    print("Explanation")
    print("=" * 70)
    explanation = explain_code(session.source_text, session.topic_key)
    print(f"[{explanation.source.value}] {explanation.text}")
    print()

    print("Example complete!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
