"""
explain_client.py

Client for the code explanation service, with offline fallback texts.

The service takes {"code": ..., "topic": ...} and answers {"explanation": ...}.
Any failure is answered locally from FALLBACK_EXPLANATIONS; callers always
get an Explanation and never an exception.

Usage:
    from explain_client import explain_code

    explanation = explain_code(code, "pointers")
    print(explanation.text)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import requests

logger = logging.getLogger(__name__)


FALLBACK_EXPLANATIONS = {
    "pointers": (
        "This code demonstrates pointer basics. A pointer stores a memory address "
        "using the & operator to get an address and * to dereference it. Variables "
        "are stored at specific memory addresses in the stack, and pointers allow you "
        "to reference and manipulate them indirectly. This is fundamental to "
        "understanding dynamic memory allocation, function parameters, and data "
        "structures like linked lists."
    ),
    "recursion": (
        "This code shows recursive function calls. Each call to factorial creates a "
        "new stack frame. The function calls itself with a smaller parameter until "
        "reaching the base case (n <= 1). Then each recursive call returns and passes "
        "the result back up the call stack. Understanding this call stack behavior is "
        "crucial for debugging recursion and avoiding stack overflow errors."
    ),
}

DEFAULT_FALLBACK = "Unable to generate explanation. Try modifying your code."


def _env_timeout() -> Optional[float]:
    value = os.getenv("LEARN_EXPLAIN_TIMEOUT")
    return float(value) if value else None


@dataclass
class ExplainConfig:
    """Where and how to reach the explanation service.

    Attributes:
        endpoint: URL receiving the POST request
        timeout: Seconds to wait for an answer, None waits indefinitely
    """
    endpoint: str = field(
        default_factory=lambda: os.getenv("LEARN_EXPLAIN_URL", "http://localhost:3000/api/explain")
    )
    timeout: Optional[float] = field(default_factory=_env_timeout)


class ExplanationSource(Enum):
    """Where an explanation text came from."""
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Explanation:
    """Explanation text and its origin."""
    text: str
    source: ExplanationSource

    @property
    def is_fallback(self) -> bool:
        return self.source is ExplanationSource.FALLBACK


def fallback_explanation(topic: str) -> Explanation:
    """Static explanation for a topic, or the generic message."""
    text = FALLBACK_EXPLANATIONS.get(topic, DEFAULT_FALLBACK)
    return Explanation(text=text, source=ExplanationSource.FALLBACK)


def explain_code(
    code: str,
    topic: str,
    config: Optional[ExplainConfig] = None,
) -> Explanation:
    """Ask the service to explain a snippet, falling back on any failure.

    Args:
        code: Source text from the editor
        topic: Topic key sent along with the code
        config: Service location (read from the environment if None)

    Returns:
        REMOTE explanation on success, FALLBACK explanation otherwise
    """
    config = config if config is not None else ExplainConfig()
    try:
        resp = requests.post(
            config.endpoint,
            json={"code": code, "topic": topic},
            timeout=config.timeout,
        )
        resp.raise_for_status()
        text = resp.json()["explanation"]
    except requests.RequestException as e:
        logger.warning(f"Explanation service unavailable, using fallback: {e}")
        return fallback_explanation(topic)
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Malformed explanation response, using fallback: {e}")
        return fallback_explanation(topic)

    if not isinstance(text, str):
        logger.warning("Explanation is not a string, using fallback")
        return fallback_explanation(topic)
    return Explanation(text=text, source=ExplanationSource.REMOTE)
