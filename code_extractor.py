"""
code_extractor.py

Best-effort scanners that pull declarations and printf calls out of C snippets.

These are not a C grammar: anything that does not look like one of the
supported statement shapes is skipped without error.

Usage:
    from code_extractor import extract_declarations, extract_print_statements

    declarations = extract_declarations("int x = 25; int *ptr = &x;")
    statements = extract_print_statements('printf("x = %d\\n", x);')
"""

from __future__ import annotations

import logging
import re
from typing import List

from memory_model import Declaration, PrintStatement

logger = logging.getLogger(__name__)


# <type> <'*'?><name> = <expr>;   ("int *p", "int* p" and "int * p" all accepted)
DECLARATION_PATTERN = re.compile(
    r"\b(\w+)(?:\s*(\*)\s*|\s+)(\w+)\s*=(?!=)\s*([^;]+);"
)

# printf("<format>", <optional args>)
PRINTF_PATTERN = re.compile(
    r'printf\s*\(\s*"((?:[^"\\]|\\.)*)"\s*(?:,\s*(.+?))?\s*\)'
)

ESCAPE_SEQUENCES = {
    "\\n": "\n",
    "\\t": "\t",
    '\\"': '"',
}


def extract_declarations(source: str) -> List[Declaration]:
    """Find variable and pointer declarations in source order.

    Args:
        source: Free-form C source text

    Returns:
        One Declaration per matched statement, duplicates included
    """
    declarations = [
        Declaration(
            declared_type=match.group(1),
            is_pointer=match.group(2) == "*",
            name=match.group(3),
            initializer_text=match.group(4).strip(),
        )
        for match in DECLARATION_PATTERN.finditer(source)
    ]
    logger.debug(f"Extracted {len(declarations)} declarations")
    return declarations


def decode_escapes(text: str) -> str:
    """Turn \\n, \\t and \\" escape sequences into the characters they name."""
    for escape, char in ESCAPE_SEQUENCES.items():
        text = text.replace(escape, char)
    return text


def extract_print_statements(source: str) -> List[PrintStatement]:
    """Find printf calls and return their decoded format strings.

    Arguments after the format string are ignored; substitution happens
    in the output simulator.
    """
    statements = [
        PrintStatement(format_text=decode_escapes(match.group(1)))
        for match in PRINTF_PATTERN.finditer(source)
    ]
    logger.debug(f"Extracted {len(statements)} printf statements")
    return statements
