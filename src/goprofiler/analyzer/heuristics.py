"""Line-based fallback detectors.

Used when the structural parse fails.  Each detector has signature
``(source: str) -> list[Issue]``, scans the text once, line by line, and
keeps no state between calls.  They do not parse expressions, so
multi-line statements can be both missed and over-reported.
"""

from __future__ import annotations

import re

from goprofiler.analyzer.issues import (
    CATEGORY_ALLOCATION,
    IMPACT_HIGH,
    IMPACT_MEDIUM,
    Issue,
)

# Two states of the string-concatenation scan.  Not a stack: nested loops
# share one flag, so the first lone "}" ends the loop for all of them.
OUTSIDE_LOOP = "outside"
INSIDE_LOOP = "inside"

_LOOP_KEYWORD_RE = re.compile(r"(?:^|\s)for(?=\s|\{|$)")
_QUOTE_MARKERS = ('"', "`")
_APPEND_TOKEN = "+="
_BLOCK_CLOSE = "}"
_MAKE_SLICE = "make([]"


def _opens_loop(trimmed: str) -> bool:
    return trimmed.startswith("for ") or bool(_LOOP_KEYWORD_RE.search(trimmed))


def _has_string_append(line: str) -> bool:
    return _APPEND_TOKEN in line and any(q in line for q in _QUOTE_MARKERS)


def detect_string_concatenation(source: str) -> list[Issue]:
    """Find ``+=`` with a string operand on lines inside a ``for`` loop."""
    issues: list[Issue] = []
    state = OUTSIDE_LOOP

    for i, line in enumerate(source.split("\n")):
        trimmed = line.strip()
        if _opens_loop(trimmed):
            state = INSIDE_LOOP

        if state == INSIDE_LOOP and _has_string_append(line):
            issues.append(
                Issue(
                    line=i + 1,
                    title="String concatenation in loop",
                    description="Using += for string concatenation in loops is inefficient",
                    suggestion="Use strings.Builder for better performance",
                    impact=IMPACT_HIGH,
                    category=CATEGORY_ALLOCATION,
                )
            )

        if state == INSIDE_LOOP and trimmed == _BLOCK_CLOSE:
            state = OUTSIDE_LOOP

    return issues


def detect_slice_allocation(source: str) -> list[Issue]:
    """Find ``make([]T)`` calls with no length or capacity argument.

    A missing comma on the line stands in for "only the type was passed".
    """
    issues: list[Issue] = []
    for i, line in enumerate(source.split("\n")):
        trimmed = line.strip()
        if _MAKE_SLICE in trimmed and ")" in trimmed and "," not in trimmed:
            issues.append(
                Issue(
                    line=i + 1,
                    title="Slice allocated without capacity",
                    description="Consider providing capacity hint to avoid reallocations",
                    suggestion="Use make([]Type, 0, capacity) if you know the expected size",
                    impact=IMPACT_MEDIUM,
                    category=CATEGORY_ALLOCATION,
                )
            )
    return issues
