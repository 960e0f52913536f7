"""Built-in heuristic pattern registry.

Each pattern pairs metadata with a detector of signature::

    (source: str) -> list[Issue]

The engine runs every registered pattern, in order, whenever the structural
parse of a file fails.  New patterns only need a new entry in
``DEFAULT_PATTERNS``; the engine itself does not change.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from goprofiler.analyzer.heuristics import (
    detect_slice_allocation,
    detect_string_concatenation,
)
from goprofiler.analyzer.issues import (
    CATEGORY_ALLOCATION,
    IMPACT_HIGH,
    IMPACT_MEDIUM,
    Issue,
)

Detector = Callable[[str], list[Issue]]


@dataclass(frozen=True)
class Pattern:
    """A named heuristic rule."""

    name: str
    description: str
    impact: str
    category: str
    detector: Detector = field(repr=False, compare=False)

    def detect(self, source: str) -> list[Issue]:
        """Run the detector against raw source text."""
        return list(self.detector(source))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "impact": self.impact,
            "category": self.category,
        }


DEFAULT_PATTERNS: tuple[Pattern, ...] = (
    Pattern(
        name="String Concatenation in Loop",
        description="String concatenation with += in loops is inefficient",
        impact=IMPACT_HIGH,
        category=CATEGORY_ALLOCATION,
        detector=detect_string_concatenation,
    ),
    Pattern(
        name="Empty Slice Allocation",
        description="Slice allocated without capacity hint",
        impact=IMPACT_MEDIUM,
        category=CATEGORY_ALLOCATION,
        detector=detect_slice_allocation,
    ),
)

_PATTERN_MAP: dict[str, Pattern] = {p.name: p for p in DEFAULT_PATTERNS}


def default_patterns() -> tuple[Pattern, ...]:
    """Return the built-in patterns in registration order."""
    return DEFAULT_PATTERNS


def get_pattern(name: str) -> Pattern | None:
    """Return the built-in pattern with the given name, or None."""
    return _PATTERN_MAP.get(name)
