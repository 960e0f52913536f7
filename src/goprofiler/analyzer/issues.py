"""Finding records and the severity / category vocabulary.

An ``Issue`` is one reported instance of a performance anti-pattern.  Both
detection modes (structural and heuristic) produce the same record, so the
presentation layer never needs to know which one ran.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

IMPACT_HIGH = "high"
IMPACT_MEDIUM = "medium"
IMPACT_LOW = "low"

IMPACTS = frozenset({IMPACT_HIGH, IMPACT_MEDIUM, IMPACT_LOW})

# Higher rank = more severe.
IMPACT_ORDER: dict[str, int] = {
    IMPACT_LOW: 1,
    IMPACT_MEDIUM: 2,
    IMPACT_HIGH: 3,
}

CATEGORY_ALLOCATION = "allocation"
CATEGORY_GOROUTINE = "goroutine-concurrency"
CATEGORY_LOOP = "loop"
CATEGORY_IO = "io"

CATEGORIES = frozenset({CATEGORY_ALLOCATION, CATEGORY_GOROUTINE, CATEGORY_LOOP, CATEGORY_IO})

_CATEGORY_LABELS = {
    CATEGORY_ALLOCATION: "Memory Allocation",
    CATEGORY_GOROUTINE: "Concurrency Issue",
    CATEGORY_LOOP: "Loop Optimization",
    CATEGORY_IO: "I/O Efficiency",
}

MODE_STRUCTURAL = "structural"
MODE_HEURISTIC = "heuristic"


def category_label(category: str) -> str:
    """Human-readable name for a category (unknown values are title-cased)."""
    label = _CATEGORY_LABELS.get(category)
    if label:
        return label
    return category.replace("-", " ").title()


def impact_at_least(impact: str, threshold: str) -> bool:
    return IMPACT_ORDER.get(impact, 0) >= IMPACT_ORDER[threshold]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """A single performance finding."""

    line: int
    title: str
    description: str
    impact: str
    category: str
    suggestion: str = ""

    def __post_init__(self):
        if not self.title:
            raise ValueError("Issue title must not be empty")
        if not self.description:
            raise ValueError("Issue description must not be empty")
        if self.impact not in IMPACTS:
            raise ValueError(f"Unknown impact: {self.impact!r}")
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category: {self.category!r}")
        if self.line < 1:
            raise ValueError(f"Issue line must be >= 1, got {self.line}")

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
            "impact": self.impact,
            "category": self.category,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """All findings for one file, in detection order."""

    file_path: str
    issues: tuple[Issue, ...] = ()
    mode: str = MODE_STRUCTURAL

    def to_dict(self) -> dict:
        return {
            "file_path": self.file_path,
            "mode": self.mode,
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True)
class FileError:
    """A file that could not be analyzed in directory mode."""

    file_path: str
    message: str

    def to_dict(self) -> dict:
        return {"file_path": self.file_path, "message": self.message}


@dataclass
class PathReport:
    """Outcome of analyzing a file or directory target."""

    results: list[AnalysisResult] = field(default_factory=list)
    errors: list[FileError] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return sum(len(r.issues) for r in self.results)


def count_by_impact(results) -> dict[str, int]:
    """Count issues per impact level across a sequence of results."""
    counts = {IMPACT_HIGH: 0, IMPACT_MEDIUM: 0, IMPACT_LOW: 0}
    for result in results:
        for issue in result.issues:
            counts[issue.impact] = counts.get(issue.impact, 0) + 1
    return counts
