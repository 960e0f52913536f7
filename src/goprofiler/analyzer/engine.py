"""Per-file detection driver.

Every file goes down exactly one of two paths:

    parse ok     -> structural walk          -> findings (mode "structural")
    parse failed -> every registered pattern -> findings (mode "heuristic")

The two are never merged for a file.  A parse failure is not an error at
this boundary; failing to read the file is.
"""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path

from goprofiler.analyzer.issues import (
    MODE_HEURISTIC,
    MODE_STRUCTURAL,
    AnalysisResult,
    FileError,
    Issue,
    PathReport,
)
from goprofiler.analyzer.parser import StructuralParseError, parse_go
from goprofiler.analyzer.patterns import Pattern, default_patterns
from goprofiler.analyzer.structural import analyze_tree
from goprofiler.discovery import discover_go_files

log = logging.getLogger(__name__)


class AnalyzerError(Exception):
    """Base class for engine errors that reach the caller."""


class FileReadError(AnalyzerError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


def read_source(path) -> bytes:
    """Read a file's raw bytes, raising FileReadError on any OS failure."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as exc:
        raise FileReadError(str(path), exc.strerror or str(exc)) from exc


class Analyzer:
    """Runs structural detection with a heuristic fallback."""

    def __init__(self, patterns=None):
        if patterns is None:
            patterns = default_patterns()
        self.patterns: tuple[Pattern, ...] = tuple(patterns)

    def analyze_file(self, path) -> AnalysisResult:
        """Analyze one Go file.

        Raises:
            FileReadError: the file does not exist or cannot be read.
        """
        source = read_source(path)
        return self.analyze_source(source, file_path=str(path))

    def analyze_source(self, source: bytes | str, file_path: str = "<string>") -> AnalysisResult:
        if isinstance(source, str):
            source = source.encode("utf-8")

        try:
            tree = parse_go(source)
        except StructuralParseError as exc:
            log.debug("%s: structural parse failed (%s), using heuristics", file_path, exc)
            issues = self._run_patterns(source.decode("utf-8", errors="replace"))
            return AnalysisResult(file_path=file_path, issues=tuple(issues), mode=MODE_HEURISTIC)

        issues = analyze_tree(tree, source)
        log.debug("%s: %d structural findings", file_path, len(issues))
        return AnalysisResult(file_path=file_path, issues=tuple(issues), mode=MODE_STRUCTURAL)

    def _run_patterns(self, text: str) -> list[Issue]:
        issues: list[Issue] = []
        for pattern in self.patterns:
            issues.extend(pattern.detect(text))
        return issues

    def analyze_path(self, target, fail_fast: bool = False, exclude=None) -> PathReport:
        """Analyze a file, or every Go file under a directory.

        Per-file failures are recorded in ``PathReport.errors`` and the
        batch continues, unless ``fail_fast`` is set, in which case the
        first failure is re-raised.

        Raises:
            FileReadError: ``target`` does not exist (always), or any file
                fails with ``fail_fast`` set.
        """
        target = Path(target)
        if not target.exists():
            raise FileReadError(str(target), os.strerror(errno.ENOENT))

        report = PathReport()
        if not target.is_dir():
            report.results.append(self.analyze_file(target))
            return report

        for path in discover_go_files(target, exclude=exclude):
            try:
                report.results.append(self.analyze_file(path))
            except Exception as exc:
                if fail_fast:
                    raise
                log.warning("Skipping %s: %s", path, exc)
                report.errors.append(FileError(file_path=str(path), message=str(exc)))
        return report
