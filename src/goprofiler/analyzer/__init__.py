"""Dual-mode Go performance detection engine."""

from goprofiler.analyzer.engine import Analyzer, AnalyzerError, FileReadError, read_source
from goprofiler.analyzer.issues import (
    CATEGORIES,
    IMPACTS,
    AnalysisResult,
    FileError,
    Issue,
    PathReport,
)
from goprofiler.analyzer.parser import StructuralParseError
from goprofiler.analyzer.patterns import Pattern, default_patterns

__all__ = [
    "Analyzer",
    "AnalysisResult",
    "AnalyzerError",
    "CATEGORIES",
    "FileError",
    "FileReadError",
    "IMPACTS",
    "Issue",
    "PathReport",
    "Pattern",
    "StructuralParseError",
    "default_patterns",
    "read_source",
]
