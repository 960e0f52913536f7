"""Tests for the per-file detection driver (structural first, heuristic fallback)."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))
from conftest import BROKEN, SLOW_CODE, go_file, write_go

from goprofiler.analyzer import (
    CATEGORIES,
    IMPACTS,
    Analyzer,
    AnalysisResult,
    FileReadError,
    Issue,
    Pattern,
)
from goprofiler.analyzer import engine
from goprofiler.analyzer import parser as go_parser

# ===========================================================================
# Mode selection
# ===========================================================================


def test_clean_file_uses_structural_mode():
    result = Analyzer().analyze_file(SLOW_CODE)
    assert isinstance(result, AnalysisResult)
    assert result.mode == "structural"
    assert result.file_path == str(SLOW_CODE)
    assert [(i.line, i.title) for i in result.issues] == [
        (12, "String concatenation in loop"),
        (18, "Slice allocated without capacity hint"),
        (26, "Potential goroutine leak"),
    ]


def test_structural_mode_never_uses_patterns():
    # `var x = make([]T)` is invisible to the structural checks but matches
    # the line heuristic; a clean parse must not run the heuristic.
    src = go_file("var data = make([]int)\n")
    result = Analyzer().analyze_source(src)
    assert result.mode == "structural"
    assert result.issues == ()


def test_missing_package_clause_falls_back_to_heuristics():
    result = Analyzer().analyze_source("func f() {\n\tx := make([]int)\n\t_ = x\n}\n")
    assert result.mode == "heuristic"
    assert [i.line for i in result.issues] == [2]


def test_file_scope_statement_falls_back_to_heuristics():
    result = Analyzer().analyze_source("x := make([]int)\n")
    assert result.mode == "heuristic"
    assert [(i.line, i.impact) for i in result.issues] == [(1, "medium")]


def test_structural_mode_ignores_custom_patterns():
    calls = []

    def spy(text):
        calls.append(text)
        return []

    analyzer = Analyzer(patterns=[Pattern("spy", "records calls", "low", "io", spy)])
    analyzer.analyze_file(SLOW_CODE)
    assert calls == []


def test_syntax_error_falls_back_to_heuristics():
    result = Analyzer().analyze_file(BROKEN)
    assert result.mode == "heuristic"
    assert [(i.line, i.impact) for i in result.issues] == [(6, "high"), (8, "medium")]


def test_fallback_never_uses_structural_checks():
    # broken.go has an inline goroutine with `for {}`; only the structural
    # walk could report it.
    result = Analyzer().analyze_file(BROKEN)
    assert all(i.category == "allocation" for i in result.issues)


def test_fallback_runs_patterns_in_registration_order():
    def first(text):
        return [Issue(line=2, title="first", description="d", impact="low", category="io")]

    def second(text):
        return [Issue(line=1, title="second", description="d", impact="low", category="loop")]

    analyzer = Analyzer(
        patterns=[
            Pattern("first", "d", "low", "io", first),
            Pattern("second", "d", "low", "loop", second),
        ]
    )
    result = analyzer.analyze_source("func (")
    assert result.mode == "heuristic"
    assert [i.title for i in result.issues] == ["first", "second"]


def test_fallback_with_no_findings_is_not_an_error():
    result = Analyzer().analyze_source("this is not go at all {{{")
    assert result.mode == "heuristic"
    assert result.issues == ()


def test_fallback_receives_decoded_text():
    seen = []

    def spy(text):
        seen.append(text)
        return []

    Analyzer(patterns=[Pattern("spy", "d", "low", "io", spy)]).analyze_source(b"func ( \xff")
    assert len(seen) == 1
    assert isinstance(seen[0], str)
    assert seen[0].startswith("func (")


def test_grammar_unavailable_falls_back(monkeypatch):
    def boom():
        raise LookupError("no grammar")

    monkeypatch.setattr(go_parser, "_get_parser", boom)
    result = Analyzer().analyze_source(go_file("func f() {\n\tx := make([]int)\n}\n"))
    assert result.mode == "heuristic"
    assert [i.line for i in result.issues] == [4]


# ===========================================================================
# Edge cases and invariants
# ===========================================================================


def test_empty_file(tmp_path):
    path = write_go(tmp_path, "empty.go", "")
    result = Analyzer().analyze_file(path)
    assert result.issues == ()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileReadError) as exc_info:
        Analyzer().analyze_file(tmp_path / "nope.go")
    assert "nope.go" in str(exc_info.value)


def test_directory_as_file_raises(tmp_path):
    with pytest.raises(FileReadError):
        Analyzer().analyze_file(tmp_path)


def test_analysis_is_idempotent():
    analyzer = Analyzer()
    for path in (SLOW_CODE, BROKEN):
        assert analyzer.analyze_file(path) == analyzer.analyze_file(path)


def test_issue_vocabulary_is_closed():
    analyzer = Analyzer()
    for path in (SLOW_CODE, BROKEN):
        for issue in analyzer.analyze_file(path).issues:
            assert issue.impact in IMPACTS
            assert issue.category in CATEGORIES
            assert issue.line >= 1
            assert issue.title and issue.description


def test_analyze_source_accepts_str_and_bytes():
    src = go_file("func f() {\n\tdata := make([]int)\n\t_ = data\n}\n")
    analyzer = Analyzer()
    assert analyzer.analyze_source(src).issues == analyzer.analyze_source(src.encode()).issues


# ===========================================================================
# Directory mode
# ===========================================================================


def _project(tmp_path):
    write_go(tmp_path, "b.go", go_file("func f() {\n\tx := make([]int)\n\t_ = x\n}\n"))
    write_go(tmp_path, "a.go", go_file("func g() {}\n"))
    write_go(tmp_path, "pkg/c.go", go_file("func h() {\n\treturn 1 +\n}\n"))
    write_go(tmp_path, "vendor/dep/d.go", go_file("func v() {}\n"))
    (tmp_path / "notes.txt").write_text("for x {\n\ts += \"y\"\n}\n")
    return tmp_path


def test_analyze_path_file(tmp_path):
    path = write_go(tmp_path, "one.go", go_file("func f() {}\n"))
    report = Analyzer().analyze_path(path)
    assert len(report.results) == 1
    assert report.errors == []


def test_analyze_path_directory_order(tmp_path):
    root = _project(tmp_path)
    report = Analyzer().analyze_path(root)
    names = [Path(r.file_path).relative_to(root.resolve()).as_posix() for r in report.results]
    assert names == ["a.go", "b.go", "pkg/c.go"]
    assert [r.mode for r in report.results] == ["structural", "structural", "heuristic"]
    assert report.total_issues == 1


def test_analyze_path_missing_target(tmp_path):
    with pytest.raises(FileReadError):
        Analyzer().analyze_path(tmp_path / "missing")


def test_analyze_path_isolates_file_errors(tmp_path, monkeypatch):
    root = _project(tmp_path)
    real_read = engine.read_source

    def flaky(path):
        if Path(path).name == "a.go":
            raise FileReadError(str(path), "Permission denied")
        return real_read(path)

    monkeypatch.setattr(engine, "read_source", flaky)
    report = Analyzer().analyze_path(root)
    assert len(report.results) == 2
    assert len(report.errors) == 1
    assert report.errors[0].file_path.endswith("a.go")
    assert "Permission denied" in report.errors[0].message


def test_analyze_path_fail_fast(tmp_path, monkeypatch):
    root = _project(tmp_path)

    def broken(path):
        raise FileReadError(str(path), "Permission denied")

    monkeypatch.setattr(engine, "read_source", broken)
    with pytest.raises(FileReadError):
        Analyzer().analyze_path(root, fail_fast=True)


def test_analyze_path_exclude(tmp_path):
    root = _project(tmp_path)
    report = Analyzer().analyze_path(root, exclude=["pkg/*"])
    assert len(report.results) == 2
