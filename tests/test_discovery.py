"""Tests for Go file discovery."""

from __future__ import annotations

from goprofiler.discovery import MAX_FILE_SIZE, discover_go_files


def _touch(root, rel, content="package main\n"):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def _rel(root, paths):
    return [p.relative_to(root.resolve()).as_posix() for p in paths]


def test_finds_go_files_sorted(tmp_path):
    _touch(tmp_path, "z.go")
    _touch(tmp_path, "a.go")
    _touch(tmp_path, "cmd/tool/main.go")
    _touch(tmp_path, "README.md", "# readme")
    assert _rel(tmp_path, discover_go_files(tmp_path)) == ["a.go", "cmd/tool/main.go", "z.go"]


def test_returns_absolute_paths(tmp_path):
    _touch(tmp_path, "a.go")
    (path,) = discover_go_files(tmp_path)
    assert path.is_absolute()


def test_skips_vendor_hidden_and_testdata(tmp_path):
    _touch(tmp_path, "main.go")
    _touch(tmp_path, "vendor/x/x.go")
    _touch(tmp_path, ".git/hooks/h.go")
    _touch(tmp_path, ".cache/c.go")
    _touch(tmp_path, "pkg/testdata/fixture.go")
    assert _rel(tmp_path, discover_go_files(tmp_path)) == ["main.go"]


def test_exclude_globs(tmp_path):
    _touch(tmp_path, "main.go")
    _touch(tmp_path, "api/handler.go")
    _touch(tmp_path, "api/handler_mock.go")
    _touch(tmp_path, "gen/types.go")
    found = discover_go_files(tmp_path, exclude=["*_mock.go", "gen/*"])
    assert _rel(tmp_path, found) == ["api/handler.go", "main.go"]


def test_skips_oversized_files(tmp_path):
    _touch(tmp_path, "small.go")
    _touch(tmp_path, "huge.go", "x" * (MAX_FILE_SIZE + 1))
    assert _rel(tmp_path, discover_go_files(tmp_path)) == ["small.go"]


def test_empty_directory(tmp_path):
    assert discover_go_files(tmp_path) == []
