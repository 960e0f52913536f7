"""Go source file discovery using os.walk."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

GO_EXTENSION = ".go"

# Directories to skip while walking
SKIP_DIRS = frozenset({
    ".git", ".hg", ".svn", "node_modules",
    "vendor", "testdata",
    "dist", "build", "bin", "obj",
})

MAX_FILE_SIZE = 1_000_000  # 1MB


def _is_excluded(rel_path: str, exclude: list[str]) -> bool:
    for pattern in exclude:
        if fnmatch.fnmatch(rel_path, pattern):
            return True
        if fnmatch.fnmatch(os.path.basename(rel_path), pattern):
            return True
    return False


def _walk_files(root: Path) -> list[str]:
    """Collect relative paths of ``.go`` files, skipping hidden and vendored dirs."""
    result = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [
            d for d in dirnames
            if d not in SKIP_DIRS and not d.startswith(".")
        ]
        for fname in filenames:
            if not fname.endswith(GO_EXTENSION):
                continue
            full = os.path.join(dirpath, fname)
            try:
                rel = os.path.relpath(full, root).replace("\\", "/")
            except (ValueError, OSError):
                continue
            result.append(rel)
    return result


def _filter_files(paths: list[str], root: Path, exclude: list[str]) -> list[str]:
    """Drop excluded and oversized files."""
    kept = []
    for rel_path in paths:
        if _is_excluded(rel_path, exclude):
            continue
        try:
            if (root / rel_path).stat().st_size > MAX_FILE_SIZE:
                log.debug("Skipping oversized file %s", rel_path)
                continue
        except OSError:
            continue
        kept.append(rel_path)
    return kept


def discover_go_files(root, exclude: list[str] | None = None) -> list[Path]:
    """Discover Go source files under ``root``.

    Hidden, vendored and build directories are skipped, as are files
    matching any glob in ``exclude`` (matched against the path relative to
    ``root`` and against the bare file name).  Returns absolute paths sorted
    by relative path, so repeated runs see the same order.
    """
    root = Path(root).resolve()
    raw = _walk_files(root)
    filtered = _filter_files(raw, root, list(exclude or []))
    filtered.sort()
    log.info("Discovered %d Go files under %s", len(filtered), root)
    return [root / rel for rel in filtered]
