"""Tree-sitter parsing of Go source.

``parse_go`` either returns a clean syntax tree or raises
``StructuralParseError``.  A tree containing ERROR or MISSING nodes counts
as a failed parse, and so does a file without a leading package clause or
with statements at file scope: the structural checks only ever see
well-formed Go files.
"""

from __future__ import annotations

from functools import lru_cache

GO_GRAMMAR = "go"

# Node kinds Go allows directly under source_file.
_TOP_LEVEL = frozenset(
    {
        "package_clause",
        "import_declaration",
        "function_declaration",
        "method_declaration",
        "const_declaration",
        "type_declaration",
        "var_declaration",
    }
)


class StructuralParseError(Exception):
    """Raised when a file cannot be turned into a clean syntax tree.

    Never leaves the engine: it is the signal to use the heuristic scan.
    """


@lru_cache(maxsize=None)
def _get_parser():
    from tree_sitter_language_pack import get_parser

    return get_parser(GO_GRAMMAR)


def _first_error(node):
    """Return the first ERROR / MISSING node in document order, or None."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _check_file_scope(root):
    """Reject shapes the grammar accepts but the Go compiler does not.

    tree-sitter-go allows a missing package clause and statements at file
    scope.  Empty and comment-only files pass.
    """
    children = [c for c in root.named_children if c.type != "comment"]
    if not children:
        return
    first = children[0]
    if first.type != "package_clause":
        row, col = first.start_point[0] + 1, first.start_point[1] + 1
        raise StructuralParseError(f"expected package clause at {row}:{col}")
    for child in children[1:]:
        if child.type == "package_clause" or child.type not in _TOP_LEVEL:
            row, col = child.start_point[0] + 1, child.start_point[1] + 1
            raise StructuralParseError(f"{child.type} at file scope at {row}:{col}")


def parse_go(source: bytes):
    """Parse Go source bytes into a tree-sitter tree.

    Raises:
        StructuralParseError: the grammar is unavailable, the parser
            failed, the source contains syntax errors, or it is not a
            well-formed Go file (no package clause, statements at file
            scope).
    """
    try:
        parser = _get_parser()
    except Exception as exc:
        raise StructuralParseError(f"Go grammar unavailable: {exc}") from exc

    try:
        tree = parser.parse(source)
    except Exception as exc:
        raise StructuralParseError(f"parser failed: {exc}") from exc

    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        if bad is None:
            raise StructuralParseError("syntax error")
        row, col = bad.start_point[0] + 1, bad.start_point[1] + 1
        kind = "missing token" if bad.is_missing else "syntax error"
        raise StructuralParseError(f"{kind} at {row}:{col}")
    _check_file_scope(root)
    return tree


def node_text(node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def node_line(node) -> int:
    """1-based line of the node's first character."""
    return node.start_point[0] + 1
