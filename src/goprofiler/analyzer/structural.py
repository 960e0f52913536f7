"""Syntax-tree detectors for Go performance anti-patterns.

A single pre-order walk visits every node of a tree-sitter Go tree and runs
each check in ``STRUCTURAL_CHECKS`` against it.  Checks have signature::

    (node, source: bytes) -> list[Issue]

They are independent: none reads another's findings, a node may match
several of them, and a match never stops the walk from descending.

Checks:
- loop string concatenation: ``x += <string-ish>`` inside a ``for`` body
- slice allocation without capacity: ``make([]T)`` on an assignment RHS
- goroutine leak risk: ``go func() { for { ... } }()`` with no channel send
"""

from __future__ import annotations

from goprofiler.analyzer.issues import (
    CATEGORY_ALLOCATION,
    CATEGORY_GOROUTINE,
    IMPACT_HIGH,
    IMPACT_MEDIUM,
    Issue,
)
from goprofiler.analyzer.parser import node_line, node_text

_STRING_LITERALS = frozenset({"interpreted_string_literal", "raw_string_literal"})
_ASSIGNMENT_NODES = frozenset({"assignment_statement", "short_var_declaration"})


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _named(node) -> list:
    return [c for c in node.named_children if c.type != "comment"]


def _operator(node) -> str:
    """Return the operator token of an assignment or binary expression."""
    op = node.child_by_field_name("operator")
    if op is not None:
        return op.type
    for child in node.children:
        if not child.is_named:
            return child.type
    return ""


def _rhs_operands(node) -> list:
    right = node.child_by_field_name("right")
    if right is None:
        return []
    if right.type == "expression_list":
        return _named(right)
    return [right]


def _iter_nodes(node):
    """Yield ``node``'s descendants in pre-order."""
    for child in node.children:
        yield child
        yield from _iter_nodes(child)


def _is_string_operation(operands) -> bool:
    # Bare identifiers count as string-like: numeric `n += step` is reported
    # too.  Kept as a known over-approximation.
    for expr in operands:
        if expr.type in _STRING_LITERALS:
            return True
        if expr.type == "binary_expression" and _operator(expr) == "+":
            return True
        if expr.type == "identifier":
            return True
    return False


def _is_slice_type(node) -> bool:
    # tree-sitter gives `[]T` its own node; `[N]T` is an array_type.
    return node.type == "slice_type"


def loop_has_condition(for_node) -> bool:
    """True unless the ``for`` statement is unconditional (``for {}``, ``for ;; {}``)."""
    for child in _named(for_node):
        if child.type == "block":
            continue
        if child.type == "for_clause":
            return child.child_by_field_name("condition") is not None
        # range_clause or a bare condition expression
        return True
    return False


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def check_loop_string_concatenation(node, source: bytes) -> list[Issue]:
    """``+=`` with a string-like operand anywhere in a loop body.

    The body search enters nested loops, so an assignment inside two loops
    is reported once per enclosing loop.
    """
    if node.type != "for_statement":
        return []
    body = node.child_by_field_name("body")
    if body is None:
        return []

    issues: list[Issue] = []
    for inner in _iter_nodes(body):
        if inner.type != "assignment_statement" or _operator(inner) != "+=":
            continue
        if _is_string_operation(_rhs_operands(inner)):
            issues.append(
                Issue(
                    line=node_line(inner),
                    title="String concatenation in loop",
                    description="Using += for string concatenation in loops creates many temporary strings",
                    suggestion=(
                        "Use strings.Builder for 3x better performance: "
                        "var b strings.Builder; b.WriteString(...)"
                    ),
                    impact=IMPACT_HIGH,
                    category=CATEGORY_ALLOCATION,
                )
            )
    return issues


def check_slice_allocation(node, source: bytes) -> list[Issue]:
    """``make([]T)`` assigned with neither a length nor a capacity."""
    if node.type not in _ASSIGNMENT_NODES:
        return []

    issues: list[Issue] = []
    for rhs in _rhs_operands(node):
        if rhs.type != "call_expression":
            continue
        fn = rhs.child_by_field_name("function")
        if fn is None or fn.type != "identifier" or node_text(fn, source) != "make":
            continue
        arguments = rhs.child_by_field_name("arguments")
        args = _named(arguments) if arguments is not None else []
        if len(args) == 1 and _is_slice_type(args[0]):
            issues.append(
                Issue(
                    line=node_line(rhs),
                    title="Slice allocated without capacity hint",
                    description="Slice will be reallocated and copied as it grows",
                    suggestion="If you know expected size, use: make([]Type, 0, expectedCapacity)",
                    impact=IMPACT_MEDIUM,
                    category=CATEGORY_ALLOCATION,
                )
            )
    return issues


def check_goroutine_leak(node, source: bytes) -> list[Issue]:
    """Inline goroutine with an unconditional loop and no channel send.

    Purely syntactic: exits driven by timers, context cancellation or other
    signals are not recognised.
    """
    if node.type != "go_statement":
        return []
    spawned = _named(node)
    if not spawned or spawned[0].type != "call_expression":
        return []
    fn = spawned[0].child_by_field_name("function")
    if fn is None or fn.type != "func_literal":
        return []
    body = fn.child_by_field_name("body")
    if body is None:
        return []

    has_infinite_loop = False
    has_send = False
    for inner in _iter_nodes(body):
        if inner.type == "for_statement" and not loop_has_condition(inner):
            has_infinite_loop = True
        elif inner.type == "send_statement":
            has_send = True

    if has_infinite_loop and not has_send:
        return [
            Issue(
                line=node_line(node),
                title="Potential goroutine leak",
                description="Goroutine with infinite loop and no channel communication may leak",
                suggestion="Add proper exit condition or context cancellation",
                impact=IMPACT_MEDIUM,
                category=CATEGORY_GOROUTINE,
            )
        ]
    return []


STRUCTURAL_CHECKS = (
    check_loop_string_concatenation,
    check_slice_allocation,
    check_goroutine_leak,
)


# ---------------------------------------------------------------------------
# Walk
# ---------------------------------------------------------------------------


def analyze_tree(tree, source: bytes, checks=STRUCTURAL_CHECKS) -> list[Issue]:
    """Visit every node once and collect the findings of every check."""
    issues: list[Issue] = []

    def _visit(node):
        for check in checks:
            issues.extend(check(node, source))
        for child in node.children:
            _visit(child)

    _visit(tree.root_node)
    return issues
