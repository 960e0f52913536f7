"""Analyze Go source for performance anti-patterns.

Exit codes:
  0  Analysis completed.
  1  Target missing or unreadable (or a file failed with --fail-fast).
  5  An issue at or above --fail-on impact was found (EXIT_GATE_FAILURE).
  6  Some files could not be read and were skipped (EXIT_PARTIAL).
"""

from __future__ import annotations

import click

from goprofiler.analyzer import Analyzer, AnalyzerError, PathReport
from goprofiler.analyzer.issues import IMPACTS, impact_at_least
from goprofiler.config import resolve_config
from goprofiler.exit_codes import EXIT_PARTIAL, GateFailureError, GoprofilerError
from goprofiler.output.formatter import RULE, format_console, report_envelope, to_json


def run_analysis(target: str, fail_fast: bool = False, exclude=None) -> PathReport:
    """Analyze ``target`` and translate engine errors into CLI errors."""
    try:
        return Analyzer().analyze_path(target, fail_fast=fail_fast, exclude=exclude)
    except AnalyzerError as exc:
        raise GoprofilerError(f"analysis failed: {exc}") from exc


def gate_hits(report: PathReport, fail_on: str | None) -> int:
    """Number of issues at or above ``fail_on`` impact (0 when no gate is set)."""
    if not fail_on:
        return 0
    return sum(
        1
        for result in report.results
        for issue in result.issues
        if impact_at_least(issue.impact, fail_on)
    )


@click.command("analyze")
@click.argument("target", type=click.Path())
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default=None,
    help="Output format (default: console, or `output` from .goprofiler.yml).",
)
@click.option("--verbose/--no-verbose", default=None, help="Show descriptions and suggestions.")
@click.option(
    "--fail-on",
    type=click.Choice(sorted(IMPACTS), case_sensitive=False),
    default=None,
    help="Exit 5 when an issue of this impact or higher is found.",
)
@click.option("--fail-fast", is_flag=True, help="Abort on the first file that cannot be read.")
@click.pass_context
def analyze(ctx, target, output_format, verbose, fail_on, fail_fast):
    """Analyze a Go file or directory for performance issues.

    Files that parse cleanly are checked structurally (syntax tree); files
    with syntax errors fall back to line-based heuristics and are still
    reported.

    \b
    Examples:
      goprofiler analyze main.go
      goprofiler analyze ./internal --verbose
      goprofiler --json analyze . --fail-on high
    """
    cfg = resolve_config(target)
    json_mode = (ctx.obj.get("json") if ctx.obj else False) or (output_format or cfg["output"]) == "json"
    if verbose is None:
        verbose = cfg["verbose"]
    fail_on = fail_on or cfg["fail_on"]

    if not json_mode:
        click.echo(f"GoProfiler - Analyzing: {target}")
        click.echo(RULE)

    report = run_analysis(target, fail_fast=fail_fast, exclude=cfg["exclude"])

    if json_mode:
        click.echo(to_json(report_envelope("analyze", report)))
    else:
        click.echo(format_console(report, verbose=verbose))

    hits = gate_hits(report, fail_on)
    if hits:
        raise GateFailureError(f"{hits} issue(s) at or above {fail_on} impact")
    if report.errors:
        ctx.exit(EXIT_PARTIAL)
