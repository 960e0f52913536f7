"""Quick check: count high-impact issues only."""

from __future__ import annotations

import click

from goprofiler.analyzer.issues import IMPACT_HIGH
from goprofiler.commands.cmd_analyze import run_analysis
from goprofiler.config import resolve_config
from goprofiler.exit_codes import EXIT_PARTIAL
from goprofiler.output.formatter import json_envelope, to_json


@click.command("check")
@click.argument("target", type=click.Path())
@click.pass_context
def check(ctx, target):
    """Quick performance check: report how many high-impact issues exist."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    cfg = resolve_config(target)

    if not json_mode:
        click.echo(f"Quick check: {target}")

    report = run_analysis(target, exclude=cfg["exclude"])
    high = sum(
        1
        for result in report.results
        for issue in result.issues
        if issue.impact == IMPACT_HIGH
    )

    if json_mode:
        verdict = f"{high} high-impact issues" if high else "no critical issues"
        click.echo(
            to_json(
                json_envelope(
                    "check",
                    summary={
                        "verdict": verdict,
                        "files_analyzed": len(report.results),
                        "files_failed": len(report.errors),
                        "high_impact_issues": high,
                    },
                )
            )
        )
    elif high:
        click.echo(f"Found {high} high-impact performance issues")
        click.echo("Run 'goprofiler analyze' for details")
    else:
        click.echo("No critical performance issues detected")

    if report.errors:
        ctx.exit(EXIT_PARTIAL)
