"""List the registered heuristic patterns."""

from __future__ import annotations

import click

from goprofiler.analyzer.issues import category_label
from goprofiler.analyzer.patterns import default_patterns
from goprofiler.output.formatter import json_envelope, to_json


@click.command("patterns")
@click.pass_context
def patterns(ctx):
    """Show the line-based patterns used when a file fails to parse."""
    json_mode = ctx.obj.get("json") if ctx.obj else False
    registered = default_patterns()

    if json_mode:
        click.echo(
            to_json(
                json_envelope(
                    "patterns",
                    summary={"count": len(registered)},
                    patterns=[p.to_dict() for p in registered],
                )
            )
        )
        return

    for p in registered:
        click.echo(f"{p.name}  [{p.impact}]  {category_label(p.category)}")
        click.echo(f"    {p.description}")
