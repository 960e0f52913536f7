"""Console and JSON rendering of analysis reports."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

from goprofiler.analyzer.issues import (
    IMPACT_HIGH,
    IMPACT_LOW,
    IMPACT_MEDIUM,
    PathReport,
    count_by_impact,
)

ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "goprofiler-envelope-v1"

IMPACT_ICONS = {
    IMPACT_HIGH: "[!]",
    IMPACT_MEDIUM: "[*]",
    IMPACT_LOW: "[i]",
}

RULE = "=" * 41


def _get_version() -> str:
    from goprofiler import __version__

    return __version__


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering."""
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Non-deterministic metadata (``timestamp``) lives in ``_meta`` so the
    content keys stay identical across runs on unchanged input.
    """
    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {"timestamp": ts}
    return out


def summarize(report: PathReport) -> dict:
    counts = count_by_impact(report.results)
    return {
        "files_analyzed": len(report.results),
        "files_failed": len(report.errors),
        "total_issues": report.total_issues,
        "high": counts[IMPACT_HIGH],
        "medium": counts[IMPACT_MEDIUM],
        "low": counts[IMPACT_LOW],
    }


def format_issue(issue, verbose: bool = False) -> list[str]:
    icon = IMPACT_ICONS.get(issue.impact, "[-]")
    lines = [f"   {icon} Line {issue.line}: {issue.title} ({issue.impact} impact)"]
    if verbose:
        lines.append(f"       {issue.description}")
        if issue.suggestion:
            lines.append(f"       Suggestion: {issue.suggestion}")
    return lines


def format_console(report: PathReport, verbose: bool = False) -> str:
    """Human-readable report: summary, then issues grouped by file."""
    s = summarize(report)
    lines = [
        "Analysis Summary:",
        f"   Files analyzed: {s['files_analyzed']}",
        f"   Total issues: {s['total_issues']}",
        f"   High impact: {s['high']} | Medium: {s['medium']} | Low: {s['low']}",
        "",
    ]

    if report.errors:
        lines.append(f"Skipped {len(report.errors)} file(s):")
        for err in report.errors:
            lines.append(f"   {err.file_path}: {err.message}")
        lines.append("")

    if s["total_issues"] == 0:
        lines.append("No performance issues detected!")
        return "\n".join(lines)

    for result in report.results:
        if not result.issues:
            continue
        header = result.file_path
        if verbose:
            header += f" ({result.mode})"
        lines.append(header)
        for issue in result.issues:
            lines.extend(format_issue(issue, verbose))
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def report_envelope(command: str, report: PathReport) -> dict:
    return json_envelope(
        command,
        summary=summarize(report),
        results=[r.to_dict() for r in report.results],
        errors=[e.to_dict() for e in report.errors],
    )
