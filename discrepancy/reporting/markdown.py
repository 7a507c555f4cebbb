"""
Report rendering.

Formats a ConflictReport as Markdown for human review, or as JSON.
"""

import logging
from pathlib import Path
from typing import Literal

from discrepancy.models import ConflictReport, ValueOccurrence

logger = logging.getLogger(__name__)

ReportFormat = Literal["markdown", "json"]


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _value_line(occurrence: ValueOccurrence) -> str:
    return f"- Value: {occurrence.display_value}  in {', '.join(occurrence.documents)}"


def render_markdown(report: ConflictReport) -> str:
    """
    Render a conflict report as Markdown.

    Args:
        report: The scan result

    Returns:
        Markdown document text
    """
    lines = [
        "# Discrepancy report (review before fixing)",
        "",
        "Generated from corpus text documents. Fix only after reviewing.",
        "",
        "## 1. Conflicting numbers (same context key)",
        "",
    ]

    if not report.direct_conflicts:
        lines.append("None found.")
    else:
        for conflict in report.direct_conflicts:
            lines.append(f'**Context:** "{_truncate(conflict.context_key, 80)}"')
            for occurrence in conflict.values:
                lines.append(_value_line(occurrence))
                lines.append(f"  - Raw: {'; '.join(occurrence.raw_forms)}")
            lines.append("")

    lines.extend([
        "",
        "## 2. Possibly same topic, different numbers (similar context)",
        "",
        "May be ranges or different phases; review before treating as errors.",
        "",
    ])

    if not report.similar_context_conflicts:
        lines.append("None found.")
    else:
        for conflict in report.similar_context_conflicts:
            contexts = " | ".join(
                f'"{_truncate(key, 50)}"' for key in conflict.context_keys[:3]
            )
            lines.append(f"**Similar contexts:** {contexts}")
            for occurrence in conflict.values:
                lines.append(_value_line(occurrence))
            lines.append("")

    lines.extend([
        "",
        "---",
        f"**Summary:** {report.summary_line()}",
    ])

    return "\n".join(lines) + "\n"


def render_report(report: ConflictReport, fmt: ReportFormat = "markdown") -> str:
    """Render a report in the requested format."""
    if fmt == "json":
        return report.model_dump_json(indent=2) + "\n"
    if fmt == "markdown":
        return render_markdown(report)
    raise ValueError(f"Unsupported report format: {fmt}")


def write_report(
    report: ConflictReport,
    path: str | Path,
    fmt: ReportFormat = "markdown",
) -> Path:
    """
    Write a rendered report to disk.

    Args:
        report: The scan result
        path: Output file path
        fmt: "markdown" or "json"

    Returns:
        The path written
    """
    path = Path(path)
    path.write_text(render_report(report, fmt), encoding="utf-8")
    logger.info(f"Report written to {path}")
    return path
