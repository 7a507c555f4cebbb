"""Report rendering."""

from .markdown import render_markdown, render_report, write_report

__all__ = [
    "render_markdown",
    "render_report",
    "write_report",
]
