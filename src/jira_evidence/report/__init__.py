"""Report - Renders evidence envelopes as JSON and markdown."""

from jira_evidence.report.exceptions import ReportError
from jira_evidence.report.markdown import (
    escape_markdown,
    format_workflow,
    markdown_path_for,
    render_markdown,
    write_markdown_report,
)
from jira_evidence.report.writer import envelope_to_json, write_json_report, write_text

__all__ = [
    "ReportError",
    "envelope_to_json",
    "escape_markdown",
    "format_workflow",
    "markdown_path_for",
    "render_markdown",
    "write_json_report",
    "write_markdown_report",
    "write_text",
]
