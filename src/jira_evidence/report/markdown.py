"""Markdown summary table for evidence envelopes."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jira_evidence.logging import get_logger
from jira_evidence.report.writer import write_text
from jira_evidence.tracker.models import EvidenceEnvelope, Transition

logger = get_logger("report")

NO_TRANSITIONS = "No transitions available"
NO_WORKFLOW = "No workflow data"
NOT_AVAILABLE = "N/A"
MISSING_ERROR_DESCRIPTION = "Error retrieving ticket data"
WORKFLOW_SEPARATOR = " → "

TABLE_HEADER = (
    "| Key | Summary | Type | Priority | Workflow |\n"
    "|-----|---------|------|----------|----------|\n"
)


def format_workflow(transitions: Sequence[Transition]) -> str:
    """Distinct status names in the order the ticket passed through them.

    Args:
        transitions: Status transitions in any order.

    Returns:
        Statuses joined with an arrow, or a placeholder when there are none.
    """
    if not transitions:
        return NO_TRANSITIONS

    newest_first = sorted(transitions, key=lambda t: t.transition_time, reverse=True)

    seen: dict[str, None] = {}
    for transition in reversed(newest_first):
        for status in (transition.from_status, transition.to_status):
            if status:
                seen.setdefault(status, None)

    if not seen:
        return NO_WORKFLOW
    return WORKFLOW_SEPARATOR.join(seen)


def escape_markdown(text: str) -> str:
    """Escape pipe characters for a markdown table cell."""
    return text.replace("|", "\\|")


def render_markdown(envelope: EvidenceEnvelope) -> str:
    """Render the ticket summary table."""
    lines = [
        "# Jira Tickets Summary\n",
        f"Found {len(envelope.tasks)} associated tickets.\n\n",
        TABLE_HEADER,
    ]

    for task in envelope.tasks:
        if task.is_error:
            description = task.description or MISSING_ERROR_DESCRIPTION
            cells = [task.key, description, task.issue_type, NOT_AVAILABLE, NOT_AVAILABLE]
        else:
            cells = [
                task.key,
                task.description,
                task.issue_type,
                task.priority,
                format_workflow(task.transitions),
            ]
        lines.append("| " + " | ".join(escape_markdown(cell) for cell in cells) + " |\n")

    return "".join(lines)


def markdown_path_for(json_path: Path | str) -> Path:
    """Markdown report path next to the JSON output, same base name."""
    return Path(json_path).with_suffix(".md")


def write_markdown_report(envelope: EvidenceEnvelope, json_path: Path | str) -> Path:
    """Write the markdown summary beside the JSON report.

    Raises:
        ReportError: If the file cannot be written.
    """
    path = write_text(markdown_path_for(json_path), render_markdown(envelope))
    logger.info("Markdown report saved to %s", path)
    return path
