"""Tracker - Fetches ticket details and status history from Jira."""

from jira_evidence.tracker.client import JiraClient
from jira_evidence.tracker.exceptions import (
    TicketNotFoundError,
    TrackerAuthError,
    TrackerError,
)
from jira_evidence.tracker.fetcher import (
    IssueSource,
    build_ticket_result,
    fetch_ticket_details,
)
from jira_evidence.tracker.issue import JiraIssue, format_timestamp
from jira_evidence.tracker.models import EvidenceEnvelope, TicketResult, Transition
from jira_evidence.tracker.richtext import NodeKind, RichTextNode, description_text, plain_text

__all__ = [
    "EvidenceEnvelope",
    "IssueSource",
    "JiraClient",
    "JiraIssue",
    "NodeKind",
    "RichTextNode",
    "TicketNotFoundError",
    "TicketResult",
    "TrackerAuthError",
    "TrackerError",
    "Transition",
    "build_ticket_result",
    "description_text",
    "fetch_ticket_details",
    "format_timestamp",
    "plain_text",
]
