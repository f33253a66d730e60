"""Mapping of Jira issues into evidence records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from jira_evidence.logging import get_logger
from jira_evidence.tracker.exceptions import TrackerError
from jira_evidence.tracker.issue import JiraIssue, JiraUser, NamedEntity, format_timestamp
from jira_evidence.tracker.models import EvidenceEnvelope, TicketResult, Transition
from jira_evidence.tracker.richtext import description_text

logger = get_logger("tracker")

STATUS_FIELD = "status"


class IssueSource(Protocol):
    """Anything that can fetch a Jira issue by key."""

    def get_issue(self, key: str) -> JiraIssue: ...


def _name(entity: NamedEntity | None) -> str:
    return entity.name if entity is not None else ""


def _display_name(user: JiraUser | None) -> str:
    return user.display_name if user is not None else ""


def status_transitions(issue: JiraIssue) -> list[Transition]:
    """Transitions for every status change in the issue's history."""
    transitions = []
    for history in issue.changelog.histories:
        for item in history.items:
            if item.field != STATUS_FIELD:
                continue
            transitions.append(
                Transition(
                    from_status=item.from_string or "",
                    to_status=item.to_string or "",
                    author=_display_name(history.author),
                    author_email=(history.author.email_address or "") if history.author else "",
                    transition_time=format_timestamp(history.created),
                )
            )
    return transitions


def build_ticket_result(issue: JiraIssue) -> TicketResult:
    """Map a fetched issue into its evidence record."""
    fields = issue.fields
    return TicketResult(
        key=issue.key,
        status=_name(fields.status),
        description=description_text(fields.description),
        issue_type=_name(fields.issue_type),
        project=fields.project.key if fields.project is not None else "",
        created=format_timestamp(fields.created),
        updated=format_timestamp(fields.updated),
        assignee=fields.assignee.display_name if fields.assignee is not None else None,
        reporter=_display_name(fields.reporter),
        priority=_name(fields.priority),
        transitions=status_transitions(issue),
    )


def fetch_ticket_details(source: IssueSource, ticket_ids: Sequence[str]) -> EvidenceEnvelope:
    """Fetch every ticket once, in order.

    A ticket that cannot be fetched is recorded with an error placeholder
    and does not stop the remaining fetches.

    Args:
        source: Issue source, normally a JiraClient.
        ticket_ids: Ticket keys to fetch.

    Returns:
        Envelope with one result per requested key.
    """
    requested = list(ticket_ids)
    tasks: list[TicketResult] = []

    for ticket_id in requested:
        try:
            issue = source.get_issue(ticket_id)
        except TrackerError as e:
            logger.error("Got error for extracting issue with jira id: %s error %s", ticket_id, e)
            tasks.append(TicketResult.error(ticket_id))
            continue

        result = build_ticket_result(issue)
        logger.info(
            "%s: %s (%d transition(s))", result.key, result.status, len(result.transitions)
        )
        tasks.append(result)

    return EvidenceEnvelope(requested=requested, tasks=tasks)
