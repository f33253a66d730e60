"""Data models for Git Reader."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BranchInfo:
    """Snapshot of the checked-out branch."""

    branch: str
    head_commit: str
    subject: str
    current_ticket_id: str | None = None
