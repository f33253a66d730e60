"""Evidence records produced from Jira issues.

Field aliases are the JSON names consumed by the build-evidence step.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

ERROR_STATUS = "Error"
ERROR_DESCRIPTION = "Error: Could not retrieve issue"


class Transition(BaseModel):
    """A single change of a ticket's status field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_status: str
    to_status: str
    author: str
    author_email: str = Field(alias="author_user_name")
    transition_time: str


class TicketResult(BaseModel):
    """Metadata and status history of one ticket."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    status: str
    description: str
    issue_type: str = Field(alias="type")
    project: str
    created: str
    updated: str
    assignee: str | None
    reporter: str
    priority: str
    transitions: list[Transition] = Field(default_factory=list)

    @classmethod
    def error(cls, key: str) -> TicketResult:
        """Placeholder record for a ticket that could not be fetched."""
        return cls(
            key=key,
            status=ERROR_STATUS,
            description=ERROR_DESCRIPTION,
            issue_type=ERROR_STATUS,
            project="",
            created="",
            updated="",
            assignee=None,
            reporter="",
            priority="",
            transitions=[],
        )

    @property
    def is_error(self) -> bool:
        return self.issue_type == ERROR_STATUS


class EvidenceEnvelope(BaseModel):
    """Requested ticket keys and one result per key, in fetch order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    requested: list[str] = Field(alias="ticketRequested")
    tasks: list[TicketResult] = Field(default_factory=list)

    @model_validator(mode="after")
    def _one_result_per_ticket(self) -> Self:
        if len(self.tasks) != len(self.requested):
            raise ValueError(
                f"{len(self.tasks)} result(s) for {len(self.requested)} requested ticket(s)"
            )
        return self
