"""Typed view of the Jira "get issue" response (changelog expanded).

Only the fields used for evidence are modeled; everything else in the
payload is ignored. Missing blocks fall back to empty defaults.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Timestamps arrive as strings from the REST API; datetimes appear when
# payloads are built in code.
TimestampValue = str | datetime | None


class JiraModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedEntity(JiraModel):
    """Status, issue type or priority reference."""

    name: str = ""


class ProjectRef(JiraModel):
    key: str = ""


class JiraUser(JiraModel):
    display_name: str = Field(default="", alias="displayName")
    email_address: str | None = Field(default=None, alias="emailAddress")


class ChangelogItem(JiraModel):
    field: str = ""
    from_string: str | None = Field(default=None, alias="fromString")
    to_string: str | None = Field(default=None, alias="toString")


class ChangelogHistory(JiraModel):
    author: JiraUser | None = None
    created: TimestampValue = None
    items: list[ChangelogItem] = Field(default_factory=list)


class Changelog(JiraModel):
    histories: list[ChangelogHistory] = Field(default_factory=list)


class IssueFields(JiraModel):
    summary: str = ""
    status: NamedEntity | None = None
    description: str | dict[str, Any] | None = None
    issue_type: NamedEntity | None = Field(default=None, alias="issuetype")
    project: ProjectRef | None = None
    created: TimestampValue = None
    updated: TimestampValue = None
    assignee: JiraUser | None = None
    reporter: JiraUser | None = None
    priority: NamedEntity | None = None


class JiraIssue(JiraModel):
    """A Jira issue with its change history."""

    key: str
    fields: IssueFields = Field(default_factory=IssueFields)
    changelog: Changelog = Field(default_factory=Changelog)


def format_timestamp(value: object) -> str:
    """Render a timestamp value as a string.

    Strings pass through unchanged, datetimes use Jira's own layout
    (``2020-01-01T12:11:56.063+0530``), None becomes an empty string and
    anything else falls back to ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        millis = value.microsecond // 1000
        return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}{value.strftime('%z')}"
    return str(value)
