"""JiraClient - Reads issues from the Jira Cloud REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from jira_evidence.logging import get_logger, sanitize_for_log, truncate_output
from jira_evidence.tracker.exceptions import (
    TicketNotFoundError,
    TrackerAuthError,
    TrackerError,
)
from jira_evidence.tracker.issue import JiraIssue

if TYPE_CHECKING:
    from jira_evidence.config import EvidenceConfig

logger = get_logger("tracker")


class JiraClient:
    """Client for the Jira REST API (v3).

    Authenticates with HTTP basic auth using a username and API token.
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Jira client.

        Args:
            base_url: Jira instance URL (e.g. https://company.atlassian.net)
            username: Jira account name or email
            api_token: Jira API token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.api_token = api_token
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @classmethod
    def from_config(cls, config: EvidenceConfig) -> JiraClient:
        """Create a client from resolved configuration.

        Raises:
            ConfigError: If any credential is missing
        """
        config.require_credentials()
        return cls(
            base_url=config.jira_url,
            username=config.jira_username,
            api_token=config.jira_api_token,
        )

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the Jira API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                auth=(self.username, self.api_token),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> JiraClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_issue(self, key: str) -> JiraIssue:
        """Fetch an issue with its change history.

        Args:
            key: Issue key (e.g. "EV-123")

        Returns:
            Parsed issue

        Raises:
            TicketNotFoundError: If the issue does not exist
            TrackerAuthError: If credentials are rejected
            TrackerError: On any other API or transport failure
        """
        logger.debug("Fetching issue %s", key)
        try:
            response = self.client.get(
                f"/rest/api/3/issue/{key}",
                params={"expand": "changelog"},
            )
        except httpx.HTTPError as e:
            raise TrackerError(f"Failed to connect to Jira for {key}: {e}") from e

        if response.status_code == 404:
            raise TicketNotFoundError(f"Issue {key} not found")
        if response.status_code in (401, 403):
            raise TrackerAuthError(
                f"Jira rejected credentials for {key}: {response.status_code}"
            )
        if response.status_code != 200:
            detail = sanitize_for_log(truncate_output(response.text, 500))
            raise TrackerError(f"Failed to get issue {key}: {response.status_code} - {detail}")

        try:
            issue = JiraIssue.model_validate(response.json())
        except ValueError as e:
            raise TrackerError(f"Unexpected response for issue {key}: {e}") from e

        logger.debug(
            "Fetched issue %s (%d history entries)", issue.key, len(issue.changelog.histories)
        )
        return issue
