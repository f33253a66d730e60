"""Unit tests for JiraClient."""

from unittest.mock import MagicMock

import httpx
import pytest

from jira_evidence.config import ConfigError, EvidenceConfig
from jira_evidence.tracker import (
    JiraClient,
    JiraIssue,
    TicketNotFoundError,
    TrackerAuthError,
    TrackerError,
)


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock HTTP client."""
    return MagicMock()


@pytest.fixture
def client(mock_client: MagicMock) -> JiraClient:
    """Create a JiraClient instance with mocked HTTP client."""
    jira = JiraClient(
        base_url="https://example.atlassian.net/",
        username="ci@example.com",
        api_token="test-token",
    )
    jira._client = mock_client
    return jira


def _mock_response(status_code: int = 200, data: dict | None = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    response.text = text
    return response


@pytest.mark.unit
class TestFromConfig:
    """Tests for JiraClient.from_config."""

    def test_builds_client_from_config(self) -> None:
        config = EvidenceConfig(
            jira_api_token="token",
            jira_url="https://example.atlassian.net",
            jira_username="ci@example.com",
        )

        jira = JiraClient.from_config(config)

        assert jira.base_url == "https://example.atlassian.net"
        assert jira.username == "ci@example.com"
        assert jira.api_token == "token"

    def test_missing_credentials_raise(self) -> None:
        config = EvidenceConfig(jira_url="https://example.atlassian.net")

        with pytest.raises(ConfigError, match="JIRA_API_TOKEN"):
            JiraClient.from_config(config)


@pytest.mark.unit
class TestHttpClient:
    """Tests for lazy HTTP client creation."""

    def test_client_uses_basic_auth(self) -> None:
        jira = JiraClient("https://example.atlassian.net", "ci@example.com", "token")
        try:
            http = jira.client

            assert isinstance(http.auth, httpx.BasicAuth)
            assert str(http.base_url).startswith("https://example.atlassian.net")
            assert jira.client is http
        finally:
            jira.close()

    def test_close_resets_client(self, client: JiraClient, mock_client: MagicMock) -> None:
        client.close()

        mock_client.close.assert_called_once()
        assert client._client is None

    def test_context_manager_closes(self, client: JiraClient, mock_client: MagicMock) -> None:
        with client:
            pass

        mock_client.close.assert_called_once()


@pytest.mark.unit
class TestGetIssue:
    """Tests for get_issue."""

    def test_requests_changelog(
        self, client: JiraClient, mock_client: MagicMock, issue_payload: dict
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload)

        client.get_issue("EV-1")

        mock_client.get.assert_called_once_with(
            "/rest/api/3/issue/EV-1",
            params={"expand": "changelog"},
        )

    def test_returns_parsed_issue(
        self, client: JiraClient, mock_client: MagicMock, issue_payload: dict
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload)

        issue = client.get_issue("EV-1")

        assert isinstance(issue, JiraIssue)
        assert issue.key == "EV-1"
        assert issue.fields.status is not None
        assert issue.fields.status.name == "QA in Progress"
        assert len(issue.changelog.histories) == 2

    def test_not_found(self, client: JiraClient, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response(404, text="Issue does not exist")

        with pytest.raises(TicketNotFoundError, match="EV-404"):
            client.get_issue("EV-404")

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_failure(
        self, client: JiraClient, mock_client: MagicMock, status_code: int
    ) -> None:
        mock_client.get.return_value = _mock_response(status_code)

        with pytest.raises(TrackerAuthError):
            client.get_issue("EV-1")

    def test_server_error(self, client: JiraClient, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response(500, text="Internal error")

        with pytest.raises(TrackerError) as exc_info:
            client.get_issue("EV-1")

        assert "500" in str(exc_info.value)

    def test_transport_error_wrapped(self, client: JiraClient, mock_client: MagicMock) -> None:
        mock_client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(TrackerError, match="Failed to connect"):
            client.get_issue("EV-1")

    def test_malformed_payload(self, client: JiraClient, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response(data={"fields": {}})

        with pytest.raises(TrackerError, match="Unexpected response"):
            client.get_issue("EV-1")

    def test_auth_and_not_found_are_tracker_errors(self) -> None:
        assert issubclass(TicketNotFoundError, TrackerError)
        assert issubclass(TrackerAuthError, TrackerError)
