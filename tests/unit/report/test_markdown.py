"""Unit tests for the markdown summary."""

from pathlib import Path

import pytest

from jira_evidence.report import (
    escape_markdown,
    format_workflow,
    markdown_path_for,
    render_markdown,
    write_markdown_report,
)
from jira_evidence.tracker import EvidenceEnvelope, TicketResult, Transition


def _transition(from_status: str, to_status: str, when: str) -> Transition:
    return Transition(
        from_status=from_status,
        to_status=to_status,
        author="Dana Lee",
        author_email="dana@example.com",
        transition_time=when,
    )


def _ticket(key: str, description: str = "Summary", transitions: list | None = None) -> TicketResult:
    return TicketResult(
        key=key,
        status="Done",
        description=description,
        issue_type="Task",
        project="EV",
        created="",
        updated="",
        assignee=None,
        reporter="Sam Park",
        priority="High",
        transitions=transitions or [],
    )


@pytest.mark.unit
class TestFormatWorkflow:
    """Tests for format_workflow."""

    def test_chronological_distinct_statuses(self) -> None:
        transitions = [
            _transition("In Review", "Done", "2024-03-03T10:00:00.000+0000"),
            _transition("To Do", "In Progress", "2024-03-01T10:00:00.000+0000"),
            _transition("In Progress", "In Review", "2024-03-02T10:00:00.000+0000"),
        ]

        assert format_workflow(transitions) == "To Do → In Progress → In Review → Done"

    def test_revisited_status_listed_once(self) -> None:
        transitions = [
            _transition("To Do", "In Progress", "2024-03-01T10:00:00.000+0000"),
            _transition("In Progress", "To Do", "2024-03-02T10:00:00.000+0000"),
            _transition("To Do", "In Progress", "2024-03-03T10:00:00.000+0000"),
        ]

        assert format_workflow(transitions) == "To Do → In Progress"

    def test_no_transitions(self) -> None:
        assert format_workflow([]) == "No transitions available"

    def test_only_empty_statuses(self) -> None:
        assert format_workflow([_transition("", "", "2024-03-01")]) == "No workflow data"


@pytest.mark.unit
class TestEscapeMarkdown:
    """Tests for escape_markdown."""

    def test_escapes_pipes(self) -> None:
        assert escape_markdown("a|b") == "a\\|b"

    def test_plain_text_unchanged(self) -> None:
        assert escape_markdown("plain") == "plain"


@pytest.mark.unit
class TestRenderMarkdown:
    """Tests for render_markdown."""

    def test_header_and_rows(self) -> None:
        envelope = EvidenceEnvelope(
            requested=["EV-1"],
            tasks=[
                _ticket(
                    "EV-1",
                    transitions=[_transition("To Do", "Done", "2024-03-01T10:00:00.000+0000")],
                )
            ],
        )

        content = render_markdown(envelope)

        assert content == (
            "# Jira Tickets Summary\n"
            "Found 1 associated tickets.\n\n"
            "| Key | Summary | Type | Priority | Workflow |\n"
            "|-----|---------|------|----------|----------|\n"
            "| EV-1 | Summary | Task | High | To Do → Done |\n"
        )

    def test_pipe_in_description_escaped(self) -> None:
        envelope = EvidenceEnvelope(requested=["EV-1"], tasks=[_ticket("EV-1", "a|b")])

        assert "| EV-1 | a\\|b | Task |" in render_markdown(envelope)

    def test_error_row_placeholders(self) -> None:
        envelope = EvidenceEnvelope(requested=["EV-2"], tasks=[TicketResult.error("EV-2")])

        row = render_markdown(envelope).splitlines()[-1]

        assert row == "| EV-2 | Error: Could not retrieve issue | Error | N/A | N/A |"

    def test_error_row_without_description(self) -> None:
        error = TicketResult.error("EV-2").model_copy(update={"description": ""})
        envelope = EvidenceEnvelope(requested=["EV-2"], tasks=[error])

        assert "| EV-2 | Error retrieving ticket data | Error | N/A | N/A |" in render_markdown(
            envelope
        )

    def test_empty_envelope(self) -> None:
        content = render_markdown(EvidenceEnvelope(requested=[], tasks=[]))

        assert "Found 0 associated tickets." in content


@pytest.mark.unit
class TestMarkdownFile:
    """Tests for markdown file naming and writing."""

    def test_default_name(self) -> None:
        assert markdown_path_for("transformed_jira_data.json") == Path("transformed_jira_data.md")

    def test_custom_name_keeps_directory(self) -> None:
        assert markdown_path_for("out/jira_results.json") == Path("out/jira_results.md")

    def test_write_markdown_report(self, tmp_path: Path) -> None:
        envelope = EvidenceEnvelope(requested=["EV-1"], tasks=[_ticket("EV-1")])

        path = write_markdown_report(envelope, tmp_path / "evidence.json")

        assert path == tmp_path / "evidence.md"
        assert path.read_text(encoding="utf-8").startswith("# Jira Tickets Summary")
