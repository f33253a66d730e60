"""Shared pytest fixtures and configuration."""

import logging

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so tests don't share streams."""
    yield
    logger = logging.getLogger("jira_evidence")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def issue_payload() -> dict:
    """A Jira v3 issue response with changelog expanded."""
    return {
        "key": "EV-1",
        "fields": {
            "summary": "Add evidence step",
            "status": {"name": "QA in Progress"},
            "description": {
                "type": "doc",
                "version": 1,
                "content": [
                    {
                        "type": "paragraph",
                        "content": [
                            {"type": "text", "text": "Collect "},
                            {"type": "text", "text": "ticket data"},
                        ],
                    }
                ],
            },
            "issuetype": {"name": "Task"},
            "project": {"key": "EV"},
            "created": "2020-01-01T12:11:56.063+0530",
            "updated": "2020-01-01T12:12:01.876+0530",
            "assignee": {"displayName": "Dana Lee"},
            "reporter": {"displayName": "Sam Park"},
            "priority": {"name": "Medium"},
        },
        "changelog": {
            "histories": [
                {
                    "author": {"displayName": "Dana Lee", "emailAddress": "dana@example.com"},
                    "created": "2020-07-28T16:39:54.620+0530",
                    "items": [
                        {"field": "status", "fromString": "To Do", "toString": "In Progress"},
                        {"field": "assignee", "fromString": None, "toString": "Dana Lee"},
                    ],
                },
                {
                    "author": {"displayName": "Sam Park", "emailAddress": "sam@example.com"},
                    "created": "2020-07-29T09:00:00.000+0530",
                    "items": [
                        {"field": "status", "fromString": "In Progress", "toString": "QA in Progress"},
                    ],
                },
            ]
        },
    }
