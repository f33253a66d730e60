"""Allow running as `python -m jira_evidence`."""

from jira_evidence.cli import main

main()
