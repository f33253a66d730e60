"""jira-evidence - Jira ticket evidence from git commit ranges."""

__version__ = "0.1.0"
