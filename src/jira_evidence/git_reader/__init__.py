"""Git Reader - Reads branch and commit-range information from git."""

from jira_evidence.git_reader.exceptions import (
    CommitNotFoundError,
    GitCommandError,
    GitReaderError,
    HeadNotFoundError,
    NotARepositoryError,
)
from jira_evidence.git_reader.models import BranchInfo
from jira_evidence.git_reader.reader import GitReader

__all__ = [
    "BranchInfo",
    "CommitNotFoundError",
    "GitCommandError",
    "GitReader",
    "GitReaderError",
    "HeadNotFoundError",
    "NotARepositoryError",
]
