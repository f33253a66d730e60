"""Custom exceptions for Git Reader."""


class GitReaderError(Exception):
    """Base exception for Git Reader errors."""


class NotARepositoryError(GitReaderError):
    """Working directory is not inside a git repository."""


class GitCommandError(GitReaderError):
    """A git command failed unexpectedly."""


class HeadNotFoundError(GitReaderError):
    """HEAD does not resolve to a commit."""


class CommitNotFoundError(GitReaderError):
    """Requested start commit does not exist in local history."""
