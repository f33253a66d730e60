"""GitReader - Reads branch and commit information from a local clone."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from jira_evidence.config import DEFAULT_ID_REGEX
from jira_evidence.extractor import first_match
from jira_evidence.git_reader.exceptions import (
    CommitNotFoundError,
    GitCommandError,
    HeadNotFoundError,
    NotARepositoryError,
)
from jira_evidence.git_reader.models import BranchInfo
from jira_evidence.logging import get_logger, truncate_output

logger = get_logger("git_reader")


class GitReader:
    """Read-only access to the git history of a working copy.

    Every operation shells out to the `git` CLI, one call at a time.
    """

    def __init__(self, repo_path: str | Path = ".") -> None:
        """Initialize Git Reader.

        Args:
            repo_path: Path to the local repository clone
        """
        self.repo_path = Path(repo_path)

    def _run_git(self, *args: str) -> str:
        """Run a git command in the repo directory.

        Args:
            *args: Git command arguments

        Returns:
            Command stdout

        Raises:
            subprocess.CalledProcessError: If command fails
        """
        result = subprocess.run(
            ["git", *args],
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def _query(self, description: str, *args: str) -> str:
        """Run a git query, wrapping failures in GitCommandError."""
        try:
            return self._run_git(*args)
        except (subprocess.CalledProcessError, OSError) as e:
            stderr = getattr(e, "stderr", None) or str(e)
            logger.error("Failed to get %s: %s", description, truncate_output(stderr))
            raise GitCommandError(f"Failed to get {description}: {stderr.strip()}") from e

    def check_repository(self) -> None:
        """Ensure the working directory is inside a git repository.

        Raises:
            NotARepositoryError: If it is not
        """
        try:
            self._run_git("rev-parse", "--git-dir")
        except (subprocess.CalledProcessError, OSError) as e:
            raise NotARepositoryError("not in a git repository") from e

    def current_branch(self) -> str:
        """Name of the checked-out branch (empty when HEAD is detached)."""
        return self._query("branch name", "branch", "--show-current")

    def head_commit(self) -> str:
        """Hash of the HEAD commit."""
        return self._query("latest commit", "log", "-1", "--format=%H")

    def current_subject(self) -> str:
        """Subject line of the HEAD commit."""
        return self._query("commit subject", "log", "-1", "--format=%s")

    def get_branch_info(self, pattern: str = DEFAULT_ID_REGEX) -> BranchInfo:
        """Collect branch name, HEAD hash and the HEAD commit's ticket id.

        Only the first identifier in the HEAD subject is kept.

        Args:
            pattern: Identifier pattern used to pick the current ticket id

        Returns:
            BranchInfo for the working copy

        Raises:
            GitCommandError: If any git query fails
        """
        branch = self.current_branch()
        commit = self.head_commit()
        subject = self.current_subject()
        try:
            ticket_id = first_match(subject, re.compile(pattern))
        except re.error:
            ticket_id = None
        logger.debug("Branch %s at %s (ticket id: %s)", branch, commit, ticket_id)
        return BranchInfo(
            branch=branch,
            head_commit=commit,
            subject=subject,
            current_ticket_id=ticket_id,
        )

    def validate_head(self) -> None:
        """Check that HEAD resolves to a commit.

        Raises:
            HeadNotFoundError: If the repository has no HEAD commit
        """
        try:
            self._run_git("rev-parse", "--verify", "HEAD")
        except (subprocess.CalledProcessError, OSError) as e:
            raise HeadNotFoundError(
                "HEAD commit not found. Repository may be empty or corrupted"
            ) from e

    def validate_commit(self, commit: str) -> None:
        """Check that a commit exists in local history.

        Args:
            commit: Commit reference to verify

        Raises:
            CommitNotFoundError: If the commit cannot be resolved
        """
        try:
            self._run_git("rev-parse", "--verify", f"{commit}^{{commit}}")
        except (subprocess.CalledProcessError, OSError) as e:
            raise CommitNotFoundError(
                f"commit '{commit}' not found. Check fetch depth or commit existence"
            ) from e

    def commit_subjects(self, start_commit: str) -> list[str]:
        """Subject lines of commits after `start_commit` up to HEAD.

        Args:
            start_commit: Exclusive start of the range

        Returns:
            Subject lines, newest first

        Raises:
            GitCommandError: If git log fails
        """
        output = self._query(
            "commit messages", "log", "--pretty=format:%s", f"{start_commit}..HEAD"
        )
        subjects = output.splitlines() if output else []
        logger.debug("Read %d commit subject(s) in %s..HEAD", len(subjects), start_commit)
        return subjects
