"""Fixtures for tests that run against a real git repository."""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create an empty repository on branch `main`."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def commit(git_repo: Path) -> Callable[[str], str]:
    """Return a helper that makes an empty commit and returns its hash."""

    def _commit(subject: str) -> str:
        _git(git_repo, "commit", "-q", "--allow-empty", "-m", subject)
        return _git(git_repo, "rev-parse", "HEAD")

    return _commit
