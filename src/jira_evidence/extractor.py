"""Ticket identifier extraction from commit subject lines."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from jira_evidence.config import ConfigError
from jira_evidence.logging import get_logger

if TYPE_CHECKING:
    from jira_evidence.git_reader import GitReader

logger = get_logger("extractor")


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile an identifier pattern.

    Raises:
        ConfigError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"invalid JIRA ID regex {pattern!r}: {e}") from e


def first_match(text: str, pattern: re.Pattern[str]) -> str | None:
    """Return the first non-empty match of `pattern` in `text`."""
    for match in pattern.finditer(text):
        if match.group(0):
            return match.group(0)
    return None


def find_identifiers(
    lines: Iterable[str],
    pattern: re.Pattern[str],
    seed: str | None = None,
) -> list[str]:
    """Collect distinct identifiers in order of first appearance.

    Args:
        lines: Commit subject lines to scan.
        pattern: Compiled identifier pattern. Whole matches are used even
            when the pattern contains groups.
        seed: Identifier of the current commit; kept first when it matches.

    Returns:
        Deduplicated identifiers.
    """
    found: dict[str, None] = {}

    if seed and pattern.search(seed):
        found[seed] = None

    for line in lines:
        for match in pattern.finditer(line):
            identifier = match.group(0)
            if identifier:
                found.setdefault(identifier, None)

    return list(found)


def extract_identifiers(
    reader: GitReader,
    start_commit: str,
    pattern: str,
    seed: str | None = None,
) -> list[str]:
    """Extract identifiers from the commits in `start_commit..HEAD`.

    Args:
        reader: Git reader for the working copy.
        start_commit: Exclusive start of the commit range.
        pattern: Identifier regular expression.
        seed: Identifier taken from the current commit, if any.

    Returns:
        Deduplicated identifiers, possibly empty.

    Raises:
        ConfigError: If `pattern` is invalid.
        GitCommandError: If the commit log cannot be read.
    """
    regex = compile_pattern(pattern)
    subjects = reader.commit_subjects(start_commit)
    identifiers = find_identifiers(subjects, regex, seed)

    if not identifiers:
        logger.warning("No JIRA IDs found in commit range %s..HEAD", start_commit)
    else:
        logger.info(
            "Extracted %d JIRA ID(s) from %d commit(s)", len(identifiers), len(subjects)
        )
    return identifiers
