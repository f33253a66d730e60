"""JSON serialization and file output for evidence envelopes."""

from __future__ import annotations

from pathlib import Path

from pydantic_core import PydanticSerializationError

from jira_evidence.logging import get_logger
from jira_evidence.report.exceptions import ReportError
from jira_evidence.tracker.models import EvidenceEnvelope

logger = get_logger("report")


def envelope_to_json(envelope: EvidenceEnvelope, pretty: bool = True) -> str:
    """Serialize an envelope using its JSON field names.

    Args:
        envelope: Envelope to serialize.
        pretty: Indent with two spaces for files; compact for stdout.

    Raises:
        ReportError: If serialization fails.
    """
    try:
        return envelope.model_dump_json(by_alias=True, indent=2 if pretty else None)
    except PydanticSerializationError as e:
        raise ReportError(f"Error marshaling JSON: {e}") from e


def write_text(path: Path | str, content: str) -> Path:
    """Write text to a file, creating parent directories.

    Raises:
        ReportError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Error writing to file {path}: {e}") from e
    return path


def write_json_report(envelope: EvidenceEnvelope, path: Path | str) -> Path:
    """Write the pretty-printed envelope to `path`."""
    written = write_text(path, envelope_to_json(envelope, pretty=True))
    logger.info("Wrote %d ticket(s) to %s", len(envelope.tasks), written)
    return written
