"""Configuration loading for jira-evidence runs.

Settings are resolved once at startup, in order of precedence:
command-line flag, environment variable, optional YAML file, default.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_ID_REGEX = "[A-Z]+-[0-9]+"
DEFAULT_OUTPUT_FILE = "transformed_jira_data.json"

# Environment variable names
ENV_API_TOKEN = "JIRA_API_TOKEN"
ENV_URL = "JIRA_URL"
ENV_USERNAME = "JIRA_USERNAME"
ENV_ID_REGEX = "JIRA_ID_REGEX"
ENV_OUTPUT_FILE = "OUTPUT_FILE"
ENV_ATTACH_MARKDOWN = "ATTACH_OPTIONAL_CUSTOM_MARKDOWN_TO_EVIDENCE"

FILE_KEYS = ("id_regex", "output_file", "attach_markdown")


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class EvidenceConfig:
    """Resolved settings for a single run.

    Credentials may be empty; they are only checked by `require_credentials`,
    which the tracker client calls before any request is made.
    """

    id_regex: str = DEFAULT_ID_REGEX
    output_file: str = DEFAULT_OUTPUT_FILE
    attach_markdown: bool = False
    jira_api_token: str = ""
    jira_url: str = ""
    jira_username: str = ""

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        id_regex: str | None = None,
        output_file: str | None = None,
        file_settings: Mapping[str, Any] | None = None,
    ) -> EvidenceConfig:
        """Build config from environment, flag overrides and file settings.

        Args:
            environ: Environment mapping. Defaults to os.environ.
            id_regex: Regex given on the command line, if any.
            output_file: Output path given on the command line, if any.
            file_settings: Values loaded from a YAML config file, if any.

        Returns:
            Resolved configuration.
        """
        env = os.environ if environ is None else environ
        file_settings = file_settings or {}

        regex = (
            id_regex
            or env.get(ENV_ID_REGEX)
            or file_settings.get("id_regex")
            or DEFAULT_ID_REGEX
        )
        output = (
            output_file
            or env.get(ENV_OUTPUT_FILE)
            or file_settings.get("output_file")
            or DEFAULT_OUTPUT_FILE
        )

        if ENV_ATTACH_MARKDOWN in env:
            attach_markdown = env[ENV_ATTACH_MARKDOWN] == "true"
        else:
            attach_markdown = file_settings.get("attach_markdown") is True

        return cls(
            id_regex=str(regex),
            output_file=str(output),
            attach_markdown=attach_markdown,
            jira_api_token=env.get(ENV_API_TOKEN, ""),
            jira_url=env.get(ENV_URL, ""),
            jira_username=env.get(ENV_USERNAME, ""),
        )

    def require_credentials(self) -> None:
        """Check that all tracker credentials are present.

        Raises:
            ConfigError: If any of token, URL or username is missing.
        """
        missing = [
            name
            for name, value in (
                (ENV_API_TOKEN, self.jira_api_token),
                (ENV_URL, self.jira_url),
                (ENV_USERNAME, self.jira_username),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Jira credentials, set: {', '.join(missing)}")


def load_config_file(config_path: Path | str) -> dict[str, Any]:
    """Load optional settings from a YAML file.

    Only non-secret settings are read from files; credentials always
    come from the environment.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Mapping of recognised settings.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - set(FILE_KEYS))
    if unknown:
        raise ConfigError(f"Unknown settings in {config_path}: {', '.join(unknown)}")

    if "attach_markdown" in data:
        data["attach_markdown"] = _parse_toggle(data["attach_markdown"], config_path)

    return {key: data[key] for key in FILE_KEYS if key in data}


def _parse_toggle(value: object, config_path: Path) -> bool:
    """Read `attach_markdown` from a file the way the environment toggle is read.

    YAML booleans are used as-is; strings enable the toggle only when they
    are exactly "true".
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value == "true"
    raise ConfigError(
        f"attach_markdown in {config_path} must be true or false, got {type(value).__name__}"
    )
