"""CLI entry point for jira-evidence.

Extracts Jira ticket ids from a commit range, fetches their details and
status history, and writes the result as build evidence.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from jira_evidence import __version__
from jira_evidence.config import (
    DEFAULT_ID_REGEX,
    ConfigError,
    EvidenceConfig,
    load_config_file,
)
from jira_evidence.extractor import compile_pattern, extract_identifiers
from jira_evidence.git_reader import (
    CommitNotFoundError,
    GitReader,
    GitReaderError,
    HeadNotFoundError,
)
from jira_evidence.logging import setup_logging
from jira_evidence.report import (
    ReportError,
    envelope_to_json,
    write_json_report,
    write_markdown_report,
)
from jira_evidence.tracker import JiraClient, fetch_ticket_details

EPILOG = """\b
Environment Variables:
  JIRA_API_TOKEN         JIRA API token
  JIRA_URL               JIRA instance URL
  JIRA_USERNAME          JIRA username
  JIRA_ID_REGEX          JIRA ID regex pattern (can be overridden with -r)
  OUTPUT_FILE            Output file path (can be overridden with -o)
  ATTACH_OPTIONAL_CUSTOM_MARKDOWN_TO_EVIDENCE  Generate markdown report (true/false)

\b
Examples:
  jira-evidence abc123def456
  jira-evidence -r 'EV-\\d+' -o jira_results.json abc123def456
  jira-evidence --extract-only abc123def456
  jira-evidence EV-123 EV-456 EV-789
"""


def _load_config(
    config_path: Path | None, id_regex: str | None, output_file: str | None
) -> EvidenceConfig:
    file_settings = load_config_file(config_path) if config_path is not None else None
    return EvidenceConfig.from_env(
        id_regex=id_regex,
        output_file=output_file,
        file_settings=file_settings,
    )


def run_direct(config: EvidenceConfig, ticket_ids: list[str]) -> None:
    """Fetch the given tickets and print compact JSON to stdout."""
    with JiraClient.from_config(config) as client:
        envelope = fetch_ticket_details(client, ticket_ids)
    click.echo(envelope_to_json(envelope, pretty=False), nl=False)


def run_legacy_extract(args: tuple[str, ...]) -> None:
    """Print branch details and comma-separated ids for a commit range."""
    if len(args) < 2:
        click.echo("Usage: jira-evidence --extract-from-git <start_commit> <jira_id_regex>")
        sys.exit(1)

    start_commit, pattern = args[0], args[1]
    reader = GitReader()
    reader.check_repository()
    reader.validate_head()

    info = reader.get_branch_info()
    click.echo(f"BRANCH_NAME: {info.branch}")
    click.echo(f"JIRA ID: {info.current_ticket_id or ''}")
    click.echo(f"START_COMMIT: {info.head_commit}")

    reader.validate_commit(start_commit)

    ticket_ids = extract_identifiers(reader, start_commit, pattern, info.current_ticket_id)
    if not ticket_ids:
        click.echo("No JIRA IDs found")
        sys.exit(0)

    click.echo(",".join(ticket_ids))


def run_pipeline(config: EvidenceConfig, start_commit: str, extract_only: bool) -> None:
    """Extract ids from `start_commit..HEAD`, fetch them and write reports."""
    reader = GitReader()
    reader.check_repository()

    click.echo("=== JIRA Details Fetching Process ===")
    click.echo(f"Start Commit: {start_commit}")
    click.echo(f"JIRA ID Regex: {config.id_regex}")
    click.echo(f"Output File: {config.output_file}")
    click.echo("")

    # Step 1: Extract JIRA IDs from git commits
    click.echo("Step 1: Extracting JIRA IDs from git commits...")
    # Shallow CI checkouts may lack either commit; main() exits 0 for these
    reader.validate_head()
    reader.validate_commit(start_commit)

    info = reader.get_branch_info(DEFAULT_ID_REGEX)
    click.echo(f"Branch: {info.branch}")
    click.echo(f"Latest Commit: {info.head_commit}")

    ticket_ids = extract_identifiers(
        reader, start_commit, config.id_regex, info.current_ticket_id
    )
    if not ticket_ids:
        click.echo("No JIRA IDs found in commit range")
        sys.exit(0)

    click.echo(f"Found JIRA IDs: {', '.join(ticket_ids)}")

    if extract_only:
        click.echo(",".join(ticket_ids))
        return

    # Step 2: Fetch JIRA details
    click.echo("")
    click.echo("Step 2: Fetching JIRA details...")
    with JiraClient.from_config(config) as client:
        envelope = fetch_ticket_details(client, ticket_ids)

    # Step 3: Write results to file
    click.echo("")
    click.echo("Step 3: Writing results...")
    output_path = write_json_report(envelope, config.output_file)
    click.echo(f"JIRA data saved to: {output_path}")

    # Step 4: Generate markdown report if requested
    if config.attach_markdown:
        click.echo("Step 4: Generating markdown report...")
        try:
            markdown_path = write_markdown_report(envelope, output_path)
            click.echo(f"Markdown report saved to: {markdown_path}")
        except ReportError as e:
            click.echo(f"Warning: Failed to generate markdown report: {e}", err=True)
    else:
        click.echo(
            "Step 4: Skipping markdown report generation "
            "(ATTACH_OPTIONAL_CUSTOM_MARKDOWN_TO_EVIDENCE != 'true')"
        )

    click.echo("")
    click.echo("=== Process completed successfully ===")


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.argument("args", nargs=-1)
@click.option(
    "-r",
    "--regex",
    "id_regex",
    default=None,
    help="JIRA ID regex pattern (default: '[A-Z]+-[0-9]+')",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    default=None,
    help="Output file for JIRA data (default: transformed_jira_data.json)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with id_regex, output_file and attach_markdown settings",
)
@click.option(
    "--extract-only",
    is_flag=True,
    help="Only extract JIRA IDs, don't fetch details",
)
@click.option(
    "--extract-from-git",
    is_flag=True,
    help="Extract JIRA IDs from git commits (legacy mode: START_COMMIT REGEX)",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    args: tuple[str, ...],
    id_regex: str | None,
    output_file: str | None,
    config_path: Path | None,
    extract_only: bool,
    extract_from_git: bool,
    verbose: bool,
) -> None:
    """JIRA Evidence Tool.

    \b
    Usage:
      jira-evidence [OPTIONS] <start_commit>
      jira-evidence <jira_id1> [jira_id2] [jira_id3] ...

    START_COMMIT is excluded from the evidence range; every commit after it up
    to HEAD is scanned for JIRA IDs.
    """
    setup_logging(level="DEBUG" if verbose else None)

    try:
        if extract_from_git:
            run_legacy_extract(args)
            return

        if not args:
            click.echo("Error: start_commit is required")
            click.echo(ctx.get_help())
            sys.exit(1)

        config = _load_config(config_path, id_regex, output_file)
        pattern = compile_pattern(config.id_regex)

        if not extract_only and pattern.search(args[0]):
            run_direct(config, list(args))
            return

        run_pipeline(config, args[0], extract_only)

    except (HeadNotFoundError, CommitNotFoundError) as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(0)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except GitReaderError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ReportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
