"""Main CLI entry point for DiffSift"""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich import box

from diffsift import __version__
from diffsift.action import FAILED, SKIPPED, run as run_action
from diffsift.config import ActionInputs
from diffsift.diff.filter import sift
from diffsift.diff.policy import ExclusionPolicy
from diffsift.generation.client import DryRunGenerationClient, HttpGenerationClient
from diffsift.github.client import GitHubClient
from diffsift.github.context import load_event_context

err_console = Console(stderr=True)


def _configure_logging(debug: bool) -> None:
    """Route package logging through rich on stderr."""
    package_logger = logging.getLogger("diffsift")
    for existing in list(package_logger.handlers):
        if isinstance(existing, RichHandler):
            package_logger.removeHandler(existing)
    handler = RichHandler(console=err_console, show_path=debug, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _build_generator(inputs: ActionInputs):
    if inputs.dry_run:
        return DryRunGenerationClient(inputs.endpoint)
    return HttpGenerationClient(inputs.endpoint, inputs.api_key)


def _display_summary(summary) -> None:
    table = Table(title="Diff Summary", box=box.ROUNDED)
    table.add_column("File", style="cyan")
    table.add_column("Status")
    for path in summary.kept_files:
        table.add_row(escape(path), "[green]kept[/green]")
    for path in summary.skipped_files:
        table.add_row(escape(path), "[dim]excluded[/dim]")
    err_console.print(table)
    err_console.print(
        f"[dim]Original: {summary.original_length} chars, "
        f"filtered: {summary.filtered_length} chars[/dim]"
    )


@click.group()
@click.version_option(version=__version__, prog_name="diffsift")
def cli():
    """
    ✂️ DiffSift - Trim pull-request diffs for code-generation models

    Drops lock files, docs, binaries and excluded paths from a unified diff.
    """
    pass


@cli.command("filter")
@click.argument("diff_file", type=click.File("rb"), default="-")
@click.option("--exclude-pattern", "-e", help="Regex of file paths to drop (searched, not anchored)")
@click.option("--stats", is_flag=True, help="Print a kept/excluded file table to stderr")
@click.option("--debug", is_flag=True, help="Show verbose diagnostic output")
def filter_command(diff_file, exclude_pattern: Optional[str], stats: bool, debug: bool):
    """
    Filter a unified diff read from DIFF_FILE (or stdin).

    Examples:

        git diff main... | diffsift filter

        diffsift filter changes.patch --exclude-pattern '^docs/'
    """
    _configure_logging(debug)
    # Bytes in, so CRLF line endings reach the filter untouched
    raw_diff = diff_file.read().decode("utf-8", errors="replace")
    policy = ExclusionPolicy(exclude_pattern=exclude_pattern or None)
    clean_diff, summary = sift(raw_diff, policy=policy)

    if clean_diff:
        click.echo(clean_diff)
    if stats:
        _display_summary(summary)


@cli.command("run")
@click.option("--github-token", envvar="INPUT_GITHUB-TOKEN", help="Token used to read the PR and comment")
@click.option("--llm-api-key", envvar="INPUT_LLM-API-KEY", help="API key for the generation service")
@click.option("--llm-host", envvar="INPUT_LLM-HOST", help="Host running the generation service")
@click.option("--model-id", envvar="INPUT_MODEL-ID", help="Model identifier passed to the service")
@click.option(
    "--exclude-pattern", envvar="INPUT_EXCLUDE-PATTERN", help="Regex of file paths to drop"
)
@click.option(
    "--send/--dry-run",
    "send",
    default=False,
    help="Call the generation service instead of only logging the request (default: --dry-run)",
)
@click.option("--event-path", envvar="GITHUB_EVENT_PATH", help="GitHub event payload JSON")
@click.option("--repository", envvar="GITHUB_REPOSITORY", help="Repository as owner/repo")
@click.option("--debug", is_flag=True, help="Show verbose diagnostic output")
def run_command(
    github_token: Optional[str],
    llm_api_key: Optional[str],
    llm_host: Optional[str],
    model_id: Optional[str],
    exclude_pattern: Optional[str],
    send: bool,
    event_path: Optional[str],
    repository: Optional[str],
    debug: bool,
):
    """
    Filter the current pull request's diff and comment on it.

    Meant to run as a GitHub Actions step; every input can also be given
    through the matching INPUT_* environment variable.
    """
    _configure_logging(debug)
    inputs = ActionInputs(
        github_token=github_token,
        api_key=llm_api_key,
        host=llm_host,
        model_id=model_id,
        exclude_pattern=exclude_pattern,
        dry_run=not send,
    )

    outcome = run_action(
        inputs,
        context_loader=lambda: load_event_context(event_path, repository),
        gateway_factory=GitHubClient,
        generator_factory=_build_generator,
    )

    if outcome.status == FAILED:
        # Workflow command so the failure shows up as an annotation
        click.echo(f"::error::{outcome.message}")
        err_console.print(f"[bold red]❌ {escape(outcome.message)}[/bold red]")
    elif outcome.status == SKIPPED:
        err_console.print(f"[yellow]{escape(outcome.message)}[/yellow]")
    else:
        err_console.print("[green]✅ Done[/green]")
    sys.exit(outcome.exit_code)


def main():
    cli()


if __name__ == "__main__":
    main()
