"""End-to-end CI run: fetch, filter, generate, comment."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any, Callable, Protocol

from diffsift.config import ActionConfig, ActionInputs
from diffsift.diff.filter import DiffSummary, sift
from diffsift.diff.policy import ExclusionPolicy
from diffsift.errors import ConfigurationError, ContextError, UpstreamServiceError
from diffsift.generation.client import GenerationClient
from diffsift.github.context import PullRequestContext
from diffsift.reporters.comment import CommentReporter

logger = logging.getLogger(__name__)

COMPLETED = "completed"
SKIPPED = "skipped"
FAILED = "failed"


class DiffSource(Protocol):
    def get_pr_diff(self, context: PullRequestContext) -> str:
        ...


class CommentSink(Protocol):
    def create_comment(self, context: PullRequestContext, body: str) -> Any:
        ...


class PullRequestGateway(DiffSource, CommentSink, Protocol):
    """Diff source and comment sink, usually the same GitHub client."""


@dataclass
class RunOutcome:
    """Result of one CI run."""

    status: str
    message: str
    filtered_diff: str = ""

    @property
    def exit_code(self) -> int:
        return 1 if self.status == FAILED else 0


def is_trivial_diff(diff: str) -> bool:
    """True when the filtered diff is too small to send anywhere."""
    return not diff or len(diff) < ActionConfig.MIN_DIFF_LENGTH


def log_diff_info(clean_diff: str, summary: DiffSummary) -> None:
    logger.info("=== FILTERED DIFF ===")
    logger.info("%s", clean_diff)
    logger.info("=== END FILTERED DIFF ===")
    logger.info("Filtered diff length: %d characters", summary.filtered_length)
    logger.info("Original diff length: %d characters", summary.original_length)
    if summary.skipped_files:
        logger.info("Excluded files: %s", ", ".join(summary.skipped_files))


def describe_failure(exc: BaseException) -> str:
    """Render an exception the way the run reports it.

    Errors carrying a ``response`` payload came from an upstream HTTP call and
    are reported with status code and serialized body.
    """
    if isinstance(exc, UpstreamServiceError):
        return f"LLM Server Error: {exc.status_code} - {json.dumps(exc.body, default=str)}"

    response = getattr(exc, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = response.text
        return f"LLM Server Error: {response.status_code} - {json.dumps(body, default=str)}"
    return f"Action Error: {exc}"


def run(
    inputs: ActionInputs,
    context_loader: Callable[[], PullRequestContext],
    gateway_factory: Callable[[str], PullRequestGateway],
    generator_factory: Callable[[ActionInputs], GenerationClient],
) -> RunOutcome:
    """Execute one pull request run and report instead of raising.

    Args:
        inputs: Step inputs.
        context_loader: Returns the pull request under review.
        gateway_factory: Builds the GitHub collaborator from the token.
        generator_factory: Builds the generation collaborator from inputs.

    Returns:
        RunOutcome describing completion, a designed skip, or a failure.
    """
    clean_diff = ""
    try:
        missing = inputs.missing()
        if missing:
            raise ConfigurationError(missing)

        context = context_loader()
        gateway = gateway_factory(inputs.github_token)
        generator = generator_factory(inputs)

        raw_diff = gateway.get_pr_diff(context)
        policy = ExclusionPolicy(exclude_pattern=inputs.exclude_pattern or None)
        clean_diff, summary = sift(raw_diff, policy=policy)

        log_diff_info(clean_diff, summary)

        if is_trivial_diff(clean_diff):
            message = "Diff is empty or only contains excluded files. Skipping."
            logger.info(message)
            return RunOutcome(status=SKIPPED, message=message, filtered_diff=clean_diff)

        generated_code = generator.generate(clean_diff, inputs.model_id)

        if generator.dry_run or generated_code is None:
            logger.info("TEST MODE: Posting test comment to PR...")
            gateway.create_comment(context, CommentReporter.test_run(clean_diff))
            logger.info("Test comment posted successfully!")
        else:
            logger.info("Posting generated test to PR...")
            gateway.create_comment(context, CommentReporter.generated_test(generated_code))

        logger.info("Run complete!")
        return RunOutcome(status=COMPLETED, message="Run complete", filtered_diff=clean_diff)

    except Exception as exc:
        if isinstance(exc, (ConfigurationError, ContextError)):
            message = str(exc)
        else:
            message = describe_failure(exc)
        logger.error(message)
        logger.debug("Run failed", exc_info=True)
        return RunOutcome(status=FAILED, message=message, filtered_diff=clean_diff)
