"""Pull request context for GitHub Actions runs."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from diffsift.errors import ContextError

logger = logging.getLogger(__name__)

NO_PULL_REQUEST_MESSAGE = "No Pull Request found. This action only runs on PRs."


@dataclass(frozen=True)
class PullRequestContext:
    """Repository coordinates of the pull request under review."""

    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def _read_event_payload(event_path: Optional[str]) -> Dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        logger.debug("Event payload %s does not exist", path)
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to parse event payload at %s: %s", path, exc)
        return {}
    return payload if isinstance(payload, dict) else {}


def load_event_context(
    event_path: Optional[str] = None,
    repository: Optional[str] = None,
) -> PullRequestContext:
    """Build the pull request context from the Actions environment.

    Args:
        event_path: Path to the event JSON; defaults to ``GITHUB_EVENT_PATH``.
        repository: ``owner/repo``; defaults to ``GITHUB_REPOSITORY``, then
            to the repository recorded in the event payload.

    Raises:
        ContextError: The event carries no pull request.
    """
    if event_path is None:
        event_path = os.getenv("GITHUB_EVENT_PATH")
    if repository is None:
        repository = os.getenv("GITHUB_REPOSITORY")

    payload = _read_event_payload(event_path)
    pull_request = payload.get("pull_request")
    if not isinstance(pull_request, dict) or "number" not in pull_request:
        raise ContextError(NO_PULL_REQUEST_MESSAGE)

    if not repository:
        repository = (payload.get("repository") or {}).get("full_name")
    if not repository or "/" not in repository:
        raise ContextError(f"Cannot determine repository for pull request (got {repository!r})")

    owner, repo = repository.split("/", 1)
    return PullRequestContext(owner=owner, repo=repo, number=int(pull_request["number"]))
