"""GitHub event context and REST helpers."""

from diffsift.github.client import GitHubClient
from diffsift.github.context import PullRequestContext, load_event_context

__all__ = [
    "GitHubClient",
    "PullRequestContext",
    "load_event_context",
]
