"""Minimal GitHub REST client for fetching PR diffs and posting comments."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from diffsift.config import ActionConfig
from diffsift.github.context import PullRequestContext

logger = logging.getLogger(__name__)


class GitHubClient:
    """GitHub API client authenticated with an Actions token."""

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = ActionConfig.GITHUB_TIMEOUT_SECONDS,
    ):
        self.api_url = (api_url or ActionConfig.get_github_api_url()).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github.v3+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def get_pr_diff(self, context: PullRequestContext) -> str:
        """Get the complete PR diff in unified format.

        Args:
            context: Pull request to fetch.

        Returns:
            Raw unified diff text.
        """
        logger.info("Fetching PR diff...")
        url = f"{self.api_url}/repos/{context.full_name}/pulls/{context.number}"
        headers = dict(self.headers)
        headers["Accept"] = "application/vnd.github.diff"

        response = self.session.get(url, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    def create_comment(self, context: PullRequestContext, body: str) -> Dict[str, Any]:
        """Post ``body`` as an issue comment on the pull request."""
        url = f"{self.api_url}/repos/{context.full_name}/issues/{context.number}/comments"
        response = self.session.post(
            url, headers=self.headers, json={"body": body}, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()
