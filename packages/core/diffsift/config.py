"""Configuration management for DiffSift"""

import os
from dataclasses import dataclass
from typing import List, Optional


class ActionConfig:
    """Constants governing a single CI run"""

    # Filtered diffs shorter than this are not worth a model call
    MIN_DIFF_LENGTH = 10

    # Comment bodies carry at most this much of the filtered diff
    COMMENT_PREVIEW_LIMIT = 5000
    TRUNCATION_NOTICE = "\n\n... (truncated, see logs for full diff)"

    # How much of the diff the dry-run client echoes to the log
    LOG_PREVIEW_LIMIT = 500

    GENERATION_PORT = 8000
    GENERATION_PATH = "/generate-test"
    GENERATION_TIMEOUT_SECONDS = 60

    DEFAULT_GITHUB_API_URL = "https://api.github.com"
    GITHUB_TIMEOUT_SECONDS = 30

    @classmethod
    def get_github_api_url(cls) -> str:
        """
        Get the GitHub REST API base URL.

        GitHub Enterprise runners export GITHUB_API_URL; public runners
        export the default value, so the fallback only matters locally.
        """
        return os.getenv("GITHUB_API_URL", cls.DEFAULT_GITHUB_API_URL).rstrip("/")


@dataclass
class ActionInputs:
    """Inputs supplied to the CI step"""

    github_token: Optional[str] = None
    api_key: Optional[str] = None
    host: Optional[str] = None
    model_id: Optional[str] = None
    exclude_pattern: Optional[str] = None
    dry_run: bool = True

    def missing(self) -> List[str]:
        """Return the names of required inputs that were not provided, in declaration order"""
        required = (
            ("github-token", self.github_token),
            ("llm-api-key", self.api_key),
            ("llm-host", self.host),
            ("model-id", self.model_id),
        )
        return [name for name, value in required if not value]

    @property
    def endpoint(self) -> str:
        return f"http://{self.host}:{ActionConfig.GENERATION_PORT}{ActionConfig.GENERATION_PATH}"
