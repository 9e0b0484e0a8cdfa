"""Generation service collaborators.

The HTTP client talks to the real service; the dry-run client only logs
what would have been sent, which is what CI runs use until the service is
switched on.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import requests
from pydantic import ValidationError

from diffsift.config import ActionConfig
from diffsift.errors import UpstreamServiceError
from diffsift.generation.models import GenerationRequest, GenerationResponse

logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    dry_run: bool

    def generate(self, diff: str, model_id: str) -> Optional[str]:
        ...


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpGenerationClient:
    """Sends filtered diffs to the generation endpoint."""

    dry_run = False

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: int = ActionConfig.GENERATION_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, diff: str, model_id: str) -> Optional[str]:
        """
        POST the diff and return the generated code

        Raises:
            UpstreamServiceError: The service answered with a non-2xx status
                or a body without ``generated_code``.
        """
        logger.info("Sending filtered diff to %s...", self.endpoint)
        payload = GenerationRequest(diff=diff, model_id=model_id)
        response = self.session.post(
            self.endpoint,
            json=payload.model_dump(),
            headers={"X-API-KEY": self.api_key},
            timeout=self.timeout,
        )
        if not response.ok:
            raise UpstreamServiceError(response.status_code, _response_body(response), response)

        try:
            result = GenerationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.debug("Unexpected generation response: %s", exc)
            raise UpstreamServiceError(
                response.status_code, _response_body(response), response
            ) from exc
        return result.generated_code


class DryRunGenerationClient:
    """Stand-in used while the generation call is disabled."""

    dry_run = True

    def __init__(self, endpoint: str, preview_limit: int = ActionConfig.LOG_PREVIEW_LIMIT):
        self.endpoint = endpoint
        self.preview_limit = preview_limit

    def generate(self, diff: str, model_id: str) -> Optional[str]:
        logger.info("TEST MODE: Skipping API call")
        logger.info("Would send to %s with model_id: %s", self.endpoint, model_id)
        logger.info(
            "Would send diff (first %d chars): %s...", self.preview_limit, diff[: self.preview_limit]
        )
        return None
