"""Clients for the external code-generation service."""

from diffsift.generation.client import (
    DryRunGenerationClient,
    GenerationClient,
    HttpGenerationClient,
)
from diffsift.generation.models import GenerationRequest, GenerationResponse

__all__ = [
    "DryRunGenerationClient",
    "GenerationClient",
    "HttpGenerationClient",
    "GenerationRequest",
    "GenerationResponse",
]
