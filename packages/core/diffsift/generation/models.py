"""Pydantic models for the generation service payloads."""

from pydantic import BaseModel, Field


class GenerationRequest(BaseModel):
    diff: str = Field(..., description="Filtered unified diff")
    model_id: str = Field(..., description="Model the service should use")


class GenerationResponse(BaseModel):
    generated_code: str = Field(..., description="Code produced for the diff")
