"""Pydantic schemas for observation tracking."""

from typing import Any

from pydantic import BaseModel, Field


class TrackObservationRequest(BaseModel):
    agent_type: str = Field(min_length=1)
    model: str = Field(min_length=1)
    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)
    latency_ms: int = Field(0, ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
