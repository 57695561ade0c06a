"""Pydantic schemas for speech synthesis."""

from pydantic import BaseModel, Field


class TextToVoiceRequest(BaseModel):
    text: str = Field(min_length=1, max_length=5000)
    voice: str | None = None
