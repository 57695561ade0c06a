"""Pydantic schemas for image generation."""

from pydantic import BaseModel, Field


class GenerateImageRequest(BaseModel):
    prompt: str = Field(min_length=1, max_length=4000)
    style: str | None = Field(None, max_length=200)


class GeneratedImage(BaseModel):
    image: str
    id: str | None = None
    generation_time_ms: int
