"""Pydantic schemas for chat completions and agent calls."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatCompletionRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)
    model: str | None = None
    system_prompt: str | None = None


class ChatCompletion(BaseModel):
    content: str
    model: str
    used_fallback: bool
    input_tokens: int
    output_tokens: int
    cost_usd: float


class AgentRequest(BaseModel):
    messages: list[ChatMessage] = Field(min_length=1)
    context: dict[str, Any] = Field(default_factory=dict)
