"""Pydantic schemas for the multi-agent orchestrator."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

AgentName = Literal["reasoning", "creative"]


class OrchestrationRequest(BaseModel):
    task: str = Field(min_length=1, max_length=8000)
    session_id: str | None = None
    requested_agents: list[AgentName] = Field(default_factory=lambda: ["reasoning", "creative"], min_length=1)

    @field_validator("requested_agents")
    @classmethod
    def _dedupe(cls, agents: list[str]) -> list[str]:
        return list(dict.fromkeys(agents))


class AgentOutcome(BaseModel):
    agent: str
    text: str | None = None
    response: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OrchestrationResult(BaseModel):
    synthesized: str
    individual_responses: dict[str, Any]
    failed_agents: dict[str, str]
    agents_involved: list[str]
    duration_ms: int
