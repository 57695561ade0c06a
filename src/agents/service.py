"""Single-agent runners backed by the AI gateway."""

import logging

from src.config.settings import get_settings
from src.db.models import ROLE_SYSTEM, ROLE_USER
from src.llm.client import get_llm_client
from src.llm.prompts import (
    CREATIVE_SYSTEM_PROMPT,
    REASONING_ANALYSIS_PROMPT,
    REASONING_BREAKDOWN_PROMPT,
    REASONING_SOLUTION_PROMPT,
)
from src.observations.repository import record_observation_quietly

logger = logging.getLogger(__name__)


def _last_user_content(messages: list[dict]) -> str:
    for msg in reversed(messages):
        if msg["role"] == ROLE_USER:
            return msg["content"]
    return messages[-1]["content"]


async def _ask(prompt: str, model: str) -> dict:
    return await get_llm_client("gateway").generate([{"role": ROLE_USER, "content": prompt}], model)


async def run_reasoning(messages: list[dict], user_id: str | None = None) -> dict:
    """Analysis, breakdown and solution as three sequential calls."""
    model = get_settings().GATEWAY_TEXT_MODEL
    problem = _last_user_content(messages)

    analysis = await _ask(REASONING_ANALYSIS_PROMPT.format(problem=problem), model)
    breakdown = await _ask(REASONING_BREAKDOWN_PROMPT.format(analysis=analysis["content"]), model)
    solution = await _ask(REASONING_SOLUTION_PROMPT.format(breakdown=breakdown["content"]), model)

    if user_id:
        record_observation_quietly(
            user_id, "reasoning", model,
            input_tokens=sum(r["input_tokens"] for r in (analysis, breakdown, solution)),
            output_tokens=sum(r["output_tokens"] for r in (analysis, breakdown, solution)),
        )

    return {
        "steps": [
            {"step": 1, "type": "analysis", "content": analysis["content"]},
            {"step": 2, "type": "breakdown", "content": breakdown["content"]},
            {"step": 3, "type": "solution", "content": solution["content"]},
        ],
        "solution": solution["content"],
    }


async def run_creative(messages: list[dict], user_id: str | None = None) -> dict:
    model = get_settings().GATEWAY_TEXT_MODEL
    conversation = [{"role": ROLE_SYSTEM, "content": CREATIVE_SYSTEM_PROMPT}]
    conversation += [m for m in messages if m["role"] != ROLE_SYSTEM]
    result = await get_llm_client("gateway").generate(conversation, model)

    if user_id:
        record_observation_quietly(
            user_id, "creative", model,
            input_tokens=result["input_tokens"],
            output_tokens=result["output_tokens"],
        )
    return {"content": result["content"]}
