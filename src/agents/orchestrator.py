"""Parallel fan-out to agent functions followed by one synthesis call.

Agents are reached over HTTP, like any other client would reach them, and run
concurrently. An agent that fails is reported under `failed_agents` and left
out of the synthesis prompt. If no agent succeeds the synthesis call is
skipped and the orchestration fails.
"""

import asyncio
import logging
import time

from src.agents.schemas import AgentOutcome, OrchestrationRequest, OrchestrationResult
from src.config.settings import get_settings
from src.db.models import AGENT_COLLABORATIONS, EVOLUTION_LOGS
from src.llm.client import get_llm_client
from src.llm.prompts import build_synthesis_prompt
from src.observations.repository import insert_row
from src.providers.http import post_json
from src.utils.errors import EdgeFunctionError, ErrorCode

logger = logging.getLogger(__name__)

# Which field of each agent's payload carries its answer
AGENT_TEXT_FIELDS = {
    "reasoning": "solution",
    "creative": "content",
}


async def call_agent(agent: str, task: str, session_id: str | None, authorization: str | None) -> AgentOutcome:
    settings = get_settings()
    url = f"{settings.FUNCTIONS_BASE_URL.rstrip('/')}/{agent}-agent"
    headers = {"Authorization": authorization} if authorization else None
    body = {
        "messages": [{"role": "user", "content": task}],
        "context": {"collaboration": True, "session_id": session_id},
    }
    try:
        payload = await post_json(f"{agent}-agent", url, json=body, headers=headers)
    except EdgeFunctionError as exc:
        logger.error("Error calling %s-agent: %s", agent, exc.message)
        return AgentOutcome(agent=agent, error=exc.message)

    data = payload.get("data") if isinstance(payload, dict) else None
    text = data.get(AGENT_TEXT_FIELDS[agent]) if isinstance(data, dict) else None
    if not text:
        return AgentOutcome(agent=agent, response=data, error="Agent returned no content")
    return AgentOutcome(agent=agent, text=text, response=data)


def _record_collaboration(user_id: str, req: OrchestrationRequest, result: OrchestrationResult) -> None:
    try:
        insert_row(AGENT_COLLABORATIONS, {
            "user_id": user_id,
            "session_id": req.session_id,
            "agents_involved": req.requested_agents,
            "task_description": req.task,
            "collaboration_type": "parallel_synthesis",
            "synthesis_result": {
                "individual_responses": result.individual_responses,
                "failed_agents": result.failed_agents,
                "synthesized": result.synthesized,
            },
            "duration_ms": result.duration_ms,
        })
        insert_row(EVOLUTION_LOGS, {
            "user_id": user_id,
            "log_type": "multi_agent_collaboration",
            "description": f"Multi-agent collaboration: {', '.join(req.requested_agents)}",
            "metadata": {"agents": req.requested_agents, "duration": result.duration_ms, "task": req.task[:100]},
        })
    except Exception:
        logger.exception("Failed to record collaboration for user %s", user_id)


async def orchestrate(
    req: OrchestrationRequest,
    *,
    user_id: str | None = None,
    authorization: str | None = None,
) -> OrchestrationResult:
    start = time.time()
    logger.info("Starting multi-agent orchestration: agents=%s task=%s", req.requested_agents, req.task[:100])

    outcomes = await asyncio.gather(*(
        call_agent(agent, req.task, req.session_id, authorization) for agent in req.requested_agents
    ))
    succeeded = {o.agent: o.text for o in outcomes if o.ok}
    failed = {o.agent: o.error for o in outcomes if not o.ok}
    logger.info("Agent responses collected: ok=%d failed=%d", len(succeeded), len(failed))

    if not succeeded:
        raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, "All agents failed")

    settings = get_settings()
    synthesis = await get_llm_client("gateway").generate(
        [{"role": "user", "content": build_synthesis_prompt(req.task, succeeded)}],
        settings.GATEWAY_TEXT_MODEL,
    )

    result = OrchestrationResult(
        synthesized=synthesis["content"],
        individual_responses={o.agent: o.response for o in outcomes if o.ok},
        failed_agents=failed,
        agents_involved=list(req.requested_agents),
        duration_ms=int((time.time() - start) * 1000),
    )
    if user_id:
        _record_collaboration(user_id, req, result)

    logger.info("Multi-agent collaboration completed in %dms", result.duration_ms)
    return result
