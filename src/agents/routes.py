"""Edge functions: reasoning-agent, creative-agent, multi-agent-orchestrator."""

from fastapi import APIRouter, Depends, Request

from src.agents.orchestrator import orchestrate
from src.agents.schemas import OrchestrationRequest
from src.agents.service import run_creative, run_reasoning
from src.auth.dependencies import CurrentUser, optional_user
from src.chat.schemas import AgentRequest
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Agents"])


@router.post("/reasoning-agent", summary="Reasoning agent", description="Analyse, break down and solve a problem in three steps.")
async def reasoning(body: AgentRequest, request: Request, user: CurrentUser | None = Depends(optional_user)):
    messages = [m.model_dump() for m in body.messages]
    return success(request, await run_reasoning(messages, user.id if user else None))


@router.post("/creative-agent", summary="Creative agent", description="Answer with a creative collaborator persona.")
async def creative(body: AgentRequest, request: Request, user: CurrentUser | None = Depends(optional_user)):
    messages = [m.model_dump() for m in body.messages]
    return success(request, await run_creative(messages, user.id if user else None))


@router.post("/multi-agent-orchestrator", summary="Multi-agent orchestration", description="Run several agents in parallel and synthesise their answers.")
async def orchestrator(body: OrchestrationRequest, request: Request, user: CurrentUser | None = Depends(optional_user)):
    result = await orchestrate(
        body,
        user_id=user.id if user else None,
        authorization=request.headers.get("Authorization"),
    )
    return success(request, result.model_dump())
