"""Edge function: track-llm-observation."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, require_user
from src.observations import repository
from src.observations.schemas import TrackObservationRequest
from src.utils.cost_tracker import log_cost
from src.utils.errors import EdgeFunctionError, ErrorCode
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Analytics"])


@router.post("/track-llm-observation", summary="Record an LLM call", description="Store token usage, latency and estimated cost for one model call.")
async def track_llm_observation(body: TrackObservationRequest, request: Request, user: CurrentUser = Depends(require_user)):
    cost = log_cost(body.input_tokens, body.output_tokens, body.model)
    row = repository.record_observation(
        user.id, body.agent_type, body.model,
        input_tokens=body.input_tokens,
        output_tokens=body.output_tokens,
        latency_ms=body.latency_ms,
        cost_usd=cost,
        metadata=body.metadata,
    )
    if row is None:
        raise EdgeFunctionError(ErrorCode.INTERNAL_ERROR, "Failed to store observation")
    return success(request, row)
