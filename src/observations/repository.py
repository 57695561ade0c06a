"""Analytics writes: LLM observations and audit rows."""

import logging
from typing import Any

from src.db.client import get_supabase
from src.db.models import LLM_OBSERVATIONS

logger = logging.getLogger(__name__)


def insert_row(table: str, row: dict[str, Any]) -> dict | None:
    """Insert one analytics row. Returns the stored row, or None if the store returned nothing."""
    db = get_supabase()
    result = db.table(table).insert(row).execute()
    return result.data[0] if result.data else None


def record_observation(
    user_id: str,
    agent_type: str,
    model: str,
    *,
    input_tokens: int = 0,
    output_tokens: int = 0,
    latency_ms: int = 0,
    cost_usd: float = 0.0,
    metadata: dict[str, Any] | None = None,
) -> dict | None:
    return insert_row(LLM_OBSERVATIONS, {
        "user_id": user_id,
        "agent_type": agent_type,
        "model": model,
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "latency_ms": latency_ms,
        "cost_usd": cost_usd,
        "metadata": metadata or {},
    })


def record_observation_quietly(user_id: str, agent_type: str, model: str, **fields: Any) -> None:
    """Best-effort analytics: a failed write is logged and does not fail the request."""
    try:
        record_observation(user_id, agent_type, model, **fields)
    except Exception:
        logger.exception("Failed to record %s observation for user %s", agent_type, user_id)
