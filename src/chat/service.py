"""Chat completion with Groq as the primary provider and Google AI as fallback."""

import logging
import time

from src.chat.schemas import ChatCompletion
from src.config.settings import get_settings
from src.llm.client import get_llm_client
from src.llm.context import build_context
from src.llm.prompts import build_system_prompt
from src.llm.token_counter import count_messages_tokens, count_tokens
from src.observations.repository import record_observation_quietly
from src.utils.cost_tracker import log_cost
from src.utils.errors import EdgeFunctionError, ErrorCode
from src.utils.fallback import execute_with_fallback

logger = logging.getLogger(__name__)


async def _generate(provider: str, context: list[dict], model: str) -> dict:
    try:
        return await get_llm_client(provider).generate(context, model)
    except EdgeFunctionError:
        raise
    except Exception as exc:
        logger.warning("%s chat call failed: %s", provider, exc)
        raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, f"{provider} chat request failed") from exc


async def complete(
    messages: list[dict],
    *,
    model: str | None = None,
    system_prompt: str | None = None,
    user_id: str | None = None,
) -> ChatCompletion:
    settings = get_settings()
    primary_model = model or settings.DEFAULT_MODEL
    context = build_context(messages, build_system_prompt(system_prompt))

    async def primary() -> dict:
        return await _generate("groq", context, primary_model)

    async def fallback() -> dict:
        return await _generate("google", context, settings.FALLBACK_MODEL)

    start = time.time()
    outcome = await execute_with_fallback(primary, fallback, task="chat-completion")
    latency_ms = int((time.time() - start) * 1000)

    result = outcome.result
    active_model = settings.FALLBACK_MODEL if outcome.used_fallback else primary_model
    input_tokens = result.get("input_tokens") or count_messages_tokens(context)
    output_tokens = result.get("output_tokens") or count_tokens(result["content"])
    cost = log_cost(input_tokens, output_tokens, active_model)

    if user_id:
        record_observation_quietly(
            user_id, "chat", active_model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
            cost_usd=cost,
            metadata={"used_fallback": outcome.used_fallback, "finish_reason": result.get("finish_reason", "stop")},
        )

    return ChatCompletion(
        content=result["content"],
        model=active_model,
        used_fallback=outcome.used_fallback,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cost_usd=cost,
    )
