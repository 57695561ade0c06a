"""Per-call cost estimates for observations and logs."""

import logging

logger = logging.getLogger(__name__)

# Approximate USD per 1K tokens, keyed by the model id as sent to the provider
MODEL_PRICING: dict[str, dict[str, float]] = {
    # Groq (primary chat)
    "llama-3.1-8b-instant": {"input": 0.00005, "output": 0.00008},
    "llama-3.3-70b-versatile": {"input": 0.00059, "output": 0.00079},
    # Google AI (fallback chat)
    "gemini-1.5-flash": {"input": 0.000075, "output": 0.0003},
    "gemini-1.5-pro": {"input": 0.00125, "output": 0.005},
    # AI gateway (agents, synthesis, images)
    "google/gemini-2.5-flash": {"input": 0.0003, "output": 0.0025},
    "google/gemini-2.5-flash-image": {"input": 0.0003, "output": 0.03},
}

DEFAULT_PRICING = {"input": 0.0005, "output": 0.001}


def pricing_for(model: str) -> dict[str, float]:
    return MODEL_PRICING.get(model, DEFAULT_PRICING)


def estimate_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    pricing = pricing_for(model)
    return round(input_tokens * pricing["input"] / 1000 + output_tokens * pricing["output"] / 1000, 8)


def log_cost(input_tokens: int, output_tokens: int, model: str) -> float:
    """Estimate the cost of one call, log it, and return it for storage."""
    cost = estimate_cost(input_tokens, output_tokens, model)
    if model not in MODEL_PRICING:
        logger.debug("No pricing for %s, using default rates", model)
    logger.info("LLM cost: model=%s tokens=%d/%d cost=$%.6f", model, input_tokens, output_tokens, cost)
    return cost
