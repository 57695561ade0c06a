"""Sliding window context management for chat calls."""

from src.db.models import ROLE_SYSTEM
from src.llm.token_counter import count_tokens

# Default token budget (conservative for smaller models)
DEFAULT_MAX_TOKENS = 6000


def build_context(
    conversation_messages: list[dict],
    system_prompt: str,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> list[dict]:
    """Build a message list that fits within the token budget.

    Strategy: always include system prompt + first message + as many
    recent messages as fit within the remaining budget. System messages in
    the incoming history are dropped in favour of `system_prompt`.
    """
    system_msg = {"role": ROLE_SYSTEM, "content": system_prompt}
    system_tokens = count_tokens(system_prompt) + 4

    history = [
        {"role": m["role"], "content": m["content"]}
        for m in conversation_messages
        if m["role"] != ROLE_SYSTEM
    ]
    if not history:
        return [system_msg]

    budget = max_tokens - system_tokens

    first_msg = history[0]
    first_tokens = count_tokens(first_msg["content"]) + 4

    # Build from the end (most recent messages first)
    recent: list[dict] = []
    used = 0

    for entry in reversed(history[1:]):
        msg_tokens = count_tokens(entry["content"]) + 4
        if used + msg_tokens + first_tokens > budget:
            break
        recent.insert(0, entry)
        used += msg_tokens

    if first_tokens <= budget - used:
        return [system_msg, first_msg] + recent
    return [system_msg] + recent
