"""Run a unit of AI work on a preferred path, substituting an alternate path on failure.

Two zero-argument async producers are given. The primary runs first; if it
raises for any reason the fallback runs and its result is returned together
with a flag saying the fallback was used. If the fallback raises too, that
exception propagates unmodified. There is no retry, no timeout and no
cancellation: a primary that never completes blocks the caller.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HybridState(str, Enum):
    ATTEMPTING_PRIMARY = "attempting_primary"
    ATTEMPTING_FALLBACK = "attempting_fallback"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FallbackOutcome(Generic[T]):
    result: T
    used_server: bool

    @property
    def used_fallback(self) -> bool:
        return self.used_server


async def execute_with_fallback(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[], Awaitable[T]],
    *,
    task: str | None = None,
    on_fallback: Callable[[BaseException], None] | None = None,
    on_state: Callable[[HybridState], None] | None = None,
) -> FallbackOutcome[T]:
    def transition(state: HybridState) -> None:
        if on_state is not None:
            on_state(state)

    label = task or "task"
    transition(HybridState.ATTEMPTING_PRIMARY)
    try:
        result = await primary()
    except Exception as exc:
        logger.warning("Primary path failed for %s, falling back: %s", label, exc)
        if on_fallback is not None:
            on_fallback(exc)
    else:
        transition(HybridState.SUCCEEDED)
        return FallbackOutcome(result=result, used_server=False)

    transition(HybridState.ATTEMPTING_FALLBACK)
    try:
        result = await fallback()
    except Exception:
        transition(HybridState.FAILED)
        raise
    transition(HybridState.SUCCEEDED)
    return FallbackOutcome(result=result, used_server=True)
