"""Tests for the primary/fallback selector."""

import asyncio

import pytest

from src.utils.fallback import HybridState, execute_with_fallback


class Producer:
    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def run(primary, fallback, **kwargs):
    return asyncio.run(execute_with_fallback(primary, fallback, **kwargs))


def test_primary_success_never_touches_fallback():
    primary, fallback = Producer("local"), Producer("server")

    outcome = run(primary, fallback)

    assert outcome.result == "local"
    assert outcome.used_server is False
    assert primary.calls == 1
    assert fallback.calls == 0


def test_primary_failure_uses_fallback_once():
    primary, fallback = Producer(error=RuntimeError("no gpu")), Producer("server")
    seen = []

    outcome = run(primary, fallback, on_fallback=seen.append)

    assert outcome.result == "server"
    assert outcome.used_server is True
    assert outcome.used_fallback is True
    assert primary.calls == 1
    assert fallback.calls == 1
    assert [str(e) for e in seen] == ["no gpu"]


def test_fallback_error_propagates_unchanged():
    fallback_error = ValueError("server down")
    primary, fallback = Producer(error=RuntimeError("no gpu")), Producer(error=fallback_error)

    with pytest.raises(ValueError) as info:
        run(primary, fallback)

    assert info.value is fallback_error
    assert primary.calls == 1
    assert fallback.calls == 1


def test_falsy_result_is_still_success():
    primary, fallback = Producer(""), Producer("server")

    outcome = run(primary, fallback)

    assert outcome.result == ""
    assert fallback.calls == 0


def test_state_transitions():
    states = []
    run(Producer(error=RuntimeError("x")), Producer("ok"), on_state=states.append)
    assert states == [HybridState.ATTEMPTING_PRIMARY, HybridState.ATTEMPTING_FALLBACK, HybridState.SUCCEEDED]

    states.clear()
    with pytest.raises(RuntimeError):
        run(Producer(error=RuntimeError("x")), Producer(error=RuntimeError("y")), on_state=states.append)
    assert states[-1] == HybridState.FAILED
