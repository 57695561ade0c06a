"""In-memory sliding window rate limiter keyed by caller identity."""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.auth.dependencies import extract_bearer_token
from src.auth.jwt import extract_user_id
from src.config.settings import get_settings
from src.middleware.error_handler import error_response
from src.utils.errors import ErrorCode

FUNCTIONS_PREFIX = "/functions/v1/"

# Past this many tracked identities, idle ones are swept on the next request
MAX_TRACKED_IDENTITIES = 10000

# Functions that call a paid provider use the stricter AI limit
AI_FUNCTIONS = {
    "generate-image",
    "text-to-voice",
    "huggingface-inference",
    "chat-completion",
    "reasoning-agent",
    "creative-agent",
    "multi-agent-orchestrator",
    "trend-search",
}


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class RateLimiterMiddleware(BaseHTTPMiddleware):
    def __init__(self, app):
        super().__init__(app)
        # identity -> list of request timestamps
        self._standard_windows: dict[str, list[float]] = {}
        self._ai_windows: dict[str, list[float]] = {}

    def _function_name(self, path: str) -> str | None:
        if not path.startswith(FUNCTIONS_PREFIX):
            return None
        return path[len(FUNCTIONS_PREFIX):].strip("/") or None

    def _identity(self, request: Request) -> str:
        user_id = extract_user_id(extract_bearer_token(request))
        if user_id:
            return f"user:{user_id}"
        return f"ip:{client_ip(request)}"

    def _trimmed(self, windows: dict[str, list[float]], identity: str, cutoff: float) -> list[float]:
        """Drop expired entries; identities with an empty window are forgotten."""
        window = [t for t in windows.get(identity, ()) if t >= cutoff]
        if window:
            windows[identity] = window
        else:
            windows.pop(identity, None)
        return window

    def _sweep(self, windows: dict[str, list[float]], cutoff: float) -> None:
        if len(windows) <= MAX_TRACKED_IDENTITIES:
            return
        for identity in [i for i, w in windows.items() if not w or w[-1] < cutoff]:
            del windows[identity]

    def _reject(self, request: Request, message: str, retry_after: int) -> Response:
        request_id = getattr(request.state, "request_id", "unknown")
        return error_response(429, ErrorCode.RATE_LIMIT_EXCEEDED, message, request_id, retry_after)

    async def dispatch(self, request: Request, call_next) -> Response:
        name = self._function_name(request.url.path)
        if name is None or request.method != "POST":
            return await call_next(request)

        settings = get_settings()
        identity = self._identity(request)
        now = time.time()
        cutoff = now - 60.0

        # Check every tier before consuming a slot in any of them
        tiers = [(self._standard_windows, settings.RATE_LIMIT_STANDARD, "Rate limit exceeded")]
        if name in AI_FUNCTIONS:
            tiers.insert(0, (self._ai_windows, settings.RATE_LIMIT_AI, "AI generation rate limit exceeded"))

        for windows, limit, message in tiers:
            window = self._trimmed(windows, identity, cutoff)
            if len(window) >= limit:
                return self._reject(request, message, int(window[0] - cutoff) + 1)

        for windows, _, _ in tiers:
            self._sweep(windows, cutoff)
            windows.setdefault(identity, []).append(now)

        return await call_next(request)
