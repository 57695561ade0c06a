"""Auth dependencies for FastAPI route injection."""

import logging
from dataclasses import dataclass

from fastapi import Request

from src.db.client import get_supabase
from src.utils.errors import EdgeFunctionError, ErrorCode

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    id: str
    email: str
    access_token: str


def extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:].strip() or None
    return None


def _verify(token: str) -> CurrentUser:
    """Exchange a bearer token for a verified identity via the auth service."""
    try:
        response = get_supabase().auth.get_user(token)
    except Exception:
        logger.info("Auth service rejected bearer token")
        raise EdgeFunctionError(ErrorCode.UNAUTHORIZED, "Authentication required.")

    user = getattr(response, "user", None)
    if user is None:
        raise EdgeFunctionError(ErrorCode.UNAUTHORIZED, "Authentication required.")
    return CurrentUser(id=user.id, email=getattr(user, "email", None) or "", access_token=token)


async def require_user(request: Request) -> CurrentUser:
    """FastAPI dependency: a verified user or a 401 before anything else runs."""
    if not request.headers.get("Authorization"):
        raise EdgeFunctionError(ErrorCode.MISSING_AUTH_HEADER, "Authorization header is missing.")

    token = extract_bearer_token(request)
    if not token:
        raise EdgeFunctionError(ErrorCode.UNAUTHORIZED, "Authentication required.")
    user = _verify(token)
    request.state.user_id = user.id
    return user


async def optional_user(request: Request) -> CurrentUser | None:
    """FastAPI dependency: a verified user, or None for anonymous callers."""
    token = extract_bearer_token(request)
    if not token:
        return None
    try:
        user = _verify(token)
    except EdgeFunctionError:
        return None
    request.state.user_id = user.id
    return user
