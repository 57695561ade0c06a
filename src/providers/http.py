"""Shared async HTTP client for third-party AI providers.

Calls are made once: there is no retry or backoff, a failed provider call
surfaces to the caller immediately.
"""

import logging
from typing import Any

import httpx

from src.config.settings import get_settings
from src.utils.errors import EdgeFunctionError, ErrorCode, ProviderError

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=get_settings().PROVIDER_TIMEOUT_SECONDS)
    return _http_client


def require_key(value: str, name: str) -> str:
    if not value:
        raise EdgeFunctionError(ErrorCode.CONFIGURATION_ERROR, f"{name} not configured")
    return value


async def post(
    provider: str,
    url: str,
    *,
    json: Any,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """POST to a provider and return the response, raising ProviderError on non-2xx."""
    client = get_http_client()
    try:
        response = await client.post(url, json=json, headers=headers)
    except httpx.TimeoutException:
        logger.warning("%s request timed out: %s", provider, url)
        raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, f"{provider} request timed out")
    except httpx.HTTPError as exc:
        logger.warning("%s request failed: %s", provider, exc)
        raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, f"{provider} is unreachable")

    if response.is_error:
        logger.error("%s API error: status=%d body=%s", provider, response.status_code, response.text[:500])
        raise ProviderError(provider, response.status_code)
    return response


async def post_json(provider: str, url: str, *, json: Any, headers: dict[str, str] | None = None) -> Any:
    response = await post(provider, url, json=json, headers=headers)
    try:
        return response.json()
    except ValueError:
        raise EdgeFunctionError(ErrorCode.UPSTREAM_ERROR, f"{provider} returned invalid JSON")
