"""Async SDK for invoking edge functions."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from src.utils.errors import ErrorCode, code_for_status

logger = logging.getLogger(__name__)


class FunctionError(Exception):
    def __init__(self, code: ErrorCode, message: str, status: int | None = None, retry_after: int | None = None):
        self.code = code
        self.message = message
        self.status = status
        self.retry_after = retry_after
        super().__init__(message)


@dataclass(frozen=True)
class InvokeResult:
    """Either `data` or `error` is set, never both."""

    data: Any = None
    error: FunctionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.data


def _parse_error(response: httpx.Response) -> FunctionError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    try:
        code = ErrorCode(body.get("code"))
    except ValueError:
        code = code_for_status(response.status_code)
    message = body.get("error") if isinstance(body.get("error"), str) else response.reason_phrase
    return FunctionError(code, message or "Request failed", response.status_code, body.get("retry_after"))


class FunctionsClient:
    def __init__(self, base_url: str, access_token: str | None = None, http: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self._http = http or httpx.AsyncClient(timeout=60.0)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def invoke(self, name: str, body: dict[str, Any]) -> InvokeResult:
        url = f"{self.base_url}/{name}"
        try:
            response = await self._http.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("Invoking %s failed: %s", name, exc)
            return InvokeResult(error=FunctionError(ErrorCode.UPSTREAM_ERROR, f"Could not reach {name}: {exc}"))

        if response.is_error:
            return InvokeResult(error=_parse_error(response))
        try:
            payload = response.json()
        except ValueError:
            return InvokeResult(error=FunctionError(ErrorCode.UPSTREAM_ERROR, f"{name} returned invalid JSON", response.status_code))
        return InvokeResult(data=payload.get("data") if isinstance(payload, dict) else payload)

    async def aclose(self) -> None:
        await self._http.aclose()
