"""Global exception handler: maps exceptions to `{error, code, request_id}` JSON envelopes."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.responses import JSONResponse

from src.utils.errors import EdgeFunctionError, ErrorCode, code_for_status

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_response(
    status: int,
    code: ErrorCode,
    message: str,
    request_id: str,
    retry_after: int | None = None,
) -> JSONResponse:
    content = {"error": message, "code": code.value, "request_id": request_id}
    headers = {"X-Request-ID": request_id}
    if retry_after is not None:
        content["retry_after"] = retry_after
        headers["Retry-After"] = str(retry_after)
    if code is ErrorCode.PAYMENT_REQUIRED:
        content["upgrade_url"] = "/pricing"
    return JSONResponse(status_code=status, content=content, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(EdgeFunctionError)
    async def edge_function_error(request: Request, exc: EdgeFunctionError):
        if exc.status >= 500:
            logger.error("%s on %s: %s", exc.code.value, request.url.path, exc.message)
        else:
            logger.info("%s on %s: %s", exc.code.value, request.url.path, exc.message)
        return error_response(exc.status, exc.code, exc.message, _request_id(request), exc.retry_after)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return error_response(400, ErrorCode.INVALID_INPUT, messages, _request_id(request))

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return error_response(exc.status_code, code_for_status(exc.status_code), str(exc.detail), _request_id(request))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return error_response(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred", _request_id(request))
