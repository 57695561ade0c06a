"""Error codes shared by the edge functions and the client SDK."""

from enum import Enum


class ErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    MISSING_AUTH_HEADER = "MISSING_AUTH_HEADER"
    FORBIDDEN = "FORBIDDEN"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_FIELD = "MISSING_FIELD"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYMENT_REQUIRED = "PAYMENT_REQUIRED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.MISSING_AUTH_HEADER: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.MISSING_FIELD: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.PAYMENT_REQUIRED: 402,
    ErrorCode.RATE_LIMIT_EXCEEDED: 429,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
}

CODE_BY_STATUS: dict[int, ErrorCode] = {
    400: ErrorCode.INVALID_INPUT,
    401: ErrorCode.UNAUTHORIZED,
    402: ErrorCode.PAYMENT_REQUIRED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.INVALID_INPUT,
    429: ErrorCode.RATE_LIMIT_EXCEEDED,
    502: ErrorCode.UPSTREAM_ERROR,
    503: ErrorCode.UPSTREAM_ERROR,
    504: ErrorCode.UPSTREAM_ERROR,
}


def code_for_status(status: int) -> ErrorCode:
    return CODE_BY_STATUS.get(status, ErrorCode.INTERNAL_ERROR)


class EdgeFunctionError(Exception):
    """An expected failure that maps onto a JSON error envelope."""

    def __init__(self, code: ErrorCode, message: str | None = None, retry_after: int | None = None):
        self.code = code
        self.message = message or code.value.replace("_", " ").capitalize()
        self.retry_after = retry_after
        super().__init__(self.message)

    @property
    def status(self) -> int:
        return STATUS_BY_CODE[self.code]


class ProviderError(EdgeFunctionError):
    """A third-party AI provider answered with a non-2xx status."""

    def __init__(self, provider: str, status: int, message: str | None = None):
        self.provider = provider
        self.upstream_status = status
        if status == 429:
            code, text, retry = ErrorCode.RATE_LIMIT_EXCEEDED, "Rate limit exceeded. Please try again later.", 60
        elif status == 402:
            code, text, retry = ErrorCode.PAYMENT_REQUIRED, "Insufficient credits. Please upgrade your plan.", None
        else:
            code, text, retry = ErrorCode.UPSTREAM_ERROR, f"{provider} request failed with status {status}", None
        super().__init__(code, message or text, retry_after=retry)
