"""User-facing copy for function errors, keyed by error code."""

from dataclasses import dataclass

from src.client.functions import FunctionError
from src.utils.errors import ErrorCode, code_for_status


@dataclass(frozen=True)
class ErrorCopy:
    title: str
    description: str
    suggestion: str


_GENERIC = ErrorCopy(
    "Something Went Wrong",
    "An unexpected error occurred.",
    "Please try again",
)

COPY: dict[ErrorCode, ErrorCopy] = {
    ErrorCode.RATE_LIMIT_EXCEEDED: ErrorCopy(
        "Too Many Requests",
        "You've made too many requests. Please wait a moment before trying again.",
        "Rate limit resets every minute",
    ),
    ErrorCode.PAYMENT_REQUIRED: ErrorCopy(
        "Payment Required",
        "This feature requires credits. Please add credits to continue.",
        "Visit Settings → Usage to add credits",
    ),
    ErrorCode.UNAUTHORIZED: ErrorCopy(
        "Authentication Required",
        "You need to be signed in to access this feature.",
        "Please sign in to continue",
    ),
    ErrorCode.FORBIDDEN: ErrorCopy(
        "Access Denied",
        "You don't have permission to access this resource.",
        "Contact support if you think this is an error",
    ),
    ErrorCode.INVALID_INPUT: ErrorCopy(
        "Invalid Request",
        "Some of the information sent was not valid.",
        "Check your input and try again",
    ),
    ErrorCode.UPSTREAM_ERROR: ErrorCopy(
        "Service Unavailable",
        "An AI provider did not respond as expected.",
        "Please try again in a few moments",
    ),
    ErrorCode.INTERNAL_ERROR: ErrorCopy(
        "Server Error",
        "Something went wrong on our end. We're working to fix it.",
        "Please try again in a few minutes",
    ),
}
COPY[ErrorCode.MISSING_AUTH_HEADER] = COPY[ErrorCode.UNAUTHORIZED]
COPY[ErrorCode.MISSING_FIELD] = COPY[ErrorCode.INVALID_INPUT]
COPY[ErrorCode.CONFIGURATION_ERROR] = COPY[ErrorCode.INTERNAL_ERROR]


def describe_error(error: FunctionError | ErrorCode | int) -> ErrorCopy:
    """Copy for a FunctionError, an ErrorCode, or a bare HTTP status."""
    if isinstance(error, FunctionError):
        code = error.code
    elif isinstance(error, ErrorCode):
        code = error
    else:
        code = code_for_status(error)
    return COPY.get(code, _GENERIC)
