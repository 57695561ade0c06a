"""Success envelope shared by every edge function."""

from typing import Any

from fastapi import Request
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    status: str = "success"
    data: Any
    request_id: str


def success(request: Request, data: Any) -> SuccessResponse:
    return SuccessResponse(data=data, request_id=getattr(request.state, "request_id", "unknown"))
