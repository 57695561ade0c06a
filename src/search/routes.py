"""Edge function: trend-search."""

from fastapi import APIRouter, Depends, Request

from src.auth.dependencies import CurrentUser, optional_user
from src.search.schemas import TrendSearchRequest
from src.search.service import search_trends
from src.utils.responses import success

router = APIRouter(prefix="/functions/v1", tags=["Search"])


@router.post("/trend-search", summary="Search trends", description="Search the web and social sources; returns an answer and ranked results.")
async def trend_search(body: TrendSearchRequest, request: Request, user: CurrentUser | None = Depends(optional_user)):
    result = await search_trends(body)
    return success(request, result.model_dump())
