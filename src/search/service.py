"""Web and social trend search via Tavily."""

import logging

from src.config.settings import get_settings
from src.providers.http import post_json, require_key
from src.search.schemas import SearchHit, TrendSearchRequest, TrendSearchResult

logger = logging.getLogger(__name__)


async def search_trends(req: TrendSearchRequest) -> TrendSearchResult:
    settings = get_settings()
    api_key = require_key(settings.TAVILY_API_KEY, "TAVILY_API_KEY")
    logger.info("Searching for %r (depth: %s)", req.query, req.search_depth)

    data = await post_json("tavily", f"{settings.TAVILY_URL.rstrip('/')}/search", json={
        "api_key": api_key,
        "query": req.query,
        "search_depth": req.search_depth,
        "include_answer": True,
        "include_raw_content": False,
        "max_results": req.max_results,
        "include_images": False,
    })

    hits = [
        SearchHit(
            title=r.get("title") or "",
            url=r.get("url") or "",
            content=r.get("content") or "",
            score=r.get("score"),
        )
        for r in data.get("results") or []
    ]
    logger.info("Found %d results", len(hits))
    return TrendSearchResult(
        answer=data.get("answer"),
        results=hits,
        query=data.get("query") or req.query,
        follow_up_questions=data.get("follow_up_questions") or [],
    )
