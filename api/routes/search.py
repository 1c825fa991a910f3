"""
api/routes/search.py -- Web search proxy.

Routes:
  GET /search?q=<text>  -- reduced results from the search provider

400 when q is missing or blank. Any provider failure is logged and reported
as a single 500 -- no retry, no partial results.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from api.limiter import limiter, search_rate_limit
from api.models import SearchResultResponse
from core import search as search_client
from core.context import AppContext, get_context

logger = logging.getLogger("oyou.api.search")

router = APIRouter()


@limiter.limit(search_rate_limit)
@router.get("/search", response_model=list[SearchResultResponse])
def search(
    request: Request,
    q: Optional[str] = None,
    ctx: AppContext = Depends(get_context),
) -> list[SearchResultResponse]:
    if not q or not q.strip():
        raise HTTPException(
            status_code=400,
            detail={"code": "bad_request", "message": "Query parameter missing."},
        )

    settings = ctx.settings
    try:
        results = search_client.search_web(
            q,
            settings.google_api_key,
            settings.google_cse_id,
            timeout=settings.search_timeout_seconds,
        )
    except search_client.SearchError as exc:
        logger.error("Search API error for %r: %s", q, exc)
        raise HTTPException(
            status_code=500,
            detail={"code": "search_failed", "message": "Failed to fetch search results."},
        ) from exc

    return [
        SearchResultResponse(
            title=r.title,
            link=r.link,
            snippet=r.snippet,
            display_link=r.display_link,
            image=r.image,
        )
        for r in results
    ]
