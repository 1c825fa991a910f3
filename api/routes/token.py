"""
api/routes/token.py -- Credential issuing endpoint.

Routes:
  POST /jwt  -- sign the submitted identity payload; returns {token}

The payload is any JSON object and is embedded as claims without shape
checks. The endpoint is public by nature (it is how a client obtains a
credential), so it is rate-limited per client address instead.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from api.limiter import limiter, token_rate_limit
from api.models import TokenResponse
from auth.tokens import issue_token
from core.context import AppContext, get_context

logger = logging.getLogger("oyou.api.token")

router = APIRouter()


@limiter.limit(token_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/jwt", response_model=TokenResponse)
def create_token(
    request: Request,
    claims: dict[str, Any] = Body(...),
    ctx: AppContext = Depends(get_context),
) -> TokenResponse:
    """Issue a credential valid for TOKEN_EXPIRE_SECONDS (one hour by default)."""
    token = issue_token(
        claims,
        ctx.settings.access_token_secret,
        expire_seconds=ctx.settings.token_expire_seconds,
    )
    logger.info("issued credential for %r", claims.get("email"))
    return TokenResponse(token=token)
