"""
auth/dependencies.py -- FastAPI Depends() guards for protected routes.

Two guards, always applied in this order:
  1. verify_token  -- reads ``Authorization: Bearer <token>``, verifies it, and
                      attaches the decoded claims to request.state.claims.
                      Any failure is HTTP 401. No store access.
  2. verify_admin  -- depends on verify_token, then re-reads the caller's user
                      document by the email claim. HTTP 403 unless that
                      document exists and its role is "admin". The role is
                      never taken from the credential, so demotions apply on
                      the very next request.

Layer rule: no imports from api/. auth/dependencies.py may import from fastapi
because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, HTTPException, Request

from auth import tokens
from auth.tokens import TokenError
from core.context import AppContext, get_context
from core.models import ROLE_ADMIN

logger = logging.getLogger("oyou.auth")

_UNAUTHORIZED_MESSAGES = {
    TokenError.missing: "Authentication required.",
    TokenError.invalid: "Invalid credential.",
    TokenError.expired: "Credential expired.",
}


def verify_token(request: Request, ctx: AppContext = Depends(get_context)) -> dict[str, Any]:
    """Require a valid bearer credential. Raises HTTP 401 otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(claims: dict = Depends(verify_token)): ...
    """
    token = tokens.bearer_token(request.headers.get("Authorization"))
    result = tokens.verify_token(token, ctx.settings.access_token_secret)
    if not result.ok:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": _UNAUTHORIZED_MESSAGES[result.error]},
        )
    request.state.claims = result.claims
    return result.claims


def verify_admin(
    claims: dict[str, Any] = Depends(verify_token),
    ctx: AppContext = Depends(get_context),
) -> dict[str, Any]:
    """Require the caller's stored user document to carry the admin role.

    Raises HTTP 401 via verify_token if unauthenticated, HTTP 403 if the
    caller has no user document or is not an admin. Returns the claims
    unchanged on success.
    """
    email = claims.get("email")
    user = ctx.store.users.find_one_by_email(email) if isinstance(email, str) else None
    if user is None or user.get("role") != ROLE_ADMIN:
        logger.info("admin check refused for %r", email)
        raise HTTPException(
            status_code=403,
            detail={"code": "forbidden", "message": "Admin access required."},
        )
    return claims
