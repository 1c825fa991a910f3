"""
auth/tokens.py -- Credential issuing and verification.

Security design decisions:
  JWT: python-jose with HS256. A credential carries whatever claims the client
       submitted to POST /jwt plus iat/exp set here. Nothing about it is
       persisted -- validity is purely the signature and the expiry.

  Verification never raises. verify_token() returns a TokenResult that is
       either a success holding the decoded claims or a failure naming why
       (missing, invalid, expired). The dependency layer consumes the result
       before anything else runs and turns any failure into a 401.

  Secrets are passed in by the caller (from AppContext.settings) rather than
       read from a module global, so tests and alternate apps can sign with
       their own key.

Layer rule: no imports from api/ or store/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger("oyou.auth")

ALGORITHM = "HS256"

_RESERVED_CLAIMS = ("exp", "iat")

# Client claims are opaque: only the signature and the validity window are checked.
_DECODE_OPTIONS = {"verify_aud": False, "verify_iss": False, "verify_sub": False, "verify_jti": False}


class TokenError(str, Enum):
    missing = "missing"
    invalid = "invalid"
    expired = "expired"


@dataclass(frozen=True)
class TokenResult:
    """Outcome of verifying a bearer credential.

    Exactly one of claims / error is set. Check ``ok`` before reading claims.
    """

    claims: dict[str, Any] = field(default_factory=dict)
    error: TokenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, claims: dict[str, Any]) -> TokenResult:
        return cls(claims=claims)

    @classmethod
    def failure(cls, error: TokenError) -> TokenResult:
        return cls(error=error)


# ---------------------------------------------------------------------------
# Issue / verify
# ---------------------------------------------------------------------------


def issue_token(claims: dict[str, Any], secret: str, expire_seconds: int = 3600) -> str:
    """Sign the submitted claims into a credential valid for expire_seconds.

    The payload shape is not validated; every field becomes a claim. Any
    exp/iat the client sent is overwritten so the validity window is always
    the server's.
    """
    now = datetime.now(timezone.utc)
    payload = {k: v for k, v in claims.items() if k not in _RESERVED_CLAIMS}
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=expire_seconds)
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str | None, secret: str) -> TokenResult:
    """Check signature and expiry. Returns a TokenResult, never raises."""
    if not token:
        return TokenResult.failure(TokenError.missing)
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM], options=_DECODE_OPTIONS)
    except ExpiredSignatureError:
        return TokenResult.failure(TokenError.expired)
    except JWTError as e:
        logger.debug("rejected credential: %s", e)
        return TokenResult.failure(TokenError.invalid)
    return TokenResult.success(claims)


def bearer_token(authorization: str | None) -> str | None:
    """Extract <token> from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
