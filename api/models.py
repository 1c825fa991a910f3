"""
API request and response models for the Oyou REST endpoints.

These Pydantic v2 models define the HTTP transport contract. The store keeps
documents schemaless, so request models validate the fields the server relies
on (email, role) and let every other field through untouched via
extra="allow". Response models for write acknowledgements use the camelCase
field names clients already parse (insertedId, deletedCount, displayLink).
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import ROLE_ADMIN, ROLE_USER

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# One "@" with non-whitespace on each side; deliverability is not checked.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class RoleEnum(str, Enum):
    user = ROLE_USER
    admin = ROLE_ADMIN


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class UserCreate(BaseModel):
    """Request body for POST /user. Extra profile fields are stored as-is."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    email: str = Field(min_length=3, max_length=320, pattern=EMAIL_PATTERN)
    role: RoleEnum = RoleEnum.user


class ViewCreate(BaseModel):
    """Request body for POST /view. Extra event fields are stored as-is."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    email: str = Field(min_length=3, max_length=320, pattern=EMAIL_PATTERN)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TokenResponse(BaseModel):
    """Response for POST /jwt."""

    model_config = ConfigDict(frozen=True)

    token: str


class AdminStatusResponse(BaseModel):
    """Response for GET /user/admin/{email}."""

    model_config = ConfigDict(frozen=True)

    admin: bool


class InsertResponse(BaseModel):
    """Store acknowledgement for POST /user and POST /view."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    acknowledged: bool = True
    inserted_id: Optional[str] = Field(alias="insertedId")


class DeleteResponse(BaseModel):
    """Store acknowledgement for DELETE /user/{id} and DELETE /view/{id}."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    acknowledged: bool = True
    deleted_count: int = Field(alias="deletedCount")


class SearchResultResponse(BaseModel):
    """One item of the GET /search response array."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: Optional[str] = None
    link: Optional[str] = None
    snippet: Optional[str] = None
    display_link: Optional[str] = Field(default=None, alias="displayLink")
    image: Optional[str] = None


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
