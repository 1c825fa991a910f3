"""
api/routes/users.py -- User document endpoints.

Routes:
  GET    /user                -- every user (requires credential)
  GET    /user/email/{email}  -- user by email, or null
  GET    /user/admin/{email}  -- {admin: bool} for the caller (admin + self only)
  GET    /user/{id}           -- user by _id, or null
  POST   /user                -- insert; 409 if the email is already registered
  DELETE /user/{id}           -- delete by _id; unknown ids report deletedCount 0

Each handler runs exactly one store operation and relays its result. Absence
is null, not 404. The literal /user/email and /user/admin paths are
registered before /user/{id} so they are never read as ids.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError

from api.models import AdminStatusResponse, DeleteResponse, InsertResponse, UserCreate
from auth.dependencies import verify_admin, verify_token
from core.context import AppContext, get_context
from core.models import ROLE_ADMIN

# Auth policy:
# - GET /user:                requires credential (verify_token)
# - GET /user/admin/{email}:  requires credential + admin role + path email == claim email
# - everything else:          public
router = APIRouter()


@router.get("/user")
def list_users(
    claims: dict[str, Any] = Depends(verify_token),
    ctx: AppContext = Depends(get_context),
) -> list[dict[str, Any]]:
    return ctx.store.users.find_all()


@router.get("/user/email/{email}")
def get_user_by_email(email: str, ctx: AppContext = Depends(get_context)) -> Optional[dict[str, Any]]:
    return ctx.store.users.find_one_by_email(email)


@router.get("/user/admin/{email}", response_model=AdminStatusResponse)
def get_admin_status(
    email: str,
    claims: dict[str, Any] = Depends(verify_admin),
    ctx: AppContext = Depends(get_context),
) -> AdminStatusResponse:
    """Report whether the caller is an admin.

    A caller may only ask about themselves: the path email must equal the
    credential's email claim, whatever the caller's role.
    """
    if email != claims.get("email"):
        raise HTTPException(
            status_code=403,
            detail={"code": "forbidden", "message": "You may only query your own admin status."},
        )
    user = ctx.store.users.find_one_by_email(email)
    return AdminStatusResponse(admin=user is not None and user.get("role") == ROLE_ADMIN)


@router.get("/user/{user_id}")
def get_user(user_id: str, ctx: AppContext = Depends(get_context)) -> Optional[dict[str, Any]]:
    return ctx.store.users.find_one_by_id(user_id)


@router.post("/user", response_model=InsertResponse)
def create_user(body: UserCreate, ctx: AppContext = Depends(get_context)) -> InsertResponse:
    try:
        result = ctx.store.users.insert_one(body.model_dump(mode="json"))
    except IntegrityError as exc:
        raise HTTPException(
            status_code=409,
            detail={"code": "conflict", "message": "A user with that email already exists."},
        ) from exc
    return InsertResponse(acknowledged=result.acknowledged, inserted_id=result.inserted_id)


@router.delete("/user/{user_id}", response_model=DeleteResponse)
def delete_user(user_id: str, ctx: AppContext = Depends(get_context)) -> DeleteResponse:
    result = ctx.store.users.delete_one(user_id)
    return DeleteResponse(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
