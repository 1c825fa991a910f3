"""
api/routes/views.py -- Page view event endpoints.

Routes:
  GET    /view          -- every view event
  GET    /view/{email}  -- every view event owned by email ([] when none)
  POST   /view          -- insert a view event
  DELETE /view/{id}     -- delete by _id; unknown ids report deletedCount 0

Mirrors the user endpoints: one store operation per handler, results relayed
verbatim. All routes are public.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from api.models import DeleteResponse, InsertResponse, ViewCreate
from core.context import AppContext, get_context

router = APIRouter()


@router.get("/view")
def list_views(ctx: AppContext = Depends(get_context)) -> list[dict[str, Any]]:
    return ctx.store.views.find_all()


@router.get("/view/{email}")
def list_views_for_email(email: str, ctx: AppContext = Depends(get_context)) -> list[dict[str, Any]]:
    return ctx.store.views.find_by_email(email)


@router.post("/view", response_model=InsertResponse)
def create_view(body: ViewCreate, ctx: AppContext = Depends(get_context)) -> InsertResponse:
    result = ctx.store.views.insert_one(body.model_dump(mode="json"))
    return InsertResponse(acknowledged=result.acknowledged, inserted_id=result.inserted_id)


@router.delete("/view/{view_id}", response_model=DeleteResponse)
def delete_view(view_id: str, ctx: AppContext = Depends(get_context)) -> DeleteResponse:
    result = ctx.store.views.delete_one(view_id)
    return DeleteResponse(acknowledged=result.acknowledged, deleted_count=result.deleted_count)
