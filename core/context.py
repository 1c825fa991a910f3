"""
core/context.py -- Explicit per-application context handed to every handler.

The store handle and settings live on one AppContext built in the FastAPI
lifespan and stored on app.state.ctx. Handlers and auth dependencies receive
it through Depends(get_context) rather than reaching for module globals, so
tests can swap in an isolated store by installing a different context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Request

from core.config import Settings

if TYPE_CHECKING:
    from store.documents import DocumentStore


@dataclass
class AppContext:
    settings: Settings
    store: DocumentStore


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context installed by the lifespan."""
    return request.app.state.ctx
