"""
api/limiter.py -- Shared slowapi rate limiter instance.

Import this in api/main.py (to mount as middleware) and in the route modules
that apply per-route limits with @limiter.limit().

A single shared instance keeps every route on the same in-memory counter
store. Limit strings are read from Settings at request time so they can be
tuned per deployment without code changes.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import get_settings

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def token_rate_limit() -> str:
    return get_settings().token_rate_limit


def search_rate_limit() -> str:
    return get_settings().search_rate_limit
