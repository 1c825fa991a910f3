"""
search.py -- Outbound web search via the Google Custom Search JSON API.

One call per request, no retry, no caching. Any failure on the way (network
error, non-2xx status, body that is not the expected JSON shape) is raised as
SearchError so the route layer can turn it into a single 500 response.
"""

import logging
from typing import Any, Optional

import requests

from core.models import SearchResult

logger = logging.getLogger("oyou.search")

CUSTOM_SEARCH_API = "https://www.googleapis.com/customsearch/v1"

# Module-level session shared across calls for connection pooling.
_session = requests.Session()
_session.max_redirects = 3


class SearchError(Exception):
    """Raised when the search provider cannot produce a usable response."""


def search_web(query: str, api_key: str, engine_id: str, timeout: float = 10.0) -> list[SearchResult]:
    """Run a single search against the provider and return reduced results.

    Args:
        query:     Free-text query, passed through as the ``q`` parameter.
        api_key:   Provider API key (GOOGLE_API_KEY).
        engine_id: Programmable search engine id (GOOGLE_CSE_ID).
        timeout:   Seconds to wait for the provider before giving up.

    Returns an empty list when the provider reports no items.

    Raises:
        SearchError: on transport failure, HTTP error status, or malformed body.
    """
    params = {"key": api_key, "cx": engine_id, "q": query}
    try:
        resp = _session.get(CUSTOM_SEARCH_API, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        raise SearchError(f"search request failed: {e}") from e
    except ValueError as e:
        raise SearchError("search response is not valid JSON") from e

    if not isinstance(data, dict):
        raise SearchError("search response is not a JSON object")
    items = data.get("items") or []
    if not isinstance(items, list):
        raise SearchError("search response 'items' is not a list")

    results = [_to_result(item) for item in items if isinstance(item, dict)]
    logger.debug("search for %r returned %d results", query, len(results))
    return results


def _to_result(item: dict[str, Any]) -> SearchResult:
    """Map one provider item to SearchResult, dropping every other field."""
    return SearchResult(
        title=item.get("title"),
        link=item.get("link"),
        snippet=item.get("snippet"),
        display_link=item.get("displayLink"),
        image=_first_image(item),
    )


def _first_image(item: dict[str, Any]) -> Optional[str]:
    """Return pagemap.cse_image[0].src when present, else None."""
    pagemap = item.get("pagemap")
    if not isinstance(pagemap, dict):
        return None
    images = pagemap.get("cse_image")
    if not isinstance(images, list) or not images or not isinstance(images[0], dict):
        return None
    return images[0].get("src") or None
