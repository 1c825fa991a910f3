from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass
class SearchResult:
    """One web search hit, reduced to the fields the client renders.

    Transient -- built per request from the provider response, never stored.
    """

    title: Optional[str] = None
    link: Optional[str] = None
    snippet: Optional[str] = None
    display_link: Optional[str] = None
    image: Optional[str] = None
