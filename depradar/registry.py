"""npm registry search client.

The search proxy renders an HTML page rather than an API document, so the
only signal available is the "N packages found" banner in the body.  That
heuristic is kept in ``classify_search_body`` so it can be replaced without
touching the rest of the pipeline.
"""

from __future__ import annotations

import asyncio
from urllib.parse import quote

import aiohttp

from .config import DEFAULT_NOT_FOUND_MARKER, DEFAULT_REGISTRY_SEARCH_URL
from .models import LookupResult, LookupStatus


def build_search_url(name: str, template: str = DEFAULT_REGISTRY_SEARCH_URL) -> str:
    """Embed a dependency name into the search endpoint template."""
    return template.format(name=quote(name, safe=""))


def classify_search_body(body: str, marker: str = DEFAULT_NOT_FOUND_MARKER) -> LookupStatus:
    """Map a search response body to found / not found."""
    if marker in body:
        return LookupStatus.NOT_FOUND
    return LookupStatus.FOUND


class RegistryClient:
    """Looks up dependency names on the public registry search.

    One request per name, no retries.  Transport errors, timeouts and
    HTTP error statuses all come back as ``LOOKUP_FAILED``.

    Attributes:
        session: Shared ``aiohttp.ClientSession``.
        search_url: Endpoint template with a ``{name}`` placeholder.
        marker: Zero-results marker text.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        search_url: str = DEFAULT_REGISTRY_SEARCH_URL,
        marker: str = DEFAULT_NOT_FOUND_MARKER,
    ):
        self.session = session
        self.search_url = search_url
        self.marker = marker

    async def lookup(self, name: str) -> LookupResult:
        url = build_search_url(name, self.search_url)
        try:
            async with self.session.get(url) as resp:
                resp.raise_for_status()
                body = await resp.text(errors="replace")
        except aiohttp.ClientResponseError as e:
            return LookupResult(LookupStatus.LOOKUP_FAILED, f"HTTP {e.status}")
        except asyncio.TimeoutError:
            return LookupResult(LookupStatus.LOOKUP_FAILED, "request timed out")
        except aiohttp.ClientError as e:
            return LookupResult(LookupStatus.LOOKUP_FAILED, str(e) or type(e).__name__)
        return LookupResult(classify_search_body(body, self.marker))
