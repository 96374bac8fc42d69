"""Manifest fetching and decoding.

A manifest is any JSON document with optional ``dependencies`` and
``devDependencies`` objects, i.e. an npm ``package.json``.  Decoding is
permissive: missing or malformed sections become empty mappings, and only
a body that is not a JSON object at all is rejected.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp

from .errors import DecodeError, HTTPStatusError, TransportError
from .models import Manifest


def _section(data: dict[str, Any], key: str) -> dict[str, str]:
    raw = data.get(key)
    if not isinstance(raw, dict):
        return {}
    out: dict[str, str] = {}
    for name, version in raw.items():
        if not isinstance(name, str) or not name:
            continue
        out[name] = version if isinstance(version, str) else json.dumps(version)
    return out


def parse_manifest(body: bytes | str, url: str = "") -> Manifest:
    """Decode a manifest body.

    Args:
        body: Raw response body.
        url: Source URL, used in error messages.

    Returns:
        ``Manifest`` with both dependency sections (possibly empty).

    Raises:
        DecodeError: if the body is not JSON, or is JSON but not an object.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError(url, f"failed to parse JSON: {e}") from e

    if data is None:
        return Manifest()
    if not isinstance(data, dict):
        raise DecodeError(url, f"expected a JSON object, got {type(data).__name__}")

    return Manifest(
        dependencies=_section(data, "dependencies"),
        dev_dependencies=_section(data, "devDependencies"),
    )


class ManifestFetcher:
    """Downloads and decodes manifests with the shared HTTP session."""

    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    async def fetch(self, url: str) -> Manifest:
        """Fetch one manifest.

        Raises:
            TransportError: if the request could not be completed.
            HTTPStatusError: if the status is not 200.
            DecodeError: if the body is not a manifest.
        """
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    raise HTTPStatusError(url, resp.status)
                body = await resp.read()
        except asyncio.TimeoutError as e:
            raise TransportError(url, "request timed out") from e
        except (aiohttp.ClientError, ValueError) as e:
            # aiohttp.InvalidURL is both; empty lines from stdin land here
            raise TransportError(url, str(e) or type(e).__name__) from e

        return parse_manifest(body, url)
