"""Shared fakes for aiohttp sessions."""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest


class AsyncContextManager:
    """Wraps a mock response to support ``async with session.get(url) as resp:``.

    If ``exc`` is given, entering the context raises it instead.
    """

    def __init__(self, mock_resp=None, exc: BaseException | None = None):
        self.mock_resp = mock_resp
        self.exc = exc

    async def __aenter__(self):
        if self.exc is not None:
            raise self.exc
        return self.mock_resp

    async def __aexit__(self, *args):
        pass


def make_response(status: int = 200, body: bytes | str = b"") -> MagicMock:
    raw = body.encode() if isinstance(body, str) else body
    resp = MagicMock()
    resp.status = status
    resp.read = AsyncMock(return_value=raw)
    resp.text = AsyncMock(return_value=raw.decode("utf-8", errors="replace"))
    resp.raise_for_status = MagicMock()
    return resp


class FakeSession:
    """Minimal stand-in for ``aiohttp.ClientSession``.

    ``route`` maps a requested URL to a mock response or an exception.
    """

    def __init__(self, route: Callable[[str], object]):
        self.route = route
        self.requested: list[str] = []

    def get(self, url: str) -> AsyncContextManager:
        self.requested.append(url)
        answer = self.route(url)
        if isinstance(answer, BaseException):
            return AsyncContextManager(exc=answer)
        return AsyncContextManager(answer)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


@pytest.fixture
def response():
    return make_response


@pytest.fixture
def fake_session():
    return FakeSession
