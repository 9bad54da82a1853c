"""Shared fixtures for macrosnap unit tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from macrosnap.infrastructure.http_client import JsonFetcher

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_fetcher() -> Callable[[Handler], JsonFetcher]:
    """Build a JsonFetcher whose requests are answered by ``handler``."""

    def _make(handler: Handler) -> JsonFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return JsonFetcher(timeout_seconds=5.0, client=client)

    return _make
