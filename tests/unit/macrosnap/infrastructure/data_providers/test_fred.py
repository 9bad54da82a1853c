"""Unit tests for FRED economic series provider."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import httpx
import pytest

from macrosnap.infrastructure.data_providers.fred import FredMacroeconomicProvider


@pytest.mark.unit
class TestFredMacroeconomicProvider:
    async def test_get_series_parses_skips_missing_and_reverses(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/fred/series/observations"
            assert request.url.params["series_id"] == "M2SL"
            assert request.url.params["sort_order"] == "desc"
            assert request.url.params["limit"] == "80"
            assert request.url.params["api_key"] == "test-key"
            payload = {
                "observations": [
                    {"date": "2025-03-01", "value": "21700.1"},
                    {"date": "2025-02-01", "value": "."},
                    {"date": "2025-01-01", "value": "21500.5"},
                ]
            }
            return httpx.Response(200, json=payload)

        provider = FredMacroeconomicProvider(api_key="test-key", fetcher=make_fetcher(handler))
        points = await provider.get_series("M2SL", 80)

        assert points is not None
        assert [p.date for p in points] == [date(2025, 1, 1), date(2025, 3, 1)]
        assert points[0].value == Decimal("21500.5")
        assert points[1].value == Decimal("21700.1")

    async def test_get_series_without_observations_is_absent(self, make_fetcher) -> None:
        provider = FredMacroeconomicProvider(
            api_key="test-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"count": 0})),
        )
        assert await provider.get_series("CPIAUCSL") is None

    async def test_get_series_only_missing_markers_is_absent(self, make_fetcher) -> None:
        payload = {"observations": [{"date": "2025-01-01", "value": "."}]}
        provider = FredMacroeconomicProvider(
            api_key="test-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json=payload)),
        )
        assert await provider.get_series("CSUSHPINSA") is None

    async def test_get_series_error_envelope_is_absent(self, make_fetcher) -> None:
        payload = {"error_code": 400, "error_message": "Bad Request. Variable api_key is not set."}
        provider = FredMacroeconomicProvider(
            api_key="test-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json=payload)),
        )
        assert await provider.get_series("M2SL") is None

    async def test_get_series_requires_api_key(self, make_fetcher) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"observations": []})

        provider = FredMacroeconomicProvider(api_key=None, fetcher=make_fetcher(handler))
        assert await provider.get_series("M2SL") is None
        assert calls == []

    def test_provider_name(self, make_fetcher) -> None:
        provider = FredMacroeconomicProvider(
            api_key="k", fetcher=make_fetcher(lambda r: httpx.Response(200))
        )
        assert provider.get_provider_name() == "fred"
