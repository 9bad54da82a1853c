"""Unit tests for spot price providers."""

from __future__ import annotations

from decimal import Decimal

import httpx
import pytest

from macrosnap.infrastructure.data_providers.coincap import CoinCapProvider
from macrosnap.infrastructure.data_providers.goldapi import GoldApiComProvider, GoldApiProvider


@pytest.mark.unit
class TestGoldApiProvider:
    async def test_get_spot_reads_price_with_token(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/XAU/USD"
            assert request.headers["x-access-token"] == "gold-key"
            return httpx.Response(200, json={"metal": "XAU", "currency": "USD", "price": 2345.67})

        provider = GoldApiProvider(api_key="gold-key", fetcher=make_fetcher(handler))
        assert await provider.get_spot("XAU") == Decimal("2345.67")

    async def test_get_spot_falls_back_to_alternate_field(self, make_fetcher) -> None:
        payload = {"metal": "XAG", "ask": 29.5, "bid": 29.4}
        provider = GoldApiProvider(
            api_key="gold-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json=payload)),
        )
        assert await provider.get_spot("XAG") == Decimal("29.5")

    async def test_get_spot_skips_non_positive_candidates(self, make_fetcher) -> None:
        payload = {"price": 0, "ask": "n/a", "bid": 29.4}
        provider = GoldApiProvider(
            api_key="gold-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json=payload)),
        )
        assert await provider.get_spot("XAG") == Decimal("29.4")

    async def test_get_spot_without_usable_field_is_absent(self, make_fetcher) -> None:
        provider = GoldApiProvider(
            api_key="gold-key",
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"metal": "XAU"})),
        )
        assert await provider.get_spot("XAU") is None

    async def test_error_payload_is_absent(self, make_fetcher) -> None:
        provider = GoldApiProvider(
            api_key="gold-key",
            fetcher=make_fetcher(
                lambda request: httpx.Response(200, json={"error": "Invalid API Key"})
            ),
        )
        assert await provider.get_spot("XAU") is None

    async def test_get_metal_pair_requires_both_metals(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if "XAU" in request.url.path:
                return httpx.Response(200, json={"price": 2345.0})
            return httpx.Response(503)

        provider = GoldApiProvider(api_key="gold-key", fetcher=make_fetcher(handler))
        assert await provider.get_metal_pair() is None

    async def test_get_metal_pair_returns_gold_then_silver(self, make_fetcher) -> None:
        prices = {"/api/XAU/USD": 2345.0, "/api/XAG/USD": 29.25}
        provider = GoldApiProvider(
            api_key="gold-key",
            fetcher=make_fetcher(
                lambda request: httpx.Response(200, json={"price": prices[request.url.path]})
            ),
        )
        assert await provider.get_metal_pair() == (Decimal("2345.0"), Decimal("29.25"))

    def test_symbol_mapping(self, make_fetcher) -> None:
        provider = GoldApiProvider(api_key="k", fetcher=make_fetcher(lambda r: httpx.Response(200)))
        assert provider.symbol_for("bitcoin") == "BTC"
        assert provider.symbol_for("gold") == "XAU"


@pytest.mark.unit
class TestGoldApiComProvider:
    async def test_get_spot_is_unauthenticated(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/price/XAU"
            assert "x-access-token" not in request.headers
            return httpx.Response(200, json={"name": "Gold", "price": 2340.1, "symbol": "XAU"})

        provider = GoldApiComProvider(fetcher=make_fetcher(handler))
        assert await provider.get_spot("XAU") == Decimal("2340.1")


@pytest.mark.unit
class TestCoinCapSpot:
    async def test_get_spot_reads_nested_price(self, make_fetcher) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v2/assets/bitcoin"
            return httpx.Response(200, json={"data": {"id": "bitcoin", "priceUsd": "64123.45"}})

        provider = CoinCapProvider(fetcher=make_fetcher(handler))
        assert await provider.get_spot("bitcoin") == Decimal("64123.45")

    async def test_get_spot_alternate_field(self, make_fetcher) -> None:
        provider = CoinCapProvider(
            fetcher=make_fetcher(
                lambda request: httpx.Response(200, json={"data": {"price": "64000"}})
            )
        )
        assert await provider.get_spot("bitcoin") == Decimal("64000")
