"""Spot price providers for precious metals (and bitcoin on goldapi.io)."""

from __future__ import annotations

from decimal import Decimal

import structlog

from macrosnap.domain.ports.data_providers import MetalSpotProvider
from macrosnap.infrastructure.data_providers.fields import FieldPath, first_positive
from macrosnap.infrastructure.http_client import JsonFetcher

logger = structlog.get_logger(__name__)


class GoldApiProvider(MetalSpotProvider):
    """goldapi.io spot prices (XAU, XAG, BTC), authenticated with an access token."""

    # Tried in order; older API revisions only expose ask/bid
    PRICE_FIELDS: tuple[FieldPath, ...] = (("price",), ("ask",), ("bid",))
    SYMBOLS = {"gold": "XAU", "silver": "XAG", "bitcoin": "BTC"}

    def __init__(
        self,
        api_key: str | None,
        fetcher: JsonFetcher,
        base_url: str = "https://www.goldapi.io/api",
    ) -> None:
        self._api_key = api_key
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "goldapi"

    def symbol_for(self, asset: str) -> str:
        return self.SYMBOLS.get(asset, asset)

    async def get_spot(self, symbol: str) -> Decimal | None:
        if not self._api_key:
            logger.info(
                "GoldAPI key not configured; skipping spot price",
                symbol=symbol,
                hint="Set MACROSNAP_GOLDAPI_API_KEY in your .env file",
            )
            return None

        payload = await self._fetcher.get_json(
            f"{self._base_url}/{symbol}/USD",
            f"GoldAPI {symbol}",
            headers={"x-access-token": self._api_key, "Content-Type": "application/json"},
        )
        price = first_positive(payload, self.PRICE_FIELDS)
        if payload is not None and price is None:
            logger.warning("GoldAPI response has no positive price", symbol=symbol)
        return price


class GoldApiComProvider(MetalSpotProvider):
    """api.gold-api.com spot prices; unauthenticated, used as a secondary metals source."""

    PRICE_FIELDS: tuple[FieldPath, ...] = (("price",), ("value",))
    SYMBOLS = {"gold": "XAU", "silver": "XAG"}

    def __init__(self, fetcher: JsonFetcher, base_url: str = "https://api.gold-api.com") -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "gold_api_com"

    def symbol_for(self, asset: str) -> str:
        return self.SYMBOLS.get(asset, asset)

    async def get_spot(self, symbol: str) -> Decimal | None:
        payload = await self._fetcher.get_json(
            f"{self._base_url}/price/{symbol}", f"gold-api.com {symbol}"
        )
        price = first_positive(payload, self.PRICE_FIELDS)
        if payload is not None and price is None:
            logger.warning("gold-api.com response has no positive price", symbol=symbol)
        return price
