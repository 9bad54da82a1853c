"""CoinCap crypto provider: spot price and monthly-downsampled price history."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

import structlog

from macrosnap.domain.models.macro import TimePoint, to_decimal
from macrosnap.domain.ports.data_providers import CryptoHistoryProvider, SpotPriceProvider
from macrosnap.infrastructure.analysis.series import downsample_monthly
from macrosnap.infrastructure.data_providers.fields import FieldPath, first_positive
from macrosnap.infrastructure.http_client import JsonFetcher

logger = structlog.get_logger(__name__)


def _observation_time(point: dict[str, Any]) -> datetime | None:
    """Timestamp of a history point: epoch milliseconds in ``time``, else ISO ``date``."""
    millis = to_decimal(point.get("time"))
    if millis is not None:
        try:
            return datetime.fromtimestamp(float(millis) / 1000.0, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    raw = point.get("date")
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class CoinCapProvider(CryptoHistoryProvider, SpotPriceProvider):
    """CoinCap v2 implementation (no API key needed)."""

    SPOT_FIELDS: tuple[FieldPath, ...] = (("data", "priceUsd"), ("data", "price"))
    HISTORY_PRICE_FIELDS: tuple[FieldPath, ...] = (("priceUsd",), ("price",))

    def __init__(
        self,
        fetcher: JsonFetcher,
        base_url: str = "https://api.coincap.io/v2",
        history_years: int = 5,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._history_years = history_years

    def get_provider_name(self) -> str:
        return "coincap"

    async def get_spot(self, symbol: str) -> Decimal | None:
        payload = await self._fetcher.get_json(
            f"{self._base_url}/assets/{symbol}", f"CoinCap {symbol} spot"
        )
        price = first_positive(payload, self.SPOT_FIELDS)
        if payload is not None and price is None:
            logger.warning("CoinCap response has no positive price", asset=symbol)
        return price

    async def get_monthly_history(self, asset: str, months: int = 60) -> list[TimePoint] | None:
        end = datetime.now(UTC)
        start = end - timedelta(days=365 * self._history_years)
        # Monthly candles are not offered at this range, so daily points are downsampled
        payload = await self._fetcher.get_json(
            f"{self._base_url}/assets/{asset}/history",
            f"CoinCap {asset} history",
            params={
                "interval": "d1",
                "start": int(start.timestamp() * 1000),
                "end": int(end.timestamp() * 1000),
            },
        )
        if not isinstance(payload, dict):
            return None

        raw_points = payload.get("data")
        if not isinstance(raw_points, list) or not raw_points:
            logger.warning("CoinCap history is empty", asset=asset)
            return None

        observations: list[tuple[datetime, Decimal]] = []
        for point in raw_points:
            if not isinstance(point, dict):
                continue
            price = first_positive(point, self.HISTORY_PRICE_FIELDS)
            timestamp = _observation_time(point)
            if price is None or timestamp is None:
                continue
            observations.append((timestamp, price))

        monthly = downsample_monthly(observations, months)
        if not monthly:
            logger.warning("CoinCap history has no usable points", asset=asset)
            return None
        return monthly
