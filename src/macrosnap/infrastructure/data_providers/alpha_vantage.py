"""Alpha Vantage monthly history provider (commodities and economic indicators).

Alpha Vantage answers quota exhaustion with HTTP 200 and a ``Note`` or
``Information`` body; the shared fetcher classifies those as absent.
"""

from __future__ import annotations

from datetime import date

import structlog

from macrosnap.domain.models.macro import TimePoint, to_decimal
from macrosnap.domain.ports.data_providers import MonthlyHistoryProvider
from macrosnap.infrastructure.analysis.series import normalize_series
from macrosnap.infrastructure.http_client import JsonFetcher

logger = structlog.get_logger(__name__)


class AlphaVantageProvider(MonthlyHistoryProvider):
    """Alpha Vantage implementation of MonthlyHistoryProvider."""

    def __init__(
        self,
        api_key: str | None,
        fetcher: JsonFetcher,
        base_url: str = "https://www.alphavantage.co",
    ) -> None:
        self._api_key = api_key
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "alpha_vantage"

    async def get_monthly_series(self, function: str, limit: int) -> list[TimePoint] | None:
        if not self._api_key:
            logger.info(
                "Alpha Vantage API key not configured; skipping series",
                function=function,
                hint="Set MACROSNAP_ALPHA_VANTAGE_API_KEY in your .env file",
            )
            return None

        payload = await self._fetcher.get_json(
            f"{self._base_url}/query",
            f"AV {function}",
            params={"function": function, "interval": "monthly", "apikey": self._api_key},
        )
        if not isinstance(payload, dict):
            return None

        rows = payload.get("data")
        if not isinstance(rows, list):
            logger.warning("Alpha Vantage response has no data", function=function)
            return None

        points: list[TimePoint] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            value = to_decimal(row.get("value"))
            if value is None or value <= 0:
                continue
            try:
                row_date = date.fromisoformat(str(row.get("date", ""))[:10])
            except ValueError:
                continue
            points.append(TimePoint(date=row_date, value=value))

        series = normalize_series(points, limit)
        if not series:
            logger.warning("Alpha Vantage series has no usable points", function=function)
            return None
        return series
