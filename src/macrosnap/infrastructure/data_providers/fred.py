"""FRED (Federal Reserve Economic Data) economic series provider implementation."""

from __future__ import annotations

from datetime import date
from typing import Any

import structlog

from macrosnap.domain.models.macro import TimePoint, to_decimal
from macrosnap.domain.ports.data_providers import EconomicSeriesProvider
from macrosnap.infrastructure.analysis.series import normalize_series
from macrosnap.infrastructure.http_client import JsonFetcher

logger = structlog.get_logger(__name__)

# FRED reports a missing observation as a literal "."
MISSING_OBSERVATION = "."


class FredMacroeconomicProvider(EconomicSeriesProvider):
    """FRED implementation of EconomicSeriesProvider."""

    def __init__(
        self,
        api_key: str | None,
        fetcher: JsonFetcher,
        base_url: str = "https://api.stlouisfed.org/fred",
    ) -> None:
        self._api_key = api_key
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "fred"

    async def get_series(self, series_id: str, limit: int = 80) -> list[TimePoint] | None:
        if not self._api_key:
            logger.info(
                "FRED API key not configured; skipping series",
                series_id=series_id,
                hint="Set MACROSNAP_FRED_API_KEY in your .env file",
            )
            return None

        params: dict[str, Any] = {
            "series_id": series_id,
            "sort_order": "desc",
            "limit": limit,
            "file_type": "json",
            "api_key": self._api_key,
        }
        payload = await self._fetcher.get_json(
            f"{self._base_url}/series/observations", f"FRED {series_id}", params=params
        )
        if not isinstance(payload, dict):
            return None

        observations = payload.get("observations")
        if not isinstance(observations, list):
            logger.warning("FRED response has no observations", series_id=series_id)
            return None

        points: list[TimePoint] = []
        for obs in observations:
            if not isinstance(obs, dict):
                continue
            date_str = obs.get("date")
            value_str = obs.get("value")
            if not date_str or value_str is None or value_str == MISSING_OBSERVATION:
                continue
            val = to_decimal(value_str)
            if val is None:
                continue
            try:
                obs_date = date.fromisoformat(str(date_str)[:10])
            except ValueError:
                continue
            points.append(TimePoint(date=obs_date, value=val))

        # Observations arrive newest first
        points.reverse()
        series = normalize_series(points, limit)
        if not series:
            logger.warning("FRED series has no usable observations", series_id=series_id)
            return None
        return series
