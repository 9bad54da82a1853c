"""FX cross-rate providers (rates against USD)."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

import structlog

from macrosnap.domain.models.macro import FxBasket, to_decimal
from macrosnap.domain.ports.data_providers import FxRatesProvider
from macrosnap.infrastructure.http_client import JsonFetcher

logger = structlog.get_logger(__name__)


def _basket_from_rates(
    provider: str,
    raw_rates: Any,
    currencies: tuple[str, ...],
    as_of: date,
) -> FxBasket | None:
    if not isinstance(raw_rates, dict):
        logger.warning("FX response has no rates", provider=provider)
        return None

    rates: dict[str, Decimal] = {}
    missing: list[str] = []
    for code in currencies:
        rate = to_decimal(raw_rates.get(code))
        # Must also convert to a finite, non-zero float
        if rate is None or rate <= 0 or not 0.0 < float(rate) < math.inf:
            missing.append(code)
        else:
            rates[code] = rate

    if missing:
        logger.warning("FX basket incomplete", provider=provider, missing=missing)
        return None
    return FxBasket(rates=rates, as_of=as_of)


class FrankfurterProvider(FxRatesProvider):
    """Frankfurter (ECB reference rates) implementation of FxRatesProvider."""

    def __init__(self, fetcher: JsonFetcher, base_url: str = "https://api.frankfurter.app") -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "frankfurter"

    async def get_rates(self, currencies: tuple[str, ...]) -> FxBasket | None:
        payload = await self._fetcher.get_json(
            f"{self._base_url}/latest",
            "Frankfurter FX",
            params={"from": "USD", "to": ",".join(currencies)},
        )
        if not isinstance(payload, dict):
            return None
        try:
            as_of = date.fromisoformat(str(payload.get("date", ""))[:10])
        except ValueError:
            logger.warning("Frankfurter response has no valid date", raw=payload.get("date"))
            return None
        return _basket_from_rates(self.get_provider_name(), payload.get("rates"), currencies, as_of)


class OpenExchangeRatesProvider(FxRatesProvider):
    """open.er-api.com implementation of FxRatesProvider (no key, daily updates)."""

    def __init__(self, fetcher: JsonFetcher, base_url: str = "https://open.er-api.com/v6") -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")

    def get_provider_name(self) -> str:
        return "open_er_api"

    async def get_rates(self, currencies: tuple[str, ...]) -> FxBasket | None:
        payload = await self._fetcher.get_json(f"{self._base_url}/latest/USD", "open.er-api FX")
        if not isinstance(payload, dict):
            return None
        if payload.get("result") not in (None, "success"):
            logger.warning("open.er-api reported failure", result=payload.get("result"))
            return None

        updated = to_decimal(payload.get("time_last_update_unix"))
        if updated is None:
            logger.warning("open.er-api response has no update time")
            return None
        try:
            as_of = datetime.fromtimestamp(float(updated), tz=UTC).date()
        except (OverflowError, OSError, ValueError):
            logger.warning("open.er-api update time out of range", raw=str(updated))
            return None
        return _basket_from_rates(self.get_provider_name(), payload.get("rates"), currencies, as_of)
