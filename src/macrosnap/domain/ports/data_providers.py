"""Data provider interfaces.

Every fetch operation returns a value or ``None``. Providers absorb transport
errors, soft-failure payloads, schema mismatches and empty results at their own
boundary, so callers never need exception handling.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from decimal import Decimal

from macrosnap.domain.models.macro import FxBasket, TimePoint


class DataProvider(ABC):
    """Base interface for all data providers."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Stable provider identifier used in snapshot provenance (e.g. 'fred')."""
        pass


class EconomicSeriesProvider(DataProvider):
    """Provider of economic observation series (money supply, CPI, home prices)."""

    @abstractmethod
    async def get_series(self, series_id: str, limit: int = 80) -> list[TimePoint] | None:
        """Fetch the most recent ``limit`` observations of a series, ascending by date."""
        pass


class MonthlyHistoryProvider(DataProvider):
    """Provider of monthly history series addressed by a function name."""

    @abstractmethod
    async def get_monthly_series(self, function: str, limit: int) -> list[TimePoint] | None:
        """Fetch a monthly series (e.g. 'GOLD', 'CPI'), ascending by date."""
        pass


class SpotPriceProvider(DataProvider):
    """Provider of current spot prices."""

    def symbol_for(self, asset: str) -> str:
        """Provider-specific symbol for a canonical asset name (e.g. 'bitcoin')."""
        return asset

    @abstractmethod
    async def get_spot(self, symbol: str) -> Decimal | None:
        """Fetch the current USD price of ``symbol``; None unless it is positive."""
        pass


class MetalSpotProvider(SpotPriceProvider):
    """Spot provider that quotes both gold and silver."""

    async def get_metal_pair(self) -> tuple[Decimal, Decimal] | None:
        """Fetch gold and silver concurrently; None unless both are available."""
        async with asyncio.TaskGroup() as tg:
            gold_task = tg.create_task(self.get_spot(self.symbol_for("gold")))
            silver_task = tg.create_task(self.get_spot(self.symbol_for("silver")))
        gold, silver = gold_task.result(), silver_task.result()
        if gold is None or silver is None:
            return None
        return gold, silver


class CryptoHistoryProvider(DataProvider):
    """Provider of crypto price history downsampled to one point per month."""

    @abstractmethod
    async def get_monthly_history(self, asset: str, months: int = 60) -> list[TimePoint] | None:
        pass


class FxRatesProvider(DataProvider):
    """Provider of current exchange rates against USD."""

    @abstractmethod
    async def get_rates(self, currencies: tuple[str, ...]) -> FxBasket | None:
        """Fetch units-per-USD rates; None if any requested currency is missing."""
        pass
