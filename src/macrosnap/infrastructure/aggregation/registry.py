"""Registry that turns provider clients and a priority order into per-metric candidates.

Adding, removing or reordering providers for a metric is a configuration change
(``Settings.provider_order``); each candidate is bound here to the provider
operation that serves that metric.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from macrosnap.domain.ports.data_providers import (
    CryptoHistoryProvider,
    DataProvider,
    EconomicSeriesProvider,
    FxRatesProvider,
    MetalSpotProvider,
    MonthlyHistoryProvider,
    SpotPriceProvider,
)
from macrosnap.infrastructure.analysis.dollar_index import BASKET_CURRENCIES

# Plan keys; btc is composed from two candidate lists
PLAN_KEYS: tuple[str, ...] = (
    "gold",
    "goldHist",
    "btcHistory",
    "btcSpot",
    "cpi",
    "m2",
    "hpi",
    "dxy",
)

# Alpha Vantage function names for the economic metrics it can back-fill
MONTHLY_FUNCTIONS: dict[str, str] = {"goldHist": "GOLD", "cpi": "CPI", "m2": "M2"}


@dataclass(frozen=True)
class MetricSource:
    """One candidate for a metric: a provider id plus a zero-argument fetch."""

    metric: str
    provider_id: str
    fetch: Callable[[], Awaitable[Any | None]]


@dataclass(frozen=True)
class SeriesSelection:
    """Series identifiers and retention windows used when binding candidates."""

    economic_series: Mapping[str, str]
    economic_limit: int = 80
    gold_history_limit: int = 300
    btc_history_months: int = 60


SourcePlan = dict[str, list[MetricSource]]


class ProviderRegistry:
    """Holds provider clients by id and builds the per-metric source plan."""

    def __init__(self, providers: Iterable[DataProvider]) -> None:
        self._providers: dict[str, DataProvider] = {}
        for provider in providers:
            self._providers[provider.get_provider_name()] = provider

    def provider_ids(self) -> list[str]:
        return sorted(self._providers)

    def get(self, provider_id: str) -> DataProvider:
        try:
            return self._providers[provider_id]
        except KeyError:
            raise ValueError(
                f"Unknown provider: {provider_id}. Available: {', '.join(self.provider_ids())}"
            ) from None

    def build_plan(
        self,
        provider_order: Mapping[str, list[str]],
        selection: SeriesSelection,
    ) -> SourcePlan:
        """Bind every configured (metric, provider) pair, preserving priority order.

        Raises:
            ValueError: If a metric or provider id is unknown, or the provider
                cannot serve the metric it is listed for.
        """
        unknown = set(provider_order) - set(PLAN_KEYS)
        if unknown:
            raise ValueError(f"Unknown metrics in provider order: {sorted(unknown)}")

        plan: SourcePlan = {}
        for metric in PLAN_KEYS:
            plan[metric] = [
                MetricSource(
                    metric=metric,
                    provider_id=provider_id,
                    fetch=self._bind(metric, self.get(provider_id), selection),
                )
                for provider_id in provider_order.get(metric, [])
            ]
        return plan

    def _bind(
        self,
        metric: str,
        provider: DataProvider,
        selection: SeriesSelection,
    ) -> Callable[[], Awaitable[Any | None]]:
        if metric == "gold" and isinstance(provider, MetalSpotProvider):
            return provider.get_metal_pair
        if metric == "btcSpot" and isinstance(provider, SpotPriceProvider):
            return partial(provider.get_spot, provider.symbol_for("bitcoin"))
        if metric == "btcHistory" and isinstance(provider, CryptoHistoryProvider):
            return partial(provider.get_monthly_history, "bitcoin", selection.btc_history_months)
        if metric == "dxy" and isinstance(provider, FxRatesProvider):
            return partial(provider.get_rates, BASKET_CURRENCIES)
        if metric in selection.economic_series and isinstance(provider, EconomicSeriesProvider):
            return partial(
                provider.get_series,
                selection.economic_series[metric],
                selection.economic_limit,
            )
        if metric in MONTHLY_FUNCTIONS and isinstance(provider, MonthlyHistoryProvider):
            limit = (
                selection.gold_history_limit if metric == "goldHist" else selection.economic_limit
            )
            return partial(provider.get_monthly_series, MONTHLY_FUNCTIONS[metric], limit)
        raise ValueError(
            f"Provider {provider.get_provider_name()} cannot supply metric {metric}"
        )
