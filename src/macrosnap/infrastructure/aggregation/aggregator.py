"""Snapshot aggregator.

Runs every candidate source concurrently, then resolves each metric by walking
its candidates in declared priority order: the first provider that produced a
value wins and is recorded in ``sources``. Metrics with no successful provider
are published as null with the ``"fallback"`` sentinel.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

import structlog

from macrosnap.domain.models.macro import IndexValue, MetalPair, SpotQuote, TimePoint
from macrosnap.domain.models.provider_results import ProviderResult
from macrosnap.domain.models.snapshot import FALLBACK, Snapshot
from macrosnap.infrastructure.analysis.dollar_index import compute_dollar_index
from macrosnap.infrastructure.analysis.series import normalize_series, splice_spot
from macrosnap.infrastructure.aggregation.registry import MetricSource, SourcePlan

logger = structlog.get_logger(__name__)

ResultMap = dict[str, list[ProviderResult[Any]]]


def _first_success(results: list[ProviderResult[Any]]) -> ProviderResult[Any] | None:
    for result in results:
        if result.success:
            return result
    return None


class SnapshotAggregator:
    """Builds a Snapshot from a per-metric source plan."""

    def __init__(
        self,
        plan: SourcePlan,
        economic_limit: int = 80,
        gold_history_limit: int = 300,
        btc_history_months: int = 60,
    ) -> None:
        self._plan = plan
        self._economic_limit = economic_limit
        self._gold_history_limit = gold_history_limit
        self._btc_history_months = btc_history_months

    async def build_snapshot(self, now: datetime | None = None) -> Snapshot:
        """Fetch all sources and assemble the snapshot for ``now`` (defaults to UTC now)."""
        fetched_at = now or datetime.now(UTC)
        run_date = fetched_at.date()

        results = await self._fetch_all()
        sources: dict[str, str] = {}

        gold_silver = self._resolve_metal_pair(results.get("gold", []), run_date, sources)
        gold_hist = self._resolve_series(
            "goldHist", results.get("goldHist", []), self._gold_history_limit, sources
        )
        btc_raw = self._resolve_btc(
            results.get("btcHistory", []), results.get("btcSpot", []), run_date, sources
        )
        cpi_raw = self._resolve_series("cpi", results.get("cpi", []), self._economic_limit, sources)
        m2_raw = self._resolve_series("m2", results.get("m2", []), self._economic_limit, sources)
        hpi_raw = self._resolve_series("hpi", results.get("hpi", []), self._economic_limit, sources)
        dxy_live = self._resolve_dollar_index(results.get("dxy", []), sources)

        snapshot = Snapshot(
            fetched_at=fetched_at,
            gold_silver=gold_silver,
            gold_hist=gold_hist,
            btc_raw=btc_raw,
            cpi_raw=cpi_raw,
            m2_raw=m2_raw,
            hpi_raw=hpi_raw,
            dxy_live=dxy_live,
            sources=sources,
        )
        logger.info(
            "snapshot assembled",
            sources=sources,
            fallback=snapshot.fallback_metrics(),
            gold_hist_points=len(gold_hist or []),
            btc_points=len(btc_raw or []),
            cpi_points=len(cpi_raw or []),
            m2_points=len(m2_raw or []),
            hpi_points=len(hpi_raw or []),
            dxy=float(dxy_live.value) if dxy_live else None,
        )
        return snapshot

    async def _fetch_all(self) -> ResultMap:
        """Launch every candidate at once and join on all of them."""
        async with asyncio.TaskGroup() as tg:
            tasks = {
                metric: [tg.create_task(self._run_source(source)) for source in sources]
                for metric, sources in self._plan.items()
            }
        return {
            metric: [task.result() for task in metric_tasks]
            for metric, metric_tasks in tasks.items()
        }

    async def _run_source(self, source: MetricSource) -> ProviderResult[Any]:
        try:
            data = await source.fetch()
        except Exception as e:
            # Providers are expected to absorb their own failures; anything left is
            # recorded as an absent result so sibling sources are unaffected.
            logger.error(
                "source raised unexpectedly",
                metric=source.metric,
                provider=source.provider_id,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return ProviderResult(
                metric=source.metric, provider=source.provider_id, data=None, error=str(e)
            )
        return ProviderResult(metric=source.metric, provider=source.provider_id, data=data)

    def _resolve_metal_pair(
        self,
        results: list[ProviderResult[Any]],
        run_date: date,
        sources: dict[str, str],
    ) -> MetalPair | None:
        winner = _first_success(results)
        if winner is None:
            sources["gold"] = FALLBACK
            return None
        gold, silver = winner.data
        sources["gold"] = winner.provider
        return MetalPair(gold=gold, silver=silver, date=run_date)

    def _resolve_series(
        self,
        metric: str,
        results: list[ProviderResult[Any]],
        limit: int,
        sources: dict[str, str],
    ) -> list[TimePoint] | None:
        for result in results:
            if not result.success:
                continue
            series = normalize_series(result.data, limit)
            if series:
                sources[metric] = result.provider
                return series
        sources[metric] = FALLBACK
        return None

    def _resolve_btc(
        self,
        history_results: list[ProviderResult[Any]],
        spot_results: list[ProviderResult[Any]],
        run_date: date,
        sources: dict[str, str],
    ) -> list[TimePoint] | None:
        history_sources: dict[str, str] = {}
        history = self._resolve_series(
            "btc", history_results, self._btc_history_months, history_sources
        )
        spot_winner = _first_success(spot_results)

        if spot_winner is not None:
            spot = SpotQuote(value=Decimal(spot_winner.data), as_of=run_date)
            series = splice_spot(history, spot, self._btc_history_months)
            sources["btc"] = history_sources["btc"] if history else spot_winner.provider
            return series

        sources["btc"] = history_sources["btc"]
        return history

    def _resolve_dollar_index(
        self,
        results: list[ProviderResult[Any]],
        sources: dict[str, str],
    ) -> IndexValue | None:
        for result in results:
            if not result.success:
                continue
            index = compute_dollar_index(result.data)
            if index is not None:
                sources["dxy"] = result.provider
                return index
        sources["dxy"] = FALLBACK
        return None
