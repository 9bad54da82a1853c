"""Snapshot document published for the dashboard."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from macrosnap.domain.models.base import ValueObject
from macrosnap.domain.models.macro import IndexValue, MetalPair, TimePoint

FALLBACK = "fallback"

# Metrics tracked in the ``sources`` provenance map, in publication order.
TRACKED_METRICS: tuple[str, ...] = ("gold", "goldHist", "btc", "cpi", "m2", "hpi", "dxy")


class Snapshot(ValueObject):
    """Root document of one pipeline run.

    Every metric is optional; ``sources`` always carries one entry per tracked
    metric, set to the winning provider id or to ``"fallback"`` when no
    provider produced a value.
    """

    fetched_at: datetime = Field(..., alias="fetchedAt", description="Run timestamp (UTC)")
    gold_silver: MetalPair | None = Field(default=None, alias="goldSilver")
    gold_hist: list[TimePoint] | None = Field(default=None, alias="goldHist")
    btc_raw: list[TimePoint] | None = Field(default=None, alias="btcRaw")
    cpi_raw: list[TimePoint] | None = Field(default=None, alias="cpiRaw")
    m2_raw: list[TimePoint] | None = Field(default=None, alias="m2Raw")
    hpi_raw: list[TimePoint] | None = Field(default=None, alias="hpiRaw")
    dxy_live: IndexValue | None = Field(default=None, alias="dxyLive")
    sources: dict[str, str] = Field(default_factory=dict, description="Metric -> provider id")

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document with camelCase keys and numeric values."""
        return self.model_dump(mode="json", by_alias=True)

    def fallback_metrics(self) -> list[str]:
        return [metric for metric, source in self.sources.items() if source == FALLBACK]
