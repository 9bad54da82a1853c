"""Multi-source aggregation: source plans, fallback resolution and provenance."""

from macrosnap.infrastructure.aggregation.aggregator import SnapshotAggregator
from macrosnap.infrastructure.aggregation.registry import (
    PLAN_KEYS,
    MetricSource,
    ProviderRegistry,
    SeriesSelection,
    SourcePlan,
)

__all__ = [
    "PLAN_KEYS",
    "MetricSource",
    "ProviderRegistry",
    "SeriesSelection",
    "SnapshotAggregator",
    "SourcePlan",
]
