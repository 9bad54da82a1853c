"""Domain models for macrosnap."""

from macrosnap.domain.models.macro import (
    FxBasket,
    IndexValue,
    MetalPair,
    SpotQuote,
    TimePoint,
    to_decimal,
)
from macrosnap.domain.models.provider_results import ProviderResult
from macrosnap.domain.models.snapshot import FALLBACK, TRACKED_METRICS, Snapshot

__all__ = [
    "TimePoint",
    "SpotQuote",
    "MetalPair",
    "FxBasket",
    "IndexValue",
    "to_decimal",
    # Aggregation models
    "ProviderResult",
    "Snapshot",
    "FALLBACK",
    "TRACKED_METRICS",
]
