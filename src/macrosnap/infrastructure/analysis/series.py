"""Series normalization helpers.

All published series are ascending by date, hold at most one point per date
and are capped to a retention window.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

import pandas as pd  # type: ignore[import-untyped]

from macrosnap.domain.models.macro import SpotQuote, TimePoint


def _last_n(points: list[TimePoint], n: int | None) -> list[TimePoint]:
    if n is None:
        return points
    return points[-n:] if n > 0 else []


def normalize_series(points: Iterable[TimePoint], limit: int | None = None) -> list[TimePoint]:
    """Sort ascending by date, keep the last point seen for each date, keep the last ``limit``."""
    by_date: dict[date, TimePoint] = {}
    for point in points:
        by_date[point.date] = point
    ordered = [by_date[d] for d in sorted(by_date)]
    return _last_n(ordered, limit)


def downsample_monthly(
    observations: Iterable[tuple[datetime, Decimal]],
    months: int | None = None,
) -> list[TimePoint]:
    """Reduce dense (daily or intraday) observations to one point per calendar month.

    The chronologically last observation of each month is kept, dated with its
    own day. Months are compared in UTC. Returns the most recent ``months``.
    """
    rows = list(observations)
    if not rows:
        return []

    frame = pd.DataFrame(rows, columns=["timestamp", "value"])
    # Timestamps outside the pandas range become NaT and are dropped
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True, errors="coerce")
    frame = frame.dropna(subset=["timestamp"])
    # Stable sort so that equal timestamps keep input order (later input wins)
    frame = frame.sort_values("timestamp", kind="stable")
    month = frame["timestamp"].dt.strftime("%Y-%m")
    last_in_month = frame.groupby(month, sort=True).tail(1)

    points = [
        TimePoint(date=ts.date(), value=value)
        for ts, value in zip(last_in_month["timestamp"], last_in_month["value"], strict=True)
    ]
    return _last_n(points, months)


def splice_spot(
    history: list[TimePoint] | None,
    spot: SpotQuote,
    limit: int | None = None,
) -> list[TimePoint]:
    """Append a spot quote to a history series.

    History points dated on or after the quote date are dropped, so the result
    has exactly one point at ``spot.as_of`` and everything before it untouched.
    """
    kept = [p for p in (history or []) if p.date < spot.as_of]
    kept.append(TimePoint(date=spot.as_of, value=spot.value))
    return _last_n(kept, limit)
