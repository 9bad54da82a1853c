"""Unit tests for series normalization helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from macrosnap.domain.models.macro import SpotQuote, TimePoint
from macrosnap.infrastructure.analysis.series import (
    downsample_monthly,
    normalize_series,
    splice_spot,
)


def _point(day: date, value: str) -> TimePoint:
    return TimePoint(date=day, value=Decimal(value))


@pytest.mark.unit
class TestNormalizeSeries:
    def test_sorts_ascending(self) -> None:
        points = [_point(date(2024, 3, 1), "3"), _point(date(2024, 1, 1), "1")]
        result = normalize_series(points)
        assert [p.date for p in result] == [date(2024, 1, 1), date(2024, 3, 1)]

    def test_duplicate_dates_keep_last_seen(self) -> None:
        points = [_point(date(2024, 1, 1), "1"), _point(date(2024, 1, 1), "2")]
        result = normalize_series(points)
        assert result == [_point(date(2024, 1, 1), "2")]

    def test_limit_keeps_most_recent(self) -> None:
        points = [_point(date(2024, m, 1), str(m)) for m in range(1, 13)]
        result = normalize_series(points, 3)
        assert [p.date.month for p in result] == [10, 11, 12]

    def test_zero_limit_is_empty(self) -> None:
        assert normalize_series([_point(date(2024, 1, 1), "1")], 0) == []


@pytest.mark.unit
class TestDownsampleMonthly:
    def test_one_point_per_month_last_observation(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=UTC)
        observations = [(start + timedelta(days=i), Decimal(i)) for i in range(60)]

        result = downsample_monthly(observations)

        assert [p.date for p in result] == [date(2024, 1, 31), date(2024, 2, 29)]
        assert [p.value for p in result] == [Decimal(30), Decimal(59)]

    def test_intraday_points_use_latest_timestamp(self) -> None:
        observations = [
            (datetime(2024, 1, 31, 18, tzinfo=UTC), Decimal("2")),
            (datetime(2024, 1, 31, 6, tzinfo=UTC), Decimal("1")),
        ]
        result = downsample_monthly(observations)
        assert result == [_point(date(2024, 1, 31), "2")]

    def test_months_are_distinct_and_ascending(self) -> None:
        observations = [
            (datetime(2024, 3, 15, tzinfo=UTC), Decimal("3")),
            (datetime(2023, 12, 2, tzinfo=UTC), Decimal("1")),
            (datetime(2024, 3, 1, tzinfo=UTC), Decimal("2")),
            (datetime(2024, 1, 20, tzinfo=UTC), Decimal("4")),
        ]
        result = downsample_monthly(observations)

        months = [(p.date.year, p.date.month) for p in result]
        assert months == [(2023, 12), (2024, 1), (2024, 3)]
        assert result[-1].value == Decimal("3")

    def test_truncates_to_months(self) -> None:
        observations = [(datetime(2024, m, 10, tzinfo=UTC), Decimal(m)) for m in range(1, 13)]
        result = downsample_monthly(observations, 2)
        assert [p.date.month for p in result] == [11, 12]

    def test_empty_input(self) -> None:
        assert downsample_monthly([]) == []


@pytest.mark.unit
class TestSpliceSpot:
    def test_appends_after_history(self) -> None:
        history = [_point(date(2025, 4, 30), "90"), _point(date(2025, 5, 31), "95")]
        spot = SpotQuote(value=Decimal("100"), as_of=date(2025, 6, 15))

        result = splice_spot(history, spot)

        assert result[:-1] == history
        assert result[-1] == _point(date(2025, 6, 15), "100")

    def test_replaces_points_on_or_after_quote_date(self) -> None:
        history = [
            _point(date(2025, 5, 31), "95"),
            _point(date(2025, 6, 15), "97"),
            _point(date(2025, 6, 30), "99"),
        ]
        spot = SpotQuote(value=Decimal("100"), as_of=date(2025, 6, 15))

        result = splice_spot(history, spot)

        assert [p.date for p in result] == [date(2025, 5, 31), date(2025, 6, 15)]
        assert result[-1].value == Decimal("100")

    def test_without_history(self) -> None:
        spot = SpotQuote(value=Decimal("100"), as_of=date(2025, 6, 15))
        assert splice_spot(None, spot) == [_point(date(2025, 6, 15), "100")]

    def test_limit_counts_spliced_point(self) -> None:
        history = [_point(date(2025, m, 1), str(m)) for m in range(1, 6)]
        spot = SpotQuote(value=Decimal("100"), as_of=date(2025, 6, 15))

        result = splice_spot(history, spot, 3)

        assert [p.date.month for p in result] == [4, 5, 6]
