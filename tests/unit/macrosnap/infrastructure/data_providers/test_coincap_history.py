"""Unit tests for CoinCap price history downsampling."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import httpx
import pytest

from macrosnap.infrastructure.data_providers.coincap import CoinCapProvider


def _daily_points(start: date, days: int) -> list[dict]:
    points = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        ts = datetime(day.year, day.month, day.day, tzinfo=UTC)
        points.append(
            {
                "priceUsd": str(1000 + offset),
                "time": int(ts.timestamp() * 1000),
                "date": ts.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            }
        )
    return points


@pytest.mark.unit
class TestCoinCapHistory:
    async def test_keeps_last_point_of_each_month(self, make_fetcher) -> None:
        # 2024-01-01 .. 2024-03-31
        points = _daily_points(date(2024, 1, 1), 91)

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v2/assets/bitcoin/history"
            assert request.url.params["interval"] == "d1"
            return httpx.Response(200, json={"data": points, "timestamp": 1})

        provider = CoinCapProvider(fetcher=make_fetcher(handler))
        monthly = await provider.get_monthly_history("bitcoin", 60)

        assert monthly is not None
        assert [p.date for p in monthly] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]
        assert monthly[0].value == Decimal("1030")
        assert monthly[-1].value == Decimal("1090")

    async def test_truncates_to_most_recent_months(self, make_fetcher) -> None:
        points = _daily_points(date(2023, 1, 1), 365)
        provider = CoinCapProvider(
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"data": points}))
        )
        monthly = await provider.get_monthly_history("bitcoin", 3)

        assert monthly is not None
        assert [p.date.month for p in monthly] == [10, 11, 12]

    async def test_unordered_input_uses_chronological_last(self, make_fetcher) -> None:
        points = _daily_points(date(2024, 5, 1), 31)
        points.reverse()
        provider = CoinCapProvider(
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"data": points}))
        )
        monthly = await provider.get_monthly_history("bitcoin", 60)

        assert monthly is not None
        assert len(monthly) == 1
        assert monthly[0].date == date(2024, 5, 31)
        assert monthly[0].value == Decimal("1030")

    async def test_empty_history_is_absent(self, make_fetcher) -> None:
        provider = CoinCapProvider(
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"data": []}))
        )
        assert await provider.get_monthly_history("bitcoin") is None

    async def test_points_without_price_are_skipped(self, make_fetcher) -> None:
        points = _daily_points(date(2024, 1, 30), 3)
        points[-1]["priceUsd"] = None
        provider = CoinCapProvider(
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"data": points}))
        )
        monthly = await provider.get_monthly_history("bitcoin")

        assert monthly is not None
        assert [p.date for p in monthly] == [date(2024, 1, 31)]

    async def test_out_of_range_timestamps_are_skipped(self, make_fetcher) -> None:
        points = _daily_points(date(2024, 1, 30), 2)
        points.append({"priceUsd": "5000", "time": 10**20})
        provider = CoinCapProvider(
            fetcher=make_fetcher(lambda request: httpx.Response(200, json={"data": points}))
        )
        monthly = await provider.get_monthly_history("bitcoin")

        assert monthly is not None
        assert [p.date for p in monthly] == [date(2024, 1, 31)]
