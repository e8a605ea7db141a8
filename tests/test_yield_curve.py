"""Tests for the treasury yield curve service and endpoint."""

from datetime import date, timedelta
from decimal import Decimal

from conftest import SeriesFactory
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from market_report.schemas.series import SeriesObservation
from market_report.services.cache import TTLCache
from market_report.services.series import SeriesReport, align
from market_report.services.yield_curve import (
    TREASURY_CODES,
    build_yield_curve,
    load_treasury_series,
    resolve_curve_date,
    years_before,
)


def make_report(rows: list[tuple[str, str, float | None]]) -> SeriesReport:
    observations = [
        SeriesObservation(
            code=code,
            date=date.fromisoformat(day),
            value=Decimal(str(value)) if value is not None else None,
        )
        for code, day, value in rows
    ]
    return SeriesReport(
        aligned=align(observations, TREASURY_CODES),
        summaries={},
        row_count=len(observations),
        truncated=False,
    )


class TestCurveHelpers:
    """Tests for yield curve helper functions."""

    def test_years_before(self):
        assert years_before(date(2024, 10, 19), 30) == date(1994, 10, 19)

    def test_years_before_leap_day(self):
        assert years_before(date(2024, 2, 29), 1) == date(2023, 2, 28)

    def test_resolve_defaults_to_most_recent(self):
        available = [date(2024, 1, 3), date(2024, 1, 2)]
        assert resolve_curve_date(None, available) == date(2024, 1, 3)

    def test_resolve_exact_date(self):
        available = [date(2024, 1, 3), date(2024, 1, 2)]
        assert resolve_curve_date(date(2024, 1, 2), available) == date(2024, 1, 2)

    def test_resolve_closest_earlier_date(self):
        """Weekends resolve to the previous trading day."""
        available = [date(2024, 1, 8), date(2024, 1, 5), date(2024, 1, 4)]
        assert resolve_curve_date(date(2024, 1, 7), available) == date(2024, 1, 5)

    def test_resolve_before_all_data(self):
        available = [date(2024, 1, 3), date(2024, 1, 2)]
        assert resolve_curve_date(date(2020, 1, 1), available) == date(2024, 1, 2)

    def test_resolve_without_data(self):
        assert resolve_curve_date(date(2024, 1, 1), []) is None


class TestBuildYieldCurve:
    """Tests for yield curve construction."""

    def test_curve_for_latest_date(self):
        """Without a requested date the most recent curve is shown."""
        report = make_report(
            [
                ("DGS2", "2024-01-02", 4.3),
                ("DGS10", "2024-01-02", 3.9),
                ("DGS2", "2024-01-03", 4.35),
                ("DGS10", "2024-01-03", 3.95),
            ]
        )

        curve = build_yield_curve(report)

        assert curve.primary_date == date(2024, 1, 3)
        assert curve.compare_date is None
        assert curve.available_dates == [date(2024, 1, 3), date(2024, 1, 2)]
        assert [p.maturity for p in curve.points] == ["1Y", "2Y", "5Y", "7Y", "10Y", "20Y", "30Y"]
        by_code = {p.code: p for p in curve.points}
        assert by_code["DGS2"].curve1 == Decimal("4.35")
        assert by_code["DGS10"].curve1 == Decimal("3.95")
        assert by_code["DGS30"].curve1 is None
        assert by_code["DGS2"].curve2 is None

    def test_curve_with_comparison(self):
        """A comparison date fills the second curve."""
        report = make_report(
            [
                ("DGS2", "2024-01-02", 4.3),
                ("DGS2", "2024-01-05", 4.4),
            ]
        )

        curve = build_yield_curve(report, primary=date(2024, 1, 5), compare=date(2024, 1, 3))

        assert curve.compare_date == date(2024, 1, 2)
        by_code = {p.code: p for p in curve.points}
        assert by_code["DGS2"].curve1 == Decimal("4.4")
        assert by_code["DGS2"].curve2 == Decimal("4.3")

    def test_curve_without_data(self):
        report = make_report([])

        curve = build_yield_curve(report, primary=date(2024, 1, 5))

        assert curve.primary_date is None
        assert curve.available_dates == []
        assert all(p.curve1 is None for p in curve.points)


class TestLoadTreasurySeries:
    """Tests for cached treasury history loading."""

    async def test_load_uses_cache(
        self, db_session: AsyncSession, series_factory: SeriesFactory
    ):
        """A second load returns the cached report without new rows."""
        today = date(2024, 1, 10)
        cache = TTLCache(ttl_seconds=3600)
        await series_factory.create("DGS2", [("2024-01-09", 4.3)])

        first = await load_treasury_series(db_session, cache, end_date=today, years=1)
        await series_factory.create("DGS10", [("2024-01-09", 3.9)])
        second = await load_treasury_series(db_session, cache, end_date=today, years=1)

        assert second is first
        assert second.aligned.chart_data["DGS10"] == ()

    async def test_refresh_bypasses_cache(
        self, db_session: AsyncSession, series_factory: SeriesFactory
    ):
        """Refresh reloads from the database and replaces the cache entry."""
        today = date(2024, 1, 10)
        cache = TTLCache(ttl_seconds=3600)
        await series_factory.create("DGS2", [("2024-01-09", 4.3)])

        await load_treasury_series(db_session, cache, end_date=today, years=1)
        await series_factory.create("DGS10", [("2024-01-09", 3.9)])
        refreshed = await load_treasury_series(
            db_session, cache, end_date=today, years=1, refresh=True
        )
        cached = await load_treasury_series(db_session, cache, end_date=today, years=1)

        assert len(refreshed.aligned.chart_data["DGS10"]) == 1
        assert cached is refreshed


class TestTreasuryCurveRouter:
    """Tests for the treasury curve endpoint."""

    async def test_treasury_curve(self, client: AsyncClient, series_factory: SeriesFactory):
        yesterday = date.today() - timedelta(days=1)
        earlier = yesterday - timedelta(days=7)
        await series_factory.create(
            "DGS2", [(earlier.isoformat(), 4.1), (yesterday.isoformat(), 4.2)]
        )
        await series_factory.create("DGS30", [(yesterday.isoformat(), 4.5)])

        response = await client.get(
            "/api/report/treasury-curve", params={"compare": earlier.isoformat()}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["primaryDate"] == yesterday.isoformat()
        assert data["compareDate"] == earlier.isoformat()
        points = {p["code"]: p for p in data["points"]}
        assert points["DGS2"] == {"maturity": "2Y", "code": "DGS2", "curve1": 4.2, "curve2": 4.1}
        assert points["DGS30"]["curve1"] == 4.5
        assert points["DGS30"]["curve2"] is None

    async def test_treasury_curve_empty(self, client: AsyncClient):
        response = await client.get("/api/report/treasury-curve")

        assert response.status_code == 200
        data = response.json()
        assert data["primaryDate"] is None
        assert len(data["points"]) == 7
