"""Tests for the SQL-backed report store (SQLite in memory)."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from realty_api.core.errors import StoreUnavailableError
from realty_api.models import Realtor, Realty, Sale
from realty_api.services import reports
from realty_api.services.store import (
    MemoryReportStore,
    RealtorRow,
    RealtorSaleStats,
    RealtyRow,
    SaleRow,
    SqlReportStore,
    YearCount,
)


@pytest.fixture
def populated(session):
    """Two realtors, four properties in two districts, three sales."""
    session.add_all([
        Realtor(id=1, first_name="Ivan", last_name="Petrov", middle_name="S", contact_phone="1"),
        Realtor(id=2, first_name="Anna", last_name="Smirnova"),
        Realtor(id=3, first_name="Pavel", last_name="Volkov"),
    ])
    session.add_all([
        Realty(id=1, district_id=1, address="A-1", price=100, area=10, announcement_dt=datetime(2020, 5, 1)),
        Realty(id=2, district_id=1, address="A-2", price=300, area=10, announcement_dt=datetime(2020, 7, 1)),
        Realty(id=3, district_id=2, address="B-1", price=900, area=0, announcement_dt=datetime(2021, 1, 1)),
        Realty(id=4, district_id=2, address="B-2", price=500, area=5, announcement_dt=datetime(2022, 1, 1)),
    ])
    session.add_all([
        Sale(id=1, realty_object_id=1, realtor_id=1, sale_dt=datetime(2023, 5, 1), sale_price=200.0),
        Sale(id=2, realty_object_id=2, realtor_id=1, sale_dt=datetime(2023, 8, 1), sale_price=400.0),
        Sale(id=3, realty_object_id=4, realtor_id=2, sale_dt=datetime(2022, 12, 31, 23, 0), sale_price=50.0),
    ])
    session.commit()
    return SqlReportStore(session)


class TestSqlReportStore:
    """Tests for SqlReportStore primitives."""

    def test_realtors_ordered(self, populated) -> None:
        """Realtors come back by id with their names."""
        rows = populated.realtors()

        assert [(r.id, r.first_name, r.last_name) for r in rows] == [
            (1, "Ivan", "Petrov"),
            (2, "Anna", "Smirnova"),
            (3, "Pavel", "Volkov"),
        ]

    def test_sale_stats_all_time(self, populated) -> None:
        """Grouped counts and averages, realtors without sales absent."""
        stats = populated.sale_stats_by_realtor()

        assert stats == [
            RealtorSaleStats(1, "Ivan", "Petrov", 2, 300.0),
            RealtorSaleStats(2, "Anna", "Smirnova", 1, 50.0),
        ]

    def test_sale_stats_range(self, populated) -> None:
        """The [start, end) range filters by sale date."""
        stats = populated.sale_stats_by_realtor(datetime(2023, 1, 1), datetime(2024, 1, 1))

        assert [(s.realtor_id, s.sale_count) for s in stats] == [(1, 2)]

    def test_district_price_per_area(self, populated) -> None:
        """Zero-area listings do not count toward the district mean."""
        assert populated.district_price_per_area() == {1: 20.0, 2: 100.0}

    def test_realty_below_district_price_per_area(self, populated) -> None:
        rows = populated.realty_below_district_price_per_area()

        assert [(p.id, p.address) for p in rows] == [(1, "A-1")]

    def test_listing_counts_by_year(self, populated) -> None:
        assert populated.listing_counts_by_year() == [
            YearCount(2020, 2),
            YearCount(2021, 1),
            YearCount(2022, 1),
        ]

    def test_listing_counts_by_year_bounded(self, populated) -> None:
        """min_count / max_count are applied as HAVING bounds."""
        assert populated.listing_counts_by_year(min_count=2, max_count=3) == [YearCount(2020, 2)]
        assert populated.listing_counts_by_year(max_count=1) == [YearCount(2021, 1), YearCount(2022, 1)]

    def test_top_realty_by_district(self, populated) -> None:
        rows = populated.top_realty_by_district()

        assert [(p.district_id, p.id, p.price) for p in rows] == [(1, 2, 300), (2, 3, 900)]

    def test_top_realty_tie_keeps_lowest_id(self, session, populated) -> None:
        session.add_all([
            Realty(id=11, district_id=3, address="C-2", price=700, area=7, announcement_dt=datetime(2023, 1, 1)),
            Realty(id=10, district_id=3, address="C-1", price=700, area=7, announcement_dt=datetime(2023, 1, 1)),
        ])
        session.commit()

        rows = populated.top_realty_by_district()

        assert [(p.district_id, p.id) for p in rows] == [(1, 2), (2, 3), (3, 10)]

    def test_operational_error_becomes_store_unavailable(self) -> None:
        """Driver connection failures surface as StoreUnavailableError."""
        session = MagicMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with pytest.raises(StoreUnavailableError):
            SqlReportStore(session).realtors()


class TestReportsOverSql:
    """The engine gives the same answers over SQL."""

    def test_average_price_by_realtor(self, populated) -> None:
        result = reports.average_price_by_realtor(populated, 2023)

        assert [(r.realtor_full_name, r.average_price) for r in result] == [("Ivan Petrov", 300.0)]
        assert reports.average_price_by_realtor(populated, 2021) == []

    def test_low_price_per_square_meter(self, populated) -> None:
        # district 1: 10 and 30 per m²; district 2: only B-2 has an area
        assert reports.low_price_per_square_meter(populated) == ["A-1"]

    def test_realtors_with_few_sales(self, populated) -> None:
        result = reports.realtors_with_few_sales(populated)

        assert [r.realtor_full_name for r in result] == ["Ivan Petrov", "Anna Smirnova"]

    def test_realtors_with_no_sales_this_year(self, populated) -> None:
        result = reports.realtors_with_no_sales_this_year(populated, now=datetime(2023, 3, 1))

        assert [r.full_name for r in result] == ["Anna Smirnova", "Pavel Volkov"]

    def test_years_with_specific_realty_count(self, populated) -> None:
        assert reports.years_with_specific_realty_count(populated) == [2020]

    def test_most_expensive_realty_by_district(self, populated) -> None:
        result = reports.most_expensive_realty_by_district(populated)

        assert [(r.district_id, r.address, r.price) for r in result] == [(1, "A-2", 300), (2, "B-1", 900)]


@pytest.fixture
def memory_twin():
    """The ``populated`` data set held in plain lists."""
    return MemoryReportStore(
        realtors=[
            RealtorRow(1, "Ivan", "Petrov"),
            RealtorRow(2, "Anna", "Smirnova"),
            RealtorRow(3, "Pavel", "Volkov"),
        ],
        properties=[
            RealtyRow(4, 2, "B-2", 500, 5, datetime(2022, 1, 1)),
            RealtyRow(3, 2, "B-1", 900, 0, datetime(2021, 1, 1)),
            RealtyRow(2, 1, "A-2", 300, 10, datetime(2020, 7, 1)),
            RealtyRow(1, 1, "A-1", 100, 10, datetime(2020, 5, 1)),
        ],
        sales=[
            SaleRow(1, 1, 1, datetime(2023, 5, 1), 200.0),
            SaleRow(2, 2, 1, datetime(2023, 8, 1), 400.0),
            SaleRow(3, 4, 2, datetime(2022, 12, 31, 23, 0), 50.0),
        ],
    )


class TestMemoryStoreMatchesSql:
    """The in-memory store answers every call exactly like the SQL store."""

    @pytest.mark.parametrize("call", [
        lambda s: s.realtors(),
        lambda s: s.sale_stats_by_realtor(),
        lambda s: s.sale_stats_by_realtor(datetime(2023, 1, 1), datetime(2024, 1, 1)),
        lambda s: s.district_price_per_area(),
        lambda s: s.realty_below_district_price_per_area(),
        lambda s: s.listing_counts_by_year(),
        lambda s: s.listing_counts_by_year(min_count=2, max_count=3),
        lambda s: s.top_realty_by_district(),
    ])
    def test_same_answer(self, populated, memory_twin, call) -> None:
        assert call(memory_twin) == call(populated)
