"""Read-side data store used by the reporting engine.

``ReportStore`` is the capability the engine depends on. ``SqlReportStore``
pushes filtering, joining, grouping and aggregation down to the database;
``MemoryReportStore`` answers the same calls from plain lists.
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol

from fastapi import Depends
from sqlalchemy import Float, cast, extract, func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from realty_api.core.errors import StoreUnavailableError
from realty_api.db.db_connection import get_db
from realty_api.models import Realtor, Realty, Sale

LOGGER = logging.getLogger(__name__)


# ─────────────────────────────
# rows
# ─────────────────────────────
@dataclass(frozen=True)
class RealtorRow:
    id: int
    first_name: Optional[str]
    last_name: Optional[str]


@dataclass(frozen=True)
class RealtyRow:
    id: int
    district_id: int
    address: Optional[str]
    price: int
    area: int
    announced_at: datetime


@dataclass(frozen=True)
class SaleRow:
    id: int
    realty_object_id: int
    realtor_id: int
    sale_dt: datetime
    sale_price: float


@dataclass(frozen=True)
class RealtorSaleStats:
    realtor_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    sale_count: int
    average_price: float


@dataclass(frozen=True)
class YearCount:
    year: int
    count: int


class ReportStore(Protocol):
    def realtors(self) -> List[RealtorRow]:
        ...

    def sale_stats_by_realtor(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[RealtorSaleStats]:
        """Sales joined to realtors, restricted to ``[start, end)``, grouped per realtor."""
        ...

    def district_price_per_area(self) -> Dict[int, float]:
        """Mean price per m² per district, over properties with a positive area."""
        ...

    def realty_below_district_price_per_area(self) -> List[RealtyRow]:
        """Properties (area > 0) priced per m² strictly below their district's mean."""
        ...

    def listing_counts_by_year(
        self, min_count: Optional[int] = None, max_count: Optional[int] = None
    ) -> List[YearCount]:
        """Listings per announcement year, optionally kept to ``min_count..max_count``."""
        ...

    def top_realty_by_district(self) -> List[RealtyRow]:
        """Highest-priced property per district, lowest id on ties."""
        ...


# ─────────────────────────────
# SQL
# ─────────────────────────────
_REALTY_COLS = (
    Realty.id.label("id"),
    Realty.district_id.label("district_id"),
    Realty.address.label("address"),
    Realty.price.label("price"),
    Realty.area.label("area"),
    Realty.announcement_dt.label("announced_at"),
)

# cast first: integer division truncates on PostgreSQL
_PRICE_PER_AREA = cast(Realty.price, Float) / Realty.area


class SqlReportStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _rows(self, stmt):
        try:
            return self.session.execute(stmt).all()
        except (OperationalError, InterfaceError) as exc:
            LOGGER.warning("report store query failed: %s", exc)
            raise StoreUnavailableError("data store is unavailable") from exc

    def realtors(self) -> List[RealtorRow]:
        stmt = select(Realtor.id, Realtor.first_name, Realtor.last_name).order_by(Realtor.id)
        return [RealtorRow(*r) for r in self._rows(stmt)]

    def sale_stats_by_realtor(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[RealtorSaleStats]:
        stmt = (
            select(
                Sale.realtor_id,
                Realtor.first_name,
                Realtor.last_name,
                func.count(Sale.id),
                func.avg(Sale.sale_price),
            )
            .join(Realtor, Realtor.id == Sale.realtor_id)
        )
        # range predicate (not EXTRACT(year)) so the sale_dt index applies
        if start is not None:
            stmt = stmt.where(Sale.sale_dt >= start)
        if end is not None:
            stmt = stmt.where(Sale.sale_dt < end)
        stmt = stmt.group_by(
            Sale.realtor_id, Realtor.first_name, Realtor.last_name
        ).order_by(Sale.realtor_id)

        return [
            RealtorSaleStats(
                realtor_id=rid,
                first_name=first,
                last_name=last,
                sale_count=int(cnt),
                average_price=float(avg),
            )
            for rid, first, last, cnt, avg in self._rows(stmt)
        ]

    def _district_avg_subquery(self):
        return (
            select(
                Realty.district_id.label("district_id"),
                func.avg(_PRICE_PER_AREA).label("avg_ppa"),
            )
            .where(Realty.area > 0)
            .group_by(Realty.district_id)
            .subquery("district_avg")
        )

    def district_price_per_area(self) -> Dict[int, float]:
        sub = self._district_avg_subquery()
        stmt = select(sub.c.district_id, sub.c.avg_ppa).order_by(sub.c.district_id)
        return {int(d): float(avg) for d, avg in self._rows(stmt)}

    def realty_below_district_price_per_area(self) -> List[RealtyRow]:
        sub = self._district_avg_subquery()
        stmt = (
            select(*_REALTY_COLS)
            .join(sub, sub.c.district_id == Realty.district_id)
            .where(Realty.area > 0, _PRICE_PER_AREA < sub.c.avg_ppa)
            .order_by(Realty.id)
        )
        return [RealtyRow(*r) for r in self._rows(stmt)]

    def listing_counts_by_year(
        self, min_count: Optional[int] = None, max_count: Optional[int] = None
    ) -> List[YearCount]:
        year = extract("year", Realty.announcement_dt).label("year")
        n = func.count(Realty.id)
        stmt = select(year, n).group_by(year)
        if min_count is not None:
            stmt = stmt.having(n >= min_count)
        if max_count is not None:
            stmt = stmt.having(n <= max_count)
        stmt = stmt.order_by(year)
        return [YearCount(year=int(y), count=int(c)) for y, c in self._rows(stmt)]

    def top_realty_by_district(self) -> List[RealtyRow]:
        rank = func.row_number().over(
            partition_by=Realty.district_id,
            order_by=(Realty.price.desc(), Realty.id),
        ).label("rank")
        ranked = select(*_REALTY_COLS, rank).subquery("ranked")
        stmt = (
            select(
                ranked.c.id,
                ranked.c.district_id,
                ranked.c.address,
                ranked.c.price,
                ranked.c.area,
                ranked.c.announced_at,
            )
            .where(ranked.c.rank == 1)
            .order_by(ranked.c.district_id)
        )
        return [RealtyRow(*r) for r in self._rows(stmt)]


def get_report_store(db: Session = Depends(get_db)) -> SqlReportStore:
    return SqlReportStore(db)


# ─────────────────────────────
# in-memory
# ─────────────────────────────
def _price_per_area(row: RealtyRow) -> float:
    return row.price / row.area


class MemoryReportStore:
    def __init__(
        self,
        realtors: Iterable[RealtorRow] = (),
        properties: Iterable[RealtyRow] = (),
        sales: Iterable[SaleRow] = (),
    ) -> None:
        self._realtors = sorted(realtors, key=lambda r: r.id)
        self._properties = sorted(properties, key=lambda p: p.id)
        self._sales = list(sales)

    def realtors(self) -> List[RealtorRow]:
        return list(self._realtors)

    def sale_stats_by_realtor(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[RealtorSaleStats]:
        by_id = {r.id: r for r in self._realtors}
        prices: dict[int, List[float]] = defaultdict(list)
        for s in self._sales:
            if start is not None and s.sale_dt < start:
                continue
            if end is not None and s.sale_dt >= end:
                continue
            if s.realtor_id in by_id:  # inner join
                prices[s.realtor_id].append(s.sale_price)

        out: List[RealtorSaleStats] = []
        for rid in sorted(prices):
            realtor = by_id[rid]
            values = prices[rid]
            out.append(RealtorSaleStats(
                realtor_id=rid,
                first_name=realtor.first_name,
                last_name=realtor.last_name,
                sale_count=len(values),
                average_price=sum(values) / len(values),
            ))
        return out

    def district_price_per_area(self) -> Dict[int, float]:
        ratios: dict[int, List[float]] = defaultdict(list)
        for p in self._properties:
            if p.area > 0:
                ratios[p.district_id].append(_price_per_area(p))
        return {d: sum(ratios[d]) / len(ratios[d]) for d in sorted(ratios)}

    def realty_below_district_price_per_area(self) -> List[RealtyRow]:
        averages = self.district_price_per_area()
        return [
            p for p in self._properties
            if p.area > 0 and _price_per_area(p) < averages[p.district_id]
        ]

    def listing_counts_by_year(
        self, min_count: Optional[int] = None, max_count: Optional[int] = None
    ) -> List[YearCount]:
        counts = Counter(p.announced_at.year for p in self._properties)
        return [
            YearCount(year=y, count=counts[y])
            for y in sorted(counts)
            if (min_count is None or counts[y] >= min_count)
            and (max_count is None or counts[y] <= max_count)
        ]

    def top_realty_by_district(self) -> List[RealtyRow]:
        top: dict[int, RealtyRow] = {}
        for p in self._properties:  # ascending id, so ">" keeps the lowest id on ties
            best = top.get(p.district_id)
            if best is None or p.price > best.price:
                top[p.district_id] = p
        return [top[d] for d in sorted(top)]
