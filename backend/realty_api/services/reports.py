"""Analytical reports over realtors, realty objects and sales.

Every report is a pure function of the injected store (and, for the
per-year report, of the requested year). Results are returned as plain
pydantic records in a deterministic order; empty results are not errors.
"""
from __future__ import annotations

import logging
import re
from datetime import MAXYEAR, MINYEAR, datetime
from typing import List, Optional, Tuple

from realty_api.core.errors import ReportValidationError
from realty_api.schemas.reports import (
    DistrictTopRealty,
    RealtorAveragePrice,
    RealtorFullName,
    RealtorSalesName,
)
from realty_api.services.store import ReportStore

LOGGER = logging.getLogger(__name__)

FEW_SALES_THRESHOLD = 5          # strictly fewer sales than this
YEARLY_LISTINGS_RANGE = (2, 3)   # inclusive

_YEAR_RE = re.compile(r"[+-]?\d{1,6}")  # bounded before int()


# ─────────────────────────────
# helpers
# ─────────────────────────────
def parse_year(value: object) -> int:
    """Accept an ``int`` or a decimal string; anything else is a validation error."""
    if value is None:
        raise ReportValidationError("year is required")
    if isinstance(value, bool):
        raise ReportValidationError(f"year must be an integer, got {value!r:.32}")
    if isinstance(value, int):
        year = value
    elif isinstance(value, str) and _YEAR_RE.fullmatch(value.strip()):
        year = int(value.strip())
    else:
        raise ReportValidationError(f"year must be an integer, got {value!r:.32}")
    if not MINYEAR <= year <= MAXYEAR:
        raise ReportValidationError(f"year must be between {MINYEAR} and {MAXYEAR}, got {year}")
    return year


def year_bounds(year: int) -> Tuple[datetime, Optional[datetime]]:
    """Half-open ``[Jan 1 year, Jan 1 year+1)``; open-ended for the last representable year."""
    start = datetime(year, 1, 1)
    end = datetime(year + 1, 1, 1) if year < MAXYEAR else None
    return start, end


def full_name(first: Optional[str], last: Optional[str]) -> str:
    return f"{first or ''} {last or ''}"


# ─────────────────────────────
# reports
# ─────────────────────────────
def average_price_by_realtor(store: ReportStore, year: object) -> List[RealtorAveragePrice]:
    """Mean sale price per realtor for sales closed in ``year``."""
    start, end = year_bounds(parse_year(year))
    out = [
        RealtorAveragePrice(
            realtor_full_name=full_name(s.first_name, s.last_name),
            average_price=s.average_price,
        )
        for s in store.sale_stats_by_realtor(start, end)
    ]
    LOGGER.debug("average_price_by_realtor(%s) -> %d rows", start.year, len(out))
    return out


def low_price_per_square_meter(store: ReportStore) -> List[Optional[str]]:
    """Addresses whose price per m² is below their district's average.

    Properties with a non-positive area take part in neither the district
    average nor the comparison.
    """
    out = [p.address for p in store.realty_below_district_price_per_area()]
    LOGGER.debug("low_price_per_square_meter -> %d rows", len(out))
    return out


def realtors_with_few_sales(store: ReportStore) -> List[RealtorSalesName]:
    """Realtors with at least one but fewer than five sales, all time."""
    out = [
        RealtorSalesName(realtor_full_name=full_name(s.first_name, s.last_name))
        for s in store.sale_stats_by_realtor()
        if s.sale_count < FEW_SALES_THRESHOLD
    ]
    LOGGER.debug("realtors_with_few_sales -> %d rows", len(out))
    return out


def realtors_with_no_sales_this_year(
    store: ReportStore, now: Optional[datetime] = None
) -> List[RealtorFullName]:
    """Every realtor without a sale in the current calendar year, including those who never sold."""
    current = now or datetime.now()
    start, end = year_bounds(current.year)
    active = {s.realtor_id for s in store.sale_stats_by_realtor(start, end)}

    out = [
        RealtorFullName(full_name=full_name(r.first_name, r.last_name))
        for r in store.realtors()
        if r.id not in active
    ]
    LOGGER.debug("realtors_with_no_sales_this_year(%d) -> %d rows", current.year, len(out))
    return out


def years_with_specific_realty_count(store: ReportStore) -> List[int]:
    """Announcement years with two or three listings."""
    low, high = YEARLY_LISTINGS_RANGE
    out = [yc.year for yc in store.listing_counts_by_year(min_count=low, max_count=high)]
    LOGGER.debug("years_with_specific_realty_count -> %s", out)
    return out


def most_expensive_realty_by_district(store: ReportStore) -> List[DistrictTopRealty]:
    """One top-priced property per district; ties go to the lowest property id."""
    out = [
        DistrictTopRealty(district_id=top.district_id, address=top.address, price=top.price)
        for top in store.top_realty_by_district()
    ]
    LOGGER.debug("most_expensive_realty_by_district -> %d rows", len(out))
    return out
