# backend/realty_api/routers/realty.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from realty_api.db.db_connection import get_db
from realty_api.models import Realty
from realty_api.schemas.realty import RealtyIn, RealtyOut
from realty_api.schemas.reports import (
    DistrictTopRealty,
    RealtorAveragePrice,
    RealtorFullName,
    RealtorSalesName,
)
from realty_api.services import crud, reports
from realty_api.services.store import ReportStore, get_report_store

router = APIRouter(prefix="/api/Realty", tags=["realty"])


# ───────────────────────────────
# Reports (must stay above /{realty_id})
# ───────────────────────────────
@router.get("/AveragePriceByRealtor", response_model=List[RealtorAveragePrice])
def average_price_by_realtor(
    year: Optional[str] = Query(None, description="calendar year of the sale date"),
    store: ReportStore = Depends(get_report_store),
):
    """Mean sale price per realtor for one calendar year."""
    return reports.average_price_by_realtor(store, year)


@router.get("/LowPricePerSquareMeter", response_model=List[Optional[str]])
def low_price_per_square_meter(store: ReportStore = Depends(get_report_store)):
    """Addresses priced per m² below their district's average."""
    return reports.low_price_per_square_meter(store)


@router.get("/RealtorsWithFewSales", response_model=List[RealtorSalesName])
def realtors_with_few_sales(store: ReportStore = Depends(get_report_store)):
    return reports.realtors_with_few_sales(store)


@router.get("/RealtorsWithNoSalesThisYear", response_model=List[RealtorFullName])
def realtors_with_no_sales_this_year(store: ReportStore = Depends(get_report_store)):
    return reports.realtors_with_no_sales_this_year(store)


@router.get("/YearsWithSpecificRealtyCount", response_model=List[int])
def years_with_specific_realty_count(store: ReportStore = Depends(get_report_store)):
    return reports.years_with_specific_realty_count(store)


@router.get("/MostExpensiveRealtyByDistrict", response_model=List[DistrictTopRealty])
def most_expensive_realty_by_district(store: ReportStore = Depends(get_report_store)):
    return reports.most_expensive_realty_by_district(store)


# ───────────────────────────────
# CRUD
# ───────────────────────────────
@router.get("", response_model=List[RealtyOut])
def get_realties(db: Session = Depends(get_db)):
    return crud.list_entities(db, Realty)


@router.get("/{realty_id}", response_model=RealtyOut)
def get_realty(realty_id: int, db: Session = Depends(get_db)):
    return crud.get_entity(db, Realty, realty_id)


@router.post("", response_model=RealtyOut, status_code=201)
def add_realty(payload: RealtyIn, request: Request, response: Response, db: Session = Depends(get_db)):
    obj = crud.create_entity(db, Realty, payload)
    response.headers["Location"] = str(request.url_for("get_realty", realty_id=obj.id))
    return obj


@router.put("/{realty_id}", status_code=204, response_class=Response)
def update_realty(realty_id: int, payload: RealtyIn, db: Session = Depends(get_db)):
    crud.update_entity(db, Realty, realty_id, payload)
    return Response(status_code=204)


@router.delete("/{realty_id}", status_code=204, response_class=Response)
def delete_realty(realty_id: int, db: Session = Depends(get_db)):
    crud.delete_entity(db, Realty, realty_id)
    return Response(status_code=204)
