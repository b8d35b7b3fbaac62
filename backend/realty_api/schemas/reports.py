# realty_api/schemas/reports.py
"""Result records of the reporting endpoints."""

from typing import Optional

from realty_api.schemas.base import CamelModel


class RealtorAveragePrice(CamelModel):
    realtor_full_name: str
    average_price: float


class RealtorSalesName(CamelModel):
    realtor_full_name: str


class RealtorFullName(CamelModel):
    full_name: str


class DistrictTopRealty(CamelModel):
    district_id: int
    address: Optional[str]
    price: int
