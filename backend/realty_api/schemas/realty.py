# realty_api/schemas/realty.py

from datetime import datetime
from typing import Optional

from pydantic import Field

from realty_api.schemas.base import CamelModel


class RealtyIn(CamelModel):
    district_id: int
    address: Optional[str] = None
    floor_level: Optional[int] = None
    type_id: Optional[int] = None
    status: Optional[int] = None
    price: int = Field(0, ge=0)
    object_desc: Optional[str] = None
    material_id: Optional[int] = None
    area: int = Field(0, ge=0)  # 0 is allowed, excluded from price-per-area reports
    announcement_dt: datetime


class RealtyOut(RealtyIn):
    id: int
