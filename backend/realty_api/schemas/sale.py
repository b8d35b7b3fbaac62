# realty_api/schemas/sale.py

from datetime import datetime

from pydantic import Field

from realty_api.schemas.base import CamelModel


class SaleIn(CamelModel):
    realty_object_id: int
    realtor_id: int
    sale_dt: datetime
    sale_price: float = Field(..., ge=0)


class SaleOut(SaleIn):
    id: int
