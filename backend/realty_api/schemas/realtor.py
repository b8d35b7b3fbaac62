# realty_api/schemas/realtor.py

from typing import Optional

from realty_api.schemas.base import CamelModel


class RealtorIn(CamelModel):
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    contact_phone: Optional[str] = None


class RealtorOut(RealtorIn):
    id: int
