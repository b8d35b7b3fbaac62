"""SQLAlchemy model for realty objects (listed properties)."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from realty_api.db.orm_registry import Base


class Realty(Base):
    __tablename__ = "realty_objects"

    id = Column("realty_object_id", Integer, primary_key=True)

    district_id = Column(Integer, nullable=False, index=True)    # implicit district domain
    address = Column(String, nullable=True)
    floor_level = Column("floorlevel", Integer, nullable=True)
    type_id = Column(Integer, nullable=True)
    status = Column(Integer, nullable=True)
    price = Column(Integer, nullable=False, default=0)           # non-negative by convention
    object_desc = Column(Text, nullable=True)
    material_id = Column(Integer, nullable=True)
    area = Column(Integer, nullable=False, default=0)            # m², may be 0
    announcement_dt = Column(DateTime, nullable=False, index=True)

    sales = relationship("Sale", back_populates="realty")
