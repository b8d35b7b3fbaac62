"""SQLAlchemy model for closed sales (realty x realtor)."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer
from sqlalchemy.orm import relationship

from realty_api.db.orm_registry import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column("sale_id", Integer, primary_key=True)

    realty_object_id = Column(
        Integer, ForeignKey("realty_objects.realty_object_id"), nullable=False, index=True
    )
    realtor_id = Column(Integer, ForeignKey("realtors.realtor_id"), nullable=False, index=True)
    sale_dt = Column(DateTime, nullable=False, index=True)
    sale_price = Column(Float, nullable=False)

    # FK navigation; reports join explicitly in SQL
    realty = relationship("Realty", back_populates="sales")
    realtor = relationship("Realtor", back_populates="sales")
