"""SQLAlchemy model for realtors (agents who close sales)."""
from __future__ import annotations

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from realty_api.db.orm_registry import Base


class Realtor(Base):
    __tablename__ = "realtors"

    id = Column("realtor_id", Integer, primary_key=True)

    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    middle_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)

    sales = relationship("Sale", back_populates="realtor")

