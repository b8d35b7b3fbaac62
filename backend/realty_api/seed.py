# realty_api/seed.py
"""Fill an empty database with demo realtors, realty objects and sales.

A database that already holds realtors is left untouched, so rerunning is safe.
"""
import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from realty_api.core.logging import setup_logging
from realty_api.db import Base, SessionLocal, get_engine, import_all_models
from realty_api.models import Realtor, Realty, Sale

LOGGER = logging.getLogger(__name__)

REALTORS = [
    {"first_name": "Ivan", "last_name": "Petrov", "middle_name": "Sergeevich", "contact_phone": "+7 900 100-00-01"},
    {"first_name": "Anna", "last_name": "Smirnova", "middle_name": "Olegovna", "contact_phone": "+7 900 100-00-02"},
    {"first_name": "Pavel", "last_name": "Volkov", "middle_name": "Igorevich", "contact_phone": "+7 900 100-00-03"},
]


def seed_demo_data(num_properties: int = 20, num_sales: int = 12, seed: Optional[int] = None) -> bool:
    """Insert the demo rows; returns False when the database was not empty."""
    rng = random.Random(seed)
    import_all_models()
    Base.metadata.create_all(get_engine())

    with SessionLocal() as db:
        if db.query(Realtor.id).first() is not None:
            LOGGER.info("realtors table is not empty, skipping demo data")
            return False

        LOGGER.info("inserting %d realtors", len(REALTORS))
        realtors = [Realtor(**r) for r in REALTORS]
        db.add_all(realtors)
        db.commit()

        LOGGER.info("inserting %d realty objects", num_properties)
        now = datetime.now()
        properties = []
        for i in range(num_properties):
            area = rng.choice([0, 32, 45, 60, 78, 110])
            properties.append(Realty(
                district_id=rng.randint(1, 4),
                address=f"Demo street {i + 1}",
                floor_level=rng.randint(1, 16),
                type_id=rng.randint(1, 3),
                status=1,
                price=rng.randint(2_000_000, 20_000_000),
                object_desc="demo listing",
                material_id=rng.randint(1, 3),
                area=area,
                announcement_dt=now - timedelta(days=rng.randint(0, 5 * 365)),
            ))
        db.add_all(properties)
        db.commit()

        LOGGER.info("inserting %d sales", num_sales)
        for realty in rng.sample(properties, k=min(num_sales, len(properties))):
            db.add(Sale(
                realty_object_id=realty.id,
                realtor_id=rng.choice(realtors).id,
                sale_dt=realty.announcement_dt + timedelta(days=rng.randint(1, 120)),
                sale_price=float(realty.price) * rng.uniform(0.9, 1.05),
            ))
        db.commit()

    LOGGER.info("demo data inserted")
    return True


if __name__ == "__main__":
    setup_logging()
    seed_demo_data()
