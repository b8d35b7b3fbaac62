# backend/realty_api/db/orm_registry.py
from __future__ import annotations

from typing import TYPE_CHECKING
from sqlalchemy.orm import declarative_base

# Declarative Base shared by the realtors, realty_objects and sales tables
Base = declarative_base()

# Type-checker hints only; never executed at runtime (avoids import cycles)
if TYPE_CHECKING:  # pragma: no cover
    from realty_api.models.realtor import Realtor  # noqa: F401
    from realty_api.models.realty import Realty    # noqa: F401
    from realty_api.models.sale import Sale        # noqa: F401

def import_all_models() -> None:
    """
    Import the Realtor, Realty and Sale modules so their tables land on
    ``Base.metadata`` and the Sale relationships can resolve.
    - Callers: the app lifespan in main.py, alembic/env.py (autogenerate
      target), seed.py before create_all, and the test engine fixture.
    - The models import ``Base`` from here, so they are loaded lazily.
    """
    import importlib

    for mod in (
        "realty_api.models.realtor",
        "realty_api.models.realty",
        "realty_api.models.sale",
    ):
        importlib.import_module(mod)

__all__ = ["Base", "import_all_models"]
