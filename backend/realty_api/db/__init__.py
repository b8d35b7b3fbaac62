# realty_api/db/__init__.py
from .db_connection import SessionLocal, get_db, get_engine
from .orm_registry import Base, import_all_models

def close_db() -> None:
    # Release pooled connections on server shutdown
    get_engine().dispose()

__all__ = ["Base", "SessionLocal", "get_db", "get_engine", "import_all_models", "close_db"]
