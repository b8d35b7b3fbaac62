from logging.config import fileConfig
from alembic import context
import os, sys
from sqlalchemy import create_engine
from sqlalchemy import pool

# make backend/ importable when alembic runs from a bare checkout
here = os.path.abspath(os.path.dirname(__file__))
backend_dir = os.path.abspath(os.path.join(here, ".."))  # .../backend
if backend_dir not in sys.path:
    sys.path.append(backend_dir)

from dotenv import load_dotenv
from realty_api.core.settings import ENV_FILE, get_settings
load_dotenv(dotenv_path=ENV_FILE, override=False)

# model metadata
from realty_api.db.orm_registry import Base, import_all_models

import_all_models()

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

def _database_url() -> str:
    url = get_settings().DATABASE_URL
    if not url:
        raise RuntimeError("DATABASE_URL not set")
    return url

def run_migrations_offline():
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = create_engine(_database_url(), poolclass=pool.NullPool, future=True)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
