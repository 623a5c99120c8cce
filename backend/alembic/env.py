"""Alembic environment for the RentEase schema.

The application talks to the database through asyncpg (or aiosqlite in debug),
but migrations run on a plain sync engine against the same DATABASE_URL.
Revisions under versions/ are written by hand with op.create_table; the ORM
models are never imported, so autogenerate is not used.
"""

from logging.config import fileConfig
import os
from pathlib import Path

# DATABASE_URL comes from backend/.env
from dotenv import load_dotenv
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from sqlalchemy import pool, create_engine
from sqlalchemy import MetaData

from alembic import context

config = context.config

# alembic.ini owns migration logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Migrations are hand-written; the async models are not imported here
target_metadata = MetaData()

ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite")


def get_url():
    """Get database URL from environment, with the async driver stripped."""
    url = os.getenv("DATABASE_URL", "")
    for driver in ASYNC_DRIVERS:
        url = url.replace(driver, "")
    return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode with SYNC engine."""
    url = get_url()
    connectable = create_engine(
        url,
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
