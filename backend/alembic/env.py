"""
Alembic Migration Environment
=============================

What:  Runs the blog_api migrations against settings.database_url.
How:   Offline mode renders SQL for that URL; online mode opens an unpooled
       async engine and hands its connection to Alembic via run_sync().
Who:   `alembic upgrade head` / `alembic revision --autogenerate`, run from backend/.

DATABASE_URL is read through blog_api.config, so the app and its migrations
always target the same database; alembic.ini carries no URL.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from blog_api.config import settings
from blog_api.database import Base

# Registers the table on Base.metadata for --autogenerate
from blog_api.models.blog import Blog  # noqa: F401

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def run_migrations(**configure_options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        # SQLite cannot ALTER most columns in place
        render_as_batch=settings.is_sqlite,
        **configure_options,
    )
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(lambda sync_conn: run_migrations(connection=sync_conn))
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(migrate_online())
