import os

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from graphql_i18n.db.helpers import DEFAULT_DATABASE_URL


def get_database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def get_engine(db_url: str | None = None) -> AsyncEngine:
    return create_async_engine(db_url or get_database_url(), future=True)
