"""Session-scoped fixtures for integration tests."""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from testcontainers.postgres import PostgresContainer

from alembic.config import Config
from graphql_i18n.core.i18n import I18n
from graphql_i18n.db import TABLE_NAME, PostgresTranslationStore
from tests.conftest import PostgresTestBase


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Start a Postgres container for the session."""
    container = PostgresTestBase.create_container()
    container.start()
    PostgresTestBase.wait_for_postgres(container)
    yield container
    container.stop()


@pytest.fixture(scope="session")
def test_db_url(postgres_container: PostgresContainer) -> str:
    """Async connection URL for the test database."""
    return PostgresTestBase.async_url(postgres_container)


@pytest.fixture(scope="session")
def alembic_config(test_db_url: str) -> Config:
    """Alembic config pointed at the test database."""
    cfg = PostgresTestBase.get_alembic_config()
    cfg.set_main_option("sqlalchemy.url", test_db_url)
    return cfg


@pytest.fixture(scope="session")
def _run_migrations(alembic_config: Config, test_db_url: str) -> Generator[None, None, None]:
    """Run migrations once per session, cleanup on teardown."""
    PostgresTestBase.run_migrations(test_db_url)
    yield
    PostgresTestBase.cleanup_migrations(test_db_url)


@pytest_asyncio.fixture
async def database(_run_migrations: None, test_db_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Per-test engine so each event loop gets its own connection pool."""
    engine = create_async_engine(test_db_url, future=True)
    yield engine
    async with engine.begin() as conn:
        await conn.execute(text(f"DELETE FROM {TABLE_NAME}"))
    await engine.dispose()


@pytest_asyncio.fixture
async def store(database: AsyncEngine) -> AsyncGenerator[PostgresTranslationStore, None]:
    """Per-test PostgresTranslationStore instance."""
    instance = PostgresTranslationStore(database)
    await instance.ensure_ready()
    yield instance


@pytest.fixture
def pg_i18n(store: PostgresTranslationStore, type_config: dict[str, Any], resolver_config: dict[str, Any]) -> I18n:
    return I18n(store=store, type_config=type_config, resolver_config=resolver_config, default_lang="en")
