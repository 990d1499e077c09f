"""Shared fixtures and helpers for tests."""

import logging
import warnings
from pathlib import Path
from typing import Any

import pytest
from testcontainers.core.waiting_utils import wait_for_logs
from testcontainers.postgres import PostgresContainer

from alembic import command
from alembic.config import Config
from graphql_i18n.core.i18n import I18n
from graphql_i18n.db import InMemoryTranslationStore

logger = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# PostgresTestBase — helpers for integration tests that need a database
# ---------------------------------------------------------------------------


class PostgresTestBase:
    IMAGE = "postgres:16-alpine"

    @staticmethod
    def create_container() -> PostgresContainer:
        return PostgresContainer(PostgresTestBase.IMAGE, username="postgres", password="postgres", dbname="postgres")

    @staticmethod
    def async_url(container: PostgresContainer) -> str:
        host = container.get_container_host_ip()
        port = container.get_exposed_port(5432)
        return f"postgresql+asyncpg://postgres:postgres@{host}:{port}/postgres"

    @staticmethod
    def get_alembic_config() -> Config:
        ini_path = str(_REPO_ROOT / "alembic.ini")
        cfg = Config(ini_path)
        cfg.set_main_option("script_location", str(_REPO_ROOT / "alembic"))
        return cfg

    @staticmethod
    def run_migrations(connection_url: str) -> None:
        cfg = PostgresTestBase.get_alembic_config()
        cfg.set_main_option("sqlalchemy.url", connection_url)
        command.upgrade(cfg, "head")

    @staticmethod
    def cleanup_migrations(connection_url: str) -> None:
        cfg = PostgresTestBase.get_alembic_config()
        cfg.set_main_option("sqlalchemy.url", connection_url)
        command.downgrade(cfg, "base")

    @staticmethod
    def wait_for_postgres(container: PostgresContainer) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            wait_for_logs(container, "database system is ready to accept connections", timeout=60)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


def _identity(obj: Any) -> Any:
    return obj["id"] if isinstance(obj, dict) else obj.id


@pytest.fixture
def type_config() -> dict[str, Any]:
    return {
        "User": {"identity": _identity, "fields": ["name"]},
        "Book": {"identity": _identity, "fields": ["name", "author.name"]},
    }


@pytest.fixture
def resolver_config() -> dict[str, Any]:
    return {
        "Query": {
            "user": {"data_type": "User"},
            "book": {"data_type": "Book"},
            "books": {"data_type": "Book"},
            "bookConnection": {"data_type": "Book", "data_path": "edges[].book"},
        },
    }


@pytest.fixture
def memory_store() -> InMemoryTranslationStore:
    return InMemoryTranslationStore()


@pytest.fixture
def i18n(
    memory_store: InMemoryTranslationStore, type_config: dict[str, Any], resolver_config: dict[str, Any]
) -> I18n:
    return I18n(store=memory_store, type_config=type_config, resolver_config=resolver_config, default_lang="en")
