"""Store backend selection.

The set of backends is closed: an unknown kind fails when the store is
built, never later at runtime.
"""

from enum import Enum

from sqlalchemy.ext.asyncio import AsyncEngine

from graphql_i18n.core.ports.store import TranslationStore
from graphql_i18n.db.engine import get_engine
from graphql_i18n.db.memory import InMemoryTranslationStore
from graphql_i18n.db.postgres import PostgresTranslationStore
from graphql_i18n.errors import UnsupportedBackendError


class StoreKind(str, Enum):
    MEMORY = "memory"
    POSTGRES = "postgres"


def resolve_kind(kind: StoreKind | str) -> StoreKind:
    try:
        return StoreKind(kind)
    except ValueError as exc:
        supported = ", ".join(k.value for k in StoreKind)
        raise UnsupportedBackendError(f"Unsupported store backend {kind!r}; expected one of: {supported}.") from exc


def create_store(kind: StoreKind | str, engine: AsyncEngine | None = None) -> TranslationStore:
    """Build the translation store for ``kind``.

    The postgres backend uses ``engine`` or one built from ``DATABASE_URL``.
    """
    resolved = resolve_kind(kind)
    if resolved is StoreKind.MEMORY:
        return InMemoryTranslationStore()
    return PostgresTranslationStore(engine or get_engine())
