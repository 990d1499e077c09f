from graphql_i18n.db.engine import get_engine
from graphql_i18n.db.factory import StoreKind, create_store
from graphql_i18n.db.helpers import DEFAULT_DATABASE_URL, TABLE_NAME
from graphql_i18n.db.memory import InMemoryTranslationStore
from graphql_i18n.db.postgres import PostgresTranslationStore

__all__ = [
    "DEFAULT_DATABASE_URL",
    "InMemoryTranslationStore",
    "PostgresTranslationStore",
    "StoreKind",
    "TABLE_NAME",
    "create_store",
    "get_engine",
]
