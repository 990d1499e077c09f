import json
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from graphql_i18n.db.helpers import TABLE_NAME
from graphql_i18n.errors import DuplicateError, NotFoundError
from graphql_i18n.models import TranslationData, Where, WhereUnique

logger = logging.getLogger(__name__)


def _load(value: Any) -> TranslationData:
    # asyncpg hands JSONB back as text unless a codec is registered.
    if isinstance(value, str | bytes):
        loaded: TranslationData = json.loads(value)
        return loaded
    return dict(value)


async def _ensure_translations_table(engine: AsyncEngine) -> None:
    ddl = (
        f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} ("
        " type TEXT NOT NULL,"
        " id TEXT NOT NULL,"
        " language TEXT NOT NULL,"
        " data JSONB NOT NULL,"
        " PRIMARY KEY (type, id, language)"
        ")"
    )
    async with engine.begin() as conn:
        await conn.execute(text(ddl))


class PostgresTranslationStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    async def create(self, where: WhereUnique, data: TranslationData, language: str) -> None:
        try:
            async with self._engine.begin() as conn:
                await conn.execute(
                    text(
                        f"""
                        INSERT INTO {TABLE_NAME} (type, id, language, data)
                        VALUES (:type, :id, :language, CAST(:data AS JSONB))
                        """
                    ),
                    {"type": where.type, "id": where.id, "language": language, "data": json.dumps(data)},
                )
        except IntegrityError as exc:
            raise DuplicateError(f"Type {where.type} with id {where.id} already exists in {language}.") from exc
        logger.debug("Created %s/%s (%s)", where.type, where.id, language)

    async def update(self, where: WhereUnique, data: TranslationData, language: str) -> None:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text(
                    f"""
                    UPDATE {TABLE_NAME} SET data = CAST(:data AS JSONB)
                    WHERE type = :type AND id = :id AND language = :language
                    """
                ),
                {"type": where.type, "id": where.id, "language": language, "data": json.dumps(data)},
            )
        if result.rowcount == 0:
            raise NotFoundError(f"Type {where.type} with id {where.id} does not exist in {language}.")
        logger.debug("Updated %s/%s (%s)", where.type, where.id, language)

    async def find(self, where: Where, language: str) -> dict[str, TranslationData]:
        if not where.ids:
            return {}
        async with self._engine.connect() as conn:
            result = await conn.execute(
                text(
                    f"""
                    SELECT id, data FROM {TABLE_NAME}
                    WHERE type = :type AND language = :language AND id = ANY(:ids)
                    """
                ),
                {"type": where.type, "language": language, "ids": list(where.ids)},
            )
            rows = result.fetchall()
        return {str(row[0]): _load(row[1]) for row in rows}

    async def find_one(self, where: WhereUnique, language: str) -> TranslationData | None:
        async with self._engine.connect() as conn:
            result = await conn.execute(
                text(
                    f"""
                    SELECT data FROM {TABLE_NAME}
                    WHERE type = :type AND id = :id AND language = :language
                    """
                ),
                {"type": where.type, "id": where.id, "language": language},
            )
            value = result.scalar_one_or_none()
        return None if value is None else _load(value)

    async def destroy(self, where: WhereUnique, language: str) -> None:
        async with self._engine.begin() as conn:
            result = await conn.execute(
                text(f"DELETE FROM {TABLE_NAME} WHERE type = :type AND id = :id AND language = :language"),
                {"type": where.type, "id": where.id, "language": language},
            )
        if result.rowcount == 0:
            raise NotFoundError(f"Type {where.type} with id {where.id} does not exist in {language}.")
        logger.debug("Destroyed %s/%s (%s)", where.type, where.id, language)

    async def ensure_ready(self) -> None:
        """Create the translations table if migrations have not."""
        await _ensure_translations_table(self._engine)
        logger.info("Translation table %s ready", TABLE_NAME)

    async def ping(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()
