import copy
import logging
from collections import defaultdict

from graphql_i18n.errors import DuplicateError, NotFoundError
from graphql_i18n.models import TranslationData, Where, WhereUnique

logger = logging.getLogger(__name__)


class InMemoryTranslationStore:
    def __init__(self) -> None:
        # type -> language -> id -> data
        self.storage: defaultdict[str, defaultdict[str, dict[str, TranslationData]]] = defaultdict(
            lambda: defaultdict(dict)
        )

    def _bucket(self, type_name: str, language: str) -> dict[str, TranslationData]:
        return self.storage[type_name][language]

    async def create(self, where: WhereUnique, data: TranslationData, language: str) -> None:
        bucket = self._bucket(where.type, language)
        if where.id in bucket:
            raise DuplicateError(f"Type {where.type} with id {where.id} already exists in {language}.")
        bucket[where.id] = copy.deepcopy(data)

    async def update(self, where: WhereUnique, data: TranslationData, language: str) -> None:
        bucket = self._bucket(where.type, language)
        if where.id not in bucket:
            raise NotFoundError(f"Type {where.type} with id {where.id} does not exist in {language}.")
        bucket[where.id] = copy.deepcopy(data)

    async def find(self, where: Where, language: str) -> dict[str, TranslationData]:
        bucket = self._bucket(where.type, language)
        return {i: copy.deepcopy(bucket[i]) for i in where.ids if i in bucket}

    async def find_one(self, where: WhereUnique, language: str) -> TranslationData | None:
        data = self._bucket(where.type, language).get(where.id)
        return None if data is None else copy.deepcopy(data)

    async def destroy(self, where: WhereUnique, language: str) -> None:
        bucket = self._bucket(where.type, language)
        if where.id not in bucket:
            raise NotFoundError(f"Type {where.type} with id {where.id} does not exist in {language}.")
        del bucket[where.id]

    async def ensure_ready(self) -> None:
        pass

    async def ping(self) -> bool:
        return True

    async def dispose(self) -> None:
        self.storage.clear()
        logger.debug("Cleared in-memory translation store")
