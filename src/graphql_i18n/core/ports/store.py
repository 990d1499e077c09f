from typing import Protocol

from graphql_i18n.models import TranslationData, Where, WhereUnique


class TranslationStore(Protocol):
    async def create(self, where: WhereUnique, data: TranslationData, language: str) -> None: ...

    async def update(self, where: WhereUnique, data: TranslationData, language: str) -> None: ...

    async def find(self, where: Where, language: str) -> dict[str, TranslationData]: ...

    async def find_one(self, where: WhereUnique, language: str) -> TranslationData | None: ...

    async def destroy(self, where: WhereUnique, language: str) -> None: ...

    async def ensure_ready(self) -> None: ...

    async def ping(self) -> bool: ...

    async def dispose(self) -> None: ...
