import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from graphql_i18n.core.config import (
    ResolverDescriptor,
    TypeDescriptor,
    build_resolver_config,
    build_type_config,
)
from graphql_i18n.core.overlay import OverlayAnnotation, insert_overlay
from graphql_i18n.core.paths import Position, extract, flatten_keys, is_list
from graphql_i18n.core.ports.store import TranslationStore
from graphql_i18n.errors import ConfigError, DataShapeError, UnknownTypeError
from graphql_i18n.models import TranslationData, Where, WhereUnique

if TYPE_CHECKING:
    from graphql_i18n.middleware import OverlayMiddleware

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if is_list(value) or isinstance(value, Mapping):
        return len(value) == 0
    return False


class I18n:
    """Translation overlay for GraphQL results.

    ``type_config`` maps a type name to ``{"identity": callable, "fields": [...]}``;
    ``resolver_config`` maps a parent type to ``{field: {"data_type": ..., "data_path": ...}}``.
    """

    def __init__(
        self,
        store: TranslationStore,
        type_config: Mapping[str, Any],
        default_lang: str,
        resolver_config: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        if not default_lang:
            raise ConfigError("A default language is required.")
        self.store = store
        self.types: dict[str, TypeDescriptor] = build_type_config(type_config)
        self.resolvers = build_resolver_config(resolver_config, self.types)
        self.default_lang = default_lang

    # -----------------------------------------------------------------------
    # Overlay API
    # -----------------------------------------------------------------------

    async def sync(self, where: WhereUnique, data: TranslationData, language: str | None = None) -> None:
        """Create or replace the record for ``where`` in ``language``."""
        self._check_type(where.type)
        self._check_data(where.type, data)

        language = language or self.default_lang
        existing = await self.store.find_one(where, language)
        if existing is not None:
            await self.store.update(where, data, language)
        else:
            await self.store.create(where, data, language)
        logger.debug("Synced %s/%s (%s)", where.type, where.id, language)

    async def find(self, where: Where, language: str | None = None) -> dict[str, TranslationData]:
        self._check_type(where.type)

        language = language or self.default_lang
        results = await self.store.find(where, language)

        # Falsy values count as gaps, not only absent ids.
        missing_ids = [i for i in where.ids if not results.get(i)]
        if missing_ids and language != self.default_lang:
            logger.debug(
                "Falling back to %s for %d %s id(s)", self.default_lang, len(missing_ids), where.type
            )
            fallback = await self.store.find(Where(ids=missing_ids, type=where.type), self.default_lang)
            results = {**results, **fallback}
        return results

    async def find_one(self, where: WhereUnique, language: str | None = None) -> TranslationData | None:
        self._check_type(where.type)

        language = language or self.default_lang
        result = await self.store.find_one(where, language)
        if result is None and language != self.default_lang:
            result = await self.store.find_one(where, self.default_lang)
        return result

    async def destroy(self, where: WhereUnique, language: str | None = None) -> None:
        self._check_type(where.type)

        language = language or self.default_lang
        await self.store.destroy(where, language)
        logger.debug("Destroyed %s/%s (%s)", where.type, where.id, language)

    # -----------------------------------------------------------------------
    # Overlay resolution
    # -----------------------------------------------------------------------

    def resolver_for(
        self, parent_type: str, field_name: str, return_type: str | None = None
    ) -> ResolverDescriptor | None:
        """Descriptor for a top-level field.

        Falls back to the field's named return type when it is itself a
        declared type, with the whole result as the target.
        """
        descriptor = self.resolvers.get(parent_type, {}).get(field_name)
        if descriptor is None and return_type in self.types:
            descriptor = ResolverDescriptor(data_type=return_type)
        return descriptor

    async def overlay(
        self, descriptor: ResolverDescriptor, result: Any, language: str | None
    ) -> dict[Position, OverlayAnnotation]:
        """Fetch translations for ``result`` and return annotations by node position.

        ``language`` of ``None`` means no locale was requested; nothing is fetched.
        """
        if language is None or _is_empty(result):
            return {}

        type_descriptor = self.types[descriptor.data_type]
        target = extract(result, descriptor.data_path)
        if _is_empty(target):
            return {}

        if is_list(target):
            ids = [key for key in (type_descriptor.identify(o) for o in target) if key is not None]
            if not ids:
                return {}
            translations = await self.find(Where(ids=ids, type=descriptor.data_type), language)
            if not translations:
                return {}
            return insert_overlay(result, translations, descriptor.data_path, type_descriptor, many=True)

        key = type_descriptor.identify(target)
        if key is None:
            return {}
        translation = await self.find_one(WhereUnique(id=key, type=descriptor.data_type), language)
        if translation is None:
            return {}
        return insert_overlay(result, translation, descriptor.data_path, type_descriptor, many=False)

    def middleware(self) -> "OverlayMiddleware":
        """A graphql-core middleware bound to this instance; create one per execution."""
        from graphql_i18n.middleware import OverlayMiddleware

        return OverlayMiddleware(self)

    # -----------------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------------

    def _check_type(self, type_name: str) -> None:
        if type_name not in self.types:
            raise UnknownTypeError(f"Type {type_name} not found.")

    def _check_data(self, type_name: str, data: TranslationData) -> None:
        keys = flatten_keys(data)
        fields = self.types[type_name].fields
        if keys != fields:
            raise DataShapeError(f"Data keys {sorted(keys)} are not equal to type config {sorted(fields)}.")
