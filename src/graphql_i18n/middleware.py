"""graphql-core middleware that applies translation overlays during execution.

Top-level fields carrying ``@locale(lang: "...")`` are overlaid right after
they resolve. Every other field consults the annotation recorded for the
object it is resolved on: leaves read the translated value, objects pass the
annotation on to their own children.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from graphql import (
    DirectiveLocation,
    GraphQLArgument,
    GraphQLDirective,
    GraphQLNonNull,
    GraphQLResolveInfo,
    GraphQLString,
    get_named_type,
    value_from_ast_untyped,
)

from graphql_i18n.core.overlay import MISSING, OverlayScope, ScopeEntry, leaf_path, lookup_leaf
from graphql_i18n.core.paths import is_list

if TYPE_CHECKING:
    from graphql.pyutils import Path

    from graphql_i18n.core.config import ResolverDescriptor
    from graphql_i18n.core.i18n import I18n

logger = logging.getLogger(__name__)

LOCALE_DIRECTIVE_NAME = "locale"
LOCALE_ARGUMENT_NAME = "lang"

LOCALE_SDL = f"directive @{LOCALE_DIRECTIVE_NAME}({LOCALE_ARGUMENT_NAME}: String!) on FIELD"

LOCALE_DIRECTIVE = GraphQLDirective(
    name=LOCALE_DIRECTIVE_NAME,
    locations=[DirectiveLocation.FIELD],
    args={LOCALE_ARGUMENT_NAME: GraphQLArgument(GraphQLNonNull(GraphQLString))},
    description="Overlay translations in the given language onto this field's result.",
)


def requested_locale(info: GraphQLResolveInfo) -> str | None:
    """Language requested by ``@locale`` on the current field; ``None`` without the directive."""
    if not info.field_nodes:
        return None
    for directive in info.field_nodes[0].directives or ():
        if directive.name.value != LOCALE_DIRECTIVE_NAME:
            continue
        for argument in directive.arguments or ():
            if argument.name.value == LOCALE_ARGUMENT_NAME:
                value = value_from_ast_untyped(argument.value, info.variable_values)
                return "" if value is None else str(value)
        return ""
    return None


def _is_leaf(info: GraphQLResolveInfo) -> bool:
    return bool(info.field_nodes) and info.field_nodes[0].selection_set is None


def _root_key(path: Path) -> str | int:
    while path.prev is not None:
        path = path.prev
    return path.key


class OverlayMiddleware:
    """Request-scoped middleware; obtain one per execution from ``I18n.middleware()``.

    Fields without a pending overlay pass their result through unchanged, so
    queries that never use ``@locale`` also run under ``graphql_sync``.
    """

    def __init__(self, i18n: I18n) -> None:
        self.i18n = i18n
        self.scope = OverlayScope()

    def resolve(self, next_: Callable[..., Any], root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        result = next_(root, info, **args)

        if info.path.prev is None:
            language = requested_locale(info)
            if language is None:
                return result
            return_type = get_named_type(info.return_type).name
            descriptor = self.i18n.resolver_for(info.parent_type.name, info.field_name, return_type)
            if descriptor is None:
                return result
            return self._overlay_top_level(result, info, descriptor, language)

        root_key = _root_key(info.path)
        entry = self.scope.get(root_key, root)
        if entry is None:
            return result
        if isawaitable(result):
            return self._apply_async(result, info, root_key, entry)
        return self._apply(result, info, root_key, entry)

    async def _overlay_top_level(
        self, result: Any, info: GraphQLResolveInfo, descriptor: ResolverDescriptor, language: str
    ) -> Any:
        if isawaitable(result):
            result = await result

        annotations = await self.i18n.overlay(descriptor, result, language)
        self.scope.graft(info.path.key, info.field_name, result, annotations)
        logger.debug("Overlaid %d node(s) on %s (%s)", len(annotations), info.field_name, language)
        return result

    async def _apply_async(
        self, result: Awaitable[Any], info: GraphQLResolveInfo, root_key: str | int, entry: ScopeEntry
    ) -> Any:
        return self._apply(await result, info, root_key, entry)

    def _apply(self, result: Any, info: GraphQLResolveInfo, root_key: str | int, entry: ScopeEntry) -> Any:
        if _is_leaf(info):
            field_path = (*entry.field_path, info.field_name)
            value = lookup_leaf(entry.annotation.data, leaf_path(field_path, entry.annotation.anchor))
            return result if value is MISSING else value

        if result is not None and not is_list(result):
            self.scope.propagate(root_key, result, entry, info.field_name)
        return result
