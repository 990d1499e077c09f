"""Overlay annotations: grafting translations onto matched nodes and reading them back.

Annotations never touch the result tree. ``insert_overlay`` returns them keyed
by the position of the node they belong to, and ``OverlayScope`` holds them
keyed by the annotated node for the rest of one execution.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from graphql_i18n.core.config import TypeDescriptor
from graphql_i18n.core.paths import PathExpression, Position, get_at, is_list, locate
from graphql_i18n.models import TranslationData

MISSING: Any = object()


@dataclass(frozen=True)
class OverlayAnnotation:
    data: TranslationData
    anchor: str = ""


def _graft_many(
    annotations: dict[Position, OverlayAnnotation],
    position: Position,
    nodes: Sequence[Any],
    translations: Mapping[str, TranslationData],
    descriptor: TypeDescriptor,
    anchor: str,
) -> None:
    for index, node in enumerate(nodes):
        key = descriptor.identify(node)
        if key is None or translations.get(key) is None:
            continue
        annotations[(*position, index)] = OverlayAnnotation(translations[key], anchor)


def insert_overlay(
    tree: Any,
    payload: Any,
    path: PathExpression,
    descriptor: TypeDescriptor,
    many: bool,
) -> dict[Position, OverlayAnnotation]:
    """Attach ``payload`` to every node of ``tree`` that ``path`` addresses.

    ``payload`` is one record's data when ``many`` is false, otherwise a
    mapping of identity to data. Nodes without a matching record get no
    annotation.
    """
    annotations: dict[Position, OverlayAnnotation] = {}
    anchor = path.anchor

    if not path:
        if is_list(tree):
            _graft_many(annotations, (), tree, payload, descriptor, anchor)
        elif tree is not None:
            annotations[()] = OverlayAnnotation(payload, anchor)
        return annotations

    for position, node in locate(tree, path):
        if is_list(node):
            _graft_many(annotations, position, node, payload, descriptor, anchor)
        elif not many:
            annotations[position] = OverlayAnnotation(payload, anchor)
        else:
            key = descriptor.identify(node)
            if key is not None and payload.get(key) is not None:
                annotations[position] = OverlayAnnotation(payload[key], anchor)
    return annotations


def leaf_path(path: Sequence[str | int], anchor: str) -> list[str]:
    """Relative path from the annotated node down to the field at ``path``.

    Walks backward from the current field, stopping at a list index or at the
    anchor segment; the top-level field itself is never part of the result.
    """
    collected: list[str] = []
    for key in reversed(path[1:]):
        if isinstance(key, int) or key == anchor:
            break
        collected.append(key)
    collected.reverse()
    return collected


def lookup_leaf(data: Any, relative: Sequence[str]) -> Any:
    """Follow ``relative`` through ``data``; ``MISSING`` unless it ends on a scalar."""
    value = data
    for key in relative:
        if not isinstance(value, Mapping) or value.get(key) is None:
            return MISSING
        value = value[key]
    if isinstance(value, Mapping) or is_list(value):
        return MISSING
    return value


@dataclass(frozen=True)
class ScopeEntry:
    node: Any
    annotation: OverlayAnnotation
    field_path: Position


class OverlayScope:
    """Annotations for one execution, keyed by the annotated node.

    Entries are split by top-level response key, so an object shared by two
    top-level fields only carries the overlay of the field that requested it.
    ``field_path`` holds field names, never aliases, from the top-level field
    down to the node.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str | int, int], ScopeEntry] = {}

    def attach(self, root_key: str | int, node: Any, annotation: OverlayAnnotation, field_path: Position) -> None:
        # The entry keeps a reference to ``node`` so its id cannot be reused.
        self._entries[(root_key, id(node))] = ScopeEntry(node, annotation, tuple(field_path))

    def propagate(self, root_key: str | int, node: Any, entry: ScopeEntry, field_name: str) -> None:
        """Carry ``entry`` down to ``node``, the object resolved for ``field_name``."""
        if (root_key, id(node)) not in self._entries:
            self.attach(root_key, node, entry.annotation, (*entry.field_path, field_name))

    def get(self, root_key: str | int, node: Any) -> ScopeEntry | None:
        return self._entries.get((root_key, id(node)))

    def graft(
        self,
        root_key: str | int,
        field_name: str,
        tree: Any,
        annotations: Mapping[Position, OverlayAnnotation],
    ) -> None:
        """Attach annotations returned by ``insert_overlay`` for the top-level ``tree``."""
        for position, annotation in annotations.items():
            node = get_at(tree, position)
            if node is not None:
                self.attach(root_key, node, annotation, (field_name, *position))
