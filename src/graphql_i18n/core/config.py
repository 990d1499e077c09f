"""Type and resolver declarations.

Both are validated once, when ``I18n`` is constructed; a malformed entry
raises ``ConfigError`` and the instance never becomes usable.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from graphql_i18n.core.paths import PathExpression, parse_path
from graphql_i18n.errors import ConfigError


@dataclass(frozen=True)
class TypeDescriptor:
    identity: Callable[[Any], Any]
    fields: frozenset[str]

    @classmethod
    def from_config(cls, name: str, raw: TypeDescriptor | Mapping[str, Any]) -> TypeDescriptor:
        if isinstance(raw, TypeDescriptor):
            identity: Any = raw.identity
            fields: Any = raw.fields
        elif isinstance(raw, Mapping):
            identity = raw.get("identity")
            fields = raw.get("fields")
        else:
            raise ConfigError(f"Type config {name} must be a mapping, got {type(raw).__name__}.")

        if not callable(identity):
            raise ConfigError(f"Type config {name} does not have an `identity` function.")
        if isinstance(raw, Mapping) and not isinstance(fields, list):
            raise ConfigError(f"Type config {name}'s fields {fields!r} is not a list.")
        if not fields:
            raise ConfigError(f"Type config {name} declares no fields.")
        return cls(identity=identity, fields=frozenset(fields))

    def identify(self, obj: Any) -> str | None:
        """Store key for ``obj``; ``None`` when the object has no identity."""
        if obj is None:
            return None
        key = self.identity(obj)
        return None if key is None else str(key)


@dataclass(frozen=True)
class ResolverDescriptor:
    data_type: str
    data_path: PathExpression = PathExpression()


def build_type_config(raw: Mapping[str, Any]) -> dict[str, TypeDescriptor]:
    if not isinstance(raw, Mapping):
        raise ConfigError("Type config must be a mapping of type name to descriptor.")
    return {name: TypeDescriptor.from_config(name, value) for name, value in raw.items()}


def build_resolver_config(
    raw: Mapping[str, Mapping[str, Any]] | None,
    types: Mapping[str, TypeDescriptor],
) -> dict[str, dict[str, ResolverDescriptor]]:
    """Validate ``{"Query": {field: {"data_type": ..., "data_path": ...}}}``.

    The camelCase spellings ``dataType``/``dataPath`` are accepted as well.
    """
    config: dict[str, dict[str, ResolverDescriptor]] = {}
    for parent_type, fields in (raw or {}).items():
        if not isinstance(fields, Mapping):
            raise ConfigError(f"Resolver config {parent_type} must be a mapping of field name to descriptor.")
        config[parent_type] = {}
        for field_name, entry in fields.items():
            if isinstance(entry, ResolverDescriptor):
                descriptor = entry
            elif isinstance(entry, Mapping):
                path_text = entry.get("data_path", entry.get("dataPath"))
                descriptor = ResolverDescriptor(
                    data_type=entry.get("data_type", entry.get("dataType")),
                    data_path=parse_path(path_text),
                )
            else:
                raise ConfigError(f"Resolver config {parent_type}.{field_name} must be a mapping.")

            if descriptor.data_type not in types:
                raise ConfigError(
                    f"Resolver config {parent_type}.{field_name} references unknown type {descriptor.data_type!r}."
                )
            config[parent_type][field_name] = descriptor
    return config
