"""Path expressions over resolved result trees.

A path expression such as ``edges[].book`` is tokenized into segments and
matched by walking the tree structurally. Lists met along the way (including
a list at the root) are iterated, so a single expression addresses every
matching node regardless of how deeply lists and objects are nested.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from graphql_i18n.errors import ConfigError

Position = tuple[str | int, ...]

_WILDCARD = "[]"


@dataclass(frozen=True)
class Segment:
    name: str
    wildcard: bool = False

    def __str__(self) -> str:
        return self.name + _WILDCARD if self.wildcard else self.name


@dataclass(frozen=True)
class PathExpression:
    segments: tuple[Segment, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)

    @property
    def has_wildcard(self) -> bool:
        return any(s.wildcard for s in self.segments)

    @property
    def anchor(self) -> str:
        """Name of the last segment; backtracking stops when it meets this key."""
        return self.segments[-1].name if self.segments else ""


def parse_path(text: str | None) -> PathExpression:
    """Tokenize ``text`` into a ``PathExpression``.

    Raises ``ConfigError`` for empty segments (``a..b``, ``.``) and for
    brackets anywhere but the end of a segment.
    """
    if text is None or text == "":
        return PathExpression()
    if not isinstance(text, str):
        raise ConfigError(f"Path expression {text!r} is not a string.")

    segments: list[Segment] = []
    for raw in text.split("."):
        wildcard = raw.endswith(_WILDCARD)
        name = raw[: -len(_WILDCARD)] if wildcard else raw
        if not name:
            raise ConfigError(f"Path expression {text!r} contains an empty segment.")
        if "[" in name or "]" in name:
            raise ConfigError(f"Path expression {text!r} has a malformed segment {raw!r}.")
        segments.append(Segment(name, wildcard))
    return PathExpression(tuple(segments))


def is_list(value: Any) -> bool:
    return isinstance(value, list | tuple)


def child(node: Any, key: str | int) -> Any:
    """Read ``key`` from a mapping, sequence or plain object; ``None`` if absent."""
    if node is None:
        return None
    if isinstance(key, int):
        if is_list(node) and -len(node) <= key < len(node):
            return node[key]
        return None
    if isinstance(node, Mapping):
        return node.get(key)
    if isinstance(node, str | bytes | int | float | bool) or is_list(node):
        return None
    return getattr(node, key, None)


def get_at(tree: Any, position: Position) -> Any:
    node = tree
    for key in position:
        node = child(node, key)
        if node is None:
            return None
    return node


def _walk(
    node: Any,
    segments: tuple[Segment, ...],
    position: Position,
) -> Iterator[tuple[Position, Any, bool]]:
    # Yields (position, node, crossed_list).
    if node is None:
        return
    if not segments:
        yield position, node, False
        return
    if is_list(node):
        for index, item in enumerate(node):
            for pos, value, _ in _walk(item, segments, (*position, index)):
                yield pos, value, True
        return

    head, rest = segments[0], segments[1:]
    value = child(node, head.name)
    if value is None:
        return
    yield from _walk(value, rest, (*position, head.name))


def locate(tree: Any, path: PathExpression) -> list[tuple[Position, Any]]:
    """Return every ``(position, node)`` matching ``path``, deduplicated, in tree order."""
    if not path:
        return [] if tree is None else [((), tree)]

    seen: dict[Position, Any] = {}
    for position, value, _ in _walk(tree, path.segments, ()):
        seen.setdefault(position, value)
    return list(seen.items())


def extract(tree: Any, path: PathExpression) -> Any:
    """Return the node(s) addressed by ``path``.

    A single node comes back when no list was crossed and the expression has
    no wildcard; otherwise a flat list of nodes. ``None`` means no match.
    """
    if not path:
        return tree

    matches: list[Any] = []
    many = path.has_wildcard
    for _, value, crossed in _walk(tree, path.segments, ()):
        many = many or crossed
        matches.append(value)

    if not matches:
        return None
    if not many and len(matches) == 1:
        return matches[0]

    flat: list[Any] = []
    for value in matches:
        if is_list(value):
            flat.extend(item for item in value if item is not None)
        else:
            flat.append(value)
    return flat


def flatten_keys(data: Any, prefix: str = "") -> set[str]:
    """Dotted keys of every leaf in ``data``; list items are addressed by index."""
    if isinstance(data, Mapping):
        items: list[tuple[str, Any]] = [(str(k), v) for k, v in data.items()]
    elif is_list(data):
        items = [(str(i), v) for i, v in enumerate(data)]
    else:
        return {prefix} if prefix else set()

    if not items:
        return {prefix} if prefix else set()

    keys: set[str] = set()
    for key, value in items:
        keys |= flatten_keys(value, f"{prefix}.{key}" if prefix else key)
    return keys
