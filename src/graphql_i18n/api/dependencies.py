from __future__ import annotations

from collections.abc import AsyncIterator

from graphql_i18n.core.i18n import I18n
from graphql_i18n.loader import load_i18n

_i18n: I18n | None = None


def configure_i18n(i18n: I18n | None) -> None:
    global _i18n  # noqa: PLW0603
    _i18n = i18n


async def get_i18n() -> AsyncIterator[I18n]:
    """Yield the configured ``I18n``, loading it from ``GRAPHQL_I18N_TARGET`` on first call."""
    global _i18n  # noqa: PLW0603
    if _i18n is None:
        _i18n = load_i18n()
    yield _i18n


async def startup_i18n() -> None:
    """Prepare the configured store; nothing to do until an ``I18n`` is configured."""
    if _i18n is not None:
        await _i18n.store.ensure_ready()


async def shutdown_i18n() -> None:
    global _i18n  # noqa: PLW0603
    if _i18n is not None:
        await _i18n.store.dispose()
        _i18n = None
