"""Exception hierarchy shared by the overlay engine, the stores and the API."""

from __future__ import annotations


class I18nError(Exception):
    """Base class for every error raised by graphql-i18n."""


class ConfigError(I18nError, ValueError):
    """Raised at construction time for a malformed type or resolver config."""


class UnsupportedBackendError(ConfigError):
    """Raised when a store backend kind is not one of ``StoreKind``."""


class UnknownTypeError(I18nError, LookupError):
    """Raised when an operation references a type that was never declared."""


class DataShapeError(I18nError, ValueError):
    """Raised when a payload's flattened keys differ from the declared fields."""


class DuplicateError(I18nError):
    """Raised by ``create`` when a record already exists for the key."""


class NotFoundError(I18nError, LookupError):
    """Raised by ``update``/``destroy`` when no record exists for the key."""
