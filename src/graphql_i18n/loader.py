"""Resolve a consumer's ``I18n`` object from a ``module:attribute`` import string."""

import importlib
import os

from graphql_i18n.core.i18n import I18n
from graphql_i18n.errors import ConfigError

TARGET_ENV = "GRAPHQL_I18N_TARGET"


def load_i18n(target: str | None = None) -> I18n:
    """Import ``target`` (default: ``$GRAPHQL_I18N_TARGET``).

    The attribute may be an ``I18n`` instance or a zero-argument callable
    returning one.
    """
    target = target or os.getenv(TARGET_ENV)
    if not target:
        raise ConfigError(f"No I18n target given; pass module:attribute or set {TARGET_ENV}.")

    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ConfigError(f"I18n target {target!r} must look like 'package.module:attribute'.")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import module {module_name!r}: {exc}") from exc

    obj = getattr(module, attribute, None)
    if obj is None:
        raise ConfigError(f"Module {module_name!r} has no attribute {attribute!r}.")
    if not isinstance(obj, I18n) and callable(obj):
        obj = obj()
    if not isinstance(obj, I18n):
        raise ConfigError(f"{target!r} does not resolve to an I18n instance.")
    return obj
