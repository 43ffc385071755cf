"""Application-layer resolution of typed settings.

Purpose
-------
Combine the key matcher and the type coercers into the operations consumed by
setting bindings and the facade: typed lookup with optional default, and
provenance description.

Contents
    - ``MISSING``: sentinel meaning "no default supplied".
    - ``lookup_key``: compose a group prefix with a setting name.
    - ``resolve``: match, coerce, or fail.
    - ``describe_source``: provenance string for a key.

System Role
-----------
Pure orchestration without I/O or logging. Errors propagate synchronously to
the caller that performed the access.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, TypeVar

from ..domain.errors import MissingKeyError, ParseFailureError, SettingParseError
from ..domain.store import SettingsStore
from ..domain.types import SettingType
from .matching import KeyMatch, match_key

T = TypeVar("T")


class _Missing(Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


#: Sentinel distinguishing "no default" from a default of ``None``.
MISSING: Final = _Missing.MISSING


def lookup_key(prefix: str, name: str) -> str:
    """Join *prefix* and *name* with ``.``, omitting an empty prefix.

    Examples
    --------
    >>> lookup_key("outer.subgroup", "key")
    'outer.subgroup.key'
    >>> lookup_key("", "key")
    'key'
    """

    return f"{prefix}.{name}" if prefix else name


def resolve(
    store: SettingsStore,
    key: str,
    setting_type: SettingType[T],
    default: T | _Missing = MISSING,
) -> T:
    """Resolve *key* in *store* and coerce it with *setting_type*.

    Parameters
    ----------
    store:
        Store to read.
    key:
        Effective lookup key (group prefix already applied).
    setting_type:
        Coercer applied to the matched raw value.
    default:
        Returned as-is, without coercion, when nothing matches.

    Raises
    ------
    MissingKeyError
        No entry matched and no default was supplied.
    ParseFailureError
        The matched raw value was rejected by the coercer.

    Examples
    --------
    >>> from lib_autoconfig.domain.store import Source
    >>> from lib_autoconfig.domain.types import INT
    >>> store = SettingsStore()
    >>> store.add("server-port", "8080", Source("environment variables"))
    >>> resolve(store, "serverPort", INT)
    8080
    >>> resolve(store, "timeout", INT, default=30)
    30
    """

    found = match_key(store, key)
    if found is None:
        if default is MISSING:
            raise MissingKeyError(key)
        return default
    return _coerce(found, setting_type)


def _coerce(found: KeyMatch, setting_type: SettingType[T]) -> T:
    try:
        return setting_type.parse(found.value)
    except SettingParseError as exc:
        raise ParseFailureError(found.requested_key, found.value, exc.reason) from exc


def describe_source(store: SettingsStore, key: str) -> str:
    """Return a sentence naming the source that supplied *key*.

    Raises
    ------
    MissingKeyError
        When nothing in *store* matches *key*.

    Examples
    --------
    >>> from lib_autoconfig.domain.store import Source
    >>> store = SettingsStore()
    >>> store.add("SERVER_PORT", "2", Source('config file at "/etc/app.conf"'))
    >>> describe_source(store, "serverPort")
    'Key "serverPort" was read as "SERVER_PORT" from config file at "/etc/app.conf"'
    """

    found = match_key(store, key)
    if found is None:
        raise MissingKeyError(key)
    source = found.entry.source.description
    if found.fuzzy:
        return f'Key "{key}" was read as "{found.stored_key}" from {source}'
    return f'Key "{key}" was read from {source}'
