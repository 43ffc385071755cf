"""Application-layer key matching policy.

Purpose
-------
Find the single store entry that answers a requested key, tolerating naming
convention differences between the source and the consuming code.

Contents
    - ``KeyMatch``: the winning entry plus how it was found.
    - ``match_key``: exact match first, canonical-form match second.

System Role
-----------
Stateless; parametrised by the :class:`~lib_autoconfig.domain.store.SettingsStore`
passed in so any number of independently owned stores can share it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.keys import canonical_form
from ..domain.store import Entry, SettingsStore


@dataclass(frozen=True, slots=True)
class KeyMatch:
    """Result of a successful lookup.

    Attributes
    ----------
    entry:
        Store entry that answered the request.
    requested_key:
        Key the caller asked for.
    fuzzy:
        ``True`` when the entry was found through its canonical form rather
        than an exact string match.
    """

    entry: Entry
    requested_key: str
    fuzzy: bool

    @property
    def stored_key(self) -> str:
        """Literal key under which the source supplied the value."""

        return self.entry.key

    @property
    def value(self) -> str:
        return self.entry.value


def match_key(store: SettingsStore, key: str) -> KeyMatch | None:
    """Return the entry that best answers *key*, or ``None`` when nothing matches.

    Examples
    --------
    >>> from lib_autoconfig.domain.store import Source
    >>> store = SettingsStore()
    >>> store.add("SERVER_PORT", "2", Source("environment variables"))
    >>> found = match_key(store, "serverPort")
    >>> found.stored_key, found.fuzzy
    ('SERVER_PORT', True)
    >>> match_key(store, "client-port") is None
    True
    """

    exact = store.find_by_exact_key(key)
    if exact is not None:
        return KeyMatch(exact, key, fuzzy=False)
    normalized = store.find_by_normalized_key(canonical_form(key))
    if normalized is not None:
        return KeyMatch(normalized, key, fuzzy=True)
    return None
