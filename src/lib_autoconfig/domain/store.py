"""Provenance-preserving settings store.

Purpose
-------
Accumulate raw key/value entries from many sources without losing track of
where each one came from. The store is an ordered, append-only log: overriding
a key means adding a new entry, never replacing an old one.

Contents
--------
* :class:`Source` – free-text provenance label attached to each entry.
* :class:`Entry` – one raw key/value pair tagged with its source.
* :class:`SettingsStore` – ordered collection with exact and normalized
  lookups.

System Role
-----------
Adapters feed the store through :meth:`SettingsStore.add` and
:meth:`SettingsStore.add_flag`; the key matcher reads it. The store performs
no synchronisation: callers that mutate it from several threads must serialise
``add``/``clear`` themselves.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Iterator

from .keys import canonical_form


@dataclass(frozen=True, slots=True)
class Source:
    """Describe where an entry came from.

    Examples
    --------
    >>> Source("environment variables").description
    'environment variables'
    """

    description: str

    def __str__(self) -> str:
        return self.description

    @classmethod
    def config_file(cls, path: str) -> Source:
        """Label for a configuration file read from *path* (already absolute)."""

        return cls(f'config file at "{path}"')

    @classmethod
    def inserted_by(cls, label: str, *, stacklevel: int = 1) -> Source:
        """Label a programmatic insertion with the identity of the inserting code.

        Why
        ----
        Maps and property bags handed in by application code carry no natural
        name; recording who inserted them keeps provenance messages useful.

        Parameters
        ----------
        label:
            Short description of the inserted data (``"a map"``).
        stacklevel:
            Number of frames above the caller of this method whose identity is
            recorded, following :func:`warnings.warn` conventions.

        Examples
        --------
        >>> def insert():
        ...     return Source.inserted_by("a map")
        >>> insert().description.endswith(".insert")
        True
        """

        frame = inspect.currentframe()
        for _ in range(stacklevel):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return cls(f"{label} inserted by <unknown>")
        module = frame.f_globals.get("__name__", "<unknown>")
        return cls(f"{label} inserted by {module}.{frame.f_code.co_name}")


@dataclass(frozen=True, slots=True)
class Entry:
    """One raw key/value pair as supplied by a source, key kept verbatim."""

    key: str
    value: str
    source: Source


class SettingsStore:
    """Ordered, mutable collection of :class:`Entry` objects.

    Resolution policy
    -----------------
    * Exact lookups return the **most recently added** entry, so later sources
      override earlier ones.
    * Normalized lookups return the **first** entry in insertion order whose
      canonical form matches.

    Examples
    --------
    >>> store = SettingsStore()
    >>> store.add("SERVER_PORT", "8080", Source("environment variables"))
    >>> store.add("SERVER_PORT", "9090", Source("command line parameters"))
    >>> store.find_by_exact_key("SERVER_PORT").value
    '9090'
    >>> store.find_by_normalized_key("serverport").value
    '8080'
    >>> store.all()
    {'SERVER_PORT': '9090'}
    """

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def add(self, key: str, value: str, source: Source) -> None:
        """Append an entry; duplicates are kept."""

        self._entries.append(Entry(key, value, source))

    def add_flag(self, key: str, source: Source) -> None:
        """Record that flag *key* is present (value ``"true"``)."""

        self.add(key, "true", source)

    def clear(self) -> None:
        """Discard every entry."""

        self._entries.clear()

    def all(self) -> dict[str, str]:
        """Return every key with its raw value, last-added value per exact key."""

        return {entry.key: entry.value for entry in self._entries}

    def entries(self) -> tuple[Entry, ...]:
        """Return a snapshot of every entry, overridden ones included."""

        return tuple(self._entries)

    def find_by_exact_key(self, key: str) -> Entry | None:
        for entry in reversed(self._entries):
            if entry.key == key:
                return entry
        return None

    def find_by_normalized_key(self, normalized_key: str) -> Entry | None:
        for entry in self._entries:
            if canonical_form(entry.key) == normalized_key:
                return entry
        return None

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)})"
