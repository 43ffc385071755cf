"""Application-layer ports describing ingestion collaborator responsibilities.

Purpose
-------
Define the structural contracts that adapters must satisfy so the
``AutoConfig`` facade can feed the settings store without depending on
concrete implementations.

Contents
--------
* :class:`SettingSink` – the ingestion contract of the settings store.
* :class:`FileLoader` – parses a configuration dialect into flat pairs.
* :class:`EnvLoader` – materialises process environment variables.
* :class:`CommandLineParser` – tokenizes argument vectors.
* :class:`URLLoader` / :class:`ResourceLoader` – fetch remote and packaged
  payloads.

System Role
-----------
These protocols enforce Dependency Inversion (DIP). Each adapter implements one
protocol; contract tests assert the default adapters keep satisfying them.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable

from ..domain.store import Source


@runtime_checkable
class SettingSink(Protocol):
    """Accept raw entries from collaborators."""

    def add(self, key: str, value: str, source: Source) -> None:
        """Append a raw key/value pair tagged with *source*."""

    def add_flag(self, key: str, source: Source) -> None:
        """Record that flag *key* is present."""


@runtime_checkable
class FileLoader(Protocol):
    """Parse a configuration dialect into flat key/value pairs."""

    def load(self, path: str) -> Mapping[str, str]:
        """Read *path* or raise ``SourceUnavailableError`` / ``InvalidFormat``."""

    def loads(self, payload: bytes, *, origin: str) -> Mapping[str, str]:
        """Parse an in-memory *payload* read from *origin*."""


@runtime_checkable
class EnvLoader(Protocol):
    """Expose environment variables as raw pairs."""

    def load(self, prefix: str | None = None) -> Mapping[str, str]:
        """Return variables, optionally restricted to *prefix*."""


@runtime_checkable
class CommandLineParser(Protocol):
    """Tokenize an argument vector."""

    def parse(self, args: Sequence[str]) -> list[tuple[str, str | None]]:
        """Return ``(key, value)`` pairs; flags carry ``None``."""


@runtime_checkable
class URLLoader(Protocol):
    """Fetch a payload by URL."""

    def fetch(self, url: str) -> bytes:
        """Return the raw payload or raise ``SourceUnavailableError``."""


@runtime_checkable
class ResourceLoader(Protocol):
    """Fetch a data file bundled inside a package."""

    def fetch(self, package: str, resource: str) -> bytes:
        """Return the raw payload or raise ``SourceUnavailableError``."""
