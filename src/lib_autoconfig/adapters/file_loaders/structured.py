"""Structured configuration file loaders.

Purpose
-------
Convert TOML, JSON, and YAML artifacts into the flat ``key -> raw string``
pairs the settings store ingests. Nested tables flatten into dotted keys so
they line up with group prefixes (``[server] port = 1`` → ``server.port``).

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`
  – format-specific parsers.
* :func:`flatten` – nested mapping → dotted raw-string mapping.

System Role
-----------
Invoked by :class:`lib_autoconfig.core.AutoConfig` for files, URLs, and package
resources whose name carries a structured suffix.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import InvalidFormat, SourceUnavailableError
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the file loaders."""

    format_name = "file"

    def load(self, path: str) -> dict[str, str]:
        """Read *path* and return its flattened key/value pairs.

        Raises
        ------
        SourceUnavailableError
            When *path* is missing or unreadable.
        InvalidFormat
            When the payload cannot be parsed.
        """

        return self.loads(self._read(path), origin=path)

    def loads(self, payload: bytes, *, origin: str) -> dict[str, str]:
        raise NotImplementedError

    def _read(self, path: str) -> bytes:
        try:
            payload = Path(path).read_bytes()
        except OSError as exc:
            log_error("source_unavailable", source="file", path=path, error=str(exc))
            raise SourceUnavailableError(f"Failed to read file: {path}") from exc
        log_debug("config_file_read", source="file", path=path, size=len(payload))
        return payload

    @staticmethod
    def _decode(payload: bytes, *, origin: str) -> str:
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidFormat(f"File {origin} is not valid UTF-8: {exc}") from exc

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Reject documents whose top level is not a table (``[1, 2]``, a bare scalar).

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping(["a"], path="list.json")
        Traceback (most recent call last):
        ...
        lib_autoconfig.domain.errors.InvalidFormat: File list.json did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data

    def _loaded(self, data: object, *, origin: str) -> dict[str, str]:
        result = flatten(self._ensure_mapping(data, path=origin))
        log_debug("config_file_loaded", source="file", path=origin, format=self.format_name, keys=len(result))
        return result


class TOMLFileLoader(BaseFileLoader):
    """TOML dialect, parsed with :mod:`tomllib` (``tomli`` before 3.11)."""

    format_name = "toml"

    def loads(self, payload: bytes, *, origin: str) -> dict[str, str]:
        """Return the flattened pairs of a TOML document.

        Examples
        --------
        >>> TOMLFileLoader().loads(b'[server]\\nport = 8080', origin="demo")
        {'server.port': '8080'}
        """

        try:
            data = tomllib.loads(self._decode(payload, origin=origin))
        except tomllib.TOMLDecodeError as exc:
            log_error("config_file_invalid", source="file", path=origin, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {origin}: {exc}") from exc
        return self._loaded(data, origin=origin)


class JSONFileLoader(BaseFileLoader):
    """JSON dialect; the top level must be an object."""

    format_name = "json"

    def loads(self, payload: bytes, *, origin: str) -> dict[str, str]:
        """Return the flattened pairs of a JSON document.

        Examples
        --------
        >>> JSONFileLoader().loads(b'{"feature": {"enabled": true}}', origin="demo")
        {'feature.enabled': 'true'}
        """

        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("config_file_invalid", source="file", path=origin, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {origin}: {exc}") from exc
        return self._loaded(data, origin=origin)


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents with :func:`yaml.safe_load`."""

    format_name = "yaml"

    def loads(self, payload: bytes, *, origin: str) -> dict[str, str]:
        """Return the flattened pairs of a YAML document; an empty document yields ``{}``.

        Examples
        --------
        >>> YAMLFileLoader().loads(b"hosts:\\n  - a\\n  - b\\n", origin="demo")
        {'hosts': 'a,b'}
        """

        try:
            data = yaml.safe_load(payload)
        except yaml.YAMLError as exc:
            log_error("config_file_invalid", source="file", path=origin, format="yaml", error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {origin}: {exc}") from exc
        if data is None:
            data = {}
        return self._loaded(data, origin=origin)


def flatten(mapping: Mapping[str, object], prefix: str = "") -> dict[str, str]:
    """Flatten nested *mapping* into dotted keys with raw string values.

    Booleans render as ``true``/``false``, sequences join with ``,``, temporal
    values use ISO-8601, and ``None`` values are skipped.

    Examples
    --------
    >>> flatten({"db": {"host": "localhost", "port": 5432}, "debug": False, "tags": ["a", "b"], "gone": None})
    {'db.host': 'localhost', 'db.port': '5432', 'debug': 'false', 'tags': 'a,b'}
    """

    result: dict[str, str] = {}
    for key, value in mapping.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            result.update(flatten(value, dotted))
        elif value is not None:
            result[dotted] = _raw_text(value)
    return result


def _raw_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(_raw_text(item) for item in value)
    return str(value)
