"""Composition root for ``lib_autoconfig``.

Purpose
-------
Provide the fluent entry point that wires ingestion adapters (files, URLs,
package resources, environment, command line, in-memory maps) into a
:class:`~lib_autoconfig.domain.store.SettingsStore` and exposes typed lookups
and provenance queries over it.

Contents
--------
* :data:`_FILE_LOADERS` – mapping of file suffixes to loader instances.
* :class:`AutoConfig` – fluent facade over one store.
* :func:`default_config` / :func:`default_store` – lazily-initialised
  process-wide instance seeded with environment variables.
* :func:`reset_default_config` – clear and re-seed the process-wide instance.

System Role
-----------
This module connects adapters with the store while emitting structured
observability signals. It is the canonical location for wiring new source
kinds. The store, matcher, and coercers stay free of global state; only the
accessor functions here know about the process-wide instance.
"""

from __future__ import annotations

import os
import sys
from pathlib import PurePosixPath
from typing import Mapping, Sequence, TypeVar
from urllib.parse import urlparse

from .adapters.cli_args.default import DefaultCommandLineParser
from .adapters.env.default import DefaultEnvLoader
from .adapters.file_loaders.properties import PropertiesFileLoader
from .adapters.file_loaders.structured import JSONFileLoader, TOMLFileLoader, YAMLFileLoader
from .adapters.remote.default import DefaultResourceLoader, DefaultURLLoader
from .application.ports import CommandLineParser, EnvLoader, FileLoader, ResourceLoader, URLLoader
from .application.resolution import MISSING, _Missing, describe_source, resolve
from .domain.store import SettingsStore, Source
from .domain.types import FLAG, STRING, SettingType
from .observability import log_info, make_event

T = TypeVar("T")

# Structured loaders keyed by suffix; anything else is read as a properties file.
_FILE_LOADERS: dict[str, FileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}
_PROPERTIES_LOADER: FileLoader = PropertiesFileLoader()

ENVIRONMENT_SOURCE = Source("environment variables")
SYSTEM_PROPERTIES_SOURCE = Source("system properties")
COMMAND_LINE_SOURCE = Source("command line parameters")


def loader_for(name: str) -> FileLoader:
    """Return the loader matching the suffix of *name* (path, URL path, or resource).

    Examples
    --------
    >>> type(loader_for("settings.TOML")).__name__
    'TOMLFileLoader'
    >>> type(loader_for("app.conf")).__name__
    'PropertiesFileLoader'
    """

    return _FILE_LOADERS.get(PurePosixPath(name).suffix.lower(), _PROPERTIES_LOADER)


class AutoConfig:
    """Fluent facade feeding one settings store and answering lookups against it.

    Why
    ----
    Applications assemble configuration from several sources in a fixed order
    at startup; chaining ``with_*`` calls keeps that order visible in one
    expression. Later sources override earlier ones for exact key matches.

    Parameters
    ----------
    store:
        Store to populate; a fresh one is created when omitted.
    env_loader / command_line_parser / url_loader / resource_loader:
        Collaborators, replaceable for tests or custom deployments.

    Examples
    --------
    >>> from lib_autoconfig.domain.types import INT
    >>> config = AutoConfig().with_map({"SERVER_PORT": "8080"}).with_command_line_arguments(["-verbose"])
    >>> config.get("serverPort", INT), config.get_flag("verbose"), config.get_flag("quiet")
    (8080, True, False)
    >>> config.get_key_source("serverPort").startswith('Key "serverPort" was read as "SERVER_PORT" from a map inserted by ')
    True
    """

    def __init__(
        self,
        store: SettingsStore | None = None,
        *,
        env_loader: EnvLoader | None = None,
        command_line_parser: CommandLineParser | None = None,
        url_loader: URLLoader | None = None,
        resource_loader: ResourceLoader | None = None,
    ) -> None:
        self._store = store if store is not None else SettingsStore()
        self._env_loader = env_loader or DefaultEnvLoader()
        self._command_line_parser = command_line_parser or DefaultCommandLineParser()
        self._url_loader = url_loader or DefaultURLLoader()
        self._resource_loader = resource_loader or DefaultResourceLoader()

    @property
    def store(self) -> SettingsStore:
        return self._store

    def with_config(self, path: str | os.PathLike[str]) -> AutoConfig:
        """Add every pair of the configuration file at *path*.

        Raises
        ------
        SourceUnavailableError
            ``Failed to read file: <absolute path>`` when the file cannot be read.
        InvalidFormat
            When a structured file is malformed.
        """

        absolute = os.path.abspath(os.fspath(path))
        pairs = loader_for(absolute).load(absolute)
        return self._ingest(pairs, Source.config_file(absolute), kind="file", path=absolute)

    def with_configs(self, *paths: str | os.PathLike[str]) -> AutoConfig:
        """Add several configuration files in order."""

        for path in paths:
            self.with_config(path)
        return self

    def with_resource_config(self, package: str, resource: str) -> AutoConfig:
        """Add the pairs of *resource* bundled inside *package*.

        Raises
        ------
        SourceUnavailableError
            ``Failed to read resource: <resource>``.
        """

        payload = self._resource_loader.fetch(package, resource)
        pairs = loader_for(resource).loads(payload, origin=resource)
        return self._ingest(pairs, Source(f'config file resource at "{resource}"'), kind="resource", path=resource)

    def with_url_config(self, url: str) -> AutoConfig:
        """Add the pairs of the document served at *url* (``http``, ``https``, ``file``).

        Raises
        ------
        SourceUnavailableError
            ``Failed to read URL: <url>``.
        """

        payload = self._url_loader.fetch(url)
        pairs = loader_for(urlparse(url).path).loads(payload, origin=url)
        return self._ingest(pairs, Source(f"config file at URL: {url}"), kind="url", path=url)

    def with_environment_variables(self, prefix: str | None = None) -> AutoConfig:
        """Add environment variables, optionally only those under *prefix*."""

        return self._ingest(self._env_loader.load(prefix), ENVIRONMENT_SOURCE, kind="env")

    def with_system_properties(self, properties: Mapping[str, object] | None = None) -> AutoConfig:
        """Add process-level properties supplied by the embedding application."""

        pairs = {str(key): str(value) for key, value in (properties or {}).items()}
        return self._ingest(pairs, SYSTEM_PROPERTIES_SOURCE, kind="properties")

    def with_command_line_arguments(self, args: Sequence[str] | None = None) -> AutoConfig:
        """Add command-line parameters; defaults to ``sys.argv[1:]``.

        Valued keys are added as-is and bare keys as present flags.
        """

        pairs = self._command_line_parser.parse(sys.argv[1:] if args is None else args)
        for key, value in pairs:
            if value is None:
                self._store.add_flag(key, COMMAND_LINE_SOURCE)
            else:
                self._store.add(key, value, COMMAND_LINE_SOURCE)
        log_info("source_added", **make_event("command line", None, {"entries": len(pairs)}))
        return self

    def with_properties(self, properties: Mapping[object, object], source: Source | str | None = None) -> AutoConfig:
        """Add a property bag, stringifying keys and values.

        Without an explicit *source* the label records the inserting caller
        (``properties inserted by <module>.<function>``).
        """

        label = _source(source) if source is not None else Source.inserted_by("properties", stacklevel=2)
        pairs = {str(key): str(value) for key, value in properties.items()}
        return self._ingest(pairs, label, kind="properties")

    def with_map(self, mapping: Mapping[str, str], source: Source | str | None = None) -> AutoConfig:
        """Add an in-memory mapping.

        Without an explicit *source* the label records the inserting caller
        (``a map inserted by <module>.<function>``).
        """

        label = _source(source) if source is not None else Source.inserted_by("a map", stacklevel=2)
        return self._ingest(mapping, label, kind="map")

    def clear(self) -> AutoConfig:
        """Drop every entry so the configuration can be rebuilt."""

        self._store.clear()
        return self

    def get(self, key: str, setting_type: SettingType[T] = STRING, default: T | _Missing = MISSING) -> T:  # type: ignore[assignment]
        """Resolve *key* and coerce it with *setting_type*.

        Raises
        ------
        MissingKeyError
            Nothing matched and no default was supplied.
        ParseFailureError
            The raw value was rejected by the coercer.
        """

        return resolve(self._store, key, setting_type, default)

    def get_flag(self, key: str) -> bool:
        """Return ``True`` when *key* is present, ``False`` otherwise."""

        return resolve(self._store, key, FLAG, False)

    def get_all(self) -> dict[str, str]:
        """Return every key with its raw value (last-added value per exact key)."""

        return self._store.all()

    def get_key_source(self, key: str) -> str:
        """Describe which source supplied *key*.

        Raises
        ------
        MissingKeyError
            When *key* cannot be resolved.
        """

        return describe_source(self._store, key)

    def _ingest(self, pairs: Mapping[str, str], source: Source, *, kind: str, path: str | None = None) -> AutoConfig:
        for key, value in pairs.items():
            self._store.add(key, value, source)
        log_info("source_added", **make_event(kind, path, {"entries": len(pairs), "description": source.description}))
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._store!r})"


def _source(source: Source | str) -> Source:
    return source if isinstance(source, Source) else Source(source)


_DEFAULT_CONFIG: AutoConfig | None = None


def default_config() -> AutoConfig:
    """Return the process-wide :class:`AutoConfig`, creating it on first use.

    The instance starts out seeded with environment variables. It performs no
    locking; applications that mutate it from several threads must serialise
    those calls.
    """

    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = AutoConfig().with_environment_variables()
    return _DEFAULT_CONFIG


def default_store() -> SettingsStore:
    """Return the store behind :func:`default_config`."""

    return default_config().store


def reset_default_config() -> AutoConfig:
    """Clear the process-wide configuration and re-seed it from the environment."""

    return default_config().clear().with_environment_variables()


__all__ = [
    "AutoConfig",
    "default_config",
    "default_store",
    "reset_default_config",
    "loader_for",
]
