"""Public package surface for ``lib_autoconfig``.

Settings are declared next to the code that reads them and resolved on every
access against a provenance-preserving store, tolerating naming convention
differences between sources (``SERVER_PORT``) and code (``serverPort``).
"""

from __future__ import annotations

from .application.matching import KeyMatch, match_key
from .application.resolution import MISSING, describe_source, resolve
from .core import AutoConfig, default_config, default_store, reset_default_config
from .domain.errors import (
    AutoConfigError,
    InvalidFormat,
    MissingKeyError,
    ParseFailureError,
    SettingParseError,
    SourceUnavailableError,
)
from .domain.keys import canonical_form
from .domain.store import Entry, SettingsStore, Source
from .domain.types import (
    BOOLEAN,
    DOUBLE,
    DURATION,
    FLAG,
    FLOAT,
    INSTANT,
    INT,
    LOCAL_DATE,
    LOCAL_DATE_TIME,
    LOCAL_TIME,
    LONG,
    STRING,
    SettingType,
    enum_type,
    list_type,
    set_type,
)
from .observability import bind_trace_id, get_logger
from .settings import Flag, Group, Setting

__all__ = [
    "AutoConfig",
    "AutoConfigError",
    "BOOLEAN",
    "DOUBLE",
    "DURATION",
    "Entry",
    "FLAG",
    "FLOAT",
    "Flag",
    "Group",
    "INSTANT",
    "INT",
    "InvalidFormat",
    "KeyMatch",
    "LOCAL_DATE",
    "LOCAL_DATE_TIME",
    "LOCAL_TIME",
    "LONG",
    "MISSING",
    "MissingKeyError",
    "ParseFailureError",
    "STRING",
    "Setting",
    "SettingParseError",
    "SettingType",
    "SettingsStore",
    "Source",
    "SourceUnavailableError",
    "bind_trace_id",
    "canonical_form",
    "default_config",
    "default_store",
    "describe_source",
    "enum_type",
    "get_logger",
    "list_type",
    "match_key",
    "reset_default_config",
    "resolve",
    "set_type",
]
