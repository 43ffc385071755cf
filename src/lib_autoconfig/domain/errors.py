"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the resolution engine, the
ingestion adapters, and consuming applications. The hierarchy lives in the
domain layer to respect the Clean Architecture dependency rule (outer layers
may depend on inner layers, not vice versa).

Contents
--------
* :class:`AutoConfigError` – umbrella base class for all library failures.
* :class:`MissingKeyError` – a requested key has no entry and no default.
* :class:`ParseFailureError` – a matched raw value could not be coerced.
* :class:`SourceUnavailableError` – an ingestion source could not be read.
* :class:`InvalidFormat` – a readable source is syntactically malformed.
* :class:`SettingParseError` – coercer-level failure carrying a short reason.

System Role
-----------
Coercers raise :class:`SettingParseError`; resolution turns it into
:class:`ParseFailureError` with the resolved key and raw value attached.
Callers catch :class:`AutoConfigError` to handle all library failures
uniformly.
"""

from __future__ import annotations


class AutoConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_autoconfig``.

    Catch it around startup wiring to report any configuration problem in one
    place; the subclasses carry the details.
    """


class MissingKeyError(AutoConfigError):
    """Raised when a required key has no matching entry and no default.

    Examples
    --------
    >>> str(MissingKeyError("server.port"))
    'Required key "server.port" is missing'
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Required key "{key}" is missing')


class ParseFailureError(AutoConfigError):
    """Raised when a matched raw value cannot be coerced to the requested type.

    Attributes
    ----------
    key:
        Lookup key the setting resolved against.
    value:
        Raw string found in the store.
    reason:
        Short, type-specific explanation supplied by the coercer.

    Examples
    --------
    >>> str(ParseFailureError("foo", "test", "must be an Int number"))
    'Failed to parse setting "foo", the value is "test", but must be an Int number'
    """

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f'Failed to parse setting "{key}", the value is "{value}", but {reason}')


class SourceUnavailableError(AutoConfigError):
    """Raised when an ingestion collaborator cannot obtain its raw data.

    Typical Sources
    ---------------
    Unreadable files, unresolvable URLs, and missing package resources. The
    message names the unavailable resource.
    """


class InvalidFormat(AutoConfigError):
    """Raised when a readable source cannot be parsed into key/value pairs.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`tomllib`, :mod:`json`, :mod:`yaml`).
    """


class SettingParseError(ValueError):
    """Coercer failure carrying a short, type-specific reason string.

    Why
    ----
    Coercers know *why* a raw string is unacceptable but not which key it came
    from; resolution adds that context when wrapping the error.

    Examples
    --------
    >>> SettingParseError("must be a Duration").reason
    'must be a Duration'
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
