"""Structured logging for settings ingestion.

Purpose
    Report which sources fed the settings store, how many entries each one
    contributed, and why a source could not be read, as machine-readable log
    records that host applications may route wherever they like.

Contents
    - ``TRACE_ID``: context variable holding the identifier attached to records.
    - ``get_logger``: the ``lib_autoconfig`` logger, silent until configured.
    - ``bind_trace_id``: set or drop the identifier for the current context.
    - ``log_debug`` / ``log_info`` / ``log_error``: level-specific emitters.
    - ``make_event``: payload builder shared by ingestion call sites.

System Integration
    Only the ingestion adapters and the ``AutoConfig`` facade log. The store,
    matcher, coercers, and resolution never do; their failures propagate to
    the caller that performed the lookup.

Record Shape
    Every record carries ``extra={"context": {...}}`` where the mapping always
    starts with ``trace_id`` followed by the call-site fields.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_autoconfig_trace_id", default=None)
"""Identifier copied into the context of every record emitted in this context."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_autoconfig")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger; attach handlers to it to see ingestion events."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Attach *trace_id* to subsequent records, or stop attaching one with ``None``.

    Examples
    --------
    >>> bind_trace_id("startup-1")
    >>> TRACE_ID.get()
    'startup-1'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _emit(logging.INFO, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _emit(logging.ERROR, message, fields)


def make_event(source: str, path: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the fields describing one ingestion step.

    Parameters
    ----------
    source:
        Kind of source (``"file"``, ``"url"``, ``"env"``, ``"map"``, ...).
    path:
        File path, URL, or resource name, or ``None`` for sources without one.
    payload:
        Extra fields such as entry counts; copied, never mutated.

    Examples
    --------
    >>> make_event("file", "/etc/app.conf", {"entries": 2})
    {'source': 'file', 'path': '/etc/app.conf', 'entries': 2}
    """

    return {"source": source, "path": path, **(payload or {})}


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    if not _LOGGER.isEnabledFor(level):
        return
    context: dict[str, Any] = {"trace_id": TRACE_ID.get(), **fields}
    _LOGGER.log(level, message, extra={"context": context})
