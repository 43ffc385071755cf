"""String-to-typed-value coercion.

Purpose
-------
Turn the raw strings held by the settings store into typed Python values with
uniform failure reporting. Each coercer is a :class:`SettingType` pairing a
``transform`` (raw string → value) with a ``render`` (value → canonical text).

Contents
--------
* :class:`SettingType` – composable coercer value object.
* Scalar coercers: :data:`STRING`, :data:`INT`, :data:`LONG`, :data:`FLOAT`,
  :data:`DOUBLE`, :data:`BOOLEAN`, :data:`FLAG`.
* Temporal coercers: :data:`INSTANT`, :data:`DURATION`, :data:`LOCAL_TIME`,
  :data:`LOCAL_DATE`, :data:`LOCAL_DATE_TIME`.
* Factories: :func:`enum_type`, :func:`list_type`, :func:`set_type`.

System Role
-----------
Pure functions with no state and no I/O. Failures raise
:class:`~lib_autoconfig.domain.errors.SettingParseError`; the resolution layer
adds the key and raw value before surfacing them to callers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Final, Generic, TypeVar

from .errors import SettingParseError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

Separator = str | re.Pattern[str]

#: Default collection separator: a comma optionally followed by whitespace.
DEFAULT_SEPARATOR: Final[re.Pattern[str]] = re.compile(r",\s*")

_INTEGER: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_INT_RANGE: Final[tuple[int, int]] = (-(2**31), 2**31 - 1)
_LONG_RANGE: Final[tuple[int, int]] = (-(2**63), 2**63 - 1)

_DURATION: Final[re.Pattern[str]] = re.compile(
    r"([-+]?)P"
    r"(?:([-+]?[0-9]+)D)?"
    r"(T(?:([-+]?[0-9]+)H)?(?:([-+]?[0-9]+)M)?(?:([-+]?[0-9]+)(?:[.,]([0-9]{0,9}))?S)?)?",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class SettingType(Generic[T]):
    """A named coercer from raw strings to ``T``.

    Attributes
    ----------
    name:
        Human-readable type name used in diagnostics (``"Int"``,
        ``"List<Int>"``).
    transform:
        Callable mapping a raw string to ``T`` or raising
        :class:`SettingParseError`.
    render:
        Callable producing the canonical textual form of a value; defaults to
        :class:`str`.

    Examples
    --------
    >>> INT.parse("42")
    42
    >>> INT.format(42)
    '42'
    """

    name: str
    transform: Callable[[str], T]
    render: Callable[[T], str] = field(default=str)

    def parse(self, raw: str) -> T:
        """Coerce *raw* into ``T``."""

        return self.transform(raw)

    def format(self, value: T) -> str:
        """Return the canonical textual form of *value*."""

        return self.render(value)


def _integer(raw: str, bounds: tuple[int, int], reason: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise SettingParseError(reason)
    value = int(raw)
    low, high = bounds
    if not low <= value <= high:
        raise SettingParseError(reason)
    return value


def _floating(raw: str, reason: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise SettingParseError(reason) from exc


def _boolean(raw: str) -> bool:
    return raw in ("true", "yes", "1")


def _render_boolean(value: bool) -> str:
    return "true" if value else "false"


def _instant(raw: str) -> datetime:
    text = raw[:-1] + "+00:00" if raw[-1:] in ("Z", "z") else raw
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise SettingParseError("must be an Instant") from exc
    if value.tzinfo is None:
        raise SettingParseError("must be an Instant")
    return value.astimezone(timezone.utc)


def _render_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _duration(raw: str) -> timedelta:
    """Parse an ISO-8601 duration limited to days, hours, minutes and seconds.

    Examples
    --------
    >>> _duration("PT20.345S")
    datetime.timedelta(seconds=20, microseconds=345000)
    >>> _duration("-P1DT2H")
    datetime.timedelta(days=-2, seconds=79200)
    """

    match = _DURATION.fullmatch(raw)
    if match is None:
        raise SettingParseError("must be a Duration")
    sign, days, time_part, hours, minutes, seconds, fraction = match.groups()
    if time_part == "T" or (days is None and time_part is None):
        raise SettingParseError("must be a Duration")
    whole_seconds = int(seconds or 0)
    nanos = int((fraction or "").ljust(9, "0")) if fraction else 0
    if whole_seconds < 0 or (seconds or "").startswith("-"):
        nanos = -nanos
    try:
        value = timedelta(
            days=int(days or 0),
            hours=int(hours or 0),
            minutes=int(minutes or 0),
            seconds=whole_seconds,
            microseconds=nanos / 1000,
        )
        return -value if sign == "-" else value
    except (OverflowError, ValueError) as exc:
        raise SettingParseError("must be a Duration") from exc


def _render_duration(value: timedelta) -> str:
    """Render *value* in the ``PTnHnMn.nS`` form (days folded into hours).

    Examples
    --------
    >>> _render_duration(timedelta(seconds=20, microseconds=345000))
    'PT20.345S'
    >>> _render_duration(timedelta(days=2))
    'PT48H'
    >>> _render_duration(timedelta(0))
    'PT0S'
    """

    if value < timedelta(0):
        return "-" + _render_duration(-value)
    micros = value // timedelta(microseconds=1)
    total_seconds, fraction = divmod(micros, 1_000_000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = "PT"
    if hours:
        text += f"{hours}H"
    if minutes:
        text += f"{minutes}M"
    if seconds or fraction or text == "PT":
        text += str(seconds)
        if fraction:
            text += "." + f"{fraction:06d}".rstrip("0")
        text += "S"
    return text


def _local_time(raw: str) -> time:
    try:
        value = time.fromisoformat(raw)
    except ValueError as exc:
        raise SettingParseError("must be a LocalTime") from exc
    if value.tzinfo is not None:
        raise SettingParseError("must be a LocalTime")
    return value


def _local_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise SettingParseError("must be a LocalDate") from exc


def _local_date_time(raw: str) -> datetime:
    if "T" not in raw and "t" not in raw:
        raise SettingParseError("must be a LocalDateTime")
    try:
        value = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise SettingParseError("must be a LocalDateTime") from exc
    if value.tzinfo is not None:
        raise SettingParseError("must be a LocalDateTime")
    return value


STRING: Final[SettingType[str]] = SettingType("String", str)
INT: Final[SettingType[int]] = SettingType("Int", lambda raw: _integer(raw, _INT_RANGE, "must be an Int number"))
LONG: Final[SettingType[int]] = SettingType("Long", lambda raw: _integer(raw, _LONG_RANGE, "must be a Long number"))
FLOAT: Final[SettingType[float]] = SettingType("Float", lambda raw: _floating(raw, "must be a Float number"))
DOUBLE: Final[SettingType[float]] = SettingType("Double", lambda raw: _floating(raw, "must be a Double number"))
BOOLEAN: Final[SettingType[bool]] = SettingType("Boolean", _boolean, _render_boolean)
#: Presence coercer used by flags: any value that is present reads as ``True``.
FLAG: Final[SettingType[bool]] = SettingType("Flag", lambda raw: True, _render_boolean)
INSTANT: Final[SettingType[datetime]] = SettingType("Instant", _instant, _render_instant)
DURATION: Final[SettingType[timedelta]] = SettingType("Duration", _duration, _render_duration)
LOCAL_TIME: Final[SettingType[time]] = SettingType("LocalTime", _local_time, time.isoformat)
LOCAL_DATE: Final[SettingType[date]] = SettingType("LocalDate", _local_date, date.isoformat)
LOCAL_DATE_TIME: Final[SettingType[datetime]] = SettingType("LocalDateTime", _local_date_time, datetime.isoformat)


def enum_type(enum: type[E]) -> SettingType[E]:
    """Return a coercer matching raw strings against the member names of *enum*.

    An exact, case-sensitive match wins; otherwise names are compared after
    :meth:`str.casefold`. Unknown values fail listing every member name in
    declaration order.

    Examples
    --------
    >>> class Letters(Enum):
    ...     Alpha = 1
    ...     Beta = 2
    >>> enum_type(Letters).parse("beTA")
    <Letters.Beta: 2>
    >>> enum_type(Letters).parse("Gamma")
    Traceback (most recent call last):
    ...
    lib_autoconfig.domain.errors.SettingParseError: possible values are [Alpha, Beta]
    """

    members = enum.__members__
    canonical = [member.name for member in enum]

    def transform(raw: str) -> E:
        if raw in members:
            return members[raw]
        folded = raw.casefold()
        for name, member in members.items():
            if name.casefold() == folded:
                return member
        raise SettingParseError(f"possible values are [{', '.join(canonical)}]")

    return SettingType(enum.__name__, transform, lambda member: member.name)


def _split(raw: str, separator: Separator | None) -> list[str]:
    if isinstance(separator, str):
        return raw.split(separator)
    pattern = DEFAULT_SEPARATOR if separator is None else separator
    pieces: list[str] = []
    start = 0
    for match in pattern.finditer(raw):
        pieces.append(raw[start : match.start()])
        start = match.end()
    pieces.append(raw[start:])
    return pieces


def list_type(element: SettingType[T], separator: Separator | None = None) -> SettingType[list[T]]:
    """Return a coercer for ordered sequences of *element* values.

    Parameters
    ----------
    element:
        Coercer applied to every piece independently; the first failure aborts
        the whole collection.
    separator:
        ``None`` for the default ``,\\s*`` pattern, a ``str`` for a literal
        separator, or a compiled pattern.

    Examples
    --------
    >>> list_type(INT).parse("1,2,3,2,1")
    [1, 2, 3, 2, 1]
    >>> list_type(INT, ".").parse("1.2.3")
    [1, 2, 3]
    """

    def transform(raw: str) -> list[T]:
        return [element.parse(piece) for piece in _split(raw, separator)]

    def render(values: list[T]) -> str:
        return _join(values, element, separator)

    return SettingType(f"List<{element.name}>", transform, render)


def set_type(element: SettingType[T], separator: Separator | None = None) -> SettingType[frozenset[T]]:
    """Return a coercer for unordered, deduplicated collections of *element* values.

    Examples
    --------
    >>> sorted(set_type(INT).parse("1,2,3,2,1"))
    [1, 2, 3]
    >>> sorted(set_type(INT, re.compile("[A-z]+")).parse("1AbC2teSt3"))
    [1, 2, 3]
    """

    def transform(raw: str) -> frozenset[T]:
        return frozenset(element.parse(piece) for piece in _split(raw, separator))

    def render(values: frozenset[T]) -> str:
        return _join(sorted(values, key=element.format), element, separator)

    return SettingType(f"Set<{element.name}>", transform, render)


def _join(values: list[T], element: SettingType[T], separator: Separator | None) -> str:
    glue = separator if isinstance(separator, str) else ","
    return glue.join(element.format(value) for value in values)


#: Coercers addressable by name (CLI ``--type`` option).
BY_NAME: Final[dict[str, SettingType[Any]]] = {
    "string": STRING,
    "int": INT,
    "long": LONG,
    "float": FLOAT,
    "double": DOUBLE,
    "boolean": BOOLEAN,
    "flag": FLAG,
    "instant": INSTANT,
    "duration": DURATION,
    "local-time": LOCAL_TIME,
    "local-date": LOCAL_DATE,
    "local-date-time": LOCAL_DATE_TIME,
}
