"""`.properties` / `.conf` dialect adapter.

Purpose
-------
Parse the line-oriented ``key = value`` dialect used by ``.properties`` and
``.conf`` files into flat key/value pairs, keeping keys exactly as written.

Contents
--------
* :class:`PropertiesFileLoader` – file and payload entry points.
* :func:`parse_properties` – dialect parser.
* Helpers (`_logical_lines`, `_split_pair`, `_unescape`) that narrate the
  parsing stages.

System Role
-----------
Default loader for every file whose suffix does not name a structured format.
Feeds :class:`lib_autoconfig.core.AutoConfig` without any key normalisation;
matching happens later, at lookup time.
"""

from __future__ import annotations

from typing import Final, Iterable, Iterator

from .structured import BaseFileLoader
from ...observability import log_debug

_SEPARATORS: Final[frozenset[str]] = frozenset("=:")
_WHITESPACE: Final[str] = " \t\f"
_ESCAPES: Final[dict[str, str]] = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesFileLoader(BaseFileLoader):
    """Load ``.properties`` and ``.conf`` files."""

    format_name = "properties"

    def loads(self, payload: bytes, *, origin: str) -> dict[str, str]:
        """Return the pairs declared in a properties payload.

        Examples
        --------
        >>> PropertiesFileLoader().loads(b"SERVER_PORT = 2\\n# comment\\n", origin="demo")
        {'SERVER_PORT': '2'}
        """

        result = parse_properties(self._decode(payload, origin=origin).splitlines())
        log_debug("config_file_loaded", source="file", path=origin, format=self.format_name, keys=len(result))
        return result


def parse_properties(lines: Iterable[str]) -> dict[str, str]:
    """Parse properties *lines* into an ordered mapping; later duplicates win.

    Keys end at the first unescaped ``=``, ``:``, or whitespace. Lines starting
    with ``#`` or ``!`` are comments, a trailing odd backslash continues the
    line, and ``\\t``, ``\\n``, ``\\r``, ``\\f``, ``\\uXXXX`` escapes are decoded.

    Examples
    --------
    >>> parse_properties(["a = 1", "b: 2", "c 3", "! note", "d = x, \\\\", "    y"])
    {'a': '1', 'b': '2', 'c': '3', 'd': 'x, y'}
    >>> parse_properties(["path = C\\\\:\\\\\\\\temp", "flag"])
    {'path': 'C:\\\\temp', 'flag': ''}
    """

    result: dict[str, str] = {}
    for line in _logical_lines(lines):
        key, value = _split_pair(line)
        result[_unescape(key)] = _unescape(value)
    return result


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Join continued lines and drop blanks and comments."""

    pending: str | None = None
    for raw_line in lines:
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line
        if _continues(line):
            pending = line[:-1]
            continue
        pending = None
        yield line
    if pending:
        yield pending


def _continues(line: str) -> bool:
    """Return ``True`` when *line* ends in an odd number of backslashes."""

    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_pair(line: str) -> tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""

    index = 0
    escaped = False
    while index < len(line):
        char = line[index]
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest[:1] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    """Decode backslash escapes.

    Examples
    --------
    >>> _unescape("a\\\\tb\\\\u0041\\\\=")
    'a\\tbA='
    """

    if "\\" not in text:
        return text
    chars: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        if char != "\\" or index + 1 == len(text):
            chars.append(char)
            index += 1
            continue
        marker = text[index + 1]
        if marker == "u" and len(text) >= index + 6:
            try:
                chars.append(chr(int(text[index + 2 : index + 6], 16)))
                index += 6
                continue
            except ValueError:
                pass
        chars.append(_ESCAPES.get(marker, marker))
        index += 2
    return "".join(chars)
