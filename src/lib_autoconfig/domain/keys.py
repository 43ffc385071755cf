"""Convention-agnostic key normalisation.

Purpose
-------
Collapse the naming conventions found in configuration sources
(``SERVER_PORT``, ``server-port``, ``serverPort``, ``server_port``) into a
single canonical string so lookups can ignore them.

Contents
--------
* :func:`canonical_form` – split a key into word tokens and rejoin them
  lowercase without separators.
* :func:`split_words` – the tokenizer used by :func:`canonical_form`.

System Role
-----------
Pure helpers with no I/O; used by the settings store when answering
normalized lookups. Keys are stored verbatim and only normalized here, at
lookup time.
"""

from __future__ import annotations

import re
from typing import Final

#: Word boundaries: a lowercase→uppercase transition, a hyphen, or an underscore.
_WORD_BOUNDARY: Final[re.Pattern[str]] = re.compile(r"(?<=[a-z])(?=[A-Z])|[-_]")


def split_words(key: str) -> list[str]:
    """Return the lowercase word tokens of *key*.

    Dots are not boundaries; they separate group segments and survive
    normalisation untouched.

    Examples
    --------
    >>> split_words("serverPort")
    ['server', 'port']
    >>> split_words("SERVER_PORT")
    ['server', 'port']
    >>> split_words("outer.sub-group.key")
    ['outer.sub', 'group.key']
    """

    return [token.lower() for token in _WORD_BOUNDARY.split(key) if token]


def canonical_form(key: str) -> str:
    """Return the canonical form of *key* used for convention-agnostic matching.

    Examples
    --------
    >>> {canonical_form(k) for k in ("foo-bar", "FOO_BAR", "fooBar", "foo_bar")}
    {'foobar'}
    >>> canonical_form("typesGroup.localDateTime")
    'typesgroup.localdatetime'
    """

    return "".join(split_words(key))
