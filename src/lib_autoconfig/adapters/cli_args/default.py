"""Command-line argument adapter.

Purpose
-------
Tokenize an argument vector into ``(key, value-or-None)`` pairs following the
single-dash convention: a token starting with ``-`` introduces a key; the
following token is its value unless it starts with ``-`` itself, in which case
the key is a flag present without a value.

System Role
-----------
Consumed by :meth:`lib_autoconfig.core.AutoConfig.with_command_line_arguments`,
which stores valued keys with :meth:`SettingsStore.add` and flags with
:meth:`SettingsStore.add_flag`.
"""

from __future__ import annotations

from typing import Sequence

from ...observability import log_debug


class DefaultCommandLineParser:
    """Split argument vectors into key/value pairs."""

    def parse(self, args: Sequence[str]) -> list[tuple[str, str | None]]:
        """Return ``(key, value)`` pairs in argument order; flags carry ``None``.

        Leading dashes are stripped from keys; tokens that do not follow a key
        are ignored.

        Examples
        --------
        >>> DefaultCommandLineParser().parse(["-a", "b", "-c"])
        [('a', 'b'), ('c', None)]
        >>> DefaultCommandLineParser().parse(["positional", "--level", "debug", "-v", "-q"])
        [('level', 'debug'), ('v', None), ('q', None)]
        """

        pairs: list[tuple[str, str | None]] = []
        index = 0
        while index < len(args):
            token = args[index]
            index += 1
            if not _is_key(token):
                continue
            key = token.lstrip("-")
            if not key:
                continue
            if index < len(args) and not _is_key(args[index]):
                pairs.append((key, args[index]))
                index += 1
            else:
                pairs.append((key, None))
        log_debug("command_line_parsed", source="command line", path=None, keys=len(pairs))
        return pairs


def _is_key(token: str) -> bool:
    return token.startswith("-")
