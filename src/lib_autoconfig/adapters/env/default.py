"""Environment variable adapter.

Purpose
-------
Expose process environment variables as raw key/value pairs. Keys are passed
through verbatim (``SERVER_PORT`` stays ``SERVER_PORT``); the key matcher
reconciles naming conventions at lookup time, so no nesting or coercion
happens here.

Key behaviours
--------------
* Reads an injectable ``environ`` mapping (defaults to :data:`os.environ`).
* Optionally restricts the payload to one prefix and strips it
  (``DEMO_SERVER_PORT`` → ``SERVER_PORT`` for prefix ``DEMO``).
* Emits structured logging via :mod:`lib_autoconfig.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...observability import log_debug


class DefaultEnvLoader:
    """Load environment variables as raw key/value pairs."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Read *environ* instead of :data:`os.environ` when given (an empty mapping counts)."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str | None = None) -> dict[str, str]:
        """Return every variable, or only those carrying *prefix* with the prefix stripped.

        Parameters
        ----------
        prefix:
            Optional prefix filter. The loader appends ``_`` if missing.

        Side Effects
        ------------
        Emits ``env_variables_loaded`` debug events.

        Examples
        --------
        >>> env = {'DEMO_SERVER_PORT': '8080', 'OTHER': 'x'}
        >>> DefaultEnvLoader(environ=env).load('DEMO')
        {'SERVER_PORT': '8080'}
        >>> sorted(DefaultEnvLoader(environ=env).load())
        ['DEMO_SERVER_PORT', 'OTHER']
        """

        if prefix and not prefix.endswith("_"):
            prefix = f"{prefix}_"
        collected: dict[str, str] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if stripped:
                collected[stripped] = value
        log_debug("env_variables_loaded", source="env", path=None, keys=len(collected))
        return collected
