"""URL and package-resource adapters.

Purpose
-------
Fetch raw configuration payloads that do not live at a plain filesystem path:
documents served over HTTP(S) (or ``file://`` URLs) and data files shipped
inside an installed Python package.

Contents
--------
* :class:`DefaultURLLoader` – HTTP(S) via :mod:`requests`, ``file://`` via the
  filesystem.
* :class:`DefaultResourceLoader` – :mod:`importlib.resources` lookups.

System Role
-----------
Both loaders return raw bytes; :class:`lib_autoconfig.core.AutoConfig` picks the
dialect parser from the resource name. Failures surface as
:class:`~lib_autoconfig.domain.errors.SourceUnavailableError` naming the
resource.
"""

from __future__ import annotations

import urllib.parse
import urllib.request
from importlib import resources
from pathlib import Path

import requests
from requests.exceptions import RequestException

from ...domain.errors import SourceUnavailableError
from ...observability import log_debug, log_error


class DefaultURLLoader:
    """Fetch configuration documents by URL."""

    def __init__(self, *, timeout: float = 10.0) -> None:
        """Store the request *timeout* in seconds used for HTTP(S) fetches."""

        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Return the payload served at *url*.

        Raises
        ------
        SourceUnavailableError
            On network errors, non-2xx responses, unreadable ``file://``
            targets, or unsupported schemes.
        """

        parsed = urllib.parse.urlparse(url)
        if parsed.scheme == "file":
            return self._fetch_file(url, parsed)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            log_error("source_unavailable", source="url", path=url, error="unsupported URL")
            raise SourceUnavailableError(f"Failed to read URL: {url}")
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except RequestException as exc:
            log_error("source_unavailable", source="url", path=url, error=str(exc))
            raise SourceUnavailableError(f"Failed to read URL: {url}") from exc
        log_debug("url_config_fetched", source="url", path=url, status=resp.status_code, size=len(resp.content))
        return resp.content

    @staticmethod
    def _fetch_file(url: str, parsed: urllib.parse.ParseResult) -> bytes:
        path = Path(urllib.request.url2pathname(parsed.path))
        try:
            payload = path.read_bytes()
        except OSError as exc:
            log_error("source_unavailable", source="url", path=url, error=str(exc))
            raise SourceUnavailableError(f"Failed to read URL: {url}") from exc
        log_debug("url_config_fetched", source="url", path=url, size=len(payload))
        return payload


class DefaultResourceLoader:
    """Read data files bundled inside installed packages."""

    def fetch(self, package: str, resource: str) -> bytes:
        """Return the bytes of *resource* inside *package*.

        Raises
        ------
        SourceUnavailableError
            When the package cannot be imported or the resource is missing.
        """

        try:
            payload = resources.files(package).joinpath(resource).read_bytes()
        except (ModuleNotFoundError, OSError, TypeError) as exc:
            log_error("source_unavailable", source="resource", path=resource, package=package, error=str(exc))
            raise SourceUnavailableError(f"Failed to read resource: {resource}") from exc
        log_debug("resource_config_read", source="resource", path=resource, package=package, size=len(payload))
        return payload
