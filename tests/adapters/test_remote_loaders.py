"""URL and package-resource loader tests.

HTTP traffic is replaced by a fake ``requests.get``; ``file://`` URLs and
package resources read real files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import requests

from lib_autoconfig import SourceUnavailableError
from lib_autoconfig.adapters.remote import default as remote_module
from lib_autoconfig.adapters.remote.default import DefaultResourceLoader, DefaultURLLoader


class _FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _fake_get(response: _FakeResponse, calls: list[dict[str, Any]]):
    def _get(url: str, **kwargs: Any) -> _FakeResponse:
        calls.append({"url": url, **kwargs})
        return response

    return _get


def test_http_url_returns_body(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(remote_module.requests, "get", _fake_get(_FakeResponse(b"a = 1"), calls))
    payload = DefaultURLLoader(timeout=2.5).fetch("https://config.example.com/app.properties")
    assert payload == b"a = 1"
    assert calls == [{"url": "https://config.example.com/app.properties", "timeout": 2.5}]


def test_http_error_status_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(remote_module.requests, "get", _fake_get(_FakeResponse(b"", 404), []))
    url = "http://config.example.com/missing.conf"
    with pytest.raises(SourceUnavailableError) as info:
        DefaultURLLoader().fetch(url)
    assert str(info.value) == f"Failed to read URL: {url}"


def test_network_failure_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(url: str, **_kwargs: Any) -> _FakeResponse:
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(remote_module.requests, "get", _boom)
    with pytest.raises(SourceUnavailableError):
        DefaultURLLoader().fetch("http://127.0.0.1:1/app.conf")


def test_file_url_reads_local_file(tmp_path: Path) -> None:
    path = tmp_path / "app.conf"
    path.write_bytes(b"key = value\n")
    assert DefaultURLLoader().fetch(path.as_uri()) == b"key = value\n"


def test_missing_file_url_is_unavailable(tmp_path: Path) -> None:
    url = (tmp_path / "missing.conf").as_uri()
    with pytest.raises(SourceUnavailableError) as info:
        DefaultURLLoader().fetch(url)
    assert str(info.value) == f"Failed to read URL: {url}"


@pytest.mark.parametrize("url", ["ftp://example.com/app.conf", "not a url", "http:///nohost"])
def test_unsupported_urls_are_unavailable(url: str) -> None:
    with pytest.raises(SourceUnavailableError):
        DefaultURLLoader().fetch(url)


def test_resource_loader_reads_package_data() -> None:
    payload = DefaultResourceLoader().fetch("lib_autoconfig", "__init__.py")
    assert b"lib_autoconfig" in payload


@pytest.mark.parametrize(
    ("package", "resource"),
    [("lib_autoconfig", "missing.conf"), ("lib_autoconfig_no_such_package", "app.conf")],
)
def test_resource_loader_reports_missing_resources(package: str, resource: str) -> None:
    with pytest.raises(SourceUnavailableError) as info:
        DefaultResourceLoader().fetch(package, resource)
    assert str(info.value) == f"Failed to read resource: {resource}"
