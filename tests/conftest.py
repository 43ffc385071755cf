"""Shared fixtures for the ``lib_autoconfig`` test-suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterator

import pytest

from lib_autoconfig import AutoConfig, SettingsStore, default_config, reset_default_config


@pytest.fixture()
def store() -> SettingsStore:
    """Return an empty store private to the test."""

    return SettingsStore()


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing UTF-8 text below ``tmp_path``."""

    def _write(relative: str, body: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def empty_default_config() -> Iterator[AutoConfig]:
    """Yield the process-wide configuration emptied, re-seeding it from the environment afterwards."""

    config = default_config().clear()
    try:
        yield config
    finally:
        reset_default_config()
