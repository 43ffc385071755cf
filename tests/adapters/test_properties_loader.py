"""Properties dialect tests covering separators, comments, continuations, and escapes."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from lib_autoconfig import SourceUnavailableError
from lib_autoconfig.adapters.file_loaders.properties import PropertiesFileLoader, parse_properties


def test_all_separator_styles() -> None:
    assert parse_properties(["a=1", "b = 2", "c:3", "d : 4", "e 5", "f\t6"]) == {
        "a": "1",
        "b": "2",
        "c": "3",
        "d": "4",
        "e": "5",
        "f": "6",
    }


def test_comments_and_blank_lines_are_skipped() -> None:
    assert parse_properties(["# comment", "! bang", "", "   ", "  key = value"]) == {"key": "value"}


def test_keys_are_kept_verbatim() -> None:
    assert parse_properties(["SERVER_PORT=1", "serverPort=2", "outer.sub-group.key=3"]) == {
        "SERVER_PORT": "1",
        "serverPort": "2",
        "outer.sub-group.key": "3",
    }


def test_later_duplicates_win() -> None:
    assert parse_properties(["a=1", "a=2"]) == {"a": "2"}


def test_value_keeps_inner_separators_and_trailing_text() -> None:
    assert parse_properties(["url = http://host:8080/path?x=1"]) == {"url": "http://host:8080/path?x=1"}


def test_line_continuation_strips_leading_whitespace() -> None:
    lines = ["fruits = apple, banana, \\", "         cherry, \\", "         date"]
    assert parse_properties(lines) == {"fruits": "apple, banana, cherry, date"}


def test_even_backslashes_do_not_continue() -> None:
    assert parse_properties(["path = C:\\\\", "next = 1"]) == {"path": "C:\\", "next": "1"}


def test_escapes_are_decoded() -> None:
    assert parse_properties(["tab = a\\tb", "unicode = \\u00e9t\\u00e9", "key\\ with\\ spaces = v"]) == {
        "tab": "a\tb",
        "unicode": "été",
        "key with spaces": "v",
    }


def test_key_without_value_is_empty() -> None:
    assert parse_properties(["verbose"]) == {"verbose": ""}


def test_loader_reads_files(write_file: Callable[[str, str], Path]) -> None:
    path = write_file("app.conf", "SERVER_PORT = 8080\n")
    assert PropertiesFileLoader().load(str(path)) == {"SERVER_PORT": "8080"}


def test_loader_reports_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.properties"
    with pytest.raises(SourceUnavailableError) as info:
        PropertiesFileLoader().load(str(missing))
    assert str(info.value) == f"Failed to read file: {missing}"
