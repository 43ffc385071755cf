"""Command-line tokenizer tests."""

from __future__ import annotations

import pytest

from lib_autoconfig.adapters.cli_args.default import DefaultCommandLineParser


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["-a", "b"], [("a", "b")]),
        (["-a", "b", "-c"], [("a", "b"), ("c", None)]),
        (["-a", "-b", "value"], [("a", None), ("b", "value")]),
        (["--server-port", "8080"], [("server-port", "8080")]),
        (["positional", "-key", "v", "stray"], [("key", "v")]),
        (["-", "--", "-x"], [("x", None)]),
        ([], []),
    ],
)
def test_parse_pairs_keys_with_values(args: list[str], expected: list[tuple[str, str | None]]) -> None:
    assert DefaultCommandLineParser().parse(args) == expected


def test_repeated_keys_are_kept_in_order() -> None:
    assert DefaultCommandLineParser().parse(["-a", "1", "-a", "2"]) == [("a", "1"), ("a", "2")]
