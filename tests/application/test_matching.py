"""Key matcher tests: exact first, canonical form second, nothing otherwise."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_autoconfig import SettingsStore, Source, match_key

ENV = Source("environment variables")
FILE = Source('config file at "/etc/app.conf"')


def test_exact_match_is_not_fuzzy(store: SettingsStore) -> None:
    store.add("serverPort", "1", ENV)
    found = match_key(store, "serverPort")
    assert found is not None
    assert (found.value, found.fuzzy, found.stored_key, found.requested_key) == ("1", False, "serverPort", "serverPort")


def test_exact_match_beats_earlier_normalized_entry(store: SettingsStore) -> None:
    store.add("SERVER_PORT", "env", ENV)
    store.add("serverPort", "file", FILE)
    found = match_key(store, "serverPort")
    assert found is not None
    assert found.value == "file"
    assert not found.fuzzy


def test_normalized_match_reports_stored_key(store: SettingsStore) -> None:
    store.add("SERVER_PORT", "1", ENV)
    found = match_key(store, "server-port")
    assert found is not None
    assert found.fuzzy
    assert found.stored_key == "SERVER_PORT"
    assert found.entry.source is ENV


def test_no_match_returns_none(store: SettingsStore) -> None:
    store.add("SERVER_PORT", "1", ENV)
    assert match_key(store, "client-port") is None
    assert match_key(store, "server.port") is None


def test_first_inserted_wins_among_normalized_candidates(store: SettingsStore) -> None:
    store.add("server-port", "first", ENV)
    store.add("SERVER_PORT", "second", FILE)
    found = match_key(store, "serverPort")
    assert found is not None
    assert found.value == "first"


WORDS = st.lists(st.sampled_from(["foo", "bar", "baz", "qux"]), min_size=1, max_size=3)
STYLES = st.sampled_from(["kebab", "snake", "screaming", "camel"])


@given(WORDS, STYLES, STYLES)
def test_any_stored_convention_answers_any_requested_convention(words: list[str], stored: str, requested: str) -> None:
    def spell(style: str) -> str:
        if style == "kebab":
            return "-".join(words)
        if style == "snake":
            return "_".join(words)
        if style == "screaming":
            return "_".join(words).upper()
        return words[0] + "".join(word.capitalize() for word in words[1:])

    store = SettingsStore()
    store.add(spell(stored), "value", ENV)
    found = match_key(store, spell(requested))
    assert found is not None
    assert found.value == "value"
    assert found.fuzzy == (spell(stored) != spell(requested))
