"""Settings store tests: ordered log, exact last-wins, normalized first-wins."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from lib_autoconfig import Entry, SettingsStore, Source

ENV = Source("environment variables")
CLI = Source("command line parameters")


def test_add_keeps_keys_verbatim(store: SettingsStore) -> None:
    store.add("SERVER_PORT", "8080", ENV)
    assert store.entries() == (Entry("SERVER_PORT", "8080", ENV),)
    assert store.all() == {"SERVER_PORT": "8080"}


def test_exact_lookup_prefers_latest_entry(store: SettingsStore) -> None:
    """Later sources override earlier ones for the same literal key."""

    store.add("port", "1", ENV)
    store.add("port", "2", CLI)
    found = store.find_by_exact_key("port")
    assert found is not None
    assert (found.value, found.source) == ("2", CLI)
    assert store.all() == {"port": "2"}
    assert len(store) == 2


def test_normalized_lookup_prefers_first_entry(store: SettingsStore) -> None:
    store.add("SERVER_PORT", "1", ENV)
    store.add("server-port", "2", CLI)
    found = store.find_by_normalized_key("serverport")
    assert found is not None
    assert found.key == "SERVER_PORT"


def test_lookups_return_none_when_absent(store: SettingsStore) -> None:
    store.add("foo", "1", ENV)
    assert store.find_by_exact_key("bar") is None
    assert store.find_by_normalized_key("bar") is None


def test_add_flag_records_presence(store: SettingsStore) -> None:
    store.add_flag("verbose", CLI)
    assert store.all() == {"verbose": "true"}


def test_clear_empties_the_store(store: SettingsStore) -> None:
    store.add("foo", "1", ENV)
    store.clear()
    assert len(store) == 0
    assert store.all() == {}
    assert store.find_by_exact_key("foo") is None


def test_iteration_is_a_snapshot(store: SettingsStore) -> None:
    """Adding while iterating must not disturb the running loop."""

    store.add("a", "1", ENV)
    for entry in store:
        store.add(entry.key + "x", entry.value, ENV)
    assert [entry.key for entry in store] == ["a", "ax"]


def test_source_renders_its_description() -> None:
    assert str(ENV) == "environment variables"
    assert Source.config_file("/etc/app.conf").description == 'config file at "/etc/app.conf"'


def test_inserted_by_names_the_calling_function() -> None:
    def configure() -> Source:
        return Source.inserted_by("a map")

    assert configure().description == f"a map inserted by {__name__}.configure"


def test_inserted_by_walks_up_with_stacklevel() -> None:
    def helper() -> Source:
        return Source.inserted_by("properties", stacklevel=2)

    def caller() -> Source:
        return helper()

    assert caller().description == f"properties inserted by {__name__}.caller"


def test_repr_counts_entries(store: SettingsStore) -> None:
    store.add("a", "1", ENV)
    assert repr(store) == "SettingsStore(entries=1)"


KEYS = st.sampled_from(["alpha", "beta", "gamma"])


@given(st.lists(st.tuples(KEYS, st.text(max_size=5)), max_size=8))
def test_all_matches_last_value_per_key(pairs: list[tuple[str, str]]) -> None:
    store = SettingsStore()
    for key, value in pairs:
        store.add(key, value, ENV)
    assert store.all() == dict(pairs)
    assert len(store) == len(pairs)
