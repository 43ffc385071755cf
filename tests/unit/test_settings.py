"""Setting binding and group tests.

Bindings are declared once and re-resolved on every access; groups compose
their dotted prefixes from the ancestor chain.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

import pytest

from lib_autoconfig import (
    DURATION,
    INT,
    AutoConfig,
    Flag,
    Group,
    MissingKeyError,
    ParseFailureError,
    Setting,
    SettingsStore,
    Source,
    enum_type,
    list_type,
)


TEST_SOURCE = Source("a test")


class Mode(Enum):
    Alpha = 1
    Beta = 2


class Server(Group):
    port = Setting(INT)
    host = Setting(default="localhost")
    timeout = Setting(DURATION, name="request-timeout", default=timedelta(seconds=5))
    debug = Flag()


def test_standalone_setting_reads_its_name(store: SettingsStore) -> None:
    store.add("foo", "abc", TEST_SOURCE)
    assert Setting(name="foo", store=store)() == "abc"
    assert Setting(identifier="foo", store=store).resolve() == "abc"


def test_explicit_name_overrides_identifier(store: SettingsStore) -> None:
    store.add("other", "1", TEST_SOURCE)
    setting = Setting(INT, "identifier", name="other", store=store)
    assert setting.key() == "other"
    assert setting() == 1


def test_setting_without_any_name_is_rejected(store: SettingsStore) -> None:
    with pytest.raises(ValueError):
        Setting(store=store)()


def test_declared_settings_take_the_attribute_name() -> None:
    assert Server.port.identifier == "port"
    assert Server.port.lookup_name == "port"
    assert Server.timeout.lookup_name == "request-timeout"


def test_group_attributes_resolve_with_prefix(store: SettingsStore) -> None:
    store.add("server.port", "8080", TEST_SOURCE)
    store.add("server.request-timeout", "PT30S", TEST_SOURCE)
    server = Server("server", store=store)
    assert server.port == 8080
    assert server.timeout == timedelta(seconds=30)
    assert server.host == "localhost"
    assert server.debug is False


def test_group_matches_any_convention_after_the_prefix(store: SettingsStore) -> None:
    store.add("server.PORT", "8080", TEST_SOURCE)
    store.add("server.DEBUG", "", TEST_SOURCE)
    server = Server("server", store=store)
    assert server.port == 8080
    assert server.debug is True


def test_missing_required_setting_names_full_key(store: SettingsStore) -> None:
    server = Server("server", store=store)
    with pytest.raises(MissingKeyError) as info:
        server.port
    assert str(info.value) == 'Required key "server.port" is missing'


def test_parse_failure_names_full_key(store: SettingsStore) -> None:
    store.add("server.port", "test", TEST_SOURCE)
    with pytest.raises(ParseFailureError) as info:
        Server("server", store=store).port
    assert str(info.value) == 'Failed to parse setting "server.port", the value is "test", but must be an Int number'


def test_nested_groups_compose_prefixes(store: SettingsStore) -> None:
    store.add("outer.subgroup.setting", "42", TEST_SOURCE)
    outer = Group("groupC", name="outer", store=store)
    subgroup = outer.child("subgroup")
    assert subgroup.full_prefix == "outer.subgroup"
    assert subgroup.parent is outer
    assert subgroup.store is store
    assert Setting(INT, "setting", group=subgroup)() == 42


def test_group_name_defaults_to_identifier() -> None:
    group = Group("settings")
    assert group.name == "settings"
    assert group.full_prefix == "settings"
    assert repr(group) == "Group('settings')"


def test_settings_are_not_cached(store: SettingsStore) -> None:
    """Each access reflects the store at that moment."""

    setting = Setting(INT, name="port", store=store)
    store.add("port", "1", TEST_SOURCE)
    assert setting() == 1
    store.add("port", "2", Source("command line parameters"))
    assert setting() == 2
    store.clear()
    with pytest.raises(MissingKeyError):
        setting()
    store.add("PORT", "3", TEST_SOURCE)
    assert setting() == 3


def test_default_is_returned_uncoerced(store: SettingsStore) -> None:
    setting = Setting(INT, name="port", default="not-a-number", store=store)
    assert setting() == "not-a-number"


def test_collection_and_enum_settings(store: SettingsStore) -> None:
    store.add("ports", "1,2,3,2,1", TEST_SOURCE)
    store.add("mode", "beTA", TEST_SOURCE)
    assert Setting(list_type(INT), "ports", store=store)() == [1, 2, 3, 2, 1]
    assert Setting(enum_type(Mode), "mode", store=store)() is Mode.Beta


def test_flag_semantics(store: SettingsStore) -> None:
    store.add_flag("verbose", TEST_SOURCE)
    store.add("quiet", "false", TEST_SOURCE)
    assert Flag("verbose", store=store)() is True
    assert Flag("quiet", store=store)() is True
    assert Flag("absent", store=store)() is False


def test_settings_are_read_only(store: SettingsStore) -> None:
    server = Server("server", store=store)
    with pytest.raises(AttributeError):
        server.port = 1  # type: ignore[misc]


def test_source_of_describes_provenance(store: SettingsStore) -> None:
    store.add("server.PORT", "8080", Source("environment variables"))
    server = Server("server", store=store)
    assert server.source_of("port") == 'Key "server.port" was read as "server.PORT" from environment variables'
    with pytest.raises(AttributeError):
        server.source_of("missing")


def test_setting_source_for_exact_match(store: SettingsStore) -> None:
    store.add("foo", "1", Source("environment variables"))
    assert Setting(name="foo", store=store).source() == 'Key "foo" was read from environment variables'


def test_bindings_fall_back_to_default_store(empty_default_config: AutoConfig) -> None:
    empty_default_config.with_map({"APP_NAME": "demo"})
    assert Setting(name="appName")() == "demo"
    assert Group("app").store is empty_default_config.store


def test_repr_names_type_and_key() -> None:
    assert repr(Setting(INT, name="port")) == "Setting(Int, 'port')"
    assert repr(Flag(name="debug")) == "Flag(Flag, 'debug')"
