"""Declarative setting bindings and hierarchical groups.

Purpose
-------
Let application code declare the settings it consumes next to the code that
uses them, then read typed values on every access. Bindings are never cached:
each access re-resolves against the store's current contents.

Contents
--------
* :class:`Group` – namespace node contributing a prefix segment.
* :class:`Setting` – typed binding usable as a descriptor, a callable, or via
  :meth:`Setting.resolve`.
* :class:`Flag` – presence binding defaulting to ``False``.

System Role
-----------
Outer ring over :mod:`lib_autoconfig.application.resolution`. Settings and
groups fall back to the process-wide store from
:func:`lib_autoconfig.core.default_store` when no store is given explicitly.

Examples
--------
>>> from lib_autoconfig.domain.store import SettingsStore, Source
>>> from lib_autoconfig.domain.types import INT, STRING
>>> store = SettingsStore()
>>> store.add("server.PORT", "8080", Source("environment variables"))
>>> class Server(Group):
...     port = Setting(INT)
...     host = Setting(STRING, default="localhost")
>>> server = Server("server", store=store)
>>> server.port, server.host
(8080, 'localhost')
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, overload

from .application.resolution import MISSING, _Missing, describe_source, lookup_key, resolve
from .core import default_store
from .domain.store import SettingsStore
from .domain.types import FLAG, STRING, SettingType

T = TypeVar("T")


class Group:
    """Namespace node whose full prefix is composed from its ancestor chain.

    Parameters
    ----------
    identifier:
        Declared identifier of the group; used as its segment unless *name* is
        given.
    name:
        Explicit segment overriding *identifier*.
    parent:
        Enclosing group, or ``None`` for a top-level group.
    store:
        Store read by settings of this group; inherited from *parent*, then
        the process-wide default store.

    Examples
    --------
    >>> outer = Group("groupC", name="outer")
    >>> outer.child("subgroup").key_for("setting")
    'outer.subgroup.setting'
    """

    def __init__(
        self,
        identifier: str,
        *,
        name: str | None = None,
        parent: Group | None = None,
        store: SettingsStore | None = None,
    ) -> None:
        self._identifier = identifier
        self._name = name
        self._parent = parent
        self._store = store

    @property
    def identifier(self) -> str:
        return self._identifier

    @property
    def name(self) -> str:
        """Segment contributed by this group."""

        return self._name if self._name is not None else self._identifier

    @property
    def parent(self) -> Group | None:
        return self._parent

    @property
    def full_prefix(self) -> str:
        """Dotted path from the top-level ancestor down to this group."""

        if self._parent is None:
            return self.name
        return lookup_key(self._parent.full_prefix, self.name)

    @property
    def store(self) -> SettingsStore:
        if self._store is not None:
            return self._store
        if self._parent is not None:
            return self._parent.store
        return default_store()

    def key_for(self, name: str) -> str:
        """Return the lookup key of a setting called *name* inside this group."""

        return lookup_key(self.full_prefix, name)

    def child(self, identifier: str, *, name: str | None = None) -> Group:
        """Declare a nested group."""

        return Group(identifier, name=name, parent=self)

    def source_of(self, attribute: str) -> str:
        """Describe where the setting declared as *attribute* was read from.

        Raises
        ------
        AttributeError
            When *attribute* is not a :class:`Setting` declared on this group's
            class.
        """

        setting = getattr(type(self), attribute, None)
        if not isinstance(setting, Setting):
            raise AttributeError(f"{type(self).__name__} declares no setting {attribute!r}")
        return setting.source(group=self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.full_prefix!r})"


class Setting(Generic[T]):
    """Typed binding re-resolved on every access.

    The lookup name is ``name`` when given, else ``identifier``. Declaring the
    setting as a class attribute fills ``identifier`` from the attribute name;
    standalone settings must receive one of the two explicitly.

    Parameters
    ----------
    setting_type:
        Coercer applied to the matched raw value.
    identifier:
        Application-facing identifier.
    name:
        Explicit lookup name overriding *identifier*.
    default:
        Value returned, uncoerced, when no entry matches.
    group:
        Owning group; a :class:`Group` instance the setting is accessed through
        is used when omitted.
    store:
        Store to read; defaults to the group's store, then the process-wide
        default store.

    Examples
    --------
    >>> from lib_autoconfig.domain.store import SettingsStore, Source
    >>> store = SettingsStore()
    >>> store.add("foo", "abc", Source("a test"))
    >>> Setting(name="foo", store=store)()
    'abc'
    """

    def __init__(
        self,
        setting_type: SettingType[T] = STRING,  # type: ignore[assignment]
        identifier: str | None = None,
        *,
        name: str | None = None,
        default: T | _Missing = MISSING,
        group: Group | None = None,
        store: SettingsStore | None = None,
    ) -> None:
        self.setting_type = setting_type
        self.identifier = identifier
        self.name = name
        self.default = default
        self.group = group
        self._store = store

    def __set_name__(self, owner: type, attribute: str) -> None:
        if self.identifier is None:
            self.identifier = attribute

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> Setting[T]: ...

    @overload
    def __get__(self, instance: object, owner: type | None = None) -> T: ...

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return self.resolve(group=instance if isinstance(instance, Group) else None)

    def __set__(self, instance: object, value: Any) -> None:
        raise AttributeError(f"setting {self.identifier!r} is read-only")

    def __call__(self) -> T:
        return self.resolve()

    @property
    def lookup_name(self) -> str:
        name = self.name if self.name is not None else self.identifier
        if name is None:
            raise ValueError("Setting requires an identifier or an explicit name")
        return name

    def key(self, group: Group | None = None) -> str:
        """Return the effective lookup key, optionally inside *group*."""

        owner = self.group if self.group is not None else group
        if owner is None:
            return self.lookup_name
        return owner.key_for(self.lookup_name)

    def resolve(self, group: Group | None = None) -> T:
        """Read and coerce the current value.

        Raises
        ------
        MissingKeyError
            Nothing matched and no default was supplied.
        ParseFailureError
            The matched raw value was rejected by the coercer.
        """

        return resolve(self._store_for(group), self.key(group), self.setting_type, self.default)

    def source(self, group: Group | None = None) -> str:
        """Return the provenance sentence for the current value."""

        return describe_source(self._store_for(group), self.key(group))

    def _store_for(self, group: Group | None) -> SettingsStore:
        if self._store is not None:
            return self._store
        owner = self.group if self.group is not None else group
        if owner is not None:
            return owner.store
        return default_store()

    def __repr__(self) -> str:
        name = self.name if self.name is not None else self.identifier
        return f"{type(self).__name__}({self.setting_type.name}, {name!r})"


class Flag(Setting[bool]):
    """Setting that is ``True`` whenever its key is present and ``False`` otherwise.

    Examples
    --------
    >>> from lib_autoconfig.domain.store import SettingsStore, Source
    >>> store = SettingsStore()
    >>> store.add_flag("verbose", Source("command line parameters"))
    >>> Flag(name="verbose", store=store)(), Flag(name="quiet", store=store)()
    (True, False)
    """

    def __init__(
        self,
        identifier: str | None = None,
        *,
        name: str | None = None,
        group: Group | None = None,
        store: SettingsStore | None = None,
    ) -> None:
        super().__init__(FLAG, identifier, name=name, default=False, group=group, store=store)
