"""Setting tree node module."""

from __future__ import annotations

import logging
from copy import deepcopy
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .exceptions import ImmutableSettingError, SettingTypeError
from .type_checker import TypeChecker
from .type_map import TypeMap
from .utils import dump_json, dump_yaml

logger = logging.getLogger(__name__)

# Marks a declaration-only call (no value supplied)
_UNSET = object()

# Shorthand setters available as node attributes, e.g. ``node.int("port")``
_TYPE_SHORTHANDS = frozenset(TypeMap.list_types())

Block = Callable[["Setting"], Any]


class Setting:
    """Configuration tree node with typed and lockable settings.

    Each node keeps three parallel mappings: ``_entries`` (key to scalar value
    or child ``Setting``), ``_schema`` (key to type specification) and
    ``_locks`` (key to immutability flag). Only scalar keys appear in the
    schema and lock mappings; child nodes own their own.
    """

    def __init__(self, block: Optional[Block] = None):
        """Initialize an empty node.

        Args:
            block: Optional callback run against the new node  # (builder-style declarations)
        """
        # Store internals in __dict__ directly, __setattr__ routes to config()
        self.__dict__["_entries"] = {}
        self.__dict__["_schema"] = {}
        self.__dict__["_locks"] = {}

        if block is not None:
            block(self)

    def config(self, setting: Any = None, type: Any = None, lock: Optional[bool] = None, **opt: Any) -> Setting:
        """Declare or assign a single setting.

        Called with a key only, registers the key and its type; a value
        already stored under the key must fit the new type. Called with a
        one-item mapping (or one keyword argument), validates and stores the
        value. A ``Setting`` value is copied in as a child node. Keys are
        stored as strings.

        Args:
            setting: Key to declare or one-item mapping to assign
            type: Type specification  # (falls back to the recorded one, then "any")
            lock: Immutability flag  # (falls back to the recorded one)
            **opt: Keyword form of a one-item assignment

        Returns:
            This node

        Raises:
            ImmutableSettingError: If a locked value is overwritten without explicit ``lock``
            SettingTypeError: If the value does not match its type
            TypeDefinitionError: If the type specification is unknown
        """
        if setting is None and not opt:
            return self

        name, value = self._extract_setting_info(setting, opt)

        if isinstance(value, Setting):
            # Nodes are copied in as a child, never shared between parents
            child = self.configure(name)
            child.load_from_hash(deepcopy(value.to_dict()), value.type_schema(), value.lock_schema())
            return self

        stng_type = type or self._schema.get(name) or TypeChecker.DEFAULT_TYPE
        stng_lock = lock if lock is not None else self._locks.get(name)

        if value is not _UNSET and lock is None:
            self._validate_mutable(name, stng_lock)
        if value is not _UNSET:
            self._validate_setting(value, stng_type)
        elif not isinstance(self._entries.get(name), Setting):
            # A redeclared type must still fit the value already stored
            self._validate_setting(self._entries.get(name), stng_type)

        self._set_configuration(name, value, stng_type, bool(stng_lock))
        return self

    def configure(self, key: str, block: Optional[Block] = None) -> Setting:
        """Create or reopen the child node stored under ``key``.

        Args:
            key: Child node name
            block: Optional callback run against the child

        Returns:
            The child node

        Raises:
            ImmutableSettingError: If ``key`` holds a locked scalar value
        """
        key = str(key)
        child = self._entries.get(key)
        if isinstance(child, Setting):
            if block is not None:
                block(child)
            return child

        if key in self._entries:
            # A scalar slot is being turned into a namespace
            self._validate_mutable(key, self._locks.get(key))
            self._schema.pop(key, None)
            self._locks.pop(key, None)

        child = Setting(block)
        self._entries[key] = child
        logger.debug("Created child node %r", key)
        return child

    def load_from_hash(
        self,
        data: Mapping[str, Any],
        schema: Optional[Mapping[str, Any]] = None,
        lock_schema: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Import settings from a nested mapping.

        Args:
            data: Nested mapping of values  # (dicts and Settings become child nodes)
            schema: Nested type overlay  # (same shape as type_schema())
            lock_schema: Nested lock overlay  # (same shape as lock_schema())
        """
        schema = schema or {}
        lock_schema = lock_schema or {}

        for key, value in data.items():
            if isinstance(value, Setting):
                value = value.to_dict()

            if isinstance(value, Mapping):
                child = self.configure(key)
                child.load_from_hash(value, _sub_mapping(schema, key), _sub_mapping(lock_schema, key))
            else:
                self.config({key: value}, type=schema.get(key), lock=lock_schema.get(key))

        logger.debug("Imported %d settings", len(data))

    def type_schema(self) -> Dict[str, Any]:
        """Return the nested type schema.

        Child nodes are nested under their key; every scalar entry merges this
        node's whole flat schema into the current level.
        """
        result = {}  # Dict[str, Any] (nested schema)
        for key, value in self._entries.items():
            if isinstance(value, Setting):
                result[key] = value.type_schema()
            else:
                result.update(self._schema)
        return result

    def lock_schema(self) -> Dict[str, Any]:
        """Return the nested lock schema, shaped like ``type_schema()``."""
        result = {}  # Dict[str, Any] (nested lock flags)
        for key, value in self._entries.items():
            if isinstance(value, Setting):
                result[key] = value.lock_schema()
            else:
                result.update(self._locks)
        return result

    def derive(self) -> Setting:
        """Return an independent copy rebuilt from this node's exports.

        Values are deep-copied, so later changes on either side stay local.
        """
        derived = Setting()
        derived.load_from_hash(
            deepcopy(self.to_dict()),
            schema=self.type_schema(),
            lock_schema=self.lock_schema(),
        )
        logger.debug("Derived setting tree with keys %s", list(derived.keys()))
        return derived

    def to_dict(self) -> Dict[str, Any]:
        """Convert to plain dictionary.

        Returns:
            Plain dictionary representation  # (nested dict without Setting wrappers)
        """
        result = {}  # Dict[str, Any] (plain dictionary)
        for key, value in self._entries.items():
            result[key] = value.to_dict() if isinstance(value, Setting) else value
        return result

    def to_json(self, **kwargs: Any) -> str:
        """Serialize ``to_dict()`` as JSON text."""
        return dump_json(self.to_dict(), **kwargs)

    def to_yaml(self, dump: Optional[str] = None) -> Optional[str]:
        """Serialize ``to_dict()`` as YAML.

        Args:
            dump: Optional file path to write instead of returning text

        Returns:
            YAML text, or None when written to ``dump``
        """
        text = dump_yaml(self.to_dict())
        if dump is None:
            return text

        with open(dump, "w") as f:
            f.write(text)
        logger.debug("Dumped settings to %s", dump)
        return None

    def get(self, key: str, default: Any = _UNSET) -> Any:
        """Return the value or child node stored under ``key``.

        Raises:
            KeyError: If ``key`` is missing and no default is given
        """
        key = str(key)
        if key in self._entries:
            return self._entries[key]
        if default is _UNSET:
            raise KeyError(f"Setting '{key}' not found")
        return default

    def set(self, key: str, value: Any, type: Any = None, lock: Optional[bool] = None) -> Setting:
        """Assign ``value`` to ``key``, same as ``config({key: value}, type, lock)``."""
        return self.config({key: value}, type=type, lock=lock)

    def keys(self):
        """Return keys like a dict."""
        return self._entries.keys()

    def values(self):
        """Return values like a dict."""
        return self._entries.values()

    def items(self):
        """Return items like a dict."""
        return self._entries.items()

    def __call__(self, block: Optional[Block] = None) -> Any:
        """Return this node, or the result of ``block(self)`` when given."""
        if block is None:
            return self
        return block(self)

    def __getattr__(self, name: str) -> Any:
        """Attribute-style getter for settings and per-type shorthand setters."""
        if name.startswith("_"):
            raise AttributeError(name)

        entries = self.__dict__.get("_entries", {})
        if name in entries:
            return entries[name]
        if name in _TYPE_SHORTHANDS:
            return partial(self._typed_config, name)
        raise AttributeError(f"Setting '{name}' does not exist")

    def __setattr__(self, name: str, value: Any) -> None:
        """Attribute-style setter, same as ``config(name=value)``."""
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            self.config({name: value})

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.config({key: value})

    def __contains__(self, key: str) -> bool:
        return str(key) in self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"Setting({self.to_dict()})"

    def _typed_config(self, type_tag: str, setting: Any = None, lock: Optional[bool] = None, **opt: Any) -> Setting:
        return self.config(setting, type=type_tag, lock=lock, **opt)

    @staticmethod
    def _extract_setting_info(setting: Any, opt: Dict[str, Any]) -> Tuple[str, Any]:
        """Split a config() call into key and value.

        Returns:
            (name, value) where value is ``_UNSET`` for declarations
        """
        if setting is not None and opt:
            raise TypeError("config() takes either a positional setting or keyword settings, not both")

        raw = opt if setting is None else setting
        if not isinstance(raw, Mapping):
            return str(raw), _UNSET

        if len(raw) != 1:
            raise TypeError(f"config() assigns exactly one setting, got {len(raw)}")
        name, value = next(iter(raw.items()))
        return str(name), value

    def _validate_mutable(self, name: str, stng_lock: Optional[bool]) -> None:
        # Only values already set are frozen, a declared slot may be filled once
        if stng_lock and self._entries.get(name) is not None:
            raise ImmutableSettingError(name)

    @staticmethod
    def _validate_setting(value: Any, stng_type: Any) -> None:
        # None is never validated
        if value is None:
            return
        if not TypeChecker.call(value, type=stng_type):
            raise SettingTypeError(stng_type, value)

    def _set_configuration(self, name: str, value: Any, stng_type: Any, stng_lock: bool) -> None:
        current = self._entries.get(name)
        if value is _UNSET:
            # Declaration keeps an existing scalar value
            value = None if isinstance(current, Setting) else current

        self._entries[name] = value
        self._schema[name] = stng_type
        self._locks[name] = stng_lock
        logger.debug("Configured %r (type=%r, lock=%s)", name, stng_type, stng_lock)


def _sub_mapping(mapping: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    """Return the nested overlay for ``key`` if it is a mapping."""
    value = mapping.get(key)
    return value if isinstance(value, Mapping) else None
