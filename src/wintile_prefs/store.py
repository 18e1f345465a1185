"""
Persistent key-value settings store for the Wintile preferences.

The store holds one value per field descriptor, persists every successful
write to a YAML file, and notifies subscribers synchronously after each
change. Range validation happens here, at the store boundary.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import OutOfRangeError, StoreUnavailableError
from .fields import FIELDS, FieldDescriptor, default_values, get_field

LOGGER = logging.getLogger(__name__)

SettingsCallback = Callable[[str, Any], None]


@dataclass(frozen=True)
class Subscription:
    """Handle returned by ``SettingsStore.subscribe``."""

    id: int
    key: str
    callback: SettingsCallback


class SettingsStore:
    """Typed settings store backed by an optional YAML file.

    Example:
        store = SettingsStore(Path("~/.config/wintile/settings.yaml").expanduser())
        store.subscribe("cols", lambda key, value: print(key, value))
        store.set_int("cols", 3)

    Args:
        path: YAML file to load from and save to. None keeps values in memory.
        initial: Optional values overriding the defaults (memory mode or a
            store whose file does not exist yet). They are validated like writes.
    """

    def __init__(self, path: Path | None = None, initial: dict[str, Any] | None = None) -> None:
        self._path = path
        self._values: dict[str, int | bool] = default_values()
        self._extra: dict[str, Any] = {}
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._ids = itertools.count(1)
        self._closed = False

        if path is not None and path.exists():
            self._load(path)
        for key, value in (initial or {}).items():
            descriptor = get_field(key)
            self._check(descriptor, value)
            self._values[key] = value

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    # Typed accessors -----------------------------------------------------

    def get_int(self, key: str) -> int:
        descriptor = self._descriptor(key)
        if not descriptor.is_integer:
            raise TypeError(f"Setting '{key}' is not an integer")
        return int(self._values[key])

    def get_bool(self, key: str) -> bool:
        descriptor = self._descriptor(key)
        if not descriptor.is_boolean:
            raise TypeError(f"Setting '{key}' is not a boolean")
        return bool(self._values[key])

    def set_int(self, key: str, value: int) -> None:
        descriptor = self._descriptor(key)
        if not descriptor.is_integer:
            raise TypeError(f"Setting '{key}' is not an integer")
        self._write(descriptor, value)

    def set_bool(self, key: str, value: bool) -> None:
        descriptor = self._descriptor(key)
        if not descriptor.is_boolean:
            raise TypeError(f"Setting '{key}' is not a boolean")
        self._write(descriptor, value)

    def get(self, key: str) -> int | bool:
        """Read a value using the accessor matching the field kind."""
        descriptor = self._descriptor(key)
        return self.get_int(key) if descriptor.is_integer else self.get_bool(key)

    def set(self, key: str, value: int | bool) -> None:
        """Write a value using the accessor matching the field kind."""
        descriptor = self._descriptor(key)
        if descriptor.is_integer:
            self.set_int(key, value)  # type: ignore[arg-type]
        else:
            self.set_bool(key, value)  # type: ignore[arg-type]

    def reset(self, key: str) -> None:
        """Restore a key to its schema default."""
        descriptor = self._descriptor(key)
        self._write(descriptor, descriptor.default)

    def snapshot(self) -> dict[str, int | bool]:
        """Return the current value of every field in display order."""
        self._ensure_open()
        return {descriptor.key: self._values[descriptor.key] for descriptor in FIELDS}

    def is_default(self, key: str) -> bool:
        descriptor = self._descriptor(key)
        return self._values[key] == descriptor.default

    # Change notification ---------------------------------------------------

    def subscribe(self, key: str, callback: SettingsCallback) -> Subscription:
        """Call ``callback(key, value)`` after every change of ``key``."""
        self._descriptor(key)
        subscription = Subscription(id=next(self._ids), key=key, callback=callback)
        self._subscriptions.setdefault(key, []).append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription. Unknown or already removed handles are ignored."""
        subscriptions = self._subscriptions.get(subscription.key, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)

    def subscriber_count(self, key: str | None = None) -> int:
        if key is not None:
            return len(self._subscriptions.get(key, []))
        return sum(len(subs) for subs in self._subscriptions.values())

    def close(self) -> None:
        """Drop all subscriptions and refuse further access."""
        self._subscriptions.clear()
        self._closed = True

    # Internals -------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Settings store has been closed")

    def _descriptor(self, key: str) -> FieldDescriptor:
        self._ensure_open()
        return get_field(key)

    @staticmethod
    def _check(descriptor: FieldDescriptor, value: Any) -> None:
        if descriptor.is_boolean:
            if not isinstance(value, bool):
                raise TypeError(f"Setting '{descriptor.key}' expects a bool, got {type(value).__name__}")
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Setting '{descriptor.key}' expects an int, got {type(value).__name__}")
        value_range = descriptor.int_range
        if not value_range.contains(value):
            raise OutOfRangeError(descriptor.key, value, value_range.minimum, value_range.maximum)

    def _write(self, descriptor: FieldDescriptor, value: Any) -> None:
        self._check(descriptor, value)
        key = descriptor.key
        if self._values[key] == value:
            return

        if self._path is not None:
            updated = dict(self._values)
            updated[key] = value
            self._save(self._path, updated)
        self._values[key] = value
        LOGGER.debug("Setting %s = %r", key, value)
        self._notify(key, value)

    def _notify(self, key: str, value: Any) -> None:
        # Copy so callbacks may unsubscribe while being notified
        for subscription in list(self._subscriptions.get(key, [])):
            try:
                subscription.callback(key, value)
            except Exception:
                LOGGER.exception("Settings callback for '%s' failed", key)

    def _load(self, path: Path) -> None:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")

        for raw_key, value in data.items():
            key = str(raw_key)
            try:
                descriptor = get_field(key)
            except KeyError:
                self._extra[key] = value
                continue
            try:
                self._check(descriptor, value)
            except (TypeError, ValueError) as exc:
                LOGGER.warning("Ignoring stored value for '%s': %s; using default %r", key, exc, descriptor.default)
                continue
            self._values[key] = value
        LOGGER.debug("Loaded settings from %s", path)

    def _save(self, path: Path, values: dict[str, int | bool]) -> None:
        payload: dict[str, Any] = dict(self._extra)
        payload.update(values)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.dump(payload, default_flow_style=False, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
