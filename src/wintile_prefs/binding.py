"""
Binding engine linking one settings key to one control.

A binding loads the stored value into the control when it is created, then
forwards control changes to the store. In live mode it also follows store
changes made elsewhere. The engine does not validate values itself; range
errors and save failures come from the store boundary and are handled here
so a bad edit never breaks the form.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Literal

from .controls import Control
from .errors import OutOfRangeError
from .fields import FieldDescriptor
from .store import SettingsStore, Subscription

LOGGER = logging.getLogger(__name__)

BindingMode = Literal["live", "write-only"]

LIVE: BindingMode = "live"
WRITE_ONLY: BindingMode = "write-only"

ErrorCallback = Callable[["Binding", Exception], None]


def parity_mode(descriptor: FieldDescriptor) -> BindingMode:
    """Mode matching the historical behaviour: booleans live, integers write-only."""
    return LIVE if descriptor.is_boolean else WRITE_ONLY


class Binding:
    """Live association between a field descriptor and a control.

    Attributes:
        descriptor: The bound field
        control: The bound control
        mode: "live" (two-way) or "write-only" (control to store)
        last_error: The most recent rejected write, if any
    """

    def __init__(
        self,
        store: SettingsStore,
        descriptor: FieldDescriptor,
        control: Control,
        mode: BindingMode = LIVE,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.store = store
        self.descriptor = descriptor
        self.control = control
        self.mode = mode
        self.last_error: Exception | None = None
        self._on_error = on_error
        self._syncing = False
        self._control_handle: int | None = None
        self._store_subscription: Subscription | None = None

        self._show(store.get(descriptor.key))
        self._control_handle = control.on_value_changed(self._handle_control_change)
        if mode == LIVE:
            self._store_subscription = store.subscribe(descriptor.key, self._handle_store_change)

    def __repr__(self) -> str:
        return f"Binding(key={self.key!r}, mode={self.mode!r}, active={self.is_active})"

    @property
    def key(self) -> str:
        return self.descriptor.key

    @property
    def is_active(self) -> bool:
        return self._control_handle is not None

    def push(self, value: Any) -> None:
        """Write a control value to the store.

        Raises:
            OutOfRangeError: If the store rejects the value
            OSError: If the settings file cannot be written
            TypeError, ValueError: If the value cannot be converted to the field type
        """
        coerced = self.descriptor.coerce(value)
        self.store.set(self.key, coerced)
        if self.control.get_value() != coerced:
            self._show(coerced)

    def refresh(self) -> None:
        """Reload the control from the store."""
        self._show(self.store.get(self.key))

    def unbind(self) -> None:
        """Release the control and store subscriptions."""
        if self._control_handle is not None:
            self.control.disconnect(self._control_handle)
            self._control_handle = None
        if self._store_subscription is not None:
            if not self.store.closed:
                self.store.unsubscribe(self._store_subscription)
            self._store_subscription = None

    def _show(self, value: Any) -> None:
        self._syncing = True
        try:
            self.control.set_value(value)
        finally:
            self._syncing = False

    def _handle_control_change(self, value: Any) -> None:
        if self._syncing:
            return
        try:
            self.push(value)
        except OutOfRangeError as exc:
            LOGGER.warning("Rejected %s: %s", self.key, exc)
            self._reject(exc)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Rejected %s: invalid value %r (%s)", self.key, value, exc)
            self._reject(exc)
        except OSError as exc:
            LOGGER.exception("Could not save %s", self.key)
            self._reject(exc)
        else:
            self.last_error = None

    def _handle_store_change(self, _key: str, value: Any) -> None:
        self._show(value)

    def _reject(self, exc: Exception) -> None:
        self.last_error = exc
        self.refresh()
        if self._on_error is not None:
            self._on_error(self, exc)


def bind(
    store: SettingsStore,
    descriptor: FieldDescriptor,
    control: Control,
    *,
    mode: BindingMode | None = None,
    on_error: ErrorCallback | None = None,
) -> Binding:
    """Create a binding. Defaults to a live two-way link for every field kind."""
    return Binding(store, descriptor, control, mode or LIVE, on_error)
