"""
Control capabilities used by the binding and rule engines.

The engines never touch a concrete widget. They work against two small
protocols: ``Sensitive`` (anything that can be enabled/disabled, such as a
label) and ``Control`` (a sensitive element holding a value). The in-memory
implementations here back headless use and tests; the NiceGUI adapters live
in ``wintile_prefs.gui.controls``.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .fields import FieldDescriptor

ValueCallback = Callable[[Any], None]


@runtime_checkable
class Sensitive(Protocol):
    """An element whose interactability can be toggled."""

    @property
    def is_enabled(self) -> bool: ...

    def set_enabled(self, enabled: bool) -> None: ...


@runtime_checkable
class Control(Sensitive, Protocol):
    """A value-holding UI element."""

    def get_value(self) -> Any: ...

    def set_value(self, value: Any) -> None: ...

    def on_value_changed(self, callback: ValueCallback) -> int: ...

    def disconnect(self, handle: int) -> None: ...


class CallbackRegistry:
    """Ordered value-changed callbacks addressed by integer handles."""

    def __init__(self) -> None:
        self._callbacks: dict[int, ValueCallback] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._callbacks)

    def connect(self, callback: ValueCallback) -> int:
        handle = next(self._ids)
        self._callbacks[handle] = callback
        return handle

    def disconnect(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def emit(self, value: Any) -> None:
        for callback in list(self._callbacks.values()):
            callback(value)


class MemoryControl:
    """In-memory control. Callbacks fire only when the value actually changes."""

    def __init__(self, value: Any = None, *, enabled: bool = True) -> None:
        self._value = value
        self._enabled = enabled
        self._callbacks = CallbackRegistry()

    def __repr__(self) -> str:
        return f"MemoryControl(value={self._value!r}, enabled={self._enabled})"

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self.set_value(value)

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def connection_count(self) -> int:
        return len(self._callbacks)

    def get_value(self) -> Any:
        return self._value

    def set_value(self, value: Any) -> None:
        if value == self._value and type(value) is type(self._value):
            return
        self._value = value
        self._callbacks.emit(value)

    def on_value_changed(self, callback: ValueCallback) -> int:
        return self._callbacks.connect(callback)

    def disconnect(self, handle: int) -> None:
        self._callbacks.disconnect(handle)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)


@dataclass
class MemoryLabel:
    """In-memory text label that can be greyed out."""

    text: str
    enabled: bool = True

    @property
    def is_enabled(self) -> bool:
        return self.enabled

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)


@dataclass
class FieldWidgets:
    """The elements created for one field: its value control and its label."""

    descriptor: FieldDescriptor
    control: Control
    label: Sensitive | None = None
    extras: dict[str, Any] = field(default_factory=dict)

    def sensitives(self) -> list[Sensitive]:
        """Elements whose enabled state follows the field's interactability."""
        items: list[Sensitive] = [self.control]
        if self.label is not None:
            items.append(self.label)
        return items


class ControlFactory(Protocol):
    """Creates the widgets for one field."""

    def create(self, descriptor: FieldDescriptor, label: str) -> FieldWidgets: ...


class MemoryControlFactory:
    """Factory producing ``MemoryControl``/``MemoryLabel`` pairs."""

    def __init__(self) -> None:
        self.created: list[FieldWidgets] = []

    def create(self, descriptor: FieldDescriptor, label: str) -> FieldWidgets:
        widgets = FieldWidgets(descriptor=descriptor, control=MemoryControl(), label=MemoryLabel(label))
        self.created.append(widgets)
        return widgets
