"""
NiceGUI adapters for the control capabilities.

``NiceGUIControl`` wraps a NiceGUI value element (switch, number) and
``NiceGUILabel`` wraps a label so the binding and rule engines can drive
real widgets without knowing about NiceGUI.

Number inputs report every keystroke as a value change, so their controls
only report a value once the edit is committed with Enter or by leaving the
field.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from nicegui import ui

from ..controls import CallbackRegistry, FieldWidgets, ValueCallback
from ..fields import FieldDescriptor

DISABLED_CLASS = "opacity-50"
LABEL_CLASSES = "text-sm font-medium text-slate-700 dark:text-slate-200"
INDENT_CLASSES = "pl-6"
COMMIT_EVENTS = ("blur", "keydown.enter")


class NiceGUIControl:
    """Control backed by a NiceGUI ``ValueElement``.

    Args:
        element: The wrapped element
        commit_on: Element events that commit the typed value. When empty,
            every value change of the element is reported.
    """

    def __init__(self, element: Any, *, commit_on: Sequence[str] = ()) -> None:
        self.element = element
        self.commit_on = tuple(commit_on)
        self._callbacks = CallbackRegistry()
        self._committed = element.value
        if self.commit_on:
            for event in self.commit_on:
                element.on(event, self._commit)
        else:
            element.on_value_change(self._dispatch)

    @property
    def is_enabled(self) -> bool:
        return bool(self.element.enabled)

    def get_value(self) -> Any:
        return self.element.value

    def set_value(self, value: Any) -> None:
        self.element.set_value(value)
        if self.commit_on:
            self._report(value)

    def on_value_changed(self, callback: ValueCallback) -> int:
        return self._callbacks.connect(callback)

    def disconnect(self, handle: int) -> None:
        self._callbacks.disconnect(handle)

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self.element.enable()
        else:
            self.element.disable()

    def _dispatch(self, event: Any) -> None:
        self._callbacks.emit(event.value)

    def _commit(self, _event: Any = None) -> None:
        self._report(self.element.value)

    def _report(self, value: Any) -> None:
        if value == self._committed and type(value) is type(self._committed):
            return
        self._committed = value
        self._callbacks.emit(value)


class NiceGUILabel:
    """Label that greys out when its field is disabled."""

    def __init__(self, element: Any) -> None:
        self.element = element
        self._enabled = True

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)
        if self._enabled:
            self.element.classes(remove=DISABLED_CLASS)
        else:
            self.element.classes(add=DISABLED_CLASS)


def control_for(descriptor: FieldDescriptor, element: Any) -> NiceGUIControl:
    """Wrap an element, committing integer edits only on Enter or blur."""
    return NiceGUIControl(element, commit_on=COMMIT_EVENTS if descriptor.is_integer else ())


class NiceGUIControlFactory:
    """Renders one row per field: label on the left, control on the right."""

    def create(self, descriptor: FieldDescriptor, label: str) -> FieldWidgets:
        with ui.row().classes("w-full items-center justify-between py-1 no-wrap"):
            label_classes = f"{LABEL_CLASSES} {INDENT_CLASSES}" if descriptor.indent else LABEL_CLASSES
            label_element = ui.label(label).classes(label_classes)

            if descriptor.is_integer:
                value_range = descriptor.int_range
                # Bounds go to the browser input only; ui.number would clamp on blur
                element = (
                    ui.number(step=value_range.step, precision=0, format="%d")
                    .classes("w-32")
                    .props(f"outlined dense min={value_range.minimum} max={value_range.maximum}")
                )
            else:
                element = ui.switch()

        return FieldWidgets(
            descriptor=descriptor,
            control=control_for(descriptor, element),
            label=NiceGUILabel(label_element),
        )
