"""Tests for the NiceGUI control adapters using stand-in elements."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from wintile_prefs.controls import FieldWidgets
from wintile_prefs.fields import get_field
from wintile_prefs.form import FormAssembler
from wintile_prefs.gui.controls import COMMIT_EVENTS, DISABLED_CLASS, NiceGUIControl, NiceGUILabel, control_for
from wintile_prefs.session import PrefsSession


class FakeValueElement:
    """Mimics the parts of a NiceGUI ValueElement the adapter uses."""

    def __init__(self, value=None) -> None:
        self.value = value
        self.enabled = True
        self._handlers = []
        self._listeners: dict[str, list] = {}

    def on_value_change(self, callback) -> None:
        self._handlers.append(callback)

    def on(self, event: str, handler) -> None:
        self._listeners.setdefault(event, []).append(handler)

    def type(self, *values) -> None:
        """Replay keystrokes: each partial value arrives as a value change."""
        for value in values:
            self.set_value(value)

    def fire(self, event: str) -> None:
        for handler in self._listeners.get(event, []):
            handler(SimpleNamespace(args=None))

    def set_value(self, value) -> None:
        if value == self.value:
            return
        self.value = value
        for handler in self._handlers:
            handler(SimpleNamespace(value=value))

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False


class FakeLabel:
    def __init__(self) -> None:
        self.class_names: set[str] = set()

    def classes(self, add: str | None = None, *, remove: str | None = None):
        if add:
            self.class_names.add(add)
        if remove:
            self.class_names.discard(remove)
        return self


class FakeFactory:
    def create(self, descriptor, label):
        return FieldWidgets(descriptor, control_for(descriptor, FakeValueElement()), NiceGUILabel(FakeLabel()))


class TestNiceGUIControl:
    def test_value_roundtrip(self):
        control = NiceGUIControl(FakeValueElement(3))
        control.set_value(4)
        assert control.get_value() == 4

    def test_change_callbacks(self):
        element = FakeValueElement(False)
        control = NiceGUIControl(element)
        seen = []
        handle = control.on_value_changed(seen.append)
        element.set_value(True)
        control.disconnect(handle)
        element.set_value(False)
        assert seen == [True]

    def test_enable_disable(self):
        element = FakeValueElement()
        control = NiceGUIControl(element)
        control.set_enabled(False)
        assert not element.enabled
        assert not control.is_enabled
        control.set_enabled(True)
        assert control.is_enabled


class TestNiceGUILabel:
    def test_greyed_out_when_disabled(self):
        element = FakeLabel()
        label = NiceGUILabel(element)
        label.set_enabled(False)
        assert DISABLED_CLASS in element.class_names
        assert not label.is_enabled
        label.set_enabled(True)
        assert DISABLED_CLASS not in element.class_names


@pytest.fixture
def session():
    session = PrefsSession(initial={"preview": True, "distance": 10})
    session.init()
    yield session
    session.disable()


class TestFormWithAdapters:
    """The form works unchanged on top of the NiceGUI adapters."""

    def test_bindings_and_rule(self, session):
        form = FormAssembler(session, FakeFactory()).build()
        preview = form.control("preview")
        assert preview.get_value() is True

        preview.element.set_value(False)
        assert session.store.get_bool("preview") is False
        double_width = form.field("double-width")
        assert not double_width.control.is_enabled
        assert DISABLED_CLASS in double_width.label.element.class_names

    def test_rejected_number_is_reverted(self, session):
        form = FormAssembler(session, FakeFactory()).build()
        distance = form.control("distance")
        distance.element.type(200.0)
        distance.element.fire("blur")
        assert distance.get_value() == 10
        assert session.store.get_int("distance") == 10

    def test_partial_keystrokes_are_not_written(self, session):
        form = FormAssembler(session, FakeFactory()).build()
        distance = form.control("distance")
        distance.element.type(2.0, 20.0, 200.0)
        assert session.store.get_int("distance") == 10

        distance.element.fire("keydown.enter")
        assert session.store.get_int("distance") == 10
        assert distance.get_value() == 10
        assert form.errors and form.errors[0].value == 200

    def test_committed_number_is_written(self, session):
        form = FormAssembler(session, FakeFactory()).build()
        delay = form.control("delay")
        delay.element.type(3.0, 30.0, 300.0)
        delay.element.fire("blur")
        assert session.store.get_int("delay") == 300
        assert form.errors == []

    def test_cleared_number_is_restored_on_commit(self, session):
        form = FormAssembler(session, FakeFactory()).build()
        distance = form.control("distance")
        distance.element.type(None)
        assert session.store.get_int("distance") == 10
        distance.element.fire("blur")
        assert distance.get_value() == 10


class TestCommitEvents:
    def test_integer_fields_commit_on_enter_or_blur(self):
        control = control_for(get_field("delay"), FakeValueElement(500))
        assert control.commit_on == COMMIT_EVENTS

    def test_boolean_fields_report_every_change(self):
        element = FakeValueElement(False)
        control = control_for(get_field("preview"), element)
        seen = []
        control.on_value_changed(seen.append)
        element.set_value(True)
        assert control.commit_on == ()
        assert seen == [True]

    def test_commit_reports_only_new_values(self):
        element = FakeValueElement(500)
        control = NiceGUIControl(element, commit_on=COMMIT_EVENTS)
        seen = []
        control.on_value_changed(seen.append)
        element.fire("blur")
        element.type(600.0)
        element.fire("keydown.enter")
        element.fire("blur")
        assert seen == [600.0]

    def test_programmatic_set_value_is_reported(self):
        control = NiceGUIControl(FakeValueElement(500), commit_on=COMMIT_EVENTS)
        seen = []
        control.on_value_changed(seen.append)
        control.set_value(700)
        assert seen == [700]
