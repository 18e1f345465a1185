"""Tests for the dependency rule engine."""

from __future__ import annotations

import pytest

from wintile_prefs.controls import MemoryControl, MemoryLabel
from wintile_prefs.errors import UnknownKeyError
from wintile_prefs.rules import (
    DEPENDENCY_RULES,
    Between,
    Custom,
    DependencyRule,
    Equals,
    IsFalse,
    IsTrue,
    RuleEngine,
)


@pytest.fixture
def elements() -> dict[str, list]:
    return {
        "preview": [MemoryControl(True)],
        "double-width": [MemoryControl(False), MemoryLabel("Use double width previews")],
        "cols": [MemoryControl(2)],
        "debug": [MemoryControl(False)],
    }


@pytest.fixture
def engine(elements) -> RuleEngine:
    def resolve(key: str):
        try:
            return elements[key]
        except KeyError:
            raise UnknownKeyError(key) from None

    return RuleEngine(resolve)


class TestPredicates:
    @pytest.mark.parametrize(
        ("predicate", "value", "expected"),
        [
            (IsTrue(), True, True),
            (IsTrue(), False, False),
            (IsFalse(), False, True),
            (Equals(4), 4, True),
            (Equals(4), 3, False),
            (Between(2, 3), 3, True),
            (Between(2, 3), 4, False),
            (Between(2, 3), None, False),
            (Custom(lambda v: v % 2 == 0), 4, True),
        ],
    )
    def test_evaluate(self, predicate, value, expected):
        assert predicate.evaluate(value) is expected

    def test_predicates_are_tagged(self):
        assert {IsTrue().kind, IsFalse().kind, Equals(1).kind, Between(0, 1).kind} == {
            "is-true",
            "is-false",
            "equals",
            "between",
        }

    def test_system_rule(self):
        assert DEPENDENCY_RULES == (("preview", ("double-width",), IsTrue()),)


class TestRuleEngine:
    """Tests for register_rule and teardown."""

    def test_evaluated_immediately(self, engine, elements):
        elements["preview"][0].set_value(False)
        engine.register_rule("preview", ["double-width"], IsTrue())
        assert all(not element.is_enabled for element in elements["double-width"])

    def test_follows_controlling_changes(self, engine, elements):
        rule = engine.register_rule("preview", ["double-width"], IsTrue())
        assert rule.enabled

        elements["preview"][0].set_value(False)
        assert not rule.enabled
        assert not elements["double-width"][0].is_enabled
        assert not elements["double-width"][1].is_enabled

        elements["preview"][0].set_value(True)
        assert elements["double-width"][0].is_enabled
        assert elements["double-width"][1].is_enabled

    def test_values_of_dependents_are_untouched(self, engine, elements):
        engine.register_rule("preview", ["double-width"], IsTrue())
        elements["preview"][0].set_value(False)
        elements["preview"][0].set_value(True)
        assert elements["double-width"][0].value is False

    def test_multiple_dependents(self, engine, elements):
        engine.register_rule("cols", ["double-width", "debug"], Equals(4))
        assert not elements["debug"][0].is_enabled
        elements["cols"][0].set_value(4)
        assert elements["debug"][0].is_enabled
        assert elements["double-width"][0].is_enabled

    def test_unknown_controlling_key(self, engine):
        with pytest.raises(UnknownKeyError):
            engine.register_rule("rows", ["double-width"], IsTrue())

    def test_unknown_dependent_key(self, engine):
        with pytest.raises(UnknownKeyError):
            engine.register_rule("preview", ["rows"], IsTrue())
        assert engine.rules == []

    def test_controller_must_be_a_control(self):
        engine = RuleEngine(lambda key: [MemoryLabel(key)])
        with pytest.raises(UnknownKeyError):
            engine.register_rule("preview", ["double-width"], IsTrue())

    def test_teardown_disconnects(self, engine, elements):
        rule = engine.register_rule("preview", ["double-width"], IsTrue())
        engine.teardown()
        assert not rule.is_active
        assert engine.rules == []
        assert elements["preview"][0].connection_count == 0

        elements["preview"][0].set_value(False)
        assert elements["double-width"][0].is_enabled

    def test_evaluate_reapplies(self, engine, elements):
        rule = engine.register_rule("preview", ["double-width"], IsTrue())
        elements["double-width"][0].set_enabled(False)
        assert engine.evaluate(rule) is True
        assert elements["double-width"][0].is_enabled

    def test_evaluate_requires_registered_rule(self, engine):
        with pytest.raises(ValueError):
            engine.evaluate(DependencyRule("preview", ("double-width",), IsTrue()))

    def test_reverted_edit_restores_enablement(self, engine, elements):
        preview = elements["preview"][0]
        preview.on_value_changed(lambda value: preview.set_value(True) if value is False else None)
        engine.register_rule("preview", ["double-width"], IsTrue())
        preview.set_value(False)
        assert preview.get_value() is True
        assert elements["double-width"][0].is_enabled
