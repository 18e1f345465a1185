"""
Dependency rules: conditional enablement between fields.

A rule watches the control bound to one key and enables or disables the
elements of other keys according to a predicate. Rules only change
interactability; stored values are never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from .controls import Control, Sensitive
from .errors import UnknownKeyError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class IsTrue:
    kind: str = field(default="is-true", init=False)

    def evaluate(self, value: Any) -> bool:
        return bool(value)


@dataclass(frozen=True)
class IsFalse:
    kind: str = field(default="is-false", init=False)

    def evaluate(self, value: Any) -> bool:
        return not value


@dataclass(frozen=True)
class Equals:
    expected: Any
    kind: str = field(default="equals", init=False)

    def evaluate(self, value: Any) -> bool:
        return value == self.expected


@dataclass(frozen=True)
class Between:
    """Inclusive numeric range check."""

    minimum: float
    maximum: float
    kind: str = field(default="between", init=False)

    def evaluate(self, value: Any) -> bool:
        try:
            return self.minimum <= value <= self.maximum
        except TypeError:
            return False


@dataclass(frozen=True)
class Custom:
    func: Callable[[Any], bool]
    kind: str = field(default="custom", init=False)

    def evaluate(self, value: Any) -> bool:
        return bool(self.func(value))


Predicate = Union[IsTrue, IsFalse, Equals, Between, Custom]

RuleSpec = tuple[str, Sequence[str], Predicate]

# preview -> double-width: the double width option only applies while previews are on
DEPENDENCY_RULES: tuple[RuleSpec, ...] = (("preview", ("double-width",), IsTrue()),)


@dataclass
class DependencyRule:
    """A registered rule and its subscription on the controlling control."""

    controlling_key: str
    dependent_keys: tuple[str, ...]
    predicate: Predicate
    enabled: bool = True
    _control: Control | None = field(default=None, repr=False)
    _handle: int | None = field(default=None, repr=False)

    @property
    def is_active(self) -> bool:
        return self._handle is not None


class RuleEngine:
    """Registers and enforces dependency rules.

    Args:
        resolve: Returns the elements for a key; the first one must be the
            key's value control. Raises ``UnknownKeyError`` for unknown keys.
    """

    def __init__(self, resolve: Callable[[str], Sequence[Sensitive]]) -> None:
        self._resolve = resolve
        self._rules: list[DependencyRule] = []

    @property
    def rules(self) -> list[DependencyRule]:
        return list(self._rules)

    def register_rule(
        self,
        controlling_key: str,
        dependent_keys: Sequence[str],
        predicate: Predicate,
    ) -> DependencyRule:
        """Register a rule, apply it to the current value, and follow later changes."""
        controller = self._controller(controlling_key)
        dependents = tuple(dependent_keys)
        for key in dependents:
            # Unknown dependents raise here
            self._resolve(key)

        rule = DependencyRule(controlling_key, dependents, predicate, _control=controller)
        self._apply(rule, controller.get_value())
        # Read the control again: a rejected edit may already have been reverted
        rule._handle = controller.on_value_changed(lambda _value: self._apply(rule, controller.get_value()))
        self._rules.append(rule)
        return rule

    def evaluate(self, rule: DependencyRule) -> bool:
        """Re-apply a rule using the controlling control's current value."""
        if rule._control is None:
            raise ValueError(f"Rule on '{rule.controlling_key}' is not registered")
        return self._apply(rule, rule._control.get_value())

    def teardown(self) -> None:
        """Disconnect every rule from its controlling control."""
        for rule in self._rules:
            if rule._control is not None and rule._handle is not None:
                rule._control.disconnect(rule._handle)
            rule._handle = None
        self._rules.clear()

    def _controller(self, key: str) -> Control:
        elements = self._resolve(key)
        if not elements or not isinstance(elements[0], Control):
            raise UnknownKeyError(key)
        return elements[0]

    def _apply(self, rule: DependencyRule, value: Any) -> bool:
        enabled = rule.predicate.evaluate(value)
        rule.enabled = enabled
        for key in rule.dependent_keys:
            for element in self._resolve(key):
                element.set_enabled(enabled)
        LOGGER.debug(
            "Rule %s(%s) -> %s %s",
            rule.predicate.kind,
            rule.controlling_key,
            "enabled" if enabled else "disabled",
            ", ".join(rule.dependent_keys),
        )
        return enabled
