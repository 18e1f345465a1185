"""
Form assembly for the Wintile preferences.

The assembler walks the field descriptors in display order, asks a control
factory for each field's widgets, binds every control to the settings store,
and finally registers the dependency rules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from .binding import Binding, bind, parity_mode
from .controls import Control, ControlFactory, FieldWidgets, MemoryControlFactory, Sensitive
from .errors import UnknownKeyError
from .fields import FIELDS, FieldDescriptor
from .i18n import Translator, identity
from .rules import DEPENDENCY_RULES, RuleEngine, RuleSpec

if TYPE_CHECKING:
    from .session import PrefsSession

LOGGER = logging.getLogger(__name__)

FORM_TITLE = "Wintile Extension Preferences"


class Form:
    """The assembled, bound and rule-governed set of fields."""

    def __init__(self, title: str, widgets: Sequence[FieldWidgets]) -> None:
        self.title = title
        self._widgets: dict[str, FieldWidgets] = {w.descriptor.key: w for w in widgets}
        self.bindings: dict[str, Binding] = {}
        self.rules = RuleEngine(self.controls_for)
        self.errors: list[Exception] = []
        self._torn_down = False

    @property
    def fields(self) -> list[FieldWidgets]:
        """Field widgets in display order."""
        return list(self._widgets.values())

    @property
    def is_active(self) -> bool:
        return not self._torn_down

    def field(self, key: str) -> FieldWidgets:
        try:
            return self._widgets[key]
        except KeyError:
            raise UnknownKeyError(key) from None

    def control(self, key: str) -> Control:
        return self.field(key).control

    def controls_for(self, key: str) -> list[Sensitive]:
        """The value control first, then any other element of the field."""
        return self.field(key).sensitives()

    def binding(self, key: str) -> Binding:
        try:
            return self.bindings[key]
        except KeyError:
            raise UnknownKeyError(key) from None

    def teardown(self) -> None:
        """Release every binding and rule subscription."""
        if self._torn_down:
            return
        self.rules.teardown()
        for binding in self.bindings.values():
            binding.unbind()
        self._torn_down = True
        LOGGER.debug("Form torn down (%d bindings released)", len(self.bindings))


class FormAssembler:
    """Builds forms against a session's settings store.

    Args:
        session: Session providing the store; must be initialized when ``build()`` runs
        factory: Control factory; defaults to in-memory controls
        translate: Label lookup keyed by the English label
        parity: Keep integer fields write-only, as historically implemented
        rules: Dependency rules to register after binding
        on_error: Called with ``(binding, exc)`` when a control edit is rejected
    """

    def __init__(
        self,
        session: PrefsSession,
        factory: ControlFactory | None = None,
        *,
        translate: Translator | None = None,
        parity: bool = False,
        rules: Sequence[RuleSpec] = DEPENDENCY_RULES,
        on_error: Callable[[Binding, Exception], None] | None = None,
        fields: Sequence[FieldDescriptor] = FIELDS,
    ) -> None:
        self.session = session
        self.factory = factory or MemoryControlFactory()
        self.translate = translate or identity
        self.parity = parity
        self.rules = tuple(rules)
        self.on_error = on_error
        self.fields = tuple(fields)

    def build(self) -> Form:
        """Create a new, independent form.

        Raises:
            StoreUnavailableError: If the session is not initialized
            UnknownKeyError: If a field or rule key is missing from the store schema
        """
        store = self.session.store

        widgets = [self.factory.create(descriptor, self.translate(descriptor.label)) for descriptor in self.fields]
        form = Form(self.translate(FORM_TITLE), widgets)

        def record_error(binding: Binding, exc: Exception) -> None:
            form.errors.append(exc)
            if self.on_error is not None:
                self.on_error(binding, exc)

        try:
            for item in widgets:
                descriptor = item.descriptor
                mode = parity_mode(descriptor) if self.parity else None
                form.bindings[descriptor.key] = bind(store, descriptor, item.control, mode=mode, on_error=record_error)

            for controlling_key, dependent_keys, predicate in self.rules:
                form.rules.register_rule(controlling_key, dependent_keys, predicate)
        except Exception:
            form.teardown()
            raise

        LOGGER.debug("Built form with %d fields and %d rules", len(form.bindings), len(form.rules.rules))
        return form
