"""Field descriptors for the Wintile preferences.

The descriptor set is fixed: nine options shown in a fixed display order.
Each descriptor carries the settings key, the value kind, the valid range for
integer options, the schema default, and the English label used as the
translation key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .errors import UnknownKeyError

FieldKind = Literal["integer", "boolean"]

INTEGER: FieldKind = "integer"
BOOLEAN: FieldKind = "boolean"


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer range with a step increment."""

    minimum: int
    maximum: int
    step: int = 1

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def snap(self, value: float) -> int:
        """Round a raw control value to the nearest step, anchored at the minimum."""
        steps = round((value - self.minimum) / self.step)
        return int(self.minimum + steps * self.step)


@dataclass(frozen=True)
class FieldDescriptor:
    """Static metadata for one configurable option.

    Attributes:
        key: Settings store key (unique)
        kind: "integer" or "boolean"
        label: English label, also the lookup key for translations
        default: Value used when the store holds nothing for this key
        range: Valid range for integer fields, None for booleans
        indent: Whether the row is shown as a sub-option of the row above
    """

    key: str
    kind: FieldKind
    label: str
    default: int | bool
    range: IntRange | None = None
    indent: bool = False

    def __post_init__(self) -> None:
        if self.kind == INTEGER and self.range is None:
            raise ValueError(f"Integer field '{self.key}' requires a range")
        if self.kind == BOOLEAN and self.range is not None:
            raise ValueError(f"Boolean field '{self.key}' cannot have a range")

    @property
    def is_integer(self) -> bool:
        return self.kind == INTEGER

    @property
    def is_boolean(self) -> bool:
        return self.kind == BOOLEAN

    @property
    def int_range(self) -> IntRange:
        """The range of an integer field.

        Raises:
            TypeError: For boolean fields
        """
        if self.range is None:
            raise TypeError(f"Field '{self.key}' has no integer range")
        return self.range

    def coerce(self, value: object) -> int | bool:
        """Convert a raw control value to this field's value type.

        Integer controls may report floats; they are snapped to the field's
        step. The result is not range-checked.
        """
        if self.is_boolean:
            return bool(value)
        if isinstance(value, bool):
            raise TypeError(f"Field '{self.key}' expects an integer, got bool")
        return self.int_range.snap(float(value))  # type: ignore[arg-type]


FIELDS: tuple[FieldDescriptor, ...] = (
    FieldDescriptor("cols", INTEGER, "Number of columns", 2, IntRange(2, 4, 1)),
    FieldDescriptor("ultrawide-only", BOOLEAN, "Treat monitors <= 16:9 as 2x2", False),
    FieldDescriptor("use-maximize", BOOLEAN, "Use true maximizing of windows", True),
    FieldDescriptor("use-minimize", BOOLEAN, "Allow minimizing of windows", True),
    FieldDescriptor("preview", BOOLEAN, "Enable preview and snapping when dragging windows", True),
    FieldDescriptor(
        "double-width",
        BOOLEAN,
        "Use double width previews on sides in 4 column mode",
        True,
        indent=True,
    ),
    FieldDescriptor(
        "distance",
        INTEGER,
        "Pixels from edge to start preview",
        75,
        IntRange(0, 150, 1),
        indent=True,
    ),
    FieldDescriptor(
        "delay",
        INTEGER,
        "Delay in ms before preview displays",
        500,
        IntRange(25, 1000, 1),
        indent=True,
    ),
    FieldDescriptor("debug", BOOLEAN, "Turn on debugging", False),
)

_FIELDS_BY_KEY: dict[str, FieldDescriptor] = {descriptor.key: descriptor for descriptor in FIELDS}


def get_field(key: str) -> FieldDescriptor:
    """Look up a descriptor by settings key.

    Raises:
        UnknownKeyError: If the key is not part of the schema
    """
    try:
        return _FIELDS_BY_KEY[key]
    except KeyError:
        raise UnknownKeyError(key) from None


def field_keys() -> list[str]:
    """Return all settings keys in display order."""
    return [descriptor.key for descriptor in FIELDS]


def default_values() -> dict[str, int | bool]:
    """Return the schema defaults keyed by settings key."""
    return {descriptor.key: descriptor.default for descriptor in FIELDS}
