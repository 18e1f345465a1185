"""Error kinds raised by the settings synchronization core."""

from __future__ import annotations


class PrefsError(Exception):
    """Base exception for preferences errors."""


class StoreUnavailableError(PrefsError):
    """The settings store was accessed before ``init()`` or after ``disable()``."""


class OutOfRangeError(PrefsError, ValueError):
    """A write was rejected because the value violates the field's range."""

    def __init__(self, key: str, value: object, minimum: int, maximum: int) -> None:
        super().__init__(f"Value {value!r} for '{key}' is outside [{minimum}, {maximum}]")
        self.key = key
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class UnknownKeyError(PrefsError, KeyError):
    """A key has no entry in the settings schema."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown settings key '{self.key}'"
