"""
Settings store lifecycle.

A ``PrefsSession`` owns the settings store connection between ``init()`` and
``disable()``. Callers pass the session explicitly to the form assembler;
the module-level helpers wrap one process-wide session for the GUI entry
point.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .errors import StoreUnavailableError
from .logging_utils import PACKAGE_LOGGER
from .store import SettingsStore, Subscription

LOGGER = logging.getLogger(__name__)


class PrefsSession:
    """Explicit handle to the settings store.

    Args:
        settings_path: YAML file backing the store, or None for memory only
        initial: Initial values for a memory-only store (mainly for tests)
    """

    def __init__(self, settings_path: Path | None = None, *, initial: dict[str, Any] | None = None) -> None:
        self.settings_path = settings_path
        self._initial = initial
        self._store: SettingsStore | None = None
        self._debug_subscription: Subscription | None = None
        self._base_level: int | None = None

    @property
    def is_active(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> SettingsStore:
        """The live settings store.

        Raises:
            StoreUnavailableError: Outside the init/disable window
        """
        if self._store is None:
            raise StoreUnavailableError("Settings store is not initialized; call init() first")
        return self._store

    def init(self) -> SettingsStore:
        """Open the settings store. Calling it again while active is a no-op."""
        if self._store is not None:
            return self._store

        LOGGER.info("Opening settings store%s", f" at {self.settings_path}" if self.settings_path else " in memory")
        store = SettingsStore(self.settings_path, initial=self._initial)
        self._store = store

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        self._base_level = package_logger.level
        self._debug_subscription = store.subscribe("debug", lambda _key, value: self._apply_debug(bool(value)))
        self._apply_debug(store.get_bool("debug"))
        return store

    def disable(self) -> None:
        """Release the settings store. The backing file is left untouched."""
        if self._store is None:
            return

        self._apply_debug(False)
        self._store.close()
        self._store = None
        self._debug_subscription = None
        LOGGER.info("Settings store released")

    def _apply_debug(self, enabled: bool) -> None:
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if enabled:
            package_logger.setLevel(logging.DEBUG)
            LOGGER.debug("Debug logging enabled")
        elif self._base_level is not None:
            package_logger.setLevel(self._base_level)


_current: PrefsSession | None = None


def init(settings_path: Path | None = None) -> PrefsSession:
    """Create and open the process-wide session.

    Calling it again with the same path returns the open session.

    Raises:
        ValueError: If a session for a different settings path is already open
    """
    global _current
    if _current is not None and _current.settings_path != settings_path:
        raise ValueError(
            f"Preferences session already open for {_current.settings_path}; call disable() before {settings_path}"
        )
    if _current is None:
        _current = PrefsSession(settings_path)
    _current.init()
    return _current


def disable() -> None:
    """Close and drop the process-wide session."""
    global _current
    if _current is not None:
        _current.disable()
        _current = None


def current_session() -> PrefsSession:
    """Return the process-wide session.

    Raises:
        StoreUnavailableError: If ``init()`` has not been called
    """
    if _current is None:
        raise StoreUnavailableError("Preferences session is not initialized; call init() first")
    return _current
