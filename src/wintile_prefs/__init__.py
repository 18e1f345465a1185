"""Wintile preferences: settings synchronization core and NiceGUI editor.

The package is organized leaves first:

- **fields**: the fixed set of field descriptors in display order
- **store**: typed, validated, persisted settings store with change notification
- **session**: init/disable lifecycle around the store
- **controls**: control capabilities and in-memory controls
- **binding**: links between a store key and a control
- **rules**: conditional enablement between fields
- **form**: assembles fields, bindings and rules into a form

The NiceGUI front end lives in ``wintile_prefs.gui`` and is imported on demand.
"""

from importlib.metadata import PackageNotFoundError, version

from .binding import Binding, bind
from .errors import OutOfRangeError, PrefsError, StoreUnavailableError, UnknownKeyError
from .fields import FIELDS, FieldDescriptor, get_field
from .form import Form, FormAssembler
from .rules import DEPENDENCY_RULES, RuleEngine
from .session import PrefsSession
from .store import SettingsStore

try:
    __version__ = version("wintile-prefs")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "Binding",
    "bind",
    "DEPENDENCY_RULES",
    "FIELDS",
    "FieldDescriptor",
    "Form",
    "FormAssembler",
    "get_field",
    "OutOfRangeError",
    "PrefsError",
    "PrefsSession",
    "RuleEngine",
    "SettingsStore",
    "StoreUnavailableError",
    "UnknownKeyError",
]
