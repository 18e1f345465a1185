"""
NiceGUI front end for the Wintile preferences.

Public API:
    - run_prefs: Open the settings store and serve the preferences page
    - create_app: Register the preferences page on the NiceGUI app
    - prefs_page: Render a bound preferences form in the current page
"""

from __future__ import annotations

from .app import create_app, run_prefs
from .controls import NiceGUIControl, NiceGUIControlFactory, NiceGUILabel
from .page import prefs_page

__all__ = [
    "create_app",
    "run_prefs",
    "prefs_page",
    "NiceGUIControl",
    "NiceGUIControlFactory",
    "NiceGUILabel",
]
