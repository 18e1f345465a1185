"""
Preferences page for the Wintile GUI.

Builds a form against the session's store inside a settings card and ties
the form's lifetime to the browser client.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nicegui import ui

from ..form import FORM_TITLE, Form, FormAssembler
from ..i18n import Translator, identity
from .controls import NiceGUIControlFactory

if TYPE_CHECKING:
    from ..binding import Binding
    from ..session import PrefsSession

LOGGER = logging.getLogger(__name__)


def _notify_rejected(binding: Binding, exc: Exception) -> None:
    ui.notify(f"{binding.descriptor.label}: {exc}", type="warning")


def prefs_page(session: PrefsSession, *, translate: Translator | None = None, parity: bool = False) -> Form:
    """Render the preferences form.

    Args:
        session: Initialized preferences session
        translate: Label lookup (identity when omitted)
        parity: Keep integer fields write-only

    Returns:
        The built form; it is torn down when the client disconnects
    """
    translate = translate or identity

    with ui.column().classes("w-full max-w-2xl mx-auto p-4 gap-4"):
        ui.label(translate(FORM_TITLE)).classes(
            "w-full text-center text-xl font-bold text-slate-800 dark:text-slate-100"
        )
        with ui.card().classes("glass-card w-full"):
            with ui.column().classes("w-full gap-2"):
                form = FormAssembler(
                    session,
                    NiceGUIControlFactory(),
                    translate=translate,
                    parity=parity,
                    on_error=_notify_rejected,
                ).build()

    try:
        ui.context.client.on_disconnect(form.teardown)
    except RuntimeError:
        # Built outside a page context (e.g. auto-index client); nothing to hook
        LOGGER.debug("No client context; form teardown left to the caller")

    return form
