"""
NiceGUI application setup and entry point for the Wintile preferences.

The session is opened once for the process; every browser client gets its
own form bound to that session's store.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nicegui import app, ui

from .. import session as prefs_session
from ..config import AppConfig
from ..i18n import get_translator
from ..logging_utils import configure_logging, render_fields_block
from ..session import PrefsSession
from .page import prefs_page

LOGGER = logging.getLogger(__name__)


def create_app(session: PrefsSession, *, localedir: Path | None = None, parity: bool = False) -> None:
    """Register the preferences page."""
    translate = get_translator(localedir)

    @ui.page("/")
    def index_page() -> None:
        """Preferences page."""
        prefs_page(session, translate=translate, parity=parity)


def run_prefs(config: AppConfig, *, parity: bool = False) -> None:
    """Open the settings store and serve the preferences page until shutdown."""
    configure_logging(config.log_level)

    session = prefs_session.init(config.settings_path)
    LOGGER.info(render_fields_block(f"Settings ({config.settings_path})", session.store.snapshot()))

    create_app(session, localedir=config.localedir, parity=parity)

    @app.on_shutdown
    def on_shutdown() -> None:
        LOGGER.info("Shutting down preferences GUI...")
        prefs_session.disable()

    LOGGER.info("Starting preferences GUI on http://%s:%d", config.host, config.port)
    ui.run(
        host=config.host,
        port=config.port,
        title="Wintile Preferences",
        dark=None,
        reload=False,
        show=False,
    )

