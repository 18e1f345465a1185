"""Label translation using the ``wintile`` gettext domain."""

from __future__ import annotations

import gettext
import logging
from collections.abc import Callable
from pathlib import Path

LOGGER = logging.getLogger(__name__)

DOMAIN = "wintile"

Translator = Callable[[str], str]


def identity(text: str) -> str:
    return text


def get_translator(localedir: Path | None = None, languages: list[str] | None = None) -> Translator:
    """Return a lookup function keyed by the English label.

    Falls back to returning the label unchanged when no catalog is installed.
    """
    translation = gettext.translation(
        DOMAIN,
        localedir=str(localedir) if localedir else None,
        languages=languages,
        fallback=True,
    )
    if type(translation) is gettext.NullTranslations:
        LOGGER.debug("No '%s' translation catalog found; using English labels", DOMAIN)
    return translation.gettext
