from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Union

from rich.logging import RichHandler

DEFAULT_LABEL_WIDTH = 16
DEFAULT_INDENT = "    "
PACKAGE_LOGGER = "wintile_prefs"

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def configure_logging(level: int | str = logging.INFO) -> RichHandler:
    """Send package logs to the console through Rich.

    Replaces any Rich handler installed by a previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def render_fields_block(title: str, fields: FieldMapping, *, label_width: int = DEFAULT_LABEL_WIDTH) -> str:
    """Render a titled block of ``label: value`` lines for the log."""
    items = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    width = max([label_width, *(len(str(key)) for key, _ in items)])
    lines = [title, "-" * len(title)]
    lines.extend(f"{DEFAULT_INDENT}{str(key):<{width}}: {_stringify(value)}" for key, value in items)
    return "\n".join(lines)
