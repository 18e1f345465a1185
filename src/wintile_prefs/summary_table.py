from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.table import Table

from .fields import FIELDS

if TYPE_CHECKING:  # pragma: no cover
    from .store import SettingsStore

MODIFIED_COLOR = "yellow"
DIM_COLOR = "dim"
MODIFIED_SYMBOL = "●"


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "[green]on[/green]" if value else "[dim]off[/dim]"
    return str(value)


def build_settings_table(store: SettingsStore) -> Table:
    """Build a table of every setting with its current and default value."""
    table = Table(title="Wintile settings", show_header=True, header_style="bold")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_column("Default", justify="right", style=DIM_COLOR)
    table.add_column("Range", style=DIM_COLOR)
    table.add_column("", justify="center")

    snapshot = store.snapshot()
    for descriptor in FIELDS:
        value = snapshot[descriptor.key]
        value_range = f"{descriptor.range.minimum}-{descriptor.range.maximum}" if descriptor.range else ""
        modified = "" if value == descriptor.default else f"[{MODIFIED_COLOR}]{MODIFIED_SYMBOL}[/{MODIFIED_COLOR}]"
        table.add_row(descriptor.key, _format_value(value), _format_value(descriptor.default), value_range, modified)
    return table


def render_settings_table(store: SettingsStore, console: Optional[Console] = None) -> None:
    """Print the settings table to the console."""
    (console or Console()).print(build_settings_table(store))
