"""Farm panel renderer.

This module provides render_farm_panel, which displays every farm entry with
its path, size, per-field status and the generic path error hint.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import default_path_placeholder
from ..display import get_status_badge, truncate_path
from ..farm_entry import FarmEntry

PATH_ERROR_HINT = "Folder doesn't exist or user is lacking write permissions"
SIZE_PLACEHOLDER = "4T, 2.5TB, 500GiB, etc."
MAX_PATH_WIDTH = 60


def _render_entry(entry: FarmEntry) -> Group:
    """Build the rows for a single farm."""
    heading = Text(f"Farm {entry.identity.display_index + 1}", style="bold")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column()
    table.add_column()

    path_symbol, path_color = get_status_badge(entry.path.status_icon())
    if entry.path.value is not None:
        path_cell = Text(truncate_path(str(entry.path.value), MAX_PATH_WIDTH))
    else:
        path_cell = Text(default_path_placeholder(), style="dim italic")
    table.add_row("Path:", path_cell, Text(path_symbol, style=path_color))

    size_symbol, size_color = get_status_badge(entry.size.status_icon())
    if entry.size.value:
        size_cell = Text(entry.size.value)
    else:
        size_cell = Text(SIZE_PLACEHOLDER, style="dim italic")
    table.add_row("Size:", size_cell, Text(size_symbol, style=size_color))

    items: list = [heading, table]
    if entry.show_path_error:
        items.append(Text(PATH_ERROR_HINT, style="red"))

    return Group(*items)


def render_farm_panel(entries: Sequence[FarmEntry]) -> Panel:
    """Build Rich Panel listing all farms.

    Args:
        entries: Farm entries in display order

    Returns:
        Rich Panel with a green border when every farm is valid
    """
    if not entries:
        content = Text(
            "No farms configured",
            justify="center",
            style="dim italic",
        )
        return Panel(content, title="Farms", border_style="dim", padding=(1, 2))

    rows: list = []
    for position, entry in enumerate(entries):
        if position:
            rows.append("")
        rows.append(_render_entry(entry))

    all_valid = all(entry.is_valid() for entry in entries)
    return Panel(
        Group(*rows),
        title="Farms",
        border_style="green" if all_valid else "red",
        padding=(1, 2),
    )
