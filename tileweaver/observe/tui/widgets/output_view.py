"""Output view widget for TileWeaver TUI.

Renders the generator's placed tiles as a character grid.
"""

from __future__ import annotations

import zlib
from typing import TYPE_CHECKING

from rich.text import Text
from textual.widget import Widget

if TYPE_CHECKING:
    from tileweaver.generation import TiledGenerator


# Symbols for the bundled terrain tileset
TILE_RENDER: dict[str, tuple[str, str]] = {
    "grass": (".", "green"),
    "water": ("≈", "blue"),
    "coast": ("~", "bright_blue"),
    "stone": ("▲", "bright_black"),
    "sand": (":", "yellow"),
    "forest": ("♣", "bright_green"),
    "hill": ("^", "rgb(160,64,0)"),
}

FALLBACK_COLORS = ["red", "magenta", "cyan", "yellow", "green", "blue", "white"]


def get_tile_render(name: str) -> tuple[str, str]:
    """Get (symbol, color) for a tile name. Unknown tiles use their initial."""
    if name in TILE_RENDER:
        return TILE_RENDER[name]
    color = FALLBACK_COLORS[zlib.crc32(name.encode("utf-8")) % len(FALLBACK_COLORS)]
    return (name[:1].upper() or "?", color)


class OutputView(Widget):
    """Widget showing the latest generated output."""

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        super().__init__(name=name, id=id, classes=classes)
        self._rows: list[list[str | None]] = []

    @property
    def is_empty(self) -> bool:
        return not any(name for row in self._rows for name in row)

    def update_output(self, generator: "TiledGenerator") -> None:
        """Take a snapshot of the generator's output and redraw."""
        self._rows = generator.as_rows()
        self.refresh()

    def render(self) -> Text:
        if self.is_empty:
            return Text("No output yet. Press g to regenerate.", style="italic bright_black")

        result = Text()
        for i, row in enumerate(self._rows):
            for name in row:
                if name is None:
                    result.append("  ")
                    continue
                symbol, color = get_tile_render(name)
                result.append(symbol, style=color)
                result.append(" ")
            if i < len(self._rows) - 1:
                result.append("\n")
        return result
