"""Header widget for TileWeaver TUI.

Shows the document, tile count and save status.
"""

from __future__ import annotations

from textual.widgets import Static
from textual.reactive import reactive


class EditorHeader(Static):
    """Header widget showing session state."""

    document: reactive[str] = reactive("")
    tiles: reactive[int] = reactive(0)
    saves: reactive[int] = reactive(0)
    last_saved: reactive[str] = reactive("")
    status: reactive[str] = reactive("IDLE")

    def render(self) -> str:
        """Render the header."""
        parts = [
            "TileWeaver",
            f"Document: {self.document or '-'}",
            f"Tiles: {self.tiles}",
            f"Saves: {self.saves}",
        ]

        if self.last_saved:
            parts.append(f"Last save: {self.last_saved}")

        parts.append(f"[{self.status}]")

        return " | ".join(parts)

    def update_state(
        self,
        document: str | None = None,
        tiles: int | None = None,
        saves: int | None = None,
        last_saved: str | None = None,
        status: str | None = None,
    ) -> None:
        """Update header state. Arguments left as None are unchanged."""
        if document is not None:
            self.document = document
        if tiles is not None:
            self.tiles = tiles
        if saves is not None:
            self.saves = saves
        if last_saved is not None:
            self.last_saved = last_saved
        if status is not None:
            self.status = status
