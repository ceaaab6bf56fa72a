"""Textual row host: creates and destroys tile rows inside a container."""

from __future__ import annotations

from typing import Callable

from textual.widget import Widget

from .widgets import TileRow


class TextualRowHost:
    """Row host backed by a Textual container."""

    def __init__(self, container: Widget, row_factory: Callable[[], TileRow] = TileRow):
        """Initialize TextualRowHost.

        Args:
            container: Mounted container the rows go into
            row_factory: Builds one row template
        """
        self._container = container
        self._row_factory = row_factory

    def create_row(self) -> TileRow:
        row = self._row_factory()
        self._container.mount(row)
        return row

    def destroy_row(self, row: TileRow) -> None:
        row.remove()

    def clear_rows(self) -> None:
        """Remove every row in one pass, ahead of any rows mounted after it."""
        self._container.remove_children()
