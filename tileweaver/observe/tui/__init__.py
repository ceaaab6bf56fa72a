"""Textual host for TileWeaver."""

from .app import TileWeaverTUI, run_tui
from .host import TextualRowHost

__all__ = ["TileWeaverTUI", "run_tui", "TextualRowHost"]
