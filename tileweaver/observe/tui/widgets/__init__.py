"""TUI widgets for TileWeaver."""

from .seek_slider import SeekSlider
from .tile_row import TileRow, TileLabel
from .header import EditorHeader
from .output_view import OutputView

__all__ = ["SeekSlider", "TileRow", "TileLabel", "EditorHeader", "OutputView"]
