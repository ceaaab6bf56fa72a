"""TileWeaver - a tile-weight editor for a tiled Wave Function Collapse generator."""

__version__ = "0.1.0"
