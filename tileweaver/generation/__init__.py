"""Tiled output generation for TileWeaver."""

from .generator import TiledGenerator, PlacedTile
from .tileset import load_tileset

__all__ = [
    "TiledGenerator",
    "PlacedTile",
    "load_tileset",
]
