"""
Tileset loading for the tiled generator.

Reads the same XML document the editor writes. Tile weights come from the
primary weight component; adjacency comes from optional neighbor rules:

    <set>
      <tiles>
        <tile name="sand" weight="3,0" />
        <tile name="water" weight="1,0" />
      </tiles>
      <neighbors>
        <neighbor left="sand" right="water" />
      </neighbors>
    </set>

Each rule lets the two tiles touch on every side. A side may carry a
rotation suffix ("sand 1"); only the first word is used. A document without
any neighbor rules lets every tile touch every tile.
"""

import logging

from tileweaver.core.document import TileDocument
from tileweaver.core.errors import FormatError, ParseError
from tileweaver.core.weights import parse_primary
from .wfc import Tile, connect, connect_all

logger = logging.getLogger(__name__)

NEIGHBOR_TAG = "neighbor"


def _rule_side(value: str | None) -> str | None:
    if not value:
        return None
    return value.split()[0]


def load_tileset(config: str) -> dict[str, Tile]:
    """
    Build the tileset from document text.

    Tiles whose weight cannot be parsed fall back to weight 1.

    Raises:
        ParseError: If the document is malformed or defines no tiles
    """
    document = TileDocument.parse(config)

    tiles: dict[str, Tile] = {}
    for name, weight in document.entries():
        try:
            primary = parse_primary(weight)
        except FormatError as e:
            logger.warning(f"Tile '{name}' has unreadable weight {weight!r}, using 1: {e}")
            primary = 1
        tiles[name] = Tile(name=name, weight=max(primary, 0))

    if not tiles:
        raise ParseError("Tile document defines no tiles")

    rules = 0
    for element in document.root.iter(NEIGHBOR_TAG):
        left = _rule_side(element.get("left"))
        right = _rule_side(element.get("right"))
        if left not in tiles or right not in tiles:
            logger.warning(f"Ignoring neighbor rule with unknown tile: {left!r} / {right!r}")
            continue
        connect(tiles, left, right)
        rules += 1

    if rules == 0:
        connect_all(tiles)

    logger.debug(f"Loaded tileset: {len(tiles)} tiles, {rules} neighbor rules")
    return tiles
