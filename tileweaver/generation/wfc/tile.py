"""
Tile definitions for the tiled Wave Function Collapse generator.

Each tile carries its selection weight and, per direction, the set of tile
names allowed next to it. Propagation relies on rules being symmetric: if A
allows B to its east, B must allow A to its west.
"""

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Grid directions as (dx, dy) offsets. y grows downward (row order)."""
    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}


@dataclass
class Tile:
    """
    A tile type that can be placed in the output.

    Attributes:
        name: Tile name as it appears in the configuration document
        weight: Selection weight (the primary weight). Higher is more common;
                0 means the tile is only used when nothing else fits.
        neighbors: For each direction, tile names allowed on that side
    """
    name: str
    weight: int = 1
    neighbors: dict[Direction, set[str]] = field(default_factory=dict)

    def __post_init__(self):
        for direction in Direction:
            self.neighbors.setdefault(direction, set())

    def allow(self, direction: Direction, other: str) -> None:
        self.neighbors[direction].add(other)

    def allowed(self, direction: Direction) -> set[str]:
        return self.neighbors.get(direction, set())


def connect(tiles: dict[str, Tile], first: str, second: str) -> None:
    """Let two tiles sit next to each other on every side."""
    for direction in Direction:
        tiles[first].allow(direction, second)
        tiles[second].allow(direction.opposite, first)


def connect_all(tiles: dict[str, Tile]) -> None:
    """Let every tile neighbor every tile (used when a document has no rules)."""
    names = list(tiles)
    for first in names:
        for second in names:
            connect(tiles, first, second)
