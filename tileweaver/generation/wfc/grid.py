"""
Grid state for Wave Function Collapse.

Every cell starts in superposition (all tile names possible) and narrows
until exactly one name remains.
"""

from dataclasses import dataclass, field
from typing import Iterator

from .tile import Direction


@dataclass(eq=False)
class Cell:
    """A grid cell and the tile names it may still become."""
    x: int
    y: int
    options: set[str] = field(default_factory=set)

    @property
    def collapsed(self) -> bool:
        return len(self.options) == 1

    @property
    def contradicted(self) -> bool:
        return not self.options

    @property
    def tile_name(self) -> str | None:
        """The chosen tile name, or None if not yet collapsed."""
        if self.collapsed:
            return next(iter(self.options))
        return None

    def restrict(self, allowed: set[str]) -> bool:
        """Drop options not in `allowed`. Returns True if anything was dropped."""
        before = len(self.options)
        self.options &= allowed
        return len(self.options) < before


class Grid:
    """A width x height field of cells, indexed as cells[y][x]."""

    def __init__(self, width: int, height: int, names: set[str]):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.names = frozenset(names)
        self.cells: list[list[Cell]] = [
            [Cell(x, y, set(names)) for x in range(width)]
            for y in range(height)
        ]

    def cell(self, x: int, y: int) -> Cell | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y][x]
        return None

    def neighbors(self, cell: Cell) -> Iterator[tuple[Cell, Direction]]:
        """Yield (neighbor, direction from cell to neighbor)."""
        for direction in Direction:
            neighbor = self.cell(cell.x + direction.dx, cell.y + direction.dy)
            if neighbor is not None:
                yield neighbor, direction

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def is_complete(self) -> bool:
        return all(cell.collapsed for cell in self)
