"""
Tiled generator.

The generator collaborator driven by the regeneration orchestrator:

    generator.reload(config_text)   # parse the tileset
    generator.generate()            # fresh grid and solver
    generator.run()                 # solve and place output

Output is a flat list of PlacedTile, one per cell, in row order.
"""

import logging
import random
from typing import Callable, NamedTuple

from tileweaver.core.errors import GenerationError
from .tileset import load_tileset
from .wfc import Grid, Tile, WFCSolver

logger = logging.getLogger(__name__)


class PlacedTile(NamedTuple):
    """One generated element."""
    x: int
    y: int
    name: str


class TiledGenerator:
    """Wave Function Collapse over the tiles of a configuration document."""

    def __init__(
        self,
        width: int = 32,
        height: int = 16,
        seed: int | None = None,
        max_retries: int = 10,
        progress: Callable[[int, int], None] | None = None,
    ):
        """
        Args:
            width: Output width in cells
            height: Output height in cells
            seed: Random seed for reproducible output (None = random)
            max_retries: Fresh attempts after a contradiction before giving up
            progress: Default progress callback(collapsed, total) for run()
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Output must be at least 1x1, got {width}x{height}")
        self.width = width
        self.height = height
        self.max_retries = max_retries
        self.rng = random.Random(seed)
        self.progress = progress

        self.config: str | None = None
        self.tiles: dict[str, Tile] = {}
        self.output: list[PlacedTile] = []
        self._solver: WFCSolver | None = None

    def reload(self, config: str) -> None:
        """Take a new configuration. Raises ParseError if it is unusable."""
        tiles = load_tileset(config)
        self.config = config
        self.tiles = tiles
        self._solver = None

    def generate(self) -> None:
        """Prepare a fresh grid in full superposition."""
        if not self.tiles:
            raise GenerationError("No tileset loaded; call reload() first")
        grid = Grid(self.width, self.height, set(self.tiles))
        self._solver = WFCSolver(grid, self.tiles, self.rng)

    def run(self, progress: Callable[[int, int], None] | None = None) -> list[PlacedTile]:
        """
        Solve the prepared grid and place the result into `output`.

        Args:
            progress: Optional callback(collapsed, total); defaults to self.progress

        Returns:
            The placed tiles

        Raises:
            GenerationError: If every attempt hits a contradiction
        """
        if self._solver is None:
            self.generate()
        progress = progress or self.progress

        for attempt in range(self.max_retries):
            if self._solver.solve(progress):
                placed = [
                    PlacedTile(cell.x, cell.y, cell.tile_name)
                    for cell in self._solver.grid
                ]
                self.output.extend(placed)
                logger.debug(f"Generated {len(placed)} tiles on attempt {attempt + 1}")
                return placed

            logger.debug(f"Contradiction on attempt {attempt + 1}/{self.max_retries}")
            self.generate()

        raise GenerationError(
            f"Generation failed after {self.max_retries} attempts. "
            "Check the neighbor rules or raise some weights above zero."
        )

    def as_rows(self) -> list[list[str | None]]:
        """Current output as rows of tile names (None where nothing is placed)."""
        rows: list[list[str | None]] = [[None] * self.width for _ in range(self.height)]
        for tile in self.output:
            if 0 <= tile.x < self.width and 0 <= tile.y < self.height:
                rows[tile.y][tile.x] = tile.name
        return rows
