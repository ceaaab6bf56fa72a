"""
Wave Function Collapse solver.

Classic observe/propagate loop:
1. Pick the uncollapsed cell with the fewest options (random tie-break)
2. Collapse it to one tile, weighted by tile weight
3. Propagate adjacency constraints outward
4. Repeat until every cell is collapsed or some cell has no options
"""

from collections import deque
from enum import Enum, auto
import random

from .grid import Grid, Cell
from .tile import Tile, Direction


class SolverState(Enum):
    """The current state of the WFC solver."""
    RUNNING = auto()
    COMPLETE = auto()
    CONTRADICTION = auto()


class WFCSolver:
    """
    Solves one grid against a tileset.

    Usage:
        solver = WFCSolver(grid, tiles, rng)
        if solver.solve():
            ...  # every cell collapsed
    """

    def __init__(self, grid: Grid, tiles: dict[str, Tile], rng: random.Random | None = None):
        self.grid = grid
        self.tiles = tiles
        self.rng = rng or random.Random()
        self.collapsed_count = sum(1 for cell in grid if cell.collapsed)

    def step(self) -> SolverState:
        """Observe one cell and propagate. Returns the state afterwards."""
        cell = self._lowest_entropy_cell()
        if cell is None:
            return SolverState.COMPLETE
        if cell.contradicted:
            return SolverState.CONTRADICTION

        self._collapse(cell)
        if not self._propagate(cell):
            return SolverState.CONTRADICTION
        return SolverState.RUNNING

    def solve(self, progress=None) -> bool:
        """
        Run to completion.

        Args:
            progress: Optional callback(collapsed, total) after each step

        Returns:
            True on success, False on contradiction
        """
        total = self.grid.width * self.grid.height
        while True:
            state = self.step()
            if progress is not None:
                progress(self.collapsed_count, total)
            if state == SolverState.COMPLETE:
                return True
            if state == SolverState.CONTRADICTION:
                return False

    def _lowest_entropy_cell(self) -> Cell | None:
        best = None
        candidates: list[Cell] = []
        for cell in self.grid:
            if cell.collapsed:
                continue
            entropy = len(cell.options)
            if best is None or entropy < best:
                best = entropy
                candidates = [cell]
            elif entropy == best:
                candidates.append(cell)
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def _collapse(self, cell: Cell) -> None:
        options = sorted(cell.options)
        weights = [self.tiles[name].weight for name in options]
        if sum(weights) <= 0:
            # Only zero-weight tiles fit here
            weights = [1] * len(options)
        choice = self.rng.choices(options, weights=weights, k=1)[0]
        cell.options = {choice}
        self.collapsed_count += 1

    def _allowed_from(self, cell: Cell, direction: Direction) -> set[str]:
        allowed: set[str] = set()
        for name in cell.options:
            allowed |= self.tiles[name].allowed(direction)
        return allowed

    def _propagate(self, start: Cell) -> bool:
        queue: deque[Cell] = deque([start])
        while queue:
            cell = queue.popleft()
            for neighbor, direction in self.grid.neighbors(cell):
                if neighbor.collapsed:
                    continue
                if neighbor.restrict(self._allowed_from(cell, direction)):
                    if neighbor.contradicted:
                        return False
                    if neighbor.collapsed:
                        self.collapsed_count += 1
                    queue.append(neighbor)
        return True
