"""Wave Function Collapse for tiled output."""

from .tile import Tile, Direction, connect, connect_all
from .grid import Grid, Cell
from .solver import WFCSolver, SolverState

__all__ = [
    "Tile",
    "Direction",
    "connect",
    "connect_all",
    "Grid",
    "Cell",
    "WFCSolver",
    "SolverState",
]
