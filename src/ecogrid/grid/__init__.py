from ecogrid.grid.cell import CLEARED, HOLE, Cell
from ecogrid.grid.errors import (
    GridConstructionError,
    GridError,
    InfeasibleBoardError,
    InsufficientPiecesError,
    InvalidLayoutError,
    LayoutGenerationError,
    MixedRemovalBatchError,
)
from ecogrid.grid.puzzle_grid import MIN_PIECES_PER_TYPE, Grid, RemovalResult

__all__ = [
    "CLEARED",
    "HOLE",
    "MIN_PIECES_PER_TYPE",
    "Cell",
    "Grid",
    "GridConstructionError",
    "GridError",
    "InfeasibleBoardError",
    "InsufficientPiecesError",
    "InvalidLayoutError",
    "LayoutGenerationError",
    "MixedRemovalBatchError",
    "RemovalResult",
]
