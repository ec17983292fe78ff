from dataclasses import dataclass

from ecogrid.grid import Grid

@dataclass(slots=True)
class Board:
    width: int
    height: int
    grid: Grid
    name: str = ""
