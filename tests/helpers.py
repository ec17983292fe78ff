from __future__ import annotations

from typing import Iterable

from ecogrid.events.bus import EVENT_TICK, EventBus
from ecogrid.grid import CLEARED, HOLE, Grid

# Layouts are indexed layout[x][y]; each inner list is one column.

# 4x4, three types of five pieces, hole at (2, 1).
SLIDE_LAYOUT = [
    [1, 2, 3, 1],
    [2, 3, 1, 2],
    [3, 0, 2, 3],
    [1, 2, 3, 1],
]

# 4x4 with two disjoint matches: type 1 at (0, 0) and type 3 at (2, 2).
# The type 3 block touches (1, 3) and (0, 3); (2, 0) is a lone type 3 piece.
TWO_MATCH_LAYOUT = [
    [1, 1, 2, 3],
    [1, 1, 2, 3],
    [3, 2, 3, 3],
    [2, 0, 3, 3],
]

# 4x4, type 1 block at (0, 0) extended by (2, 0) and (2, 1); (3, 3) is a detached type 1 piece.
FLOOD_LAYOUT = [
    [1, 1, 2, 3],
    [1, 1, 3, 2],
    [1, 1, 2, 3],
    [2, 3, 0, 1],
]

# 4x4, hole at (1, 1); clicking (2, 1) completes a type 1 block at (0, 0).
# Type 1 has exactly four pieces, so the whole block is cleared.
ONE_CLICK_MATCH_LAYOUT = [
    [1, 1, 2, 3],
    [1, 0, 3, 2],
    [2, 1, 2, 3],
    [3, 2, 3, 2],
]

# 3x3, one type with four pieces left; clicking (2, 1) completes the last block.
NEARLY_SOLVED_LAYOUT = [
    [1, 1, CLEARED],
    [1, HOLE, CLEARED],
    [CLEARED, 1, CLEARED],
]


def drive_ticks(bus: EventBus, count: int = 60, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


class EventRecorder:
    """Collects payloads of the named events in emission order."""

    def __init__(self, bus: EventBus, names: Iterable[str]):
        self.events: list[tuple[str, dict]] = []
        for name in names:
            bus.subscribe(name, self._make_handler(name))

    def _make_handler(self, name: str):
        def handler(sender, **payload):
            self.events.append((name, payload))
        return handler

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: str) -> list[dict]:
        return [payload for event_name, payload in self.events if event_name == name]


def count_types(grid: Grid) -> dict[int, int]:
    counts = {t: 0 for t in range(1, grid.num_types + 1)}
    for x in range(grid.width):
        for y in range(grid.height):
            t = grid.cell_at(x, y).type
            if t > HOLE:
                counts[t] += 1
    return counts


def count_holes(grid: Grid) -> int:
    return sum(
        1
        for x in range(grid.width)
        for y in range(grid.height)
        if grid.cell_at(x, y).type == HOLE
    )
