from __future__ import annotations

import heapq
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ecogrid.grid.cell import CLEARED, HOLE, Cell
from ecogrid.grid.errors import (
    InfeasibleBoardError,
    InsufficientPiecesError,
    InvalidLayoutError,
    LayoutGenerationError,
    MixedRemovalBatchError,
)

logger = logging.getLogger(__name__)

# Smallest number of pieces of one type that can still be cleared (one 2x2 block).
MIN_PIECES_PER_TYPE = 4

# Random draws tried before giving up on a block-free layout.
MAX_LAYOUT_ATTEMPTS = 1000

Position = Tuple[int, int]
SlideMove = Tuple[int, int, int, int]  # from_x, from_y, to_x, to_y
Match = Tuple[int, int, int]  # corner_x, corner_y, type


@dataclass(slots=True)
class RemovalResult:
    """Outcome of one resolve pass: which positions were cleared and which were rescued."""
    type_id: Optional[int] = None
    cleared: List[Position] = field(default_factory=list)
    rescued: List[Position] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.cleared or self.rescued)


class Grid:
    """Sliding 2x2-match puzzle state.

    Cells are addressed as ``(x, y)`` with ``0 <= x < width`` and
    ``0 <= y < height``. There is always exactly one hole, and every active
    type has either no pieces left or at least four, so a type can never be
    stranded with a remainder that cannot form a 2x2 block.
    """

    def __init__(
        self,
        num_types: int,
        width: int,
        height: int,
        *,
        rng: random.Random | None = None,
        layout: Sequence[Sequence[int]] | None = None,
    ):
        self._num_types = num_types
        self._width = width
        self._height = height
        self._rng = rng or random.Random()
        self._live_counts: Dict[int, int] = {t: 0 for t in range(1, num_types + 1)}
        if num_types * MIN_PIECES_PER_TYPE > width * height - 1:
            raise InfeasibleBoardError(num_types, width, height)
        if layout is None:
            layout = self.create_layout()
        else:
            self._validate_layout(layout)
        self._cells: List[List[Cell]] = []
        self._set_layout(layout)

    @classmethod
    def from_layout(
        cls,
        num_types: int,
        layout: Sequence[Sequence[int]],
        *,
        rng: random.Random | None = None,
    ) -> "Grid":
        """Build a grid from an explicit ``layout[x][y]`` of type ids.

        Supplied layouts are checked for shape, a single hole, type range and
        piece counts, but may contain matches already.
        """
        if not layout or not layout[0]:
            raise InvalidLayoutError("Layout must have at least one column and one row")
        return cls(num_types, len(layout), len(layout[0]), rng=rng, layout=layout)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def create_layout(self) -> List[List[int]]:
        """Random layout with one hole, balanced type counts and no 2x2 block.

        Raises ``LayoutGenerationError`` after ``MAX_LAYOUT_ATTEMPTS`` draws
        that all contained a block, e.g. a single type filling a 4x4 board.
        """
        slots_total = self._width * self._height
        for attempt in range(1, MAX_LAYOUT_ATTEMPTS + 1):
            layout = [[HOLE] * self._height for _ in range(self._width)]
            slots = [(x, y) for x in range(self._width) for y in range(self._height)]
            type_index = 0
            # The last remaining slot stays empty and becomes the hole.
            for _ in range(slots_total - 1):
                x, y = slots.pop(self._rng.randrange(len(slots)))
                layout[x][y] = type_index + 1
                type_index = (type_index + 1) % self._num_types
            if not self._layout_has_block(layout):
                logger.debug("Generated %dx%d layout after %d attempt(s)", self._width, self._height, attempt)
                return layout
        raise LayoutGenerationError(self._num_types, self._width, self._height, MAX_LAYOUT_ATTEMPTS)

    def _layout_has_block(self, layout: Sequence[Sequence[int]]) -> bool:
        for x in range(self._width - 1):
            for y in range(self._height - 1):
                t = layout[x][y]
                if t > HOLE and layout[x + 1][y] == t and layout[x][y + 1] == t and layout[x + 1][y + 1] == t:
                    return True
        return False

    def _validate_layout(self, layout: Sequence[Sequence[int]]) -> None:
        if len(layout) != self._width or any(len(column) != self._height for column in layout):
            raise InvalidLayoutError(f"Layout is not a {self._width}x{self._height} rectangle")
        holes = 0
        for column in layout:
            for t in column:
                if t == HOLE:
                    holes += 1
                elif t != CLEARED and not 1 <= t <= self._num_types:
                    raise InvalidLayoutError(f"Type id {t} outside 1..{self._num_types}")
        if holes != 1:
            raise InvalidLayoutError(f"Layout must contain exactly one hole, found {holes}")

    def _set_layout(self, layout: Sequence[Sequence[int]]) -> None:
        self._cells = [[Cell(type=t) for t in column] for column in layout]
        has_cleared = False
        for column in self._cells:
            for cell in column:
                if cell.is_active:
                    self._live_counts[cell.type] += 1
                elif cell.type == CLEARED:
                    has_cleared = True
        for t, count in self._live_counts.items():
            # A type may be fully cleared already in a supplied mid-game layout.
            if count < MIN_PIECES_PER_TYPE and not (count == 0 and has_cleared):
                raise InsufficientPiecesError(t, count)
            logger.debug("type %d has %d pieces", t, count)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def num_types(self) -> int:
        return self._num_types

    def cell_at(self, x: int, y: int) -> Cell:
        return self._cells[x][y]

    @property
    def hole(self) -> Position:
        for x, column in enumerate(self._cells):
            for y, cell in enumerate(column):
                if cell.type == HOLE:
                    return x, y
        raise RuntimeError("Grid has no hole")

    def live_count(self, type_id: int) -> int:
        return self._live_counts[type_id]

    def live_counts(self) -> Dict[int, int]:
        return dict(self._live_counts)

    def layout(self) -> List[List[int]]:
        return [[cell.type for cell in column] for column in self._cells]

    def marked_positions(self) -> List[Position]:
        return [
            (x, y)
            for x, column in enumerate(self._cells)
            for y, cell in enumerate(column)
            if cell.marked
        ]

    # ------------------------------------------------------------------
    # Sliding
    # ------------------------------------------------------------------
    def slide_plan(self, click_x: int, click_y: int) -> List[SlideMove]:
        """Moves that slide the line between the hole and the click one step toward the hole.

        Moves are ordered from the hole outward so applying them in sequence
        never overwrites a tile that has not moved yet. An empty list means
        the click is on the hole or shares neither row nor column with it.
        """
        hole_x = next((x for x in range(self._width) if self._cells[x][click_y].type == HOLE), None)
        if hole_x is not None:
            if hole_x == click_x:
                return []
            step = 1 if click_x > hole_x else -1
            return [(x, click_y, x - step, click_y) for x in range(hole_x + step, click_x + step, step)]
        hole_y = next((y for y in range(self._height) if self._cells[click_x][y].type == HOLE), None)
        if hole_y is None:
            return []
        step = 1 if click_y > hole_y else -1
        return [(click_x, y, click_x, y - step) for y in range(hole_y + step, click_y + step, step)]

    def apply_slide(self, moves: Iterable[SlideMove]) -> None:
        for from_x, from_y, to_x, to_y in moves:
            self._cells[to_x][to_y].type = self._cells[from_x][from_y].type
            self._cells[from_x][from_y].type = HOLE

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------
    def match_at(self, x: int, y: int) -> bool:
        t = self._cells[x][y].type
        return (
            t > HOLE
            and self._cells[x + 1][y].type == t
            and self._cells[x][y + 1].type == t
            and self._cells[x + 1][y + 1].type == t
        )

    def matches_in_grid(self) -> List[Match]:
        return [
            (x, y, self._cells[x][y].type)
            for x in range(self._width - 1)
            for y in range(self._height - 1)
            if self.match_at(x, y)
        ]

    # ------------------------------------------------------------------
    # Removal marking
    # ------------------------------------------------------------------
    def mark_block(self, corner_x: int, corner_y: int) -> None:
        for x in (corner_x, corner_x + 1):
            for y in (corner_y, corner_y + 1):
                cell = self._cells[x][y]
                if not cell.marked:
                    cell.marked = True
                    cell.removal_delay = 0

    def mark_connected(self, type_id: int) -> List[Position]:
        """Grow the marked cells into every 4-connected cell of ``type_id`` they touch.

        Returns the newly marked positions in breadth-first order; each gets a
        ``removal_delay`` one greater than the cell it was reached from.
        Cells are expanded in order of their own delay, so a region grown from
        already-delayed marks still records the shortest ring distance.
        """
        if type_id <= HOLE:
            return []
        frontier = [(self._cells[x][y].removal_delay, x, y) for x, y in self.marked_positions()]
        heapq.heapify(frontier)
        added: List[Position] = []
        while frontier:
            current, x, y = heapq.heappop(frontier)
            delay = current + 1
            for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                if not (0 <= nx < self._width and 0 <= ny < self._height):
                    continue
                neighbour = self._cells[nx][ny]
                if neighbour.marked or neighbour.type != type_id:
                    continue
                neighbour.marked = True
                neighbour.removal_delay = delay
                added.append((nx, ny))
                heapq.heappush(frontier, (delay, nx, ny))
        return added

    # ------------------------------------------------------------------
    # Removal and rebalancing
    # ------------------------------------------------------------------
    def resolve_removals(self) -> RemovalResult:
        """Turn every marked cell into a cleared piece, rescuing some if needed.

        If clearing the whole batch would leave between one and three pieces
        of the type, just enough randomly chosen marked cells keep their type
        to bring the remainder back to four.
        """
        marked = self.marked_positions()
        # The hole and cleared pieces are never removed; their flags just drop.
        collected = []
        for x, y in marked:
            cell = self._cells[x][y]
            if cell.is_active:
                collected.append((x, y))
            else:
                cell.marked = False
                cell.removal_delay = 0
        if not collected:
            return RemovalResult()
        types = {self._cells[x][y].type for x, y in collected}
        if len(types) > 1:
            raise MixedRemovalBatchError(types)
        for x, y in collected:
            cell = self._cells[x][y]
            cell.marked = False
            cell.removal_delay = 0

        type_id = types.pop()
        remaining = self._live_counts[type_id] - len(collected)
        logger.debug(
            "Removing %d of type %d (%d live), %d would remain",
            len(collected), type_id, self._live_counts[type_id], remaining,
        )
        rescued: List[Position] = []
        if 0 < remaining < MIN_PIECES_PER_TYPE:
            keep = MIN_PIECES_PER_TYPE - remaining
            rescued = self._rng.sample(collected, keep)
            logger.debug("Rescuing %d piece(s) of type %d at %s", keep, type_id, rescued)
        rescued_set = set(rescued)
        cleared = [pos for pos in collected if pos not in rescued_set]
        for x, y in cleared:
            self._cells[x][y].type = CLEARED
        self._live_counts[type_id] -= len(cleared)
        return RemovalResult(type_id=type_id, cleared=cleared, rescued=sorted(rescued))

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def is_solved(self) -> bool:
        return all(cell.type in (HOLE, CLEARED) for column in self._cells for cell in column)

    def cleared_fraction(self) -> float:
        """Share of the pieces (every slot but the hole) already collected."""
        cleared = sum(1 for column in self._cells for cell in column if cell.type == CLEARED)
        return cleared / (self._width * self._height - 1)

    def __str__(self) -> str:
        rows = []
        for y in range(self._height):
            rows.append(" ".join(f"{self._cells[x][y].type:2d}" for x in range(self._width)))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Grid(num_types={self._num_types}, width={self._width}, height={self._height}, hole={self.hole})"
