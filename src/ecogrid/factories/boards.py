from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from esper import World

from ecogrid.components.board import Board
from ecogrid.components.move_state import MoveState
from ecogrid.components.piece_types import PieceTypes
from ecogrid.constants import GRID_HEIGHT, GRID_WIDTH
from ecogrid.events.bus import EVENT_BOARD_CREATED, EventBus
from ecogrid.grid import Grid


@dataclass(frozen=True)
class BoardSpec:
    name: str
    piece_types: Sequence[str]
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT


_BOARD_SPECS: Mapping[str, BoardSpec] = {
    "beach": BoardSpec(
        name="beach",
        piece_types=("recyclable", "landfill", "compost"),
    ),
    "park": BoardSpec(
        name="park",
        piece_types=("recyclable", "landfill", "compost"),
        width=5,
        height=5,
    ),
    "harbour": BoardSpec(
        name="harbour",
        piece_types=("recyclable", "landfill", "compost", "hazardous"),
        width=6,
        height=6,
    ),
}


def all_board_specs() -> Iterable[BoardSpec]:
    return _BOARD_SPECS.values()


def get_board_spec(name: str) -> BoardSpec | None:
    return _BOARD_SPECS.get(name)


def create_board(
    world: World,
    event_bus: EventBus,
    spec: BoardSpec,
    *,
    rng: random.Random | None = None,
    layout: Sequence[Sequence[int]] | None = None,
) -> int:
    """Create a board entity holding a freshly generated (or supplied) grid.

    Construction errors from the grid propagate unchanged.
    """
    candidate_rng = rng or getattr(world, "random", None)
    if not isinstance(candidate_rng, random.Random):
        candidate_rng = random.Random()
    num_types = len(spec.piece_types)
    if layout is None:
        grid = Grid(num_types, spec.width, spec.height, rng=candidate_rng)
    else:
        grid = Grid.from_layout(num_types, layout, rng=candidate_rng)
    board_entity = world.create_entity(
        Board(width=grid.width, height=grid.height, grid=grid, name=spec.name),
        PieceTypes(names=list(spec.piece_types)),
        MoveState(),
    )
    event_bus.emit(EVENT_BOARD_CREATED, board_entity=board_entity, board_name=spec.name)
    return board_entity


def get_grid(world: World, board_entity: int) -> Grid:
    return world.component_for_entity(board_entity, Board).grid
