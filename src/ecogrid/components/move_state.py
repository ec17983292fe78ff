from dataclasses import dataclass

from ecogrid.constants import PHASE_IDLE


@dataclass(slots=True)
class MoveState:
    """Per-board move bookkeeping; ``busy`` guards a single in-flight move."""

    busy: bool = False
    phase: str = PHASE_IDLE
    moves_made: int = 0
    solved_reported: bool = False
