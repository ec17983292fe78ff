import logging
from typing import Optional, Tuple

from esper import World

from ecogrid.components.board import Board
from ecogrid.components.move_state import MoveState
from ecogrid.constants import (
    ANIM_BLINK,
    ANIM_SLIDE,
    PHASE_IDLE,
    PHASE_REMOVING,
    PHASE_SLIDING,
    REJECT_BUSY,
    REJECT_NO_SLIDE,
    REJECT_SOLVED,
)
from ecogrid.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_BOARD_CLICK,
    EVENT_BOARD_SOLVED,
    EVENT_MATCH_FOUND,
    EVENT_MOVE_COMPLETE,
    EVENT_MOVE_REJECTED,
    EVENT_PIECES_CLEARED,
    EVENT_SLIDE_APPLIED,
)

logger = logging.getLogger(__name__)


class BoardSystem:
    """Runs one move at a time per board: slide, then clear every match it formed.

    A move starts on ``EVENT_BOARD_CLICK`` and stays in flight (``MoveState.busy``)
    until the slide animation and every blink animation it triggers have
    reported completion. Clicks that arrive meanwhile are rejected.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BOARD_CLICK, self.on_board_click)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    def on_board_click(self, sender, **kwargs):
        board_entity = kwargs.get('board_entity')
        x = kwargs.get('x')
        y = kwargs.get('y')
        if board_entity is None or x is None or y is None:
            return
        found = self._board_and_state(board_entity)
        if found is None:
            return
        board, state = found
        grid = board.grid
        if state.busy:
            self._reject(board_entity, x, y, REJECT_BUSY)
            return
        if grid.is_solved():
            self._reject(board_entity, x, y, REJECT_SOLVED)
            return
        # Every accepted click counts as a move, legal slide or not.
        state.moves_made += 1
        moves = grid.slide_plan(x, y)
        if not moves:
            self._reject(board_entity, x, y, REJECT_NO_SLIDE)
            return
        grid.apply_slide(moves)
        state.busy = True
        state.phase = PHASE_SLIDING
        self.event_bus.emit(EVENT_SLIDE_APPLIED, board_entity=board_entity, moves=moves, hole=grid.hole)
        self.event_bus.emit(EVENT_ANIMATION_START, board_entity=board_entity, kind=ANIM_SLIDE, items=moves)

    def on_animation_complete(self, sender, **kwargs):
        board_entity = kwargs.get('board_entity')
        kind = kwargs.get('kind')
        if board_entity is None:
            return
        found = self._board_and_state(board_entity)
        if found is None:
            return
        _, state = found
        if kind == ANIM_SLIDE and state.phase == PHASE_SLIDING:
            self._mark_next_match(board_entity)
        elif kind == ANIM_BLINK and state.phase == PHASE_REMOVING:
            self._resolve_pending(board_entity)

    def _mark_next_match(self, board_entity: int) -> None:
        board, state = self._board_and_state(board_entity)
        grid = board.grid
        matches = grid.matches_in_grid()
        if not matches:
            self._finish_move(board_entity)
            return
        # One type per removal batch; further matches are handled after this one resolves.
        corner_x, corner_y, type_id = matches[0]
        grid.mark_block(corner_x, corner_y)
        grid.mark_connected(type_id)
        positions = grid.marked_positions()
        delays = {pos: grid.cell_at(*pos).removal_delay for pos in positions}
        state.phase = PHASE_REMOVING
        self.event_bus.emit(
            EVENT_MATCH_FOUND,
            board_entity=board_entity,
            type_id=type_id,
            corner=(corner_x, corner_y),
            positions=positions,
            delays=delays,
        )
        self.event_bus.emit(EVENT_ANIMATION_START, board_entity=board_entity, kind=ANIM_BLINK, items=positions)

    def _resolve_pending(self, board_entity: int) -> None:
        board, state = self._board_and_state(board_entity)
        grid = board.grid
        result = grid.resolve_removals()
        if result.type_id is not None:
            self.event_bus.emit(
                EVENT_PIECES_CLEARED,
                board_entity=board_entity,
                type_id=result.type_id,
                cleared=result.cleared,
                rescued=result.rescued,
                remaining=grid.live_count(result.type_id),
            )
        self._mark_next_match(board_entity)

    def _finish_move(self, board_entity: int) -> None:
        board, state = self._board_and_state(board_entity)
        state.busy = False
        state.phase = PHASE_IDLE
        self.event_bus.emit(EVENT_MOVE_COMPLETE, board_entity=board_entity, moves_made=state.moves_made)
        if board.grid.is_solved() and not state.solved_reported:
            state.solved_reported = True
            logger.info("Board %s solved in %d moves", board.name or board_entity, state.moves_made)
            self.event_bus.emit(EVENT_BOARD_SOLVED, board_entity=board_entity, moves_made=state.moves_made)

    def _reject(self, board_entity: int, x: int, y: int, reason: str) -> None:
        logger.info("Click at (%d, %d) on board %d rejected: %s", x, y, board_entity, reason)
        self.event_bus.emit(EVENT_MOVE_REJECTED, board_entity=board_entity, x=x, y=y, reason=reason)

    def _board_and_state(self, board_entity: int) -> Optional[Tuple[Board, MoveState]]:
        try:
            board = self.world.component_for_entity(board_entity, Board)
            state = self.world.component_for_entity(board_entity, MoveState)
        except KeyError:
            return None
        return board, state
