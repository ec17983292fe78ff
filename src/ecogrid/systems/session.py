import logging
from typing import Tuple

from esper import World

from ecogrid.events.bus import (
    EventBus,
    EVENT_BOARD_CREATED,
    EVENT_BOARD_SOLVED,
    EVENT_SESSION_COMPLETE,
    EVENT_SESSION_PROGRESS,
)
from ecogrid.world import get_session_progress

logger = logging.getLogger(__name__)


class SessionSystem:
    """Counts finished boards against every board created in the session.

    Entity ids restart in every world, so boards are keyed by world as well.
    Each world is expected to run on its own event bus.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_BOARD_CREATED, self.on_board_created)
        self.event_bus.subscribe(EVENT_BOARD_SOLVED, self.on_board_solved)

    def board_key(self, board_entity: int) -> Tuple[int, int]:
        return id(self.world), board_entity

    def on_board_created(self, sender, **kwargs):
        board_entity = kwargs.get('board_entity')
        if board_entity is None:
            return
        get_session_progress(self.world).register(self.board_key(board_entity))

    def on_board_solved(self, sender, **kwargs):
        board_entity = kwargs.get('board_entity')
        if board_entity is None:
            return
        progress = get_session_progress(self.world)
        if not progress.mark_finished(self.board_key(board_entity)):
            return
        self.event_bus.emit(EVENT_SESSION_PROGRESS, finished=progress.finished_count, total=progress.total)
        if progress.is_complete():
            logger.info("All %d boards finished", progress.total)
            self.event_bus.emit(EVENT_SESSION_COMPLETE, total=progress.total)
