from dataclasses import dataclass, field
from typing import Hashable, Set

@dataclass(slots=True)
class SessionProgress:
    """Cross-board completion counter shared by every board in a session.

    Boards are identified by any hashable key; ``SessionSystem`` uses
    ``(id(world), board_entity)`` so boards of different worlds stay distinct.
    """
    boards: Set[Hashable] = field(default_factory=set)
    finished: Set[Hashable] = field(default_factory=set)

    @property
    def total(self) -> int:
        return len(self.boards)

    @property
    def finished_count(self) -> int:
        return len(self.finished)

    def register(self, board_key: Hashable) -> None:
        self.boards.add(board_key)

    def mark_finished(self, board_key: Hashable) -> bool:
        """Record a solved board; returns False if it was already counted."""
        if board_key in self.finished:
            return False
        self.boards.add(board_key)
        self.finished.add(board_key)
        return True

    def is_complete(self) -> bool:
        return bool(self.boards) and self.finished >= self.boards
