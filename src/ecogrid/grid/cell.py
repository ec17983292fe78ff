from dataclasses import dataclass

HOLE = 0
CLEARED = -1


@dataclass(slots=True)
class Cell:
    """One grid slot.

    ``type`` is ``HOLE`` for the single empty slot, ``CLEARED`` once the piece
    has been collected, otherwise an active piece type in ``1..num_types``.
    ``removal_delay`` is the flood-fill ring distance from the 2x2 block that
    triggered the removal; it only means something while ``marked`` is set.
    """
    type: int
    marked: bool = False
    removal_delay: int = 0

    @property
    def is_active(self) -> bool:
        return self.type > HOLE
