from dataclasses import dataclass, field
from typing import List, Tuple

@dataclass(slots=True)
class BlinkAnimation:
    board_entity: int
    positions: List[Tuple[int, int]] = field(default_factory=list)
    # Blink twice a second while counting down.
    lit: bool = False
