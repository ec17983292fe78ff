from dataclasses import dataclass, field
from typing import List, Tuple

@dataclass(slots=True)
class SlideAnimation:
    board_entity: int
    moves: List[Tuple[int, int, int, int]] = field(default_factory=list)
    progress: float = 0.0  # 0..1
