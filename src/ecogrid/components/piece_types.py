from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class PieceTypes:
    """Names of the piece types on one board, in type-id order.

    Type id ``n`` (1-based, as stored in the grid) maps to ``names[n - 1]``.
    """
    names: List[str] = field(default_factory=list)

    def name_for(self, type_id: int) -> str:
        if type_id < 1 or type_id > len(self.names):
            raise KeyError(type_id)
        return self.names[type_id - 1]

    def type_id_for(self, name: str) -> int:
        return self.names.index(name) + 1

    def __len__(self) -> int:
        return len(self.names)
