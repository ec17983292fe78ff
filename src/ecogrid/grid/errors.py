class GridError(Exception):
    """Base class for puzzle grid failures."""


class GridConstructionError(GridError, ValueError):
    """A grid could not be built; retrying with the same parameters will not help."""


class InfeasibleBoardError(GridConstructionError):
    def __init__(self, num_types: int, width: int, height: int):
        self.num_types = num_types
        self.width = width
        self.height = height
        super().__init__(
            f"Impossible to fit at least 4 of each of {num_types} types on a "
            f"{width}x{height} board with one hole"
        )


class InsufficientPiecesError(GridConstructionError):
    def __init__(self, type_id: int, count: int):
        self.type_id = type_id
        self.count = count
        super().__init__(f"Insufficient number of pieces of type {type_id}: {count}")


class InvalidLayoutError(GridConstructionError):
    """A supplied layout has the wrong shape, hole count or type ids."""


class MixedRemovalBatchError(GridError):
    def __init__(self, types):
        self.types = sorted(types)
        super().__init__(f"Removal batch mixes piece types {self.types}; resolve one type at a time")


class LayoutGenerationError(GridConstructionError):
    def __init__(self, num_types: int, width: int, height: int, attempts: int):
        self.num_types = num_types
        self.width = width
        self.height = height
        self.attempts = attempts
        super().__init__(
            f"No {width}x{height} layout of {num_types} types without a 2x2 block "
            f"found in {attempts} attempts"
        )
