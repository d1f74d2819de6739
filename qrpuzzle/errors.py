from typing import Optional


class InvalidClueError(ValueError):
    def __init__(self, axis: str, index: int, clue: tuple[int, ...], length: int, reason: Optional[str] = None) -> None:
        self.axis = axis
        self.index = index
        self.clue = clue
        self.length = length
        if reason is None:
            reason = f"needs at least {sum(clue) + len(clue) - 1} cells but the line has {length}"
        super().__init__(f"invalid clue {list(clue)} for {axis} {index}: {reason}")


class ContradictionError(ValueError):
    def __init__(self, axis: Optional[str] = None, index: Optional[int] = None) -> None:
        self.axis = axis
        self.index = index
        if axis is None:
            message = "no candidate agrees with the known cells of the line"
        else:
            message = f"no candidate agrees with the known cells of {axis} {index}"
        super().__init__(message)


class DimensionMismatchError(ValueError):
    pass


class IncompleteGridError(ValueError):
    pass
