from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Cell(Enum):
    WHITE = 0
    BLACK = 1
    UNKNOWN = None


class SolveStatus(str, Enum):
    SOLVED = "solved"
    PARTIALLY_SOLVED = "partially_solved"
    CONTRADICTION = "contradiction"


Line = tuple[Cell, ...]
Clue = tuple[int, ...]
Grid = tuple[Line, ...]
Position = tuple[int, int]
PositionList = list[Position]
Dims = tuple[int, int]
RawGrid = list[list[Optional[int]]]
TraceLog = list[str]
TraceStep = dict[str, object]


@dataclass(frozen=True)
class PuzzleClues:
    rows: tuple[Clue, ...]
    columns: tuple[Clue, ...]

    @property
    def dims(self) -> Dims:
        return len(self.rows), len(self.columns)


@dataclass(frozen=True)
class SolveResult:
    grid: Grid
    status: SolveStatus
    rounds: int
    contradiction: Optional[str] = None
    contradiction_axis: Optional[str] = None
    contradiction_index: Optional[int] = None

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED
