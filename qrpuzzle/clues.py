from .errors import IncompleteGridError
from .state import is_line_complete, transpose
from .types import Cell, Clue, Grid, Line, PuzzleClues


def line_clue(line: Line) -> Clue:
    if not is_line_complete(line):
        raise IncompleteGridError("cannot read a clue from a line with unknown cells")

    runs: list[int] = []
    run = 0
    for cell in line:
        if cell is Cell.BLACK:
            run += 1
        elif run:
            runs.append(run)
            run = 0
    if run:
        runs.append(run)
    return tuple(runs)


def grid_clues(grid: Grid) -> PuzzleClues:
    return PuzzleClues(
        rows=tuple(line_clue(row) for row in grid),
        columns=tuple(line_clue(column) for column in transpose(grid)),
    )
