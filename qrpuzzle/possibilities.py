import math
from functools import lru_cache
from typing import Iterator

from .errors import InvalidClueError
from .types import Cell, Clue, Line, PuzzleClues


LineSet = frozenset[Line]


def minimum_length(clue: Clue) -> int:
    if not clue:
        return 0
    return sum(clue) + len(clue) - 1


def clue_fits(clue: Clue, length: int) -> bool:
    return minimum_length(clue) <= length


def possibility_count(clue: Clue, length: int) -> int:
    slack = length - minimum_length(clue)
    if slack < 0:
        return 0
    return math.comb(slack + len(clue), len(clue))


@lru_cache(maxsize=4096)
def line_possibilities(clue: Clue, length: int) -> LineSet:
    if length < 0:
        raise ValueError("line length must be >= 0")
    if not clue:
        return frozenset({(Cell.WHITE,) * length})

    slack = length - minimum_length(clue)
    if slack < 0:
        return frozenset()

    lines = set()
    # Slack is spread over k + 1 gaps; gaps between runs keep one extra white cell.
    for extra in _spread(slack, len(clue) + 1):
        cells: list[Cell] = []
        for index, run in enumerate(clue):
            gap = extra[index] + (1 if index > 0 else 0)
            cells.extend([Cell.WHITE] * gap)
            cells.extend([Cell.BLACK] * run)
        cells.extend([Cell.WHITE] * extra[-1])
        lines.add(tuple(cells))
    return frozenset(lines)


def puzzle_possibilities(clues: PuzzleClues) -> tuple[list[LineSet], list[LineSet]]:
    row_count, col_count = clues.dims
    row_sets = [_checked_possibilities(clue, col_count, "row", index) for index, clue in enumerate(clues.rows)]
    col_sets = [_checked_possibilities(clue, row_count, "column", index) for index, clue in enumerate(clues.columns)]
    return row_sets, col_sets


def _checked_possibilities(clue: Clue, length: int, axis: str, index: int) -> LineSet:
    if any(value < 1 for value in clue):
        raise InvalidClueError(axis, index, clue, length, reason="run lengths must be positive")
    possibilities = line_possibilities(clue, length)
    if not possibilities:
        raise InvalidClueError(axis, index, clue, length)
    return possibilities


def _spread(total: int, slots: int) -> Iterator[tuple[int, ...]]:
    if slots == 1:
        yield (total,)
        return
    for first in range(total + 1):
        for rest in _spread(total - first, slots - 1):
            yield (first,) + rest
