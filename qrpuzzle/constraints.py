from typing import Iterable

from .errors import ContradictionError
from .state import is_line_complete
from .types import Cell, Line


def line_agrees(candidate: Line, given: Line) -> bool:
    return all(known is Cell.UNKNOWN or known is cell for cell, known in zip(candidate, given))


def constrain_line(candidates: Iterable[Line], given: Line) -> Line:
    if is_line_complete(given):
        return given

    survivors = [candidate for candidate in candidates if line_agrees(candidate, given)]
    if not survivors:
        raise ContradictionError()

    refined: list[Cell] = []
    for position in range(len(given)):
        first = survivors[0][position]
        if all(candidate[position] is first for candidate in survivors):
            refined.append(first)
        else:
            refined.append(Cell.UNKNOWN)
    return tuple(refined)
