from typing import Iterable, Optional

from .clues import grid_clues
from .errors import DimensionMismatchError, IncompleteGridError
from .solver import solve_puzzle
from .state import empty_grid, grid_dims, is_complete
from .types import Cell, Dims, Grid, Position, PositionList, PuzzleClues, RawGrid, SolveStatus
from .validation import normalize_grid, normalize_positions, validate_grid_dims


def build_table(
    dims: Dims,
    black_positions: Iterable[Position] = (),
    white_positions: Iterable[Position] = (),
) -> Grid:
    rows, cols = dims
    if rows < 1 or cols < 1:
        raise ValueError("table dimensions must be at least 1x1")

    black = set(black_positions)
    white = set(white_positions)
    overlap = black & white
    if overlap:
        raise DimensionMismatchError(f"positions listed as both black and white: {sorted(overlap)}")

    cells = [list(row) for row in empty_grid(dims)]
    for positions, value in ((black, Cell.BLACK), (white, Cell.WHITE)):
        for r, c in positions:
            if not (0 <= r < rows and 0 <= c < cols):
                raise DimensionMismatchError(f"position ({r}, {c}) is outside a {rows}x{cols} grid")
            cells[r][c] = value
    return tuple(tuple(row) for row in cells)


def known_positions(grid: Grid) -> tuple[PositionList, PositionList]:
    black: PositionList = []
    white: PositionList = []
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell is Cell.BLACK:
                black.append((r, c))
            elif cell is Cell.WHITE:
                white.append((r, c))
    return black, white


def find_missing(goal: Grid, partial: Grid) -> tuple[PositionList, PositionList]:
    if not is_complete(goal):
        raise IncompleteGridError("goal grid must not contain unknown cells")
    validate_grid_dims(partial, grid_dims(goal))

    black: PositionList = []
    white: PositionList = []
    for r, (goal_row, partial_row) in enumerate(zip(goal, partial)):
        for c, (target, current) in enumerate(zip(goal_row, partial_row)):
            if current is not Cell.UNKNOWN:
                if current is not target:
                    raise ValueError(f"partial cell ({r}, {c}) disagrees with the goal")
                continue
            if target is Cell.BLACK:
                black.append((r, c))
            else:
                white.append((r, c))
    return black, white


def resolve_given(
    dims: Dims,
    given: Optional[RawGrid] = None,
    given_positions: Optional[dict[str, list[list[int]]]] = None,
) -> Optional[Grid]:
    if given is not None and given_positions is not None:
        raise ValueError("provide either 'given' or 'given_positions', not both")
    if given is not None:
        return normalize_grid(given, dims)
    if given_positions is not None:
        if not isinstance(given_positions, dict):
            raise ValueError("'given_positions' must be an object with 'black' and 'white' lists")
        black = normalize_positions(given_positions.get("black"), "black")
        white = normalize_positions(given_positions.get("white"), "white")
        return build_table(dims, black, white)
    return None


def puzzle_from_grid(goal: Grid) -> tuple[Grid, PuzzleClues, Grid]:
    clues = grid_clues(goal)
    partial = solve_puzzle(clues)
    if partial.status is SolveStatus.CONTRADICTION:
        raise ValueError(f"clues read from the goal grid are inconsistent: {partial.contradiction}")
    black, white = find_missing(goal, partial.grid)
    return goal, clues, build_table(clues.dims, black, white)
