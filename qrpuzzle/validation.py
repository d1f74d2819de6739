from typing import Optional

from .errors import DimensionMismatchError, InvalidClueError
from .types import Cell, Clue, Dims, Grid, Position, PuzzleClues


def normalize_clue(raw_clue: object, axis: str, index: int) -> Clue:
    if isinstance(raw_clue, (str, bytes)) or not isinstance(raw_clue, (list, tuple)):
        raise ValueError(f"{axis} {index} clue must be a list of integers")

    values = []
    for value in raw_clue:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{axis} {index} clue entries must be integers")
        values.append(value)

    clue = tuple(values)
    if any(value < 1 for value in clue):
        raise InvalidClueError(axis, index, clue, 0, reason="run lengths must be positive")
    return clue


def normalize_clues(rows: object, columns: object) -> PuzzleClues:
    if not isinstance(rows, (list, tuple)) or not rows:
        raise ValueError("rows must be a non-empty list of clues")
    if not isinstance(columns, (list, tuple)) or not columns:
        raise ValueError("columns must be a non-empty list of clues")

    return PuzzleClues(
        rows=tuple(normalize_clue(clue, "row", index) for index, clue in enumerate(rows)),
        columns=tuple(normalize_clue(clue, "column", index) for index, clue in enumerate(columns)),
    )


def normalize_cell(value: object) -> Cell:
    if isinstance(value, Cell):
        return value
    if value is None:
        return Cell.UNKNOWN
    if isinstance(value, int) and not isinstance(value, bool) and value in (0, 1):
        return Cell(value)
    raise ValueError("grid entries must be 1, 0, or null")


def normalize_grid(raw_grid: object, dims: Optional[Dims] = None) -> Grid:
    if not isinstance(raw_grid, (list, tuple)) or not raw_grid:
        raise ValueError("grid must be a non-empty list of rows")

    width: Optional[int] = None
    rows = []
    for row in raw_grid:
        if not isinstance(row, (list, tuple)):
            raise ValueError("grid rows must be lists")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise DimensionMismatchError("grid rows must all have the same length")
        rows.append(tuple(normalize_cell(value) for value in row))

    grid = tuple(rows)
    if dims is not None:
        validate_grid_dims(grid, dims)
    return grid


def validate_grid_dims(grid: Grid, dims: Dims) -> None:
    row_count, col_count = dims
    if len(grid) != row_count:
        raise DimensionMismatchError(f"grid has {len(grid)} rows but the clues describe {row_count}")
    for row in grid:
        if len(row) != col_count:
            raise DimensionMismatchError(f"grid has {len(row)} columns but the clues describe {col_count}")


def normalize_positions(raw_positions: object, name: str) -> list[Position]:
    if raw_positions is None:
        return []
    if not isinstance(raw_positions, (list, tuple)):
        raise ValueError(f"{name} positions must be a list of [row, col] pairs")

    positions: list[Position] = []
    for position in raw_positions:
        if not isinstance(position, (list, tuple)) or len(position) != 2:
            raise ValueError(f"{name} positions must be [row, col] pairs")
        r, c = position
        if isinstance(r, bool) or isinstance(c, bool) or not isinstance(r, int) or not isinstance(c, int):
            raise ValueError(f"{name} positions must contain integers")
        positions.append((r, c))
    return positions
