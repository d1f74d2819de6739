from .types import Cell, Dims, Grid, Line, RawGrid


def empty_grid(dims: Dims) -> Grid:
    rows, cols = dims
    return tuple(tuple(Cell.UNKNOWN for _ in range(cols)) for _ in range(rows))


def transpose(grid: Grid) -> Grid:
    return tuple(zip(*grid))


def grid_dims(grid: Grid) -> Dims:
    return len(grid), len(grid[0]) if grid else 0


def is_line_complete(line: Line) -> bool:
    return Cell.UNKNOWN not in line


def is_complete(grid: Grid) -> bool:
    return all(is_line_complete(row) for row in grid)


def count_unknown(grid: Grid) -> int:
    return sum(1 for row in grid for cell in row if cell is Cell.UNKNOWN)


def grid_to_raw(grid: Grid) -> RawGrid:
    return [[cell.value for cell in row] for row in grid]
