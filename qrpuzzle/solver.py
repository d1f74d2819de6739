import os
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Optional, Sequence

from .constraints import constrain_line
from .errors import ContradictionError
from .possibilities import LineSet, puzzle_possibilities
from .state import count_unknown, empty_grid, is_complete, is_line_complete, transpose
from .types import Grid, Line, PuzzleClues, SolveResult, SolveStatus, TraceLog, TraceStep
from .utils import record_step, trace as _trace
from .validation import validate_grid_dims


def solve_puzzle(
    clues: PuzzleClues,
    given: Optional[Grid] = None,
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[dict[str, bool]] = None,
    trace_max_steps: int = 1000,
    use_multiprocessing: bool = False,
    workers: Optional[int] = None,
) -> SolveResult:
    if trace_max_steps < 1:
        raise ValueError("trace_max_steps must be >= 1")
    if workers is not None and workers < 1:
        raise ValueError("workers must be >= 1")

    row_count, col_count = clues.dims
    if row_count < 1 or col_count < 1:
        raise ValueError("puzzle must have at least one row and one column")
    if given is None:
        given = empty_grid(clues.dims)
    else:
        validate_grid_dims(given, clues.dims)

    row_sets, col_sets = puzzle_possibilities(clues)
    # Every changing round fixes at least one unknown cell.
    max_rounds = row_count * col_count + 1

    _trace(
        trace,
        trace_log,
        f"Initialized propagation: rows={row_count}, columns={col_count}, unknown_cells={count_unknown(given)}",
    )
    record_step(trace_steps, trace_meta, trace_max_steps, "initial", "Initial given grid", 0, given)

    executor = _open_executor(workers) if use_multiprocessing else None
    current = given
    rounds = 0
    try:
        while rounds < max_rounds:
            rounds += 1
            try:
                intermediate = _constrain_pass(row_sets, current, "row", executor)
                record_step(
                    trace_steps,
                    trace_meta,
                    trace_max_steps,
                    "row_pass",
                    f"Round {rounds}: rows refined",
                    rounds,
                    intermediate,
                    axis="row",
                )
                following = transpose(_constrain_pass(col_sets, transpose(intermediate), "column", executor))
                record_step(
                    trace_steps,
                    trace_meta,
                    trace_max_steps,
                    "column_pass",
                    f"Round {rounds}: columns refined",
                    rounds,
                    following,
                    axis="column",
                )
            except ContradictionError as exc:
                message = f"Round {rounds}: contradiction in {exc.axis} {exc.index}"
                _trace(trace, trace_log, message)
                record_step(
                    trace_steps,
                    trace_meta,
                    trace_max_steps,
                    "contradiction",
                    message,
                    rounds,
                    current,
                    axis=exc.axis,
                    index=exc.index,
                )
                return _contradiction_result(current, rounds, exc)

            _trace(
                trace,
                trace_log,
                f"Round {rounds}: unknown cells {count_unknown(current)} -> {count_unknown(following)}",
            )
            if following == current:
                _trace(trace, trace_log, f"Fixed point reached after {rounds} rounds")
                break
            current = following
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    # Complete lines are passed through unchanged, so check them against their clues once.
    inconsistent = _find_inconsistent_line(current, row_sets, col_sets)
    if inconsistent is not None:
        _trace(trace, trace_log, f"Completed {inconsistent.axis} {inconsistent.index} does not match its clue")
        return _contradiction_result(current, rounds, inconsistent)

    status = SolveStatus.SOLVED if is_complete(current) else SolveStatus.PARTIALLY_SOLVED
    _trace(trace, trace_log, f"Finished with status {status.value}")
    return SolveResult(grid=current, status=status, rounds=rounds)


def solve_grid(clues: PuzzleClues, given: Optional[Grid] = None) -> Grid:
    result = solve_puzzle(clues, given)
    if result.status is SolveStatus.CONTRADICTION:
        raise ContradictionError(result.contradiction_axis, result.contradiction_index)
    return result.grid


def _constrain_pass(line_sets: Sequence[LineSet], lines: Grid, axis: str, executor: Optional[Executor]) -> Grid:
    if executor is None:
        refined = [_constrain_or_none(candidates, line) for candidates, line in zip(line_sets, lines)]
    else:
        refined = list(executor.map(_constrain_or_none, line_sets, lines))

    for index, line in enumerate(refined):
        if line is None:
            raise ContradictionError(axis, index)
    return tuple(refined)


def _constrain_or_none(candidates: LineSet, given: Line) -> Optional[Line]:
    try:
        return constrain_line(candidates, given)
    except ContradictionError:
        return None


def _find_inconsistent_line(grid: Grid, row_sets: Sequence[LineSet], col_sets: Sequence[LineSet]) -> Optional[ContradictionError]:
    for axis, line_sets, lines in (("row", row_sets, grid), ("column", col_sets, transpose(grid))):
        for index, (candidates, line) in enumerate(zip(line_sets, lines)):
            if is_line_complete(line) and line not in candidates:
                return ContradictionError(axis, index)
    return None


def _contradiction_result(grid: Grid, rounds: int, error: ContradictionError) -> SolveResult:
    return SolveResult(
        grid=grid,
        status=SolveStatus.CONTRADICTION,
        rounds=rounds,
        contradiction=str(error),
        contradiction_axis=error.axis,
        contradiction_index=error.index,
    )


def _open_executor(workers: Optional[int]) -> Optional[Executor]:
    worker_count = workers or max(1, (os.cpu_count() or 1) - 1)
    try:
        return ProcessPoolExecutor(max_workers=worker_count)
    except (PermissionError, OSError):
        return None
