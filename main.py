import argparse
import json
from pathlib import Path
from typing import Any, Optional

from qrpuzzle.clues import grid_clues
from qrpuzzle.givens import known_positions, puzzle_from_grid, resolve_given
from qrpuzzle.solver import solve_puzzle
from qrpuzzle.state import grid_to_raw
from qrpuzzle.types import Cell, Grid, RawGrid, SolveResult
from qrpuzzle.validation import normalize_clues, normalize_grid


CELL_SYMBOLS = {Cell.BLACK: "#", Cell.WHITE: ".", Cell.UNKNOWN: "?"}


def run(
    rows: list[list[int]],
    columns: list[list[int]],
    given: Optional[RawGrid] = None,
    given_positions: Optional[dict[str, list[list[int]]]] = None,
) -> SolveResult:
    clues = normalize_clues(rows, columns)
    return solve_puzzle(clues, resolve_given(clues.dims, given, given_positions))


def run_with_trace(
    rows: list[list[int]],
    columns: list[list[int]],
    given: Optional[RawGrid] = None,
    given_positions: Optional[dict[str, list[list[int]]]] = None,
) -> tuple[SolveResult, list[str]]:
    clues = normalize_clues(rows, columns)
    trace_log: list[str] = []
    result = solve_puzzle(
        clues,
        resolve_given(clues.dims, given, given_positions),
        trace=True,
        trace_log=trace_log,
    )
    return result, trace_log


def generate(goal: RawGrid) -> dict[str, Any]:
    _, clues, given = puzzle_from_grid(normalize_grid(goal))
    black, white = known_positions(given)
    return {
        "rows": [list(clue) for clue in clues.rows],
        "columns": [list(clue) for clue in clues.columns],
        "black": [list(position) for position in black],
        "white": [list(position) for position in white],
    }


def clues_for(grid: RawGrid) -> dict[str, list[list[int]]]:
    clues = grid_clues(normalize_grid(grid))
    return {"rows": [list(clue) for clue in clues.rows], "columns": [list(clue) for clue in clues.columns]}


def format_result(result: SolveResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "status": result.status.value,
        "rounds": result.rounds,
        "solution": grid_to_raw(result.grid),
        "grid_rows": format_grid_rows(result.grid),
    }
    if result.contradiction is not None:
        payload["contradiction"] = result.contradiction
    return payload


def format_grid_rows(grid: Grid) -> list[str]:
    return ["".join(CELL_SYMBOLS[cell] for cell in row) for row in grid]


def load_puzzle_from_file(
    input_path: str,
) -> tuple[list[list[int]], list[list[int]], Optional[RawGrid], Optional[dict[str, list[list[int]]]]]:
    payload = _load_json_object(input_path)

    rows = payload.get("rows")
    columns = payload.get("columns")
    if rows is None:
        raise ValueError("JSON must include 'rows'")
    if columns is None:
        raise ValueError("JSON must include 'columns'")

    return rows, columns, payload.get("given"), payload.get("given_positions")


def load_goal_from_file(input_path: str) -> RawGrid:
    payload = _load_json_object(input_path)
    goal = payload.get("goal")
    if goal is None:
        raise ValueError("JSON must include 'goal'")
    return goal


def _load_json_object(input_path: str) -> dict[str, Any]:
    path = Path(input_path)
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"input file not found: {input_path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"input file is not valid JSON: {input_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError("JSON root must be an object")
    return payload


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve or generate nonogram puzzles from a JSON input file")
    parser.add_argument(
        "--input",
        required=True,
        help="Path to a JSON file with rows, columns, and optional given (or a goal grid with --generate)",
    )
    parser.add_argument("--trace", action="store_true", help="Include solver trace output")
    parser.add_argument("--generate", action="store_true", help="Read a complete 'goal' grid and emit its clues and hints")
    return parser


if __name__ == "__main__":
    args = _build_parser().parse_args()

    try:
        if args.generate:
            print(json.dumps(generate(load_goal_from_file(args.input)), indent=2))
        else:
            rows, columns, given, given_positions = load_puzzle_from_file(args.input)
            if args.trace:
                result, trace_log = run_with_trace(rows, columns, given=given, given_positions=given_positions)
                print(json.dumps({**format_result(result), "trace": trace_log}, indent=2))
            else:
                result = run(rows, columns, given=given, given_positions=given_positions)
                print(json.dumps(format_result(result), indent=2))
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}")
