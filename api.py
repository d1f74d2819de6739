from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from qrpuzzle.clues import grid_clues
from qrpuzzle.givens import known_positions, puzzle_from_grid, resolve_given
from qrpuzzle.possibilities import line_possibilities, possibility_count
from qrpuzzle.solver import solve_puzzle
from qrpuzzle.state import grid_to_raw
from qrpuzzle.types import Cell, Clue, Grid, PuzzleClues
from qrpuzzle.validation import normalize_clue, normalize_clues, normalize_grid


MAX_LINE_POSSIBILITIES = 50_000


class GivenPositions(BaseModel):
    black: list[list[int]] = Field(default_factory=list, description="[row, col] pairs known to be black")
    white: list[list[int]] = Field(default_factory=list, description="[row, col] pairs known to be white")


class SolveRequest(BaseModel):
    rows: list[list[int]] = Field(..., description="Run lengths of black cells for each row, top to bottom")
    columns: list[list[int]] = Field(..., description="Run lengths of black cells for each column, left to right")
    given: Optional[list[list[Optional[int]]]] = Field(
        default=None,
        description="Grid with 1 for black, 0 for white and null for unknown cells",
    )
    given_positions: Optional[GivenPositions] = Field(
        default=None,
        description="Known cells as position lists; an alternative to given",
    )
    trace: bool = Field(default=False, description="Include solver trace output in the response")
    trace_steps: bool = Field(default=False, description="Include a grid snapshot after every row and column pass.")
    trace_max_steps: int = Field(default=1000, ge=1, le=20000, description="Maximum number of trace steps to return.")


class TraceStepResponse(BaseModel):
    event: str
    message: str
    round: int
    axis: Optional[str] = None
    index: Optional[int] = None
    grid: list[list[Optional[int]]]


class SolveResponse(BaseModel):
    status: str
    rounds: int
    solution: list[list[Optional[int]]]
    grid_rows: list[str]
    grid_text: str
    contradiction: Optional[str] = None
    trace: Optional[list[str]] = None
    trace_steps: Optional[list[TraceStepResponse]] = None
    trace_truncated: bool = False


class GridRequest(BaseModel):
    grid: list[list[int]] = Field(..., description="Complete grid with 1 for black and 0 for white")


class CluesResponse(BaseModel):
    rows: list[list[int]]
    columns: list[list[int]]


class GenerateResponse(BaseModel):
    rows: list[list[int]]
    columns: list[list[int]]
    black: list[list[int]]
    white: list[list[int]]
    given: list[list[Optional[int]]]


class PossibilitiesRequest(BaseModel):
    clue: list[int] = Field(..., description="Run lengths of black cells for one line")
    length: int = Field(..., ge=0, le=64, description="Number of cells in the line")


class PossibilitiesResponse(BaseModel):
    count: int
    possibilities: list[list[int]]


app = FastAPI(
    title="QR Puzzle Solver API",
    description="Solve nonogram puzzles by row and column propagation, and generate puzzles from complete bitmaps.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://127.0.0.1:5173", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/solve", response_model=SolveResponse)
def solve(request: SolveRequest) -> SolveResponse:
    try:
        clues = normalize_clues(request.rows, request.columns)
        _check_puzzle_size(clues)
        given_positions = request.given_positions.model_dump() if request.given_positions is not None else None
        given = resolve_given(clues.dims, request.given, given_positions)

        trace_log: list[str] = []
        trace_steps: list[dict[str, object]] = []
        trace_meta = {"truncated": False}
        result = solve_puzzle(
            clues,
            given,
            trace=request.trace,
            trace_log=trace_log,
            trace_steps=trace_steps if request.trace_steps else None,
            trace_meta=trace_meta,
            trace_max_steps=request.trace_max_steps,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    grid_rows = _format_grid_rows(result.grid)
    return SolveResponse(
        status=result.status.value,
        rounds=result.rounds,
        solution=grid_to_raw(result.grid),
        grid_rows=grid_rows,
        grid_text="\n".join(grid_rows),
        contradiction=result.contradiction,
        trace=trace_log if request.trace else None,
        trace_steps=trace_steps if request.trace_steps else None,
        trace_truncated=trace_meta["truncated"],
    )


@app.post("/clues", response_model=CluesResponse)
def clues(request: GridRequest) -> CluesResponse:
    try:
        puzzle_clues = grid_clues(normalize_grid(request.grid))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CluesResponse(
        rows=[list(clue) for clue in puzzle_clues.rows],
        columns=[list(clue) for clue in puzzle_clues.columns],
    )


@app.post("/generate", response_model=GenerateResponse)
def generate(request: GridRequest) -> GenerateResponse:
    try:
        goal = normalize_grid(request.grid)
        _check_puzzle_size(grid_clues(goal))
        _, puzzle_clues, given = puzzle_from_grid(goal)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    black, white = known_positions(given)
    return GenerateResponse(
        rows=[list(clue) for clue in puzzle_clues.rows],
        columns=[list(clue) for clue in puzzle_clues.columns],
        black=[list(position) for position in black],
        white=[list(position) for position in white],
        given=grid_to_raw(given),
    )


@app.post("/possibilities", response_model=PossibilitiesResponse)
def possibilities(request: PossibilitiesRequest) -> PossibilitiesResponse:
    try:
        clue = normalize_clue(request.clue, "line", 0)
        _check_enumeration_size(clue, request.length, "line", 0)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    lines = sorted(grid_to_raw(tuple(line_possibilities(clue, request.length))), reverse=True)
    return PossibilitiesResponse(count=len(lines), possibilities=lines)


def _check_enumeration_size(clue: Clue, length: int, axis: str, index: int) -> None:
    count = possibility_count(clue, length)
    if count > MAX_LINE_POSSIBILITIES:
        raise ValueError(f"{axis} {index} has {count} possible fillings; the limit is {MAX_LINE_POSSIBILITIES}")


def _check_puzzle_size(puzzle_clues: PuzzleClues) -> None:
    row_count, col_count = puzzle_clues.dims
    for index, clue in enumerate(puzzle_clues.rows):
        _check_enumeration_size(clue, col_count, "row", index)
    for index, clue in enumerate(puzzle_clues.columns):
        _check_enumeration_size(clue, row_count, "column", index)


def _format_grid_rows(grid: Grid) -> list[str]:
    symbols = {Cell.BLACK: "#", Cell.WHITE: ".", Cell.UNKNOWN: "?"}
    return ["".join(symbols[cell] for cell in row) for row in grid]
