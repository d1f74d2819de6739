from typing import Optional

from .state import grid_to_raw
from .types import Grid, TraceLog, TraceStep


def trace(enabled: bool, trace_log: Optional[TraceLog], message: str) -> None:
    if not enabled:
        return
    if trace_log is not None:
        trace_log.append(message)
    else:
        print(message)


def record_step(
    trace_steps: Optional[list[TraceStep]],
    trace_meta: Optional[dict[str, bool]],
    trace_max_steps: int,
    event: str,
    message: str,
    round_number: int,
    grid: Grid,
    axis: Optional[str] = None,
    index: Optional[int] = None,
) -> None:
    if trace_steps is None:
        return
    if len(trace_steps) >= trace_max_steps:
        if trace_meta is not None:
            trace_meta["truncated"] = True
        return
    trace_steps.append(
        {
            "event": event,
            "message": message,
            "round": round_number,
            "axis": axis,
            "index": index,
            "grid": grid_to_raw(grid),
        }
    )
