import json
import tempfile
import unittest
from pathlib import Path

from main import clues_for, format_grid_rows, format_result, generate, load_goal_from_file, load_puzzle_from_file, run, run_with_trace
from qrpuzzle.errors import DimensionMismatchError, InvalidClueError
from qrpuzzle.types import SolveStatus

ROWS = [[1], [1, 1], [4], [3], [3]]
COLUMNS = [[3, 1], [3], [3], [2], [1]]


class TestMainJsonInput(unittest.TestCase):
    def test_loads_valid_payload_with_given(self) -> None:
        payload = {
            "rows": [[1], [1]],
            "columns": [[1], [1]],
            "given": [[1, None], [None, None]],
        }
        file_path = self._write_json(payload)

        rows, columns, given, given_positions = load_puzzle_from_file(file_path)

        self.assertEqual(rows, [[1], [1]])
        self.assertEqual(columns, [[1], [1]])
        self.assertEqual(given, payload["given"])
        self.assertIsNone(given_positions)

    def test_loads_valid_payload_without_given(self) -> None:
        file_path = self._write_json({"rows": ROWS, "columns": COLUMNS})

        rows, columns, given, given_positions = load_puzzle_from_file(file_path)

        self.assertEqual(rows, ROWS)
        self.assertEqual(columns, COLUMNS)
        self.assertIsNone(given)
        self.assertIsNone(given_positions)

    def test_raises_when_json_is_invalid(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            bad_path = Path(temp_dir) / "bad.json"
            bad_path.write_text("{ not valid json", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_puzzle_from_file(str(bad_path))

    def test_raises_when_file_is_missing(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(ValueError):
                load_puzzle_from_file(str(Path(temp_dir) / "missing.json"))

    def test_raises_when_required_fields_are_missing(self) -> None:
        file_path = self._write_json({"rows": ROWS})
        with self.assertRaises(ValueError):
            load_puzzle_from_file(file_path)

    def test_raises_when_root_is_not_an_object(self) -> None:
        file_path = self._write_json([ROWS, COLUMNS])
        with self.assertRaises(ValueError):
            load_puzzle_from_file(file_path)

    def test_loaded_payload_can_be_solved(self) -> None:
        file_path = self._write_json({"rows": ROWS, "columns": COLUMNS})
        rows, columns, given, given_positions = load_puzzle_from_file(file_path)

        result = run(rows, columns, given=given, given_positions=given_positions)
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertEqual(format_grid_rows(result.grid), ["#....", "#...#", "####.", ".###.", "###.."])

    def test_loads_goal_for_generation(self) -> None:
        file_path = self._write_json({"goal": [[1, 0], [0, 1]]})
        self.assertEqual(load_goal_from_file(file_path), [[1, 0], [0, 1]])

        with self.assertRaises(ValueError):
            load_goal_from_file(self._write_json({"rows": ROWS}))

    def _write_json(self, payload: object) -> str:
        tmp_file = tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False, encoding="utf-8")
        tmp_file.write(json.dumps(payload))
        tmp_file.flush()
        tmp_file.close()
        self.addCleanup(lambda: Path(tmp_file.name).unlink(missing_ok=True))
        return tmp_file.name


class TestMainRun(unittest.TestCase):
    def test_run_accepts_given_positions(self) -> None:
        result = run([[1], [1]], [[1], [1]], given_positions={"black": [[0, 1]], "white": []})
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertEqual(format_grid_rows(result.grid), [".#", "#."])

    def test_run_with_trace_returns_trace_lines(self) -> None:
        result, trace_log = run_with_trace(ROWS, COLUMNS)
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertTrue(any("Round 1" in line for line in trace_log))

    def test_format_result_includes_contradiction(self) -> None:
        payload = format_result(run([[2]], [[1], [1]], given=[[0, None]]))
        self.assertEqual(payload["status"], "contradiction")
        self.assertIn("contradiction", payload)
        self.assertEqual(payload["solution"], [[0, None]])
        self.assertEqual(payload["grid_rows"], [".?"])

    def test_format_result_for_partial_solution(self) -> None:
        payload = format_result(run([[1], [1]], [[1], [1]]))
        self.assertEqual(payload["status"], "partially_solved")
        self.assertNotIn("contradiction", payload)
        self.assertEqual(payload["grid_rows"], ["??", "??"])

    def test_run_raises_for_invalid_clue(self) -> None:
        with self.assertRaises(InvalidClueError):
            run([[3]], [[1], [1]])

    def test_run_raises_for_mismatched_given(self) -> None:
        with self.assertRaises(DimensionMismatchError):
            run([[1]], [[1]], given=[[1, 0]])

    def test_generate_returns_clues_and_hints(self) -> None:
        payload = generate([[1, 0], [0, 1]])
        self.assertEqual(payload["rows"], [[1], [1]])
        self.assertEqual(payload["columns"], [[1], [1]])
        self.assertEqual(payload["black"], [[0, 0], [1, 1]])
        self.assertEqual(payload["white"], [[0, 1], [1, 0]])

    def test_clues_for_grid(self) -> None:
        self.assertEqual(clues_for([[1, 1, 0], [0, 0, 0]]), {"rows": [[2], []], "columns": [[1], [1], []]})


if __name__ == "__main__":
    unittest.main()
