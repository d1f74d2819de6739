import unittest

from qrpuzzle.clues import grid_clues, line_clue
from qrpuzzle.errors import IncompleteGridError
from qrpuzzle.solver import solve_puzzle
from qrpuzzle.types import Cell, SolveStatus
from qrpuzzle.validation import normalize_grid

B = Cell.BLACK
W = Cell.WHITE


class TestLineClue(unittest.TestCase):
    def test_reads_runs_left_to_right(self) -> None:
        self.assertEqual(line_clue((B, B, W, B, W, W, B, B, B)), (2, 1, 3))

    def test_all_white_line_has_empty_clue(self) -> None:
        self.assertEqual(line_clue((W, W, W)), ())

    def test_runs_touching_both_ends(self) -> None:
        self.assertEqual(line_clue((B, W, B)), (1, 1))
        self.assertEqual(line_clue((B, B, B)), (3,))

    def test_raises_for_unknown_cells(self) -> None:
        with self.assertRaises(IncompleteGridError):
            line_clue((B, Cell.UNKNOWN, W))


class TestGridClues(unittest.TestCase):
    def test_reads_rows_and_columns(self) -> None:
        grid = normalize_grid([
            [1, 1, 0],
            [0, 1, 0],
            [1, 0, 1],
        ])
        clues = grid_clues(grid)
        self.assertEqual(clues.rows, ((2,), (1,), (1, 1)))
        self.assertEqual(clues.columns, ((1, 1), (2,), (1,)))
        self.assertEqual(clues.dims, (3, 3))

    def test_non_square_grid(self) -> None:
        clues = grid_clues(normalize_grid([[1, 0, 1, 1]]))
        self.assertEqual(clues.rows, ((1, 2),))
        self.assertEqual(clues.columns, ((1,), (), (1,), (1,)))

    def test_clues_of_goal_are_consistent_with_goal(self) -> None:
        goal = normalize_grid([
            [0, 1, 1, 1, 0],
            [1, 1, 0, 1, 1],
            [1, 0, 0, 0, 1],
            [1, 1, 0, 1, 1],
            [0, 1, 1, 1, 0],
        ])
        result = solve_puzzle(grid_clues(goal), goal)
        self.assertIs(result.status, SolveStatus.SOLVED)
        self.assertEqual(result.grid, goal)

    def test_raises_for_grid_with_unknown_cells(self) -> None:
        with self.assertRaises(IncompleteGridError):
            grid_clues(normalize_grid([[1, None]]))


if __name__ == "__main__":
    unittest.main()
