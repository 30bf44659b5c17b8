import unittest

from mazesolver import Cell, Maze, MazeBuilder, Position, StateError, solve_maze
from mazesolver.solver import find_path

SAMPLE_GRID = [
    [" ", " ", "w", " ", "w", "w", "w", "w"],
    ["w", "s", "w", " ", " ", " ", " ", "w"],
    [" ", " ", " ", " ", " ", "w", " ", "w"],
    [" ", " ", "w", "w", " ", "w", "e", "w"],
    ["w", "w", "w", "w", " ", " ", " ", "w"],
]

SOLVED_TEXT = "\n".join(
    [
        "  w wwww",
        "wswpp  w",
        " ppppw w",
        "  wwpwew",
        "wwwwpppw",
    ]
)


class SolverTests(unittest.TestCase):
    def test_sample_maze_is_solved_in_fixed_direction_order(self) -> None:
        maze = Maze(5, 8, SAMPLE_GRID)

        self.assertTrue(maze.solve())
        self.assertEqual(maze.to_text(), SOLVED_TEXT)
        self.assertTrue(maze.solved)

    def test_solved_path_is_a_walkable_route(self) -> None:
        maze = Maze(5, 8, SAMPLE_GRID)
        solve_maze(maze)
        path = maze.solved_path

        self.assertIsNotNone(path)
        self.assertEqual(path[0], Position(1, 1))
        self.assertEqual(path[-1], Position(3, 6))
        for a, b in zip(path, path[1:]):
            self.assertEqual(a.distance(b), 1)
        self.assertTrue(all(maze[p] is not Cell.WALL for p in path))
        self.assertEqual(maze.get_cell(1, 1), Cell.START)
        self.assertEqual(maze.get_cell(3, 6), Cell.END)

    def test_unreachable_end_returns_false(self) -> None:
        maze = Maze(3, 5, [list("swe  "), list("ww   "), list("     ")])

        self.assertFalse(maze.solve())
        self.assertFalse(maze.solved)
        self.assertIsNone(maze.solved_path)
        self.assertEqual(maze.count_cells(Cell.PATH), 0)

    def test_missing_or_duplicate_markers_raise(self) -> None:
        with self.assertRaises(StateError):
            solve_maze(Maze(3, 3, [list("s  "), list("   "), list("   ")]))
        with self.assertRaises(StateError):
            solve_maze(Maze(3, 3, [list("s e"), list("   "), list("  e")]))
        with self.assertRaises(StateError):
            solve_maze(Maze(3, 3, [list("s e"), list("s  "), list("   ")]))

    def test_first_direction_tried_is_up(self) -> None:
        maze = Maze(5, 5)
        path = find_path(maze, Position(2, 2), Position(0, 2))
        self.assertEqual(path, [Position(2, 2), Position(1, 2), Position(0, 2)])

    def test_resolving_gives_same_result(self) -> None:
        maze = Maze(5, 8, SAMPLE_GRID)
        maze.solve()
        first_path = list(maze.solved_path)

        self.assertTrue(maze.solve())
        self.assertEqual(maze.solved_path, first_path)
        self.assertEqual(maze.to_text(), SOLVED_TEXT)

    def test_large_open_grid_does_not_recurse(self) -> None:
        maze = Maze(200, 200)
        maze.set_cell(0, 0, Cell.START)
        maze.set_cell(199, 199, Cell.END)

        self.assertTrue(maze.solve())
        self.assertEqual(maze.solved_path[-1], Position(199, 199))

    def test_generated_random_maze_is_solvable(self) -> None:
        for seed in range(15):
            maze = (
                MazeBuilder.builder(seed=seed)
                .height(5)
                .width(8)
                .start(1, 1)
                .end(3, 6)
                .with_random_path()
                .with_random_walls(0.5)
                .with_perimeter_walls()
                .with_empty_path()
                .build()
            )
            self.assertTrue(maze.solve(), f"seed {seed}")


if __name__ == "__main__":
    unittest.main()
