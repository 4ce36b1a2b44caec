import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.grid import Grid
from gridmaze.core.complexity import MazePostProcessor
from gridmaze.algo.kruskal import generate
from gridmaze.algo.solvers import solve

def corner_segments(grid, col, row):
    """(x, y, direction) of the wall segments present at the bottom-right corner of (col, row)."""
    segments = []
    if grid.has_wall(col, row, Grid.RIGHT):
        segments.append((col, row, Grid.RIGHT))
    if grid.has_wall(col, row, Grid.BOTTOM):
        segments.append((col, row, Grid.BOTTOM))
    if grid.has_wall(col + 1, row + 1, Grid.LEFT):
        segments.append((col + 1, row + 1, Grid.LEFT))
    if grid.has_wall(col + 1, row + 1, Grid.TOP):
        segments.append((col + 1, row + 1, Grid.TOP))
    return segments

def open_2x2():
    """2x2 grid with every inner wall cleared; only the outer border remains."""
    grid = Grid(2, 2)
    grid.carve_path(0, 0, Grid.RIGHT)
    grid.carve_path(0, 0, Grid.BOTTOM)
    grid.carve_path(1, 1, Grid.LEFT)
    grid.carve_path(1, 1, Grid.TOP)
    return grid

class TestErosion(unittest.TestCase):
    def test_single_stub_removed(self):
        grid = open_2x2()
        grid.add_wall(0, 0, Grid.RIGHT)

        removed = MazePostProcessor.erode(grid)
        self.assertEqual(removed, 1)
        self.assertFalse(grid.has_wall(0, 0, Grid.RIGHT))
        self.assertFalse(grid.has_wall(1, 0, Grid.LEFT))
        # Outer border untouched
        self.assertTrue(grid.has_wall(0, 0, Grid.LEFT))
        self.assertTrue(grid.has_wall(0, 0, Grid.TOP))
        self.assertTrue(grid.has_wall(1, 0, Grid.RIGHT))

    def test_each_stub_direction(self):
        for x, y, direction in [(0, 0, Grid.RIGHT), (0, 0, Grid.BOTTOM), (1, 1, Grid.LEFT), (1, 1, Grid.TOP)]:
            grid = open_2x2()
            grid.add_wall(x, y, direction)
            self.assertEqual(MazePostProcessor.erode(grid), 1)
            self.assertEqual(corner_segments(grid, 0, 0), [])

    def test_corner_with_two_walls_untouched(self):
        grid = open_2x2()
        grid.add_wall(0, 0, Grid.RIGHT)
        grid.add_wall(0, 0, Grid.BOTTOM)
        before = grid.cells.tobytes()
        self.assertEqual(MazePostProcessor.erode(grid), 0)
        self.assertEqual(grid.cells.tobytes(), before)

    def test_empty_corner_untouched(self):
        grid = open_2x2()
        before = grid.cells.tobytes()
        self.assertEqual(MazePostProcessor.erode(grid), 0)
        self.assertEqual(grid.cells.tobytes(), before)

    def test_fully_walled_untouched(self):
        grid = Grid(4, 4)
        self.assertEqual(MazePostProcessor.erode(grid), 0)
        self.assertTrue(all(val == Grid.ALL_WALLS for val in grid.cells))

    def test_corner_next_to_excluded_cell_kept(self):
        grid = open_2x2()
        grid.add_wall(0, 0, Grid.RIGHT)
        grid.set_excluded(1, 1)
        before = grid.cells.tobytes()
        self.assertEqual(MazePostProcessor.erode(grid), 0)
        self.assertEqual(grid.cells.tobytes(), before)

    def test_matches_snapshot_stubs(self):
        grid = generate(Grid(25, 20), seed=17)

        # Work out which segments are lone stubs before the pass
        expected = set()
        for row in range(grid.height - 1):
            for col in range(grid.width - 1):
                segments = corner_segments(grid, col, row)
                if len(segments) == 1:
                    x, y, d = segments[0]
                    nx, ny = x + Grid.DX[d], y + Grid.DY[d]
                    expected.add(frozenset([(x, y, d), (nx, ny, Grid.OPPOSITE[d])]))
        before = grid.cells.tobytes()

        removed = MazePostProcessor.erode(grid)
        self.assertEqual(removed, len(expected))
        self.assertGreater(removed, 0)

        cleared = set()
        for idx in range(len(grid)):
            gone = before[idx] & ~grid.cells[idx]
            x, y = grid.coords(idx)
            for d in Grid.DIRECTIONS:
                if gone & (1 << d):
                    nx, ny = x + Grid.DX[d], y + Grid.DY[d]
                    cleared.add(frozenset([(x, y, d), (nx, ny, Grid.OPPOSITE[d])]))
        self.assertEqual(cleared, expected)

        # Nothing ever comes back
        for idx in range(len(grid)):
            self.assertEqual(grid.cells[idx] & ~before[idx], 0)

    def test_symmetry_and_solvable_after_passes(self):
        grid = Grid(20, 20)
        grid.set_excluded(10, 10)
        grid.set_excluded(11, 10)
        generate(grid, seed=31)

        for _ in range(3):
            MazePostProcessor.erode(grid)

        for y in range(grid.height):
            for x in range(grid.width - 1):
                self.assertEqual(grid.has_wall(x, y, Grid.RIGHT), grid.has_wall(x + 1, y, Grid.LEFT))
        for y in range(grid.height - 1):
            for x in range(grid.width):
                self.assertEqual(grid.has_wall(x, y, Grid.BOTTOM), grid.has_wall(x, y + 1, Grid.TOP))

        self.assertEqual(grid.cells[grid.get_index(10, 10)], Grid.ALL_WALLS)
        self.assertEqual(grid.cells[grid.get_index(11, 10)], Grid.ALL_WALLS)

        path = solve(grid, True)
        self.assertEqual(path[0], grid.start)
        self.assertEqual(path[-1], grid.end)

    def test_repeated_passes_do_not_add_walls(self):
        grid = generate(Grid(15, 15), seed=2)
        total = 0
        for _ in range(5):
            before = sum(bin(v).count("1") for v in grid.cells)
            total += MazePostProcessor.erode(grid)
            after = sum(bin(v).count("1") for v in grid.cells)
            self.assertLessEqual(after, before)
        self.assertGreater(total, 0)

class TestStats(unittest.TestCase):
    def test_corridor(self):
        grid = generate(Grid(3, 1), seed=1)
        stats = MazePostProcessor.calculate_stats(grid)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["corridors"], 1)
        self.assertEqual(stats["intersections"], 0)

    def test_excluded_not_counted(self):
        grid = Grid(3, 1)
        grid.set_excluded(2, 0)
        grid.start_index, grid.end_index = 0, 1
        generate(grid, seed=1)
        stats = MazePostProcessor.calculate_stats(grid)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["dead_end_percent"], 100.0)

if __name__ == '__main__':
    unittest.main()
