import logging
from array import array
from gridmaze.core.grid import Grid

logger = logging.getLogger(__name__)

class MazePostProcessor:
    @staticmethod
    def erode(grid: Grid) -> int:
        """
        Removes wall segments that "stick out": at the bottom-right corner of
        every cell (except the last row and column) look at the four wall
        segments meeting there. If exactly one is present it touches no other
        wall, so clear it on both sides.

        Only does this *once*; call again for more. Too many calls will
        eventually trivialize the maze.
        Corners touching an excluded cell are skipped.
        Returns the number of segments removed.
        """
        w = grid.width
        # Snapshot so one call never chains removals across corners
        orig = array('B', grid.cells)
        states = grid.states
        removed = 0

        for row in range(grid.height - 1):
            row_start = row * w
            for col in range(w - 1):
                idx = row_start + col
                lower_idx = idx + w + 1
                if (states[idx] == Grid.EXCLUDED or states[idx + 1] == Grid.EXCLUDED or
                        states[idx + w] == Grid.EXCLUDED or states[lower_idx] == Grid.EXCLUDED):
                    continue

                # Right and bottom walls of the main cell, left and top of
                # the cell diagonally across the corner.
                main = orig[idx]
                lower = orig[lower_idx]
                segments = []
                if main & Grid.WALL_RIGHT:
                    segments.append((col, row, Grid.RIGHT))
                if main & Grid.WALL_BOTTOM:
                    segments.append((col, row, Grid.BOTTOM))
                if lower & Grid.WALL_LEFT:
                    segments.append((col + 1, row + 1, Grid.LEFT))
                if lower & Grid.WALL_TOP:
                    segments.append((col + 1, row + 1, Grid.TOP))

                if len(segments) != 1:
                    continue
                x, y, direction = segments[0]
                if grid.has_wall(x, y, direction):
                    grid.carve_path(x, y, direction)
                    removed += 1

        logger.debug(f"Erosion removed {removed} wall stubs")
        return removed

    @staticmethod
    def calculate_stats(grid: Grid):
        dead_ends = 0
        intersections = 0 # 0, 1 walls
        corridors = 0 # 2 walls

        def popcount_walls(val):
            c = 0
            if val & Grid.WALL_LEFT: c += 1
            if val & Grid.WALL_TOP: c += 1
            if val & Grid.WALL_RIGHT: c += 1
            if val & Grid.WALL_BOTTOM: c += 1
            return c

        total = 0
        for i in range(len(grid)):
            if grid.states[i] == Grid.EXCLUDED:
                continue
            total += 1
            walls = popcount_walls(grid.cells[i])
            if walls == 3: dead_ends += 1
            elif walls == 2: corridors += 1
            elif walls <= 1: intersections += 1

        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
