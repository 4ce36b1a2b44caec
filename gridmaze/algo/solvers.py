from abc import ABC, abstractmethod
from array import array
from typing import Iterator, List, Optional, Tuple
from gridmaze.core.grid import Grid
from gridmaze.core.errors import InternalMazeError

class Solver(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Tuple[int, int]] = []
        self.visited_count = 0

    @abstractmethod
    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        pass

    def run_all(self, start: Tuple[int, int], end: Tuple[int, int]) -> List[Tuple[int, int]]:
        for _ in self.run(start, end):
            pass
        return self.path

class HeuristicDFS(Solver):
    """
    Depth-first search that always tries the direction closing the most
    Manhattan distance to the target first. Greedy, so the path it finds is
    valid but not necessarily the shortest.
    """

    @staticmethod
    def rank_directions(cx: int, cy: int, tx: int, ty: int) -> Tuple[int, int, int, int]:
        """Directions ordered best (index 0) to worst (index 3)."""
        col_diff = tx - cx
        row_diff = ty - cy
        horiz_best, horiz_worst = (Grid.RIGHT, Grid.LEFT) if col_diff > 0 else (Grid.LEFT, Grid.RIGHT)
        vert_best, vert_worst = (Grid.BOTTOM, Grid.TOP) if row_diff > 0 else (Grid.TOP, Grid.BOTTOM)

        if abs(row_diff) > abs(col_diff):
            return (vert_best, horiz_best, horiz_worst, vert_worst)
        return (horiz_best, vert_best, vert_worst, horiz_worst)

    def reachable_unvisited(self, index: int, x: int, y: int, direction: int, visited) -> int:
        """Index of the neighbor in 'direction', or -1 if walled off, outside, or visited."""
        grid = self.grid
        if grid.cells[index] & (1 << direction):
            return -1
        nx, ny = x + Grid.DX[direction], y + Grid.DY[direction]
        if not (0 <= nx < grid.width and 0 <= ny < grid.height):
            return -1
        dst = ny * grid.width + nx
        if visited[dst]:
            return -1
        return dst

    def run(self, start: Tuple[int, int], end: Tuple[int, int]) -> Iterator[str]:
        grid = self.grid
        w = grid.width
        n = len(grid)
        start_idx = grid.get_index(*start)
        end_idx = grid.get_index(*end)
        end_x, end_y = end

        # Excluded cells count as visited so the search never walks into them
        visited = bytearray(n)
        for i, state in enumerate(grid.states):
            if state == Grid.EXCLUDED:
                visited[i] = 1

        # -1 marks the start of the chain
        self.parents = array('q', [-1]) * n
        self.path = []

        stack = [start_idx]
        visited[start_idx] = 1
        self.visited_count = 1
        found = False
        count = 0

        while not found:
            if not stack:
                raise InternalMazeError("Internal error: failed to solve maze")
            current = stack.pop()
            cx, cy = current % w, current // w
            if current == end_idx:
                break

            # Follow the path as long as possible
            while True:
                move_dst = -1
                for direction in self.rank_directions(cx, cy, end_x, end_y):
                    dst = self.reachable_unvisited(current, cx, cy, direction, visited)
                    if dst < 0:
                        continue
                    visited[dst] = 1
                    self.parents[dst] = current
                    self.visited_count += 1
                    if move_dst < 0:
                        move_dst = dst
                        continue
                    # Already have our next step; explore this one later
                    stack.append(dst)

                if move_dst < 0:
                    break
                current = move_dst
                cx, cy = current % w, current // w
                if current == end_idx:
                    found = True
                    break

            count += 1
            if count % 100 == 0:
                yield f"Visited: {self.visited_count}"

        self.reconstruct_path(end_idx)
        yield "Solved"

    def reconstruct_path(self, end_idx: int):
        idx = end_idx
        while idx >= 0:
            self.path.append(self.grid.coords(idx))
            idx = self.parents[idx]
        self.path.reverse()

def clear_solution(grid: Grid) -> int:
    """Puts solution cells back to normal. Excluded cells are left alone."""
    cleared = 0
    for i, state in enumerate(grid.states):
        if state == Grid.SOLUTION:
            grid.states[i] = Grid.NORMAL
            cleared += 1
    return cleared

def find_path(grid: Grid) -> List[Tuple[int, int]]:
    """Start-to-end path without touching cell states."""
    return HeuristicDFS(grid).run_all(grid.start, grid.end)

def solve(grid: Grid, highlight: bool = True) -> Optional[List[Tuple[int, int]]]:
    """
    Marks the start-to-end path as SOLUTION and returns it. With
    highlight=False the existing marking is removed instead.
    """
    clear_solution(grid)
    if not highlight:
        return None

    path = find_path(grid)
    for x, y in path:
        idx = y * grid.width + x
        if grid.states[idx] == Grid.EXCLUDED:
            raise InternalMazeError(f"Internal error: solution passes through excluded cell ({x}, {y})")
        grid.states[idx] = Grid.SOLUTION
    return path
