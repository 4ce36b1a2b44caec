import logging
import random
import time
from typing import Iterator, List, Tuple
from gridmaze.core.grid import Grid
from gridmaze.core.disjoint_set import DisjointSet
from gridmaze.core.errors import InvalidConfigError, InternalMazeError
from gridmaze.algo.base import Generator

logger = logging.getLogger(__name__)

class KruskalGenerator(Generator):
    """
    Randomized Kruskal: keeps a list of adjacent cell pairs that aren't
    connected yet and knocks down the wall of a random pair until the list
    is empty. Excluded cells never enter the list, so their walls stay put.
    """

    def __init__(self, grid: Grid, seed: int = None):
        super().__init__(grid, seed)
        self.sets: DisjointSet = None
        # (base_index, direction); direction is always RIGHT or BOTTOM
        self.neighbors: List[Tuple[int, int]] = []
        self.wasted_picks = 0
        self.compactions = 0
        self.saved_fields = None

    def neighbor_index(self, base_index: int, direction: int) -> int:
        if direction == Grid.RIGHT:
            return base_index + 1
        if direction == Grid.BOTTOM:
            return base_index + self.grid.width
        raise InternalMazeError(f"Internal error: neighbor not below or to the right ({direction})")

    def init_disjoint_neighbors(self):
        grid = self.grid
        w, h = grid.width, grid.height
        states = grid.states
        self.neighbors = []

        for row in range(h):
            row_start = row * w
            for col in range(w):
                idx = row_start + col
                # An excluded cell will never be joined, so it is never a disjoint neighbor
                if states[idx] == Grid.EXCLUDED:
                    continue
                if col != w - 1 and states[idx + 1] != Grid.EXCLUDED:
                    self.neighbors.append((idx, Grid.RIGHT))
                if row != h - 1 and states[idx + w] != Grid.EXCLUDED:
                    self.neighbors.append((idx, Grid.BOTTOM))

    def update_disjoint_neighbors(self):
        """Drops every pair whose cells are already reachable from one another."""
        neighbors = self.neighbors
        i = 0
        while i < len(neighbors):
            base, direction = neighbors[i]
            if not self.sets.connected(base, self.neighbor_index(base, direction)):
                i += 1
                continue
            # Swap remove for O(1)
            neighbors[i] = neighbors[-1]
            neighbors.pop()
        self.compactions += 1

    def sample_neighbor(self, rng: random.Random):
        """
        Returns a random list entry, or None if the entry's two cells are
        already in the same set.
        """
        base, direction = self.neighbors[rng.randrange(len(self.neighbors))]
        if self.sets.connected(base, self.neighbor_index(base, direction)):
            return None
        return base, direction

    def get_disjoint_neighbor(self, rng: random.Random):
        """Returns a joinable pair, or None once the list is exhausted."""
        if not self.neighbors:
            return None
        pick = self.sample_neighbor(rng)
        if pick is not None:
            return pick

        # Wasted pick: clean up the whole list so the next sample can't miss
        self.wasted_picks += 1
        self.update_disjoint_neighbors()
        if not self.neighbors:
            return None
        pick = self.sample_neighbor(rng)
        if pick is None:
            raise InternalMazeError("Internal error: compacted neighbor list still holds joined cells")
        return pick

    def run(self) -> Iterator[str]:
        grid = self.grid
        rng = random.Random(self.seed)
        # Restored if the endpoints turn out unusable
        self.saved_fields = (grid.seed, grid.generation_time, grid.start_index, grid.end_index)
        grid.seed = self.seed

        # Fresh walls, fresh singleton sets
        grid.reset_walls()
        self.sets = DisjointSet(len(grid))
        self.init_disjoint_neighbors()
        logger.debug(f"Generating {grid.width}x{grid.height} with seed {self.seed}, "
                     f"{len(self.neighbors)} candidate walls")

        start_time = time.perf_counter()
        while True:
            pick = self.get_disjoint_neighbor(rng)
            if pick is None:
                break
            base, direction = pick
            other = self.neighbor_index(base, direction)
            x, y = base % grid.width, base // grid.width
            grid.carve_path(x, y, direction)
            self.sets.union(base, other)
            self.step_count += 1

            # Yield every N steps to keep UI responsive without spamming
            if self.step_count % 1000 == 0:
                yield f"Joined: {self.step_count} Remaining: {len(self.neighbors)}"

        grid.generation_time = time.perf_counter() - start_time
        logger.debug(f"Removed {self.step_count} walls, {self.wasted_picks} wasted picks, "
                     f"{self.compactions} compactions")

        # Arbitrarily go from top left to bottom right if no start was chosen
        if grid.start_index == -1:
            grid.start_index = 0
            grid.end_index = len(grid) - 1

        self.check_endpoints()
        yield "Done"

    def check_endpoints(self):
        """
        Start and end must be usable cells in the same tree. On failure the
        grid goes back to all walls present, with its seed, timing and
        endpoints as they were before the run.
        """
        grid = self.grid
        problem = None
        n = len(grid)
        if not 0 <= grid.start_index < n or not 0 <= grid.end_index < n:
            problem = f"start/end index out of range ({grid.start_index}, {grid.end_index})"
        elif grid.states[grid.start_index] == Grid.EXCLUDED:
            problem = f"start cell {grid.start} is excluded"
        elif grid.states[grid.end_index] == Grid.EXCLUDED:
            problem = f"end cell {grid.end} is excluded"
        elif not self.sets.connected(grid.start_index, grid.end_index):
            problem = f"start cell {grid.start} can't reach end cell {grid.end}"

        if problem is not None:
            grid.reset_walls()
            grid.seed, grid.generation_time, grid.start_index, grid.end_index = self.saved_fields
            raise InvalidConfigError(f"Error generating maze: {problem}")

def generate(grid: Grid, seed: int = None) -> Grid:
    """
    (Re)builds the maze on grid in place. Deterministic for any given seed;
    only None picks a time-based one.
    """
    KruskalGenerator(grid, seed=seed).run_all()
    return grid
