from array import array
from typing import Iterator, Tuple

from gridmaze.core.errors import InvalidConfigError

class Grid:
    # Directions, in the order left, top, right, bottom.
    # (d + 2) % 4 is always the opposite direction.
    LEFT   = 0
    TOP    = 1
    RIGHT  = 2
    BOTTOM = 3
    DIRECTIONS = (LEFT, TOP, RIGHT, BOTTOM)
    DIRECTION_NAMES = ("left", "top", "right", "bottom")

    # Wall bitmask: bit (1 << direction)
    WALL_LEFT   = 0b0001
    WALL_TOP    = 0b0010
    WALL_RIGHT  = 0b0100
    WALL_BOTTOM = 0b1000
    ALL_WALLS = WALL_LEFT | WALL_TOP | WALL_RIGHT | WALL_BOTTOM

    # Cell states
    NORMAL   = 0
    SOLUTION = 1
    EXCLUDED = 2
    STATE_NAMES = ("normal", "solutionPath", "excluded")

    # Direction Helpers
    DX = (-1, 0, 1, 0)
    DY = (0, -1, 0, 1)
    OPPOSITE = (RIGHT, BOTTOM, LEFT, TOP)

    # Largest cell count we agree to allocate
    MAX_CELLS = 2**31 - 1

    __slots__ = ('width', 'height', 'cells', 'states', 'start_index', 'end_index',
                 'seed', 'generation_time')

    def __init__(self, width: int, height: int):
        if not isinstance(width, int) or not isinstance(height, int):
            raise InvalidConfigError("width and height must be integers")
        if width < 1 or height < 1:
            raise InvalidConfigError("width and height must be at least 1")
        if width * height > self.MAX_CELLS:
            raise InvalidConfigError(f"The maze's size was too big ({width}x{height})")

        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell for walls, 1 for state
        self.cells = array('B', [self.ALL_WALLS]) * (width * height)
        self.states = array('B', [self.NORMAL]) * (width * height)

        # -1 until chosen by a template or by generation
        self.start_index = -1
        self.end_index = -1
        self.seed = None
        self.generation_time = 0.0

    def __len__(self) -> int:
        return self.width * self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def coords(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Cell index {index} out of bounds")
        return index % self.width, index // self.width

    def neighbor(self, x: int, y: int, direction: int) -> Tuple[int, int]:
        return x + self.DX[direction], y + self.DY[direction]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def carve_path(self, x1: int, y1: int, direction: int) -> bool:
        """
        Removes the wall between cell (x1, y1) and its neighbor in 'direction'.
        Also removes the OPPOSITE wall from the neighbor, so both sides agree.
        Returns False if the neighbor is outside the grid.
        """
        x2, y2 = self.neighbor(x1, y1, direction)
        if not self.in_bounds(x2, y2):
            return False # Cannot carve into void

        self.cells[y1 * self.width + x1] &= ~(1 << direction)
        self.cells[y2 * self.width + x2] &= ~(1 << self.OPPOSITE[direction])
        return True

    def add_wall(self, x: int, y: int, direction: int):
        self.cells[y * self.width + x] |= 1 << direction

        # Handle neighbor (strict consistency)
        nx, ny = self.neighbor(x, y, direction)
        if self.in_bounds(nx, ny):
            self.cells[ny * self.width + nx] |= 1 << self.OPPOSITE[direction]

    def has_wall(self, x: int, y: int, direction: int) -> bool:
        return (self.cells[y * self.width + x] & (1 << direction)) != 0

    def walls(self, x: int, y: int) -> Tuple[bool, bool, bool, bool]:
        """Wall flags of a cell as (left, top, right, bottom)."""
        val = self.cells[self.get_index(x, y)]
        return tuple((val >> d) & 1 == 1 for d in self.DIRECTIONS)

    def reset_walls(self):
        """Restores all four walls on every non-excluded cell."""
        for idx, state in enumerate(self.states):
            if state != self.EXCLUDED:
                self.cells[idx] = self.ALL_WALLS

    def get_state(self, x: int, y: int) -> int:
        return self.states[self.get_index(x, y)]

    def set_state(self, x: int, y: int, state: int):
        if state not in (self.NORMAL, self.SOLUTION, self.EXCLUDED):
            raise ValueError(f"Unknown cell state: {state}")
        self.states[self.get_index(x, y)] = state

    def is_excluded(self, x: int, y: int) -> bool:
        return self.states[self.get_index(x, y)] == self.EXCLUDED

    def set_excluded(self, x: int, y: int, excluded: bool = True):
        idx = self.get_index(x, y)
        if excluded:
            self.states[idx] = self.EXCLUDED
        elif self.states[idx] == self.EXCLUDED:
            self.states[idx] = self.NORMAL

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int, int]]:
        """
        Yields (nx, ny, direction_to_neighbor) for all valid grid neighbors.
        Does NOT check walls (that's for pathfinding).
        """
        if x > 0:
            yield (x - 1, y, self.LEFT)
        if y > 0:
            yield (x, y - 1, self.TOP)
        if x < self.width - 1:
            yield (x + 1, y, self.RIGHT)
        if y < self.height - 1:
            yield (x, y + 1, self.BOTTOM)

    def get_open_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """
        Yields (nx, ny) for neighbors that are NOT blocked by a wall.
        """
        val = self.cells[y * self.width + x]
        for nx, ny, direction in self.get_neighbors(x, y):
            if not val & (1 << direction):
                yield (nx, ny)

    @property
    def start(self) -> Tuple[int, int]:
        return self.coords(self.start_index)

    @property
    def end(self) -> Tuple[int, int]:
        return self.coords(self.end_index)

    def summary(self) -> str:
        return (f"{self.width}x{self.height} grid maze with random seed {self.seed}, "
                f"generated in {self.generation_time:.3f} seconds")

    def __repr__(self):
        return f"Grid({self.width}, {self.height})"
