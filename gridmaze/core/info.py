from dataclasses import dataclass, asdict
from typing import Tuple
from gridmaze.core.grid import Grid
from gridmaze.algo.solvers import find_path

@dataclass
class MazeInfo:
    start: Tuple[int, int]
    end: Tuple[int, int]
    # Direction of the first step out of the start cell, and of the last
    # step into the end cell. Used to point the decorative arrows.
    start_direction: int
    end_direction: int
    path_length: int
    debug_info: str

    def to_dict(self):
        return asdict(self)

def step_direction(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    dx, dy = b[0] - a[0], b[1] - a[1]
    for direction in Grid.DIRECTIONS:
        if Grid.DX[direction] == dx and Grid.DY[direction] == dy:
            return direction
    raise ValueError(f"{a} and {b} are not adjacent")

def get_info(grid: Grid) -> MazeInfo:
    path = find_path(grid)
    if len(path) > 1:
        start_direction = step_direction(path[0], path[1])
        end_direction = step_direction(path[-2], path[-1])
    else:
        start_direction = end_direction = Grid.RIGHT

    return MazeInfo(
        start=grid.start,
        end=grid.end,
        start_direction=start_direction,
        end_direction=end_direction,
        path_length=len(path) - 1,
        debug_info=grid.summary(),
    )
