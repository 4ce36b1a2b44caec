import random
from typing import Sequence
from gridmaze.core.grid import Grid
from gridmaze.core.errors import InvalidConfigError
from gridmaze.algo.base import resolve_seed
from gridmaze.algo.kruskal import generate

class TemplateCellType:
    NORMAL = 0
    EXCLUDED = 1
    START_CANDIDATE = 2
    END_CANDIDATE = 3

    NAMES = {
        NORMAL: "valid",
        EXCLUDED: "excluded",
        START_CANDIDATE: "startCandidate",
        END_CANDIDATE: "endCandidate",
    }

def grid_from_template(cell_types: Sequence[Sequence[int]], seed: int = None) -> Grid:
    """
    Builds a maze shaped by a per-cell classification (rows of TemplateCellType
    values, e.g. a 2-D numpy array). Excluded cells are left out of the maze;
    start and end are drawn at random from the marked candidates, falling back
    to the top-left and bottom-right cells.
    """
    height = len(cell_types)
    width = len(cell_types[0]) if height else 0
    grid = Grid(width, height)
    seed = resolve_seed(seed)

    start_candidates = []
    end_candidates = []
    for row in range(height):
        if len(cell_types[row]) != width:
            raise InvalidConfigError(f"Template row {row} has {len(cell_types[row])} cells, expected {width}")
        for col in range(width):
            cell_type = int(cell_types[row][col])
            idx = row * width + col
            if cell_type == TemplateCellType.NORMAL:
                continue
            elif cell_type == TemplateCellType.EXCLUDED:
                grid.states[idx] = Grid.EXCLUDED
            elif cell_type == TemplateCellType.START_CANDIDATE:
                start_candidates.append(idx)
            elif cell_type == TemplateCellType.END_CANDIDATE:
                end_candidates.append(idx)
            else:
                raise InvalidConfigError(f"Invalid template cell type ({cell_type}) at ({col}, {row})")

    rng = random.Random(seed)
    if start_candidates:
        grid.start_index = start_candidates[rng.randrange(len(start_candidates))]
    elif grid.states[0] == Grid.EXCLUDED:
        raise InvalidConfigError("No possible start locations marked, and the top-left cell is excluded")
    else:
        grid.start_index = 0

    if end_candidates:
        grid.end_index = end_candidates[rng.randrange(len(end_candidates))]
    elif grid.states[-1] == Grid.EXCLUDED:
        raise InvalidConfigError("No possible end locations marked, and the bottom-right cell is excluded")
    else:
        grid.end_index = len(grid) - 1

    generate(grid, seed)
    return grid
