import logging
import numpy as np
from gridmaze.core.grid import Grid
from gridmaze.core.errors import InvalidConfigError
from gridmaze.core.template import grid_from_template
from gridmaze.algo.base import resolve_seed
from gridmaze.algo.kruskal import generate
from gridmaze.io.template import classify_pixels
from gridmaze.viz.raster import rasterize, COLOR_BG

logger = logging.getLogger(__name__)

META_BASE_SIZE = 8
META_CELL_PIXELS = 7

def clear_image_corners(pic: np.ndarray) -> np.ndarray:
    """
    Whitens the top-left 2x2 and bottom-right 3x3 pixels so the corner cells
    of the next level are free to serve as start and end.
    """
    out = pic.copy()
    out[:2, :2] = COLOR_BG
    out[-3:, -3:] = COLOR_BG
    return out

def generate_meta_maze(level: int, seed: int = None) -> Grid:
    """
    A maze whose layout is another maze: each level rasterizes the previous
    maze and uses the picture as the template for the next one. Grows
    quickly, keep the level low.
    """
    if level <= 0:
        raise InvalidConfigError(f"Invalid meta-maze level: {level}")
    # Each level needs its own seed, derived from the first
    seed = resolve_seed(seed)

    grid = generate(Grid(META_BASE_SIZE, META_BASE_SIZE), seed)
    for i in range(level):
        pic = clear_image_corners(rasterize(grid, META_CELL_PIXELS))
        grid = grid_from_template(classify_pixels(pic), seed + i)
        logger.debug(f"Meta-maze level {i + 1}: {grid.width}x{grid.height}")
    return grid
