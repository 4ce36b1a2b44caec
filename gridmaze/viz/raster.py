import numpy as np
from gridmaze.core.grid import Grid
from gridmaze.core.errors import InvalidConfigError

COLOR_BG = (255, 255, 255)
COLOR_WALL = (0, 0, 0)
COLOR_SOLUTION = (230, 20, 20)

# Cells narrower than this can't fit walls plus the solution marker
MIN_CELL_PIXELS = 5
DEFAULT_CELL_PIXELS = 9

def rasterize(grid: Grid, cell_pixels: int = DEFAULT_CELL_PIXELS) -> np.ndarray:
    """
    Draws the grid into a (height*cp, width*cp, 3) RGB array. Each cell owns
    a cp x cp square; a present wall is a black line along that edge of the
    square, so a corner pixel is black when either wall touching it is.
    """
    if cell_pixels < MIN_CELL_PIXELS:
        raise InvalidConfigError(f"Cells must be at least {MIN_CELL_PIXELS} pixels wide, got {cell_pixels}")

    cp = cell_pixels
    img = np.empty((grid.height * cp, grid.width * cp, 3), dtype=np.uint8)
    img[:, :] = COLOR_BG

    for y in range(grid.height):
        py = y * cp
        for x in range(grid.width):
            idx = y * grid.width + x
            state = grid.states[idx]
            # Excluded cells are always blank
            if state == Grid.EXCLUDED:
                continue
            px = x * cp

            if state == Grid.SOLUTION:
                img[py + 2:py + cp - 2, px + 2:px + cp - 2] = COLOR_SOLUTION

            walls = grid.cells[idx]
            if walls & Grid.WALL_LEFT:
                img[py:py + cp, px] = COLOR_WALL
            if walls & Grid.WALL_TOP:
                img[py, px:px + cp] = COLOR_WALL
            if walls & Grid.WALL_RIGHT:
                img[py:py + cp, px + cp - 1] = COLOR_WALL
            if walls & Grid.WALL_BOTTOM:
                img[py + cp - 1, px:px + cp] = COLOR_WALL
    return img
