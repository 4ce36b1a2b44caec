from typing import Tuple
import cv2
import numpy as np
from gridmaze.core.grid import Grid
from gridmaze.core.info import MazeInfo, get_info
from gridmaze.viz.raster import rasterize, COLOR_BG

COLOR_START_ARROW = (40, 180, 70)   # Green
COLOR_END_ARROW = (100, 120, 255)   # Blue
COLOR_ARROW_INNER = (255, 255, 255)

DEFAULT_CELL_PIXELS = 11
DEFAULT_ARROW_LENGTH = 16

def add_border(image: np.ndarray, width: int, fill=COLOR_BG) -> np.ndarray:
    """New image with a solid border 'width' pixels wide on every side."""
    h, w = image.shape[:2]
    out = np.empty((h + 2 * width, w + 2 * width) + image.shape[2:], dtype=image.dtype)
    out[:, :] = fill
    out[width:width + h, width:width + w] = image
    return out

def arrow_anchor(grid: Grid, index: int, direction: int, cell_pixels: int,
                 entering: bool) -> Tuple[int, int]:
    """
    Pixel (x, y) on the edge of cell 'index' where an arrow travelling in
    'direction' meets the cell. An entering arrow touches the far side from
    where it is heading; a leaving arrow starts on the side it heads out of.
    """
    x, y = grid.coords(index)
    cp = cell_pixels
    side = Grid.OPPOSITE[direction] if entering else direction
    px = x * cp + cp // 2
    py = y * cp + cp // 2
    if side == Grid.LEFT:
        px = x * cp
    elif side == Grid.TOP:
        py = y * cp
    elif side == Grid.RIGHT:
        px = x * cp + cp - 1
    else:
        py = y * cp + cp - 1
    return px, py

def arrow_thickness(length: int) -> int:
    return max(2, length // 4)

def arrow_footprint(length: int) -> int:
    """Pixels an arrow needs beyond the point it is anchored on."""
    return length + 2 * arrow_thickness(length) + 2

def draw_arrow(image: np.ndarray, point: Tuple[int, int], direction: int, color,
               length: int = DEFAULT_ARROW_LENGTH, away: bool = False) -> np.ndarray:
    """
    Draws an outlined arrow pointing in 'direction' onto image (in place).
    The tip stops just short of 'point', or if away is True the tail
    starts just past it.
    """
    dx, dy = Grid.DX[direction], Grid.DY[direction]
    px, py = point
    thickness = arrow_thickness(length)
    # Thick lines spill past their end points; keep clear of 'point'
    gap = thickness + 1
    if away:
        tail = (px + dx * gap, py + dy * gap)
        tip = (tail[0] + dx * length, tail[1] + dy * length)
    else:
        tip = (px - dx * gap, py - dy * gap)
        tail = (tip[0] - dx * length, tip[1] - dy * length)

    cv2.arrowedLine(image, tail, tip, color, thickness, cv2.LINE_8, 0, 0.5)
    # Thin white core, pulled back from the tip so the outline shows
    inner_tip = (tip[0] - dx * (length // 4), tip[1] - dy * (length // 4))
    cv2.line(image, tail, inner_tip, COLOR_ARROW_INNER, 1, cv2.LINE_8)
    return image

def decorate(grid: Grid, cell_pixels: int = DEFAULT_CELL_PIXELS,
             arrow_length: int = DEFAULT_ARROW_LENGTH) -> Tuple[np.ndarray, MazeInfo]:
    """
    Rasterizes the maze and adds start/end arrows around it. The maze is
    padded so arrows on the outer edge have room.
    """
    # Arrows never shorter than half a cell
    arrow_length = max(arrow_length, cell_pixels // 2)
    info = get_info(grid)

    border = arrow_footprint(arrow_length)
    image = add_border(rasterize(grid, cell_pixels), border)

    sx, sy = arrow_anchor(grid, grid.start_index, info.start_direction, cell_pixels, entering=True)
    draw_arrow(image, (sx + border, sy + border), info.start_direction,
               COLOR_START_ARROW, arrow_length, away=False)

    ex, ey = arrow_anchor(grid, grid.end_index, info.end_direction, cell_pixels, entering=False)
    draw_arrow(image, (ex + border, ey + border), info.end_direction,
               COLOR_END_ARROW, arrow_length, away=True)
    return image, info
