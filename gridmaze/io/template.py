import os
import cv2
import numpy as np
from gridmaze.core.errors import InvalidConfigError
from gridmaze.core.template import TemplateCellType

def load_template(filepath: str) -> np.ndarray:
    """Reads an image file into an (height, width, 3) RGB uint8 array."""
    if not os.path.exists(filepath):
        raise InvalidConfigError(f"Template image {filepath} does not exist")
    pic = cv2.imread(filepath, cv2.IMREAD_COLOR)
    if pic is None:
        raise InvalidConfigError(f"Error parsing template image {filepath}")
    # OpenCV hands back BGR
    return cv2.cvtColor(pic, cv2.COLOR_BGR2RGB)

def classify_pixels(rgb: np.ndarray) -> np.ndarray:
    """
    One TemplateCellType per pixel:
      - Black pixels are excluded cells
      - Green pixels (0, >200, 0) are possible start cells
      - Red pixels (>200, 0, 0) are possible end cells
      - Everything else is a normal maze cell
    """
    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise InvalidConfigError(f"Expected an RGB image, got shape {rgb.shape}")
    r = rgb[:, :, 0].astype(np.int32)
    g = rgb[:, :, 1].astype(np.int32)
    b = rgb[:, :, 2].astype(np.int32)

    types = np.full(r.shape, TemplateCellType.NORMAL, dtype=np.uint8)
    types[(r == 0) & (g > 200) & (b == 0)] = TemplateCellType.START_CANDIDATE
    types[(r > 200) & (g == 0) & (b == 0)] = TemplateCellType.END_CANDIDATE
    types[(r == 0) & (g == 0) & (b == 0)] = TemplateCellType.EXCLUDED
    return types
