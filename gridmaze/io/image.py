import cv2
import numpy as np

def save_png(image: np.ndarray, filepath: str):
    """Writes an RGB uint8 array to a PNG file."""
    # We have RGB, OpenCV wants BGR
    frame = cv2.cvtColor(image, cv2.COLOR_RGB2BGR)
    if not cv2.imwrite(filepath, frame):
        raise OSError(f"Error writing image to {filepath}")
