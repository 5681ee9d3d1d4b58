from pathlib import Path
from typing import Union

import cv2
import numpy as np

from kitti_dataset.errors import ImageDecodeError


def read_image(path: Union[str, Path], flags: int = cv2.IMREAD_UNCHANGED) -> np.ndarray:
    """Decode an image file with OpenCV. Colour images come back in BGR order."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image file not found: {path}")
    img = cv2.imread(str(path), flags)
    if img is None:
        raise ImageDecodeError(f"Failed to decode image: {path}")
    return img
