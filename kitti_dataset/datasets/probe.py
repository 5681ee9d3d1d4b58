from pathlib import Path
from typing import Optional

from kitti_dataset.utils.logger import get_logger

logger = get_logger(__name__)


def item_path(dir: Path, idx: int, width: int, ext: Optional[str] = None) -> Path:
    """Path of the idx-th item in dir, e.g. dir/000042.bin for width 6."""
    name = f"{idx:0{width}d}"
    if ext is not None:
        name = f"{name}.{ext}"
    return Path(dir) / name


def item_exists(dir: Path, idx: int, width: int, ext: Optional[str] = None) -> bool:
    return item_path(dir, idx, width, ext).exists()


def probe_max_frames(dir: Path, width: int, ext: Optional[str] = None) -> int:
    """
    Count the contiguously indexed items 0, 1, 2, ... in dir without listing it.

    Doubles the index until an item is missing, then binary searches between
    the last existing power of two and the first missing one. Indices are
    assumed to have no gaps; a missing directory counts as empty.
    """
    high = 1
    while item_exists(dir, high, width, ext):
        high *= 2
    low = high // 2

    # only possible when high == 1, i.e. item 0 is missing too
    if not item_exists(dir, low, width, ext):
        logger.debug("Probed %s: empty", dir)
        return 0

    while low + 1 < high:
        mid = (low + high) // 2
        if item_exists(dir, mid, width, ext):
            low = mid
        else:
            high = mid

    logger.debug("Probed %s: %d items", dir, high)
    return high
