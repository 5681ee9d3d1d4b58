"""
Data kinds of the two dataset layouts and the directory scan that maps
subdirectory names to kinds.

Each kind carries its naming rule as data: the directory-name prefix it is
recognised by, the extension of its per-frame file (None when a frame is a
directory) and, for sequence kinds, the extension of the items inside.
"""
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Type, TypeVar

from kitti_dataset.utils.logger import get_logger

logger = get_logger(__name__)

K = TypeVar("K", bound=Enum)


class ObjectDataKind(Enum):
    IMAGE = ("image", "png")
    VELODYNE = ("velodyne", "bin")
    CALIB = ("calib", "txt")
    LABEL = ("label", "txt")

    def __init__(self, prefix: str, file_ext: str):
        self.prefix = prefix
        self.file_ext = file_ext


class TrackingDataKind(Enum):
    IMAGE_SEQ = ("image", None, "png")
    VELODYNE_SEQ = ("velodyne", None, "bin")
    CALIB = ("calib", "txt", None)
    LABEL = ("label", "txt", None)
    ODOMETRY = ("oxts", "txt", None)

    def __init__(self, prefix: str, file_ext: Optional[str], item_ext: Optional[str]):
        self.prefix = prefix
        self.file_ext = file_ext
        self.item_ext = item_ext

    @property
    def is_sequence(self) -> bool:
        return self.item_ext is not None


def classify(name: str, kinds: Type[K]) -> Optional[K]:
    for kind in kinds:
        if name.startswith(kind.prefix):
            return kind
    return None


def detect_keys(root: Path, kinds: Type[K]) -> Mapping[str, K]:
    """
    Map each recognised subdirectory name of root to its kind.

    Listing root itself may raise OSError. Entries that are not directories,
    cannot be resolved, or match no prefix are skipped.
    """
    sub_dirs = {}
    for entry in Path(root).iterdir():
        try:
            if not entry.resolve().is_dir():
                continue
        # symlink loops raise RuntimeError from resolve() before Python 3.13
        except (OSError, RuntimeError) as e:
            logger.debug("Skipping unreadable entry %s: %s", entry, e)
            continue

        kind = classify(entry.name, kinds)
        if kind is None:
            logger.debug("Skipping unrecognised directory %s", entry)
            continue
        sub_dirs[entry.name] = kind

    return MappingProxyType(sub_dirs)
