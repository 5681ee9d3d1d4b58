from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Union

import numpy as np

from kitti_dataset.datasets.lazy import LazySequence
from kitti_dataset.datasets.probe import item_path, probe_max_frames
from kitti_dataset.formats.image import read_image
from kitti_dataset.formats.point_cloud import PointCloud

SEQ_ITEM_WIDTH = 6


@dataclass(frozen=True)
class SequenceHandle(ABC):
    """
    Items of one tracking frame directory, e.g. image_02/0003/000000.png ...

    The length is probed once when the handle is opened; later changes to the
    directory are not seen.
    """
    dir: Path
    seq_len: int

    ITEM_EXT: ClassVar[str] = ""

    @classmethod
    def open(cls, dir: Union[str, Path]):
        dir = Path(dir)
        return cls(dir=dir, seq_len=probe_max_frames(dir, SEQ_ITEM_WIDTH, cls.ITEM_EXT))

    def __len__(self):
        return self.seq_len

    def item_path(self, seq_idx: int) -> Path:
        return item_path(self.dir, seq_idx, SEQ_ITEM_WIDTH, self.ITEM_EXT)

    def get(self, seq_idx: int):
        if not 0 <= seq_idx < self.seq_len:
            return None
        return self._load(self.item_path(seq_idx))

    def iter(self) -> LazySequence:
        return LazySequence(range(self.seq_len), lambda i: self._load(self.item_path(i)))

    def __iter__(self):
        return iter(self.iter())

    @abstractmethod
    def _load(self, path: Path):
        pass


@dataclass(frozen=True)
class ImageSequence(SequenceHandle):
    ITEM_EXT: ClassVar[str] = "png"

    def get(self, seq_idx: int) -> Optional[np.ndarray]:
        return super().get(seq_idx)

    def _load(self, path: Path) -> np.ndarray:
        return read_image(path)


@dataclass(frozen=True)
class VelodyneSequence(SequenceHandle):
    ITEM_EXT: ClassVar[str] = "bin"

    def get(self, seq_idx: int) -> Optional[PointCloud]:
        return super().get(seq_idx)

    def _load(self, path: Path) -> PointCloud:
        return PointCloud.from_path(path)
