from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, Iterator, Mapping, Optional, Tuple, Type, Union

from kitti_dataset.datasets.lazy import LazySequence
from kitti_dataset.datasets.probe import item_path, probe_max_frames
from kitti_dataset.datasets.Sample import Sample
from kitti_dataset.datasets.schema import detect_keys
from kitti_dataset.utils.logger import get_logger

logger = get_logger(__name__)


class Dataset(ABC):
    """
    Index over a dataset root whose subdirectories hold one file (or
    directory) per frame, named by zero-padded frame index.

    Opening scans the root once and probes one subdirectory for the frame
    count. All other addressing only builds paths; nothing is read until
    Sample.data() is called.
    """

    KIND: ClassVar[Type[Enum]]
    FRAME_WIDTH: ClassVar[int]

    def __init__(self, root_dir: Path, num_frames: int, sub_dirs: Mapping[str, Enum]):
        self._root_dir = Path(root_dir)
        self._num_frames = num_frames
        self._sub_dirs = sub_dirs

    @classmethod
    def open(cls, root_dir: Union[str, Path]):
        root_dir = Path(root_dir)
        sub_dirs = detect_keys(root_dir, cls.KIND)

        # frame count comes from whichever key the mapping yields first;
        # other keys are assumed to match and are not checked
        first = next(iter(sub_dirs.items()), None)
        if first is None:
            num_frames = 0
        else:
            key, kind = first
            num_frames = probe_max_frames(root_dir / key, cls.FRAME_WIDTH, kind.file_ext)

        logger.info(
            "Opened %s at %s: %d frames, keys: %s",
            cls.__name__, root_dir, num_frames, ", ".join(sorted(sub_dirs)) or "none",
        )
        return cls(root_dir, num_frames, sub_dirs)

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    @property
    def num_frames(self) -> int:
        return self._num_frames

    def __len__(self):
        return self._num_frames

    def __repr__(self):
        return f"{type(self).__name__}({str(self._root_dir)!r}, num_frames={self._num_frames})"

    def sample_path(self, key: str, kind: Enum, frame_idx: int) -> Path:
        return item_path(self._root_dir / key, frame_idx, self.FRAME_WIDTH, kind.file_ext)

    def kind_of(self, key: str) -> Optional[Enum]:
        return self._sub_dirs.get(key)

    @abstractmethod
    def _make_frame(self, frame_idx: int) -> FrameView:
        pass

    def frame(self, frame_idx: int) -> Optional[FrameView]:
        if not 0 <= frame_idx < self._num_frames:
            return None
        return self._make_frame(frame_idx)

    def frame_iter(self) -> LazySequence:
        return LazySequence(range(self._num_frames), self._make_frame)

    def key(self, key: str) -> Optional[KeyView]:
        kind = self._sub_dirs.get(key)
        if kind is None:
            return None
        return KeyView(dataset=self, key=key, kind=kind)

    def keys(self) -> Iterator[Tuple[str, Enum]]:
        return iter(self._sub_dirs.items())


@dataclass(frozen=True)
class FrameView:
    dataset: Dataset
    frame_idx: int

    def key(self, key: str) -> Optional[Sample]:
        kind = self.dataset.kind_of(key)
        if kind is None:
            return None
        return Sample(kind=kind, path=self.dataset.sample_path(key, kind, self.frame_idx))

    def sample_iter(self) -> Iterator[Sample]:
        for key, kind in self.dataset.keys():
            yield Sample(kind=kind, path=self.dataset.sample_path(key, kind, self.frame_idx))

    def samples(self) -> Dict[str, Sample]:
        return {key: self.key(key) for key, _ in self.dataset.keys()}


@dataclass(frozen=True)
class KeyView:
    dataset: Dataset
    key: str
    kind: Enum

    def frame(self, frame_idx: int) -> Optional[Sample]:
        if not 0 <= frame_idx < self.dataset.num_frames:
            return None
        return self._sample(frame_idx)

    def sample_iter(self) -> LazySequence:
        return LazySequence(range(self.dataset.num_frames), self._sample)

    def _sample(self, frame_idx: int) -> Sample:
        return Sample(kind=self.kind, path=self.dataset.sample_path(self.key, self.kind, frame_idx))
