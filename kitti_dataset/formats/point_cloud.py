"""
Velodyne point clouds.

A scan file is a flat stream of 16-byte records, each four little-endian
float32 values (x, y, z, reflection). There is no header and no record count,
so the end of the data is only known when a read at a record boundary comes
back empty.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Iterator, List, NamedTuple, Optional, Union
import struct

import numpy as np

from kitti_dataset.errors import truncated_record

FIELD_SIZE = 4
RECORD_SIZE = 4 * FIELD_SIZE

_F32 = struct.Struct("<f")
_TAIL = struct.Struct("<3f")  # y, z, reflection
_RECORD = struct.Struct("<4f")


class Point(NamedTuple):
    x: float
    y: float
    z: float
    reflection: float

    def xyz(self) -> tuple:
        return (self.x, self.y, self.z)

    def xyzr(self) -> tuple:
        return (self.x, self.y, self.z, self.reflection)


def _read_exact(reader: BinaryIO, size: int, record_idx: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = reader.read(size - len(buf))
        if not chunk:
            raise truncated_record(record_idx, size, len(buf))
        buf += chunk
    return bytes(buf)


def _try_read_f32(reader: BinaryIO, record_idx: int) -> Optional[float]:
    """Read the first field of a record, or None on a clean end of stream."""
    head = reader.read(FIELD_SIZE)
    if not head:
        return None
    if len(head) < FIELD_SIZE:
        head += _read_exact(reader, FIELD_SIZE - len(head), record_idx)
    return _F32.unpack(head)[0]


@dataclass
class PointCloud:
    points: List[Point] = field(default_factory=list)

    def __len__(self):
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> PointCloud:
        """
        Decode records until the stream ends at a record boundary.

        Only the first field of a record may come back short from a single
        read; the remaining bytes of that field and the other three fields
        must then be available, otherwise TruncatedRecordError is raised and
        nothing decoded so far is returned.
        """
        points = []
        while True:
            x = _try_read_f32(reader, len(points))
            if x is None:
                break
            y, z, reflection = _TAIL.unpack(_read_exact(reader, 3 * FIELD_SIZE, len(points)))
            points.append(Point(x, y, z, reflection))
        return cls(points)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> PointCloud:
        with open(path, "rb") as f:
            return cls.from_reader(f)

    @classmethod
    def from_bytes(cls, data: bytes) -> PointCloud:
        return cls.from_reader(BytesIO(data))

    @classmethod
    def from_array(cls, array: np.ndarray) -> PointCloud:
        array = np.asarray(array, dtype=np.float32)
        if array.ndim != 2 or array.shape[1] != 4:
            raise ValueError(f"Expected an (N, 4) array, got shape {array.shape}")
        return cls([Point(*map(float, row)) for row in array])

    def to_array(self) -> np.ndarray:
        """(N, 4) float32 array of x, y, z, reflection."""
        if not self.points:
            return np.zeros((0, 4), dtype=np.float32)
        return np.asarray(self.points, dtype=np.float32)

    def to_bytes(self) -> bytes:
        return b"".join(_RECORD.pack(*p) for p in self.points)

    def write(self, path: Union[str, Path]) -> None:
        with open(path, "wb") as f:
            f.write(self.to_bytes())
