"""
Calibration files.

Every calibration type is described by a table of (label, field, arity)
entries. One line per entry, in table order: the label token followed by
`arity` floats. Arity 12 is a 3x4 projection matrix, arity 9 a 3x3
rectification matrix.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from io import StringIO
from pathlib import Path
from typing import ClassVar, Dict, Iterable, Iterator, Tuple, Union

import numpy as np

from kitti_dataset.errors import invalid_calibration

CalibField = Tuple[str, str, int]

SHAPES = {12: (3, 4), 9: (3, 3)}


def _split_lines(lines: Iterable[str], source=None) -> Iterator[Tuple[str, list]]:
    for line in lines:
        line = line.strip()
        tokens = line.split()
        if not tokens:
            raise invalid_calibration("unexpected empty line", source)
        label, *raw_values = tokens
        try:
            values = [float(tk) for tk in raw_values]
        except ValueError:
            raise invalid_calibration(f'invalid token in line "{line}"', source) from None
        yield label, values


def parse_calibration(lines: Iterable[str], table: Iterable[CalibField], source=None) -> Dict[str, np.ndarray]:
    """Read one line per table entry and return field name -> float32 matrix."""
    parsed = _split_lines(lines, source)
    out = {}
    for label, name, arity in table:
        entry = next(parsed, None)
        if entry is None:
            raise invalid_calibration("unexpected end of file in calib config", source)
        got_label, values = entry
        if got_label != label:
            raise invalid_calibration(f'expect prefix "{label}", but get "{got_label}"', source)
        if len(values) != arity:
            raise invalid_calibration(f"expect {arity} values, but get {len(values)} values", source)
        out[name] = np.asarray(values, dtype=np.float32).reshape(SHAPES[arity])
    return out


def format_calibration(values: Dict[str, np.ndarray], table: Iterable[CalibField]) -> str:
    lines = []
    for label, name, arity in table:
        flat = np.asarray(values[name], dtype=np.float32).reshape(-1)
        if flat.size != arity:
            raise ValueError(f"{name} has {flat.size} values, expected {arity}")
        lines.append(" ".join([label] + [f"{v:.12e}" for v in flat]))
    return "\n".join(lines) + "\n"


class _Calibration:
    FIELDS: ClassVar[Tuple[CalibField, ...]] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[str], source=None):
        return cls(**parse_calibration(lines, cls.FIELDS, source))

    @classmethod
    def from_path(cls, path: Union[str, Path]):
        with open(path, "r") as f:
            return cls.from_lines(f, source=path)

    @classmethod
    def from_str(cls, text: str):
        return cls.from_lines(StringIO(text))

    def to_string(self) -> str:
        return format_calibration({f.name: getattr(self, f.name) for f in fields(self)}, self.FIELDS)

    def write(self, path: Union[str, Path]) -> None:
        with open(path, "w") as f:
            f.write(self.to_string())

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return all(np.array_equal(getattr(self, f.name), getattr(other, f.name)) for f in fields(self))


@dataclass(eq=False)
class ObjectCalibration(_Calibration):
    p0: np.ndarray
    p1: np.ndarray
    p2: np.ndarray
    p3: np.ndarray
    r0_rect: np.ndarray
    tr_velo_to_cam: np.ndarray
    tr_imu_to_velo: np.ndarray

    FIELDS: ClassVar[Tuple[CalibField, ...]] = (
        ("P0:", "p0", 12),
        ("P1:", "p1", 12),
        ("P2:", "p2", 12),
        ("P3:", "p3", 12),
        ("R0_rect:", "r0_rect", 9),
        ("Tr_velo_to_cam:", "tr_velo_to_cam", 12),
        ("Tr_imu_to_velo:", "tr_imu_to_velo", 12),
    )


@dataclass(eq=False)
class TrackingCalibration(_Calibration):
    p0: np.ndarray
    p1: np.ndarray
    p2: np.ndarray
    p3: np.ndarray
    r0_rect: np.ndarray
    tr_velo_to_cam: np.ndarray
    tr_imu_to_velo: np.ndarray

    # tracking files drop the colon on the last three labels
    FIELDS: ClassVar[Tuple[CalibField, ...]] = (
        ("P0:", "p0", 12),
        ("P1:", "p1", 12),
        ("P2:", "p2", 12),
        ("P3:", "p3", 12),
        ("R_rect", "r0_rect", 9),
        ("Tr_velo_cam", "tr_velo_to_cam", 12),
        ("Tr_imu_velo", "tr_imu_to_velo", 12),
    )


@dataclass(eq=False)
class OdometryCalibration(_Calibration):
    p0: np.ndarray
    p1: np.ndarray
    p2: np.ndarray
    p3: np.ndarray
    tr: np.ndarray

    FIELDS: ClassVar[Tuple[CalibField, ...]] = (
        ("P0:", "p0", 12),
        ("P1:", "p1", 12),
        ("P2:", "p2", 12),
        ("P3:", "p3", 12),
        ("Tr:", "tr", 12),
    )
