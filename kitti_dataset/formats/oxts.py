"""
OXTS (GPS/IMU) navigation records, one space-separated row of 30 values per
timestamp. Units are those of the raw files: degrees for lat/lon, metres,
radians, m/s, m/s^2 and rad/s.
"""
from __future__ import annotations
from dataclasses import astuple, dataclass, fields
from pathlib import Path
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from kitti_dataset.errors import OxtsError, invalid_field

FLOAT_COLUMNS = [
    "lat", "lon", "alt",
    "roll", "pitch", "yaw",
    "vn", "ve", "vf", "vl", "vu",
    "ax", "ay", "az", "af", "al", "au",
    "wx", "wy", "wz", "wf", "wl", "wu",
    "posacc", "velacc",
]
COUNT_COLUMNS = ["navstat", "numsats"]
MODE_COLUMNS = ["posmode", "velmode", "orimode"]
COLUMNS = FLOAT_COLUMNS + COUNT_COLUMNS + MODE_COLUMNS


@dataclass
class Oxts:
    lat: float      # latitude (deg)
    lon: float      # longitude (deg)
    alt: float      # altitude (m)
    roll: float     # 0 = level, positive = left side up (rad)
    pitch: float    # 0 = level, positive = front down (rad)
    yaw: float      # 0 = east, positive = counter clockwise (rad)
    vn: float
    ve: float
    vf: float
    vl: float
    vu: float
    ax: float
    ay: float
    az: float
    af: float
    al: float
    au: float
    wx: float
    wy: float
    wz: float
    wf: float
    wl: float
    wu: float
    posacc: float
    velacc: float
    navstat: int
    numsats: int
    posmode: Optional[int]
    velmode: Optional[int]
    orimode: Optional[int]

    @classmethod
    def list_from_path(cls, path: Union[str, Path]) -> List[Oxts]:
        try:
            data = pd.read_csv(path, sep=r"\s+", header=None, dtype=np.float64, float_precision="round_trip")
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, ValueError) as e:
            raise OxtsError(f"{path}: {e}") from e

        if data.shape[1] != len(COLUMNS):
            raise OxtsError(f"{path}: expected {len(COLUMNS)} columns, got {data.shape[1]}")
        data.columns = COLUMNS
        return [cls._from_row(row, i, path) for i, row in enumerate(data.to_dict("records"))]

    @classmethod
    def _from_row(cls, row: dict, idx: int, source=None) -> Oxts:
        values = {c: float(row[c]) for c in FLOAT_COLUMNS}
        for c in COUNT_COLUMNS:
            v = row[c]
            if not float(v).is_integer() or v < 0:
                raise invalid_field(OxtsError, c, v, idx, source)
            values[c] = int(v)
        for c in MODE_COLUMNS:
            v = row[c]
            if not float(v).is_integer() or v < -1:
                raise invalid_field(OxtsError, c, v, idx, source)
            values[c] = None if v == -1 else int(v)
        return cls(**values)

    def to_row(self) -> list:
        return [
            -1 if v is None and f.name in MODE_COLUMNS else v
            for f, v in zip(fields(self), astuple(self))
        ]


def write_oxts(records: Iterable[Oxts], path: Union[str, Path]) -> None:
    with open(path, "w") as f:
        for record in records:
            f.write(" ".join(repr(v) for v in record.to_row()) + "\n")
