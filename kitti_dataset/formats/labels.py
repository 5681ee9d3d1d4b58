"""
Object and tracking label files.

Both are headerless, space-separated rows. Object labels have 15 columns
(plus an optional detection score), tracking labels prepend the frame index
and track id. A value of -1 marks an unset truncation, occlusion or track id.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Union

import pandas as pd

from kitti_dataset.errors import LabelError, invalid_field

BOX_COLUMNS = [
    "truncation", "occlusion", "alpha",
    "xmin", "ymin", "xmax", "ymax",
    "height", "width", "length",
    "x", "y", "z",
    "rotation_y",
]
OBJECT_COLUMNS = ["class"] + BOX_COLUMNS
TRACKING_COLUMNS = ["frame", "track_id", "class"] + BOX_COLUMNS


class Occlusion(IntEnum):
    FULLY_VISIBLE = 0
    PARTLY_VISIBLE = 1
    LARGELY_OCCLUDED = 2
    UNKNOWN = 3


class ObjectClass(str, Enum):
    CAR = "Car"
    VAN = "Van"
    TRUCK = "Truck"
    PEDESTRIAN = "Pedestrian"
    PERSON_SITTING = "Person_sitting"
    CYCLIST = "Cyclist"
    TRAM = "Tram"
    MISC = "Misc"
    DONT_CARE = "DontCare"


class BoundingBox(NamedTuple):
    xmin: float
    ymin: float
    xmax: float
    ymax: float


class Extents(NamedTuple):
    height: float
    width: float
    length: float


class Location(NamedTuple):
    x: float
    y: float
    z: float


@dataclass
class ObjectLabel:
    class_name: ObjectClass
    truncation: Optional[float]
    occlusion: Optional[Occlusion]
    alpha: float
    bbox: BoundingBox
    extents: Extents
    location: Location
    rotation_y: float
    score: Optional[float] = None

    @classmethod
    def list_from_path(cls, path: Union[str, Path]) -> List[ObjectLabel]:
        df = read_rows(path, OBJECT_COLUMNS, optional=["score"])
        return [cls._from_row(row, i, path) for i, row in enumerate(df.to_dict("records"))]

    @classmethod
    def _from_row(cls, row: dict, idx: int, source=None) -> ObjectLabel:
        try:
            class_name = ObjectClass(row["class"])
        except ValueError:
            raise invalid_field(LabelError, "class", row["class"], idx, source) from None
        score = row.get("score")
        return cls(
            class_name=class_name,
            score=None if score is None else _float(score, "score", idx, source),
            **_box_fields(row, idx, source),
        )

    def to_row(self) -> dict:
        row = {"class": self.class_name.value, **_box_row(self)}
        if self.score is not None:
            row["score"] = self.score
        return row


@dataclass
class TrackingLabel:
    frame: int
    track_id: Optional[int]
    class_name: str
    truncation: Optional[float]
    occlusion: Optional[Occlusion]
    alpha: float
    bbox: BoundingBox
    extents: Extents
    location: Location
    rotation_y: float
    score: Optional[float] = None

    @classmethod
    def list_from_path(cls, path: Union[str, Path]) -> List[TrackingLabel]:
        df = read_rows(path, TRACKING_COLUMNS, optional=["score"])
        return [cls._from_row(row, i, path) for i, row in enumerate(df.to_dict("records"))]

    @classmethod
    def _from_row(cls, row: dict, idx: int, source=None) -> TrackingLabel:
        frame = _integral(row["frame"], "frame", idx, source)
        if frame < 0:
            raise invalid_field(LabelError, "frame", row["frame"], idx, source)
        track_id = _integral(row["track_id"], "track_id", idx, source)
        score = row.get("score")
        return cls(
            frame=frame,
            track_id=track_id if track_id >= 0 else None,
            class_name=str(row["class"]),
            score=None if score is None else _float(score, "score", idx, source),
            **_box_fields(row, idx, source),
        )

    def to_row(self) -> dict:
        row = {
            "frame": self.frame,
            "track_id": -1 if self.track_id is None else self.track_id,
            "class": self.class_name,
            **_box_row(self),
        }
        if self.score is not None:
            row["score"] = self.score
        return row


def read_rows(path: Union[str, Path], columns: List[str], optional: Iterable[str] = ()) -> pd.DataFrame:
    """
    Read a headerless space-separated file into a DataFrame named by `columns`.

    Trailing `optional` columns are accepted when present. An empty file gives
    an empty frame.
    """
    optional = list(optional)
    try:
        df = pd.read_csv(
            path,
            sep=r"\s+",
            header=None,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=columns)
    except pd.errors.ParserError as e:
        raise LabelError(f"{path}: {e}") from e

    n_cols = df.shape[1]
    if not len(columns) <= n_cols <= len(columns) + len(optional):
        raise LabelError(f"{path}: expected {len(columns)} columns, got {n_cols}")
    df.columns = columns + optional[: n_cols - len(columns)]
    return df


def write_labels(labels: Iterable[Union[ObjectLabel, TrackingLabel]], path: Union[str, Path]) -> None:
    rows = [label.to_row() for label in labels]
    if any("score" in r for r in rows) and not all("score" in r for r in rows):
        raise ValueError("Either all labels or none must carry a score")
    with open(path, "w") as f:
        if rows:
            pd.DataFrame(rows).to_csv(f, sep=" ", header=False, index=False)


def _float(value, column: str, idx: int, source) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise invalid_field(LabelError, column, value, idx, source) from None


def _integral(value, column: str, idx: int, source) -> int:
    fval = _float(value, column, idx, source)
    if not fval.is_integer():
        raise invalid_field(LabelError, column, value, idx, source)
    return int(fval)


def _box_fields(row: dict, idx: int, source) -> dict:
    values = {c: _float(row[c], c, idx, source) for c in BOX_COLUMNS}

    truncation = values["truncation"]
    if truncation < 0:
        if truncation != -1:
            raise invalid_field(LabelError, "truncation", row["truncation"], idx, source)
        truncation = None

    occlusion = _integral(row["occlusion"], "occlusion", idx, source)
    if occlusion == -1:
        occlusion = None
    else:
        try:
            occlusion = Occlusion(occlusion)
        except ValueError:
            raise invalid_field(LabelError, "occlusion", row["occlusion"], idx, source) from None

    return dict(
        truncation=truncation,
        occlusion=occlusion,
        alpha=values["alpha"],
        bbox=BoundingBox(values["xmin"], values["ymin"], values["xmax"], values["ymax"]),
        extents=Extents(values["height"], values["width"], values["length"]),
        location=Location(values["x"], values["y"], values["z"]),
        rotation_y=values["rotation_y"],
    )


def _box_row(label) -> dict:
    return {
        "truncation": -1.0 if label.truncation is None else label.truncation,
        "occlusion": -1 if label.occlusion is None else int(label.occlusion),
        "alpha": label.alpha,
        **label.bbox._asdict(),
        **label.extents._asdict(),
        **label.location._asdict(),
        "rotation_y": label.rotation_y,
    }
