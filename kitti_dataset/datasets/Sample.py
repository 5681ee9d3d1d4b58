from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Union

from kitti_dataset.datasets.schema import ObjectDataKind, TrackingDataKind
from kitti_dataset.datasets.Sequence import ImageSequence, VelodyneSequence
from kitti_dataset.formats.calibration import ObjectCalibration, TrackingCalibration
from kitti_dataset.formats.image import read_image
from kitti_dataset.formats.labels import ObjectLabel, TrackingLabel
from kitti_dataset.formats.oxts import Oxts
from kitti_dataset.formats.point_cloud import PointCloud

DataKind = Union[ObjectDataKind, TrackingDataKind]

DECODERS: Dict[DataKind, Callable[[Path], Any]] = {
    ObjectDataKind.IMAGE: read_image,
    ObjectDataKind.VELODYNE: PointCloud.from_path,
    ObjectDataKind.CALIB: ObjectCalibration.from_path,
    ObjectDataKind.LABEL: ObjectLabel.list_from_path,
    # sequence kinds only probe their directory, items decode on access
    TrackingDataKind.IMAGE_SEQ: ImageSequence.open,
    TrackingDataKind.VELODYNE_SEQ: VelodyneSequence.open,
    TrackingDataKind.CALIB: TrackingCalibration.from_path,
    TrackingDataKind.LABEL: TrackingLabel.list_from_path,
    TrackingDataKind.ODOMETRY: Oxts.list_from_path,
}


@dataclass(frozen=True)
class SampleData:
    kind: DataKind
    value: Any


@dataclass(frozen=True)
class Sample:
    kind: DataKind
    path: Path

    def data(self) -> SampleData:
        return SampleData(kind=self.kind, value=DECODERS[self.kind](self.path))
