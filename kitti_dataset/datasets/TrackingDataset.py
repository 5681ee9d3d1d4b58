from dataclasses import dataclass
from typing import Optional

from kitti_dataset.datasets.Dataset import Dataset, FrameView
from kitti_dataset.datasets.probe import probe_max_frames
from kitti_dataset.datasets.schema import TrackingDataKind
from kitti_dataset.datasets.Sequence import SEQ_ITEM_WIDTH


@dataclass(frozen=True)
class TrackingFrameView(FrameView):
    def seq_len(self) -> Optional[int]:
        """Length of this frame's sub-sequence, probed from the first sequence key."""
        for key, kind in self.dataset.keys():
            if kind.is_sequence:
                seq_dir = self.dataset.sample_path(key, kind, self.frame_idx)
                return probe_max_frames(seq_dir, SEQ_ITEM_WIDTH, kind.item_ext)
        return None


class TrackingDataset(Dataset):
    """
    KITTI tracking layout. Each frame is a drive; image and velodyne keys hold
    one directory per frame with the drive's scans inside.
    root_dir/
    |--- image_02/
    |    |--- 0000/
    |    |    |--- 000000.png
    |    |    |___ ...
    |    |___ ...
    |--- velodyne/
    |    |--- 0000/
    |    |    |--- 000000.bin
    |--- calib/
    |    |--- 0000.txt
    |--- label_02/
    |    |--- 0000.txt
    |--- oxts/
    |    |--- 0000.txt
    |___ ...
    """

    KIND = TrackingDataKind
    FRAME_WIDTH = 4

    def _make_frame(self, frame_idx: int) -> TrackingFrameView:
        return TrackingFrameView(dataset=self, frame_idx=frame_idx)
