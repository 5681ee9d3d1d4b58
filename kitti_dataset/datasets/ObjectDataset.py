from kitti_dataset.datasets.Dataset import Dataset, FrameView
from kitti_dataset.datasets.schema import ObjectDataKind


class ObjectDataset(Dataset):
    """
    KITTI object detection layout:
    root_dir/
    |--- image_2/
    |    |--- 000000.png
    |    |___ ...
    |--- velodyne/
    |    |--- 000000.bin
    |    |___ ...
    |--- calib/
    |    |--- 000000.txt
    |--- label_2/
    |    |--- 000000.txt
    |___ ...
    """

    KIND = ObjectDataKind
    FRAME_WIDTH = 6

    def _make_frame(self, frame_idx: int) -> FrameView:
        return FrameView(dataset=self, frame_idx=frame_idx)
