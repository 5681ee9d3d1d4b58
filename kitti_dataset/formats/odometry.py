from pathlib import Path
from typing import Union

import numpy as np

from kitti_dataset.utils.transformations import line2mat, mat2line


def load_poses(path: Union[str, Path]) -> np.ndarray:
    """
    Load KITTI odometry ground truth poses.

    Each line contains 12 values representing a 3x4 pose matrix.
    Returns an (N, 4, 4) float64 array.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pose file not found: {path}")

    poses = []
    with open(path, "r") as f:
        for i, line in enumerate(f):
            if not line.strip():
                continue
            values = line.split()
            if len(values) != 12:
                raise ValueError(
                    f"Line {i} in {path} has {len(values)} values, expected 12"
                )
            try:
                poses.append(line2mat(np.array(values, dtype=np.float64)))
            except ValueError:
                raise ValueError(f"Line {i} in {path} contains a non-numeric value") from None

    if not poses:
        return np.zeros((0, 4, 4))
    return np.stack(poses, axis=0).astype(np.float64)


def write_poses(poses: np.ndarray, path: Union[str, Path]) -> None:
    poses = np.asarray(poses)
    if poses.ndim != 3 or poses.shape[1:] not in ((4, 4), (3, 4)):
        raise ValueError("poses must be of shape (N,4,4) or (N,3,4)")
    with open(path, "w") as f:
        for pose in poses:
            f.write(" ".join(f"{v:.12e}" for v in mat2line(pose)) + "\n")
