from dataclasses import replace

import numpy as np
from scipy.spatial.transform import Rotation as R

from conftest import OXTS_LINES
from kitti_dataset.formats.oxts import Oxts
from kitti_dataset.utils.transformations import (
    EARTH_RADIUS,
    lat_to_scale,
    latlon_to_mercator,
    line2mat,
    mat2line,
    oxts_to_poses,
)


def load_records(tmp_path):
    path = tmp_path / "0000.txt"
    path.write_text(OXTS_LINES)
    return Oxts.list_from_path(path)


def test_line2mat_mat2line():
    values = np.arange(12, dtype=np.float64)
    mat = line2mat(values)
    assert mat.shape == (4, 4)
    assert np.array_equal(mat[3], [0, 0, 0, 1])
    assert np.array_equal(mat2line(mat), values)


def test_mercator_at_equator():
    scale = lat_to_scale(0.0)
    assert scale == 1.0
    mx, my = latlon_to_mercator(0.0, 1.0, scale)
    assert np.isclose(mx, np.pi * EARTH_RADIUS / 180.0)
    assert np.isclose(my, 0.0)


def test_first_pose_is_identity(tmp_path):
    poses = oxts_to_poses(load_records(tmp_path))
    assert poses.shape == (2, 4, 4)
    assert np.allclose(poses[0], np.eye(4))
    assert np.allclose(poses[1][3], [0, 0, 0, 1])
    # the two records are a few decimetres apart
    assert 0.1 < np.linalg.norm(poses[1][:3, 3]) < 2.0


def test_rotation_order_is_yaw_pitch_roll(tmp_path):
    first = load_records(tmp_path)[0]
    origin = replace(first, roll=0.0, pitch=0.0, yaw=0.0)
    turned = replace(first, roll=0.1, pitch=-0.2, yaw=0.3)

    poses = oxts_to_poses([origin, turned])

    rz = R.from_euler("z", 0.3).as_matrix()
    ry = R.from_euler("y", -0.2).as_matrix()
    rx = R.from_euler("x", 0.1).as_matrix()
    assert np.allclose(poses[1][:3, :3], rz @ ry @ rx)
    assert np.allclose(poses[1][:3, 3], 0.0)


def test_empty_records():
    assert oxts_to_poses([]).shape == (0, 4, 4)
