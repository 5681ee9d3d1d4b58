# Copyright (c) 2020 Carnegie Mellon University, Wenshan Wang <wenshanw@andrew.cmu.edu>
# For License information please see the LICENSE file in the root directory.
# Cridit: Xiangwei Wang https://github.com/TimingSpace

import numpy as np
from scipy.spatial.transform import Rotation as R

EARTH_RADIUS = 6378137.0  # metres


def line2mat(line_data):
    """Convert KITTI pose format (12 values) to 4x4 homogeneous matrix.

    Args:
        line_data: Array of 12 values representing 3x4 transformation matrix

    Returns:
        4x4 homogeneous transformation matrix as np.ndarray
    """
    mat = np.eye(4)
    mat[0:3,:] = np.asarray(line_data).reshape(3,4)
    return mat


def mat2line(mat):
    """Flatten the top 3x4 block of a homogeneous matrix into 12 values."""
    return np.asarray(mat)[0:3,:].reshape(12)


def lat_to_scale(lat):
    """Mercator scale factor for a latitude given in degrees."""
    return np.cos(lat * np.pi / 180.0)


def latlon_to_mercator(lat, lon, scale):
    """Project lat/lon (degrees) to mercator x/y (metres) at the given scale."""
    mx = scale * lon * np.pi * EARTH_RADIUS / 180.0
    my = scale * EARTH_RADIUS * np.log(np.tan((90.0 + lat) * np.pi / 360.0))
    return mx, my


def oxts_to_poses(records):
    """Convert OXTS records to 4x4 poses, KITTI devkit convention.

    The mercator scale is fixed by the first record's latitude, rotation is
    Rz(yaw) @ Ry(pitch) @ Rx(roll), and every pose is expressed relative to
    the first one, so poses[0] is the identity.

    Args:
        records: sequence of Oxts

    Returns:
        (N, 4, 4) float64 array
    """
    records = list(records)
    if not records:
        return np.zeros((0, 4, 4))

    scale = lat_to_scale(records[0].lat)
    poses = np.zeros((len(records), 4, 4))
    for i, rec in enumerate(records):
        mx, my = latlon_to_mercator(rec.lat, rec.lon, scale)
        pose = np.eye(4)
        # extrinsic xyz == Rz @ Ry @ Rx
        pose[0:3,0:3] = R.from_euler("xyz", [rec.roll, rec.pitch, rec.yaw]).as_matrix()
        pose[0:3,3] = [mx, my, rec.alt]
        poses[i] = pose

    T0_inv = np.linalg.inv(poses[0])
    return T0_inv[None] @ poses
