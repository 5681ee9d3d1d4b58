import logging
from pathlib import Path

import cv2
import numpy as np
import pytest

OBJECT_CALIB = """\
P0: 7.070493000000e+02 0.000000000000e+00 6.040814000000e+02 0.000000000000e+00 0.000000000000e+00 7.070493000000e+02 1.805066000000e+02 0.000000000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 0.000000000000e+00
P1: 7.070493000000e+02 0.000000000000e+00 6.040814000000e+02 -3.797842000000e+02 0.000000000000e+00 7.070493000000e+02 1.805066000000e+02 0.000000000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 0.000000000000e+00
P2: 7.070493000000e+02 0.000000000000e+00 6.040814000000e+02 4.575831000000e+01 0.000000000000e+00 7.070493000000e+02 1.805066000000e+02 -3.454157000000e-01 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 4.981016000000e-03
P3: 7.070493000000e+02 0.000000000000e+00 6.040814000000e+02 -3.341081000000e+02 0.000000000000e+00 7.070493000000e+02 1.805066000000e+02 2.330660000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 3.201153000000e-03
R0_rect: 9.999128000000e-01 1.009263000000e-02 -8.511932000000e-03 -1.012729000000e-02 9.999406000000e-01 -4.037671000000e-03 8.470675000000e-03 4.123522000000e-03 9.999556000000e-01
Tr_velo_to_cam: 6.927964000000e-03 -9.999722000000e-01 -2.757829000000e-03 -2.457729000000e-02 -1.162982000000e-03 2.749836000000e-03 -9.999955000000e-01 -6.127237000000e-02 9.999753000000e-01 6.931141000000e-03 -1.143899000000e-03 -3.321029000000e-01
Tr_imu_to_velo: 9.999976000000e-01 7.553071000000e-04 -2.035826000000e-03 -8.086759000000e-01 -7.854027000000e-04 9.998898000000e-01 -1.482298000000e-02 3.195559000000e-01 2.024406000000e-03 1.482454000000e-02 9.998881000000e-01 -7.997231000000e-01

"""

TRACKING_CALIB = """\
P0: 7.215377000000e+02 0.000000000000e+00 6.095593000000e+02 0.000000000000e+00 0.000000000000e+00 7.215377000000e+02 1.728540000000e+02 0.000000000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 0.000000000000e+00
P1: 7.215377000000e+02 0.000000000000e+00 6.095593000000e+02 -3.875744000000e+02 0.000000000000e+00 7.215377000000e+02 1.728540000000e+02 0.000000000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 0.000000000000e+00
P2: 7.215377000000e+02 0.000000000000e+00 6.095593000000e+02 4.485728000000e+01 0.000000000000e+00 7.215377000000e+02 1.728540000000e+02 2.163791000000e-01 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 2.745884000000e-03
P3: 7.215377000000e+02 0.000000000000e+00 6.095593000000e+02 -3.395242000000e+02 0.000000000000e+00 7.215377000000e+02 1.728540000000e+02 2.199936000000e+00 0.000000000000e+00 0.000000000000e+00 1.000000000000e+00 2.729905000000e-03
R_rect 9.999239000000e-01 9.837760000000e-03 -7.445048000000e-03 -9.869795000000e-03 9.999421000000e-01 -4.278459000000e-03 7.402527000000e-03 4.351614000000e-03 9.999631000000e-01
Tr_velo_cam 7.533745000000e-03 -9.999714000000e-01 -6.166020000000e-04 -4.069766000000e-03 1.480249000000e-02 7.280733000000e-04 -9.998902000000e-01 -7.631618000000e-02 9.998621000000e-01 7.523790000000e-03 1.480755000000e-02 -2.717806000000e-01
Tr_imu_velo 9.999976000000e-01 7.553071000000e-04 -2.035826000000e-03 -8.086759000000e-01 -7.854027000000e-04 9.998898000000e-01 -1.482298000000e-02 3.195559000000e-01 2.024406000000e-03 1.482454000000e-02 9.998881000000e-01 -7.997231000000e-01
"""

OBJECT_LABEL = """\
Car 0.00 0 -1.58 587.01 173.33 614.12 200.12 1.65 1.67 3.64 -0.65 1.71 46.70 -1.59
Cyclist 0.00 0 -2.46 665.45 160.00 717.93 217.99 1.72 0.47 1.65 2.45 1.35 22.10 -2.35
Pedestrian 0.00 2 0.21 423.17 173.67 433.17 224.03 1.60 0.38 0.30 -5.87 1.63 23.11 -0.03
"""

TRACKING_LABEL = """\
0 -1 DontCare -1 -1 -10.000000 219.310000 188.490000 245.500000 218.560000 -1000.000000 -1000.000000 -1000.000000 -10.000000 -1.000000 -1.000000 -1.000000
0 0 Van 0 0 -1.793451 296.744956 161.752147 455.226042 292.372804 2.000000 1.823255 4.433886 -4.552284 1.858523 13.410495 -2.115488
1 0 Van 0 0 -1.799056 294.898777 156.024256 452.199718 284.621269 2.000000 1.823255 4.433886 -4.650955 1.766774 13.581085 -2.121565
"""

OXTS_LINES = """\
49.015003823272 8.4342971002335 116.43032836914 0.035752 0.00903 -2.6087069803847 -7.2424766009407 -9.0671290280215 11.605280302646 0.0031670690509951 0.07839542939429 -0.024011876025846 -0.14211784487236 9.8119917402519 -0.010941891045716 -0.13997698001553 9.8135758876502 -0.0055567408306036 -0.0033669111186448 -0.015094522228862 -0.005571224221779 -0.0033390016402957 -0.015098700055027 0.54627389132232 0.032310686965564 4 11 6 6 6
49.015009285201 8.4342857448267 116.45378112793 0.035716 0.008946 -2.6094255476381 -7.2372656848154 -9.0748052006838 11.609389627232 0.0020271286713658 0.080419553398669 -0.035092432230712 -0.18063036547713 9.8046618665197 -0.021766924357233 -0.17862574709061 9.8063102981618 -0.0049286023378802 -0.0028262733011787 -0.014549015624584 -0.0048980768011186 -0.0027653082214488 -0.014572939693592 0.54627389132232 0.032310686965564 4 11 6 6 -1
"""


def make_points(n: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-50.0, 50.0, size=(n, 4)).astype(np.float32)


def write_points(path: Path, points: np.ndarray) -> None:
    path.write_bytes(np.asarray(points, dtype="<f4").tobytes())


def write_png(path: Path, value: int = 0) -> None:
    img = np.full((4, 6, 3), value, dtype=np.uint8)
    assert cv2.imwrite(str(path), img)


def build_object_dataset(root: Path, num_frames: int) -> Path:
    for name in ("image_2", "velodyne", "calib", "label_2", "readme"):
        (root / name).mkdir(parents=True)
    (root / "image_notes.txt").write_text("not a key\n")

    for idx in range(num_frames):
        write_png(root / "image_2" / f"{idx:06d}.png", value=idx)
        write_points(root / "velodyne" / f"{idx:06d}.bin", make_points(10 + idx, seed=idx))
        (root / "calib" / f"{idx:06d}.txt").write_text(OBJECT_CALIB)
        (root / "label_2" / f"{idx:06d}.txt").write_text(OBJECT_LABEL)
    return root


def build_tracking_dataset(root: Path, seq_lens) -> Path:
    for name in ("image_02", "velodyne", "calib", "label_02", "oxts"):
        (root / name).mkdir(parents=True)

    for idx, seq_len in enumerate(seq_lens):
        image_dir = root / "image_02" / f"{idx:04d}"
        velo_dir = root / "velodyne" / f"{idx:04d}"
        image_dir.mkdir()
        velo_dir.mkdir()
        for seq_idx in range(seq_len):
            write_png(image_dir / f"{seq_idx:06d}.png", value=seq_idx)
            write_points(velo_dir / f"{seq_idx:06d}.bin", make_points(5, seed=100 * idx + seq_idx))
        (root / "calib" / f"{idx:04d}.txt").write_text(TRACKING_CALIB)
        (root / "label_02" / f"{idx:04d}.txt").write_text(TRACKING_LABEL)
        (root / "oxts" / f"{idx:04d}.txt").write_text(OXTS_LINES)
    return root


@pytest.fixture
def object_root(tmp_path):
    return build_object_dataset(tmp_path / "object", num_frames=5)


@pytest.fixture
def tracking_root(tmp_path):
    return build_tracking_dataset(tmp_path / "tracking", seq_lens=[3, 5])


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
