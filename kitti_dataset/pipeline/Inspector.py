from pathlib import Path
import json
import time
from dataclasses import asdict
from datetime import datetime

from joblib import Parallel, delayed
from tqdm import tqdm

from kitti_dataset.datasets.factory import get_dataset
from kitti_dataset.datasets.schema import ObjectDataKind, TrackingDataKind
from kitti_dataset.datasets.Sequence import SequenceHandle
from kitti_dataset.errors import KittiError
from kitti_dataset.utils.logger import get_logger
from kitti_dataset.utils.plotting import plot_point_cloud, plot_poses
from kitti_dataset.utils.transformations import oxts_to_poses

logger = get_logger(__name__)


class JSONEncoder(json.JSONEncoder):
    """Custom encoder to handle Path and other non-serializable types."""
    def default(self, obj):
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)


def check_frame(frame):
    """
    Decode every sample of a frame, including every item of sequence samples.

    Returns (number of decoded items, list of failures). Decode errors are
    recorded rather than raised so one bad file does not stop the check.
    """
    checked = 0
    failures = []

    def record(path, err):
        logger.warning("fail to load %s: %s", path, err)
        failures.append({"frame": frame.frame_idx, "path": str(path), "error": f"{type(err).__name__}: {err}"})

    for sample in frame.sample_iter():
        try:
            data = sample.data()
        except (KittiError, OSError) as err:
            record(sample.path, err)
            continue
        checked += 1

        if isinstance(data.value, SequenceHandle):
            seq = data.value
            for seq_idx in range(len(seq)):
                try:
                    seq.get(seq_idx)
                except (KittiError, OSError) as err:
                    record(seq.item_path(seq_idx), err)
                    continue
                checked += 1

    return checked, failures


class Inspector:
    def __init__(self, cfg):
        self.cfg = cfg

    def run(self):
        start_time = time.time()
        inspect_cfg = self.cfg.inspect

        # 1. Open
        dataset = get_dataset(self.cfg.dataset)
        N = dataset.num_frames
        keys = {key: kind.name for key, kind in sorted(dataset.keys())}

        print(f"Found {N} frames")
        print(f"Found keys: {', '.join(keys)}")

        results = {
            "dataset_kind": self.cfg.dataset.kind,
            "root_dir": dataset.root_dir,
            "num_frames": N,
            "keys": keys,
        }

        # 2. Sequence lengths (tracking only)
        if self.cfg.dataset.kind.lower() == "tracking":
            seq_lens = [frame.seq_len() for frame in dataset.frame_iter()]
            for frame_idx, seq_len in enumerate(seq_lens):
                print(f"    frame {frame_idx}: {seq_len}")
            results["seq_lens"] = seq_lens

        # 3. Decode everything
        if inspect_cfg.test:
            jobs = Parallel(n_jobs=inspect_cfg.workers, prefer="threads", return_as="generator")(
                delayed(check_frame)(frame) for frame in dataset.frame_iter()
            )
            reports = list(tqdm(jobs, total=N, desc="Checking frames", disable=not inspect_cfg.progress))
            failures = [f for _, frame_failures in reports for f in frame_failures]
            results["checked_items"] = int(sum(checked for checked, _ in reports))
            results["failures"] = failures
            print(f"  Checked {results['checked_items']} items, {len(failures)} failures")

        # 4. Plots
        if inspect_cfg.plot_dir:
            results["plots"] = self.save_plots(dataset, Path(inspect_cfg.plot_dir))

        results["total_seconds"] = time.time() - start_time
        results["timestamp"] = datetime.now().isoformat()
        results["config"] = asdict(self.cfg)

        if inspect_cfg.report_path:
            self.save_report(results, Path(inspect_cfg.report_path))

        return results

    def save_plots(self, dataset, plot_dir: Path):
        plot_dir.mkdir(parents=True, exist_ok=True)
        saved = []

        for frame in dataset.frame_iter()[: self.cfg.inspect.max_plots]:
            for key, kind in sorted(dataset.keys()):
                sample = frame.key(key)
                if kind is ObjectDataKind.VELODYNE:
                    cloud = sample.data().value
                elif kind is TrackingDataKind.VELODYNE_SEQ:
                    cloud = sample.data().value.get(0)
                    if cloud is None:
                        continue
                elif kind is TrackingDataKind.ODOMETRY:
                    poses = oxts_to_poses(sample.data().value)
                    path = plot_dir / f"{key}_{frame.frame_idx:06d}_trajectory.png"
                    plot_poses(poses, path)
                    saved.append(path)
                    continue
                else:
                    continue

                path = plot_dir / f"{key}_{frame.frame_idx:06d}_bev.png"
                plot_point_cloud(cloud.to_array(), path)
                saved.append(path)

        logger.info("Saved %d plots to %s", len(saved), plot_dir)
        return saved

    def save_report(self, results, report_path: Path):
        report_path.parent.mkdir(parents=True, exist_ok=True)
        with open(report_path, "w") as f:
            json.dump(results, f, indent=2, cls=JSONEncoder)
        logger.info("Report saved to %s", report_path)
