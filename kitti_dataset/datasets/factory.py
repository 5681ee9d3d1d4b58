from pathlib import Path
from typing import Any
from kitti_dataset.datasets.Dataset import Dataset
from kitti_dataset.datasets.ObjectDataset import ObjectDataset
from kitti_dataset.datasets.TrackingDataset import TrackingDataset

DATASETS = {
    "object": ObjectDataset,
    "tracking": TrackingDataset,
}


def get_dataset(config: Any) -> Dataset:
    """
    Factory function to open a Dataset from configuration.

    Args:
        config: DatasetConfig object or dictionary with 'kind' and 'root_dir'
    """
    # Handle both dataclass and dict
    kind = getattr(config, 'kind', config.get('kind') if isinstance(config, dict) else None)
    root_dir = getattr(config, 'root_dir', config.get('root_dir') if isinstance(config, dict) else None)

    if not kind or not root_dir:
        raise ValueError("Dataset config must have 'kind' and 'root_dir'")

    dataset_cls = DATASETS.get(kind.lower())
    if dataset_cls is None:
        raise ValueError(f"Unknown dataset kind: {kind}")

    return dataset_cls.open(Path(root_dir))
