import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path

def plot_point_cloud(points: np.ndarray, save_path: Path, max_range: float = 80.0):
    """
    Plots a bird's-eye view of a velodyne scan (X forward, Y left),
    coloured by reflection intensity.

    points: (N, 4) array of x, y, z, reflection
    """
    points = np.asarray(points)
    fig, ax = plt.subplots(figsize=(10, 10))

    if len(points):
        mask = (np.abs(points[:, 0]) <= max_range) & (np.abs(points[:, 1]) <= max_range)
        shown = points[mask]
        sc = ax.scatter(-shown[:, 1], shown[:, 0], c=shown[:, 3], s=0.2, cmap='viridis', vmin=0.0, vmax=1.0)
        fig.colorbar(sc, ax=ax, label='Reflection')

    # Sensor origin
    ax.plot(0, 0, 'r^', markersize=8, label='Sensor')

    ax.axis('equal')
    ax.set_xlabel('-Y (meters) - Right')
    ax.set_ylabel('X (meters) - Forward')
    ax.set_title(f'Velodyne Scan (Top-Down, {len(points)} points)')
    ax.legend()
    ax.grid(True, linestyle='--', alpha=0.5)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150)
    plt.close(fig)

def plot_poses(poses: np.ndarray, save_path: Path, title: str = 'OXTS Trajectory (Top-Down)'):
    """
    Plots the top-down trajectory (X vs Y) of (N, 4, 4) poses, e.g. from oxts_to_poses.
    """
    poses = np.asarray(poses)
    fig, ax = plt.subplots(figsize=(10, 10))

    if len(poses):
        ax.plot(poses[:, 0, 3], poses[:, 1, 3], 'b-', linewidth=1.5, label="Trajectory", alpha=0.8)
        # Mark start/end
        ax.plot(poses[0, 0, 3], poses[0, 1, 3], 'go', markersize=8, label='Start')
        ax.plot(poses[-1, 0, 3], poses[-1, 1, 3], 'rs', markersize=8, label='End')

    ax.axis('equal')
    ax.set_xlabel('X (meters) - East')
    ax.set_ylabel('Y (meters) - North')
    ax.set_title(title)
    ax.legend()
    ax.grid(True, linestyle='--', alpha=0.5)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150)
    plt.close(fig)
