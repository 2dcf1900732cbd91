"""
Visualization utilities for tree growth.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.animation import FuncAnimation
from typing import List, Optional, Tuple
from pathlib import Path

from .tree import Tree
from .config import TreeConfig
from .crown import crown_bounds

GROUND_COLOR = 'dimgray'


def tree_segments(tree: Tree) -> Tuple[List, List[float]]:
    """Line pieces between consecutive segments of every branch, with their widths."""
    lines = []
    widths = []
    for branch in tree.branches:
        segments = branch.segments
        for prev, seg in zip(segments, segments[1:]):
            lines.append([prev.position.to_tuple(), seg.position.to_tuple()])
            widths.append(seg.width)
    return lines, widths


def _attraction_array(tree: Tree) -> np.ndarray:
    if not tree.attraction_points:
        return np.empty((0, 2))
    return np.array([p.position.to_tuple() for p in tree.attraction_points])


def _setup_axes(ax, config: TreeConfig, margin: float = 0.1):
    x_min, x_max, _, y_max = crown_bounds(config)
    root_y = config.root_pos[1]
    ax.set_xlim(x_min - margin, x_max + margin)
    ax.set_ylim(min(root_y, 0.0) - margin, y_max + margin)
    ax.set_aspect('equal')
    ax.axis('off')
    ax.plot([x_min, x_max], [0.0, 0.0], color=GROUND_COLOR, linewidth=2.0)


def visualize_tree(
    tree: Tree,
    show_attractors: bool = False,
    branch_color: str = 'saddlebrown',
    width_scale: float = 100.0,
    attractor_color: str = 'green',
    attractor_size: float = 4.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    show: bool = True
):
    """Visualize the current state of the tree. Line widths follow segment widths."""
    fig, ax = plt.subplots(figsize=figsize)
    _setup_axes(ax, tree.config)

    lines, widths = tree_segments(tree)
    if lines:
        lc = LineCollection(lines, colors=branch_color,
                            linewidths=np.maximum(np.array(widths) * width_scale, 0.5),
                            capstyle='round', joinstyle='round')
        ax.add_collection(lc)

    if show_attractors:
        positions = _attraction_array(tree)
        if len(positions) > 0:
            ax.scatter(positions[:, 0], positions[:, 1], c=attractor_color, s=attractor_size, alpha=0.5)

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, ax


def animate_growth(
    config: TreeConfig,
    interval: int = 50,
    show_attractors: bool = True,
    branch_color: str = 'saddlebrown',
    width_scale: float = 100.0,
    figsize: Tuple[int, int] = (10, 10),
    save_path: Optional[str] = None,
    frame_skip: int = 1,
    show: bool = True
) -> FuncAnimation:
    """
    Create an animation of the growth process.

    frame_skip: Only record every Nth step. Higher = faster, fewer frames.
    """
    tree = Tree(config)

    fig, ax = plt.subplots(figsize=figsize)
    _setup_axes(ax, config)

    branch_collection = LineCollection([], colors=branch_color, capstyle='round')
    ax.add_collection(branch_collection)

    if show_attractors:
        attractor_scatter = ax.scatter([], [], c='green', s=4, alpha=0.3)

    title = ax.set_title('Step: 0')

    frames_data = []

    def collect_frame():
        lines, widths = tree_segments(tree)
        frames_data.append({
            'lines': lines,
            'widths': np.maximum(np.array(widths) * width_scale, 0.5) if widths else [],
            'attractors': _attraction_array(tree),
            'iteration': tree.iteration
        })

    collect_frame()

    while not tree.fully_grown and tree.iteration < config.max_steps:
        tree.update()
        if tree.iteration % frame_skip == 0:
            collect_frame()

    collect_frame()

    print(f"Collected {len(frames_data)} frames for animation")

    def init():
        branch_collection.set_segments([])
        if show_attractors:
            attractor_scatter.set_offsets(np.empty((0, 2)))
        return [branch_collection]

    def update(frame_idx):
        data = frames_data[frame_idx]
        branch_collection.set_segments(data['lines'])
        if len(data['lines']) > 0:
            branch_collection.set_linewidths(data['widths'])

        if show_attractors:
            attractor_scatter.set_offsets(data['attractors'])

        title.set_text(f"Step: {data['iteration']}")
        return [branch_collection]

    anim = FuncAnimation(
        fig, update,
        frames=len(frames_data),
        init_func=init,
        interval=interval,
        blit=False,
        repeat=True
    )

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        print(f"Saving animation ({len(frames_data)} frames)...")
        anim.save(save_path, writer='pillow', fps=20)
        print(f"Saved animation to {save_path}")

    if show:
        plt.show()
    return anim


def plot_growth_statistics(tree: Tree, save_path: Optional[str] = None, show: bool = True):
    """Plot branch counts per level and the segment width distribution."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    levels = [b.level for b in tree.branches]
    max_level = max(levels)
    level_counts = [levels.count(lvl) for lvl in range(1, max_level + 1)]
    axes[0].bar(range(1, max_level + 1), level_counts, color='forestgreen', edgecolor='black')
    axes[0].set_xlabel('Branch Level')
    axes[0].set_ylabel('Branch Count')
    axes[0].set_title('Branches per Level')

    widths = [s.width for b in tree.branches for s in b.segments]
    axes[1].hist(widths, bins=30, color='saddlebrown', edgecolor='black')
    axes[1].set_xlabel('Segment Width')
    axes[1].set_ylabel('Count')
    axes[1].set_title('Segment Width Distribution')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes
