"""
Attraction point placement inside the crown region.

Provides three placement methods:
- rectangle: uniform sampling in the crown box (above crown_base_height)
- ellipse: uniform sampling in the ellipse inscribed in the crown box
- mask: uniform sampling over the opaque pixels of an image, stretched to the crown box
"""

import numpy as np
from PIL import Image
from typing import List, Tuple

from .config import TreeConfig
from .vector import Vector2D


def crown_bounds(config: TreeConfig) -> Tuple[float, float, float, float]:
    """Return (x_min, x_max, y_min, y_max) of the crown box."""
    return (
        -config.crown_half_width,
        config.crown_half_width,
        config.crown_base_height,
        config.crown_top
    )


def load_mask(image_path: str) -> np.ndarray:
    """Load an image as a binary mask. Returns True where foreground exists."""
    img = Image.open(image_path).convert('RGBA')
    arr = np.array(img)
    return arr[:, :, 3] > 0


def sample_rectangle(config: TreeConfig, count: int, rng: np.random.Generator) -> np.ndarray:
    x_min, x_max, y_min, y_max = crown_bounds(config)
    xs = rng.uniform(x_min, x_max, size=count)
    ys = rng.uniform(y_min, y_max, size=count)
    return np.column_stack([xs, ys])


def sample_ellipse(config: TreeConfig, count: int, rng: np.random.Generator) -> np.ndarray:
    x_min, x_max, y_min, y_max = crown_bounds(config)
    cx, cy = (x_min + x_max) / 2, (y_min + y_max) / 2
    ax, ay = (x_max - x_min) / 2, (y_max - y_min) / 2

    # sqrt keeps the density uniform over the area
    r = np.sqrt(rng.uniform(0.0, 1.0, size=count))
    theta = rng.uniform(0.0, 2 * np.pi, size=count)
    return np.column_stack([cx + ax * r * np.cos(theta), cy + ay * r * np.sin(theta)])


def sample_mask(config: TreeConfig, count: int, rng: np.random.Generator) -> np.ndarray:
    if config.mask_image_path is None:
        raise ValueError("mask_image_path is required for mask crown shape")

    mask = load_mask(config.mask_image_path)
    height, width = mask.shape
    ys, xs = np.where(mask)

    if len(xs) < count:
        print(f"Warning: Only {len(xs)} valid positions available")
        count = len(xs)

    indices = rng.choice(len(xs), size=count, replace=False)

    x_min, x_max, y_min, y_max = crown_bounds(config)
    # pixel centers; image row 0 is the top of the crown
    u = (xs[indices] + 0.5) / width
    v = (ys[indices] + 0.5) / height
    return np.column_stack([x_min + u * (x_max - x_min), y_max - v * (y_max - y_min)])


def sample_radii(config: TreeConfig, count: int, rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
    """Per-point (influence, kill) radii, jittered by the same factor."""
    if config.radius_jitter > 0:
        factors = 1.0 + rng.uniform(-config.radius_jitter, config.radius_jitter, size=count)
    else:
        factors = np.ones(count)
    return config.influence_radius * factors, config.kill_radius * factors


def sample_crown_points(config: TreeConfig, rng: np.random.Generator) -> List[Tuple[Vector2D, float, float]]:
    """
    Sample attraction point positions and radii for the configured crown.

    Returns a list of (position, influence_radius, kill_radius).
    """
    count = config.num_attraction_points
    if count == 0:
        return []

    if config.crown_shape == 'ellipse':
        positions = sample_ellipse(config, count, rng)
    elif config.crown_shape == 'mask':
        positions = sample_mask(config, count, rng)
    else:
        positions = sample_rectangle(config, count, rng)

    influence, kill = sample_radii(config, len(positions), rng)
    return [
        (Vector2D(x, y), inf_r, kill_r)
        for (x, y), inf_r, kill_r in zip(positions, influence, kill)
    ]
