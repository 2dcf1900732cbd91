"""
Unit tests for attraction point placement.
"""

import numpy as np
import pytest
from PIL import Image

from canopy import TreeConfig
from canopy.crown import sample_crown_points, crown_bounds, load_mask


def positions_of(samples) -> np.ndarray:
    return np.array([p.to_tuple() for p, _, _ in samples])


class TestShapes:

    def test_rectangle_within_bounds(self):
        config = TreeConfig(num_attraction_points=500)
        samples = sample_crown_points(config, np.random.default_rng(0))
        xy = positions_of(samples)
        assert len(xy) == 500
        assert xy[:, 0].min() >= -1.0 and xy[:, 0].max() <= 1.0
        assert xy[:, 1].min() >= 0.15 and xy[:, 1].max() <= 1.0

    def test_ellipse_within_ellipse(self):
        config = TreeConfig(num_attraction_points=500, crown_shape='ellipse')
        xy = positions_of(sample_crown_points(config, np.random.default_rng(0)))
        x_min, x_max, y_min, y_max = crown_bounds(config)
        cx, cy = (x_min + x_max) / 2, (y_min + y_max) / 2
        ax, ay = (x_max - x_min) / 2, (y_max - y_min) / 2
        inside = ((xy[:, 0] - cx) / ax) ** 2 + ((xy[:, 1] - cy) / ay) ** 2
        assert np.all(inside <= 1.0 + 1e-9)

    def test_same_seed_same_points(self):
        config = TreeConfig()
        a = positions_of(sample_crown_points(config, np.random.default_rng(3)))
        b = positions_of(sample_crown_points(config, np.random.default_rng(3)))
        np.testing.assert_array_equal(a, b)

    def test_zero_points(self):
        config = TreeConfig(num_attraction_points=0)
        assert sample_crown_points(config, np.random.default_rng(0)) == []


class TestRadii:

    def test_default_radii(self):
        config = TreeConfig(num_attraction_points=10)
        for _, influence, kill in sample_crown_points(config, np.random.default_rng(0)):
            assert influence == pytest.approx(config.influence_radius)
            assert kill == pytest.approx(config.kill_radius)

    def test_jittered_radii_stay_in_range(self):
        config = TreeConfig(num_attraction_points=200, radius_jitter=0.25)
        samples = sample_crown_points(config, np.random.default_rng(0))
        influence = np.array([s[1] for s in samples])
        kill = np.array([s[2] for s in samples])
        assert influence.min() >= 0.4 * 0.75 and influence.max() <= 0.4 * 1.25
        assert influence.std() > 0
        np.testing.assert_allclose(kill / influence, 0.15 / 0.4)


class TestMask:

    @pytest.fixture
    def corner_mask(self, tmp_path):
        arr = np.zeros((10, 10, 4), dtype=np.uint8)
        arr[:2, :2] = 255  # opaque top-left corner
        path = tmp_path / 'mask.png'
        Image.fromarray(arr).save(path)
        return str(path)

    def test_load_mask(self, corner_mask):
        mask = load_mask(corner_mask)
        assert mask.shape == (10, 10)
        assert mask.sum() == 4

    def test_points_land_in_mask_region(self, corner_mask, capsys):
        config = TreeConfig(num_attraction_points=100, crown_shape='mask', mask_image_path=corner_mask)
        xy = positions_of(sample_crown_points(config, np.random.default_rng(0)))
        assert len(xy) == 4
        assert "Warning: Only 4 valid positions available" in capsys.readouterr().out
        assert np.all(xy[:, 0] < -1.0 + 0.2 * 2)
        assert np.all(xy[:, 1] > 1.0 - 0.2 * 0.85)

    def test_mask_requires_image_path(self):
        config = TreeConfig(crown_shape='mask')
        with pytest.raises(ValueError, match="mask_image_path"):
            sample_crown_points(config, np.random.default_rng(0))
