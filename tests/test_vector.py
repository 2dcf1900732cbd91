"""
Unit tests for Vector2D arithmetic.
"""

import math

import numpy as np
import pytest

from canopy import Vector2D


class TestArithmetic:

    def test_add_and_sub_vectors(self):
        v = Vector2D(1, 2) + Vector2D(3, 4)
        assert v == Vector2D(4, 6)
        assert Vector2D(1, 2) - Vector2D(3, 4) == Vector2D(-2, -2)

    def test_scalar_add_and_sub(self):
        assert Vector2D(1, 2) + 1 == Vector2D(2, 3)
        assert Vector2D(1, 2) - 1 == Vector2D(0, 1)

    def test_mul_and_div(self):
        assert Vector2D(1, 2) * 3 == Vector2D(3, 6)
        assert 3 * Vector2D(1, 2) == Vector2D(3, 6)
        assert Vector2D(3, 6) / 3 == Vector2D(1, 2)

    def test_binary_ops_do_not_mutate(self):
        v = Vector2D(1, 1)
        _ = v + Vector2D(1, 1)
        _ = v * 5
        assert v.to_tuple() == (1.0, 1.0)

    def test_in_place_ops_mutate_receiver(self):
        v = Vector2D(1, 1)
        same = v
        v += Vector2D(1, 2)
        v *= 2
        v -= 1
        v /= 2
        assert v is same
        assert v == Vector2D(1.5, 2.5)


class TestGeometry:

    def test_rotate_quarter_turn(self):
        v = Vector2D(1, 0).rotate(math.pi / 2)
        assert v.x == pytest.approx(0.0, abs=1e-12)
        assert v.y == pytest.approx(1.0)

    def test_rotate_matches_polar_angle(self):
        angle = 2.1
        assert Vector2D(1, 0).rotate(angle).angle == pytest.approx(angle)

    def test_normalize(self):
        v = Vector2D(3, 4).normalize()
        assert v.magnitude == pytest.approx(1.0)
        assert v == Vector2D(0.6, 0.8)

    def test_normalize_zero_vector_returns_zero(self):
        v = Vector2D(0, 0).normalize()
        assert v.magnitude == 0.0
        assert not math.isnan(v.x)

    def test_dot_and_distance(self):
        assert Vector2D(1, 2).dot(Vector2D(3, 4)) == pytest.approx(11.0)
        assert Vector2D(0, 0).distance_to(Vector2D(3, 4)) == pytest.approx(5.0)
        assert Vector2D(0, 0).distance_squared_to(Vector2D(3, 4)) == pytest.approx(25.0)

    def test_angle_points_up(self):
        assert Vector2D(0, 2).angle == pytest.approx(math.pi / 2)


class TestScratchValue:

    def test_restore_returns_saved_value(self):
        v = Vector2D(0, 0).save()
        v += Vector2D(5, 5)
        assert v.restore() == Vector2D(0, 0)

    def test_save_replaces_previous_value(self):
        v = Vector2D(1, 1)
        v += 1
        v.save()
        v *= 10
        assert v.restore() == Vector2D(2, 2)


class TestConversions:

    def test_round_trip_helpers(self):
        v = Vector2D(1.5, -2.0)
        assert Vector2D.from_tuple(v.to_tuple()) == v
        assert Vector2D.from_array(v.to_array()) == v
        assert isinstance(v.to_array(), np.ndarray)

    def test_copy_is_independent(self):
        v = Vector2D(1, 1)
        c = v.copy()
        c += 1
        assert v == Vector2D(1, 1)
