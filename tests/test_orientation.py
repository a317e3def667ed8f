"""
Tests for windowed connectivity and orientation estimation.
"""

import math

import numpy as np
import pytest

from ridgematch.minutiae.connectivity import connected_pixels
from ridgematch.minutiae.orientation import (
    component_points,
    compute_angle,
    compute_orientation,
    compute_slope,
)


F, T = False, True


def _true_positions(mask):
    return sorted(zip(*map(list, np.nonzero(mask))))


class TestConnectedPixels:

    def test_large_window(self, small_image):
        result = connected_pixels(small_image, 2, 1, 10)
        assert _true_positions(result) == [(0, 3), (1, 2), (1, 3), (2, 1), (2, 2)]

    def test_window_clips_component(self, small_image):
        result = connected_pixels(small_image, 2, 1, 1)
        assert _true_positions(result) == [(1, 2), (2, 1), (2, 2)]

    def test_path_must_stay_in_window(self):
        image = np.array([
            [T, F, F, T, T],
            [T, F, T, T, F],
            [T, T, F, F, F],
            [F, T, F, T, F],
        ])
        expected = np.array([
            [T, F, F, T, F],
            [T, F, T, T, F],
            [T, T, F, F, F],
            [F, T, F, F, F],
        ])
        assert np.array_equal(connected_pixels(image, 2, 1, 2), expected)

    def test_out_of_bounds(self, small_image):
        assert connected_pixels(small_image, 4, 0, 3) is None
        assert connected_pixels(small_image, 0, -1, 3) is None

    def test_zero_distance_keeps_only_the_seed(self, small_image):
        assert _true_positions(connected_pixels(small_image, 2, 1, 0)) == [(2, 1)]
        assert not connected_pixels(small_image, 0, 1, 0).any()

    def test_result_is_fresh(self, small_image):
        before = small_image.copy()
        result = connected_pixels(small_image, 2, 1, 3)
        result[:] = False
        assert np.array_equal(small_image, before)


class TestComputeSlope:

    def test_vertical(self):
        connected = np.array([
            [T, F, F, F, F],
            [T, F, F, F, F],
            [T, F, F, F, F],
            [T, F, F, F, F],
        ])
        assert compute_slope(component_points(connected, 1, 0)) == math.inf

    def test_x_dominant(self):
        connected = np.array([
            [F, F, F, T, F],
            [F, F, T, T, F],
            [F, T, T, F, F],
            [F, F, F, F, F],
        ])
        assert compute_slope(component_points(connected, 2, 1)) == pytest.approx(0.7)

    def test_y_dominant(self):
        connected = np.array([
            [F, F, F, F],
            [F, F, T, F],
            [F, T, T, F],
            [T, T, F, F],
            [F, F, F, F],
        ])
        assert compute_slope(component_points(connected, 1, 2)) == pytest.approx(10 / 7)

    def test_negative_slope(self):
        connected = np.array([
            [T, F, F, F],
            [F, T, F, F],
            [F, F, T, F],
            [F, F, T, F],
            [F, F, F, T],
        ])
        assert compute_slope(component_points(connected, 4, 4)) == pytest.approx(-31 / 34)

    def test_empty_component(self):
        assert compute_slope(np.empty((0, 2))) == math.inf

    def test_degenerate_cross_term(self):
        # Sxx < Syy and Sxy = 0
        points = np.array([[1.0, 0.0], [0.0, 2.0], [0.0, -2.0]])
        assert compute_slope(points) == math.inf


class TestComputeAngle:

    def test_horizontal_right(self):
        points = np.array([[1.0, 0.0], [2.0, 0.0], [-1.0, 0.0]])
        assert compute_angle(points, 0.0) == 0.0

    def test_horizontal_left(self):
        points = np.array([[-1.0, 0.0], [-2.0, 0.0], [0.0, 0.0]])
        assert compute_angle(points, 0.0) == pytest.approx(math.pi)

    def test_vertical_up(self):
        points = np.array([[0.0, 0.0], [0.0, 1.0], [0.0, 2.0]])
        assert compute_angle(points, math.inf) == pytest.approx(math.pi / 2)

    def test_vertical_down(self):
        points = np.array([[0.0, 0.0], [0.0, -1.0]])
        assert compute_angle(points, math.inf) == pytest.approx(-math.pi / 2)

    def test_empty_component_points_down(self):
        assert compute_angle(np.empty((0, 2)), math.inf) == pytest.approx(-math.pi / 2)

    def test_flips_towards_majority(self):
        points = np.array([[0.0, 0.0], [-1.0, -1.0], [-2.0, -2.0]])
        assert compute_angle(points, 1.0) == pytest.approx(math.pi + math.pi / 4)

    def test_negative_slope_pointing_up(self):
        points = np.array([[0.0, 0.0], [-1.0, 1.0], [-2.0, 2.0]])
        assert compute_angle(points, -1.0) == pytest.approx(3 * math.pi / 4)


class TestComputeOrientation:

    def test_small_image(self, small_image):
        assert compute_orientation(small_image, 2, 1, 3) == 35

    def test_isolated_pixel(self):
        image = np.zeros((3, 3), dtype=bool)
        image[1, 1] = True
        assert compute_orientation(image, 1, 1) == 270

    def test_vertical_ridge_ends(self):
        image = np.zeros((20, 5), dtype=bool)
        image[5:16, 2] = True
        assert compute_orientation(image, 5, 2) == 270
        assert compute_orientation(image, 15, 2) == 90

    def test_horizontal_ridge_ends(self):
        image = np.zeros((7, 15), dtype=bool)
        image[3, 2:13] = True
        assert compute_orientation(image, 3, 2) == 0
        assert compute_orientation(image, 3, 12) == 180

    def test_range(self):
        rng = np.random.default_rng(3)
        image = rng.random((30, 30)) < 0.3
        for row, col in np.argwhere(image):
            orientation = compute_orientation(image, int(row), int(col), 5)
            assert isinstance(orientation, int)
            assert 0 <= orientation < 360

    def test_out_of_bounds(self, small_image):
        with pytest.raises(ValueError):
            compute_orientation(small_image, 5, 5)
