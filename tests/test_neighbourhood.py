"""
Tests for the pixel neighbourhood primitives.
"""

import itertools

import numpy as np
import pytest

from ridgematch.minutiae.neighbourhood import (
    NEIGHBOUR_OFFSETS,
    as_binary_image,
    black_neighbour_map,
    black_neighbours,
    get_neighbours,
    identical,
    neighbour_planes,
    transition_map,
    transitions,
)


F, T = False, True


class TestGetNeighbours:

    def test_single_pixel_has_no_neighbours(self):
        assert get_neighbours(np.array([[T]]), 0, 0) == (F, F, F, F, F, F, F, F)

    def test_right_neighbour_is_n2(self):
        assert get_neighbours(np.array([[T, T]]), 0, 0) == (F, F, T, F, F, F, F, F)

    @pytest.mark.parametrize("index", range(8))
    def test_clockwise_order_from_north(self, index):
        image = np.zeros((3, 3), dtype=bool)
        dr, dc = NEIGHBOUR_OFFSETS[index]
        image[1 + dr, 1 + dc] = True

        neighbours = get_neighbours(image, 1, 1)

        assert neighbours[index] is True
        assert sum(neighbours) == 1

    def test_center_is_not_a_neighbour(self):
        image = np.zeros((3, 3), dtype=bool)
        image[1, 1] = True
        assert get_neighbours(image, 1, 1) == (F,) * 8

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 4)])
    def test_out_of_bounds_returns_none(self, row, col):
        assert get_neighbours(np.ones((3, 4), dtype=bool), row, col) is None


class TestCounts:

    @pytest.mark.parametrize("neighbours, expected", [
        ((T, F, F, T, F, T, T, T), 5),
        ((T, T, F, F, F, T, T, F), 4),
        ((F,) * 8, 0),
        ((T,) * 8, 8),
    ])
    def test_black_neighbours(self, neighbours, expected):
        assert black_neighbours(neighbours) == expected

    @pytest.mark.parametrize("neighbours, expected", [
        ((T, F, F, T, F, T, T, F), 3),
        ((F, F, T, F, T, T, F, T), 3),
        ((F, F, F, F, T, F, F, F), 1),
        ((T,) * 8, 0),
        ((F,) * 8, 0),
        ((T, F, T, F, T, F, T, F), 4),
    ])
    def test_transitions(self, neighbours, expected):
        assert transitions(neighbours) == expected

    def test_transitions_range_over_all_patterns(self):
        for pattern in itertools.product((F, T), repeat=8):
            assert 0 <= transitions(pattern) <= 4


class TestIdentical:

    def test_same_image(self, small_image):
        assert identical(small_image, small_image.copy())

    def test_different_shapes(self, small_image):
        assert not identical(small_image, small_image[:3])
        assert not identical(small_image[:3], small_image)

    def test_one_pixel_differs(self, small_image):
        other = small_image.copy()
        other[3, 2] = True
        assert not identical(small_image, other)
        assert not identical(other, small_image)


class TestWholeImage:

    def test_planes_agree_with_get_neighbours(self):
        rng = np.random.default_rng(7)
        image = rng.random((9, 11)) < 0.45

        planes = neighbour_planes(image)
        black = black_neighbour_map(planes)
        trans = transition_map(planes)

        for row in range(image.shape[0]):
            for col in range(image.shape[1]):
                neighbours = get_neighbours(image, row, col)
                assert tuple(planes[:, row, col]) == neighbours
                assert black[row, col] == black_neighbours(neighbours)
                assert trans[row, col] == transitions(neighbours)

    def test_as_binary_image_copies(self, small_image):
        binary = as_binary_image(small_image)
        binary[0, 0] = False
        assert small_image[0, 0]

    def test_as_binary_image_accepts_lists(self):
        binary = as_binary_image([[1, 0], [0, 2]])
        assert binary.dtype == bool
        assert binary.tolist() == [[T, F], [F, T]]

    @pytest.mark.parametrize("bad", [np.zeros(4), np.zeros((0, 3)), np.zeros((2, 2, 2))])
    def test_as_binary_image_rejects_bad_shapes(self, bad):
        with pytest.raises(ValueError):
            as_binary_image(bad)
