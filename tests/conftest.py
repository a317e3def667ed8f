"""
Shared fixtures: small hand-written images and synthetic ridge patterns.
"""

import numpy as np
import pytest

from ridgematch.minutiae.minutiae_extraction import Minutia


@pytest.fixture
def small_image():
    """4x4 image used by the connectivity and orientation scenarios."""
    return np.array([
        [True, False, False, True],
        [False, False, True, True],
        [False, True, True, False],
        [False, False, False, False],
    ])


@pytest.fixture
def bars_image():
    """
    120x120 image of 3-pixel-thick horizontal bars, each cut in three
    segments, giving a skeleton with many ridge endings.
    """
    image = np.zeros((120, 120), dtype=bool)

    for k, row in enumerate(range(10, 111, 10)):
        shift = (k * 7) % 15
        for start, stop in ((10, 35), (45, 70), (80, 108)):
            image[row - 1:row + 2, start + shift // 3:stop - shift // 5] = True

    return image


@pytest.fixture
def minutiae_grid():
    """25 minutiae on a 5x5 grid with 20-pixel spacing."""
    minutiae = []
    for i in range(5):
        for j in range(5):
            minutiae.append(Minutia(
                row=40 + 20 * i,
                col=40 + 20 * j,
                orientation=(37 * (5 * i + j) + 30) % 360
            ))
    return minutiae
