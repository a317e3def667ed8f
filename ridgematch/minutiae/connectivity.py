"""
Windowed connected-component exploration on skeleton images.

The orientation of a minutia is estimated from the ridge pixels that are
connected to it inside a square window; this module computes that set.
"""

from typing import Optional

import numpy as np
from scipy import ndimage


# 8-connectivity
EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def connected_pixels(
    image: np.ndarray,
    row: int,
    col: int,
    distance: int
) -> Optional[np.ndarray]:
    """
    Find the ridge pixels 8-connected to a pixel within a square window.

    The window is [row - distance, row + distance] x [col - distance,
    col + distance]. The component is seeded with the ridge pixels of the
    3x3 block around (row, col) that lie in the window, and grown through
    ridge pixels of the window only.

    Args:
        image: Binary skeleton image
        row, col: Seed pixel coordinates
        distance: Half-size of the window

    Returns:
        Boolean mask with the shape of the image, or None if (row, col)
        is outside the image
    """
    binary = np.asarray(image, dtype=bool)
    rows, cols = binary.shape

    if not (0 <= row < rows and 0 <= col < cols):
        return None

    connected = np.zeros((rows, cols), dtype=bool)
    if distance < 0:
        return connected

    top, bottom = max(0, row - distance), min(rows, row + distance + 1)
    left, right = max(0, col - distance), min(cols, col + distance + 1)
    window = binary[top:bottom, left:right]

    labels, num_labels = ndimage.label(window, structure=EIGHT_CONNECTED)
    if num_labels == 0:
        return connected

    # Seed block, clipped to the window
    seed_top, seed_bottom = max(top, row - 1), min(bottom, row + 2)
    seed_left, seed_right = max(left, col - 1), min(right, col + 2)
    seed_labels = labels[
        seed_top - top:seed_bottom - top,
        seed_left - left:seed_right - left
    ]
    seed_labels = np.unique(seed_labels[seed_labels > 0])

    connected[top:bottom, left:right] = np.isin(labels, seed_labels)
    return connected
