"""
Pixel neighbourhood primitives.

These helpers describe a pixel through its 8 neighbours and are shared
by the thinning algorithm and the minutiae extractor.
"""

from typing import Optional, Sequence, Tuple

import numpy as np


# =============================================================================
# NEIGHBOURHOOD LAYOUT
# =============================================================================
#
# Neighbours are listed clockwise starting from north:
#
#     N7 N0 N1
#     N6 P  N2
#     N5 N4 N3
#
# Neighbours falling outside the image are white (False).
#
# Transition count T(P): number of white -> black flips when walking the
# ring N0, N1, ..., N7, N0. For a skeleton pixel:
# - T = 1: ridge ending
# - T = 2: ridge continuing point
# - T = 3: ridge bifurcation
# =============================================================================

NEIGHBOUR_OFFSETS = (
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1)
)


def as_binary_image(image) -> np.ndarray:
    """
    Convert an array-like to a boolean image.

    Args:
        image: 2-D array-like, truthy values are ridge pixels

    Returns:
        Fresh boolean array (never a view on the input)

    Raises:
        ValueError: If the image is not a non-empty 2-D matrix
    """
    binary = np.array(image, dtype=bool, copy=True)

    if binary.ndim != 2:
        raise ValueError(f"Expected a 2-D image, got shape {binary.shape}")
    if binary.shape[0] < 1 or binary.shape[1] < 1:
        raise ValueError(f"Image must have at least one pixel, got shape {binary.shape}")

    return binary


def get_neighbours(image: np.ndarray, row: int, col: int) -> Optional[Tuple[bool, ...]]:
    """
    Get the 8 neighbours of a pixel in clockwise order from north.

    Args:
        image: Binary image
        row, col: Pixel coordinates

    Returns:
        Tuple (N0, ..., N7), or None if (row, col) is outside the image
    """
    rows, cols = image.shape

    if not (0 <= row < rows and 0 <= col < cols):
        return None

    neighbours = []
    for dr, dc in NEIGHBOUR_OFFSETS:
        r, c = row + dr, col + dc
        if 0 <= r < rows and 0 <= c < cols:
            neighbours.append(bool(image[r, c]))
        else:
            neighbours.append(False)

    return tuple(neighbours)


def black_neighbours(neighbours: Sequence[bool]) -> int:
    """Count the black (ridge) pixels of a neighbourhood."""
    return sum(1 for n in neighbours if n)


def transitions(neighbours: Sequence[bool]) -> int:
    """
    Count white-to-black transitions around the neighbourhood ring.

    Args:
        neighbours: 8 neighbour values in clockwise order

    Returns:
        Number of indices i with N[i] white and N[(i+1) % 8] black
    """
    count = 0

    for i in range(8):
        if not neighbours[i] and neighbours[(i + 1) % 8]:
            count += 1

    return count


def identical(image1: np.ndarray, image2: np.ndarray) -> bool:
    """Check whether two images have the same shape and the same pixels."""
    if np.shape(image1) != np.shape(image2):
        return False

    return bool(np.array_equal(image1, image2))


# =============================================================================
# WHOLE-IMAGE VERSIONS
# =============================================================================


def neighbour_planes(image: np.ndarray) -> np.ndarray:
    """
    Compute the neighbourhood of every pixel at once.

    Args:
        image: Binary image of shape (rows, cols)

    Returns:
        Boolean array of shape (8, rows, cols); plane k holds N[k]
        of each pixel
    """
    binary = np.asarray(image, dtype=bool)
    rows, cols = binary.shape
    padded = np.pad(binary, 1, mode='constant', constant_values=False)

    planes = np.empty((8, rows, cols), dtype=bool)
    for k, (dr, dc) in enumerate(NEIGHBOUR_OFFSETS):
        planes[k] = padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]

    return planes


def black_neighbour_map(planes: np.ndarray) -> np.ndarray:
    """Per-pixel black neighbour count from neighbour planes."""
    return planes.sum(axis=0, dtype=np.int32)


def transition_map(planes: np.ndarray) -> np.ndarray:
    """Per-pixel transition count from neighbour planes."""
    following = np.roll(planes, -1, axis=0)
    return (~planes & following).sum(axis=0, dtype=np.int32)
