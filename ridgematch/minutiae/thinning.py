"""
Image thinning (skeletonization).

This module implements Zhang-Suen thinning, which reduces binary
fingerprint ridges to single-pixel-wide skeletons, a prerequisite for
minutiae extraction.
"""

import logging
from typing import Optional

import numpy as np

from ridgematch.minutiae.neighbourhood import (
    as_binary_image,
    black_neighbour_map,
    identical,
    neighbour_planes,
    transition_map,
)


logger = logging.getLogger(__name__)


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Zhang-Suen Algorithm:
# A parallel thinning algorithm that iterates until convergence.
# Each iteration has two sub-iterations (steps 0 and 1).
#
# For a pixel P with neighbours N0-N7 (clockwise from north):
#     N7 N0 N1
#     N6 P  N2
#     N5 N4 N3
#
# Conditions for deletion in step 0:
# - 2 <= B(P) <= 6   (B = number of black neighbours)
# - T(P) = 1         (T = number of white -> black transitions)
# - at least one of N0, N2, N4 is white
# - at least one of N2, N4, N6 is white
#
# Step 1 differs in the last two conditions:
# - at least one of N0, N2, N6 is white
# - at least one of N0, N4, N6 is white
#
# All conditions are evaluated on the image as it was before the step;
# deletions are applied together at the end of the step.
#
# Reference:
# Zhang, T. Y., & Suen, C. Y. (1984).
# "A fast parallel algorithm for thinning digital patterns."
# Communications of the ACM, 27(3), 236-239.
# =============================================================================


def thinning_step(image: np.ndarray, step: int) -> np.ndarray:
    """
    Perform one sub-iteration of Zhang-Suen thinning.

    Args:
        image: Binary image (True = ridge)
        step: Sub-iteration number (0 or 1)

    Returns:
        New image with the deletable pixels of this step removed

    Raises:
        ValueError: If step is not 0 or 1
    """
    if step not in (0, 1):
        raise ValueError(f"Thinning step must be 0 or 1, got {step}")

    binary = as_binary_image(image)
    planes = neighbour_planes(binary)
    n0, _, n2, _, n4, _, n6, _ = planes

    # Condition 1: 2 <= B(P) <= 6
    black = black_neighbour_map(planes)
    deletable = binary & (black >= 2) & (black <= 6)

    # Condition 2: T(P) = 1
    deletable &= transition_map(planes) == 1

    # Conditions 3 and 4 depend on the step
    if step == 0:
        deletable &= ~(n0 & n2 & n4)
        deletable &= ~(n2 & n4 & n6)
    else:
        deletable &= ~(n0 & n2 & n6)
        deletable &= ~(n0 & n4 & n6)

    binary[deletable] = False
    return binary


def thin(image: np.ndarray, max_iterations: Optional[int] = None) -> np.ndarray:
    """
    Apply Zhang-Suen thinning until the skeleton stops changing.

    Args:
        image: Binary image (ridges = True, background = False)
        max_iterations: Optional cap on the number of step pairs;
            None runs to the fixed point

    Returns:
        Thinned (skeletonized) image of the same shape
    """
    current = as_binary_image(image)
    iterations = 0

    while max_iterations is None or iterations < max_iterations:
        thinned = thinning_step(current, 0)
        thinned = thinning_step(thinned, 1)
        iterations += 1

        if identical(current, thinned):
            break

        current = thinned

    logger.debug(
        "Thinning finished after %d iterations (%d ridge pixels left)",
        iterations, int(current.sum())
    )

    return current


class Thinner:
    """
    Configurable fingerprint thinning processor.
    """

    def __init__(self, max_iterations: Optional[int] = None):
        """
        Initialize thinner.

        Args:
            max_iterations: Maximum thinning iterations (None = until convergence)
        """
        self.max_iterations = max_iterations

    @classmethod
    def from_config(cls, config) -> 'Thinner':
        """Build a thinner from a ThinningConfig."""
        return cls(max_iterations=config.max_iterations)

    def process(self, image: np.ndarray) -> np.ndarray:
        """
        Thin a binary fingerprint image.

        Args:
            image: Binary fingerprint image

        Returns:
            Thinned image
        """
        return thin(image, self.max_iterations)
