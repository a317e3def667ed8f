"""
Minutiae extraction from fingerprint skeleton images.

This module implements minutiae detection using the transition count
of each skeleton pixel, and attaches a ridge orientation to every
detected minutia.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np

from ridgematch.minutiae.neighbourhood import (
    as_binary_image,
    neighbour_planes,
    transition_map,
)
from ridgematch.minutiae.orientation import ORIENTATION_DISTANCE, compute_orientation


logger = logging.getLogger(__name__)


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Minutiae are local discontinuities in the ridge pattern:
# - Ridge ending: A ridge that terminates abruptly
# - Ridge bifurcation: A single ridge that splits into two ridges
#
# On a one-pixel-wide skeleton, the number of white -> black transitions
# T(P) around a ridge pixel P classifies it:
# - T = 1: Ridge ending
# - T = 2: Ridge continuing point
# - T = 3: Ridge bifurcation
#
# Each minutia has:
# - Position (row, col)
# - Orientation θ in integer degrees [0, 360)
# =============================================================================


class MinutiaeType(Enum):
    """Enumeration of minutiae types (value = transition count)."""
    ENDING = 1
    BIFURCATION = 3


@dataclass(frozen=True)
class Minutia:
    """
    Represents a single minutia point.

    Attributes:
        row: Row coordinate (increases downward)
        col: Column coordinate (increases rightward)
        orientation: Orientation angle in degrees
        minutiae_type: Ending or bifurcation, if known; ignored by equality
    """
    row: int
    col: int
    orientation: int
    minutiae_type: Optional[MinutiaeType] = field(default=None, compare=False)

    def as_tuple(self) -> Tuple[int, int, int]:
        """Return (row, col, orientation)."""
        return (self.row, self.col, self.orientation)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'row': self.row,
            'col': self.col,
            'orientation': self.orientation,
            'type': self.minutiae_type.name if self.minutiae_type else None
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Minutia':
        """Create from dictionary."""
        type_name = d.get('type')
        return cls(
            row=int(d['row']),
            col=int(d['col']),
            orientation=int(d['orientation']),
            minutiae_type=MinutiaeType[type_name] if type_name else None
        )


def minutiae_to_array(minutiae: Iterable[Minutia]) -> np.ndarray:
    """
    Stack minutiae into an integer array.

    Args:
        minutiae: Minutiae in order

    Returns:
        Array of shape (n, 3) with columns (row, col, orientation)
    """
    array = np.array([m.as_tuple() for m in minutiae], dtype=np.int64)
    return array.reshape(-1, 3)


def minutiae_from_array(array: np.ndarray) -> List[Minutia]:
    """Convert an (n, 3) integer array back to minutiae."""
    return [Minutia(int(r), int(c), int(o)) for r, c, o in np.asarray(array).reshape(-1, 3)]


def extract_minutiae(
    skeleton: np.ndarray,
    orientation_distance: int = ORIENTATION_DISTANCE
) -> List[Minutia]:
    """
    Extract minutiae from a skeleton image.

    Algorithm Steps:
    ----------------
    1. Scan interior pixels in row-major order (the one-pixel border
       is skipped)
    2. Compute the transition count of each ridge pixel
    3. T = 1: ridge ending, T = 3: bifurcation
    4. Estimate orientation from the connected ridge pixels

    Args:
        skeleton: Binary skeleton image
        orientation_distance: Window half-size for orientation estimation

    Returns:
        List of Minutia objects in scan order
    """
    skeleton = as_binary_image(skeleton)
    rows, cols = skeleton.shape

    transition_counts = transition_map(neighbour_planes(skeleton))
    candidates = skeleton & ((transition_counts == 1) | (transition_counts == 3))

    # Exclude the border
    interior = np.zeros_like(candidates)
    interior[1:rows - 1, 1:cols - 1] = True
    candidates &= interior

    minutiae = []
    # argwhere yields coordinates in row-major order
    for row, col in np.argwhere(candidates):
        row, col = int(row), int(col)
        orientation = compute_orientation(skeleton, row, col, orientation_distance)
        minutiae.append(Minutia(
            row=row,
            col=col,
            orientation=orientation,
            minutiae_type=MinutiaeType(int(transition_counts[row, col]))
        ))

    logger.debug(
        "Extracted %d minutiae from a %dx%d skeleton",
        len(minutiae), rows, cols
    )

    return minutiae


class MinutiaeExtractor:
    """
    Configurable minutiae extraction pipeline.
    """

    def __init__(self, orientation_distance: int = ORIENTATION_DISTANCE):
        """
        Initialize extractor.

        Args:
            orientation_distance: Window half-size for orientation estimation
        """
        self.orientation_distance = orientation_distance

    @classmethod
    def from_config(cls, config) -> 'MinutiaeExtractor':
        """Build an extractor from an ExtractionConfig."""
        return cls(orientation_distance=config.orientation_distance)

    def extract(self, skeleton: np.ndarray) -> List[Minutia]:
        """
        Extract minutiae from skeleton image.

        Args:
            skeleton: Binary skeleton image

        Returns:
            List of extracted minutiae
        """
        return extract_minutiae(skeleton, self.orientation_distance)
