"""
Minutiae overlays for visual inspection of skeletons.
"""

import math
from pathlib import Path
from typing import List, Tuple, Union

import cv2
import numpy as np

from ridgematch.minutiae.minutiae_extraction import Minutia, MinutiaeType
from ridgematch.utils.io import save_image


# BGR colours
ENDING_COLOR = (0, 0, 255)
BIFURCATION_COLOR = (255, 0, 0)
UNKNOWN_COLOR = (0, 160, 0)


def binary_to_color(image: np.ndarray) -> np.ndarray:
    """
    Convert a binary image to a BGR image (black ridges, white background).

    Args:
        image: Boolean image (True = ridge)

    Returns:
        uint8 array of shape (rows, cols, 3)
    """
    gray = np.where(np.asarray(image, dtype=bool), 0, 255).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def _minutia_color(minutia: Minutia) -> Tuple[int, int, int]:
    if minutia.minutiae_type == MinutiaeType.ENDING:
        return ENDING_COLOR
    if minutia.minutiae_type == MinutiaeType.BIFURCATION:
        return BIFURCATION_COLOR
    return UNKNOWN_COLOR


def draw_minutiae(
    image: np.ndarray,
    minutiae: List[Minutia],
    radius: int = 4,
    line_length: int = 10
) -> np.ndarray:
    """
    Draw minutiae on top of an image.

    Each minutia is drawn as a circle, with a line pointing along its
    orientation (counter-clockwise from the positive column axis).

    Args:
        image: Boolean skeleton or BGR image
        minutiae: Minutiae to draw
        radius: Circle radius in pixels
        line_length: Orientation line length in pixels

    Returns:
        New BGR image with the overlay
    """
    if image.ndim == 2:
        canvas = binary_to_color(image)
    else:
        canvas = image.copy()

    for m in minutiae:
        color = _minutia_color(m)
        theta = math.radians(m.orientation)
        end = (
            int(round(m.col + line_length * math.cos(theta))),
            int(round(m.row - line_length * math.sin(theta)))
        )
        cv2.circle(canvas, (m.col, m.row), radius, color, 1)
        cv2.line(canvas, (m.col, m.row), end, color, 1)

    return canvas


def save_minutiae_overlay(
    skeleton: np.ndarray,
    minutiae: List[Minutia],
    path: Union[str, Path]
) -> None:
    """Draw minutiae on a skeleton and save the result."""
    save_image(draw_minutiae(skeleton, minutiae), path)
