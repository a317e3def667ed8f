"""
Rigid transformations of minutiae.

Coordinates follow the image convention: rows increase downward and
columns increase rightward. Rotations are expressed in integer degrees,
counter-clockwise in the usual (x right, y up) frame.
"""

import math
from typing import List

import numpy as np

from ridgematch.minutiae.minutiae_extraction import Minutia


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Rotation of a minutia m = (row, col, θ) by ρ degrees about (cr, cc):
#     x  = col - cc,             y  = cr - row
#     x' = x cos ρ - y sin ρ,    y' = x sin ρ + y cos ρ
#     row' = round(cr - y'),     col' = round(x' + cc)
#     θ' = (θ + ρ) mod 360
#
# Translation by (Δr, Δc) subtracts the offsets:
#     (row - Δr, col - Δc, θ)
#
# A full transformation is a rotation followed by a translation.
# Rounding is half-up (floor(v + 0.5)).
# =============================================================================


def _round_half_up(value):
    return np.floor(value + 0.5)


def apply_rotation(
    minutia: Minutia,
    center_row: int,
    center_col: int,
    rotation: int
) -> Minutia:
    """
    Rotate a minutia about a center.

    Args:
        minutia: Minutia to rotate
        center_row, center_col: Rotation center
        rotation: Rotation angle in degrees

    Returns:
        Rotated minutia
    """
    theta = rotation * (math.pi / 180)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)

    x = minutia.col - center_col
    y = center_row - minutia.row

    x_rot = x * cos_t - y * sin_t
    y_rot = x * sin_t + y * cos_t

    return Minutia(
        row=int(math.floor(center_row - y_rot + 0.5)),
        col=int(math.floor(x_rot + center_col + 0.5)),
        orientation=(minutia.orientation + rotation) % 360,
        minutiae_type=minutia.minutiae_type
    )


def apply_translation(
    minutia: Minutia,
    row_translation: int,
    col_translation: int
) -> Minutia:
    """
    Translate a minutia by subtracting the given offsets.

    Args:
        minutia: Minutia to translate
        row_translation, col_translation: Offsets to subtract

    Returns:
        Translated minutia
    """
    return Minutia(
        row=minutia.row - row_translation,
        col=minutia.col - col_translation,
        orientation=minutia.orientation,
        minutiae_type=minutia.minutiae_type
    )


def apply_transformation(
    minutia: Minutia,
    center_row: int,
    center_col: int,
    row_translation: int,
    col_translation: int,
    rotation: int
) -> Minutia:
    """Rotate a minutia about a center, then translate it."""
    rotated = apply_rotation(minutia, center_row, center_col, rotation)
    return apply_translation(rotated, row_translation, col_translation)


def transform_minutiae(
    minutiae: List[Minutia],
    center_row: int,
    center_col: int,
    row_translation: int,
    col_translation: int,
    rotation: int
) -> List[Minutia]:
    """
    Apply the same rigid transformation to a whole minutiae set.

    Args:
        minutiae: Minutiae to transform
        center_row, center_col: Rotation center
        row_translation, col_translation: Offsets subtracted after rotation
        rotation: Rotation angle in degrees

    Returns:
        New list of transformed minutiae, in the same order
    """
    return [
        apply_transformation(
            m, center_row, center_col,
            row_translation, col_translation, rotation
        )
        for m in minutiae
    ]


def transform_array(
    array: np.ndarray,
    center_row: int,
    center_col: int,
    row_translation: int,
    col_translation: int,
    rotation: int
) -> np.ndarray:
    """
    Vectorized transform_minutiae on an (n, 3) array.

    Gives the same integers as the per-minutia functions.

    Args:
        array: Integer array with columns (row, col, orientation)
        center_row, center_col: Rotation center
        row_translation, col_translation: Offsets subtracted after rotation
        rotation: Rotation angle in degrees

    Returns:
        New (n, 3) integer array
    """
    theta = rotation * (math.pi / 180)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)

    x = (array[:, 1] - center_col).astype(np.float64)
    y = (center_row - array[:, 0]).astype(np.float64)

    x_rot = x * cos_t - y * sin_t
    y_rot = x * sin_t + y * cos_t

    transformed = np.empty_like(array)
    transformed[:, 0] = _round_half_up(center_row - y_rot).astype(np.int64) - row_translation
    transformed[:, 1] = _round_half_up(x_rot + center_col).astype(np.int64) - col_translation
    transformed[:, 2] = (array[:, 2] + rotation) % 360

    return transformed
