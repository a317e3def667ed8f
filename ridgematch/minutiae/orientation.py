"""
Minutia orientation estimation.

The orientation of a minutia is the direction of the ridge it belongs
to, estimated by a least-squares line through the connected ridge
pixels around it, then disambiguated by the side of the minutia on
which most of those pixels lie.
"""

import math

import numpy as np

from ridgematch.minutiae.connectivity import connected_pixels


# Number of pixels considered in each direction around a minutia
ORIENTATION_DISTANCE = 16


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Coordinates are translated so that the minutia is the origin, with
# x pointing right and y pointing up:
#     x = j - col,  y = row - i
#
# Slope of the regression line through the origin:
#     Sxx = Σ x²,  Syy = Σ y²,  Sxy = Σ xy
#     Sxx = 0      -> vertical ridge (+inf)
#     Sxx >= Syy   -> a = Sxy / Sxx     (regression of y on x)
#     Sxx <  Syy   -> a = Syy / Sxy     (inverse of the regression of x on y)
#
# The line only gives a direction modulo π. The pixels are split by the
# perpendicular through the origin (y = -x / a); the ridge points toward
# the half-plane holding the majority of them.
# =============================================================================


def component_points(connected: np.ndarray, row: int, col: int) -> np.ndarray:
    """
    Translate the pixels of a component to minutia-centred coordinates.

    Args:
        connected: Boolean mask of the component
        row, col: Minutia coordinates

    Returns:
        Float array of shape (n, 2) with columns (x, y), in row-major
        pixel order
    """
    rows_idx, cols_idx = np.nonzero(connected)
    x = cols_idx.astype(np.float64) - col
    y = row - rows_idx.astype(np.float64)
    return np.column_stack((x, y))


def compute_slope(points: np.ndarray) -> float:
    """
    Compute the slope of the ridge through the origin.

    Args:
        points: Array of shape (n, 2) with (x, y) coordinates

    Returns:
        Slope of the ridge; math.inf for vertical ridges
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    x, y = points[:, 0], points[:, 1]

    sum_x2 = float(np.dot(x, x))
    sum_y2 = float(np.dot(y, y))
    sum_xy = float(np.dot(x, y))

    if sum_x2 == 0.0:
        return math.inf
    if sum_x2 >= sum_y2:
        return sum_xy / sum_x2
    # Sxy = 0 here means Syy / 0 with Syy > 0
    if sum_xy == 0.0:
        return math.inf
    return sum_y2 / sum_xy


def compute_angle(points: np.ndarray, slope: float) -> float:
    """
    Compute the ridge angle from its slope and the pixel distribution.

    Args:
        points: Array of shape (n, 2) with (x, y) coordinates
        slope: Slope returned by compute_slope

    Returns:
        Angle in radians, in [-π/2, 3π/2)
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    x, y = points[:, 0], points[:, 1]

    if slope == 0.0:
        is_up = x > 0
    elif slope == math.inf:
        is_up = y > 0
    else:
        is_up = y >= (-1 / slope) * x

    up = int(np.count_nonzero(is_up))
    down = len(points) - up

    if slope == math.inf:
        return math.pi / 2 if up > down else -math.pi / 2

    angle = math.atan(slope)
    if (up > down and angle < 0.0) or (down >= up and angle >= 0.0):
        angle += math.pi

    return angle


def compute_orientation(
    image: np.ndarray,
    row: int,
    col: int,
    distance: int = ORIENTATION_DISTANCE
) -> int:
    """
    Compute the orientation of a minutia in degrees.

    Args:
        image: Binary skeleton image
        row, col: Minutia coordinates (inside the image)
        distance: Half-size of the window used for the regression

    Returns:
        Orientation in integer degrees, in [0, 360)
    """
    connected = connected_pixels(image, row, col, distance)
    if connected is None:
        raise ValueError(f"Pixel ({row}, {col}) is outside the image")

    points = component_points(connected, row, col)
    slope = compute_slope(points)
    angle = compute_angle(points, slope)

    # Round half up
    orientation = int(math.floor(math.degrees(angle) + 0.5))
    if orientation < 0:
        orientation += 360

    return orientation
