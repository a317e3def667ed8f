"""
Minutiae-based fingerprint comparison modules.

This package provides the classical minutiae pipeline:
- Neighbourhood primitives
- Thinning (Zhang-Suen skeletonization)
- Windowed connectivity and orientation estimation
- Minutiae extraction (transition count method)
- Rigid transformations and minutiae matching (alignment search)
"""

from .neighbourhood import (
    NEIGHBOUR_OFFSETS,
    as_binary_image,
    get_neighbours,
    black_neighbours,
    transitions,
    identical,
    neighbour_planes,
    black_neighbour_map,
    transition_map
)
from .thinning import (
    thinning_step,
    thin,
    Thinner
)
from .connectivity import connected_pixels
from .orientation import (
    ORIENTATION_DISTANCE,
    component_points,
    compute_slope,
    compute_angle,
    compute_orientation
)
from .minutiae_extraction import (
    MinutiaeType,
    Minutia,
    minutiae_to_array,
    minutiae_from_array,
    extract_minutiae,
    MinutiaeExtractor
)
from .transformation import (
    apply_rotation,
    apply_translation,
    apply_transformation,
    transform_minutiae,
    transform_array
)
from .minutiae_matching import (
    DISTANCE_THRESHOLD,
    FOUND_THRESHOLD,
    ORIENTATION_THRESHOLD,
    MATCH_ANGLE_OFFSET,
    Alignment,
    MatchResult,
    matching_minutiae_count,
    find_alignment,
    match,
    MinutiaeMatcher,
    MinutiaeMatchingPipeline
)

__all__ = [
    # Neighbourhood
    'NEIGHBOUR_OFFSETS',
    'as_binary_image',
    'get_neighbours',
    'black_neighbours',
    'transitions',
    'identical',
    'neighbour_planes',
    'black_neighbour_map',
    'transition_map',
    # Thinning
    'thinning_step',
    'thin',
    'Thinner',
    # Connectivity and orientation
    'connected_pixels',
    'ORIENTATION_DISTANCE',
    'component_points',
    'compute_slope',
    'compute_angle',
    'compute_orientation',
    # Minutiae extraction
    'MinutiaeType',
    'Minutia',
    'minutiae_to_array',
    'minutiae_from_array',
    'extract_minutiae',
    'MinutiaeExtractor',
    # Transformations
    'apply_rotation',
    'apply_translation',
    'apply_transformation',
    'transform_minutiae',
    'transform_array',
    # Minutiae matching
    'DISTANCE_THRESHOLD',
    'FOUND_THRESHOLD',
    'ORIENTATION_THRESHOLD',
    'MATCH_ANGLE_OFFSET',
    'Alignment',
    'MatchResult',
    'matching_minutiae_count',
    'find_alignment',
    'match',
    'MinutiaeMatcher',
    'MinutiaeMatchingPipeline',
]
