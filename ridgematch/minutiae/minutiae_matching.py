"""
Minutiae-based fingerprint matching.

This module decides whether two minutiae sets come from the same finger
by searching for a rigid alignment under which enough minutiae coincide.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ridgematch.minutiae.minutiae_extraction import (
    Minutia,
    MinutiaeExtractor,
    minutiae_to_array,
)
from ridgematch.minutiae.thinning import Thinner
from ridgematch.minutiae.transformation import transform_array


logger = logging.getLogger(__name__)


# Maximum distance between two minutiae to be considered matching
DISTANCE_THRESHOLD = 5

# Number of matching minutiae needed for two fingerprints to match
FOUND_THRESHOLD = 20

# Maximum orientation difference (degrees) between matching minutiae
ORIENTATION_THRESHOLD = 20

# Rotation offset (degrees) tested in each direction around the
# orientation difference of a candidate pair
MATCH_ANGLE_OFFSET = 2


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Alignment search:
# -----------------
# For every pair (a, b) with a in A and b in B, hypothesize that b is the
# same minutia as a. The rotation is estimated from the orientation
# difference |θ_b - θ_a| (tested with a small offset around it), the
# rotation center is a, and the translation brings b onto a:
#
#     B' = T(B; center = (a.row, a.col),
#              Δ = (b.row - a.row, b.col - a.col),
#              ρ ∈ [|θ_b - θ_a| - offset, |θ_b - θ_a| + offset])
#
# Matching criterion:
# -------------------
# a ∈ A is matched if some b' ∈ B' satisfies
#     ||a - b'|| <= distance_threshold  and  |θ_a - θ_b'| <= orientation_threshold
#
# A single b' may match several a's. The fingerprints match when the
# number of matched a's reaches found_threshold for some hypothesis.
# Hypotheses are tried in order (a, then b, then ρ ascending), and the
# search stops at the first success.
# =============================================================================


@dataclass(frozen=True)
class Alignment:
    """
    Hypothesis that aligned two minutiae sets.

    Attributes:
        index1: Index of the reference minutia in the first set
        index2: Index of the paired minutia in the second set
        rotation: Rotation applied to the second set (degrees)
        matched: Number of matched minutiae of the first set
    """
    index1: int
    index2: int
    rotation: int
    matched: int


@dataclass
class MatchResult:
    """
    Result of a minutiae matching operation.

    Attributes:
        is_match: Whether the fingerprints are considered identical
        num_minutiae1: Size of the first minutiae set
        num_minutiae2: Size of the second minutiae set
        alignment: Alignment that decided the match, if any
    """
    is_match: bool
    num_minutiae1: int
    num_minutiae2: int
    alignment: Optional[Alignment] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'is_match': self.is_match,
            'num_minutiae1': self.num_minutiae1,
            'num_minutiae2': self.num_minutiae2,
            'alignment': None if self.alignment is None else {
                'index1': self.alignment.index1,
                'index2': self.alignment.index2,
                'rotation': self.alignment.rotation,
                'matched': self.alignment.matched,
            }
        }


def _count_matches(
    array1: np.ndarray,
    array2: np.ndarray,
    max_distance: float,
    max_orientation: float
) -> int:
    if len(array1) == 0 or len(array2) == 0:
        return 0

    d_row = array1[:, None, 0] - array2[None, :, 0]
    d_col = array1[:, None, 1] - array2[None, :, 1]
    distance = np.sqrt(d_row ** 2 + d_col ** 2)
    d_orientation = np.abs(array1[:, None, 2] - array2[None, :, 2])

    close = (distance <= max_distance) & (d_orientation <= max_orientation)
    return int(np.count_nonzero(close.any(axis=1)))


def matching_minutiae_count(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    max_distance: float = DISTANCE_THRESHOLD,
    max_orientation: float = ORIENTATION_THRESHOLD
) -> int:
    """
    Count the minutiae of the first set that have a match in the second.

    Args:
        minutiae1: First minutiae set
        minutiae2: Second minutiae set
        max_distance: Maximum Euclidean distance (pixels)
        max_orientation: Maximum absolute orientation difference (degrees)

    Returns:
        Number of minutiae in minutiae1 matched by at least one minutia
        of minutiae2
    """
    return _count_matches(
        minutiae_to_array(minutiae1),
        minutiae_to_array(minutiae2),
        max_distance,
        max_orientation
    )


def find_alignment(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    distance_threshold: float = DISTANCE_THRESHOLD,
    orientation_threshold: float = ORIENTATION_THRESHOLD,
    found_threshold: int = FOUND_THRESHOLD,
    angle_offset: int = MATCH_ANGLE_OFFSET
) -> Optional[Alignment]:
    """
    Search for the first alignment under which the two sets match.

    Args:
        minutiae1: First minutiae set (kept fixed)
        minutiae2: Second minutiae set (transformed)
        distance_threshold: Max distance for minutiae pairing (pixels)
        orientation_threshold: Max orientation difference for pairing (degrees)
        found_threshold: Matched minutiae needed to accept an alignment
        angle_offset: Rotation offset tested around each candidate rotation

    Returns:
        The first successful Alignment, or None
    """
    array1 = minutiae_to_array(minutiae1)
    array2 = minutiae_to_array(minutiae2)

    for i, (row1, col1, orientation1) in enumerate(array1.tolist()):
        for j, (row2, col2, orientation2) in enumerate(array2.tolist()):
            rotation = abs(orientation2 - orientation1)

            for r in range(rotation - angle_offset, rotation + angle_offset + 1):
                transformed = transform_array(
                    array2, row1, col1,
                    row2 - row1, col2 - col1, r
                )
                count = _count_matches(
                    array1, transformed,
                    distance_threshold, orientation_threshold
                )

                if count >= found_threshold:
                    logger.debug(
                        "Alignment found: pair (%d, %d), rotation %d, %d matched",
                        i, j, r, count
                    )
                    return Alignment(index1=i, index2=j, rotation=r, matched=count)

    return None


def match(minutiae1: List[Minutia], minutiae2: List[Minutia]) -> bool:
    """
    Decide whether two minutiae sets come from the same finger.

    Args:
        minutiae1: First minutiae set
        minutiae2: Second minutiae set

    Returns:
        True if some alignment matches at least FOUND_THRESHOLD minutiae
    """
    return find_alignment(minutiae1, minutiae2) is not None


class MinutiaeMatcher:
    """
    Minutiae-based fingerprint matcher.

    This matcher compares fingerprints using their extracted minutiae
    sets, searching exhaustively for an alignment that makes enough
    minutiae coincide.
    """

    def __init__(
        self,
        distance_threshold: float = DISTANCE_THRESHOLD,
        orientation_threshold: float = ORIENTATION_THRESHOLD,
        found_threshold: int = FOUND_THRESHOLD,
        angle_offset: int = MATCH_ANGLE_OFFSET
    ):
        """
        Initialize minutiae matcher.

        Args:
            distance_threshold: Max distance for minutiae pairing (pixels)
            orientation_threshold: Max orientation difference for pairing (degrees)
            found_threshold: Matched minutiae needed for a match
            angle_offset: Rotation offset tested in each direction (degrees)
        """
        self.distance_threshold = distance_threshold
        self.orientation_threshold = orientation_threshold
        self.found_threshold = found_threshold
        self.angle_offset = angle_offset

    @classmethod
    def from_config(cls, config) -> 'MinutiaeMatcher':
        """Build a matcher from a MatchingConfig."""
        return cls(
            distance_threshold=config.distance_threshold,
            orientation_threshold=config.orientation_threshold,
            found_threshold=config.found_threshold,
            angle_offset=config.angle_offset
        )

    @property
    def name(self) -> str:
        return "Minutiae"

    def match_minutiae(
        self,
        minutiae1: List[Minutia],
        minutiae2: List[Minutia]
    ) -> MatchResult:
        """
        Match two minutiae sets.

        Args:
            minutiae1: First minutiae set
            minutiae2: Second minutiae set

        Returns:
            MatchResult with the decision and the deciding alignment
        """
        alignment = find_alignment(
            minutiae1, minutiae2,
            self.distance_threshold,
            self.orientation_threshold,
            self.found_threshold,
            self.angle_offset
        )

        return MatchResult(
            is_match=alignment is not None,
            num_minutiae1=len(minutiae1),
            num_minutiae2=len(minutiae2),
            alignment=alignment
        )


class MinutiaeMatchingPipeline:
    """
    Complete pipeline for minutiae-based fingerprint matching.

    Combines:
    - Thinning
    - Minutiae extraction
    - Minutiae matching
    """

    def __init__(self, thinner=None, extractor=None, matcher=None):
        """
        Initialize pipeline.

        Args:
            thinner: Thinner instance
            extractor: MinutiaeExtractor instance
            matcher: MinutiaeMatcher instance
        """
        self.thinner = thinner or Thinner()
        self.extractor = extractor or MinutiaeExtractor()
        self.matcher = matcher or MinutiaeMatcher()

    @classmethod
    def from_config(cls, config) -> 'MinutiaeMatchingPipeline':
        """Build a pipeline from a Config."""
        return cls(
            thinner=Thinner.from_config(config.thinning),
            extractor=MinutiaeExtractor.from_config(config.extraction),
            matcher=MinutiaeMatcher.from_config(config.matching)
        )

    def extract_minutiae(self, image: np.ndarray) -> List[Minutia]:
        """
        Extract minutiae from a binary fingerprint image.

        Args:
            image: Binary fingerprint image (True = ridge)

        Returns:
            List of extracted minutiae
        """
        skeleton = self.thinner.process(image)
        return self.extractor.extract(skeleton)

    def match(self, image1: np.ndarray, image2: np.ndarray) -> MatchResult:
        """
        Match two binary fingerprint images.

        Args:
            image1: First fingerprint image
            image2: Second fingerprint image

        Returns:
            MatchResult
        """
        minutiae1 = self.extract_minutiae(image1)
        minutiae2 = self.extract_minutiae(image2)

        logger.info(
            "Matching %d minutiae against %d minutiae",
            len(minutiae1), len(minutiae2)
        )

        return self.matcher.match_minutiae(minutiae1, minutiae2)
