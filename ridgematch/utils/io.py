"""
I/O utilities for the fingerprint comparison engine.

Provides functions for loading, binarizing and saving fingerprint
images, and for persisting extracted minutiae.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cv2
import numpy as np

from ridgematch.minutiae.minutiae_extraction import Minutia


# Supported image extensions
SUPPORTED_EXTENSIONS = {'.tif', '.tiff', '.png', '.jpg', '.jpeg', '.bmp'}


def load_image(path: Union[str, Path], grayscale: bool = True) -> np.ndarray:
    """
    Load an image from disk.

    Args:
        path: Path to the image file
        grayscale: Whether to load as grayscale

    Returns:
        Image as uint8 numpy array

    Raises:
        FileNotFoundError: If image file does not exist
        ValueError: If image cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    flag = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    image = cv2.imread(str(path), flag)

    if image is None:
        raise ValueError(f"Failed to load image: {path}")

    return image


def binarize_image(
    image: np.ndarray,
    method: str = 'global',
    threshold: int = 128,
    block_size: int = 15,
    offset: int = 10
) -> np.ndarray:
    """
    Binarize a grayscale fingerprint image.

    Dark pixels are ridges.

    Args:
        image: Grayscale fingerprint image
        method: 'global' (fixed threshold), 'otsu', or 'adaptive'
        threshold: Cut for the global method; pixels below it are ridges
        block_size: Block size for adaptive method
        offset: Offset for adaptive thresholding

    Returns:
        Boolean image (True = ridge)
    """
    # Convert to uint8 if needed
    if image.dtype in [np.float32, np.float64]:
        image = (image * 255).clip(0, 255).astype(np.uint8)
    elif image.dtype == bool:
        # Already binary (True = ridge)
        return image.copy()

    if method == 'global':
        binary = image < threshold

    elif method == 'otsu':
        _, binary = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU)
        binary = binary > 0

    elif method == 'adaptive':
        binary = cv2.adaptiveThreshold(
            image, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY_INV, block_size, offset
        )
        binary = binary > 0

    else:
        raise ValueError(f"Unknown binarization method: {method}")

    return binary


def load_binary_image(
    path: Union[str, Path],
    method: str = 'global',
    threshold: int = 128,
    block_size: int = 15,
    offset: int = 10
) -> np.ndarray:
    """
    Load a fingerprint image and binarize it.

    Args:
        path: Path to the image file
        method: Binarization method (see binarize_image)
        threshold: Cut for the global method
        block_size: Block size for adaptive method
        offset: Offset for adaptive thresholding

    Returns:
        Boolean image (True = ridge)
    """
    image = load_image(path, grayscale=True)
    return binarize_image(image, method, threshold, block_size, offset)


def save_image(image: np.ndarray, path: Union[str, Path]) -> None:
    """
    Save an image to disk.

    Args:
        image: uint8 grayscale or BGR image
        path: Output path

    Raises:
        ValueError: If OpenCV cannot encode the image
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not cv2.imwrite(str(path), image):
        raise ValueError(f"Failed to write image: {path}")


def save_binary_image(image: np.ndarray, path: Union[str, Path]) -> None:
    """
    Save a binary image with black ridges on a white background.

    Args:
        image: Boolean image (True = ridge)
        path: Output path
    """
    pixels = np.where(np.asarray(image, dtype=bool), 0, 255).astype(np.uint8)
    save_image(pixels, path)


def discover_images(
    directory: Union[str, Path],
    extensions: Optional[set] = None,
    recursive: bool = True
) -> List[Path]:
    """
    Discover all images in a directory.

    Args:
        directory: Root directory to search
        extensions: Set of valid extensions (default: SUPPORTED_EXTENSIONS)
        recursive: Whether to search subdirectories

    Returns:
        Sorted list of paths to discovered images
    """
    directory = Path(directory)
    extensions = extensions or SUPPORTED_EXTENSIONS

    images = []
    pattern = '**/*' if recursive else '*'

    for path in directory.glob(pattern):
        if path.is_file() and path.suffix.lower() in extensions:
            images.append(path)

    return sorted(images)


def parse_finger_filename(filename: str) -> Tuple[int, int]:
    """
    Parse a fingerprint filename to extract finger and sample IDs.

    Naming convention: {finger_id}_{sample_id}.png
    Example: "1_2.png" -> finger 1, sample 2

    Args:
        filename: Filename to parse

    Returns:
        Tuple of (finger_id, sample_id)

    Raises:
        ValueError: If the filename does not follow the convention
    """
    stem = Path(filename).stem
    parts = stem.split('_')

    if len(parts) == 2 and parts[0].isdigit() and parts[1].isdigit():
        return int(parts[0]), int(parts[1])

    raise ValueError(f"Cannot parse fingerprint filename: {filename}")


def group_images_by_finger(images: List[Path]) -> Dict[int, List[Path]]:
    """
    Group images by finger ID, skipping files that do not follow the
    naming convention.

    Args:
        images: List of image paths

    Returns:
        Dictionary mapping finger ID to list of image paths
    """
    groups: Dict[int, List[Path]] = {}

    for img_path in images:
        try:
            finger_id, _ = parse_finger_filename(img_path.name)
        except ValueError:
            continue
        groups.setdefault(finger_id, []).append(img_path)

    return groups


def load_json(path: Union[str, Path]) -> Any:
    """Load a JSON file."""
    with open(path, 'r') as f:
        return json.load(f)


def save_json(data: Any, path: Union[str, Path], indent: int = 2) -> None:
    """Save data to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)


def load_minutiae(path: Union[str, Path]) -> List[Minutia]:
    """
    Load minutiae from a JSON file.

    Expected format: List of dicts with 'row', 'col', 'orientation'
    and optional 'type' keys.

    Args:
        path: Path to minutiae file

    Returns:
        List of Minutia objects
    """
    return [Minutia.from_dict(d) for d in load_json(path)]


def save_minutiae(minutiae: List[Minutia], path: Union[str, Path]) -> None:
    """
    Save minutiae to a JSON file.

    Args:
        minutiae: List of minutiae
        path: Output path
    """
    save_json([m.to_dict() for m in minutiae], path)
