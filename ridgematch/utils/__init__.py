"""
Utility modules for the fingerprint comparison engine.
"""

from .config import (
    Config,
    ImageConfig,
    ThinningConfig,
    ExtractionConfig,
    MatchingConfig,
    LoggingConfig,
    config_from_dict,
    load_config,
    load_yaml,
    merge_configs,
    get_extra_config,
    DEFAULT_CONFIG
)
from .logger import (
    ComparisonLog,
    ProgressTracker,
    setup_logger
)
from .io import (
    load_image,
    binarize_image,
    load_binary_image,
    save_image,
    save_binary_image,
    discover_images,
    parse_finger_filename,
    group_images_by_finger,
    load_json,
    save_json,
    load_minutiae,
    save_minutiae,
    SUPPORTED_EXTENSIONS
)
from .visualization import (
    binary_to_color,
    draw_minutiae,
    save_minutiae_overlay
)

__all__ = [
    # Config
    'Config',
    'ImageConfig',
    'ThinningConfig',
    'ExtractionConfig',
    'MatchingConfig',
    'LoggingConfig',
    'config_from_dict',
    'load_config',
    'load_yaml',
    'merge_configs',
    'get_extra_config',
    'DEFAULT_CONFIG',
    # Logger
    'ComparisonLog',
    'ProgressTracker',
    'setup_logger',
    # IO
    'load_image',
    'binarize_image',
    'load_binary_image',
    'save_image',
    'save_binary_image',
    'discover_images',
    'parse_finger_filename',
    'group_images_by_finger',
    'load_json',
    'save_json',
    'load_minutiae',
    'save_minutiae',
    'SUPPORTED_EXTENSIONS',
    # Visualization
    'binary_to_color',
    'draw_minutiae',
    'save_minutiae_overlay',
]
