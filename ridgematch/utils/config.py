"""
Configuration management for the fingerprint comparison engine.

This module provides utilities for loading, validating, and accessing
configuration parameters from YAML files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml

from ridgematch.minutiae.minutiae_matching import (
    DISTANCE_THRESHOLD,
    FOUND_THRESHOLD,
    MATCH_ANGLE_OFFSET,
    ORIENTATION_THRESHOLD,
)
from ridgematch.minutiae.orientation import ORIENTATION_DISTANCE


@dataclass
class ImageConfig:
    """Configuration for image loading and binarization."""
    binarization_method: str = "global"
    threshold: int = 128
    block_size: int = 15
    offset: int = 10


@dataclass
class ThinningConfig:
    """Configuration for skeletonization."""
    max_iterations: Optional[int] = None


@dataclass
class ExtractionConfig:
    """Configuration for minutiae extraction."""
    orientation_distance: int = ORIENTATION_DISTANCE


@dataclass
class MatchingConfig:
    """Configuration for minutiae matching."""
    distance_threshold: float = DISTANCE_THRESHOLD
    orientation_threshold: float = ORIENTATION_THRESHOLD
    found_threshold: int = FOUND_THRESHOLD
    angle_offset: int = MATCH_ANGLE_OFFSET


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_dir: str = "logs"
    save_results: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Attributes:
        image: Image loading and binarization settings
        thinning: Thinning settings
        extraction: Minutiae extraction settings
        matching: Matching thresholds
        logging: Logging configuration
        extra: Any other top-level sections of the YAML file
    """
    image: ImageConfig = field(default_factory=ImageConfig)
    thinning: ThinningConfig = field(default_factory=ThinningConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: Dict[str, Any] = field(default_factory=dict)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary containing the configuration (empty for an empty file)

    Raises:
        FileNotFoundError: If the configuration file does not exist
        yaml.YAMLError: If the YAML file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    The override dictionary values take precedence over base values.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def config_from_dict(config_dict: Dict[str, Any]) -> Config:
    """
    Build a Config from a plain dictionary.

    Args:
        config_dict: Dictionary with optional 'image', 'thinning',
            'extraction', 'matching' and 'logging' sections

    Returns:
        Config object; missing values take their defaults
    """
    config_dict = dict(config_dict)

    image_dict = config_dict.pop('image', None) or {}
    thinning_dict = config_dict.pop('thinning', None) or {}
    extraction_dict = config_dict.pop('extraction', None) or {}
    matching_dict = config_dict.pop('matching', None) or {}
    logging_dict = config_dict.pop('logging', None) or {}

    image_config = ImageConfig(
        binarization_method=image_dict.get('binarization_method', 'global'),
        threshold=int(image_dict.get('threshold', 128)),
        block_size=int(image_dict.get('block_size', 15)),
        offset=int(image_dict.get('offset', 10))
    )

    max_iterations = thinning_dict.get('max_iterations')
    thinning_config = ThinningConfig(
        max_iterations=None if max_iterations is None else int(max_iterations)
    )

    extraction_config = ExtractionConfig(
        orientation_distance=int(
            extraction_dict.get('orientation_distance', ORIENTATION_DISTANCE)
        )
    )

    matching_config = MatchingConfig(
        distance_threshold=matching_dict.get('distance_threshold', DISTANCE_THRESHOLD),
        orientation_threshold=matching_dict.get('orientation_threshold', ORIENTATION_THRESHOLD),
        found_threshold=int(matching_dict.get('found_threshold', FOUND_THRESHOLD)),
        angle_offset=int(matching_dict.get('angle_offset', MATCH_ANGLE_OFFSET))
    )

    logging_config = LoggingConfig(
        level=logging_dict.get('level', 'INFO'),
        log_dir=logging_dict.get('log_dir', 'logs'),
        save_results=logging_dict.get('save_results', True)
    )

    return Config(
        image=image_config,
        thinning=thinning_config,
        extraction=extraction_config,
        matching=matching_config,
        logging=logging_config,
        extra=config_dict
    )


def load_config(
    config_path: Union[str, Path],
    base_config_path: Optional[Union[str, Path]] = None
) -> Config:
    """
    Load configuration from YAML files.

    Optionally merges with a base configuration file.

    Args:
        config_path: Path to the main configuration file
        base_config_path: Optional path to base configuration to merge with

    Returns:
        Config object with loaded settings
    """
    config_dict = load_yaml(config_path)

    if base_config_path is not None:
        base_dict = load_yaml(base_config_path)
        config_dict = merge_configs(base_dict, config_dict)

    return config_from_dict(config_dict)


def get_extra_config(config: Config, key: str, default: Any = None) -> Any:
    """
    Get a value from the non-standard sections of a configuration.

    Args:
        config: Configuration object
        key: Dot-separated key path (e.g., 'experiment.fingers')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    keys = key.split('.')
    value = config.extra

    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


# Default configuration instance
DEFAULT_CONFIG = Config()
