"""
Experiment: Fingerprint Comparison

This experiment runs the minutiae pipeline on fingerprint image files.

Pipeline:
1. Binarization (dark pixels are ridges)
2. Zhang-Suen thinning
3. Minutiae extraction (transition count + regression orientation)
4. Minutiae matching (exhaustive rigid alignment search)

Commands:
- thin:        write the skeleton of an image
- extract:     write the minutiae of an image (JSON and overlay)
- compare:     compare two images
- compare-all: compare a reference image with every sample of a finger
"""

import sys
import argparse
from dataclasses import asdict
from pathlib import Path
from typing import Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ridgematch.minutiae.minutiae_matching import MinutiaeMatchingPipeline
from ridgematch.utils.config import Config, load_config
from ridgematch.utils.io import (
    discover_images,
    group_images_by_finger,
    load_binary_image,
    save_binary_image,
    save_json,
    save_minutiae,
)
from ridgematch.utils.logger import ComparisonLog, ProgressTracker, setup_logger
from ridgematch.utils.visualization import save_minutiae_overlay


def _load(path: Path, config: Config):
    return load_binary_image(
        path,
        method=config.image.binarization_method,
        threshold=config.image.threshold,
        block_size=config.image.block_size,
        offset=config.image.offset
    )


def run_thin(image_path: str, output_dir: str, config: Config, logger: ComparisonLog):
    """Thin an image and save its skeleton."""
    pipeline = MinutiaeMatchingPipeline.from_config(config)
    image_path = Path(image_path)

    skeleton = pipeline.thinner.process(_load(image_path, config))

    output_path = Path(output_dir) / f"skeleton_{image_path.stem}.png"
    save_binary_image(skeleton, output_path)
    logger.info(f"Skeleton saved to {output_path}")


def run_extract(image_path: str, output_dir: str, config: Config, logger: ComparisonLog):
    """Extract minutiae from an image and save them with an overlay."""
    pipeline = MinutiaeMatchingPipeline.from_config(config)
    image_path = Path(image_path)

    skeleton = pipeline.thinner.process(_load(image_path, config))
    minutiae = pipeline.extractor.extract(skeleton)
    logger.info(f"Extracted {len(minutiae)} minutiae from {image_path.name}")

    output_dir = Path(output_dir)
    save_minutiae(minutiae, output_dir / f"minutiae_{image_path.stem}.json")
    save_minutiae_overlay(skeleton, minutiae, output_dir / f"minutiae_{image_path.stem}.png")
    logger.info(f"Minutiae saved to {output_dir}")


def run_compare(
    image1: str,
    image2: str,
    config: Config,
    logger: ComparisonLog,
    pipeline: Optional[MinutiaeMatchingPipeline] = None
):
    """
    Compare two fingerprint images.

    Returns:
        MatchResult of the comparison
    """
    pipeline = pipeline or MinutiaeMatchingPipeline.from_config(config)

    result = pipeline.match(_load(Path(image1), config), _load(Path(image2), config))
    logger.log_comparison(Path(image1).name, Path(image2).name, result)

    return result


def run_compare_all(
    reference: str,
    data_dir: str,
    finger: int,
    output_dir: str,
    config: Config,
    logger: ComparisonLog
):
    """
    Compare a reference image with every sample of a finger.

    Returns:
        Dictionary mapping sample filename to match decision
    """
    pipeline = MinutiaeMatchingPipeline.from_config(config)
    reference = Path(reference)

    groups = group_images_by_finger(discover_images(data_dir))
    samples = [p for p in groups.get(finger, []) if p.resolve() != reference.resolve()]

    if not samples:
        logger.warning(f"No samples found for finger {finger} in {data_dir}")
        return {}

    reference_minutiae = pipeline.extract_minutiae(_load(reference, config))
    logger.info(f"Reference {reference.name}: {len(reference_minutiae)} minutiae")

    logger.log_params({
        'reference': reference.name,
        'finger': finger,
        'matching': asdict(config.matching),
    })

    decisions = {}
    tracker = ProgressTracker(len(samples), logger)

    for sample in samples:
        minutiae = pipeline.extract_minutiae(_load(sample, config))
        result = pipeline.matcher.match_minutiae(reference_minutiae, minutiae)
        decisions[sample.name] = result.is_match
        logger.log_comparison(reference.name, sample.name, result)
        tracker.update()

    tracker.finish()

    matched = sum(decisions.values())
    logger.log_summary({
        'reference': reference.name,
        'finger': finger,
        'samples': len(decisions),
        'matched': matched,
        'match_rate': matched / len(decisions),
    })

    if config.logging.save_results:
        save_json(decisions, Path(output_dir) / f"compare_{reference.stem}_finger{finger}.json")
        logger.save()

    return decisions


def main():
    parser = argparse.ArgumentParser(
        description="Fingerprint Comparison Experiment"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file"
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default="results/compare",
        help="Output directory for results"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    thin_parser = subparsers.add_parser("thin", help="Write the skeleton of an image")
    thin_parser.add_argument("image", type=str)

    extract_parser = subparsers.add_parser("extract", help="Extract minutiae of an image")
    extract_parser.add_argument("image", type=str)

    compare_parser = subparsers.add_parser("compare", help="Compare two images")
    compare_parser.add_argument("image1", type=str)
    compare_parser.add_argument("image2", type=str)

    compare_all_parser = subparsers.add_parser(
        "compare-all", help="Compare a reference with all samples of a finger"
    )
    compare_all_parser.add_argument("reference", type=str)
    compare_all_parser.add_argument(
        "--data_dir",
        type=str,
        default="resources/fingerprints",
        help="Directory of <finger>_<sample> images"
    )
    compare_all_parser.add_argument("--finger", type=int, required=True)

    args = parser.parse_args()

    config = load_config(args.config) if args.config else Config()
    setup_logger("ridgematch", config.logging.level)
    logger = ComparisonLog(
        "fingerprint_comparison",
        log_dir=config.logging.log_dir,
        level=config.logging.level,
        file_output=config.logging.save_results
    )

    if args.command == "thin":
        run_thin(args.image, args.output_dir, config, logger)
    elif args.command == "extract":
        run_extract(args.image, args.output_dir, config, logger)
    elif args.command == "compare":
        result = run_compare(args.image1, args.image2, config, logger)
        print(result.to_dict())
    else:
        run_compare_all(
            args.reference, args.data_dir, args.finger,
            args.output_dir, config, logger
        )


if __name__ == "__main__":
    main()
