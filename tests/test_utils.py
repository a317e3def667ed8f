"""
Tests for configuration, logging, image I/O and overlays.
"""

import json

import numpy as np
import pytest
import yaml

from ridgematch.minutiae.minutiae_extraction import Minutia, MinutiaeType
from ridgematch.utils.config import (
    DEFAULT_CONFIG,
    get_extra_config,
    load_config,
    load_yaml,
    merge_configs,
)
from ridgematch.utils.io import (
    binarize_image,
    discover_images,
    group_images_by_finger,
    load_binary_image,
    load_image,
    load_minutiae,
    parse_finger_filename,
    save_binary_image,
    save_minutiae,
)
from ridgematch.minutiae.minutiae_matching import Alignment, MatchResult
from ridgematch.utils.logger import ComparisonLog, ProgressTracker
from ridgematch.utils.visualization import (
    BIFURCATION_COLOR,
    ENDING_COLOR,
    binary_to_color,
    draw_minutiae,
)


class TestConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG.extraction.orientation_distance == 16
        assert DEFAULT_CONFIG.matching.distance_threshold == 5
        assert DEFAULT_CONFIG.matching.found_threshold == 20
        assert DEFAULT_CONFIG.matching.orientation_threshold == 20
        assert DEFAULT_CONFIG.matching.angle_offset == 2
        assert DEFAULT_CONFIG.thinning.max_iterations is None

    def test_load_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            'matching': {'found_threshold': 12},
            'thinning': {'max_iterations': 50},
            'image': {'binarization_method': 'otsu'},
            'experiment': {'fingers': [1, 2]},
        }))

        config = load_config(path)

        assert config.matching.found_threshold == 12
        assert config.matching.distance_threshold == 5
        assert config.thinning.max_iterations == 50
        assert config.image.binarization_method == 'otsu'
        assert get_extra_config(config, 'experiment.fingers') == [1, 2]
        assert get_extra_config(config, 'experiment.missing', 'x') == 'x'

    def test_base_config_is_merged(self, tmp_path):
        base = tmp_path / "base.yaml"
        base.write_text(yaml.safe_dump({'matching': {'found_threshold': 12, 'angle_offset': 4}}))
        override = tmp_path / "override.yaml"
        override.write_text(yaml.safe_dump({'matching': {'found_threshold': 15}}))

        config = load_config(override, base)

        assert config.matching.found_threshold == 15
        assert config.matching.angle_offset == 4

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).matching.found_threshold == 20

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_merge_configs(self):
        merged = merge_configs({'a': {'b': 1, 'c': 2}, 'd': 3}, {'a': {'b': 5}})
        assert merged == {'a': {'b': 5, 'c': 2}, 'd': 3}


class TestImageIO:

    def test_binarize_global(self):
        image = np.array([[0, 255], [127, 128]], dtype=np.uint8)
        assert binarize_image(image).tolist() == [[True, False], [True, False]]

    def test_binarize_float(self):
        image = np.array([[0.0, 1.0]])
        assert binarize_image(image).tolist() == [[True, False]]

    def test_binarize_unknown_method(self):
        with pytest.raises(ValueError):
            binarize_image(np.zeros((2, 2), dtype=np.uint8), method='magic')

    def test_binary_image_roundtrip(self, tmp_path, bars_image):
        path = tmp_path / "out" / "bars.png"
        save_binary_image(bars_image, path)

        assert load_image(path)[bars_image].max() == 0
        assert np.array_equal(load_binary_image(path), bars_image)

    def test_missing_image(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "missing.png")

    def test_undecodable_image(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        with pytest.raises(ValueError):
            load_image(path)

    def test_parse_finger_filename(self):
        assert parse_finger_filename("1_2.png") == (1, 2)
        assert parse_finger_filename("dir/16_8.png") == (16, 8)
        with pytest.raises(ValueError):
            parse_finger_filename("skeleton_1_1.png")

    def test_discover_and_group(self, tmp_path, bars_image):
        for name in ("1_1.png", "1_2.png", "2_1.png", "notes.png"):
            save_binary_image(bars_image, tmp_path / name)
        (tmp_path / "readme.txt").write_text("x")

        images = discover_images(tmp_path)
        groups = group_images_by_finger(images)

        assert [p.name for p in images] == ["1_1.png", "1_2.png", "2_1.png", "notes.png"]
        assert sorted(groups) == [1, 2]
        assert [p.name for p in groups[1]] == ["1_1.png", "1_2.png"]

    def test_minutiae_json(self, tmp_path):
        minutiae = [Minutia(1, 2, 3, MinutiaeType.ENDING), Minutia(4, 5, 6)]
        path = tmp_path / "minutiae.json"

        save_minutiae(minutiae, path)

        assert json.loads(path.read_text())[0] == {
            'row': 1, 'col': 2, 'orientation': 3, 'type': 'ENDING'
        }
        loaded = load_minutiae(path)
        assert loaded == minutiae
        assert loaded[0].minutiae_type == MinutiaeType.ENDING
        assert loaded[1].minutiae_type is None


class TestVisualization:

    def test_binary_to_color(self):
        color = binary_to_color(np.array([[True, False]]))
        assert color.shape == (1, 2, 3)
        assert color[0, 0].tolist() == [0, 0, 0]
        assert color[0, 1].tolist() == [255, 255, 255]

    def test_draw_minutiae(self):
        skeleton = np.zeros((30, 30), dtype=bool)
        minutiae = [
            Minutia(10, 10, 0, MinutiaeType.ENDING),
            Minutia(20, 20, 90, MinutiaeType.BIFURCATION),
        ]

        canvas = draw_minutiae(skeleton, minutiae)

        assert canvas.shape == (30, 30, 3)
        assert tuple(canvas[10, 10]) == ENDING_COLOR
        assert tuple(canvas[10, 15]) == ENDING_COLOR
        assert tuple(canvas[20, 20]) == BIFURCATION_COLOR
        assert tuple(canvas[15, 20]) == BIFURCATION_COLOR
        assert not skeleton.any()


class TestComparisonLog:

    def test_report_is_saved(self, tmp_path):
        log = ComparisonLog("test_run", log_dir=tmp_path, console_output=False)
        log.log_params({'found_threshold': 20})
        log.log_comparison(
            "1_1.png", "1_2.png",
            MatchResult(True, 30, 28, Alignment(index1=0, index2=3, rotation=2, matched=21))
        )
        log.log_comparison("1_1.png", "1_3.png", MatchResult(False, 30, 12))
        log.log_summary({'matched': 1, 'match_rate': 0.5})

        path = log.save("report.json")
        report = json.loads(path.read_text())

        assert path == tmp_path / "report.json"
        assert report['name'] == "test_run"
        assert report['params'] == {'found_threshold': 20}
        assert [c['second'] for c in report['comparisons']] == ["1_2.png", "1_3.png"]
        assert report['comparisons'][0]['alignment']['index2'] == 3
        assert report['comparisons'][1]['alignment'] is None
        assert report['summary'] == {'matched': 1, 'match_rate': 0.5}
        assert list(tmp_path.glob("test_run_*.log"))

    def test_no_file_output(self, tmp_path):
        ComparisonLog("quiet", log_dir=tmp_path, console_output=False, file_output=False)
        assert not list(tmp_path.glob("*.log"))


class TestProgressTracker:

    def test_counts_items(self, tmp_path):
        log = ComparisonLog("progress", log_dir=tmp_path, console_output=False)
        tracker = ProgressTracker(4, log)
        for _ in range(4):
            tracker.update()

        assert tracker.current == 4
        assert tracker.finish() >= 0.0

    def test_without_logger(self):
        tracker = ProgressTracker(0)
        tracker.update(3)
        assert tracker.current == 3
