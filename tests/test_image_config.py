"""
Tests for image loading, marker detection, exports and run configuration.
"""

import csv
import json

import numpy as np
import pytest
import yaml

from conftest import rgb_from_rows, save_rgb_png
from maze_config import DEFAULT_END, DEFAULT_START, load_config, parse_point
from maze_image import (acquire_image, build_report, find_markers, locate_endpoints,
                        write_path_csv, write_report_json)


class TestAcquireImage:
    """Decoding images from disk."""

    def test_round_trips_rgb_order(self, tmp_path):
        rgb = rgb_from_rows(["#GR."])
        path = save_rgb_png(rgb, tmp_path / "tiny.png")
        loaded = acquire_image(str(path))
        assert loaded.shape == (1, 4, 3)
        np.testing.assert_array_equal(loaded, rgb)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuntimeError, match="Image not found"):
            acquire_image(str(tmp_path / "nope.png"))

    def test_undecodable_file(self, tmp_path):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")
        with pytest.raises(RuntimeError, match="Failed to load image"):
            acquire_image(str(bad))

    def test_no_source(self):
        with pytest.raises(RuntimeError):
            acquire_image("")


class TestMarkers:
    """Green/red block detection."""

    def test_finds_block_centers(self, marker_maze_png):
        rgb = acquire_image(str(marker_maze_png))
        assert find_markers(rgb) == ((2, 2), (16, 9))
        assert locate_endpoints(rgb) == ((2, 2), (16, 9))

    def test_missing_marker_raises(self):
        rgb = rgb_from_rows(["....", ".GG.", ".GG.", "...."])
        gpt, rpt = find_markers(rgb)
        assert rpt is None
        with pytest.raises(RuntimeError, match="markers"):
            locate_endpoints(rgb)


class TestExports:
    """CSV path and JSON report."""

    def test_path_csv(self, tmp_path):
        out = tmp_path / "sub" / "path.csv"
        write_path_csv([(0, 0), (0, 1), (1, 1)], str(out))
        with open(out, newline="") as f:
            rows = list(csv.reader(f))
        assert rows == [["x_px", "y_px"], ["0", "0"], ["0", "1"], ["1", "1"]]

    def test_report(self, tmp_path):
        passable = np.array([[True, False], [True, True]])
        report = build_report(passable, (0, 0), (1, 1), 2)
        assert report["image_w"] == 2 and report["image_h"] == 2
        assert report["passable_pct"] == pytest.approx(75.0)
        assert report["reachable"] is True
        assert report["distance_px"] == 2

        out = tmp_path / "report.json"
        write_report_json(build_report(passable, (0, 0), (1, 0), None), str(out))
        data = json.loads(out.read_text())
        assert data["reachable"] is False
        assert data["distance_px"] is None
        assert data["end"] == [1, 0]


class TestConfig:
    """Run-file parsing."""

    @pytest.mark.parametrize("value", ["3,4", "3 4", " 3 , 4 ", [3, 4], (3, 4), ["3", "4"]])
    def test_parse_point(self, value):
        assert parse_point(value) == (3, 4)

    @pytest.mark.parametrize("value", ["3", "3,4,5", "a,b", 7, None])
    def test_parse_point_rejects(self, value):
        with pytest.raises(ValueError):
            parse_point(value)

    def test_defaults_from_reference_maze(self):
        assert DEFAULT_START == (10, 11)
        assert DEFAULT_END == (795, 798)

    def test_empty_path(self):
        assert load_config("") == {}

    def test_yaml(self, tmp_path):
        p = tmp_path / "run.yml"
        p.write_text(yaml.safe_dump({"image": "m.png", "start": "1,2", "end": [3, 4],
                                     "max_expansions": "100", "auto_markers": 1}))
        cfg = load_config(str(p))
        assert cfg == {"image": "m.png", "start": (1, 2), "end": (3, 4),
                       "max_expansions": 100, "auto_markers": True}

    def test_json(self, tmp_path):
        p = tmp_path / "run.json"
        p.write_text(json.dumps({"start": [5, 6]}))
        assert load_config(str(p)) == {"start": (5, 6)}

    def test_empty_yaml(self, tmp_path):
        p = tmp_path / "run.yaml"
        p.write_text("")
        assert load_config(str(p)) == {}

    def test_unknown_key(self, tmp_path):
        p = tmp_path / "run.json"
        p.write_text(json.dumps({"colour": "red"}))
        with pytest.raises(ValueError, match="colour"):
            load_config(str(p))

    def test_not_a_mapping(self, tmp_path):
        p = tmp_path / "run.yml"
        p.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_config(str(p))

    def test_missing_file(self, tmp_path):
        with pytest.raises(RuntimeError):
            load_config(str(tmp_path / "absent.yml"))

    def test_malformed_yaml(self, tmp_path):
        p = tmp_path / "run.yml"
        p.write_text("start: [1, 2\nend: 3,4\n")
        with pytest.raises(ValueError, match="Bad config"):
            load_config(str(p))

    @pytest.mark.parametrize("value", [[1], {"n": 1}, "lots"])
    def test_bad_max_expansions(self, tmp_path, value):
        p = tmp_path / "run.json"
        p.write_text(json.dumps({"max_expansions": value}))
        with pytest.raises(ValueError, match="max_expansions"):
            load_config(str(p))
