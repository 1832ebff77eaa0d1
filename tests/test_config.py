"""Tests for runtime configuration loading and detector options."""

import json

from imports_detector.config import DEFAULTS, DetectorOptions, load_runtime_config


class TestLoadRuntimeConfig:
    def test_defaults(self, tmp_path):
        cfg = load_runtime_config(str(tmp_path))
        assert cfg == DEFAULTS
        assert cfg is not DEFAULTS

    def test_config_file_overrides(self, tmp_path):
        (tmp_path / ".imports-detector.json").write_text(
            json.dumps({"scan": {"batch_size": 5}, "report": {"top_n": 3}})
        )
        cfg = load_runtime_config(str(tmp_path))
        assert cfg["scan"]["batch_size"] == 5
        assert cfg["report"]["top_n"] == 3

    def test_wrong_type_in_file_ignored(self, tmp_path):
        (tmp_path / ".imports-detector.json").write_text(json.dumps({"scan": {"batch_size": "big"}}))
        assert load_runtime_config(str(tmp_path))["scan"]["batch_size"] == 20

    def test_malformed_file_falls_back(self, tmp_path):
        (tmp_path / ".imports-detector.json").write_text("{oops")
        assert load_runtime_config(str(tmp_path)) == DEFAULTS

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / ".imports-detector.json").write_text(json.dumps({"scan": {"batch_size": 5}}))
        monkeypatch.setenv("IMPORTS_DETECTOR_SCAN_BATCH_SIZE", "50")
        monkeypatch.setenv("IMPORTS_DETECTOR_SCAN_EXCLUDE", "**/vendor/**, **/tmp/**")
        cfg = load_runtime_config(str(tmp_path))
        assert cfg["scan"]["batch_size"] == 50
        assert cfg["scan"]["exclude"] == ["**/vendor/**", "**/tmp/**"]

    def test_invalid_env_value_keeps_default(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IMPORTS_DETECTOR_REPORT_TOP_N", "many")
        assert load_runtime_config(str(tmp_path))["report"]["top_n"] == 10

    def test_non_positive_batch_size(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IMPORTS_DETECTOR_SCAN_BATCH_SIZE", "0")
        assert load_runtime_config(str(tmp_path))["scan"]["batch_size"] == 20


class TestDetectorOptions:
    def test_style_flags(self):
        options = DetectorOptions(detect_lazy=False)
        assert options.style_flags() == {"static": True, "dynamic": True, "lazy": False, "require": True}

    def test_include_patterns_from_extensions(self):
        options = DetectorOptions(include_extensions=[".ts", "tsx", " "])
        assert options.include_patterns() == ["**/*.ts", "**/*.tsx"]

    def test_no_include_extensions(self):
        assert DetectorOptions().include_patterns() is None
