"""Tests for the configuration layer.

Run: python -m pytest tests/test_config.py -v
"""
import json

import pytest
import yaml

from newslens import config as config_module
from newslens.config import Config, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    import os
    for key in list(os.environ):
        if key.startswith("NEWSLENS_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


class TestDefaults:

    def test_default_values(self):
        cfg = Config()
        assert cfg.get("clustering.threshold") == 0.4
        assert cfg.get("keywords.cache_size") == 2000
        assert cfg.get("dedupe.title_threshold") == 0.75

    def test_missing_key_returns_default(self):
        cfg = Config()
        assert cfg.get("clustering.nope") is None
        assert cfg.get("nope.nope", 7) == 7
        assert cfg.get("clustering.threshold.deeper", "x") == "x"

    def test_defaults_not_shared(self):
        cfg = Config()
        cfg.config["clustering"]["threshold"] = 0.9
        assert config_module.DEFAULT_CONFIG["clustering"]["threshold"] == 0.4


class TestFileAndEnv:

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "newslens.yaml"
        path.write_text(yaml.dump({"clustering": {"threshold": 0.55}}))
        cfg = Config(str(path))
        assert cfg.get("clustering.threshold") == 0.55
        assert cfg.get("keywords.cache_size") == 2000

    def test_json_file(self, tmp_path):
        path = tmp_path / "newslens.json"
        path.write_text(json.dumps({"keywords": {"cache_size": 10}}))
        assert Config(str(path)).get("keywords.cache_size") == 10

    def test_unsupported_file_falls_back(self, tmp_path):
        path = tmp_path / "newslens.ini"
        path.write_text("[clustering]\nthreshold = 0.9\n")
        assert Config(str(path)).get("clustering.threshold") == 0.4

    def test_missing_file_falls_back(self, tmp_path):
        assert Config(str(tmp_path / "absent.yaml")).get("clustering.threshold") == 0.4

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("NEWSLENS_CLUSTERING_THRESHOLD", "0.6")
        monkeypatch.setenv("NEWSLENS_DEDUPE_TITLE_THRESHOLD", "0.8")
        cfg = Config()
        assert cfg.get("clustering.threshold") == 0.6
        assert cfg.get("dedupe.title_threshold") == 0.8

    def test_env_non_json_kept_as_string(self, monkeypatch):
        monkeypatch.setenv("NEWSLENS_OUTPUT_FORMAT", "pretty")
        assert Config().get("output.format") == "pretty"

    def test_get_config_uses_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "newslens.yml"
        path.write_text("dedupe:\n  title_threshold: 0.6\n")
        monkeypatch.setenv("NEWSLENS_CONFIG_PATH", str(path))
        assert get_config("dedupe.title_threshold") == 0.6

    def test_relevance_threshold_not_configured(self):
        """The relevance cutoff is a fixed constant, not a config key."""
        assert Config().get("relevance.threshold") is None
