"""
Settings loader tests for FishGraph.
"""

import pytest
import yaml
from pydantic import ValidationError

from fishgraph.schemas import EngineSettings, OffOffDisplay
from fishgraph.utils import find_settings, load_settings


class TestLoadSettings:
    """Test YAML settings loading."""

    def test_defaults(self):
        settings = load_settings()
        assert settings == EngineSettings()
        assert settings.score_weights.depth == 0.70
        assert settings.score_weights.in_degree == 0.45
        assert settings.score_weights.out_degree == 0.25
        assert settings.ready_list_limit == 40
        assert settings.off_off_display == OffOffDisplay.DIM
        assert settings.transitive_reduction is False

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "fishgraph.yaml"
        path.write_text(
            "score_weights:\n"
            "  depth: 1.0\n"
            "ready_list_limit: 10\n"
            "off_off_display: remove\n"
            "transitive_reduction: true\n",
            encoding="utf-8",
        )
        settings = load_settings(path)
        assert settings.score_weights.depth == 1.0
        assert settings.score_weights.in_degree == 0.45
        assert settings.ready_list_limit == 10
        assert settings.off_off_display == OffOffDisplay.REMOVE
        assert settings.transitive_reduction is True

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == EngineSettings()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("ready_list_limit: -1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("score_weights: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_settings(path)


class TestFindSettings:
    """Test settings discovery in a data directory."""

    def test_found(self, tmp_path):
        path = tmp_path / "fishgraph.yaml"
        path.write_text("ready_list_limit: 5\n", encoding="utf-8")
        assert find_settings(tmp_path) == path

    def test_not_found(self, tmp_path):
        assert find_settings(tmp_path) is None
