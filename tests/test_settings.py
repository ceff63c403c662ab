"""Tests for the JSON settings layer."""

import json

import pytest

from lanegraph.config.settings import Settings
from lanegraph.constants import BRANCH_PALETTE, LayoutConfig


def write_settings(tmp_path, data) -> Settings:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(data))
    return Settings(path)


class TestSettings:
    """Test loading, merging and converting settings."""

    def test_defaults_when_file_missing(self, tmp_path):
        settings = Settings(tmp_path / "missing.json")
        assert settings.get_layout_config() == LayoutConfig()
        assert settings.get("colors.palette") == list(BRANCH_PALETTE)

    def test_file_values_merge_over_defaults(self, tmp_path):
        settings = write_settings(tmp_path, {"layout": {"head_lane_lookahead": 3}})

        assert settings.get("layout.head_lane_lookahead") == 3
        # Untouched keys in the same section survive the merge
        assert settings.get("layout.head_takeover_premium") == 0.20

    def test_unknown_sections_are_kept(self, tmp_path):
        settings = write_settings(tmp_path, {"extra": {"section": {"value": True}}})
        assert settings.get("extra.section.value") is True

    def test_non_object_file_is_rejected(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            Settings(path)

    def test_get_missing_path_returns_default(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        assert settings.get("layout.nope", 42) == 42
        assert settings.get("layout.head_lane_lookahead.deeper", "x") == "x"

    def test_layout_config_from_file(self, tmp_path):
        settings = write_settings(tmp_path, {"strokes": {"merge": 4}, "colors": {"linear": "#000"}})

        config = settings.get_layout_config()

        assert config.merge_stroke_width == 4.0
        assert config.linear_color == "#000"
        assert config.direct_stroke_width == LayoutConfig().direct_stroke_width

    def test_layout_config_clamps_nonsense(self, tmp_path):
        layout = {
            "head_takeover_premium": -1,
            "fallback_takeover_premium": -0.5,
            "head_lane_lookahead": 0,
            "main_branch_priority": 0,
        }
        config = write_settings(tmp_path, {"layout": layout}).get_layout_config()

        assert config.head_takeover_premium == 0.0
        assert config.fallback_takeover_premium == 0.0
        assert config.head_lane_lookahead == 1
        assert config.main_branch_priority == 1.0

    def test_default_color_assigner_keeps_main_color(self, tmp_path):
        assigner = Settings(tmp_path / "settings.json").create_color_assigner()
        assert assigner.color_for("main") == BRANCH_PALETTE[0]
        assert assigner.color_for("develop") == BRANCH_PALETTE[3]

    def test_fixed_colors_add_to_main_color(self, tmp_path):
        settings = write_settings(tmp_path, {"colors": {"fixed": {"trunk": BRANCH_PALETTE[0]}}})

        assigner = settings.create_color_assigner()

        assert assigner.color_for("trunk") == BRANCH_PALETTE[0]
        assert assigner.color_for("main") == BRANCH_PALETTE[0]
        assert assigner.color_for("develop") == BRANCH_PALETTE[3]

    def test_custom_palette(self, tmp_path):
        colors = {"palette": ["#111111", "#222222"], "fixed": {"trunk": "#222222"}}

        assigner = write_settings(tmp_path, {"colors": colors}).create_color_assigner()

        assert assigner.color_for("trunk") == "#222222"
        assert assigner.color_for("main") == "#111111"
        assert assigner.color_for("master") == "#111111"
