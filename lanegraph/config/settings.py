"""
Settings management for lanegraph
"""

import copy
import json
from pathlib import Path
from typing import Any

from lanegraph.constants import (
    BRANCH_PALETTE,
    BRANCH_STROKE_WIDTH,
    DIRECT_STROKE_WIDTH,
    FALLBACK_TAKEOVER_PREMIUM,
    HEAD_LANE_LOOKAHEAD,
    HEAD_TAKEOVER_PREMIUM,
    LINEAR_COLOR,
    LINEAR_STROKE_WIDTH,
    MAIN_BRANCH_PRIORITY,
    MERGE_STROKE_WIDTH,
    LayoutConfig,
)
from lanegraph.layout.colors import BranchColorAssigner


class Settings:
    """Manages layout settings"""

    DEFAULT_SETTINGS: dict[str, Any] = {
        "layout": {
            "head_takeover_premium": HEAD_TAKEOVER_PREMIUM,  # Head claims need 20% more priority
            "fallback_takeover_premium": FALLBACK_TAKEOVER_PREMIUM,  # Last resort needs 50% more
            "head_lane_lookahead": HEAD_LANE_LOOKAHEAD,
            "main_branch_priority": MAIN_BRANCH_PRIORITY,
        },
        "colors": {
            "palette": list(BRANCH_PALETTE),
            "fixed": {},  # branch name -> color, added to the main/master/develop defaults
            "linear": LINEAR_COLOR,
        },
        "strokes": {
            "direct": DIRECT_STROKE_WIDTH,
            "branch": BRANCH_STROKE_WIDTH,
            "merge": MERGE_STROKE_WIDTH,
            "linear": LINEAR_STROKE_WIDTH,
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / ".config" / "lanegraph" / "settings.json"

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise ValueError(f"Settings file {self.config_path} must contain a JSON object")
            # Merge with defaults to handle new settings
            self._merge_settings(self.settings, loaded)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'layout.head_lane_lookahead')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def get_layout_config(self) -> LayoutConfig:
        """Build the engine tunables, clamping values that make no sense."""
        return LayoutConfig(
            head_takeover_premium=max(
                0.0, float(self.get("layout.head_takeover_premium", HEAD_TAKEOVER_PREMIUM))
            ),
            fallback_takeover_premium=max(
                0.0,
                float(self.get("layout.fallback_takeover_premium", FALLBACK_TAKEOVER_PREMIUM)),
            ),
            head_lane_lookahead=max(
                1, int(self.get("layout.head_lane_lookahead", HEAD_LANE_LOOKAHEAD))
            ),
            main_branch_priority=max(
                1.0, float(self.get("layout.main_branch_priority", MAIN_BRANCH_PRIORITY))
            ),
            direct_stroke_width=float(self.get("strokes.direct", DIRECT_STROKE_WIDTH)),
            branch_stroke_width=float(self.get("strokes.branch", BRANCH_STROKE_WIDTH)),
            merge_stroke_width=float(self.get("strokes.merge", MERGE_STROKE_WIDTH)),
            linear_color=str(self.get("colors.linear", LINEAR_COLOR)),
            linear_stroke_width=float(self.get("strokes.linear", LINEAR_STROKE_WIDTH)),
        )

    def create_color_assigner(self) -> BranchColorAssigner:
        """Build a color assigner from the configured palette and fixed colors."""
        palette = [str(c) for c in self.get("colors.palette", list(BRANCH_PALETTE))]
        fixed = self.get("colors.fixed", {})
        return BranchColorAssigner(palette=palette, fixed=fixed)
