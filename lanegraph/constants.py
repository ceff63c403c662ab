"""
Centralized constants for lanegraph.

This module contains the palette, stroke weights and lane take-over
thresholds used across the layout engines. Centralizing them here makes
them easier to find and tune.
"""

from dataclasses import dataclass

# Branch naming
MAIN_BRANCH_NAMES = ("main", "master")
DEVELOP_BRANCH_NAME = "develop"
SYNTHETIC_BRANCH_PREFIX = "commit-"
SHORT_HASH_LENGTH = 7

# Branch colors, in assignment order
BRANCH_PALETTE = (
    "#4285F4",  # Blue
    "#DB4437",  # Red
    "#F4B400",  # Yellow
    "#0F9D58",  # Green
    "#AB47BC",  # Purple
    "#00ACC1",  # Cyan
    "#FF7043",  # Orange
    "#78909C",  # Blue grey
    "#5C6BC0",  # Indigo
    "#43A047",  # Light green
)

# Linear timeline uses one color for everything
LINEAR_COLOR = "#3b82f6"

# Stroke widths per connection type
DIRECT_STROKE_WIDTH = 3.0
BRANCH_STROKE_WIDTH = 2.5
MERGE_STROKE_WIDTH = 2.0
LINEAR_STROKE_WIDTH = 2.0

# Lane contention
MAIN_BRANCH_PRIORITY = 100.0
HEAD_TAKEOVER_PREMIUM = 0.20
FALLBACK_TAKEOVER_PREMIUM = 0.50
HEAD_LANE_LOOKAHEAD = 8


@dataclass(frozen=True)
class LayoutConfig:
    """Tunables for the layout engines."""

    head_takeover_premium: float = HEAD_TAKEOVER_PREMIUM
    fallback_takeover_premium: float = FALLBACK_TAKEOVER_PREMIUM
    head_lane_lookahead: int = HEAD_LANE_LOOKAHEAD
    main_branch_priority: float = MAIN_BRANCH_PRIORITY
    direct_stroke_width: float = DIRECT_STROKE_WIDTH
    branch_stroke_width: float = BRANCH_STROKE_WIDTH
    merge_stroke_width: float = MERGE_STROKE_WIDTH
    linear_color: str = LINEAR_COLOR
    linear_stroke_width: float = LINEAR_STROKE_WIDTH
