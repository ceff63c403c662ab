"""Tests for branch color assignment."""

import pytest

from lanegraph.constants import BRANCH_PALETTE
from lanegraph.layout.colors import BranchColorAssigner


class TestBranchColorAssigner:
    """Test stable branch -> color mapping."""

    def test_main_gets_first_palette_color(self):
        colors = BranchColorAssigner()
        assert colors.color_for("main") == BRANCH_PALETTE[0]
        assert colors.color_for("main") == BRANCH_PALETTE[0]
        assert colors.color_for("master") == BRANCH_PALETTE[0]

    def test_develop_has_fixed_color(self):
        colors = BranchColorAssigner()
        assert colors.color_for("develop") == BRANCH_PALETTE[3]

    def test_new_branches_take_first_unused_color(self):
        """Pre-seeded colors are skipped when handing out new ones."""
        colors = BranchColorAssigner()
        assert colors.color_for("feature") == BRANCH_PALETTE[1]
        assert colors.color_for("bugfix") == BRANCH_PALETTE[2]
        assert colors.color_for("spike") == BRANCH_PALETTE[4]

    def test_same_name_is_cached(self):
        colors = BranchColorAssigner()
        first = colors.color_for("feature")
        colors.color_for("other")
        assert colors.color_for("feature") == first
        assert "feature" in colors

    def test_palette_exhaustion_cycles_in_order(self):
        """Once every color is taken, colors repeat from the start of the palette."""
        colors = BranchColorAssigner()
        # main/master share palette[0], develop holds palette[3]: 8 colors left
        fresh = [colors.color_for(f"branch-{i}") for i in range(8)]
        assert len(set(fresh)) == 8
        assert set(fresh) | {BRANCH_PALETTE[0], BRANCH_PALETTE[3]} == set(BRANCH_PALETTE)

        assert colors.color_for("overflow-1") == BRANCH_PALETTE[0]
        assert colors.color_for("overflow-2") == BRANCH_PALETTE[1]
        assert colors.color_for("overflow-3") == BRANCH_PALETTE[2]

    def test_reset_keeps_preseeded_branches(self):
        colors = BranchColorAssigner()
        colors.color_for("feature")
        colors.color_for("bugfix")

        colors.reset()

        assert colors.assigned() == {
            "main": BRANCH_PALETTE[0],
            "master": BRANCH_PALETTE[0],
            "develop": BRANCH_PALETTE[3],
        }
        # Freed colors are handed out again
        assert colors.color_for("bugfix") == BRANCH_PALETTE[1]

    def test_reset_restarts_cycle(self):
        palette = ["#000000", "#111111", "#222222", "#333333", "#444444"]
        colors = BranchColorAssigner(palette=palette)
        # main/master hold #000000 and develop holds #333333
        assert [colors.color_for(n) for n in "abcd"] == [
            "#111111",
            "#222222",
            "#444444",
            "#000000",
        ]

        colors.reset()
        assert "a" not in colors
        assert [colors.color_for(n) for n in "wxyz"] == [
            "#111111",
            "#222222",
            "#444444",
            "#000000",
        ]

    def test_empty_name_is_a_normal_key(self):
        colors = BranchColorAssigner()
        color = colors.color_for("")
        assert color == colors.color_for("")
        assert color in BRANCH_PALETTE

    def test_instances_do_not_share_state(self):
        first = BranchColorAssigner()
        second = BranchColorAssigner()
        first.color_for("feature")
        assert second.color_for("other") == BRANCH_PALETTE[1]

    def test_custom_fixed_colors(self):
        colors = BranchColorAssigner(palette=["#aaaaaa", "#bbbbbb"], fixed={"trunk": "#bbbbbb"})
        assert colors.color_for("trunk") == "#bbbbbb"
        assert colors.color_for("main") == "#aaaaaa"

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            BranchColorAssigner(palette=[])

    def test_fixed_colors_cannot_move_main(self):
        colors = BranchColorAssigner(fixed={"main": "#bada55", "develop": "#bada55"})
        assert colors.color_for("main") == BRANCH_PALETTE[0]
        assert colors.color_for("master") == BRANCH_PALETTE[0]
        assert colors.color_for("develop") == "#bada55"
