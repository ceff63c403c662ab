"""Branch color assignment for graph layout."""

from collections.abc import Mapping, Sequence

from lanegraph.constants import BRANCH_PALETTE, DEVELOP_BRANCH_NAME, MAIN_BRANCH_NAMES


def default_fixed_colors(palette: Sequence[str]) -> dict[str, str]:
    """Pre-seeded colors for the most common branch names."""
    fixed = {name: palette[0] for name in MAIN_BRANCH_NAMES}
    fixed[DEVELOP_BRANCH_NAME] = palette[3 % len(palette)]
    return fixed


class BranchColorAssigner:
    """
    Stable branch name -> color mapping.

    New names get the first palette color no other branch is using. Once the
    whole palette is taken, colors are reused by cycling through the palette
    in order. The cache lives as long as the instance; call reset() between
    unrelated repositories.

    `fixed` adds pre-seeded colors on top of the main/master/develop ones.
    It may recolor develop but never main or master.
    """

    def __init__(
        self,
        palette: Sequence[str] = BRANCH_PALETTE,
        fixed: Mapping[str, str] | None = None,
    ) -> None:
        if not palette:
            raise ValueError("Branch palette must contain at least one color")
        self.palette: tuple[str, ...] = tuple(palette)
        self._fixed = default_fixed_colors(self.palette)
        if fixed:
            self._fixed.update(fixed)
            # main and master always lead the palette
            self._fixed.update({name: self.palette[0] for name in MAIN_BRANCH_NAMES})
        self._colors: dict[str, str] = dict(self._fixed)
        self._cursor = 0

    def color_for(self, branch_name: str) -> str:
        """Get the color for a branch, assigning one on first use."""
        if branch_name in self._colors:
            return self._colors[branch_name]

        used = set(self._colors.values())
        color = next((c for c in self.palette if c not in used), None)
        if color is None:
            # Palette exhausted - cycle
            color = self.palette[self._cursor % len(self.palette)]
            self._cursor += 1

        self._colors[branch_name] = color
        return color

    def reset(self) -> None:
        """Forget every assignment except the pre-seeded branches."""
        self._colors = dict(self._fixed)
        self._cursor = 0

    def assigned(self) -> dict[str, str]:
        return dict(self._colors)

    def __contains__(self, branch_name: object) -> bool:
        return branch_name in self._colors
