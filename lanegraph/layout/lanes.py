"""Lane occupancy table for a single layout pass."""

from collections.abc import Collection
from dataclasses import dataclass

OCCUPY = "occupy"
RELEASE = "release"
TAKE_OVER = "take_over"


@dataclass
class LaneSlot:
    """A line of descent running down a lane.

    The line starts at node_hash and stays in the lane until the commit it is
    awaiting (its primary parent) gets placed.
    """

    node_hash: str
    awaiting: str | None
    priority: float
    branch_name: str


@dataclass(frozen=True)
class LaneEvent:
    row_index: int
    lane: int
    action: str
    node_hash: str


class LaneTable:
    """
    Lanes in use while walking the commit list from newest to oldest.

    Owned by one layout call and thrown away afterwards. Every change is
    appended to `trace` so the occupancy history can be replayed and checked.
    """

    def __init__(self) -> None:
        self._lanes: list[LaneSlot | None] = []
        self._evicted: dict[str, set[int]] = {}
        self.trace: list[LaneEvent] = []
        self.row_index = 0

    @property
    def width(self) -> int:
        return len(self._lanes)

    def is_free(self, lane: int) -> bool:
        return lane >= len(self._lanes) or self._lanes[lane] is None

    def occupant(self, lane: int) -> LaneSlot | None:
        if lane >= len(self._lanes):
            return None
        return self._lanes[lane]

    def free_lanes(self) -> list[int]:
        return [lane for lane, slot in enumerate(self._lanes) if slot is None]

    def lanes_awaiting(self, commit_hash: str) -> list[int]:
        return [
            lane
            for lane, slot in enumerate(self._lanes)
            if slot is not None and slot.awaiting == commit_hash
        ]

    def evicted_from(self, commit_hash: str) -> set[int]:
        """Lanes whose line towards commit_hash was taken over."""
        return set(self._evicted.get(commit_hash, ()))

    def release_awaiting(self, commit_hash: str) -> list[int]:
        """End every line waiting for commit_hash. Returns the freed lanes."""
        released = self.lanes_awaiting(commit_hash)
        for lane in released:
            self.release(lane)
        return released

    def first_free(self, exclude: Collection[int] = ()) -> int | None:
        for lane, slot in enumerate(self._lanes):
            if slot is None and lane not in exclude:
                return lane
        return None

    def free_between(self, low: int, high: int, exclude: Collection[int] = ()) -> int | None:
        """First free lane strictly between low and high."""
        for lane in range(low + 1, high):
            if lane not in exclude and self.is_free(lane):
                return lane
        return None

    def claim_for_head(
        self,
        priority: float,
        lookahead: int,
        premium: float,
        exclude: Collection[int] = (),
    ) -> int | None:
        """Find an existing lane for a branch head within the lookahead window.

        A free lane wins. Otherwise the leftmost occupant that is outranked
        by more than the premium gets taken over. Returns None when neither
        exists; opening a new lane is left to the caller.
        """
        window = range(min(max(1, lookahead), len(self._lanes)))
        for lane in window:
            if lane not in exclude and self.is_free(lane):
                return lane
        for lane in window:
            if lane not in exclude and self._outranks(priority, lane, premium):
                return lane
        return None

    def take_over(
        self, priority: float, premium: float, exclude: Collection[int] = ()
    ) -> int | None:
        """Last resort: leftmost occupied lane outranked by more than the premium."""
        for lane in range(len(self._lanes)):
            if lane not in exclude and self._outranks(priority, lane, premium):
                return lane
        return None

    def _outranks(self, priority: float, lane: int, premium: float) -> bool:
        slot = self._lanes[lane]
        if slot is None:
            return False
        return slot.priority * (1.0 + premium) < priority

    def extend(self) -> int:
        """Add a lane on the right and return its index."""
        self._lanes.append(None)
        return len(self._lanes) - 1

    def occupy(self, lane: int, slot: LaneSlot) -> None:
        while lane >= len(self._lanes):
            self.extend()

        current = self._lanes[lane]
        if current is not None:
            # The displaced line may not come back to this lane
            if current.awaiting is not None:
                self._evicted.setdefault(current.awaiting, set()).add(lane)
            self.trace.append(LaneEvent(self.row_index, lane, TAKE_OVER, current.node_hash))

        self._lanes[lane] = slot
        self.trace.append(LaneEvent(self.row_index, lane, OCCUPY, slot.node_hash))

    def release(self, lane: int) -> None:
        slot = self.occupant(lane)
        if slot is None:
            return
        self._lanes[lane] = None
        self.trace.append(LaneEvent(self.row_index, lane, RELEASE, slot.node_hash))
