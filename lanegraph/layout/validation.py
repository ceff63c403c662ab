"""
Invariant checks for computed layouts.

The checks return lists of human-readable problems instead of raising, so
callers (and tests) can report everything that is wrong at once.
"""

from collections import Counter
from collections.abc import Sequence

from lanegraph.layout.lanes import OCCUPY, RELEASE, TAKE_OVER, LaneEvent
from lanegraph.layout.types import CheckpointRecord, GraphLayout


class DuplicateCommitError(ValueError):
    """The same commit hash appears more than once in the input."""

    def __init__(self, hashes: list[str]) -> None:
        self.hashes = hashes
        super().__init__(f"Duplicate commit hashes in input: {', '.join(hashes)}")


class LayoutInvariantError(AssertionError):
    """A computed layout breaks one or more invariants."""


def find_duplicate_hashes(commits: Sequence[CheckpointRecord]) -> list[str]:
    """Hashes that occur more than once, in order of first appearance."""
    counts = Counter(c.hash for c in commits)
    return [h for h, n in counts.items() if n > 1]


def check_layout(
    layout: GraphLayout,
    commits: Sequence[CheckpointRecord],
    per_parent_edge: bool = True,
) -> list[str]:
    """Check row completeness, lane validity and connection soundness.

    With per_parent_edge, also require exactly one connection per parent
    that is present in the input (graph mode; linear mode draws fewer).
    """
    problems: list[str] = []

    if len(layout.nodes) != len(commits):
        problems.append(f"{len(layout.nodes)} nodes for {len(commits)} commits")

    rows = sorted(node.row_index for node in layout.nodes)
    if rows != list(range(len(layout.nodes))):
        problems.append(f"row indices are not the dense range 0..{len(layout.nodes) - 1}")

    for node, commit in zip(layout.nodes, commits):
        if node.hash != commit.hash:
            problems.append(f"row {node.row_index} holds {node.hash}, expected {commit.hash}")
        if node.column_index < 0:
            problems.append(f"{node.hash} has negative lane {node.column_index}")

    expected_columns = max((n.column_index for n in layout.nodes), default=-1) + 1
    if layout.max_columns != expected_columns:
        problems.append(f"max_columns is {layout.max_columns}, expected {expected_columns}")

    positions = {node.position for node in layout.nodes}
    for conn in layout.connections:
        if conn.from_point not in positions:
            problems.append(f"connection starts at unknown cell {conn.from_point}")
        if conn.to_point not in positions:
            problems.append(f"connection ends at unknown cell {conn.to_point}")

    if per_parent_edge:
        known = {c.hash for c in commits}
        expected_edges = sum(1 for c in commits for p in c.parents if p in known)
        if len(layout.connections) != expected_edges:
            problems.append(
                f"{len(layout.connections)} connections for "
                f"{expected_edges} resolvable parent edges"
            )

    return problems


def check_lane_trace(trace: Sequence[LaneEvent]) -> list[str]:
    """Replay lane events and report any lane with two live occupants."""
    problems: list[str] = []
    held: dict[int, str] = {}

    for event in trace:
        current = held.get(event.lane)
        if event.action == OCCUPY:
            if current is not None:
                problems.append(
                    f"row {event.row_index}: lane {event.lane} given to {event.node_hash} "
                    f"while held by {current}"
                )
            held[event.lane] = event.node_hash
        elif event.action in (RELEASE, TAKE_OVER):
            if current != event.node_hash:
                problems.append(
                    f"row {event.row_index}: lane {event.lane} {event.action} of "
                    f"{event.node_hash} but held by {current}"
                )
            held.pop(event.lane, None)
        else:
            problems.append(f"row {event.row_index}: unknown lane action {event.action!r}")

    return problems


def check_lane_segments(layout: GraphLayout, commits: Sequence[CheckpointRecord]) -> list[str]:
    """Re-simulate lane activity from the nodes.

    A commit and its primary parent sharing a lane form a vertical segment;
    no other commit may sit in that lane between them.
    """
    problems: list[str] = []
    by_hash = {node.hash: node for node in layout.nodes}
    by_column: dict[int, list[int]] = {}
    for node in layout.nodes:
        by_column.setdefault(node.column_index, []).append(node.row_index)

    for commit in commits:
        if not commit.parents or commit.parents[0] not in by_hash:
            continue
        child = by_hash[commit.hash]
        parent = by_hash[commit.parents[0]]
        if child.column_index != parent.column_index or parent.row_index <= child.row_index:
            continue
        for row in by_column[child.column_index]:
            if child.row_index < row < parent.row_index:
                problems.append(
                    f"lane {child.column_index}: {layout.nodes[row].hash} sits between "
                    f"{child.hash} and its parent {parent.hash}"
                )

    return problems


def assert_valid_layout(layout: GraphLayout, commits: Sequence[CheckpointRecord]) -> None:
    problems = check_layout(layout, commits) + check_lane_segments(layout, commits)
    if problems:
        raise LayoutInvariantError("\n".join(problems))
