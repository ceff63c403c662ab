"""Tests for layout invariant checks."""

import pytest

from lanegraph.layout.engine import calculate_graph_layout
from lanegraph.layout.lanes import OCCUPY, RELEASE, LaneEvent
from lanegraph.layout.types import (
    BranchHead,
    CheckpointRecord,
    Connection,
    ConnectionType,
    GridPoint,
)
from lanegraph.layout.validation import (
    LayoutInvariantError,
    assert_valid_layout,
    check_lane_segments,
    check_lane_trace,
    check_layout,
    find_duplicate_hashes,
)

COMMITS = [
    CheckpointRecord("c3", ("c2",)),
    CheckpointRecord("c2", ("c1",)),
    CheckpointRecord("c1"),
]


def good_layout():
    return calculate_graph_layout(COMMITS, [BranchHead("main", "c3")], "main")


class TestCheckLayout:
    """Test detection of broken layouts."""

    def test_valid_layout_passes(self):
        layout = good_layout()
        assert check_layout(layout, COMMITS) == []
        assert_valid_layout(layout, COMMITS)

    def test_wrong_max_columns(self):
        layout = good_layout()
        layout.max_columns = 3
        problems = check_layout(layout, COMMITS)
        assert any("max_columns" in p for p in problems)

    def test_dangling_endpoint(self):
        layout = good_layout()
        layout.connections.append(
            Connection(GridPoint(0, 0), GridPoint(5, 2), ConnectionType.BRANCH, "#000000", 2.5)
        )
        problems = check_layout(layout, COMMITS)
        assert any("unknown cell" in p for p in problems)
        assert any("resolvable parent edges" in p for p in problems)

    def test_missing_node(self):
        layout = good_layout()
        layout.nodes.pop()
        assert check_layout(layout, COMMITS)

    def test_negative_lane(self):
        layout = good_layout()
        layout.nodes[1].column_index = -1
        problems = check_layout(layout, COMMITS)
        assert any("negative lane" in p for p in problems)

    def test_segment_through_foreign_node(self):
        commits = [
            CheckpointRecord("a", ("c",)),
            CheckpointRecord("b"),
            CheckpointRecord("c"),
        ]
        layout = calculate_graph_layout(commits, [], None)
        for node in layout.nodes:
            node.column_index = 0
        problems = check_lane_segments(layout, commits)
        assert len(problems) == 1
        assert "b sits between a" in problems[0]
        with pytest.raises(LayoutInvariantError):
            assert_valid_layout(layout, commits)


class TestCheckLaneTrace:
    """Test replay of lane events."""

    def test_double_occupancy(self):
        trace = [
            LaneEvent(0, 0, OCCUPY, "a"),
            LaneEvent(1, 0, OCCUPY, "b"),
        ]
        assert len(check_lane_trace(trace)) == 1

    def test_release_then_occupy(self):
        trace = [
            LaneEvent(0, 0, OCCUPY, "a"),
            LaneEvent(1, 0, RELEASE, "a"),
            LaneEvent(1, 0, OCCUPY, "b"),
        ]
        assert check_lane_trace(trace) == []

    def test_release_by_wrong_node(self):
        trace = [LaneEvent(0, 0, OCCUPY, "a"), LaneEvent(1, 0, RELEASE, "b")]
        assert check_lane_trace(trace)


class TestDuplicates:
    def test_find_duplicate_hashes(self):
        commits = [CheckpointRecord("a"), CheckpointRecord("b"), CheckpointRecord("a")]
        assert find_duplicate_hashes(commits) == ["a"]
        assert find_duplicate_hashes(COMMITS) == []
