"""Commit graph layout: lanes, colors and connections."""

from lanegraph.layout.colors import BranchColorAssigner
from lanegraph.layout.engine import GraphLayoutEngine, calculate_graph_layout
from lanegraph.layout.lanes import LaneSlot, LaneTable
from lanegraph.layout.linear import LinearLayoutEngine, calculate_linear_layout
from lanegraph.layout.types import (
    BranchHead,
    BranchOrigin,
    CheckpointRecord,
    Connection,
    ConnectionType,
    GraphLayout,
    GraphNode,
    GridPoint,
    OriginKind,
)
from lanegraph.layout.validation import DuplicateCommitError, LayoutInvariantError

__all__ = [
    "BranchColorAssigner",
    "BranchHead",
    "BranchOrigin",
    "CheckpointRecord",
    "Connection",
    "ConnectionType",
    "DuplicateCommitError",
    "GraphLayout",
    "GraphLayoutEngine",
    "GraphNode",
    "GridPoint",
    "LaneSlot",
    "LaneTable",
    "LayoutInvariantError",
    "LinearLayoutEngine",
    "OriginKind",
    "calculate_graph_layout",
    "calculate_linear_layout",
]
