"""Types for commit graph layout."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lanegraph.constants import SHORT_HASH_LENGTH, SYNTHETIC_BRANCH_PREFIX


@dataclass(frozen=True)
class CheckpointRecord:
    """A commit as supplied by the checkpoint store (newest first)."""

    hash: str
    parents: tuple[str, ...] = ()
    description: str = ""
    author: str = ""
    timestamp: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence of parents, store as a tuple
        if not isinstance(self.parents, tuple):
            object.__setattr__(self, "parents", tuple(self.parents))

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]


@dataclass(frozen=True)
class BranchHead:
    """A named branch and the commit it points to."""

    name: str
    commit_hash: str


class OriginKind(Enum):
    HEAD = "head"
    INHERITED = "inherited"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class BranchOrigin:
    """Where a commit's branch name came from."""

    kind: OriginKind
    name: str

    @classmethod
    def head(cls, name: str) -> "BranchOrigin":
        return cls(OriginKind.HEAD, name)

    @classmethod
    def inherited(cls, name: str) -> "BranchOrigin":
        return cls(OriginKind.INHERITED, name)

    @classmethod
    def synthetic(cls, hash_prefix: str) -> "BranchOrigin":
        return cls(OriginKind.SYNTHETIC, f"{SYNTHETIC_BRANCH_PREFIX}{hash_prefix}")


class ConnectionType(str, Enum):
    DIRECT = "direct"
    BRANCH = "branch"
    MERGE = "merge"


@dataclass(frozen=True)
class GridPoint:
    """A (row, lane) cell in the graph."""

    row_index: int
    column_index: int

    def to_dict(self) -> dict[str, int]:
        return {"rowIndex": self.row_index, "columnIndex": self.column_index}


@dataclass
class GraphNode:
    """A commit with its layout position."""

    checkpoint: CheckpointRecord
    row_index: int
    column_index: int = 0
    primary_branch_name: str | None = None
    color: str = ""
    is_merge_commit: bool = False
    is_branch_point: bool = False
    is_head: bool = False
    is_current: bool = False
    priority: float = 0.0
    merge_parent_lanes: list[int] = field(default_factory=list)
    secondary_branch_names: list[str] = field(default_factory=list)
    origin: BranchOrigin | None = None

    @property
    def hash(self) -> str:
        return self.checkpoint.hash

    @property
    def position(self) -> GridPoint:
        return GridPoint(self.row_index, self.column_index)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hash": self.checkpoint.hash,
            "parents": list(self.checkpoint.parents),
            "description": self.checkpoint.description,
            "author": self.checkpoint.author,
            "timestamp": self.checkpoint.timestamp,
            "rowIndex": self.row_index,
            "columnIndex": self.column_index,
            "primaryBranchName": self.primary_branch_name,
            "color": self.color,
            "isMergeCommit": self.is_merge_commit,
            "isBranchPoint": self.is_branch_point,
            "isHead": self.is_head,
            "isCurrent": self.is_current,
            "priority": self.priority,
            "mergeParentLanes": list(self.merge_parent_lanes),
            "secondaryBranchNames": list(self.secondary_branch_names),
        }


@dataclass(frozen=True)
class Connection:
    """An edge drawn from a child commit down to one of its parents."""

    from_point: GridPoint
    to_point: GridPoint
    type: ConnectionType
    color: str
    stroke_width: float
    parent_index: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_point.to_dict(),
            "to": self.to_point.to_dict(),
            "type": self.type.value,
            "color": self.color,
            "strokeWidth": self.stroke_width,
        }


@dataclass
class GraphLayout:
    """Result of a layout pass, handed to the renderer."""

    nodes: list[GraphNode] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    max_columns: int = 0

    @classmethod
    def empty(cls) -> "GraphLayout":
        return cls()

    def node_at(self, row_index: int) -> GraphNode:
        return self.nodes[row_index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": [conn.to_dict() for conn in self.connections],
            "maxColumns": self.max_columns,
        }
