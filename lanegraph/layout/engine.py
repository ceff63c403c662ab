"""
Lane layout for commit graphs.

Turns a newest-first commit list into (row, lane) positions, branch colors and
parent connections, in the style of `git log --graph`. Everything is derived
from scratch on each call; the only state that outlives a call is the color
assigner's cache.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from lanegraph.constants import MAIN_BRANCH_NAMES, LayoutConfig
from lanegraph.layout.colors import BranchColorAssigner
from lanegraph.layout.lanes import LaneSlot, LaneTable
from lanegraph.layout.types import (
    BranchHead,
    BranchOrigin,
    CheckpointRecord,
    Connection,
    ConnectionType,
    GraphLayout,
    GraphNode,
)
from lanegraph.layout.validation import DuplicateCommitError, find_duplicate_hashes


@dataclass
class _GraphEntry:
    """Pass 1 bookkeeping for one commit."""

    node: GraphNode
    parents: list[str] = field(default_factory=list)  # resolved, in parent order
    children: list[str] = field(default_factory=list)  # in row order
    placed: bool = False


class GraphLayoutEngine:
    """Assigns lanes, colors and connections for an arbitrary commit DAG."""

    def __init__(
        self,
        config: LayoutConfig | None = None,
        colors: BranchColorAssigner | None = None,
    ) -> None:
        self.config = config or LayoutConfig()
        self.colors = colors

    def layout(
        self,
        commits: Sequence[CheckpointRecord],
        branch_heads: Sequence[BranchHead],
        current_ref: str | None,
    ) -> GraphLayout:
        result, _ = self.layout_with_lanes(commits, branch_heads, current_ref)
        return result

    def layout_with_lanes(
        self,
        commits: Sequence[CheckpointRecord],
        branch_heads: Sequence[BranchHead],
        current_ref: str | None,
    ) -> tuple[GraphLayout, LaneTable]:
        """Like layout(), also returning the lane table used for the pass."""
        lanes = LaneTable()
        if not commits:
            return GraphLayout.empty(), lanes

        duplicates = find_duplicate_hashes(commits)
        if duplicates:
            raise DuplicateCommitError(duplicates)

        colors = self.colors if self.colors is not None else BranchColorAssigner()

        entries = self._build_graph(commits, branch_heads, current_ref)
        origins = self._resolve_origins(commits, entries, branch_heads)
        priorities = self._priority_table(origins)

        max_columns = 0
        for row_index, commit in enumerate(commits):
            entry = entries[commit.hash]
            node = entry.node
            origin = origins[commit.hash]
            node.origin = origin
            node.primary_branch_name = origin.name
            node.priority = priorities[origin.name]

            lanes.row_index = row_index
            lane = self._choose_lane(entry, entries, lanes)
            node.column_index = lane

            awaiting = None
            if commit.parents and commit.parents[0] in entries:
                if not entries[commit.parents[0]].placed:
                    awaiting = commit.parents[0]
            lanes.occupy(lane, LaneSlot(commit.hash, awaiting, node.priority, origin.name))
            if awaiting is None:
                lanes.release(lane)
            entry.placed = True

            node.color = colors.color_for(origin.name)
            max_columns = max(max_columns, lane + 1)

        connections: list[Connection] = []
        for commit in commits:
            entry = entries[commit.hash]
            if entry.node.is_merge_commit:
                entry.node.merge_parent_lanes = [
                    entries[p].node.column_index for p in entry.parents
                ]
                entry.node.secondary_branch_names = [
                    origins[p].name for p in commit.parents[1:] if p in entries
                ]
            connections.extend(self._connections_for(commit, entries))

        nodes = [entries[c.hash].node for c in commits]
        return GraphLayout(nodes=nodes, connections=connections, max_columns=max_columns), lanes

    def _build_graph(
        self,
        commits: Sequence[CheckpointRecord],
        branch_heads: Sequence[BranchHead],
        current_ref: str | None,
    ) -> dict[str, _GraphEntry]:
        """Pass 1: nodes, resolved parent/child links and flags."""
        head_names = _head_names(branch_heads)
        current_hashes = {h.commit_hash for h in branch_heads if h.name == current_ref}
        if current_ref is not None:
            current_hashes.add(current_ref)

        entries: dict[str, _GraphEntry] = {}
        for row_index, commit in enumerate(commits):
            node = GraphNode(
                checkpoint=commit,
                row_index=row_index,
                is_merge_commit=len(commit.parents) > 1,
                is_head=commit.hash in head_names,
                is_current=commit.hash in current_hashes,
            )
            entries[commit.hash] = _GraphEntry(node=node)

        for commit in commits:
            entry = entries[commit.hash]
            for parent_hash in commit.parents:
                parent = entries.get(parent_hash)
                if parent is None:
                    # Truncated history - nothing to link to
                    continue
                entry.parents.append(parent_hash)
                parent.children.append(commit.hash)
                if len(parent.children) > 1:
                    parent.node.is_branch_point = True

        return entries

    def _resolve_origins(
        self,
        commits: Sequence[CheckpointRecord],
        entries: dict[str, _GraphEntry],
        branch_heads: Sequence[BranchHead],
    ) -> dict[str, BranchOrigin]:
        """Pass 2a: branch name of every commit, resolved once.

        Heads name themselves. Other commits inherit from their primary
        parent, walking down the first-parent chain until a head, a commit
        without a known parent, or a cycle.
        """
        head_names = _head_names(branch_heads)
        origins: dict[str, BranchOrigin] = {}

        def primary_parent(commit_hash: str) -> str | None:
            parents = entries[commit_hash].node.checkpoint.parents
            if parents and parents[0] in entries:
                return parents[0]
            return None

        for commit in commits:
            chain: list[str] = []
            on_chain: set[str] = set()
            current = commit.hash
            while current not in origins:
                if current in head_names:
                    origins[current] = BranchOrigin.head(head_names[current])
                    break
                parent = primary_parent(current)
                if parent is None or parent == current or parent in on_chain:
                    prefix = entries[current].node.checkpoint.short_hash
                    origins[current] = BranchOrigin.synthetic(prefix)
                    break
                chain.append(current)
                on_chain.add(current)
                current = parent

            # Each chain entry's primary parent is the entry after it
            links = list(zip(chain, chain[1:] + [current]))
            for commit_hash, parent in reversed(links):
                origins[commit_hash] = BranchOrigin.inherited(origins[parent].name)

        return origins

    def _priority_table(self, origins: dict[str, BranchOrigin]) -> dict[str, float]:
        """Pass 2b: main/master on top, others ranked by commit count."""
        counts = Counter(origin.name for origin in origins.values())
        top = self.config.main_branch_priority
        max_other = max(
            (n for name, n in counts.items() if name not in MAIN_BRANCH_NAMES), default=0
        )

        priorities: dict[str, float] = {}
        for name, count in counts.items():
            if name in MAIN_BRANCH_NAMES:
                priorities[name] = top
            else:
                priorities[name] = top * count / (max_other + 1)
        return priorities

    def _choose_lane(
        self,
        entry: _GraphEntry,
        entries: dict[str, _GraphEntry],
        lanes: LaneTable,
    ) -> int:
        """Pass 3, steps 2-5: pick the lane for one commit."""
        node = entry.node
        cfg = self.config

        # Lines coming down from children whose primary parent this is end here
        released = lanes.release_awaiting(node.hash)
        excluded = lanes.evicted_from(node.hash)

        if node.is_head:
            lane = lanes.claim_for_head(
                node.priority, cfg.head_lane_lookahead, cfg.head_takeover_premium, excluded
            )
            if lane is not None:
                return lane

        # Continue the primary line of descent
        for lane in sorted(released):
            if lane not in excluded and lanes.is_free(lane):
                return lane

        if node.is_merge_commit:
            lane = self._merge_lane(entry, entries, lanes, excluded)
            if lane is not None:
                return lane

        lane = lanes.first_free(excluded)
        if lane is None:
            lane = lanes.take_over(node.priority, cfg.fallback_takeover_premium, excluded)
        if lane is None:
            lane = lanes.extend()
        return lane

    def _merge_lane(
        self,
        entry: _GraphEntry,
        entries: dict[str, _GraphEntry],
        lanes: LaneTable,
        excluded: set[int],
    ) -> int | None:
        """Free lane strictly between the lanes of the merged parents."""
        parent_lanes: list[int] = []
        for parent_hash in entry.parents:
            parent = entries[parent_hash]
            if parent.placed:
                parent_lanes.append(parent.node.column_index)
            else:
                waiting = lanes.lanes_awaiting(parent_hash)
                if waiting:
                    parent_lanes.append(waiting[0])
        if len(parent_lanes) < 2:
            return None
        return lanes.free_between(min(parent_lanes), max(parent_lanes), excluded)

    def _connections_for(
        self,
        commit: CheckpointRecord,
        entries: dict[str, _GraphEntry],
    ) -> list[Connection]:
        """Pass 3, step 9: one connection per resolvable parent edge."""
        child = entries[commit.hash].node
        result: list[Connection] = []
        for parent_index, parent_hash in enumerate(commit.parents):
            if parent_hash not in entries:
                continue
            parent = entries[parent_hash].node

            if child.is_merge_commit and parent_index > 0:
                conn_type = ConnectionType.MERGE
                color = parent.color
            elif child.column_index != parent.column_index:
                conn_type = ConnectionType.BRANCH
                color = child.color
            else:
                conn_type = ConnectionType.DIRECT
                color = child.color

            result.append(
                Connection(
                    from_point=child.position,
                    to_point=parent.position,
                    type=conn_type,
                    color=color,
                    stroke_width=self._stroke_width(conn_type),
                    parent_index=parent_index,
                )
            )
        return result

    def _stroke_width(self, conn_type: ConnectionType) -> float:
        if conn_type == ConnectionType.DIRECT:
            return self.config.direct_stroke_width
        if conn_type == ConnectionType.BRANCH:
            return self.config.branch_stroke_width
        return self.config.merge_stroke_width


def _head_names(branch_heads: Sequence[BranchHead]) -> dict[str, str]:
    """Map commit hash -> branch name. main/master win, else first listed."""
    names: dict[str, str] = {}
    for head in branch_heads:
        existing = names.get(head.commit_hash)
        promotes = head.name in MAIN_BRANCH_NAMES and existing not in MAIN_BRANCH_NAMES
        if existing is None or promotes:
            names[head.commit_hash] = head.name
    return names


def calculate_graph_layout(
    commits: Sequence[CheckpointRecord],
    branch_heads: Sequence[BranchHead],
    current_ref: str | None,
    config: LayoutConfig | None = None,
    colors: BranchColorAssigner | None = None,
) -> GraphLayout:
    """Lay out a commit graph in one call."""
    return GraphLayoutEngine(config, colors).layout(commits, branch_heads, current_ref)
