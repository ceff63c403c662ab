"""Single-lane layout for histories known to be linear."""

from collections.abc import Sequence

from lanegraph.constants import LayoutConfig
from lanegraph.layout.types import (
    BranchHead,
    CheckpointRecord,
    Connection,
    ConnectionType,
    GraphLayout,
    GraphNode,
)


class LinearLayoutEngine:
    """
    Lay out a strictly linear history in lane 0.

    There is no lane contention here at all. Only use this when the caller
    guarantees a single parent chain; it is never picked automatically.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()

    def layout(
        self,
        commits: Sequence[CheckpointRecord],
        branch_heads: Sequence[BranchHead],
        current_ref: str | None,
    ) -> GraphLayout:
        if not commits:
            return GraphLayout.empty()

        color = self.config.linear_color
        head_names = {h.commit_hash: h.name for h in branch_heads}
        current_hashes = {h.commit_hash for h in branch_heads if h.name == current_ref}
        if current_ref is not None:
            current_hashes.add(current_ref)
        branch_name = branch_heads[0].name if branch_heads else None

        nodes = [
            GraphNode(
                checkpoint=commit,
                row_index=row_index,
                column_index=0,
                primary_branch_name=head_names.get(commit.hash, branch_name),
                color=color,
                is_merge_commit=len(commit.parents) > 1,
                is_head=commit.hash in head_names,
                is_current=commit.hash in current_hashes,
            )
            for row_index, commit in enumerate(commits)
        ]

        connections: list[Connection] = []
        for i in range(len(commits) - 1):
            # Skip gaps left by deleted or filtered commits
            if commits[i + 1].hash not in commits[i].parents:
                continue
            connections.append(
                Connection(
                    from_point=nodes[i].position,
                    to_point=nodes[i + 1].position,
                    type=ConnectionType.DIRECT,
                    color=color,
                    stroke_width=self.config.linear_stroke_width,
                    parent_index=commits[i].parents.index(commits[i + 1].hash),
                )
            )

        return GraphLayout(nodes=nodes, connections=connections, max_columns=1)


def calculate_linear_layout(
    commits: Sequence[CheckpointRecord],
    branch_heads: Sequence[BranchHead],
    current_ref: str | None,
    config: LayoutConfig | None = None,
) -> GraphLayout:
    return LinearLayoutEngine(config).layout(commits, branch_heads, current_ref)
