"""
Read-only access to commit history using pygit2
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import pygit2

from lanegraph.layout.engine import GraphLayoutEngine
from lanegraph.layout.types import BranchHead, CheckpointRecord, GraphLayout


class LayoutEngine(Protocol):
    def layout(
        self,
        commits: list[CheckpointRecord],
        branch_heads: list[BranchHead],
        current_ref: str | None,
    ) -> GraphLayout: ...


class CheckpointRepository:
    """Feeds commit history, branch heads and HEAD into the layout engines"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except (pygit2.GitError, KeyError) as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def _tips(self) -> list[pygit2.Oid]:
        """Commit ids of every local branch plus HEAD (for detached checkouts)."""
        tips: list[pygit2.Oid] = []
        for head in self.list_branch_heads():
            tips.append(pygit2.Oid(hex=head.commit_hash))
        if not self.repo.head_is_unborn:
            head_commit = self.repo.head.peel(pygit2.Commit)
            if head_commit.id not in tips:
                tips.append(head_commit.id)
        return tips

    def list_commits(self, max_count: int | None = None) -> list[CheckpointRecord]:
        """
        List commits reachable from any local branch or HEAD, newest first.

        Args:
            max_count: Stop after this many commits. Parents past the cut
                are still listed and simply won't resolve during layout.

        Returns:
            Commits in topological order, ties broken by commit time
        """
        tips = self._tips()
        if not tips:
            return []

        sort_mode = pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        walker = self.repo.walk(tips[0], sort_mode)
        for tip in tips[1:]:
            walker.push(tip)

        records: list[CheckpointRecord] = []
        for c in walker:
            if max_count is not None and len(records) >= max_count:
                break
            records.append(
                CheckpointRecord(
                    hash=str(c.id),
                    parents=tuple(str(p) for p in c.parent_ids),
                    description=c.message.strip(),
                    author=c.author.name,
                    timestamp=datetime.fromtimestamp(c.commit_time, tz=timezone.utc).isoformat(),
                )
            )
        return records

    def list_branch_heads(self) -> list[BranchHead]:
        """Local branches and the commit each points to, sorted by name"""
        heads: list[BranchHead] = []
        for branch_name in sorted(self.repo.branches.local):
            branch = self.repo.branches[branch_name]
            commit = branch.peel(pygit2.Commit)
            heads.append(BranchHead(name=branch_name, commit_hash=str(commit.id)))
        return heads

    def current_ref(self) -> str | None:
        """Checked out branch name, the bare commit hash when detached, None when unborn"""
        if self.repo.head_is_unborn:
            return None
        if self.repo.head_is_detached:
            return str(self.repo.head.target)
        return self.repo.head.shorthand


def load_graph_layout(
    repo: CheckpointRepository,
    engine: LayoutEngine | None = None,
    max_count: int | None = None,
) -> GraphLayout:
    """Read history from the repository and lay it out."""
    if engine is None:
        engine = GraphLayoutEngine()

    commits = repo.list_commits(max_count)
    return engine.layout(commits, repo.list_branch_heads(), repo.current_ref())
