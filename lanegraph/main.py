#!/usr/bin/env python3
"""
lanegraph - print the lane layout of a git repository's history
"""

import argparse
import json
import sys
from pathlib import Path

from lanegraph.config.settings import Settings
from lanegraph.git_backend.repository import CheckpointRepository
from lanegraph.layout.engine import GraphLayoutEngine
from lanegraph.layout.linear import LinearLayoutEngine
from lanegraph.layout.types import GraphLayout


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="lanegraph",
        description="Lay out a commit history as lanes, like git log --graph",
    )
    parser.add_argument(
        "repo_path",
        nargs="?",
        default=None,
        help="Repository to read (default: the repository containing the cwd)",
    )
    parser.add_argument(
        "--linear",
        action="store_true",
        help="Use the single-lane layout (only for strictly linear histories)",
    )
    parser.add_argument("--json", action="store_true", help="Print the layout as JSON")
    parser.add_argument("--max-count", type=int, default=None, help="Limit the number of commits")
    parser.add_argument("--config", type=Path, default=None, help="Settings file to use")
    parser.add_argument("--verbose", action="store_true", help="Print diagnostics to stderr")
    return parser.parse_args(argv)


def render_text(layout: GraphLayout) -> str:
    """Render a layout as text: `*` marks a commit, `|` a lane passing through."""
    passing: dict[int, set[int]] = {}
    for conn in layout.connections:
        for row in range(conn.from_point.row_index + 1, conn.to_point.row_index):
            passing.setdefault(row, set()).add(conn.to_point.column_index)

    lines: list[str] = []
    for node in layout.nodes:
        cells = []
        for column in range(layout.max_columns):
            if column == node.column_index:
                cells.append("*")
            elif column in passing.get(node.row_index, set()):
                cells.append("|")
            else:
                cells.append(" ")
        graph = " ".join(cells)
        summary = node.checkpoint.description.split("\n")[0][:60]
        marker = " <- current" if node.is_current else ""
        branch = f" ({node.primary_branch_name})" if node.is_head else ""
        lines.append(f"{graph}  {node.checkpoint.short_hash}{branch} {summary}{marker}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = Settings(args.config)
        config = settings.get_layout_config()
        repo = CheckpointRepository(args.repo_path)

        commits = repo.list_commits(args.max_count)
        branch_heads = repo.list_branch_heads()
        current_ref = repo.current_ref()
        if args.verbose:
            print(
                f"[lanegraph] loaded {len(commits)} commits, {len(branch_heads)} branches",
                file=sys.stderr,
            )

        if args.linear:
            layout = LinearLayoutEngine(config).layout(commits, branch_heads, current_ref)
        else:
            engine = GraphLayoutEngine(config, settings.create_color_assigner())
            layout = engine.layout(commits, branch_heads, current_ref)
    except ValueError as e:
        print(f"lanegraph: {e}", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(
            f"[lanegraph] layout: {len(layout.nodes)} nodes, "
            f"{len(layout.connections)} connections, {layout.max_columns} lanes",
            file=sys.stderr,
        )

    if args.json:
        print(json.dumps(layout.to_dict(), indent=2))
    else:
        print(render_text(layout))


if __name__ == "__main__":
    main()
