"""Shared fixtures: small git repositories built with pygit2."""

from dataclasses import dataclass
from pathlib import Path

import pygit2
import pytest


@dataclass
class SampleRepo:
    path: Path
    repo: pygit2.Repository
    root: str
    main_tip: str
    feature_tip: str


def _commit(
    repo: pygit2.Repository, ref: str, message: str, parents: list[pygit2.Oid], when: int
) -> pygit2.Oid:
    sig = pygit2.Signature("Test Author", "test@example.com", when, 0)
    tree = repo.TreeBuilder().write()
    return repo.create_commit(ref, sig, sig, message, tree, parents)


@pytest.fixture
def sample_repo(tmp_path: Path) -> SampleRepo:
    """main: root -> second, feature: root -> feature work (newest)."""
    repo = pygit2.init_repository(str(tmp_path), initial_head="main")
    root = _commit(repo, "refs/heads/main", "Initial commit", [], 1_700_000_000)
    second = _commit(repo, "refs/heads/main", "Second commit\n\nWith a body", [root], 1_700_000_100)
    feature = _commit(repo, "refs/heads/feature", "Feature work", [root], 1_700_000_200)
    return SampleRepo(tmp_path, repo, str(root), str(second), str(feature))
