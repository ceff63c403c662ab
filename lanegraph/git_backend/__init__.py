"""Git backend for reading commit history"""

from lanegraph.git_backend.repository import CheckpointRepository, load_graph_layout

__all__ = ["CheckpointRepository", "load_graph_layout"]
