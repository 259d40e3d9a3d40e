"""
Local workspace configuration.
"""

from dataclasses import dataclass


@dataclass
class WorkspaceConfig:
    """Where repositories are cloned for diff and blame."""

    repo_cache_dir: str
