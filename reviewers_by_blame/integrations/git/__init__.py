"""
Local Git adapters: repository cache, diff engine and blame engine.
"""

from reviewers_by_blame.integrations.git.blame import GitBlameEngine
from reviewers_by_blame.integrations.git.diff import GitDiffEngine, review_parents
from reviewers_by_blame.integrations.git.repository import RepositoryCache, branch_refspec, pull_request_refspec

__all__ = [
    "GitBlameEngine",
    "GitDiffEngine",
    "RepositoryCache",
    "branch_refspec",
    "pull_request_refspec",
    "review_parents",
]
