"""
GitHub API adapter.

This package provides integrations for GitHub API interactions.
"""

from reviewers_by_blame.integrations.github.accounts import GitHubAccountDirectory, GitHubIdentityResolver
from reviewers_by_blame.integrations.github.api import GitHubClient, github_client
from reviewers_by_blame.integrations.github.review import GitHubReviewClient

__all__ = [
    "GitHubAccountDirectory",
    "GitHubClient",
    "GitHubIdentityResolver",
    "GitHubReviewClient",
    "github_client",
]
