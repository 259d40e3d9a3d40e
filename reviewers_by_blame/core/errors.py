"""
Core error classes for the Reviewers by Blame service.
"""


class DiffNotAvailableError(Exception):
    """Raised when the file-level diff of a revision against its base cannot be computed."""

    def __init__(self, revision: str, reason: str = "") -> None:
        self.revision = revision
        self.reason = reason
        message = f"Diff not available for revision {revision}"
        super().__init__(f"{message}: {reason}" if reason else message)


class BlameComputationError(Exception):
    """Raised when the blame engine fails for a file at a revision."""

    def __init__(self, revision: str, path: str, reason: str = "") -> None:
        self.revision = revision
        self.path = path
        super().__init__(f"Blame failed for {path} at {revision}: {reason}")


class IdentityResolutionError(OSError):
    """Raised when an author email cannot be resolved to accounts because of an I/O failure."""

    def __init__(self, email: str, reason: str = "") -> None:
        self.email = email
        super().__init__(f"Unable to get account with email: {email} ({reason})")


class RepositoryNotFoundError(Exception):
    """Raised when a repository cannot be cloned or fetched."""

    pass


class GitHubRateLimitError(Exception):
    """Raised when GitHub API rate limit is exceeded."""

    pass


class ConfigurationError(ValueError):
    """Raised for invalid reviewer selection settings (bad pattern, non-positive limits)."""

    pass
