from abc import ABC, abstractmethod

from reviewers_by_blame.core.models import Account, BlameAttribution, Change, FileDiffEntry


class DiffEngine(ABC):
    """
    Computes the file-level diff of a patch set revision against its base.

    Implementations raise DiffNotAvailableError when the diff cannot be produced.
    """

    @abstractmethod
    def list_modified_files(self, project: str, revision: str, base: str | None) -> dict[str, FileDiffEntry]:
        """
        List modified files keyed by path.

        Args:
            project: The repository in format "owner/repo"
            revision: The patch set commit
            base: The base commit, or None to diff against the empty tree
        """
        pass


class BlameEngine(ABC):
    """Computes per-line attribution of a file at a revision."""

    @abstractmethod
    def blame(self, start_revision: str, file_path: str) -> BlameAttribution:
        """
        Attribute every line of ``file_path`` as it exists at ``start_revision``.

        Raises:
            BlameComputationError: If the blame cannot be computed.
        """
        pass


class IdentityResolver(ABC):
    """Resolves an author email to platform account identifiers."""

    @abstractmethod
    def accounts_for_email(self, email: str) -> set[str]:
        """
        Return every account id registered for ``email`` (possibly none).

        Raises:
            IdentityResolutionError: On I/O failure while resolving.
        """
        pass


class AccountDirectory(ABC):
    @abstractmethod
    def get_account(self, account_id: str) -> Account | None:
        """Return the account record, or None if no such account exists."""
        pass


class ReviewClient(ABC):
    """Submits reviewers to the review system."""

    @abstractmethod
    def add_reviewers(self, change: Change, reviewers: list[Account]) -> bool:
        """Request ``reviewers`` on ``change``. Returns False when the review system refused."""
        pass
