"""
Pytest configuration: puts the project root on sys.path and provides in-memory
collaborators for the reviewer selection core.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reviewers_by_blame.core.errors import (  # noqa: E402
    BlameComputationError,
    DiffNotAvailableError,
    IdentityResolutionError,
)
from reviewers_by_blame.core.models import (  # noqa: E402
    Account,
    AuthorIdent,
    BlameAttribution,
    BlameLine,
    Change,
    FileDiffEntry,
)
from reviewers_by_blame.reviewers.interfaces import (  # noqa: E402
    AccountDirectory,
    BlameEngine,
    DiffEngine,
    IdentityResolver,
    ReviewClient,
)


def make_attribution(path: str, emails: list[str], revision: str = "parent") -> BlameAttribution:
    """One blamed line per email; each distinct email gets its own fake commit."""
    lines = [
        BlameLine(commit_sha=f"c-{email}", author=AuthorIdent(name=email.split("@")[0], email=email))
        for email in emails
    ]
    return BlameAttribution(path=path, revision=revision, lines=lines)


class FakeDiffEngine(DiffEngine):
    def __init__(self) -> None:
        self.entries: dict[str, FileDiffEntry] = {}
        self.unavailable = False
        self.calls: list[tuple[str, str, str | None]] = []

    def list_modified_files(self, project: str, revision: str, base: str | None) -> dict[str, FileDiffEntry]:
        self.calls.append((project, revision, base))
        if self.unavailable:
            raise DiffNotAvailableError(revision, "patch list unavailable")
        return dict(self.entries)

    def add(self, entry: FileDiffEntry) -> None:
        self.entries[entry.path] = entry


class FakeBlameEngine(BlameEngine):
    def __init__(self) -> None:
        self.emails_by_path: dict[str, list[str]] = {}
        self.failing: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def blame(self, start_revision: str, file_path: str) -> BlameAttribution:
        self.calls.append((start_revision, file_path))
        if file_path in self.failing:
            raise self.failing[file_path]
        if file_path not in self.emails_by_path:
            raise BlameComputationError(start_revision, file_path, "no such path")
        return make_attribution(file_path, self.emails_by_path[file_path], start_revision)


class FakeIdentityResolver(IdentityResolver):
    def __init__(self) -> None:
        self.ids_by_email: dict[str, set[str]] = {}
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def accounts_for_email(self, email: str) -> set[str]:
        self.calls.append(email)
        if email in self.failing:
            raise IdentityResolutionError(email, "connection reset")
        return set(self.ids_by_email.get(email, set()))


class FakeAccountDirectory(AccountDirectory):
    def __init__(self) -> None:
        self.accounts: dict[str, Account] = {}
        self.calls: list[str] = []

    def get_account(self, account_id: str) -> Account | None:
        self.calls.append(account_id)
        return self.accounts.get(account_id)

    def add(self, account_id: str, active: bool = True) -> Account:
        account = Account(id=account_id, active=active)
        self.accounts[account_id] = account
        return account


class FakeReviewClient(ReviewClient):
    def __init__(self) -> None:
        self.accept = True
        self.error: Exception | None = None
        self.calls: list[tuple[Change, list[str]]] = []

    def add_reviewers(self, change: Change, reviewers: list[Account]) -> bool:
        self.calls.append((change, [account.id for account in reviewers]))
        if self.error is not None:
            raise self.error
        return self.accept


@pytest.fixture
def diff_engine() -> FakeDiffEngine:
    return FakeDiffEngine()


@pytest.fixture
def blame_engine() -> FakeBlameEngine:
    return FakeBlameEngine()


@pytest.fixture
def identities() -> FakeIdentityResolver:
    return FakeIdentityResolver()


@pytest.fixture
def account_directory() -> FakeAccountDirectory:
    return FakeAccountDirectory()


@pytest.fixture
def review_client() -> FakeReviewClient:
    return FakeReviewClient()


@pytest.fixture
def attribution_factory():
    return make_attribution
