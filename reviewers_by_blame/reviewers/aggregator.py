"""
Edit-to-author mapping.

Walks the old-file lines a patch replaces, looks up who last touched each one,
and credits one point per line to every eligible account that author resolves to.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from reviewers_by_blame.core.errors import IdentityResolutionError
from reviewers_by_blame.core.models import Account, BlameAttribution, EditRange
from reviewers_by_blame.reviewers.interfaces import AccountDirectory, IdentityResolver

logger = logging.getLogger(__name__)


class LineStatus(str, Enum):
    ATTRIBUTED = "attributed"
    UNATTRIBUTED = "unattributed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class LineAttribution:
    """Outcome of crediting a single old-file line."""

    line: int
    status: LineStatus
    accounts: tuple[Account, ...] = ()


class ReviewerAggregator:
    """
    Credits blamed lines to reviewer accounts for one change.

    Identity and account lookups are memoized for the lifetime of the aggregator,
    which is a single run; nothing is shared between changes.
    """

    def __init__(self, owner: str, identities: IdentityResolver, accounts: AccountDirectory):
        self.owner = owner
        self.identities = identities
        self.accounts = accounts
        self.lines_skipped = 0
        self._ids_by_email: dict[str, set[str]] = {}
        self._failed_emails: dict[str, IdentityResolutionError] = {}
        self._accounts_by_id: dict[str, Account | None] = {}

    def accumulate(self, edits: Iterable[EditRange], attribution: BlameAttribution) -> Counter[Account]:
        """
        Get the weight of every possible reviewer for one file's edits.

        Returns:
            A delta map of account to number of edited lines it is credited with;
            empty if none, never None.
        """
        weights: Counter[Account] = Counter()
        for edit in edits:
            for line in edit.old_lines():
                result = self.attribute_line(line, attribution)
                if result.status == LineStatus.SKIPPED:
                    self.lines_skipped += 1
                weights.update(result.accounts)
        return weights

    def attribute_line(self, line: int, attribution: BlameAttribution) -> LineAttribution:
        blamed = attribution.source_commit(line)
        if blamed is None:
            return LineAttribution(line=line, status=LineStatus.UNATTRIBUTED)

        email = blamed.author.email
        try:
            account_ids = self._resolve_email(email)
        except IdentityResolutionError as e:
            logger.warning(f"Skipping line {line} of {attribution.path}: {e}")
            return LineAttribution(line=line, status=LineStatus.SKIPPED)

        credited = []
        for account_id in sorted(account_ids):
            account = self._get_account(account_id)
            if account is None or not account.active or account.id == self.owner:
                continue
            credited.append(account)

        if not credited:
            return LineAttribution(line=line, status=LineStatus.UNATTRIBUTED)
        return LineAttribution(line=line, status=LineStatus.ATTRIBUTED, accounts=tuple(credited))

    def _resolve_email(self, email: str) -> set[str]:
        # A failed lookup stays failed for the rest of the run.
        if email in self._failed_emails:
            raise self._failed_emails[email]
        if email not in self._ids_by_email:
            try:
                self._ids_by_email[email] = set(self.identities.accounts_for_email(email))
            except IdentityResolutionError as e:
                self._failed_emails[email] = e
                raise
        return self._ids_by_email[email]

    def _get_account(self, account_id: str) -> Account | None:
        if account_id not in self._accounts_by_id:
            self._accounts_by_id[account_id] = self.accounts.get_account(account_id)
        return self._accounts_by_id[account_id]


def accumulate(
    edits: Iterable[EditRange],
    attribution: BlameAttribution,
    owner: str,
    identities: IdentityResolver,
    accounts: AccountDirectory,
) -> Counter[Account]:
    """Credit one file's edits without keeping an aggregator around."""
    return ReviewerAggregator(owner, identities, accounts).accumulate(edits, attribution)
