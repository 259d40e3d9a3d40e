import logging
import re
from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field

from reviewers_by_blame.core.errors import ConfigurationError, DiffNotAvailableError
from reviewers_by_blame.core.models import Account, Change, FileDiffEntry, RevisionCommit
from reviewers_by_blame.core.utils.logging import log_operation
from reviewers_by_blame.reviewers.aggregator import ReviewerAggregator
from reviewers_by_blame.reviewers.blame import resolve_blame
from reviewers_by_blame.reviewers.eligibility import (
    compile_pattern,
    is_change_eligible,
    is_file_eligible,
    is_subject_ignored,
)
from reviewers_by_blame.reviewers.interfaces import (
    AccountDirectory,
    BlameEngine,
    DiffEngine,
    IdentityResolver,
    ReviewClient,
)
from reviewers_by_blame.reviewers.selection import select_top

logger = logging.getLogger(__name__)


class SelectionState(str, Enum):
    """
    Outcome of one reviewer selection run.

    - ADDED: Reviewers were selected (and submitted, see ``submitted``)
    - NO_CANDIDATES: The change was processed but nobody qualified
    - SKIPPED: The change was not processed (merge/root commit, diff unavailable, ignored)
    """

    ADDED = "added"
    NO_CANDIDATES = "no_candidates"
    SKIPPED = "skipped"


class ReviewerSelectionResult(BaseModel):
    """Result of one reviewer selection run."""

    state: SelectionState
    reviewers: list[str] = Field(default_factory=list)
    weights: dict[str, int] = Field(default_factory=dict)
    files_considered: int = 0
    lines_skipped: int = 0
    submitted: bool = False
    reason: str | None = None


class ReviewersByBlame:
    """
    Suggests reviewers for one patch set from blame of the lines it modifies.

    Build instances with :func:`create_reviewers_task`. Each instance handles a
    single change and owns its weight map; ``run`` is synchronous and makes its
    collaborator calls one after another.
    """

    def __init__(
        self,
        commit: RevisionCommit,
        change: Change,
        max_reviewers: int,
        ignore_file: re.Pattern[str] | None,
        ignore_subject: re.Pattern[str] | None,
        diff_engine: DiffEngine,
        blame_engine: BlameEngine,
        identities: IdentityResolver,
        accounts: AccountDirectory,
        review_client: ReviewClient,
    ):
        self.commit = commit
        self.change = change
        self.max_reviewers = max_reviewers
        self.ignore_file = ignore_file
        self.ignore_subject = ignore_subject
        self.diff_engine = diff_engine
        self.blame_engine = blame_engine
        self.identities = identities
        self.accounts = accounts
        self.review_client = review_client

    def run(self) -> ReviewerSelectionResult:
        with log_operation(
            "reviewers_by_blame",
            subject_ids={"repo": self.change.project, "pr": str(self.change.id)},
            revision=self.commit.sha,
        ) as ctx:
            result = self._run()
            ctx["state"] = result.state.value
            ctx["reviewers"] = result.reviewers
        return result

    def _run(self) -> ReviewerSelectionResult:
        try:
            entries = self.diff_engine.list_modified_files(
                self.change.project, self.commit.sha, self.commit.first_parent
            )
        except DiffNotAvailableError as e:
            logger.error(f"Couldn't load patch list for change {self.change.project}#{self.change.id}: {e}")
            return ReviewerSelectionResult(state=SelectionState.SKIPPED, reason="diff not available")

        # Ignore merges and initial commit.
        if not is_change_eligible(self.commit):
            return ReviewerSelectionResult(
                state=SelectionState.SKIPPED, reason=f"commit has {self.commit.parent_count} parents"
            )

        if is_subject_ignored(self.change, self.ignore_subject):
            logger.info(f"Change {self.change.project}#{self.change.id} ignored by subject: {self.change.subject!r}")
            return ReviewerSelectionResult(state=SelectionState.SKIPPED, reason="subject ignored")

        parent = self.commit.parents[0]
        aggregator = ReviewerAggregator(self.change.owner, self.identities, self.accounts)
        weights: Counter[Account] = Counter()
        files_considered = 0

        for entry in entries.values():
            delta = self._weigh_file(entry, parent, aggregator)
            if delta is None:
                continue
            files_considered += 1
            weights.update(delta)

        top = select_top(weights, self.max_reviewers)
        result = ReviewerSelectionResult(
            state=SelectionState.ADDED if top else SelectionState.NO_CANDIDATES,
            reviewers=[account.id for account in top],
            weights={account.id: weight for account, weight in weights.items()},
            files_considered=files_considered,
            lines_skipped=aggregator.lines_skipped,
        )
        if top:
            result.submitted = self._add_reviewers(top)
        return result

    def _weigh_file(
        self, entry: FileDiffEntry, parent: str, aggregator: ReviewerAggregator
    ) -> Counter[Account] | None:
        if not is_file_eligible(entry, self.ignore_file):
            return None
        attribution = resolve_blame(self.blame_engine, entry, parent)
        if attribution is None:
            return None
        return aggregator.accumulate(entry.edits, attribution)

    def _add_reviewers(self, reviewers: list[Account]) -> bool:
        """Append the reviewers to the change; failures are logged, never raised."""
        try:
            added = self.review_client.add_reviewers(self.change, reviewers)
        except Exception as e:
            logger.error(f"Couldn't add reviewers to change {self.change.project}#{self.change.id}: {e}")
            return False
        if not added:
            logger.error(f"Review system refused reviewers for change {self.change.project}#{self.change.id}")
        return added


def create_reviewers_task(
    commit: RevisionCommit,
    change: Change,
    max_reviewers: int,
    ignore_file_pattern: str,
    *,
    diff_engine: DiffEngine,
    blame_engine: BlameEngine,
    identities: IdentityResolver,
    accounts: AccountDirectory,
    review_client: ReviewClient,
    ignore_subject_pattern: str = "",
) -> ReviewersByBlame:
    """
    Build the reviewer selection task for one change.

    Raises:
        ConfigurationError: If ``max_reviewers`` is not positive or a pattern does not compile.
    """
    if max_reviewers < 1:
        raise ConfigurationError(f"max_reviewers must be positive, got {max_reviewers}")
    return ReviewersByBlame(
        commit=commit,
        change=change,
        max_reviewers=max_reviewers,
        ignore_file=compile_pattern(ignore_file_pattern, "ignore file pattern"),
        ignore_subject=compile_pattern(ignore_subject_pattern, "ignore subject pattern"),
        diff_engine=diff_engine,
        blame_engine=blame_engine,
        identities=identities,
        accounts=accounts,
        review_client=review_client,
    )
