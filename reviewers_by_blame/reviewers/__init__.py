"""
Blame-based reviewer selection.
"""

from reviewers_by_blame.reviewers.aggregator import ReviewerAggregator, accumulate
from reviewers_by_blame.reviewers.selection import select_top
from reviewers_by_blame.reviewers.task import (
    ReviewersByBlame,
    ReviewerSelectionResult,
    SelectionState,
    create_reviewers_task,
)

__all__ = [
    "ReviewerAggregator",
    "ReviewerSelectionResult",
    "ReviewersByBlame",
    "SelectionState",
    "accumulate",
    "create_reviewers_task",
    "select_top",
]
