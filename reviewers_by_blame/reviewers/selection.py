import heapq
from collections.abc import Mapping

from reviewers_by_blame.core.models import Account


def ranking_key(item: tuple[Account, int]) -> tuple[int, str]:
    """Heaviest first; equal weights fall back to ascending account id."""
    account, weight = item
    return (-weight, account.id)


def select_top(weights: Mapping[Account, int], k: int) -> list[Account]:
    """
    Pick the ``k`` best matching reviewers.

    Args:
        weights: Accumulated weight per candidate account
        k: Maximum number of reviewers

    Returns:
        At most ``k`` distinct accounts, best first; empty if none, never None.
    """
    if k <= 0 or not weights:
        return []
    top = heapq.nsmallest(k, weights.items(), key=ranking_key)
    return [account for account, _ in top]
