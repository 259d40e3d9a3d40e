from collections import Counter

from reviewers_by_blame.core.models import Account
from reviewers_by_blame.reviewers.selection import select_top


def _weights(**kwargs: int) -> Counter:
    return Counter({Account(id=name): weight for name, weight in kwargs.items()})


def test_heaviest_accounts_win():
    top = select_top(_weights(alice=5, bob=2, carol=7), 2)

    assert [account.id for account in top] == ["carol", "alice"]


def test_fewer_candidates_than_k_returns_all():
    top = select_top(_weights(alice=1), 3)

    assert [account.id for account in top] == ["alice"]


def test_ties_are_broken_by_account_id():
    weights = _weights(zed=4, bob=4, alice=4, carol=1)

    assert [account.id for account in select_top(weights, 2)] == ["alice", "bob"]


def test_selection_is_independent_of_insertion_order():
    forward = _weights(bob=3, alice=3, carol=3)
    backward = Counter(dict(reversed(list(forward.items()))))

    assert select_top(forward, 2) == select_top(backward, 2)


def test_empty_map_or_non_positive_k_selects_nobody():
    assert select_top({}, 3) == []
    assert select_top(_weights(alice=1), 0) == []
