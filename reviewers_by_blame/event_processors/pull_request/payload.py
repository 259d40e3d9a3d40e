"""Extraction of change data from pull request webhook payloads."""

from typing import Any

from reviewers_by_blame.core.models import Change

PROCESSED_ACTIONS = frozenset({"opened", "reopened", "synchronize", "ready_for_review"})


def build_change(payload: dict[str, Any]) -> Change:
    """
    Build the change under review from a pull_request payload.

    Raises:
        ValueError: If the payload has no pull request number or author.
    """
    pr_data = payload.get("pull_request") or {}
    number = pr_data.get("number")
    owner = (pr_data.get("user") or {}).get("login")
    if number is None or not owner:
        raise ValueError("Pull request payload is missing number or author")

    return Change(
        id=number,
        owner=owner,
        project=(payload.get("repository") or {}).get("full_name", ""),
        subject=pr_data.get("title") or "",
        is_draft=bool(pr_data.get("draft", False)),
    )


def head_sha(payload: dict[str, Any]) -> str | None:
    return ((payload.get("pull_request") or {}).get("head") or {}).get("sha")


def base_sha(payload: dict[str, Any]) -> str | None:
    return ((payload.get("pull_request") or {}).get("base") or {}).get("sha")


def base_ref(payload: dict[str, Any]) -> str | None:
    return ((payload.get("pull_request") or {}).get("base") or {}).get("ref")
