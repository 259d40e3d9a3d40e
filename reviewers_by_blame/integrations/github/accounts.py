"""
GitHub-backed identity resolution and account lookup.
"""

import re

import httpx
import structlog

from reviewers_by_blame.core.errors import GitHubRateLimitError, IdentityResolutionError
from reviewers_by_blame.core.models import Account
from reviewers_by_blame.integrations.github.api import GitHubClient
from reviewers_by_blame.reviewers.interfaces import AccountDirectory, IdentityResolver

logger = structlog.get_logger()

# GitHub's private commit emails: "login@users.noreply.github.com" or "12345+login@users.noreply.github.com"
NOREPLY_EMAIL = re.compile(
    r"^(?:\d+\+)?(?P<login>[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)@users\.noreply\.github\.com$", re.I
)


class GitHubIdentityResolver(IdentityResolver):
    """
    Resolves commit author emails to GitHub logins.

    Noreply addresses carry the login and need no API call; any other address is
    looked up with the user search API, which only matches public emails.
    """

    def __init__(self, client: GitHubClient, token: str) -> None:
        self.client = client
        self.token = token

    def accounts_for_email(self, email: str) -> set[str]:
        if not email:
            return set()

        noreply = NOREPLY_EMAIL.match(email)
        if noreply:
            return {noreply.group("login")}

        try:
            response = self.client.request("GET", "/search/users", self.token, params={"q": f"{email} in:email"})
        except (httpx.TransportError, GitHubRateLimitError) as e:
            raise IdentityResolutionError(email, str(e)) from e

        if response.status_code >= 500:
            raise IdentityResolutionError(email, f"status {response.status_code}")
        if response.status_code != 200:
            logger.warning("identity_search_rejected", email=email, status_code=response.status_code)
            return set()

        logins = {item["login"] for item in response.json().get("items", []) if item.get("login")}
        logger.debug("identity_resolved", email=email, logins=sorted(logins))
        return logins


class GitHubAccountDirectory(AccountDirectory):
    """Looks up GitHub users; bots, organizations and suspended users are inactive."""

    def __init__(self, client: GitHubClient, token: str) -> None:
        self.client = client
        self.token = token

    def get_account(self, account_id: str) -> Account | None:
        try:
            response = self.client.request("GET", f"/users/{account_id}", self.token)
        except (httpx.TransportError, GitHubRateLimitError) as e:
            logger.warning("account_lookup_failed", account_id=account_id, error=str(e))
            return None

        if response.status_code == 404:
            logger.info("account_not_found", account_id=account_id)
            return None
        if response.status_code != 200:
            logger.warning("account_lookup_rejected", account_id=account_id, status_code=response.status_code)
            return None

        data = response.json()
        return Account(
            id=data.get("login") or account_id,
            active=data.get("type") == "User" and not data.get("suspended_at"),
            email=data.get("email"),
        )
