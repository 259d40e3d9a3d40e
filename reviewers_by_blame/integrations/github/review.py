import structlog

from reviewers_by_blame.core.models import Account, Change
from reviewers_by_blame.integrations.github.api import GitHubClient
from reviewers_by_blame.reviewers.interfaces import ReviewClient

logger = structlog.get_logger()


class GitHubReviewClient(ReviewClient):
    """Requests reviewers on a pull request."""

    def __init__(self, client: GitHubClient, token: str) -> None:
        self.client = client
        self.token = token

    def add_reviewers(self, change: Change, reviewers: list[Account]) -> bool:
        logins = [account.id for account in reviewers]
        response = self.client.request(
            "POST",
            f"/repos/{change.project}/pulls/{change.id}/requested_reviewers",
            self.token,
            json={"reviewers": logins},
        )
        if response.status_code == 201:
            logger.info("reviewers_requested", repo=change.project, pr_number=change.id, reviewers=logins)
            return True

        logger.error(
            "reviewers_request_failed",
            repo=change.project,
            pr_number=change.id,
            reviewers=logins,
            status_code=response.status_code,
            response_body=response.text,
        )
        return False
