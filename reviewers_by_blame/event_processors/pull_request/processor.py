import asyncio
import logging
import time

from reviewers_by_blame.core.config import ReviewersConfig, config
from reviewers_by_blame.core.models import Change, RevisionCommit
from reviewers_by_blame.event_processors.base import BaseEventProcessor, ProcessingResult, ProcessingState
from reviewers_by_blame.event_processors.pull_request.payload import (
    PROCESSED_ACTIONS,
    base_ref,
    base_sha,
    build_change,
    head_sha,
)
from reviewers_by_blame.integrations.git import (
    GitBlameEngine,
    GitDiffEngine,
    RepositoryCache,
    branch_refspec,
    pull_request_refspec,
    review_parents,
)
from reviewers_by_blame.integrations.git.repo_settings import load_repo_settings
from reviewers_by_blame.integrations.github import (
    GitHubAccountDirectory,
    GitHubClient,
    GitHubIdentityResolver,
    GitHubReviewClient,
)
from reviewers_by_blame.reviewers.task import ReviewerSelectionResult, SelectionState, create_reviewers_task
from reviewers_by_blame.tasks.task_queue import Task

logger = logging.getLogger(__name__)


class PullRequestProcessor(BaseEventProcessor):
    """Processor for pull request events: requests reviewers chosen by blame."""

    def __init__(
        self,
        client: GitHubClient | None = None,
        repository_cache: RepositoryCache | None = None,
        defaults: ReviewersConfig | None = None,
    ) -> None:
        super().__init__(client)
        self.repository_cache = repository_cache or RepositoryCache(
            config.workspace.repo_cache_dir, git_base_url=config.github.git_base_url
        )
        self.defaults = defaults or config.reviewers

    def get_event_type(self) -> str:
        return "pull_request"

    async def process(self, task: Task) -> ProcessingResult:
        """Select and request reviewers for the pull request in ``task``."""
        start_time = time.time()
        action = task.payload.get("action")

        if action not in PROCESSED_ACTIONS:
            return self._result(ProcessingState.PASS, start_time, detail=f"PR action '{action}' is not processed")

        if not task.installation_id:
            logger.error("No installation ID found in task")
            return self._result(ProcessingState.ERROR, start_time, error="No installation ID found")

        try:
            change = build_change(task.payload)
            sha = head_sha(task.payload)
            if not sha:
                raise ValueError("Pull request payload has no head sha")

            logger.info(f"🚀 Selecting reviewers for {change.project}#{change.id} at {sha} ({action})")

            token = await asyncio.to_thread(self.github_client.get_installation_access_token, task.installation_id)
            if not token:
                raise ValueError("Failed to get installation access token")

            selection = await asyncio.to_thread(
                self.select_reviewers,
                change,
                sha,
                token,
                base_sha=base_sha(task.payload),
                base_ref=base_ref(task.payload),
            )

            processing_time = int((time.time() - start_time) * 1000)
            logger.info(
                f"🏁 PR processing completed in {processing_time}ms: {selection.state.value}, "
                f"reviewers={selection.reviewers}"
            )
            return self._result(ProcessingState.PASS, start_time, selection=selection, detail=selection.reason)

        except Exception as e:
            logger.error(f"❌ Error processing PR event for {task.repo_full_name}: {e}")
            return self._result(ProcessingState.ERROR, start_time, error=str(e))

    def select_reviewers(
        self,
        change: Change,
        sha: str,
        token: str,
        base_sha: str | None = None,
        base_ref: str | None = None,
    ) -> ReviewerSelectionResult:
        """
        Fetch the change, load repository settings and run the selection. Blocking.

        The pull request is reviewed as a single commit whose parent is the merge
        base of ``base_sha`` and the head, so every commit on the branch counts.
        Without a base sha only the head commit is reviewed.
        """
        refspecs = [pull_request_refspec(change.id)]
        if base_ref:
            refspecs.append(branch_refspec(base_ref))
        repo = self.repository_cache.fetch(change.project, refspecs, token)

        commit = RevisionCommit(sha=sha, parents=review_parents(repo, sha, base_sha))

        settings = load_repo_settings(repo, commit.first_parent or commit.sha, self.defaults)
        if not settings.enabled:
            return ReviewerSelectionResult(state=SelectionState.SKIPPED, reason="disabled for repository")
        if change.is_draft and settings.ignore_drafts:
            return ReviewerSelectionResult(state=SelectionState.SKIPPED, reason="draft pull request")

        reviewers_task = create_reviewers_task(
            commit,
            change,
            settings.max_reviewers,
            settings.ignore_file_pattern,
            ignore_subject_pattern=settings.ignore_subject_pattern,
            diff_engine=GitDiffEngine(repo),
            blame_engine=GitBlameEngine(repo),
            identities=GitHubIdentityResolver(self.github_client, token),
            accounts=GitHubAccountDirectory(self.github_client, token),
            review_client=GitHubReviewClient(self.github_client, token),
        )
        return reviewers_task.run()

    @staticmethod
    def _result(
        state: ProcessingState,
        start_time: float,
        selection: ReviewerSelectionResult | None = None,
        detail: str | None = None,
        error: str | None = None,
    ) -> ProcessingResult:
        return ProcessingResult(
            state=state,
            selection=selection,
            processing_time_ms=int((time.time() - start_time) * 1000),
            detail=detail,
            error=error,
        )
