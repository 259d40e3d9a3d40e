"""Local repository cache used for diff and blame."""

import threading
from pathlib import Path

import git  # GitPython
import structlog

from reviewers_by_blame.core.errors import RepositoryNotFoundError

logger = structlog.get_logger(__name__)


def pull_request_refspec(pr_number: int) -> str:
    return f"+refs/pull/{pr_number}/head:refs/pull/{pr_number}/head"


def branch_refspec(branch: str) -> str:
    # Kept out of refs/heads so a fetch never touches the bare repo HEAD
    return f"+refs/heads/{branch}:refs/remotes/origin/{branch}"


class RepositoryCache:
    """
    Keeps one bare clone per repository and fetches the refs a change needs.

    Fetches into the same repository are serialized; reads (diff, blame) are not,
    since they never write to the object database.
    """

    def __init__(self, cache_dir: str | Path, git_base_url: str = "https://github.com") -> None:
        self.cache_dir = Path(cache_dir)
        self.git_base_url = git_base_url.rstrip("/")
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, repo_full_name: str) -> Path:
        return self.cache_dir / repo_full_name.replace("/", "__")

    def _lock_for(self, repo_full_name: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(repo_full_name, threading.Lock())

    def _remote_url(self, repo_full_name: str, token: str | None) -> str:
        if token and token.strip():
            scheme, _, host = self.git_base_url.partition("://")
            return f"{scheme}://x-access-token:{token}@{host}/{repo_full_name}.git"
        return f"{self.git_base_url}/{repo_full_name}.git"

    def fetch(self, repo_full_name: str, refspecs: list[str], token: str | None = None) -> git.Repo:
        """
        Make sure ``refspecs`` are present locally and return the repository handle.

        Raises:
            RepositoryNotFoundError: If the repository cannot be initialized or fetched.
        """
        path = self.path_for(repo_full_name)
        with self._lock_for(repo_full_name):
            try:
                if (path / "HEAD").exists():
                    repo = git.Repo(path)
                else:
                    path.mkdir(parents=True, exist_ok=True)
                    repo = git.Repo.init(path, bare=True)
                    logger.info("repository_initialized", repo=repo_full_name, path=str(path))

                # The URL is passed per fetch so the token is never written to the repo config.
                with repo.git.custom_environment(GIT_TERMINAL_PROMPT="0"):
                    repo.git.fetch("--no-tags", self._remote_url(repo_full_name, token), *refspecs)
            except git.exc.GitCommandError as e:
                # The command line carries the token; only report the exit status.
                logger.error("repository_fetch_failed", repo=repo_full_name, status=e.status)
                raise RepositoryNotFoundError(
                    f"Failed to fetch {repo_full_name} (git exit status {e.status})"
                ) from None
            except (git.exc.InvalidGitRepositoryError, OSError) as e:
                logger.error("repository_open_failed", repo=repo_full_name, error=str(e))
                raise RepositoryNotFoundError(f"Failed to open local clone of {repo_full_name}: {e}") from e

        logger.info("repository_fetched", repo=repo_full_name, refspecs=refspecs)
        return repo

    @staticmethod
    def read_file(repo: git.Repo, revision: str, file_path: str) -> str | None:
        """Return the text of ``file_path`` at ``revision``, or None when it does not exist."""
        try:
            blob = repo.commit(revision).tree / file_path
        except (KeyError, ValueError, git.exc.BadName):
            return None
        return blob.data_stream.read().decode("utf-8", errors="replace")
