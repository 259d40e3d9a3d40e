"""Git blame engine."""

import git  # GitPython

from reviewers_by_blame.core.errors import BlameComputationError
from reviewers_by_blame.core.models import AuthorIdent, BlameAttribution, BlameLine
from reviewers_by_blame.reviewers.interfaces import BlameEngine


class GitBlameEngine(BlameEngine):
    """Attributes every line of a file at a revision using ``git blame``."""

    def __init__(self, repo: git.Repo) -> None:
        self.repo = repo

    def blame(self, start_revision: str, file_path: str) -> BlameAttribution:
        try:
            chunks = self.repo.blame(start_revision, file_path) or []
        except (git.exc.GitCommandError, ValueError) as e:
            raise BlameComputationError(start_revision, file_path, str(e)) from e

        lines: list[BlameLine] = []
        for commit, chunk_lines in chunks:
            author = commit.author
            blamed = BlameLine(
                commit_sha=commit.hexsha,
                author=AuthorIdent(name=author.name or "", email=author.email or ""),
            )
            lines.extend([blamed] * len(chunk_lines))
        return BlameAttribution(path=file_path, revision=start_revision, lines=lines)
