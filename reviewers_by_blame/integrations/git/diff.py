"""Git diff engine: file-level diffs with zero-context edit ranges."""

import re

import git  # GitPython
import structlog

from reviewers_by_blame.core.errors import DiffNotAvailableError
from reviewers_by_blame.core.models import ChangeKind, EditRange, FileDiffEntry
from reviewers_by_blame.reviewers.interfaces import DiffEngine

logger = structlog.get_logger(__name__)

# @@ -old_start[,old_count] +new_start[,new_count] @@
HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def _to_range(start: int, count: int) -> tuple[int, int]:
    # With count 0 the hunk header names the line *after which* the change sits.
    if count == 0:
        return start, start
    return start - 1, start - 1 + count


def parse_edits(patch: str) -> tuple[EditRange, ...]:
    """Turn the hunk headers of a unified diff into zero-based half-open edit ranges."""
    edits = []
    for line in patch.splitlines():
        match = HUNK_HEADER.match(line)
        if not match:
            continue
        old_start, old_count, new_start, new_count = match.groups()
        begin_old, end_old = _to_range(int(old_start), int(old_count) if old_count is not None else 1)
        begin_new, end_new = _to_range(int(new_start), int(new_count) if new_count is not None else 1)
        edits.append(EditRange(begin_old=begin_old, end_old=end_old, begin_new=begin_new, end_new=end_new))
    return tuple(edits)


def change_kind_of(diff: git.Diff) -> ChangeKind:
    if diff.new_file:
        return ChangeKind.ADDED
    if diff.deleted_file:
        return ChangeKind.DELETED
    if diff.copied_file:
        return ChangeKind.COPIED
    if diff.renamed_file:
        return ChangeKind.RENAMED
    return ChangeKind.MODIFIED


def to_file_diff_entry(diff: git.Diff) -> FileDiffEntry:
    kind = change_kind_of(diff)
    patch = diff.diff.decode("utf-8", errors="replace") if isinstance(diff.diff, bytes) else (diff.diff or "")
    return FileDiffEntry(
        old_path=None if kind == ChangeKind.ADDED else diff.a_path,
        new_path=None if kind == ChangeKind.DELETED else diff.b_path,
        change_kind=kind,
        edits=parse_edits(patch),
    )


class GitDiffEngine(DiffEngine):
    """Diffs a patch set commit against its base in a local repository."""

    def __init__(self, repo: git.Repo) -> None:
        self.repo = repo

    def list_modified_files(self, project: str, revision: str, base: str | None) -> dict[str, FileDiffEntry]:
        try:
            commit = self.repo.commit(revision)
            if base is None:
                diffs = commit.diff(git.NULL_TREE, create_patch=True, unified="0")
            else:
                diffs = self.repo.commit(base).diff(commit, create_patch=True, unified="0")
        except (git.exc.GitCommandError, git.exc.BadName, ValueError) as e:
            logger.error("diff_failed", project=project, revision=revision, base=base, error=str(e))
            raise DiffNotAvailableError(revision, str(e)) from e

        entries: dict[str, FileDiffEntry] = {}
        for diff in diffs:
            entry = to_file_diff_entry(diff)
            entries[entry.path] = entry

        logger.info("diff_computed", project=project, revision=revision, base=base, files=len(entries))
        return entries


def review_parents(repo: git.Repo, head: str, base: str | None = None) -> tuple[str, ...]:
    """
    Parents a pull request head is reviewed against.

    With a base revision the whole branch is one change whose single parent is
    the merge base of base and head. Edits from every commit on the branch are
    then blamed, and base-branch work merged into the branch is not. Histories
    with no common ancestor give no parents. Without a base, the head commit's
    own parents are used.

    Raises:
        DiffNotAvailableError: If head or base is not in the repository.
    """
    try:
        head_commit = repo.commit(head)
        if base is None:
            return tuple(parent.hexsha for parent in head_commit.parents)
        merge_bases = repo.merge_base(base, head_commit)
    except (git.exc.GitCommandError, git.exc.BadName, ValueError) as e:
        logger.error("merge_base_failed", head=head, base=base, error=str(e))
        raise DiffNotAvailableError(head, str(e)) from e

    logger.info("merge_base_resolved", head=head, base=base, merge_bases=[commit.hexsha for commit in merge_bases])
    return tuple(commit.hexsha for commit in merge_bases[:1])
