"""
Eligibility gates deciding which changes and files are blamed.
"""

import re

from reviewers_by_blame.core.errors import ConfigurationError
from reviewers_by_blame.core.models import Change, ChangeKind, FileDiffEntry, RevisionCommit

BLAMEABLE_KINDS = frozenset({ChangeKind.MODIFIED, ChangeKind.DELETED})


def compile_pattern(pattern: str, setting: str = "pattern") -> re.Pattern[str] | None:
    """Compile a configured regular expression; an empty pattern disables the rule."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {setting} {pattern!r}: {e}") from e


def is_change_eligible(commit: RevisionCommit) -> bool:
    """Only commits with exactly one parent are considered; merges and root commits are not."""
    return commit.parent_count == 1


def is_subject_ignored(change: Change, ignore_subject: re.Pattern[str] | None) -> bool:
    return ignore_subject is not None and ignore_subject.fullmatch(change.subject) is not None


def is_file_eligible(entry: FileDiffEntry, ignore_file: re.Pattern[str] | None) -> bool:
    """
    Decide whether a file diff entry should be blamed.

    The entry must be MODIFIED or DELETED, since only those have old content worth
    blaming, and its new path must not match the ignore pattern. Deleted files
    are matched as an empty path.
    """
    if entry.change_kind not in BLAMEABLE_KINDS:
        return False
    if ignore_file is not None and ignore_file.fullmatch(entry.new_path or "") is not None:
        return False
    return True
