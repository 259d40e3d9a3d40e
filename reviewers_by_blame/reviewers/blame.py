import logging

from reviewers_by_blame.core.errors import BlameComputationError
from reviewers_by_blame.core.models import BlameAttribution, ChangeKind, FileDiffEntry
from reviewers_by_blame.reviewers.interfaces import BlameEngine

logger = logging.getLogger(__name__)


def resolve_blame(engine: BlameEngine, entry: FileDiffEntry, parent_revision: str) -> BlameAttribution | None:
    """
    Compute blame for the parent version of a file.

    We are not interested in the patch set commit itself but in its parent: the
    last people who edited the lines being replaced are the ones who know them.

    Returns:
        The per-line attribution, or None if the file has no parent version or
        the blame engine failed.
    """
    if entry.change_kind == ChangeKind.ADDED or not entry.old_path:
        # Not present in the parent commit, so there is nothing to blame
        return None

    try:
        return engine.blame(parent_revision, entry.old_path)
    except BlameComputationError as e:
        logger.error(f"Couldn't execute blame for commit {parent_revision} ({entry.old_path}): {e}")
    except OSError as e:
        logger.error(f"Error while computing blame for commit {parent_revision} ({entry.old_path}): {e}")
    return None
