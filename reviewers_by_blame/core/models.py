from collections.abc import Iterator, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventType(Enum):
    """Supported GitHub event types."""

    PULL_REQUEST = "pull_request"
    # Add other event types here as we support them


class WebhookEvent:
    """
    A representation of an incoming webhook event, before it has been
    turned into a processing task.
    """

    def __init__(self, event_type: EventType, payload: dict[str, Any], delivery_id: str | None = None):
        self.event_type = event_type
        self.payload = payload
        self.delivery_id = delivery_id
        self.repository = payload.get("repository", {})
        self.sender = payload.get("sender", {})
        self.installation_id = payload.get("installation", {}).get("id")

    @property
    def repo_full_name(self) -> str:
        """The full name of the repository (e.g., 'owner/repo')."""
        return self.repository.get("full_name", "")

    @property
    def sender_login(self) -> str:
        """The GitHub username of the user who triggered the event."""
        return self.sender.get("login", "")


class WebhookResponse(BaseModel):
    """Standardized response model for all webhook handlers."""

    status: str = Field(..., description="Processing status: ok, ignored, error")
    detail: str | None = Field(None, description="Additional context or error message")
    event_type: EventType | None = Field(None, description="Normalized GitHub event type")


# --- Change under review ---


class Change(BaseModel):
    """A proposed modification under review (a pull request)."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Pull request number")
    owner: str = Field(..., description="Account id (login) of the change owner")
    project: str = Field(..., description="Repository in owner/repo format")
    subject: str = Field(default="", description="Pull request title")
    is_draft: bool = False


class RevisionCommit(BaseModel):
    """The commit under review and its ordered parents."""

    model_config = ConfigDict(frozen=True)

    sha: str
    parents: tuple[str, ...] = ()

    @property
    def parent_count(self) -> int:
        return len(self.parents)

    @property
    def first_parent(self) -> str | None:
        return self.parents[0] if self.parents else None


class ChangeKind(str, Enum):
    """How a file changed between the base revision and the patch set."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    REWRITE = "rewrite"


class EditRange(BaseModel):
    """
    One replaced or removed region of a file.

    Both ranges are half-open and zero-based: ``[begin_old, end_old)`` indexes
    lines of the old file, ``[begin_new, end_new)`` lines of the new one.
    A pure insertion has an empty old range.
    """

    model_config = ConfigDict(frozen=True)

    begin_old: int = Field(..., ge=0)
    end_old: int = Field(..., ge=0)
    begin_new: int = Field(default=0, ge=0)
    end_new: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "EditRange":
        if self.end_old < self.begin_old:
            raise ValueError(f"end_old ({self.end_old}) is before begin_old ({self.begin_old})")
        if self.end_new < self.begin_new:
            raise ValueError(f"end_new ({self.end_new}) is before begin_new ({self.begin_new})")
        return self

    def old_lines(self) -> range:
        return range(self.begin_old, self.end_old)


class FileDiffEntry(BaseModel):
    """File-level diff between the patch set and its base."""

    model_config = ConfigDict(frozen=True)

    old_path: str | None = None
    new_path: str | None = None
    change_kind: ChangeKind
    edits: tuple[EditRange, ...] = ()

    @property
    def path(self) -> str:
        """The path the entry is best known by (new path unless deleted)."""
        return self.new_path or self.old_path or ""


# --- Blame ---


class AuthorIdent(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""


class BlameLine(BaseModel):
    """The commit that last touched one line, with its author."""

    model_config = ConfigDict(frozen=True)

    commit_sha: str
    author: AuthorIdent


class BlameAttribution:
    """Per-line attribution of one file at one revision."""

    def __init__(self, path: str, revision: str, lines: Sequence[BlameLine]):
        self.path = path
        self.revision = revision
        self._lines = tuple(lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[BlameLine]:
        return iter(self._lines)

    def source_commit(self, line: int) -> BlameLine | None:
        """Return the attribution for a zero-based line index, or None when out of range."""
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return None


# --- Accounts ---


class Account(BaseModel):
    """A platform account that may be requested as a reviewer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Account identifier (GitHub login)")
    active: bool = True
    email: str | None = None
