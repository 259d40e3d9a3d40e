import logging
from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel

from reviewers_by_blame.integrations.github import GitHubClient, github_client
from reviewers_by_blame.reviewers.task import ReviewerSelectionResult
from reviewers_by_blame.tasks.task_queue import Task

logger = logging.getLogger(__name__)


class ProcessingState(str, Enum):
    """
    Processing state for event processing results.

    - PASS: The event was handled (reviewers added, nothing to add, or deliberately skipped)
    - ERROR: Error occurred - couldn't process, need to investigate
    """

    PASS = "pass"
    ERROR = "error"


class ProcessingResult(BaseModel):
    """Result of event processing."""

    state: ProcessingState
    selection: ReviewerSelectionResult | None = None
    processing_time_ms: int
    detail: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.state == ProcessingState.PASS


class BaseEventProcessor(ABC):
    """Base class for all event processors."""

    def __init__(self, client: GitHubClient | None = None):
        self.github_client = client or github_client

    @abstractmethod
    async def process(self, task: Task) -> ProcessingResult:
        """Process the event task."""
        raise NotImplementedError("Subclasses must implement process")

    @abstractmethod
    def get_event_type(self) -> str:
        """Get the event type this processor handles."""
        raise NotImplementedError("Subclasses must implement get_event_type")
