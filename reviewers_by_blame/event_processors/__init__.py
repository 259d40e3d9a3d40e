from reviewers_by_blame.event_processors.base import BaseEventProcessor, ProcessingResult, ProcessingState
from reviewers_by_blame.event_processors.factory import EventProcessorFactory
from reviewers_by_blame.event_processors.pull_request import PullRequestProcessor

__all__ = [
    "BaseEventProcessor",
    "EventProcessorFactory",
    "ProcessingResult",
    "ProcessingState",
    "PullRequestProcessor",
]
