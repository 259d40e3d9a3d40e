from reviewers_by_blame.event_processors.base import BaseEventProcessor
from reviewers_by_blame.event_processors.pull_request import PullRequestProcessor


class EventProcessorFactory:
    """Factory for creating event processors."""

    _processors: dict[str, type[BaseEventProcessor]] = {
        "pull_request": PullRequestProcessor,
    }

    @classmethod
    def create_processor(cls, event_type: str) -> BaseEventProcessor:
        """Create a processor for the given event type."""
        processor_class = cls._processors.get(event_type)
        if not processor_class:
            raise ValueError(f"No processor found for event type: {event_type}")

        return processor_class()

    @classmethod
    def get_supported_event_types(cls) -> list[str]:
        """Get list of supported event types."""
        return list(cls._processors.keys())
