from abc import ABC, abstractmethod
from collections.abc import Collection

from reviewers_by_blame.core.models import WebhookEvent, WebhookResponse


class EventHandler(ABC):
    """
    Base class for webhook event handlers.

    A handler decides whether a delivery is worth processing and, if so, hands
    it to the task queue. The work itself belongs to the event processors.
    """

    # Payload actions this handler acts on; empty means every action
    processed_actions: Collection[str] = ()

    def accepts(self, event: WebhookEvent) -> bool:
        return not self.processed_actions or event.payload.get("action") in self.processed_actions

    @abstractmethod
    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        """
        Acknowledge a parsed webhook event.

        Returns:
            A WebhookResponse with status ok, ignored or error.
        """
        pass
