import logging
from typing import Any

from reviewers_by_blame.core.models import EventType, WebhookEvent
from reviewers_by_blame.webhooks.handlers.base import EventHandler

logger = logging.getLogger(__name__)


class WebhookDispatcher:
    """Routes parsed webhook events to the handler registered for their type."""

    def __init__(self) -> None:
        self._handlers: dict[EventType, EventHandler] = {}

    def register_handler(self, event_type: EventType, handler: EventHandler) -> None:
        if event_type in self._handlers:
            logger.warning(f"Replacing {self._handlers[event_type].__class__.__name__} for {event_type.value}")
        self._handlers[event_type] = handler
        logger.info(f"Registered {handler.__class__.__name__} for {event_type.value} events")

    async def dispatch(self, event: WebhookEvent) -> dict[str, Any]:
        """
        Hand ``event`` to its handler.

        Handler failures are reported in the returned dict so the delivery is
        still acknowledged.
        """
        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.warning(f"No handler registered for {event.event_type.value}, skipping delivery")
            return {"status": "skipped", "reason": f"No handler for event type {event.event_type.name}"}

        handler_name = handler.__class__.__name__
        try:
            response = await handler.handle(event)
        except Exception as e:
            logger.exception(f"{handler_name} failed on {event.event_type.value} for {event.repo_full_name}: {e}")
            return {"status": "error", "reason": str(e)}

        logger.info(f"{handler_name} answered {response.status} for {event.repo_full_name}")
        return {"status": "processed", "handler": handler_name, "result": response.model_dump(mode="json")}


dispatcher = WebhookDispatcher()
