from functools import lru_cache

import structlog

from reviewers_by_blame.core.models import EventType, WebhookEvent, WebhookResponse
from reviewers_by_blame.event_processors.base import BaseEventProcessor
from reviewers_by_blame.event_processors.factory import EventProcessorFactory
from reviewers_by_blame.event_processors.pull_request.payload import PROCESSED_ACTIONS
from reviewers_by_blame.tasks.task_queue import TaskQueue, task_queue
from reviewers_by_blame.webhooks.handlers.base import EventHandler

logger = structlog.get_logger()


# Instantiate processor once (singleton-like) but lazily
@lru_cache(maxsize=1)
def get_pr_processor() -> BaseEventProcessor:
    return EventProcessorFactory.create_processor("pull_request")


class PullRequestEventHandler(EventHandler):
    """Thin handler for pull request webhook events; delegates to the event processor."""

    processed_actions = PROCESSED_ACTIONS

    def __init__(self, processor: BaseEventProcessor | None = None, queue: TaskQueue | None = None) -> None:
        self._processor = processor
        self.queue = queue or task_queue

    @property
    def processor(self) -> BaseEventProcessor:
        return self._processor or get_pr_processor()

    async def handle(self, event: WebhookEvent) -> WebhookResponse:
        """
        Filters pull request actions and enqueues the interesting ones for
        reviewer selection.
        """
        log = logger.bind(
            event_type="pull_request",
            repo=event.repo_full_name,
            pr_number=event.payload.get("pull_request", {}).get("number"),
            action=event.payload.get("action"),
        )

        action = event.payload.get("action")
        if not self.accepts(event):
            log.info("pr_action_ignored")
            return WebhookResponse(
                status="ignored", detail=f"PR action '{action}' is not processed", event_type=EventType.PULL_REQUEST
            )

        log.info("pr_handler_invoked")

        try:
            enqueued = await self.queue.enqueue(
                self.processor.process,
                "pull_request",
                event.payload,
                delivery_id=event.delivery_id,
            )
        except Exception as e:
            log.error("pr_enqueue_failed", error=str(e), exc_info=True)
            return WebhookResponse(
                status="error", detail=f"PR processing failed: {str(e)}", event_type=EventType.PULL_REQUEST
            )

        if enqueued:
            log.info("pr_event_enqueued")
            return WebhookResponse(
                status="ok", detail="Pull request event enqueued for processing", event_type=EventType.PULL_REQUEST
            )

        log.info("pr_event_duplicate_skipped")
        return WebhookResponse(status="ignored", detail="Duplicate event skipped", event_type=EventType.PULL_REQUEST)
