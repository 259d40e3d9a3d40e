import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from reviewers_by_blame.core.models import EventType, WebhookEvent
from reviewers_by_blame.webhooks.auth import verify_github_signature
from reviewers_by_blame.webhooks.dispatcher import WebhookDispatcher, dispatcher

logger = logging.getLogger(__name__)
router = APIRouter()

# Sent once when the webhook is created; acknowledged without dispatching.
PING_EVENT = "ping"


def get_dispatcher() -> WebhookDispatcher:
    """Dependency returning the shared dispatcher; overridden in tests."""
    return dispatcher


def parse_event_type(event_name: str) -> EventType | None:
    """Map an ``X-GitHub-Event`` value to a supported EventType, or None."""
    try:
        return EventType(event_name)
    except ValueError:
        return None


@router.post("/github", summary="Receive GitHub App webhook deliveries")
async def github_webhook_endpoint(
    request: Request,
    x_github_event: str | None = Header(default=None),
    x_github_delivery: str | None = Header(default=None),
    is_verified: bool = Depends(verify_github_signature),
    dispatcher_instance: WebhookDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    """
    Entry point for every delivery of the GitHub App.

    The signature is checked by a dependency before the body is parsed.
    Supported events are dispatched; anything else is acknowledged with no
    work so GitHub does not retry it.
    """
    if not x_github_event:
        raise HTTPException(status_code=400, detail="Missing X-GitHub-Event header")

    if x_github_event == PING_EVENT:
        logger.info(f"Webhook ping received (delivery {x_github_delivery})")
        return {"status": "pong"}

    event_type = parse_event_type(x_github_event)
    if event_type is None:
        logger.info(f"Ignoring unsupported event type: {x_github_event}")
        return {
            "status": "event received but not supported",
            "detail": f"Event type '{x_github_event}' is received but not supported.",
        }

    payload = await request.json()
    event = WebhookEvent(event_type=event_type, payload=payload, delivery_id=x_github_delivery)
    result = await dispatcher_instance.dispatch(event)
    return {"status": "event dispatched successfully", "result": result}
