import hashlib
import hmac
import logging

from fastapi import HTTPException, Request

from reviewers_by_blame.core.config import config

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"


def sign_payload(secret: str, body: bytes) -> str:
    """Return the ``sha256=<hex>`` signature GitHub sends for ``body``."""
    digest = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256).hexdigest()
    return f"sha256={digest}"


async def verify_github_signature(request: Request) -> bool:
    """
    FastAPI dependency rejecting deliveries not signed with the webhook secret.

    Raises:
        HTTPException: 401 when the signature header is absent or does not match.
    """
    received = request.headers.get(SIGNATURE_HEADER)
    if not received:
        logger.warning(f"Webhook delivery without {SIGNATURE_HEADER} header")
        raise HTTPException(status_code=401, detail="Missing GitHub webhook signature.")

    expected = sign_payload(config.github.webhook_secret, await request.body())
    if not hmac.compare_digest(received, expected):
        logger.error(f"Webhook delivery {request.headers.get('X-GitHub-Delivery')} has an invalid signature")
        raise HTTPException(status_code=401, detail="Invalid GitHub webhook signature.")

    return True
