"""
Operation logging helpers.

``log_operation`` brackets a unit of work with start, completion and failure
records that carry a shared context dict and the elapsed time.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator  # noqa: TCH003
from contextlib import contextmanager
from typing import Any

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)


@contextmanager
def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """
    Log the start, end and failure of a blocking operation.

    The yielded dict is attached to every record as ``record.context``. Keys
    added inside the block show up on the completion record, so results can be
    logged next to the inputs that produced them. Exceptions are logged and
    re-raised.

    Args:
        operation: Operation name used in the messages
        subject_ids: Identifiers of what is being worked on (e.g., {"repo": "owner/repo", "pr": "123"})
        **context: Extra fields for the records

    Example:
        with log_operation("reviewers_by_blame", subject_ids={"repo": repo}) as ctx:
            ctx["reviewers"] = [account.id for account in select_top(weights, k)]
    """
    start_time = time.time()
    log_context: dict[str, Any] = {"operation": operation, **(subject_ids or {}), **context}

    logger.info(f"🚀 Starting {operation}", extra={"context": dict(log_context)})
    try:
        yield log_context
    except Exception as e:
        latency_ms = _elapsed_ms(start_time)
        logger.error(
            f"❌ {operation} failed after {latency_ms}ms",
            extra={"context": {**log_context, "error": str(e), "latency_ms": latency_ms}},
            exc_info=True,
        )
        raise

    latency_ms = _elapsed_ms(start_time)
    logger.info(
        f"✅ {operation} completed in {latency_ms}ms",
        extra={"context": {**log_context, "latency_ms": latency_ms}},
    )
