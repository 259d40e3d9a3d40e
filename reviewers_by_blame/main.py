import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from reviewers_by_blame import __version__
from reviewers_by_blame.core.config import config
from reviewers_by_blame.core.models import EventType
from reviewers_by_blame.integrations.github import github_client
from reviewers_by_blame.tasks.task_queue import task_queue
from reviewers_by_blame.webhooks.dispatcher import dispatcher
from reviewers_by_blame.webhooks.handlers.pull_request import PullRequestEventHandler
from reviewers_by_blame.webhooks.router import router as webhook_router

# --- Application Setup ---

logging.basicConfig(
    level=config.logging.level.upper(),
    format=config.logging.format,
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle ---


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Register handlers and run background workers for the app's lifetime."""
    logger.info("Reviewers by Blame starting up...")
    # Missing credentials fail the startup instead of the first delivery
    config.validate()

    dispatcher.register_handler(EventType.PULL_REQUEST, PullRequestEventHandler())
    await task_queue.start_workers(num_workers=5)
    logger.info("🚀 Event handlers registered and background workers started.")

    yield

    logger.info("Reviewers by Blame shutting down...")
    await task_queue.stop_workers()
    github_client.close()


app = FastAPI(
    title="Reviewers by Blame",
    description="Suggests pull request reviewers from blame of the modified lines.",
    version=__version__,
    lifespan=lifespan,
)

# --- Include Routers ---

app.include_router(webhook_router, prefix="/webhooks", tags=["GitHub Webhooks"])

# --- Health Check Endpoints ---


@app.get("/", tags=["Health Check"])
async def read_root() -> dict[str, str]:
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "Reviewers by Blame is running."}


@app.get("/health/tasks", tags=["Health Check"])
async def health_tasks() -> dict[str, object]:
    """Check the status of background tasks."""
    counts = task_queue.counts()
    return {
        "task_queue_status": "running" if task_queue.running else "stopped",
        "workers": len(task_queue.workers),
        "queued": task_queue.queue.qsize(),
        "tasks": {**counts, "total": len(task_queue.tasks)},
    }
