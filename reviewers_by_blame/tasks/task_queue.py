import asyncio
import hashlib
import json
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class TaskStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class Task(BaseModel):
    """Represents a task in the processing queue."""

    id: str
    event_type: str
    repo_full_name: str
    installation_id: int | None = None
    payload: dict[str, Any]
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error: str | None = None
    result: dict[str, Any] | None = None
    event_hash: str | None = None  # For deduplication
    delivery_id: str | None = None


TaskHandler = Callable[[Task], Awaitable[Any]]


class TaskQueue:
    """In-memory task queue for background processing with deduplication."""

    def __init__(self, max_remembered_events: int = 10_000):
        self.queue: asyncio.Queue[tuple[TaskHandler, Task]] = asyncio.Queue()
        self.tasks: dict[str, Task] = {}
        # event_hash -> task_id, oldest first
        self.processed_hashes: OrderedDict[str, str] = OrderedDict()
        self.max_remembered_events = max_remembered_events
        self.workers: list[asyncio.Task] = []
        self.running = False

    @staticmethod
    def _create_event_hash(event_type: str, payload: dict[str, Any]) -> str:
        """Create a stable hash so redelivered events are processed once."""
        event_json = json.dumps({"event_type": event_type, "payload": payload}, sort_keys=True, default=str)
        return hashlib.sha256(event_json.encode()).hexdigest()

    def build_task(self, event_type: str, payload: dict[str, Any], delivery_id: str | None = None) -> Task:
        """Build a pending task for an event payload."""
        repo_full_name = (payload.get("repository") or {}).get("full_name", "")
        installation_id = (payload.get("installation") or {}).get("id")
        now = datetime.now()
        event_hash = self._create_event_hash(event_type, payload)
        return Task(
            id=f"{event_type}_{repo_full_name}_{event_hash[:12]}_{now.timestamp()}",
            event_type=event_type,
            repo_full_name=repo_full_name,
            installation_id=installation_id,
            payload=payload,
            created_at=now,
            event_hash=event_hash,
            delivery_id=delivery_id,
        )

    async def enqueue(
        self,
        handler: TaskHandler,
        event_type: str,
        payload: dict[str, Any],
        delivery_id: str | None = None,
    ) -> bool:
        """
        Enqueue a new task for background processing.

        Returns:
            False if the same event was already enqueued, True otherwise.
        """
        task = self.build_task(event_type, payload, delivery_id=delivery_id)
        event_hash = task.event_hash or ""

        if event_hash in self.processed_hashes:
            logger.info(f"Skipping duplicate {event_type} event for {task.repo_full_name}")
            return False

        self.processed_hashes[event_hash] = task.id
        while len(self.processed_hashes) > self.max_remembered_events:
            _, old_task_id = self.processed_hashes.popitem(last=False)
            self.tasks.pop(old_task_id, None)

        self.tasks[task.id] = task
        await self.queue.put((handler, task))
        logger.info(f"Enqueued task {task.id} for {task.repo_full_name}")
        return True

    async def start_workers(self, num_workers: int = 3) -> None:
        """Start background workers."""
        self.running = True
        for i in range(num_workers):
            worker = asyncio.create_task(self._worker(f"worker-{i}"))
            self.workers.append(worker)
        logger.info(f"Started {num_workers} background workers")

    async def stop_workers(self) -> None:
        """Stop background workers."""
        self.running = False
        for worker in self.workers:
            worker.cancel()
        await asyncio.gather(*self.workers, return_exceptions=True)
        self.workers.clear()
        logger.info("Stopped all background workers")

    async def _worker(self, worker_name: str) -> None:
        """Background worker that processes tasks."""
        logger.info(f"Worker {worker_name} started")
        while self.running:
            handler, task = await self.queue.get()
            try:
                await self._process_task(handler, task, worker_name)
            finally:
                self.queue.task_done()

    async def _process_task(self, handler: TaskHandler, task: Task, worker_name: str) -> None:
        """Process a single task; failures are recorded on the task, never raised."""
        task.status = TaskStatus.RUNNING
        task.started_at = datetime.now()
        logger.info(f"Worker {worker_name} processing task {task.id}")

        try:
            result = await handler(task)
        except Exception as e:
            task.status = TaskStatus.FAILED
            task.error = str(e)
            logger.error(f"Task {task.id} failed: {e}")
        else:
            task.status = TaskStatus.COMPLETED
            task.result = result.model_dump(mode="json") if isinstance(result, BaseModel) else None
            logger.info(f"Task {task.id} completed successfully")
        finally:
            task.completed_at = datetime.now()

    def counts(self) -> dict[str, int]:
        """Number of remembered tasks per status."""
        counts = {status.value: 0 for status in TaskStatus}
        for task in self.tasks.values():
            counts[task.status.value] += 1
        return counts


# Global task queue instance
task_queue = TaskQueue()
