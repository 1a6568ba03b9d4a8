# Supervised background queue for best-effort mirror and reconciliation tasks.
# Tasks run on one daemon worker; callers never wait on them.

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..exceptions import SyncError
from .error_tracker import ErrorTracker

logger = logging.getLogger(__name__)


class SyncEvent(Enum):
    """Lifecycle events published for each background task"""
    TASK_STARTED = "task_started"
    TASK_SUCCEEDED = "task_succeeded"
    TASK_FAILED = "task_failed"


@dataclass
class SyncTask:
    """A unit of background work"""
    name: str
    action: Callable[[], None]
    attempts: int = 0
    submitted_at: datetime = field(default_factory=datetime.now)


@dataclass
class SyncMessage:
    """Payload delivered to subscribers"""
    event_type: SyncEvent
    task: SyncTask
    error: Optional[SyncError] = None


class BackgroundQueue:
    """Detached task runner with structured failure logging.

    A failing task is wrapped in SyncError, logged, recorded in the error
    tracker and retried up to ``max_retries`` times. Nothing is raised to
    the code that submitted it.
    """

    def __init__(self, max_retries: int = 0, error_tracker: Optional[ErrorTracker] = None):
        self.tasks = queue.Queue()
        self.max_retries = max_retries
        self.error_tracker = error_tracker or ErrorTracker()
        self.is_running = False
        self.worker_thread = None
        self._pending = 0
        self._idle = threading.Condition()

        self.callbacks: Dict[SyncEvent, List[Callable[[SyncMessage], None]]] = {
            event: [] for event in SyncEvent
        }

    def start(self) -> None:
        """Start the worker thread"""
        if self.is_running:
            return

        self.is_running = True
        self.worker_thread = threading.Thread(
            target=self._worker_loop, name="orderbook-sync", daemon=True
        )
        self.worker_thread.start()

    def stop(self, wait: bool = True, timeout: float = 5.0) -> None:
        """Stop the worker, optionally draining queued tasks first"""
        if wait:
            self.join(timeout)
        self.is_running = False
        if self.worker_thread:
            self.worker_thread.join(timeout=1.0)
            self.worker_thread = None

    def submit(self, name: str, action: Callable[[], None]) -> SyncTask:
        """Queue a task and return immediately"""
        task = SyncTask(name=name, action=action)
        with self._idle:
            self._pending += 1
        self.start()
        self.tasks.put(task)
        logger.debug(f"Queued background task {name}")
        return task

    def subscribe(self, event_type: SyncEvent, callback: Callable[[SyncMessage], None]) -> None:
        """Register a callback for a task lifecycle event"""
        self.callbacks[event_type].append(callback)

    @property
    def pending(self) -> int:
        with self._idle:
            return self._pending

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait until every queued task has finished.

        Returns:
            True if the queue drained, False on timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._idle:
            while self._pending:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._idle.wait(remaining)
        return True

    def _worker_loop(self) -> None:
        while self.is_running:
            try:
                task = self.tasks.get(timeout=0.1)
            except queue.Empty:
                continue
            try:
                finished = self._run(task)
            finally:
                self.tasks.task_done()
            if finished:
                with self._idle:
                    self._pending -= 1
                    self._idle.notify_all()

    def _run(self, task: SyncTask) -> bool:
        """Run one attempt; returns False when the task was requeued"""
        task.attempts += 1
        self._publish(SyncMessage(SyncEvent.TASK_STARTED, task))
        start = time.time()

        try:
            task.action()
        except Exception as e:
            error = SyncError(task.name, e)
            if task.attempts <= self.max_retries:
                logger.info(f"Background task {task.name} failed (attempt {task.attempts}), retrying: {e}")
                self.tasks.put(task)
                return False

            logger.warning(f"Background task {task.name} failed after {task.attempts} attempt(s): {e}",
                           exc_info=logger.isEnabledFor(logging.DEBUG))
            self.error_tracker.add_error(
                task.name.split(':', 1)[0].upper(),
                str(error),
                {'task': task.name, 'attempts': task.attempts}
            )
            self._publish(SyncMessage(SyncEvent.TASK_FAILED, task, error))
            return True

        logger.debug(f"Background task {task.name} completed in {time.time() - start:.3f}s")
        self._publish(SyncMessage(SyncEvent.TASK_SUCCEEDED, task))
        return True

    def _publish(self, message: SyncMessage) -> None:
        for callback in self.callbacks.get(message.event_type, []):
            try:
                callback(message)
            except Exception:
                logger.exception(f"Subscriber for {message.event_type.value} raised")
