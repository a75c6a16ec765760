"""
Background task runner for best-effort work scheduled after a response.

Tasks run on a small thread pool. A failing task is logged with its
description and never retried; callers are not notified.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from functools import partial
from typing import Callable, Optional

from flask import Flask

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Thread-pool backed queue of fire-and-forget tasks."""

    def __init__(self, app: Optional[Flask] = None):
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending = set()
        self._lock = threading.Lock()

        if app:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        workers = app.config.get('BACKGROUND_WORKERS', 4)
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix='linkhub-bg')
        logger.info(f"[BACKGROUND] Runner started with {workers} workers")

    def submit(self, fn: Callable, *args, description: Optional[str] = None, **kwargs) -> Future:
        """Queue fn(*args, **kwargs); failures are logged under description."""
        if self._executor is None:
            raise RuntimeError("Background tasks not initialized.")
        description = description or getattr(fn, '__name__', repr(fn))
        future = self._executor.submit(fn, *args, **kwargs)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(partial(self._on_done, description))
        return future

    def _on_done(self, description: str, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)
        error = future.exception()
        if error is not None:
            logger.error(f"[BACKGROUND] ✗ Task '{description}' failed: {error}", exc_info=error)
        else:
            logger.info(f"[BACKGROUND] ✓ Task '{description}' finished")

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every queued task has finished (tests, shutdown)."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None


_background_tasks: Optional[BackgroundTasks] = None


def init_background_tasks(app: Flask) -> None:
    """Initialize background runner singleton."""
    global _background_tasks
    if _background_tasks is not None:
        _background_tasks.shutdown()
    _background_tasks = BackgroundTasks(app)
    app.extensions['background_tasks'] = _background_tasks


def get_background_tasks() -> BackgroundTasks:
    if _background_tasks is None:
        raise RuntimeError("Background tasks not initialized.")
    return _background_tasks
