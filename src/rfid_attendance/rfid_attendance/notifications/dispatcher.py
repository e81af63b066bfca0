from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Fire-and-forget handoff for work that runs after a scan is committed.

    Failures are logged and never reach the caller. Without an executor the task
    runs inline, which keeps tests and scripts deterministic.
    """

    def __init__(self, executor: Optional[Executor] = None):
        self._executor = executor

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Optional[Future]:
        if self._executor is None:
            self._run(fn, *args, **kwargs)
            return None
        try:
            return self._executor.submit(self._run, fn, *args, **kwargs)
        except RuntimeError:
            # Executor already shut down.
            logger.exception("Dropped notification task %s", getattr(fn, "__qualname__", fn))
            return None

    @staticmethod
    def _run(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        try:
            fn(*args, **kwargs)
        except Exception:
            logger.exception("Notification task %s failed", getattr(fn, "__qualname__", fn))

    def shutdown(self, *, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
