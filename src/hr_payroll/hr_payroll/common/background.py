from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class TaskQueue:
    """Runs best-effort tasks off the request path.

    Callers only enqueue; failures are logged here and never reach them.
    With ``workers=0`` tasks run inline, which keeps scripts and tests
    deterministic.
    """

    def __init__(self, *, workers: int = 2, name: str = "hr-payroll-bg"):
        self._workers = int(workers)
        self._executor: Optional[ThreadPoolExecutor] = None
        if self._workers > 0:
            self._executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix=name)

    @property
    def is_inline(self) -> bool:
        return self._executor is None

    def enqueue(self, label: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Optional[Future]:
        if self._executor is None:
            self._run(label, fn, *args, **kwargs)
            return None
        return self._executor.submit(self._run, label, fn, *args, **kwargs)

    @staticmethod
    def _run(label: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        try:
            fn(*args, **kwargs)
        except Exception:
            logger.exception("Background task %s failed", label)

    def shutdown(self, *, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
