"""Shared worker pool for background extraction."""

from __future__ import annotations

import atexit
import threading
from concurrent.futures import ThreadPoolExecutor

_EXECUTOR: ThreadPoolExecutor | None = None
_LOCK = threading.Lock()


def shared_executor(max_workers: int | None = None) -> ThreadPoolExecutor:
    """Return the process-wide pool, creating it on first use.

    ``max_workers`` only applies to the call that creates the pool.
    """

    global _EXECUTOR
    with _LOCK:
        if _EXECUTOR is None:
            _EXECUTOR = ThreadPoolExecutor(
                max_workers=max_workers,
                thread_name_prefix="resourcefetcher-extract",
            )
        return _EXECUTOR


def shutdown_executor(wait: bool = True) -> None:
    global _EXECUTOR
    with _LOCK:
        executor, _EXECUTOR = _EXECUTOR, None
    if executor is not None:
        executor.shutdown(wait=wait)


atexit.register(shutdown_executor)
