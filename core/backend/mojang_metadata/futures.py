"""
Future Helpers

Default background executor and result chaining for concurrent.futures.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

from .config import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

_default_executor: Optional[ThreadPoolExecutor] = None
_default_executor_lock = threading.Lock()


def get_default_executor(max_workers: int = DEFAULT_MAX_WORKERS) -> ThreadPoolExecutor:
    """
    Library-wide executor used by clients constructed without one

    Created on first use. ``max_workers`` only applies to that first call.
    """
    global _default_executor
    with _default_executor_lock:
        if _default_executor is None:
            logger.debug(f"Creating default executor ({max_workers} workers)")
            _default_executor = ThreadPoolExecutor(
                max_workers=max_workers,
                thread_name_prefix="mojang-metadata",
            )
        return _default_executor


def shutdown_default_executor(wait: bool = True):
    """Shut down the default executor; the next client call recreates it"""
    global _default_executor
    with _default_executor_lock:
        executor, _default_executor = _default_executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


def then(future: "Future[T]", fn: Callable[[T], R]) -> "Future[R]":
    """
    Chain ``fn`` onto ``future``

    Args:
        future: Source future
        fn: Applied to the source result

    Returns:
        Future completed with fn(result), or with the source's exception.
        fn runs on the thread that completes the source future.
    """
    chained: "Future[R]" = Future()

    def _complete(source: "Future[T]"):
        if source.cancelled():
            chained.cancel()
            return
        if not chained.set_running_or_notify_cancel():
            return

        error = source.exception()
        if error is not None:
            chained.set_exception(error)
            return

        try:
            result = fn(source.result())
        except Exception as e:
            chained.set_exception(e)
        else:
            chained.set_result(result)

    future.add_done_callback(_complete)
    return chained

