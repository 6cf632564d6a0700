"""Execution policy and executor construction utilities."""

import os
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any

# Environment variable to override executor selection.
EXECUTOR_ENV = "MATRIX_DUMP_EXECUTOR"

# Pool threads are named for attribution in logs and thread dumps.
THREAD_NAME_PREFIX = "dump-worker"


class SerialExecutor(Executor):
    """Runs each submitted call immediately on the calling thread."""

    def submit(self, fn, /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


def get_executor_mode() -> str:
    """
    Select the executor mode.

    MATRIX_DUMP_EXECUTOR="serial" runs workers in the main thread, which is
    useful for debugging with breakpoints. Anything else selects threads.
    """
    if os.environ.get(EXECUTOR_ENV, "").lower() == "serial":
        return "serial"
    return "threads"


def create_executor(workers: int) -> Executor:
    """Build the executor for the selected mode."""
    if get_executor_mode() == "serial":
        return SerialExecutor()
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix=THREAD_NAME_PREFIX)
