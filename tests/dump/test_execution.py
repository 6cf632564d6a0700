"""Tests for execution-policy helpers."""

import threading
from concurrent.futures import ThreadPoolExecutor

from matrix_dump.dump import execution


def test_executor_override_modes(monkeypatch) -> None:
    monkeypatch.setenv(execution.EXECUTOR_ENV, "serial")
    assert execution.get_executor_mode() == "serial"
    assert isinstance(execution.create_executor(4), execution.SerialExecutor)

    monkeypatch.setenv(execution.EXECUTOR_ENV, "threads")
    assert execution.get_executor_mode() == "threads"


def test_threads_by_default(monkeypatch) -> None:
    monkeypatch.delenv(execution.EXECUTOR_ENV, raising=False)
    executor = execution.create_executor(2)
    try:
        assert isinstance(executor, ThreadPoolExecutor)
        name = executor.submit(lambda: threading.current_thread().name).result()
        assert name.startswith(execution.THREAD_NAME_PREFIX)
    finally:
        executor.shutdown()


def test_serial_executor_captures_exceptions() -> None:
    def boom() -> None:
        raise ValueError("bad")

    future = execution.SerialExecutor().submit(boom)
    assert isinstance(future.exception(), ValueError)
    assert execution.SerialExecutor().submit(lambda x: x + 1, 1).result() == 2
