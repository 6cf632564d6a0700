"""Parallel dumping of model directories."""

from matrix_dump.dump.driver import DumpDriver
from matrix_dump.dump.types import DumpConfig, DumpResult
from matrix_dump.dump.worker import DumpWorker

__all__ = ["DumpConfig", "DumpDriver", "DumpResult", "DumpWorker"]
