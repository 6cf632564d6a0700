"""Matrix Dump - Render parameter-server model partitions as text."""

from matrix_dump.dump.driver import DumpDriver
from matrix_dump.dump.types import DumpConfig, DumpResult

__all__ = ["DumpDriver", "DumpConfig", "DumpResult"]
