"""Filesystem access for partition input and text output."""

from matrix_dump.fs.local import LocalFileSystem
from matrix_dump.fs.types import PartitionFile

__all__ = ["LocalFileSystem", "PartitionFile"]
