"""Shared constants and descriptors for filesystem access."""

from dataclasses import dataclass
from pathlib import Path

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class PartitionFile:
    """One entry of a model directory listing."""

    path: Path
    size: int

    def __str__(self) -> str:
        return f"{self.path} ({self.size} bytes)"
