"""Local-disk implementation of the filesystem capability."""

import logging
import os
import threading
from pathlib import Path
from typing import TextIO

from matrix_dump.decode.stream import DataInputStream
from matrix_dump.errors import IOFailure
from matrix_dump.fs.types import BUFFER_SIZE, PartitionFile

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """
    Filesystem capability backed by the local disk.

    Holds no open handles, so one instance can be shared by all workers.
    """

    def __init__(self, buffer_size: int = BUFFER_SIZE):
        self._buffer_size = buffer_size

    def list(self, directory: str | Path) -> list[PartitionFile]:
        """List the regular files of a directory, ordered by name."""
        dir_path = Path(directory)
        try:
            entries = sorted(dir_path.iterdir(), key=lambda entry: entry.name)
            files = []
            for entry in entries:
                if not entry.is_file():
                    logger.debug("Skipping non-file entry %s", entry)
                    continue
                files.append(PartitionFile(path=entry, size=entry.stat().st_size))
        except OSError as exc:
            raise IOFailure(f"cannot list {dir_path}: {exc}") from exc
        return files

    def open_read(
        self,
        partition: PartitionFile,
        cancel_event: threading.Event | None = None,
    ) -> DataInputStream:
        """Open a partition file as a big-endian byte source."""
        try:
            handle = open(partition.path, "rb", buffering=self._buffer_size)  # noqa: SIM115
        except OSError as exc:
            raise IOFailure(f"cannot open {partition.path}: {exc}") from exc
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as exc:
            handle.close()
            raise IOFailure(f"cannot stat {partition.path}: {exc}") from exc
        return DataInputStream(
            handle,
            name=str(partition.path),
            size=size,
            cancel_event=cancel_event,
        )

    def mkdirs(self, directory: str | Path) -> None:
        """Create a directory and its parents; existing directories are fine."""
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"cannot create {directory}: {exc}") from exc

    def create_write(self, path: str | Path) -> TextIO:
        """Create (or truncate) a UTF-8 text file with LF line endings."""
        try:
            return open(  # noqa: SIM115
                path,
                "w",
                encoding="utf-8",
                newline="\n",
                buffering=self._buffer_size,
            )
        except OSError as exc:
            raise IOFailure(f"cannot create {path}: {exc}") from exc

    def touch(self, path: str | Path) -> None:
        """Create an empty file if it does not exist yet."""
        try:
            Path(path).touch()
        except OSError as exc:
            raise IOFailure(f"cannot create {path}: {exc}") from exc
