"""Single-partition dump task."""

import logging
import threading
import time
from pathlib import Path
from typing import TextIO

from matrix_dump.decode import decode_partition
from matrix_dump.errors import DumpError, IOFailure
from matrix_dump.fs.local import LocalFileSystem
from matrix_dump.fs.types import PartitionFile

logger = logging.getLogger(__name__)


class DumpWorker:
    """
    Converts one partition file into its text dump.

    The output sink is opened and closed inside `run`, so only running
    workers hold file handles. A worker runs once. `finished` is set last on
    every exit path, so once it is observed `succeeded` and `error_log` are
    final.
    """

    def __init__(
        self,
        partition: PartitionFile,
        output_path: Path,
        fs: LocalFileSystem,
        duplicate_dense_breaks: bool = False,
        cancel_event: threading.Event | None = None,
    ):
        self.partition = partition
        self.output_path = Path(output_path)
        self._fs = fs
        self._duplicate_dense_breaks = duplicate_dense_breaks
        self._cancel_event = cancel_event
        self._started = False
        self.finished = threading.Event()
        self.succeeded = False
        self.error_log: str | None = None

    def run(self) -> None:
        if self._started:
            raise RuntimeError(f"worker for {self.partition} has already run")
        self._started = True

        start = time.perf_counter()
        logger.info("open file %s", self.partition.path)
        try:
            sink = self._fs.create_write(self.output_path)
            try:
                with self._fs.open_read(self.partition, self._cancel_event) as source:
                    decode_partition(source, sink, self._duplicate_dense_breaks)
            finally:
                self._close_sink(sink)
            self.succeeded = True
        except (DumpError, OSError) as exc:
            self.error_log = f"convert partFile {self.partition} error"
            logger.error("%s: %s", self.error_log, exc, exc_info=True)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info("convert partFile %s cost time: %.0fms", self.partition, elapsed_ms)
            self.finished.set()

    def _close_sink(self, sink: TextIO) -> None:
        try:
            sink.close()
        except OSError as exc:
            raise IOFailure(f"close of {self.output_path} failed: {exc}") from exc
