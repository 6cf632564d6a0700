"""Model-directory dump orchestration."""

import logging
import threading
import time
from concurrent.futures import Future, wait
from pathlib import Path

from matrix_dump.dump.execution import create_executor, get_executor_mode
from matrix_dump.dump.types import DumpConfig, DumpResult
from matrix_dump.dump.worker import DumpWorker
from matrix_dump.fs.local import LocalFileSystem
from matrix_dump.fs.types import PartitionFile

logger = logging.getLogger(__name__)


class DumpDriver:
    """
    Dumps every partition file of a model directory in parallel.

    Output file `<output_dir>/<i>` holds the dump of the i-th listed
    partition. A failing partition does not stop its peers.
    """

    def __init__(self, config: DumpConfig, fs: LocalFileSystem | None = None):
        self.config = config
        self._fs = fs or LocalFileSystem()
        self._in_progress = threading.Lock()
        self._cancel_event = threading.Event()
        self._partitions: list[PartitionFile] = []

    @property
    def partitions(self) -> list[PartitionFile]:
        return list(self._partitions)

    def init(self) -> list[PartitionFile]:
        """Validate configuration, list the input and create the output directory."""
        self._partitions = []
        self.config.validate()

        logger.info("read model %s from %s", self.config.model_name or "", self.config.input_dir)
        partitions = self._fs.list(self.config.input_dir)

        logger.info("outputPath: %s", self.config.output_dir)
        self._fs.mkdirs(self.config.output_dir)

        self._partitions = partitions
        return self.partitions

    def run(self) -> DumpResult | None:
        """
        Dump all partitions and aggregate their status.

        Returns None without doing anything if a run is already in progress.
        """
        if not self._in_progress.acquire(blocking=False):
            logger.debug("model is converting, ignoring concurrent run")
            return None
        try:
            return self._run()
        finally:
            self._in_progress.release()

    def _run(self) -> DumpResult:
        start = time.perf_counter()
        self._cancel_event.clear()
        self.init()

        workers = self.config.workers
        logger.info(
            "Starting: model=%s, partitions=%d, workers=%d, executor=%s",
            self.config.model_name or "",
            len(self._partitions),
            workers,
            get_executor_mode(),
        )

        output_dir = Path(self.config.output_dir)
        tasks: list[tuple[DumpWorker, Future]] = []
        executor = create_executor(workers)
        try:
            for i, partition in enumerate(self._partitions):
                output_path = output_dir / str(i)
                # Every partition gets its output file even if its worker never runs.
                self._fs.touch(output_path)
                worker = DumpWorker(
                    partition,
                    output_path,
                    self._fs,
                    duplicate_dense_breaks=self.config.duplicate_dense_breaks,
                    cancel_event=self._cancel_event,
                )
                tasks.append((worker, executor.submit(worker.run)))

            wait([future for _, future in tasks])
        except BaseException:
            self._cancel_event.set()
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        failed = 0
        error_log = None
        for worker, future in tasks:
            exc = future.exception()
            if exc is not None:
                error_log = f"convert partFile {worker.partition} error"
                logger.error("%s: unexpected %r", error_log, exc, exc_info=exc)
            elif worker.succeeded:
                continue
            else:
                error_log = worker.error_log
            failed += 1

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("model convert cost time: %.0fms", elapsed_ms)
        if failed:
            logger.error("convert failed for %s (%d of %d partitions)", error_log, failed, len(tasks))

        return DumpResult(
            succeeded=failed == 0,
            partitions=len(tasks),
            failed=failed,
            error_log=error_log,
        )
