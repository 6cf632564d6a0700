"""Configuration and result structures for dump runs."""

from dataclasses import dataclass

from matrix_dump.errors import ConfigError

DEFAULT_WORKERS = 4


@dataclass
class DumpConfig:
    """Settings for one model dump."""

    input_dir: str | None
    output_dir: str | None
    model_name: str | None = None
    workers: int = DEFAULT_WORKERS
    duplicate_dense_breaks: bool = False

    def validate(self) -> None:
        if not self.input_dir:
            raise ConfigError("input directory is not set")
        if not self.output_dir:
            raise ConfigError("output directory is not set")
        if self.workers < 1:
            raise ConfigError(f"workers must be positive, got {self.workers}")


@dataclass(frozen=True, slots=True)
class DumpResult:
    """Aggregate outcome of a dump run."""

    succeeded: bool
    partitions: int
    failed: int = 0
    error_log: str | None = None
