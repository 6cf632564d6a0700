"""Command-line interface for the matrix dumper."""

import argparse
import logging
import sys

from matrix_dump.dump.driver import DumpDriver
from matrix_dump.dump.types import DEFAULT_WORKERS, DumpConfig
from matrix_dump.errors import DumpError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_PARTITION_FAILED = 1
EXIT_FATAL = 2


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(threadName)s]: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="matrix-dump",
        description="Dump the partition files of a trained model as readable text.",
    )

    parser.add_argument(
        "input_dir",
        help="Directory holding the model's binary partition files",
    )

    parser.add_argument(
        "output_dir",
        help="Directory for the text dumps (created if missing, one file per partition)",
    )

    parser.add_argument(
        "--model-name",
        default=None,
        help="Model name, used in log messages only",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of partitions dumped in parallel (default: {DEFAULT_WORKERS})",
    )

    parser.add_argument(
        "--legacy-dense-breaks",
        action="store_true",
        help="Write the cosmetic line break of dense rows twice, as legacy dumps do",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if args.workers < 1:
        parser.error(f"--workers must be positive, got {args.workers}")

    config = DumpConfig(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        model_name=args.model_name,
        workers=args.workers,
        duplicate_dense_breaks=args.legacy_dense_breaks,
    )

    try:
        result = DumpDriver(config).run()
    except DumpError as exc:
        logger.error("dump aborted: %s", exc)
        return EXIT_FATAL

    if result is None or not result.succeeded:
        return EXIT_PARTITION_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
