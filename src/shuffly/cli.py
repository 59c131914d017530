"""Command-line interface for shuffly."""

import argparse
import logging
import sys

from shuffly.config import (
    DEFAULT_EXTENSION,
    DEFAULT_MAX_SIZE_MB,
    DEFAULT_OUTPUT_NAME,
    ShuffleConfig,
    discover_inputs,
    parse_input_list,
)
from shuffly.engine import main_shuffle
from shuffly.errors import ShuffleError

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="shuffly",
        description="Shuffle the lines of large JSONL files into size-bounded outputs.",
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-i",
        "--input",
        help='Input files separated by colons (e.g. "file1.jsonl:file2.jsonl.gz")',
    )
    source.add_argument(
        "-d",
        "--input-dir",
        help="Directory scanned (non-recursively) for input files",
    )

    parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Output directory (default: .)",
    )

    parser.add_argument(
        "-n",
        "--output-name",
        default=DEFAULT_OUTPUT_NAME,
        help=f"Output file name without extension (default: {DEFAULT_OUTPUT_NAME})",
    )

    parser.add_argument(
        "-s",
        "--max-size-mb",
        type=int,
        default=DEFAULT_MAX_SIZE_MB,
        help=f"Approximate maximum size per output file in MB (default: {DEFAULT_MAX_SIZE_MB})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output (default: none)",
    )

    parser.add_argument(
        "--extension",
        default=DEFAULT_EXTENSION,
        help=f"Record file extension (default: {DEFAULT_EXTENSION})",
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

    if args.max_size_mb < 1:
        parser.error(f"--max-size-mb must be at least 1, got {args.max_size_mb}")

    try:
        if args.input_dir is not None:
            input_paths = discover_inputs(args.input_dir, args.extension)
        else:
            input_paths = parse_input_list(args.input)

        config = ShuffleConfig.create(
            input_paths,
            output_dir=args.output_dir,
            output_name=args.output_name,
            max_output_bytes=args.max_size_mb * 1024 * 1024,
            seed=args.seed,
            record_extension=args.extension,
        )
        main_shuffle(config)
    except ShuffleError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
