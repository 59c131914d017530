"""Phase 2: shuffle each bucket in memory and write the final files."""

import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from shuffly.errors import ShuffleIOError
from shuffly.partition.types import BUFFER_SIZE

# Minimum digits in a part number.
PART_NUMBER_WIDTH = 4


@dataclass
class EmitStats:
    """Statistics from emit_buckets operation."""

    buckets_read: int = 0
    empty_buckets: int = 0
    outputs_written: int = 0
    lines_written: int = 0


def output_filename(output_name: str, extension: str, bucket_idx: int, bucket_count: int) -> str:
    """
    Name of the output file for a bucket.

    A single-bucket run writes ``<name>.<ext>``. Otherwise the 1-based bucket
    position is appended, so empty buckets leave gaps in the numbering.
    """
    if bucket_count == 1:
        return f"{output_name}.{extension}"
    width = max(PART_NUMBER_WIDTH, len(str(bucket_count)))
    return f"{output_name}_{bucket_idx + 1:0{width}d}.{extension}"


def iter_bucket_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield lines without their line feed, skipping blank ones."""
    for raw_line in lines:
        if raw_line.strip():
            yield raw_line.removesuffix("\n")


def read_bucket_lines(path: Path) -> list[str]:
    """Load all non-blank lines of a bucket file."""
    try:
        with open(path, encoding="utf-8", newline="\n", buffering=BUFFER_SIZE) as handle:
            return list(iter_bucket_lines(handle))
    except (OSError, UnicodeDecodeError) as exc:
        raise ShuffleIOError("emit", path, exc) from exc


def write_output(path: Path, lines: list[str]) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="", buffering=BUFFER_SIZE) as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
    except OSError as exc:
        raise ShuffleIOError("emit", path, exc) from exc


def remove_bucket(path: Path) -> None:
    try:
        path.unlink()
    except OSError as exc:
        raise ShuffleIOError("emit", path, exc) from exc


def shuffle_bucket(
    bucket_file: Path,
    output_path: Path,
    rng: random.Random,
) -> int:
    """
    Shuffle one bucket into its output file and delete the bucket.

    The bucket is removed only after the output is closed. An empty bucket
    produces no output file.

    Returns:
        Number of lines written (0 for an empty bucket).
    """
    lines = read_bucket_lines(bucket_file)
    if lines:
        rng.shuffle(lines)
        write_output(output_path, lines)
    remove_bucket(bucket_file)
    return len(lines)


def emit_buckets(
    bucket_paths: list[Path],
    output_dir: Path,
    output_name: str,
    extension: str,
    rng: random.Random,
) -> tuple[list[Path], EmitStats]:
    """
    Shuffle and emit every bucket in index order.

    Returns:
        Tuple of (output paths actually written, statistics).
    """
    stats = EmitStats()
    outputs: list[Path] = []
    bucket_count = len(bucket_paths)

    for bucket_idx, bucket_file in enumerate(bucket_paths):
        output_path = output_dir / output_filename(output_name, extension, bucket_idx, bucket_count)
        written = shuffle_bucket(bucket_file, output_path, rng)
        stats.buckets_read += 1
        if written == 0:
            stats.empty_buckets += 1
            continue

        outputs.append(output_path)
        stats.outputs_written += 1
        stats.lines_written += written

    return outputs, stats
