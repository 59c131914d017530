"""Phase 1: scatter input lines across temporary bucket files."""

import random
from collections.abc import Iterable
from contextlib import closing
from itertools import batched
from pathlib import Path

from shuffly.errors import ShuffleIOError
from shuffly.partition.cache import LRUFileCache
from shuffly.partition.reader import iter_round_robin, stream_lines, strip_terminator
from shuffly.partition.types import (
    FLUSH_THRESHOLD_BYTES,
    MAX_OPEN_HANDLES,
    MAX_OPEN_READERS,
    DistributeStats,
    bucket_path,
)

type BucketBuffer = dict[int, list[str]]


def create_buckets(output_dir: Path, output_name: str, bucket_count: int) -> list[Path]:
    """Create (or truncate) the empty temporary file of every bucket."""
    paths = []
    for bucket_idx in range(bucket_count):
        path = bucket_path(output_dir, output_name, bucket_idx)
        try:
            path.write_bytes(b"")
        except OSError as exc:
            raise ShuffleIOError("distribute", path, exc) from exc
        paths.append(path)
    return paths


def flush_buffer(
    buffer: BucketBuffer,
    output_dir: Path,
    output_name: str,
    max_open_writers: int,
) -> None:
    """
    Append buffered lines to their bucket files and clear the buffer.

    Buckets are written in ascending order through an LRU handle cache, so
    at most ``max_open_writers`` files are open at any time. All handles
    are closed before returning.
    """
    cache = LRUFileCache(max_open_writers, output_dir, output_name)
    try:
        for bucket_idx in sorted(buffer):
            cache.write_lines(bucket_idx, buffer[bucket_idx])
    finally:
        cache.close_all()
    buffer.clear()


def distribute_to_buckets(
    input_paths: Iterable[Path],
    bucket_count: int,
    output_dir: Path,
    output_name: str,
    rng: random.Random,
    max_open_readers: int = MAX_OPEN_READERS,
    max_open_writers: int = MAX_OPEN_HANDLES,
    flush_threshold_bytes: int = FLUSH_THRESHOLD_BYTES,
) -> tuple[list[Path], DistributeStats]:
    """
    Assign every non-blank input line to a random bucket file.

    Inputs are processed in sorted order, ``max_open_readers`` at a time,
    reading round-robin within each batch. Lines lose only their terminator
    and are buffered per bucket until ``flush_threshold_bytes`` is reached,
    then appended to the bucket files.

    Returns:
        Tuple of (paths of all bucket files in index order, statistics).
    """
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be at least 1, got {bucket_count}")

    paths = create_buckets(output_dir, output_name, bucket_count)
    stats = DistributeStats()

    buffer: BucketBuffer = {}
    buffered_bytes = 0

    for batch in batched(sorted(input_paths, key=str), max_open_readers):
        stats.files_read += len(batch)
        streams = [stream_lines(path) for path in batch]

        with closing(iter_round_robin(streams)) as lines:
            for raw_line in lines:
                stats.lines_read += 1
                if not raw_line.strip():
                    stats.blank_lines += 1
                    continue

                line = strip_terminator(raw_line)
                bucket_idx = rng.randrange(bucket_count)
                buffer.setdefault(bucket_idx, []).append(line)
                stats.lines_written += 1

                # Stored line plus its terminator.
                buffered_bytes += len(line.encode("utf-8")) + 1
                if buffered_bytes >= flush_threshold_bytes:
                    flush_buffer(buffer, output_dir, output_name, max_open_writers)
                    stats.flushes += 1
                    buffered_bytes = 0

    if buffer:
        flush_buffer(buffer, output_dir, output_name, max_open_writers)
        stats.flushes += 1

    return paths, stats
