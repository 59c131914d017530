"""Shared constants and metadata structures for bucket distribution."""

from dataclasses import dataclass
from pathlib import Path

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Maximum number of input readers open at once.
MAX_OPEN_READERS = 8

# Maximum number of bucket writer handles open at once (LRU cache limit).
MAX_OPEN_HANDLES = 128

# Buffered line bytes that force a flush to the bucket files.
FLUSH_THRESHOLD_BYTES = 64 * 1024 * 1024

COMPRESSED_SUFFIX = ".gz"


@dataclass
class DistributeStats:
    """Statistics from distribute_to_buckets operation."""

    files_read: int = 0
    lines_read: int = 0
    blank_lines: int = 0
    lines_written: int = 0
    flushes: int = 0


def bucket_path(output_dir: Path, output_name: str, bucket_idx: int) -> Path:
    """Hidden temporary file backing one bucket."""
    return output_dir / f".{output_name}_bucket_{bucket_idx:05d}.tmp"
