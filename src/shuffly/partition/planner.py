"""Input size estimation and bucket-count planning."""

import math
from collections.abc import Iterable
from pathlib import Path

from shuffly.errors import ShuffleIOError


def estimate_total_size(input_paths: Iterable[Path]) -> int:
    """
    Sum the on-disk sizes of the input files.

    Compressed files count with their stored size; nothing is decompressed.
    """
    total = 0
    for path in input_paths:
        try:
            total += Path(path).stat().st_size
        except OSError as exc:
            raise ShuffleIOError("estimate", path, exc) from exc
    return total


def plan_bucket_count(total_size: int, max_output_bytes: int) -> int:
    """
    Number of buckets needed to keep outputs near ``max_output_bytes``.

    Lines are spread uniformly at random, so bucket sizes only approximate
    the ceiling. Small inputs or very uneven line lengths can produce files
    noticeably above or below it.
    """
    if max_output_bytes < 1:
        raise ValueError(f"max_output_bytes must be positive, got {max_output_bytes}")
    return max(1, math.ceil(total_size / max_output_bytes))
