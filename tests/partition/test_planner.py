"""Tests for size estimation and bucket planning."""

import gzip
import tempfile
from pathlib import Path

import pytest

from shuffly.errors import ShuffleIOError
from shuffly.partition.planner import estimate_total_size, plan_bucket_count


class TestEstimateTotalSize:
    """Test cases for estimate_total_size."""

    def test_sums_file_sizes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            a = Path(tmp_dir) / "a.jsonl"
            b = Path(tmp_dir) / "b.jsonl"
            a.write_bytes(b"x" * 10)
            b.write_bytes(b"y" * 25)

            assert estimate_total_size([a, b]) == 35

    def test_uses_compressed_size(self) -> None:
        """Compressed inputs count with their on-disk size."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "a.jsonl.gz"
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write("same line\n" * 10000)

            assert estimate_total_size([path]) == path.stat().st_size
            assert estimate_total_size([path]) < 10 * 10000

    def test_missing_file_raises_with_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            missing = Path(tmp_dir) / "gone.jsonl"

            with pytest.raises(ShuffleIOError) as excinfo:
                estimate_total_size([missing])

            assert excinfo.value.path == missing
            assert excinfo.value.phase == "estimate"
            assert isinstance(excinfo.value.__cause__, FileNotFoundError)


class TestPlanBucketCount:
    """Test cases for plan_bucket_count."""

    def test_at_least_one_bucket(self) -> None:
        assert plan_bucket_count(0, 100) == 1
        assert plan_bucket_count(1, 100) == 1

    def test_rounds_up(self) -> None:
        assert plan_bucket_count(100, 100) == 1
        assert plan_bucket_count(101, 100) == 2
        assert plan_bucket_count(1000, 100) == 10

    def test_rejects_non_positive_ceiling(self) -> None:
        with pytest.raises(ValueError):
            plan_bucket_count(10, 0)
