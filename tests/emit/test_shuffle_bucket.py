"""Tests for phase-2 bucket shuffling and output."""

import random
import tempfile
from pathlib import Path

import pytest

from shuffly.emit import emit_buckets, output_filename, shuffle_bucket
from shuffly.emit.shuffle_bucket import iter_bucket_lines
from shuffly.errors import ShuffleIOError
from shuffly.partition import bucket_path


def make_bucket(tmp_path: Path, idx: int, lines: list[str]) -> Path:
    path = bucket_path(tmp_path, "out", idx)
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path


class TestOutputFilename:
    """Test cases for output_filename."""

    def test_single_bucket_uses_bare_name(self) -> None:
        assert output_filename("shuffled", "jsonl", 0, 1) == "shuffled.jsonl"

    def test_multiple_buckets_are_numbered_from_one(self) -> None:
        assert output_filename("shuffled", "jsonl", 0, 3) == "shuffled_0001.jsonl"
        assert output_filename("shuffled", "jsonl", 2, 3) == "shuffled_0003.jsonl"

    def test_width_grows_with_bucket_count(self) -> None:
        assert output_filename("s", "jsonl", 0, 12000) == "s_00001.jsonl"
        assert output_filename("s", "jsonl", 11999, 12000) == "s_12000.jsonl"


def test_iter_bucket_lines_skips_blank_lines() -> None:
    assert list(iter_bucket_lines(["a\n", "\n", "  \n", "b"])) == ["a", "b"]


def test_iter_bucket_lines_keeps_record_content() -> None:
    assert list(iter_bucket_lines(["  c\t\n", "d\r\n", "e\rf\n"])) == ["  c\t", "d\r", "e\rf"]


class TestShuffleBucket:
    """Test cases for shuffle_bucket function."""

    def test_writes_permutation_and_removes_bucket(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            lines = [f"line-{i}" for i in range(100)]
            bucket = make_bucket(tmp_path, 0, lines)
            output = tmp_path / "out.jsonl"

            written = shuffle_bucket(bucket, output, random.Random(4))

            assert written == 100
            assert not bucket.exists()
            result = output.read_text(encoding="utf-8").splitlines()
            assert sorted(result) == sorted(lines)
            assert result != lines

    def test_same_seed_same_permutation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            lines = [f"line-{i}" for i in range(50)]

            shuffle_bucket(make_bucket(tmp_path, 0, lines), tmp_path / "a.jsonl", random.Random(8))
            shuffle_bucket(make_bucket(tmp_path, 1, lines), tmp_path / "b.jsonl", random.Random(8))

            assert (tmp_path / "a.jsonl").read_bytes() == (tmp_path / "b.jsonl").read_bytes()

    def test_empty_bucket_writes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            bucket = make_bucket(tmp_path, 0, ["", "   "])
            output = tmp_path / "out.jsonl"

            assert shuffle_bucket(bucket, output, random.Random(1)) == 0
            assert not output.exists()
            assert not bucket.exists()

    def test_output_lines_are_terminated(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            bucket = make_bucket(tmp_path, 0, ["only"])
            output = tmp_path / "out.jsonl"

            shuffle_bucket(bucket, output, random.Random(1))

            assert output.read_bytes() == b"only\n"


class TestEmitBuckets:
    """Test cases for emit_buckets function."""

    def test_skips_empty_buckets_and_keeps_positions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            buckets = [
                make_bucket(tmp_path, 0, ["a", "b"]),
                make_bucket(tmp_path, 1, []),
                make_bucket(tmp_path, 2, ["c"]),
            ]

            outputs, stats = emit_buckets(buckets, tmp_path, "shuffled", "jsonl", random.Random(1))

            assert outputs == [tmp_path / "shuffled_0001.jsonl", tmp_path / "shuffled_0003.jsonl"]
            assert stats.buckets_read == 3
            assert stats.empty_buckets == 1
            assert stats.outputs_written == 2
            assert stats.lines_written == 3
            assert not (tmp_path / "shuffled_0002.jsonl").exists()
            assert not any(bucket.exists() for bucket in buckets)

    def test_single_bucket_uses_bare_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            buckets = [make_bucket(tmp_path, 0, ["x", "y", "z"])]

            outputs, _stats = emit_buckets(buckets, tmp_path, "shuffled", "jsonl", random.Random(1))

            assert outputs == [tmp_path / "shuffled.jsonl"]

    def test_read_failure_stops_remaining_buckets(self) -> None:
        """Earlier buckets are emitted and removed, later ones stay on disk."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            first = make_bucket(tmp_path, 0, ["a"])
            missing = bucket_path(tmp_path, "out", 1)
            last = make_bucket(tmp_path, 2, ["c"])

            with pytest.raises(ShuffleIOError) as excinfo:
                emit_buckets([first, missing, last], tmp_path, "shuffled", "jsonl", random.Random(1))

            assert excinfo.value.phase == "emit"
            assert excinfo.value.path == missing
            assert (tmp_path / "shuffled_0001.jsonl").read_text() == "a\n"
            assert not first.exists()
            assert last.exists()
            assert not (tmp_path / "shuffled_0003.jsonl").exists()

    def test_write_failure_keeps_bucket(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)
            bucket = make_bucket(tmp_path, 0, ["a"])
            # A directory where the output file should go makes the open fail.
            (tmp_path / "shuffled.jsonl").mkdir()

            with pytest.raises(ShuffleIOError) as excinfo:
                emit_buckets([bucket], tmp_path, "shuffled", "jsonl", random.Random(1))

            assert excinfo.value.path == tmp_path / "shuffled.jsonl"
            assert bucket.exists()
