"""Bucket writer-handle cache used by distribution."""

from collections import OrderedDict
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from shuffly.errors import ShuffleIOError
from shuffly.partition.types import BUFFER_SIZE, bucket_path


class LRUFileCache:
    """
    Bounded set of open bucket writers.

    At most ``max_handles`` bucket files are open at once; opening one more
    closes the least recently used. A flush writes each bucket once in
    ascending order, so there the cache acts as a batched open/write/close.
    """

    def __init__(self, max_handles: int, output_dir: Path, output_name: str):
        self._max_handles = max_handles
        self._output_dir = output_dir
        self._output_name = output_name
        self._cache: OrderedDict[int, TextIO] = OrderedDict()

    def _get_path(self, bucket_idx: int) -> Path:
        return bucket_path(self._output_dir, self._output_name, bucket_idx)

    def _close(self, bucket_idx: int, handle: TextIO) -> None:
        try:
            handle.close()
        except OSError as exc:
            raise ShuffleIOError("distribute", self._get_path(bucket_idx), exc) from exc

    def write_lines(self, bucket_idx: int, lines: Iterable[str]) -> None:
        """Append terminated lines to the bucket, opening its handle if needed."""
        if bucket_idx in self._cache:
            self._cache.move_to_end(bucket_idx)
            handle = self._cache[bucket_idx]
        else:
            while len(self._cache) >= self._max_handles:
                old_idx, old_handle = self._cache.popitem(last=False)
                self._close(old_idx, old_handle)

            path = self._get_path(bucket_idx)
            try:
                handle = open(path, "a", encoding="utf-8", newline="", buffering=BUFFER_SIZE)  # noqa: SIM115
            except OSError as exc:
                raise ShuffleIOError("distribute", path, exc) from exc
            self._cache[bucket_idx] = handle

        try:
            for line in lines:
                handle.write(line)
                handle.write("\n")
        except OSError as exc:
            raise ShuffleIOError("distribute", self._get_path(bucket_idx), exc) from exc

    def close_all(self) -> None:
        """
        Flush and close all open handles.

        Every handle gets closed even if an earlier one fails; the first
        failure is raised afterwards.
        """
        pending = list(self._cache.items())
        self._cache.clear()
        first_error: ShuffleIOError | None = None
        for bucket_idx, handle in pending:
            try:
                self._close(bucket_idx, handle)
            except ShuffleIOError as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, bucket_idx: int) -> bool:
        return bucket_idx in self._cache
