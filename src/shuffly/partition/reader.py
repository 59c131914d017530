"""Lazy line streams over plain and gzip-compressed input files."""

import gzip
import zlib
from collections.abc import Iterable, Iterator
from pathlib import Path

from shuffly.errors import ShuffleIOError
from shuffly.partition.types import BUFFER_SIZE, COMPRESSED_SUFFIX

# Decoding failures surface as one of these, depending on the layer.
READ_ERRORS = (OSError, EOFError, UnicodeDecodeError, zlib.error)


def is_compressed(path: Path) -> bool:
    return path.name.endswith(COMPRESSED_SUFFIX)


def strip_terminator(line: str) -> str:
    """Drop a trailing line feed, then one trailing carriage return."""
    line = line.removesuffix("\n")
    return line.removesuffix("\r")


def stream_lines(input_path: str | Path) -> Iterator[str]:
    """
    Yield the decoded lines of one input file.

    The file is opened on first ``next()``, not when the generator is
    created, and closed once it is exhausted or the generator is closed.
    Lines end only at a line feed and keep their terminators; a lone
    carriage return stays inside the record.
    """
    path = Path(input_path)
    try:
        if is_compressed(path):
            handle = gzip.open(path, "rt", encoding="utf-8", newline="\n")
        else:
            handle = open(path, encoding="utf-8", newline="\n", buffering=BUFFER_SIZE)  # noqa: SIM115
        with handle:
            yield from handle
    except READ_ERRORS as exc:
        raise ShuffleIOError("distribute", path, exc) from exc


def iter_round_robin(streams: Iterable[Iterator[str]]) -> Iterator[str]:
    """
    Interleave several line streams, one line from each per round.

    A stream leaves the active set as soon as it is exhausted. Streams that
    are still open when iteration stops early are closed.
    """
    active = list(streams)
    try:
        while active:
            still_active = []
            for stream in active:
                try:
                    line = next(stream)
                except StopIteration:
                    continue
                still_active.append(stream)
                yield line
            active = still_active
    finally:
        for stream in active:
            close = getattr(stream, "close", None)
            if close is not None:
                close()
