"""Run configuration and input discovery."""

import os
from dataclasses import dataclass
from pathlib import Path

from shuffly.errors import ConfigError
from shuffly.partition.types import (
    COMPRESSED_SUFFIX,
    FLUSH_THRESHOLD_BYTES,
    MAX_OPEN_HANDLES,
    MAX_OPEN_READERS,
)

DEFAULT_EXTENSION = "jsonl"
DEFAULT_OUTPUT_NAME = "shuffled"
DEFAULT_MAX_SIZE_MB = 100

INPUT_SEPARATOR = ":"


@dataclass(frozen=True, slots=True)
class ShuffleConfig:
    """Validated settings for one shuffle run."""

    input_paths: tuple[Path, ...]
    output_dir: Path
    output_name: str
    max_output_bytes: int
    seed: int | None = None
    record_extension: str = DEFAULT_EXTENSION
    max_open_readers: int = MAX_OPEN_READERS
    max_open_writers: int = MAX_OPEN_HANDLES
    flush_threshold_bytes: int = FLUSH_THRESHOLD_BYTES

    @classmethod
    def create(
        cls,
        input_paths,
        output_dir: str | Path,
        output_name: str = DEFAULT_OUTPUT_NAME,
        max_output_bytes: int = DEFAULT_MAX_SIZE_MB * 1024 * 1024,
        seed: int | None = None,
        record_extension: str = DEFAULT_EXTENSION,
        max_open_readers: int = MAX_OPEN_READERS,
        max_open_writers: int = MAX_OPEN_HANDLES,
        flush_threshold_bytes: int = FLUSH_THRESHOLD_BYTES,
    ) -> "ShuffleConfig":
        """
        Validate the settings and prepare the output directory.

        Raises ConfigError for missing inputs, a non-directory output
        target, a bad output name or non-positive sizes and limits.
        """
        paths = tuple(Path(p) for p in input_paths)
        if not paths:
            raise ConfigError("no input files given")
        for path in paths:
            if not path.exists():
                raise ConfigError(f"input file does not exist: {path}")
            if not path.is_file():
                raise ConfigError(f"input path is not a file: {path}")

        if not output_name or os.sep in output_name or "/" in output_name:
            raise ConfigError(f"invalid output name: {output_name!r}")

        for label, value in (
            ("max_output_bytes", max_output_bytes),
            ("max_open_readers", max_open_readers),
            ("max_open_writers", max_open_writers),
            ("flush_threshold_bytes", flush_threshold_bytes),
        ):
            if value < 1:
                raise ConfigError(f"{label} must be positive, got {value}")

        extension = record_extension.lstrip(".")
        if not extension:
            raise ConfigError("record extension must not be empty")

        out_dir = Path(output_dir)
        if out_dir.exists() and not out_dir.is_dir():
            raise ConfigError(f"output path is not a directory: {out_dir}")
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"cannot create output directory {out_dir}: {exc}") from exc

        return cls(
            input_paths=paths,
            output_dir=out_dir,
            output_name=output_name,
            max_output_bytes=max_output_bytes,
            seed=seed,
            record_extension=extension,
            max_open_readers=max_open_readers,
            max_open_writers=max_open_writers,
            flush_threshold_bytes=flush_threshold_bytes,
        )


def parse_input_list(value: str) -> list[Path]:
    """Split a colon-separated list of input files."""
    return [Path(part) for part in value.split(INPUT_SEPARATOR) if part.strip()]


def discover_inputs(directory: str | Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """
    List record files directly inside a directory.

    Matches both plain (``*.jsonl``) and compressed (``*.jsonl.gz``) files.
    The result is sorted by path.
    """
    root = Path(directory)
    if not root.is_dir():
        raise ConfigError(f"input directory does not exist: {root}")

    suffix = "." + extension.lstrip(".")
    matches = [
        path
        for path in root.iterdir()
        if path.is_file()
        and (path.name.endswith(suffix) or path.name.endswith(suffix + COMPRESSED_SUFFIX))
    ]
    return sorted(matches)
