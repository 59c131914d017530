#!/usr/bin/env python3
"""
Synthetic dataset generator for shuffle benchmarks.

Writes a set of JSONL files (optionally gzip-compressed) whose records carry
their file and line position, so ordering effects are easy to inspect after
a shuffle. Records are spread evenly over the files.
"""

import argparse
import gzip
import json
import random
import sys
from pathlib import Path

# Large buffer for efficient streaming writes
BUFFER_SIZE = 1024 * 1024  # 1MB


def make_record(file_idx: int, line_idx: int, payload_words: int, rng: random.Random) -> str:
    """Build one JSON record with a random text payload."""
    words = [f"w{rng.randrange(50000)}" for _ in range(payload_words)]
    return json.dumps(
        {"file": file_idx, "line": line_idx, "text": " ".join(words)},
        separators=(",", ":"),
    )


def generate_synthetic_dataset(
    output_dir: str,
    num_files: int,
    num_records: int,
    payload_words: int,
    compress: bool,
    seed: int,
) -> int:
    """
    Generate the dataset.

    Streams output record-by-record to avoid memory issues.

    Returns:
        Total number of records written.
    """
    rng = random.Random(seed)
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    per_file, remainder = divmod(num_records, num_files)
    total = 0

    for file_idx in range(num_files):
        count = per_file + (1 if file_idx < remainder else 0)
        name = f"part_{file_idx:04d}.jsonl"
        if compress:
            handle = gzip.open(out_dir / (name + ".gz"), "wt", encoding="utf-8")
        else:
            handle = open(out_dir / name, "w", encoding="utf-8", buffering=BUFFER_SIZE)  # noqa: SIM115

        with handle:
            for line_idx in range(count):
                handle.write(make_record(file_idx, line_idx, payload_words, rng))
                handle.write("\n")
                total += 1

                # Progress indicator every 1M records
                if total % 1_000_000 == 0:
                    print(f"  Generated {total:,}/{num_records:,} records...", file=sys.stderr)

    return total


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate synthetic JSONL input for shuffly.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # ~1GB of plain JSONL in 16 files
  python generate_synthetic_jsonl.py --out data/plain --files 16 --records 5000000

  # Same, gzip-compressed
  python generate_synthetic_jsonl.py --out data/gz --files 16 --records 5000000 --gzip
""",
    )

    parser.add_argument("--out", required=True, help="Output directory")
    parser.add_argument(
        "--files",
        type=int,
        default=8,
        help="Number of files to write (default: 8)",
    )
    parser.add_argument(
        "--records",
        type=int,
        default=1_000_000,
        help="Total number of records (default: 1000000)",
    )
    parser.add_argument(
        "--payload-words",
        type=int,
        default=20,
        help="Random words per record (default: 20)",
    )
    parser.add_argument("--gzip", action="store_true", help="Write .jsonl.gz files")
    parser.add_argument(
        "--seed",
        type=int,
        default=1,
        help="Random seed for reproducibility (default: 1)",
    )

    args = parser.parse_args()

    if args.files < 1:
        parser.error("--files must be at least 1")
    if args.records < 0:
        parser.error("--records must not be negative")

    print(f"Generating {args.records:,} records in {args.files} files under {args.out}", file=sys.stderr)
    total = generate_synthetic_dataset(
        output_dir=args.out,
        num_files=args.files,
        num_records=args.records,
        payload_words=args.payload_words,
        compress=args.gzip,
        seed=args.seed,
    )
    print(f"Done! Wrote {total:,} records to {args.out}", file=sys.stderr)


if __name__ == "__main__":
    main()
