"""Phase 2: per-bucket shuffle and output."""

from shuffly.emit.shuffle_bucket import EmitStats, emit_buckets, output_filename, shuffle_bucket

__all__ = ["EmitStats", "emit_buckets", "output_filename", "shuffle_bucket"]
