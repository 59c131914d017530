import logging
import time
from pathlib import Path

from shuffly.config import ShuffleConfig
from shuffly.emit import emit_buckets
from shuffly.engine.rng import phase_rngs
from shuffly.partition import distribute_to_buckets, estimate_total_size, plan_bucket_count

logger = logging.getLogger(__name__)


def shuffle_files(config: ShuffleConfig) -> list[Path]:
    """
    Shuffle the configured inputs into size-bounded output files.

    Two-phase algorithm:
    1. Scatter lines uniformly at random across temporary bucket files
    2. Load, shuffle and write out each bucket in turn

    Temporary files are left in place if a phase fails.
    """
    total_start = time.perf_counter()

    total_size = estimate_total_size(config.input_paths)
    bucket_count = plan_bucket_count(total_size, config.max_output_bytes)
    seed_desc = "none" if config.seed is None else str(config.seed)

    logger.info(
        "Starting: files=%d, size=%d bytes, buckets=%d, max_output=%d bytes, seed=%s",
        len(config.input_paths),
        total_size,
        bucket_count,
        config.max_output_bytes,
        seed_desc,
    )

    distribute_rng, shuffle_rng = phase_rngs(config.seed)

    # Phase 1: distribute lines to buckets.
    t1_start = time.perf_counter()
    bucket_paths, dist_stats = distribute_to_buckets(
        config.input_paths,
        bucket_count,
        config.output_dir,
        config.output_name,
        distribute_rng,
        max_open_readers=config.max_open_readers,
        max_open_writers=config.max_open_writers,
        flush_threshold_bytes=config.flush_threshold_bytes,
    )
    t1 = time.perf_counter() - t1_start

    logger.info(
        "Phase 1 done: read=%d, blank=%d, written=%d lines from %d files "
        "into %d buckets (%d flushes) in %.2fs",
        dist_stats.lines_read,
        dist_stats.blank_lines,
        dist_stats.lines_written,
        dist_stats.files_read,
        bucket_count,
        dist_stats.flushes,
        t1,
    )

    # Phase 2: shuffle each bucket into an output file.
    t2_start = time.perf_counter()
    outputs, emit_stats = emit_buckets(
        bucket_paths,
        config.output_dir,
        config.output_name,
        config.record_extension,
        shuffle_rng,
    )
    t2 = time.perf_counter() - t2_start

    if emit_stats.empty_buckets > 0:
        logger.warning(
            "Phase 2: %d of %d buckets were empty and produced no output",
            emit_stats.empty_buckets,
            emit_stats.buckets_read,
        )

    logger.info("Phase 2 done: %d output files written in %.2fs", len(outputs), t2)

    total_phases = t1 + t2
    if total_phases > 0:
        logger.debug(
            "Timing breakdown: Phase1=%.2fs (%.0f%%), Phase2=%.2fs (%.0f%%)",
            t1,
            100 * t1 / total_phases,
            t2,
            100 * t2 / total_phases,
        )

    logger.info(
        "Result: %d lines in %d files (total %.2fs)",
        emit_stats.lines_written,
        len(outputs),
        time.perf_counter() - total_start,
    )
    return outputs


def main_shuffle(config: ShuffleConfig) -> list[Path]:
    """Run a shuffle and print the written files to stdout."""
    outputs = shuffle_files(config)

    print(f"Successfully created {len(outputs)} output files:")
    for path in outputs:
        print(f"  {path}")
    return outputs
