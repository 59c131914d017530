"""Phase 1: size planning, line sources and bucket distribution."""

from shuffly.partition.cache import LRUFileCache
from shuffly.partition.distribute import distribute_to_buckets
from shuffly.partition.planner import estimate_total_size, plan_bucket_count
from shuffly.partition.reader import iter_round_robin, stream_lines
from shuffly.partition.types import DistributeStats, bucket_path

__all__ = [
    "DistributeStats",
    "LRUFileCache",
    "bucket_path",
    "distribute_to_buckets",
    "estimate_total_size",
    "iter_round_robin",
    "plan_bucket_count",
    "stream_lines",
]
