"""Run orchestration."""

from shuffly.engine.rng import phase_rngs
from shuffly.engine.run import main_shuffle, shuffle_files

__all__ = ["main_shuffle", "phase_rngs", "shuffle_files"]
