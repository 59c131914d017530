"""Shuffly - Shuffle large line-oriented files with bounded memory."""

from shuffly.config import ShuffleConfig, discover_inputs
from shuffly.engine import main_shuffle, shuffle_files
from shuffly.errors import ConfigError, ShuffleError, ShuffleIOError

__all__ = [
    "ConfigError",
    "ShuffleConfig",
    "ShuffleError",
    "ShuffleIOError",
    "discover_inputs",
    "main_shuffle",
    "shuffle_files",
]
