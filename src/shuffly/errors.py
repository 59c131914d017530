"""Exceptions raised by the shuffle engine."""

from pathlib import Path


class ShuffleError(Exception):
    """Base class for every error the engine reports."""


class ConfigError(ShuffleError, ValueError):
    """Invalid run configuration, detected before any phase starts."""


class ShuffleIOError(ShuffleError):
    """
    An I/O failure during a run.

    The failing phase and path are kept on the instance; the underlying
    exception is chained as ``__cause__``.
    """

    def __init__(self, phase: str, path: Path | str, cause: BaseException):
        self.phase = phase
        self.path = Path(path)
        super().__init__(f"{phase}: {self.path}: {cause}")
