"""Random sources for the two shuffle phases."""

import random


def phase_rngs(seed: int | None) -> tuple[random.Random, random.Random]:
    """
    Return independent generators for distribution and per-bucket shuffling.

    With a seed, phase 1 uses ``seed`` and phase 2 uses ``seed + 1`` so both
    are reproducible. Without one, each generator is seeded from OS entropy.
    """
    if seed is None:
        return random.Random(), random.Random()
    return random.Random(seed), random.Random(seed + 1)
