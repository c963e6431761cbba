"""Injectable randomness for every component that draws random values.

Anything exposing ``randrange`` and ``getrandbits`` works; both
``random.Random`` (seedable, for tests and reproducible runs) and
``random.SystemRandom`` (OS CSPRNG, the default) qualify.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    def randrange(self, start: int, stop: Optional[int] = None, step: int = 1) -> int:
        ...

    def getrandbits(self, k: int) -> int:
        ...


_default_source: RandomSource = random.SystemRandom()


def default_random_source() -> RandomSource:
    return _default_source


def set_default_random_source(source: RandomSource) -> None:
    """Replace the process-wide source used when callers pass ``rng=None``."""
    global _default_source
    _default_source = source


def seeded_random_source(seed) -> RandomSource:
    return random.Random(seed)


def make_random_source(kind: str = "system", seed=None) -> RandomSource:
    """Build a source by name: ``system`` or ``pseudo``.

    A non-None ``seed`` always yields a seeded pseudo-random source.
    """
    if seed is not None:
        return seeded_random_source(seed)
    if kind == "system":
        return random.SystemRandom()
    if kind == "pseudo":
        return random.Random()
    raise ValueError(f"unknown random source: {kind}")


def resolve(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else _default_source
