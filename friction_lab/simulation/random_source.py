"""Random sources feeding the noise and jitter models."""

import itertools
import random
from typing import Iterable, Optional

from ..interfaces import InvalidParameter, RandomSource


class SystemRandomSource(RandomSource):
    """Production random source backed by random.Random."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the random source.

        Args:
            seed: Optional seed for reproducible sequences. Unseeded by default.
        """
        self._random = random.Random(seed)

    def next_uniform(self) -> float:
        return self._random.random()


class FixedRandomSource(RandomSource):
    """Always returns the same draw. 0.5 yields zero perturbation."""

    def __init__(self, value: float = 0.5):
        if not 0.0 <= value <= 1.0:
            raise InvalidParameter("Fixed draw must be within [0, 1]")
        self.value = value

    def next_uniform(self) -> float:
        return self.value


class SequenceRandomSource(RandomSource):
    """Cycles through a scripted list of draws."""

    def __init__(self, values: Iterable[float]):
        values = list(values)
        if not values:
            raise InvalidParameter("Sequence must contain at least one draw")
        if any(not 0.0 <= v <= 1.0 for v in values):
            raise InvalidParameter("Every draw must be within [0, 1]")
        self.values = values
        self._cycle = itertools.cycle(values)
        self.draw_count = 0

    def next_uniform(self) -> float:
        self.draw_count += 1
        return next(self._cycle)
