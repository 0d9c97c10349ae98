"""
Sequence generation - one new random signal per level
"""

import random
from typing import List, Optional, Sequence

from .signals import SignalColor

# Process-wide source, reseed with seed() for reproducible runs
_default_rng = random.Random()


def seed(value: Optional[int]) -> None:
    """Reseed the process-wide random source"""
    _default_rng.seed(value)


class SequenceGenerator:
    """
    Appends a uniformly drawn signal to the previous sequence.

    Stateless apart from its random source: the previous sequence is never
    modified, a new list is returned every time.

    Example:
        generator = SequenceGenerator(random.Random(42))
        first = generator.next([])        # one signal
        second = generator.next(first)    # first + one new signal
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Random source, defaults to the process-wide one
        """
        self._rng = rng if rng is not None else _default_rng
        self._colors = list(SignalColor)

    def random_signal(self) -> SignalColor:
        return self._rng.choice(self._colors)

    def next(self, previous: Sequence[SignalColor]) -> List[SignalColor]:
        return list(previous) + [self.random_signal()]

    def fresh(self) -> List[SignalColor]:
        """Sequence for a new run (one signal)"""
        return self.next([])
