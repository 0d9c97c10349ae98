"""
Run history - most recent and longest completed runs
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .signals import SignalColor


@dataclass(frozen=True)
class RunRecord:
    """Immutable snapshot of a finished run"""
    sequence: Tuple[SignalColor, ...]
    level_reached: int

    @classmethod
    def of(cls, sequence: Iterable[SignalColor], level_reached: int) -> 'RunRecord':
        return cls(tuple(sequence), level_reached)

    def __str__(self) -> str:
        signals = ",".join(color.name for color in self.sequence)
        return f"RunRecord(level={self.level_reached}, sequence=[{signals}])"


class GameHistory:
    """
    Two-slot in-memory store of finished runs.

    - ``last`` is replaced at the end of every run
    - ``longest`` is replaced only when a run reaches a strictly higher level

    Records are immutable, so handing them out never lets the active run
    alias history.
    """

    def __init__(self):
        self._last: Optional[RunRecord] = None
        self._longest: Optional[RunRecord] = None

    def record(self, run: RunRecord) -> bool:
        """
        Store a finished run.

        Returns:
            True if the run also became the new longest run
        """
        self._last = run
        if self._longest is None or run.level_reached > self._longest.level_reached:
            self._longest = run
            return True
        return False

    def replay_last(self) -> Optional[RunRecord]:
        return self._last

    def replay_longest(self) -> Optional[RunRecord]:
        return self._longest

    def clear(self) -> None:
        self._last = None
        self._longest = None

    def __str__(self) -> str:
        return f"GameHistory(last={self._last}, longest={self._longest})"
