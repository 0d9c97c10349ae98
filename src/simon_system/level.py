"""
Level - maps a level number to the number of signals to present
"""

BASE_LEVEL = 1
BASE_COUNT = 1


class Level:
    """
    Mutable level counter.

    The count of signals follows ``count = BASE_COUNT + (level - 1)``, so
    level 1 presents one signal and level N presents N signals.
    """

    def __init__(self, level: int = BASE_LEVEL):
        self._level = BASE_LEVEL
        self._count = BASE_COUNT
        self.set_level(level)

    @property
    def level(self) -> int:
        return self._level

    @property
    def count(self) -> int:
        """Number of signals presented at the current level"""
        return self._count

    def upgrade(self) -> None:
        """Advance to the next level (level and count both +1)"""
        self._level += 1
        self._count += 1

    def init(self) -> None:
        """Reset to level 1"""
        self._level = BASE_LEVEL
        self._count = BASE_COUNT

    def set_level(self, level: int) -> None:
        """
        Jump to the given level and recompute the signal count.

        Raises:
            ValueError: if level is less than 1
        """
        if level < BASE_LEVEL:
            raise ValueError(f"Invalid level: {level} (must be >= {BASE_LEVEL})")

        self._level = level
        self._count = BASE_COUNT + (level - BASE_LEVEL)

    def __repr__(self) -> str:
        return f"Level(level={self._level}, count={self._count})"
