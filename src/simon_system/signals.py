"""
Signal colors used by the game
"""

from enum import Enum
from typing import Optional, Tuple

RGB = Tuple[int, int, int]


def _darker(rgb: RGB, factor: float = 0.7) -> RGB:
    return tuple(int(channel * factor) for channel in rgb)


class SignalColor(Enum):
    """
    The four signals a sequence is built from.

    Each member carries its primary RGB value (the lit button) and a darker
    alternate value (the idle button).
    """
    RED = (255, 0, 0)
    GREEN = (0, 128, 0)
    YELLOW = (255, 255, 0)
    BLUE = (0, 0, 255)

    @property
    def rgb(self) -> RGB:
        return self.value

    @property
    def alt_rgb(self) -> RGB:
        return _darker(self.value)

    @classmethod
    def from_rgb(cls, rgb: RGB) -> Optional['SignalColor']:
        """Member whose primary value equals rgb, or None"""
        for color in cls:
            if color.value == tuple(rgb):
                return color
        return None

    def __str__(self) -> str:
        return self.name
