"""
Chrono - per-level countdown timer
"""

from typing import Callable, Hashable, Optional, TYPE_CHECKING

from simon_utils import default_class_logger

if TYPE_CHECKING:
    from simon_utils import ClassLogger
    from .interfaces import ITimerSource

BASE_TIME = 5  # seconds at level 1


class Chrono:
    """
    Single-shot countdown built on a host timer source.

    Every start() issues a fresh token and hands the timer source a callback
    bound to it. When the callback fires it only acts if its token is still
    the armed one, so a cancel() (or a restart) always wins over a callback
    that was already on its way.

    The time budget follows ``BASE_TIME + (level - 1)`` seconds.
    """

    def __init__(self,
                 timer_source: 'ITimerSource',
                 on_expired: Callable[[], None],
                 logger: Optional['ClassLogger'] = None):
        """
        Args:
            timer_source: Host timing source used to schedule the countdown
            on_expired: Action run when an armed countdown reaches zero
            logger: Logger, defaults to the shared "simon" logger
        """
        self._timer_source = timer_source
        self._on_expired = on_expired
        self.logger = logger or default_class_logger("Chrono")
        self._time = BASE_TIME
        self._token = 0
        self._armed_token: Optional[int] = None
        self._handle: Optional[Hashable] = None

    def start(self) -> None:
        """Arm the countdown with the current time budget, replacing any pending one"""
        self.cancel()
        self._token += 1
        token = self._token
        self._armed_token = token
        self._handle = self._timer_source.schedule(self._time, lambda: self._expire(token))
        self.logger.debug(f"Chrono armed: {self._time}s (token {token})")

    def cancel(self) -> None:
        """Disarm the countdown; safe to call when nothing is armed"""
        if self._armed_token is None:
            return
        self.logger.debug(f"Chrono cancelled (token {self._armed_token})")
        self._armed_token = None
        if self._handle is not None:
            self._timer_source.cancel(self._handle)
            self._handle = None

    def is_armed(self) -> bool:
        return self._armed_token is not None

    def upgrade(self) -> None:
        """Add one second to the budget"""
        self._time += 1

    def init(self) -> None:
        """Reset the budget to BASE_TIME"""
        self._time = BASE_TIME

    def set_level(self, level: int) -> None:
        """
        Set the budget for the given level.

        Raises:
            ValueError: if level is less than 1
        """
        if level < 1:
            raise ValueError(f"Invalid level: {level} (must be >= 1)")

        self._time = BASE_TIME + (level - 1)

    def get_time(self) -> int:
        """Current time budget in seconds"""
        return self._time

    def _expire(self, token: int) -> None:
        if token != self._armed_token:
            self.logger.debug(f"Dropping stale chrono expiry (token {token})")
            return
        self._armed_token = None
        self._handle = None
        self.logger.debug(f"Chrono expired (token {token})")
        self._on_expired()
