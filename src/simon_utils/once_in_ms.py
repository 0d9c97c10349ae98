"""
Timing utility for throttling execution in the host loop
"""

import time
from typing import Callable


class OnceInMs:
    """
    Timer for throttling code execution to at most once per interval.

    The host loop runs every frame (e.g. 20ms) but some housekeeping, such as
    resource usage logging, only needs to run occasionally.

    Example:
        self.memory_monitor = OnceInMs(60000)  # Once per minute

        # In update loop:
        if self.memory_monitor.should_execute():
            self.log_memory_usage()
    """

    def __init__(self, interval_ms: int, time_fn: Callable[[], float] = time.monotonic,
                 fire_immediately: bool = False):
        """
        Initialize timer with interval.

        Args:
            interval_ms: Minimum milliseconds between executions
            time_fn: Clock returning seconds, monotonic by default
            fire_immediately: If True, the first should_execute() call returns True
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = interval_ms
        self.interval = interval_ms / 1000.0
        self._time_fn = time_fn
        self.last_execution = None if fire_immediately else time_fn()

    def should_execute(self) -> bool:
        """
        Check if enough time has passed and restart the interval if so.

        Returns:
            True if interval has passed (and timer is updated), False otherwise
        """
        current = self._time_fn()
        if self.last_execution is None or current - self.last_execution >= self.interval:
            self.last_execution = current
            return True
        return False

    def reset(self) -> None:
        """Force next should_execute() call to return True"""
        self.last_execution = None

    def elapsed_ms(self) -> float:
        """Milliseconds elapsed since last execution (0 if never executed)"""
        if self.last_execution is None:
            return 0.0
        return (self._time_fn() - self.last_execution) * 1000

    def remaining_ms(self) -> float:
        """Milliseconds remaining until next execution (can be negative if overdue)"""
        if self.last_execution is None:
            return 0.0
        return self.interval_ms - self.elapsed_ms()
