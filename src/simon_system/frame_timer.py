"""
Frame-polled timer source for cooperative host loops
"""

import heapq
import itertools
import time
from typing import Callable, Dict, List, Optional, Tuple

from .interfaces import ITimerSource


class FrameTimerSource(ITimerSource):
    """
    Timer source driven by the host's frame loop.

    Callbacks are stored with an absolute deadline and fired from poll(),
    which the host calls once per frame. Nothing runs on another thread, so
    callbacks are delivered between frames exactly like player input.

    Example:
        timers = FrameTimerSource()
        handle = timers.schedule(5.0, on_time_over)
        # every frame:
        timers.poll()
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic):
        """
        Args:
            time_fn: Clock returning seconds (monotonic by default)
        """
        self._time_fn = time_fn
        self._counter = itertools.count(1)
        self._heap: List[Tuple[float, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> int:
        if delay_s < 0:
            raise ValueError(f"Delay must be non-negative, got {delay_s}")
        handle = next(self._counter)
        deadline = self._time_fn() + delay_s
        heapq.heappush(self._heap, (deadline, handle))
        self._callbacks[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        # Heap entry stays behind and is skipped when popped
        self._callbacks.pop(handle, None)

    def pending_count(self) -> int:
        return len(self._callbacks)

    def time_until_next(self) -> Optional[float]:
        """Seconds until the earliest pending deadline, or None if nothing is pending"""
        self._discard_cancelled()
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self._time_fn())

    def poll(self) -> int:
        """
        Fire every callback whose deadline has passed, earliest first.

        Callbacks scheduled from inside a fired callback are picked up in the
        same poll if they are already due.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        now = self._time_fn()
        while self._heap and self._heap[0][0] <= now:
            _deadline, handle = heapq.heappop(self._heap)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            callback()
            fired += 1
        return fired

    def _discard_cancelled(self) -> None:
        while self._heap and self._heap[0][1] not in self._callbacks:
            heapq.heappop(self._heap)
