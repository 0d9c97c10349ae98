"""
Abstract interfaces between the game core and its host
"""

from abc import ABC, abstractmethod
from typing import Callable, Hashable, TYPE_CHECKING

if TYPE_CHECKING:
    from simon_system.states import State


class IStateListener(ABC):
    """
    Receives every state change broadcast by the game state machine.

    Implemented by the presentation layer (views, audio, host loops). A
    listener may issue new commands from inside update(); they are queued and
    run once the current notification round has finished.
    """

    @abstractmethod
    def update(self, state: 'State') -> None:
        """
        React to a new state.

        Args:
            state: The state the machine has just entered
        """
        pass


class ITimerSource(ABC):
    """
    Source of single-shot delayed callbacks.

    The core never sleeps or spawns threads; it asks the host's timing source
    to call back later. Implementations may be a polled frame loop, an event
    loop, or a manual clock in tests.
    """

    @abstractmethod
    def schedule(self, delay_s: float, callback: Callable[[], None]) -> Hashable:
        """
        Arrange for callback to run once after delay_s seconds.

        Returns:
            Handle accepted by cancel()
        """
        pass

    @abstractmethod
    def cancel(self, handle: Hashable) -> None:
        """Cancel a scheduled callback; unknown or already fired handles are ignored"""
        pass
