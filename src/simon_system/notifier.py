"""
Notifier - synchronous publish/subscribe for state changes
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .interfaces import IStateListener
    from .states import State


class Notifier:
    """
    Broadcasts states to listeners in subscription order.

    Each broadcast iterates over a snapshot of the subscriber list, so
    listeners may subscribe or unsubscribe (themselves or others) from inside
    update(); the change applies from the next broadcast. Listener exceptions
    are not caught.
    """

    def __init__(self):
        self._listeners: List['IStateListener'] = []

    def subscribe(self, listener: 'IStateListener') -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: 'IStateListener') -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def fire_change(self, state: 'State') -> None:
        for listener in list(self._listeners):
            listener.update(state)

    def listener_count(self) -> int:
        return len(self._listeners)
