"""
Controller - command facade between the presentation layer and the game
"""

from typing import TYPE_CHECKING

from .states import ReplayMode

if TYPE_CHECKING:
    from .game_state_machine import GameStateMachine
    from .signals import SignalColor


class Controller:
    """
    Receives user intents from views and forwards them to the state machine.

    The three timer_* methods start the "ready" countdown in one of the replay
    modes; the host runs the countdown and then calls the deferred action
    (see GameStateMachine.get_action_controller).
    """

    def __init__(self, game: 'GameStateMachine'):
        self.game = game

    def timer_start(self) -> None:
        """Ready countdown, then a fresh game"""
        self.game.request_timer(ReplayMode.FRESH)

    def timer_last(self) -> None:
        """Ready countdown, then replay the last game"""
        self.game.request_timer(ReplayMode.LAST)

    def timer_longuest(self) -> None:
        """Ready countdown, then replay the longest game"""
        self.game.request_timer(ReplayMode.LONGEST)

    def start(self) -> None:
        self.game.start()

    def last(self) -> None:
        self.game.last()

    def longuest(self) -> None:
        self.game.longuest()

    def click(self, color: 'SignalColor') -> None:
        self.game.click(color)

    def sequence_over(self) -> None:
        self.game.sequence_over()

    def next_level(self) -> None:
        self.game.next_level()

    def end(self) -> None:
        """The run is over (GAME_OVER or TIME_IS_OVER), go back to NOT_STARTED"""
        self.game.end()
