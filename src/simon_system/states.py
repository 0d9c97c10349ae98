"""
Game states and the data carried by each
"""

from dataclasses import dataclass
from enum import Enum


class State(Enum):
    NOT_STARTED = "not_started"
    STARTED_TIMER = "started_timer"
    STARTED = "started"
    TURN = "turn"
    PLAYER_TURN = "player_turn"
    NEXT_LEVEL = "next_level"
    TIME_IS_OVER = "time_is_over"
    GAME_OVER = "game_over"

    @property
    def is_run_over(self) -> bool:
        return self in (State.GAME_OVER, State.TIME_IS_OVER)


class ReplayMode(Enum):
    """Which sequence a run starts from once the ready countdown completes"""
    FRESH = "fresh"
    LAST = "last"
    LONGEST = "longest"


@dataclass(frozen=True)
class GamePhase:
    """Current state with no extra data"""
    state: State

    @staticmethod
    def of(state: State) -> 'GamePhase':
        if state is State.STARTED_TIMER:
            raise ValueError("STARTED_TIMER needs a replay mode, use TimerPhase")
        return GamePhase(state)


@dataclass(frozen=True)
class TimerPhase(GamePhase):
    """STARTED_TIMER together with the replay mode chosen by the player"""
    mode: ReplayMode = ReplayMode.FRESH

    @staticmethod
    def for_mode(mode: ReplayMode) -> 'TimerPhase':
        return TimerPhase(State.STARTED_TIMER, mode)
