"""
Simon System - state machine core for a Simon-style memory game

The player watches a growing sequence of colored signals and reproduces it;
each success adds a signal and a second of time, a mismatch or a timeout ends
the run. Rendering, input and sound belong to the host, which listens to state
changes and issues commands back.
"""

from .signals import SignalColor
from .level import Level
from .chrono import Chrono, BASE_TIME
from .sequence_generator import SequenceGenerator, seed
from .game_history import GameHistory, RunRecord
from .notifier import Notifier
from .states import State, ReplayMode, GamePhase, TimerPhase
from .interfaces import IStateListener, ITimerSource
from .frame_timer import FrameTimerSource
from .game_state_machine import GameStateMachine
from .controller import Controller
from .config import GameConfig
from .game_manager import GameManager

__all__ = [
    # Values
    "SignalColor",
    "Level",
    "RunRecord",
    # States
    "State",
    "ReplayMode",
    "GamePhase",
    "TimerPhase",
    # Collaborators
    "Chrono",
    "BASE_TIME",
    "SequenceGenerator",
    "seed",
    "GameHistory",
    "Notifier",
    # Interfaces
    "IStateListener",
    "ITimerSource",
    "FrameTimerSource",
    # Orchestration
    "GameStateMachine",
    "Controller",
    "GameConfig",
    "GameManager"
]
