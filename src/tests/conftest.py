"""
Shared fixtures: manual clock, scripted signals, recording listeners
"""

import logging
from typing import Iterable, List

import pytest

from simon_system import FrameTimerSource, GameStateMachine, IStateListener, SequenceGenerator, SignalColor
from simon_utils import ClassLogger


class ManualClock:
    """Clock advanced by hand"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedGenerator(SequenceGenerator):
    """Hands out signals from a fixed script instead of a random source"""

    def __init__(self, signals: Iterable[SignalColor]):
        super().__init__()
        self._script: List[SignalColor] = list(signals)

    def random_signal(self) -> SignalColor:
        return self._script.pop(0)


class RecordingListener(IStateListener):
    def __init__(self):
        self.states = []

    def update(self, state):
        self.states.append(state)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def timers(clock):
    return FrameTimerSource(clock)


@pytest.fixture
def logger():
    return ClassLogger(logging.getLogger("simon.tests"), "Test", logging.DEBUG)


@pytest.fixture
def script():
    return [SignalColor.RED, SignalColor.BLUE, SignalColor.GREEN, SignalColor.YELLOW,
            SignalColor.RED, SignalColor.GREEN, SignalColor.BLUE, SignalColor.YELLOW]


@pytest.fixture
def game(timers, logger, script):
    machine = GameStateMachine(timers, generator=ScriptedGenerator(script), logger=logger)
    machine.init()
    return machine


@pytest.fixture
def listener(game):
    recorder = RecordingListener()
    game.subscribe(recorder)
    return recorder
