"""
Game state machine - turn sequencing, levels, timing and run history
"""

from collections import deque
from typing import Callable, Deque, List, Optional, Tuple, TYPE_CHECKING

from simon_utils import default_class_logger

from .chrono import Chrono
from .game_history import GameHistory, RunRecord
from .level import Level
from .notifier import Notifier
from .sequence_generator import SequenceGenerator
from .states import GamePhase, ReplayMode, State, TimerPhase

if TYPE_CHECKING:
    from simon_utils import ClassLogger
    from .interfaces import IStateListener, ITimerSource
    from .signals import SignalColor


class GameStateMachine:
    """
    Single source of truth for a Simon game.

    Owns the level, chrono, active sequence and run history, and is the only
    component that modifies them. Every command (including chrono expiry)
    goes through _dispatch(): commands issued while another one is running,
    typically by a listener reacting to a notification, are queued and run
    after the current command has fully completed.

    Cycle:
        NOT_STARTED → STARTED_TIMER → STARTED → PLAYER_TURN → NEXT_LEVEL
        → TURN → PLAYER_TURN → ... → GAME_OVER / TIME_IS_OVER → NOT_STARTED

    Commands that make no sense in the current state are ignored.
    """

    def __init__(self,
                 timer_source: 'ITimerSource',
                 generator: Optional[SequenceGenerator] = None,
                 history: Optional[GameHistory] = None,
                 logger: Optional['ClassLogger'] = None):
        """
        Args:
            timer_source: Host timing source for the chrono
            generator: Signal source, defaults to the process-wide random one
            history: Run history, a fresh one by default
            logger: Logger, defaults to the shared "simon" logger
        """
        self.logger = logger or default_class_logger("GameStateMachine")
        self._generator = generator or SequenceGenerator()
        self._history = history or GameHistory()
        self._level = Level()
        self._chrono = Chrono(timer_source, self._on_chrono_expired,
                              self.logger.create_class_logger("Chrono"))
        self._notifier = Notifier()

        self._phase: GamePhase = GamePhase.of(State.NOT_STARTED)
        self._sequence: List['SignalColor'] = []
        self._click_index = 0

        self._pending: Deque[Tuple[str, Callable, tuple]] = deque()
        self._dispatching = False

    # Subscription

    def subscribe(self, listener: 'IStateListener') -> None:
        self._notifier.subscribe(listener)

    def unsubscribe(self, listener: 'IStateListener') -> None:
        self._notifier.unsubscribe(listener)

    # Queries

    def get_state(self) -> State:
        return self._phase.state

    def get_phase(self) -> GamePhase:
        return self._phase

    def get_sequence(self) -> List['SignalColor']:
        """Copy of the active run's full sequence"""
        return list(self._sequence)

    def get_level(self) -> int:
        return self._level.level

    def get_time(self) -> int:
        """Chrono budget for the current level in seconds"""
        return self._chrono.get_time()

    def get_history(self) -> GameHistory:
        return self._history

    def get_click_index(self) -> int:
        """Index of the next signal the player is expected to reproduce"""
        return self._click_index

    def is_chrono_armed(self) -> bool:
        return self._chrono.is_armed()

    def get_action_controller(self) -> Optional[Callable[[], None]]:
        """
        Deferred action for the pending ready countdown.

        Returns:
            start/last/longuest bound to this machine while in STARTED_TIMER,
            None in every other state
        """
        if not isinstance(self._phase, TimerPhase):
            return None
        return {
            ReplayMode.FRESH: self.start,
            ReplayMode.LAST: self.last,
            ReplayMode.LONGEST: self.longuest,
        }[self._phase.mode]

    # Commands

    def init(self) -> None:
        self._dispatch("init", self._do_init)

    def request_timer(self, mode: ReplayMode = ReplayMode.FRESH) -> None:
        self._dispatch("request_timer", self._do_request_timer, mode)

    def timer_ready(self) -> None:
        """Host signal that the ready countdown has finished"""
        self._dispatch("timer_ready", self._do_timer_ready)

    def start(self) -> None:
        self._dispatch("start", self._do_start)

    def last(self) -> None:
        self._dispatch("last", self._do_replay, ReplayMode.LAST)

    def longuest(self) -> None:
        self._dispatch("longuest", self._do_replay, ReplayMode.LONGEST)

    def sequence_over(self) -> None:
        self._dispatch("sequence_over", self._do_sequence_over)

    def click(self, color: 'SignalColor') -> None:
        self._dispatch("click", self._do_click, color)

    def next_level(self) -> None:
        self._dispatch("next_level", self._do_next_level)

    def end(self) -> None:
        self._dispatch("end", self._do_end)

    # Dispatch

    def _dispatch(self, name: str, handler: Callable, *args) -> None:
        self._pending.append((name, handler, args))
        if self._dispatching:
            self.logger.debug(f"Queued '{name}' behind running command")
            return

        self._dispatching = True
        try:
            while self._pending:
                _name, queued_handler, queued_args = self._pending.popleft()
                queued_handler(*queued_args)
        finally:
            # Commands queued behind a failing one are dropped
            self._pending.clear()
            self._dispatching = False

    def _on_chrono_expired(self) -> None:
        self._dispatch("time_over", self._do_time_over)

    def _transition(self, phase: GamePhase) -> None:
        old_state = self._phase.state
        self._phase = phase
        self.logger.info(f"State transition: {old_state.name} → {phase.state.name}")
        self._notifier.fire_change(phase.state)

    def _reject(self, name: str) -> None:
        self.logger.debug(f"Ignoring '{name}' in state {self._phase.state.name}")

    # Handlers

    def _do_init(self) -> None:
        self._chrono.cancel()
        self._level.init()
        self._chrono.init()
        self._sequence = []
        self._click_index = 0
        self._transition(GamePhase.of(State.NOT_STARTED))

    def _do_request_timer(self, mode: ReplayMode) -> None:
        if self._phase.state is not State.NOT_STARTED:
            self._reject("request_timer")
            return
        self._transition(TimerPhase.for_mode(mode))

    def _do_timer_ready(self) -> None:
        action = self.get_action_controller()
        if action is None:
            self._reject("timer_ready")
            return
        # Running inside dispatch, so this is queued right behind us
        action()

    def _do_start(self) -> None:
        self._chrono.cancel()
        self._level.init()
        self._chrono.init()
        self._sequence = self._generator.fresh()
        self._click_index = 0
        self.logger.info(f"New run: {self._describe_sequence()}")
        self._transition(GamePhase.of(State.STARTED))

    def _do_replay(self, mode: ReplayMode) -> None:
        if mode is ReplayMode.LAST:
            record = self._history.replay_last()
        else:
            record = self._history.replay_longest()

        if record is None:
            self.logger.info(f"No {mode.value} run recorded, starting a fresh run")
            self._do_start()
            return

        self._chrono.cancel()
        self._level.set_level(record.level_reached)
        self._chrono.set_level(record.level_reached)
        self._sequence = list(record.sequence)
        self._click_index = 0
        self.logger.info(f"Replaying {mode.value} run at level {record.level_reached}: {self._describe_sequence()}")
        self._transition(GamePhase.of(State.STARTED))

    def _do_sequence_over(self) -> None:
        if self._phase.state not in (State.STARTED, State.TURN):
            self._reject("sequence_over")
            return
        self._click_index = 0
        self._chrono.start()
        self._transition(GamePhase.of(State.PLAYER_TURN))

    def _do_click(self, color: 'SignalColor') -> None:
        if self._phase.state is not State.PLAYER_TURN:
            self._reject("click")
            return

        expected = self._sequence[self._click_index]
        if color != expected:
            self.logger.info(f"Wrong signal at index {self._click_index}: expected {expected}, got {color}")
            self._chrono.cancel()
            self._finish_run(State.GAME_OVER)
            return

        self._click_index += 1
        if self._click_index < len(self._sequence):
            self.logger.debug(f"Correct signal {color} ({self._click_index}/{len(self._sequence)})")
            return

        self._chrono.cancel()
        self._click_index = 0
        self._transition(GamePhase.of(State.NEXT_LEVEL))

    def _do_time_over(self) -> None:
        if self._phase.state is not State.PLAYER_TURN:
            self._reject("time_over")
            return
        self.logger.info(f"Time is over at level {self._level.level}")
        self._finish_run(State.TIME_IS_OVER)

    def _do_next_level(self) -> None:
        if self._phase.state is not State.NEXT_LEVEL:
            self._reject("next_level")
            return
        self._chrono.cancel()
        self._level.upgrade()
        self._chrono.upgrade()
        self._sequence = self._generator.next(self._sequence)
        self._click_index = 0
        self.logger.info(f"Level {self._level.level} ({self._chrono.get_time()}s): {self._describe_sequence()}")
        self._transition(GamePhase.of(State.TURN))

    def _do_end(self) -> None:
        if not self._phase.state.is_run_over:
            self._reject("end")
            return
        self._do_init()

    def _finish_run(self, outcome: State) -> None:
        run = RunRecord.of(self._sequence, self._level.level)
        if self._history.record(run):
            self.logger.info(f"New longest run: level {run.level_reached}")
        self._transition(GamePhase.of(outcome))

    def _describe_sequence(self) -> str:
        return "[" + ",".join(color.name for color in self._sequence) + "]"
