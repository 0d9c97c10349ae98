"""
Game manager - host run loop driving the state machine
"""

import random
import time
from typing import Callable, Hashable, Optional, TYPE_CHECKING

import psutil

from simon_utils import OnceInMs

from .controller import Controller
from .frame_timer import FrameTimerSource
from .game_state_machine import GameStateMachine
from .interfaces import IStateListener
from .sequence_generator import SequenceGenerator
from .states import State

if TYPE_CHECKING:
    from simon_utils import ClassLogger
    from .config import GameConfig


class GameManager(IStateListener):
    """
    Reference host for the game core.

    Responsibilities:
    - Run the frame loop and deliver due timers (chrono expiry included)
    - Play the presentation side of each state: ready countdown, sequence
      replay, automatic level advance and end of run
    - Log resource usage periodically

    Views subscribe to ``game`` directly; player input goes through
    ``controller``.
    """

    def __init__(self,
                 config: 'GameConfig',
                 logger: 'ClassLogger',
                 time_fn: Callable[[], float] = time.monotonic,
                 sleep_fn: Callable[[float], None] = time.sleep):
        """
        Initialize the game manager.

        Args:
            config: Validated game configuration
            logger: Logger for the manager, child loggers are derived from it
            time_fn: Clock for the frame loop and timers
            sleep_fn: Used to wait out the remainder of each frame
        """
        config.validate()
        self.config = config
        self.logger = logger
        self.target_frame_duration = config.frame_duration_ms / 1000.0
        self.running = False
        self._sleep_fn = sleep_fn

        self.timers = FrameTimerSource(time_fn)
        generator = SequenceGenerator(random.Random(config.seed)) if config.seed is not None else None
        self.game = GameStateMachine(
            timer_source=self.timers,
            generator=generator,
            logger=logger.create_class_logger("GameStateMachine", config.log_level),
        )
        self.controller = Controller(self.game)
        self.game.subscribe(self)

        # Ready countdown or sequence replay currently being "presented"
        self._presentation_handle: Optional[Hashable] = None

        self._memory_monitor = OnceInMs(config.memory_log_interval_ms, time_fn)
        self._process = psutil.Process()

        self.game.init()
        self.logger.info(f"GameManager initialized: {config.frame_duration_ms}ms frame duration, "
                         f"{config.ready_countdown_s}s ready countdown, {config.signal_interval_s}s per signal")

    # IStateListener

    def update(self, state: State) -> None:
        self._cancel_presentation()

        if state is State.STARTED_TIMER:
            action = self.game.get_action_controller()
            self.logger.debug(f"Ready countdown: {self.config.ready_countdown_s}s")
            self._presentation_handle = self.timers.schedule(self.config.ready_countdown_s, action)

        elif state in (State.STARTED, State.TURN):
            replay_s = self.config.replay_duration_s(len(self.game.get_sequence()))
            self.logger.debug(f"Replaying {len(self.game.get_sequence())} signals over {replay_s:.1f}s")
            self._presentation_handle = self.timers.schedule(replay_s, self.controller.sequence_over)

        elif state is State.PLAYER_TURN:
            self.logger.debug(f"Player turn: {self.game.get_time()}s")

        elif state is State.NEXT_LEVEL:
            self.controller.next_level()

        elif state.is_run_over:
            reason = "wrong signal" if state is State.GAME_OVER else "time is over"
            self.logger.info(f"Run over ({reason}) at level {self.game.get_level()}")
            self.controller.end()

    # Loop

    def run_game_loop(self) -> None:
        """
        Run frames until stop() is called.

        Each frame is padded with sleep to keep a constant frame duration.
        """
        self.running = True
        self.logger.info(f"Starting game loop with {int(self.target_frame_duration * 1000)}ms frame duration")

        failed = False
        try:
            while self.running:
                frame_start = time.monotonic()

                self.update_frame()

                sleep_time = self.target_frame_duration - (time.monotonic() - frame_start)
                if sleep_time > 0:
                    self._sleep_fn(sleep_time)

        except KeyboardInterrupt:
            self.logger.info("Game stopped by user (Ctrl+C)")
        except Exception as e:
            failed = True
            self.logger.error(f"Game loop error: {e}", exception=e)
            self.logger.flush()
            raise
        finally:
            # Resetting notifies listeners, which could raise over the original error
            self.stop(reset_game=not failed)

    def update_frame(self) -> int:
        """
        One frame: deliver due timers and do housekeeping.

        Returns:
            Number of timer callbacks fired this frame
        """
        if self._memory_monitor.should_execute():
            self._log_memory_usage()

        return self.timers.poll()

    def stop(self, reset_game: bool = True) -> None:
        """
        Stop the loop and cancel the pending presentation.

        Args:
            reset_game: Also reset the game to NOT_STARTED, which disarms the chrono
        """
        self.running = False
        self._cancel_presentation()
        if reset_game:
            self.game.init()
        self.logger.info("Game stopped")

    def get_current_state_name(self) -> str:
        return self.game.get_state().name

    def _cancel_presentation(self) -> None:
        if self._presentation_handle is not None:
            self.timers.cancel(self._presentation_handle)
            self._presentation_handle = None

    def _log_memory_usage(self) -> None:
        """Log current memory and CPU usage (process and system)"""
        try:
            process_mb = self._process.memory_info().rss / 1024 / 1024
            process_cpu_percent = self._process.cpu_percent(interval=None)

            sys_mem = psutil.virtual_memory()
            sys_used_mb = sys_mem.used / 1024 / 1024
            sys_total_mb = sys_mem.total / 1024 / 1024

            self.logger.info(
                f"Memory - Process: {process_mb:.1f}MB | "
                f"System: {sys_used_mb:.0f}/{sys_total_mb:.0f}MB ({sys_mem.percent:.1f}%) | "
                f"CPU - Process: {process_cpu_percent:.1f}% | System: {psutil.cpu_percent(interval=None):.1f}%"
            )
        except psutil.Error as e:
            self.logger.warning(f"Failed to log system usage: {e}")
