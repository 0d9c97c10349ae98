import logging

import pytest

from simon_system import (Controller, GameConfig, GameManager, IStateListener, ReplayMode, SignalColor,
                          State)


@pytest.fixture
def config():
    return GameConfig(ready_countdown_s=3.0, signal_interval_s=1.0, seed=11)


@pytest.fixture
def manager(config, logger, clock):
    return GameManager(config, logger, time_fn=clock)


def wrong_color(color):
    return next(other for other in SignalColor if other is not color)


def test_manager_starts_not_started(manager):
    assert manager.get_current_state_name() == "NOT_STARTED"
    assert isinstance(manager.controller, Controller)


def test_full_round_driven_by_frames(manager, clock):
    game = manager.game
    manager.controller.timer_start()
    assert game.get_state() is State.STARTED_TIMER

    clock.advance(2.5)
    manager.update_frame()
    assert game.get_state() is State.STARTED_TIMER

    clock.advance(0.5)
    manager.update_frame()
    assert game.get_state() is State.STARTED
    assert len(game.get_sequence()) == 1

    # one signal replayed at 1s per signal
    clock.advance(1.0)
    manager.update_frame()
    assert game.get_state() is State.PLAYER_TURN

    manager.controller.click(game.get_sequence()[0])
    # NEXT_LEVEL is acknowledged automatically
    assert game.get_state() is State.TURN
    assert game.get_level() == 2
    assert game.get_time() == 6

    clock.advance(2.0)
    manager.update_frame()
    assert game.get_state() is State.PLAYER_TURN

    clock.advance(6.0)
    manager.update_frame()
    # TIME_IS_OVER is followed by end()
    assert game.get_state() is State.NOT_STARTED
    assert game.get_history().replay_last().level_reached == 2


def test_game_over_then_replay_last(manager, clock):
    game = manager.game
    manager.controller.start()
    clock.advance(1.0)
    manager.update_frame()
    manager.controller.click(game.get_sequence()[0])
    clock.advance(2.0)
    manager.update_frame()

    recorded = game.get_sequence()
    manager.controller.click(wrong_color(recorded[0]))
    assert game.get_state() is State.NOT_STARTED

    manager.controller.timer_last()
    assert game.get_phase().mode is ReplayMode.LAST
    clock.advance(3.0)
    manager.update_frame()
    assert game.get_state() is State.STARTED
    assert game.get_sequence() == recorded
    assert game.get_level() == 2


def test_timer_longuest_without_history_starts_fresh(manager, clock):
    manager.controller.timer_longuest()
    clock.advance(3.0)
    manager.update_frame()
    assert manager.game.get_state() is State.STARTED
    assert manager.game.get_level() == 1


def test_restart_cancels_pending_replay(manager, clock):
    manager.controller.start()
    clock.advance(0.5)
    manager.controller.start()
    # the pending sequence_over from the first start must not fire
    clock.advance(0.6)
    manager.update_frame()
    assert manager.game.get_state() is State.STARTED

    clock.advance(0.4)
    manager.update_frame()
    assert manager.game.get_state() is State.PLAYER_TURN


def test_ready_countdown_only_from_not_started(manager, clock):
    manager.controller.start()
    manager.controller.timer_start()
    assert manager.game.get_state() is State.STARTED

    clock.advance(1.0)
    manager.update_frame()
    assert manager.game.get_state() is State.PLAYER_TURN


def test_stop_disarms_everything(manager, clock):
    manager.controller.start()
    clock.advance(1.0)
    manager.update_frame()
    assert manager.game.is_chrono_armed()

    manager.stop()
    assert not manager.running
    assert manager.game.get_state() is State.NOT_STARTED
    assert manager.timers.pending_count() == 0


def test_same_seed_same_sequences(config, logger, clock):
    first = GameManager(config, logger, time_fn=clock)
    second = GameManager(config, logger, time_fn=clock)
    first.controller.start()
    second.controller.start()
    assert first.game.get_sequence() == second.game.get_sequence()


def test_memory_usage_logged_once_per_interval(manager, clock, caplog):
    with caplog.at_level(logging.DEBUG):
        manager.update_frame()
        assert "Memory - Process" not in caplog.text

        clock.advance(60.0)
        manager.update_frame()
        assert caplog.text.count("Memory - Process") == 1

        manager.update_frame()
        assert caplog.text.count("Memory - Process") == 1


def test_game_loop_stops_on_keyboard_interrupt(config, logger, clock):
    def interrupt(_seconds):
        raise KeyboardInterrupt

    manager = GameManager(config, logger, time_fn=clock, sleep_fn=interrupt)
    manager.controller.start()
    manager.run_game_loop()

    assert not manager.running
    assert manager.game.get_state() is State.NOT_STARTED


def test_game_loop_reraises_errors(config, logger, clock):
    def broken(_seconds):
        raise RuntimeError("sleep failed")

    manager = GameManager(config, logger, time_fn=clock, sleep_fn=broken)
    with pytest.raises(RuntimeError):
        manager.run_game_loop()
    assert not manager.running


def test_game_loop_keeps_listener_error_and_skips_reset(config, logger, clock):
    class Broken(IStateListener):
        def update(self, state):
            raise RuntimeError(f"view failed on {state.name}")

    manager = GameManager(config, logger, time_fn=clock, sleep_fn=lambda _seconds: None)
    manager.controller.start()
    manager.game.subscribe(Broken())
    clock.advance(1.0)

    with pytest.raises(RuntimeError, match="PLAYER_TURN") as raised:
        manager.run_game_loop()
    assert raised.value.__context__ is None
    assert not manager.running
    assert manager.game.get_state() is State.PLAYER_TURN
    assert manager.timers.pending_count() == 1


def test_game_loop_runs_frames_until_stopped(config, logger, clock):
    frames = []

    def sleep(seconds):
        frames.append(seconds)
        clock.advance(seconds)
        if len(frames) == 5:
            manager.stop()

    manager = GameManager(config, logger, time_fn=clock, sleep_fn=sleep)
    manager.run_game_loop()
    assert len(frames) == 5
    assert all(0 < seconds <= 0.02 for seconds in frames)


def test_invalid_config_rejected(logger, clock):
    with pytest.raises(ValueError):
        GameManager(GameConfig(signal_interval_s=0), logger, time_fn=clock)
