"""
Game system configuration
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Host loop and presentation timing configuration"""

    # Timing configuration
    frame_duration_ms: float = 20.0  # 50 FPS
    ready_countdown_s: float = 3.0  # "Ready ?!" countdown before a run
    signal_interval_s: float = 1.2  # time per replayed signal

    # Housekeeping
    memory_log_interval_ms: int = 60000

    # Deterministic sequences when set
    seed: Optional[int] = None

    log_level: int = logging.INFO

    @property
    def target_fps(self) -> float:
        """Target FPS derived from frame duration"""
        return 1000.0 / self.frame_duration_ms

    def replay_duration_s(self, signal_count: int) -> float:
        """Time the presentation needs to replay a sequence of signal_count signals"""
        return signal_count * self.signal_interval_s

    def validate(self) -> None:
        """Basic validation of configuration"""
        if self.frame_duration_ms <= 0:
            raise ValueError(f"Frame duration must be positive, got {self.frame_duration_ms}")

        if self.ready_countdown_s < 0:
            raise ValueError(f"Ready countdown must not be negative, got {self.ready_countdown_s}")

        if self.signal_interval_s <= 0:
            raise ValueError(f"Signal interval must be positive, got {self.signal_interval_s}")

        if self.memory_log_interval_ms <= 0:
            raise ValueError(f"Memory log interval must be positive, got {self.memory_log_interval_ms}")

        if self.log_level not in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            raise ValueError(f"Unknown log level: {self.log_level}")
