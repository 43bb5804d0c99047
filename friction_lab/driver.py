"""
Host tick driver.

Advances an ExperimentSession at a fixed frame rate using wall-clock time.
Clock and sleep are injectable, so tests can run a whole measurement on
synthetic time without waiting.
"""

import time
from typing import Callable, Optional

from .interfaces import InvalidParameter
from .logging_config import get_logger
from .models import MeasurementPhase, SessionSnapshot
from .session import ExperimentSession

DEFAULT_FRAME_INTERVAL = 1.0 / 60.0


class FrameDriver:
    """Frame callback loop for a single session."""

    def __init__(self, session: ExperimentSession,
                 frame_interval: float = DEFAULT_FRAME_INTERVAL,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if frame_interval <= 0:
            raise InvalidParameter("Frame interval must be positive")
        self.session = session
        self.frame_interval = frame_interval
        self.clock = clock
        self.sleep = sleep
        self.logger = get_logger(__name__)
        self._last_tick: Optional[float] = None
        self.frame_count = 0

    def tick(self) -> SessionSnapshot:
        """Advance the session by the time elapsed since the previous tick."""
        now = self.clock()
        dt = 0.0 if self._last_tick is None else max(0.0, now - self._last_tick)
        self._last_tick = now
        self.frame_count += 1
        return self.session.advance(dt)

    def run_until_settled(self, on_frame: Optional[Callable[[SessionSnapshot], None]] = None,
                          max_frames: int = 10_000) -> SessionSnapshot:
        """
        Tick until the running measurement settles.

        Args:
            on_frame: Called with the snapshot of every frame
            max_frames: Safety limit on the number of frames

        Returns:
            Snapshot of the last frame
        """
        self._last_tick = None
        self.frame_count = 0
        snapshot = self.session.snapshot()
        if snapshot.phase is not MeasurementPhase.RUNNING:
            return snapshot

        start = self.clock()
        for _ in range(max_frames):
            snapshot = self.tick()
            if on_frame is not None:
                on_frame(snapshot)
            if snapshot.phase is not MeasurementPhase.RUNNING:
                break
            self.sleep(self.frame_interval)
        else:
            raise RuntimeError(f"Measurement did not settle within {max_frames} frames")

        self.logger.debug(
            f"Measurement settled after {self.frame_count} frames "
            f"({self.clock() - start:.3f}s)"
        )
        return snapshot
