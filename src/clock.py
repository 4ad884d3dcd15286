# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Real time and simulation time bookkeeping for the frame loop."""
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger("sim.clock")

class Clock:
    """
    Frame clock.

    In real-time mode simulation time is wall time minus paused time. With a
    fixed frame rate ("animation mode") every unpaused update advances the
    simulation by exactly one frame duration, whatever the wall time did.
    While paused, simulation time only moves through
    `advance_simulation_time`.
    """
    def __init__(self, fixed_frame_rate: float = 0, time_source: Optional[Callable[[], float]] = None):
        """Initialize the instance."""
        if fixed_frame_rate < 0:
            raise ValueError("fixed_frame_rate must be >= 0")
        self.fixed_frame_rate = float(fixed_frame_rate)
        self._time_source = time_source or time.perf_counter
        self._base_real_time: Optional[float] = None
        self.paused = False
        self.total_real_time = 0.0
        self.total_simulation_time = 0.0
        self.total_paused_time = 0.0
        self.total_advance_time = 0.0
        self.elapsed_simulation_time = 0.0
        self.elapsed_real_time = 0.0
        self._elapsed_advance_time = 0.0
        self.frame_count = 0

    @property
    def animation_mode(self) -> bool:
        """True when the clock runs on a fixed frame duration."""
        return self.fixed_frame_rate > 0

    def real_time_since_first_update(self) -> float:
        """Wall-clock seconds since the first `update`."""
        now = self._time_source()
        if self._base_real_time is None:
            self._base_real_time = now
        return now - self._base_real_time

    def update(self) -> None:
        """Advance the clock by one frame."""
        previous_real_time = self.total_real_time
        self.total_real_time = self.real_time_since_first_update()
        self.elapsed_real_time = self.total_real_time - previous_real_time
        if self.paused:
            self.total_paused_time += self.elapsed_real_time

        previous_simulation_time = self.total_simulation_time
        if self.animation_mode:
            if not self.paused:
                self.total_simulation_time += 1.0 / self.fixed_frame_rate
            self.total_simulation_time += self._elapsed_advance_time
        else:
            self.total_simulation_time = (
                self.total_real_time + self.total_advance_time + self._elapsed_advance_time - self.total_paused_time
            )
        self.total_advance_time += self._elapsed_advance_time
        self.elapsed_simulation_time = self.total_simulation_time - previous_simulation_time
        self._elapsed_advance_time = 0.0
        self.frame_count += 1

    def advance_simulation_time(self, seconds: float) -> None:
        """Step the simulation forward by hand, typically while paused."""
        if seconds < 0:
            raise ValueError("negative argument to advance_simulation_time")
        self._elapsed_advance_time += seconds

    def set_paused_state(self, paused: bool) -> bool:
        """Set the paused flag and return it."""
        if paused != self.paused:
            logger.info("Clock %s", "paused" if paused else "resumed")
        self.paused = bool(paused)
        return self.paused

    def toggle_paused_state(self) -> bool:
        """Flip the paused flag and return the new value."""
        return self.set_paused_state(not self.paused)

    def get_paused_state(self) -> bool:
        """Return the paused flag."""
        return self.paused
