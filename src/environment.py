# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Environment: the host frame loop and the context it threads through it."""
import logging
import random
from dataclasses import dataclass, field
from random import Random
from typing import Optional
from camera import Camera
from clock import Clock
from config import Config, ScenarioSettings
from multiple_pursuit import MultiplePursuitPlugIn
from logging_utils import log_scenario_settings
from plugin_base import DrawingBackend

logger = logging.getLogger("sim.environment")

@dataclass
class SimulationContext:
    """
    State shared by one host loop and handed to every plug-in call.

    `selected_vehicle` is an agent handle, not a vehicle object.
    """
    clock: Clock = field(default_factory=Clock)
    camera: Camera = field(default_factory=Camera)
    random_generator: Random = field(default_factory=Random)
    selected_vehicle: Optional[int] = None
    seed: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: ScenarioSettings, seed: Optional[int] = None):
        """Build a context whose random generator is seeded from `settings`."""
        if seed is None:
            seed = settings.seed
        if seed is None:
            seed = random.SystemRandom().randrange(0, 2**32)
        return cls(
            clock=Clock(fixed_frame_rate=settings.fixed_frame_rate),
            camera=Camera(
                smooth_move_speed=settings.smooth_move_speed,
                lookdown_distance=settings.lookdown_distance
            ),
            random_generator=Random(seed),
            seed=seed,
        )

class Environment:
    """Environment."""
    def __init__(self, config_elem: Config, drawing: Optional[DrawingBackend] = None):
        """Initialize the instance."""
        self.settings = config_elem.scenario_settings()
        render = config_elem.render
        self.snapshot_path = render.get("snapshot")
        self.snapshot_every = int(render.get("every", 0))
        self.drawing = drawing
        self.context = SimulationContext.from_settings(self.settings)
        self.plugin = MultiplePursuitPlugIn(self.settings.pursuer_count, self.settings)
        log_scenario_settings(logger, self.settings, self.context.seed)

    def step(self):
        """Run one frame: clock, simulation, camera and drawing."""
        clock = self.context.clock
        clock.update()
        elapsed_time = self.settings.elapsed_time
        if self.settings.fixed_frame_rate > 0 or clock.paused:
            elapsed_time = clock.elapsed_simulation_time
        self.plugin.update(self.context, elapsed_time)
        self.plugin.redraw(self.context, clock.total_simulation_time, elapsed_time, self.drawing)

    def start(self, frames: Optional[int] = None):
        """Open the scenario, run `frames` frames and close it."""
        frames = self.settings.frames if frames is None else frames
        if frames <= 0:
            raise ValueError("Invalid configuration: the number of frames must be > 0")
        self.plugin.open(self.context)
        try:
            for frame in range(1, frames + 1):
                self.step()
                if self._snapshot_due(frame, frames):
                    self.drawing.save(self.snapshot_path)
                    logger.info("Frame %d written to %s", frame, self.snapshot_path)
            respawns = sum(pursuer.respawn_count for pursuer in self.plugin.pursuers())
            logger.info("Ran %d frames, %d respawns", frames, respawns)
            return respawns
        finally:
            self.plugin.close(self.context)

    def _snapshot_due(self, frame: int, frames: int) -> bool:
        if self.drawing is None or not self.snapshot_path:
            return False
        if self.snapshot_every > 0:
            return frame % self.snapshot_every == 0
        return frame == frames
