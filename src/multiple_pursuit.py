# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Multiple pursuit: one wanderer chased by a pack of pursuers."""
import logging
from enum import Enum
from typing import Optional
from agents import Agent, AgentFactory, AgentKind
from camera import CameraMode
from config import ScenarioSettings, validate_pursuer_count
from geometry_utils.vector3D import Vector3D
from plugin_base import DrawingBackend, PluginBase

logger = logging.getLogger("sim.multiple_pursuit")

WANDERER_SLOT = 0

class PlugInPhase(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"

class MultiplePursuitPlugIn(PluginBase):
    """
    Scenario plug-in owning the agent population.

    The population is a table indexed by agent handle: slot 0 holds the
    wanderer, slots 1..N the pursuers, each of which refers to slot 0 as
    its quarry.
    """
    def __init__(self, pursuer_count: int = 8, settings: Optional[ScenarioSettings] = None):
        """Initialize the instance."""
        super().__init__(name="Multiple Pursuit", version="1.0")
        self.pursuer_count = validate_pursuer_count(pursuer_count)
        self.settings = settings or ScenarioSettings(pursuer_count=pursuer_count)
        self.phase = PlugInPhase.UNOPENED
        self._agents: list[Agent] = []

    def _require_open(self, operation: str):
        if self.phase is not PlugInPhase.OPEN:
            raise RuntimeError(f"Cannot {operation} plug-in '{self.name}' in phase '{self.phase.value}'; call open() first")

    # ------------------------------------------------------------- lifecycle

    def open(self, context, pursuer_count: Optional[int] = None):
        """Create the wanderer and the pursuers and aim the camera at the wanderer."""
        if self.phase is PlugInPhase.OPEN:
            raise RuntimeError(f"Plug-in '{self.name}' is already open")
        if pursuer_count is not None:
            self.pursuer_count = validate_pursuer_count(pursuer_count)
        wanderer = AgentFactory.create_agent(AgentKind.WANDERER, WANDERER_SLOT, self.settings)
        self._agents = [wanderer]
        wanderer.reset(self._agents, context)
        for handle in range(1, self.pursuer_count + 1):
            pursuer = AgentFactory.create_agent(AgentKind.PURSUER, handle, self.settings, quarry=WANDERER_SLOT)
            self._agents.append(pursuer)
            pursuer.reset(self._agents, context)
        self.phase = PlugInPhase.OPEN

        if context.selected_vehicle is None:
            context.selected_vehicle = WANDERER_SLOT
        camera = context.camera
        camera.mode = CameraMode.STRAIGHT_DOWN
        camera.fixed_dist_distance = self.settings.camera_distance
        camera.fixed_dist_v_offset = self.settings.camera_elevation
        logger.info("%s opened with 1 wanderer and %d pursuers", self.name, self.pursuer_count)

    def update(self, context, elapsed_time: float):
        """Advance the wanderer, then every pursuer in population order."""
        self._require_open("update")
        for agent in self._agents:
            agent.update(self._agents, context, elapsed_time)

    def redraw(self, context, current_time: float, elapsed_time: float, drawing: Optional[DrawingBackend] = None):
        """Move the camera to the selected vehicle and hand the scene to `drawing`."""
        self._require_open("redraw")
        selected = self.vehicle(context.selected_vehicle) if context.selected_vehicle is not None else None
        context.camera.update(current_time, elapsed_time, selected, context.clock.get_paused_state())
        if drawing is None:
            return
        drawing.begin_frame(context.camera)
        grid_target = selected.position if selected is not None else Vector3D()
        drawing.draw_ground_grid(grid_target)
        for agent in self._agents:
            drawing.draw_vehicle(agent.vehicle, agent.color)
        drawing.end_frame()

    def reset(self, context):
        """Reinitialize every agent in place and snap the camera."""
        self._require_open("reset")
        for agent in self._agents:
            agent.reset(self._agents, context)
        context.camera.do_not_smooth_next_move()
        context.camera.reset_local_space()
        logger.info("%s reset (%d agents)", self.name, len(self._agents))

    def close(self, context):
        """Release the population."""
        self._agents.clear()
        context.selected_vehicle = None
        self.phase = PlugInPhase.CLOSED
        logger.info("%s closed", self.name)

    # ------------------------------------------------------------- queries

    @property
    def agents(self) -> tuple:
        """Read-only view of the population."""
        return tuple(self._agents)

    @property
    def population_size(self) -> int:
        return len(self._agents)

    @property
    def wanderer(self) -> Agent:
        """The agent in the wanderer slot."""
        self._require_open("query the wanderer of")
        return self._agents[WANDERER_SLOT]

    def pursuers(self) -> tuple:
        return tuple(self._agents[WANDERER_SLOT + 1:])

    def agent(self, handle: int) -> Agent:
        """Look an agent up by handle."""
        return self._agents[handle]

    def vehicle(self, handle: int):
        """Look a vehicle up by agent handle."""
        return self._agents[handle].vehicle

    def all_vehicles(self) -> list:
        """Vehicles in population order."""
        return [agent.vehicle for agent in self._agents]
