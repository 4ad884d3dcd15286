# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Agent records: a vehicle tagged with the kind that selects its behaviour.

Agents live in a table owned by the plug-in and refer to each other by
their index in that table (`handle`). A pursuer keeps the handle of its
quarry; it never owns the quarry.
"""
import logging
from enum import Enum
from typing import Optional, Sequence
from vehicle import Vehicle
from plugin_registry import get_steering_behavior
import models  # noqa: F401  # ensure built-in behaviours register themselves

logger = logging.getLogger("sim.agents")

class AgentKind(Enum):
    WANDERER = "wanderer"
    PURSUER = "pursuer"

class AgentState(Enum):
    ACTIVE = "active"
    RESPAWNING = "respawning"

BEHAVIOR_BY_KIND = {
    AgentKind.WANDERER: "wander",
    AgentKind.PURSUER: "pursuit",
}

BODY_COLOR_BY_KIND = {
    AgentKind.WANDERER: "#669966",  # greenish
    AgentKind.PURSUER: "#996666",   # reddish
}

class AgentFactory:
    """Agent factory."""
    @staticmethod
    def create_agent(kind: AgentKind, handle: int, settings=None, quarry: Optional[int] = None):
        """Create agent."""
        if kind is AgentKind.PURSUER and quarry is None:
            raise ValueError(f"Pursuer {handle} needs a quarry handle")
        if kind is AgentKind.WANDERER and quarry is not None:
            raise ValueError(f"Wanderer {handle} cannot have a quarry")
        agent = Agent(kind, handle, settings, quarry)
        logger.debug("Created agent %s", agent.get_name())
        return agent

class Agent:
    """One member of the population."""
    def __init__(self, kind: AgentKind, handle: int, settings=None, quarry: Optional[int] = None):
        """Initialize the instance."""
        self.kind = kind
        self.handle = handle
        self._quarry = quarry
        self.state = AgentState.ACTIVE
        self.respawn_count = 0
        self.color = BODY_COLOR_BY_KIND[kind]
        self.vehicle = Vehicle(
            name=f"{kind.value}_{handle}",
            max_force=getattr(settings, "max_force", 5.0),
            max_speed=getattr(settings, "max_speed", 3.0),
            radius=getattr(settings, "radius", 0.5),
            trail_capacity=getattr(settings, "trail_capacity", 100),
        )
        self._behavior = get_steering_behavior(BEHAVIOR_BY_KIND[kind], self, settings)
        if self._behavior is None:
            raise ValueError(f"No steering behavior registered for {kind.value}")

    def get_name(self):
        """Return the name."""
        return self.vehicle.name

    @property
    def quarry(self) -> Optional[int]:
        """Handle of the chased agent, fixed at creation."""
        return self._quarry

    @property
    def is_wanderer(self) -> bool:
        return self.kind is AgentKind.WANDERER

    @property
    def is_pursuer(self) -> bool:
        return self.kind is AgentKind.PURSUER

    def update(self, population: Sequence["Agent"], context, elapsed_time: float):
        """One simulation step."""
        self._behavior.step(self, population, context, elapsed_time)

    def reset(self, population: Sequence["Agent"], context):
        """Reset the kinematic state, then let the behaviour re-place the agent."""
        self.vehicle.reset()
        self._behavior.reset(self, population, context)
        self.state = AgentState.ACTIVE

    def respawn(self, population: Sequence["Agent"], context):
        """Contact with the quarry: start over on the respawn ring."""
        self.state = AgentState.RESPAWNING
        self.reset(population, context)
        self.respawn_count += 1
        position = self.vehicle.position
        logger.info(
            "%s touched its quarry, respawned at %s (respawn #%d)",
            self.get_name(),
            (round(position.x, 3), round(position.y, 3), round(position.z, 3)),
            self.respawn_count
        )

    def __repr__(self) -> str:
        return f"Agent({self.kind.value}, handle={self.handle}, quarry={self._quarry})"
