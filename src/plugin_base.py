# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""
Core plugin base classes used by the simulator.

Steering behaviours are looked up by name from the agent kind, so a new
scenario can reuse the registry without touching the vehicle code. The
host loop talks to a scenario only through the lifecycle hooks of
`PluginBase` and draws through a `DrawingBackend`.
"""

from typing import Any, Protocol, Sequence

class SteeringBehavior(Protocol):
    """
    Interface for the per-kind steering behaviour of an agent.

    A behaviour computes a steering force for its agent and applies it to
    the agent's vehicle once per frame.
    """
    def step(self, agent: Any, population: Sequence[Any], context: Any, elapsed_time: float) -> None:
        """Advance `agent` by `elapsed_time` seconds."""

    def reset(self, agent: Any, population: Sequence[Any], context: Any) -> None:
        """Reinitialize behaviour-specific state after the vehicle was reset."""

class DrawingBackend(Protocol):
    """
    Interface of the drawing collaborator.

    The simulation only hands over data: a camera pose, a grid center and
    vehicles (position, local space, radius, trail). Implementations decide
    how to render them.
    """
    def begin_frame(self, camera: Any) -> None:
        """Start a new frame seen from `camera`."""

    def draw_ground_grid(self, center: Any) -> None:
        """Draw the ground reference grid around `center`."""

    def draw_vehicle(self, vehicle: Any, color: str) -> None:
        """Draw a vehicle body and its trail."""

    def end_frame(self) -> None:
        """Finish the current frame."""

class PluginBase:
    """
    Base class of scenario plug-ins driven by the host loop.

    Subclasses implement the lifecycle: `open`, `update`, `redraw`,
    `reset` and `close`.
    """
    def __init__(self, name: str = "", version: str = "0.0") -> None:
        """Initialize the instance."""
        self.name = name
        self.version = version

    def open(self, context: Any) -> None:
        raise NotImplementedError

    def update(self, context: Any, elapsed_time: float) -> None:
        raise NotImplementedError

    def redraw(self, context: Any, current_time: float, elapsed_time: float, drawing: DrawingBackend | None = None) -> None:
        raise NotImplementedError

    def reset(self, context: Any) -> None:
        raise NotImplementedError

    def close(self, context: Any) -> None:
        raise NotImplementedError

    def all_vehicles(self) -> list:
        """Vehicles owned by the plug-in, in population order."""
        return []
