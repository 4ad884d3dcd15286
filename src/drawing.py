# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""Headless top-down drawing of the ground plane with matplotlib."""
import logging
import math
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
from matplotlib.patches import Circle
from geometry_utils.vector3D import Vector3D
from plugin_base import DrawingBackend

logger = logging.getLogger("sim.drawing")

GRID_SIZE = 50
GRID_COLORS = ("#454545", "#4d4d4d")

def round_half_away(value: float) -> float:
    """Nearest integer, halves rounded away from zero (1.5 -> 2, -1.5 -> -2)."""
    return math.copysign(math.floor(abs(value) + 0.5), value)

def grid_center(target: Vector3D) -> Vector3D:
    """
    Snap `target` to the checkerboard period and sink it under the trails.

    The checkerboard has a pitch of 1 and tiles with a period of 2.
    """
    return Vector3D(
        round_half_away(target.x * 0.5) * 2,
        (round_half_away(target.y * 0.5) * 2) - 0.05,
        round_half_away(target.z * 0.5) * 2
    )

def checkerboard(size: int = GRID_SIZE) -> np.ndarray:
    """0/1 parity pattern of a size x size board."""
    idx = np.arange(size)
    return (idx[:, None] + idx[None, :]) % 2

def trail_array(vehicle) -> np.ndarray:
    """Trail as an (n, 2) array of ground-plane (x, z) points."""
    if not vehicle.trail:
        return np.empty((0, 2))
    return np.array([(p.x, p.z) for p in vehicle.trail], dtype=float)

class MatplotlibDrawing(DrawingBackend):
    """Draw each frame on an Agg canvas, viewed from straight above."""
    def __init__(self, view_radius: float = 40.0, figsize=(8, 8), dpi: int = 100):
        """Initialize the instance."""
        self.view_radius = float(view_radius)
        self.fig, self.ax = plt.subplots(figsize=figsize, dpi=dpi)
        self.vehicles_drawn = 0

    def begin_frame(self, camera) -> None:
        """Clear the axes and center the view on the camera target."""
        self.ax.clear()
        self.vehicles_drawn = 0
        target = camera.target
        self.ax.set_xlim(target.x - self.view_radius, target.x + self.view_radius)
        self.ax.set_ylim(target.z - self.view_radius, target.z + self.view_radius)
        self.ax.set_aspect("equal")
        self.ax.set_xlabel("x")
        self.ax.set_ylabel("z")

    def draw_ground_grid(self, center) -> None:
        """Checkerboard of GRID_SIZE x GRID_SIZE unit squares around `center`."""
        snapped = grid_center(center)
        half = GRID_SIZE / 2
        extent = (snapped.x - half, snapped.x + half, snapped.z - half, snapped.z + half)
        cmap = ListedColormap(GRID_COLORS)
        self.ax.imshow(checkerboard(), cmap=cmap, extent=extent, origin="lower", zorder=0, interpolation="nearest")

    def draw_vehicle(self, vehicle, color: str) -> None:
        """Body disk, a heading tick and the trail."""
        position = vehicle.position
        self.ax.add_patch(Circle((position.x, position.z), vehicle.radius, color=color, zorder=3))
        nose = position + (vehicle.forward * vehicle.radius * 2)
        self.ax.plot([position.x, nose.x], [position.z, nose.z], color=color, linewidth=1, zorder=3)
        trail = trail_array(vehicle)
        if len(trail) > 1:
            self.ax.plot(trail[:, 0], trail[:, 1], color=color, linewidth=0.8, alpha=0.6, zorder=2)
        self.vehicles_drawn += 1

    def end_frame(self) -> None:
        """Render the canvas."""
        self.fig.canvas.draw()

    def save(self, path: str) -> None:
        """Write the last frame to `path`."""
        self.fig.savefig(path)

    def close(self) -> None:
        plt.close(self.fig)
