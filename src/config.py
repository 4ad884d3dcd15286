# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

import json
from dataclasses import dataclass, fields
from typing import Optional

@dataclass(frozen=True)
class ScenarioSettings:
    """Construction-time constants of a multiple-pursuit scenario."""
    pursuer_count: int = 8
    seed: Optional[int] = None
    frames: int = 0
    elapsed_time: float = 0.006
    fixed_frame_rate: float = 0.0
    max_speed: float = 3.0
    max_force: float = 5.0
    radius: float = 0.5
    max_prediction_time: float = 20.0
    respawn_inner_radius: float = 20.0
    respawn_outer_radius: float = 30.0
    trail_capacity: int = 100
    wander_scale: float = 3.0
    camera_distance: float = 13.0
    camera_elevation: float = 8.0
    lookdown_distance: float = 30.0
    smooth_move_speed: float = 1.5

    def __post_init__(self):
        validate_pursuer_count(self.pursuer_count)
        if self.frames < 0:
            raise ValueError("Field 'frames' must be >= 0")
        if self.elapsed_time < 0:
            raise ValueError("Field 'elapsed_time' must be >= 0")
        if self.fixed_frame_rate < 0:
            raise ValueError("Field 'fixed_frame_rate' must be >= 0")
        for name in ("max_speed", "max_force", "radius", "max_prediction_time", "respawn_inner_radius"):
            if getattr(self, name) < 0:
                raise ValueError(f"Field '{name}' must be >= 0")
        if self.respawn_outer_radius < self.respawn_inner_radius:
            raise ValueError("Field 'respawn_outer_radius' must not be smaller than 'respawn_inner_radius'")
        if not isinstance(self.trail_capacity, int) or self.trail_capacity < 1:
            raise ValueError("Field 'trail_capacity' must be a positive integer")
        if self.smooth_move_speed <= 0:
            raise ValueError("Field 'smooth_move_speed' must be > 0")

def validate_pursuer_count(count) -> int:
    """Return `count` if it is a usable pursuer count, raise ValueError otherwise."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"Pursuer count must be an integer, got {count!r}")
    if count < 0:
        raise ValueError(f"Pursuer count must be >= 0, got {count}")
    return count

class Config:
    """Config."""
    def __init__(self, config_path: str = "", new_data: Optional[dict] = None):
        """Initialize the instance."""
        if config_path:
            self.config_path = config_path
            self.data = self.load_config()
        elif new_data:
            self.config_path = None
            self.data = new_data
        else:
            raise ValueError("Either config_path or new_data must be provided")
        if not isinstance(self.data.get("scenario", {}), dict):
            raise ValueError("The 'scenario' field must be an object")

    def load_config(self):
        """Load config."""
        with open(self.config_path, 'r') as file:
            return json.load(file)

    def scenario_settings(self) -> ScenarioSettings:
        """Build the validated scenario constants."""
        scenario = dict(self.scenario)
        camera = scenario.pop("camera", {}) or {}
        scenario.pop("logging", None)
        scenario.pop("render", None)
        known = {f.name for f in fields(ScenarioSettings)}
        unknown = sorted(k for k in scenario if k not in known)
        if unknown:
            raise ValueError(f"Unknown scenario field(s): {', '.join(unknown)}")
        camera_fields = {
            "distance": "camera_distance",
            "elevation": "camera_elevation",
            "lookdown_distance": "lookdown_distance",
            "smooth_move_speed": "smooth_move_speed",
        }
        for key, value in camera.items():
            if key not in camera_fields:
                raise ValueError(f"Unknown camera field '{key}'")
            scenario[camera_fields[key]] = value
        return ScenarioSettings(**scenario)

    @property
    def scenario(self) -> dict:
        """Return the scenario configuration."""
        return self.data.get('scenario', {})

    @property
    def logging(self) -> dict:
        """Return the logging configuration."""
        return self.scenario.get('logging', {})

    @property
    def render(self) -> dict:
        """Return the render configuration."""
        return self.scenario.get('render', {})

    @property
    def plugins(self) -> list:
        """Return the plugin modules to import."""
        return self.data.get('plugins', [])
