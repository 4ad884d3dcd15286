# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

import math
from random import Random
from geometry_utils.vector3D import Vector3D

_TWO_PI = 2 * math.pi

def clip(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the closed interval [lo, hi]."""
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value

def interpolate(alpha: float, x0, x1):
    """Linear interpolation, works for floats and vectors."""
    return x0 + ((x1 - x0) * alpha)

def blend_into_accumulator(smooth_rate: float, new_value, smoothed_accumulator):
    """Return the accumulator moved towards ``new_value`` by ``smooth_rate``."""
    return interpolate(clip(smooth_rate, 0, 1), smoothed_accumulator, new_value)

def frandom01(random_generator: Random) -> float:
    """Uniform float in [0, 1]."""
    return random_generator.uniform(0, 1)

def frandom2(random_generator: Random, lower: float, upper: float) -> float:
    """Uniform float in [lower, upper]."""
    return random_generator.uniform(lower, upper)

def scalar_random_walk(random_generator: Random, initial: float, walkspeed: float, lo: float, hi: float) -> float:
    """One step of a bounded random walk."""
    step = ((frandom01(random_generator) * 2) - 1) * walkspeed
    return clip(initial + step, lo, hi)

def random_unit_vector_on_xz_plane(random_generator: Random) -> Vector3D:
    """Uniformly distributed horizontal direction."""
    angle = random_generator.uniform(0, _TWO_PI)
    return Vector3D(math.cos(angle), 0, math.sin(angle))
