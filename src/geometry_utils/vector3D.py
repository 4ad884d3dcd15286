# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

import math

class Vector3D:
    """Three-component vector, Y is the vertical axis."""
    def __init__(self, x:float=0, y:float=0, z:float=0):
        """Initialize the instance."""
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __add__(self, other):
        """Provide the add."""
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        """Provide the sub."""
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar):
        """Provide the mul."""
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        """Provide the truediv."""
        return Vector3D(self.x / scalar, self.y / scalar, self.z / scalar)

    def __eq__(self, other):
        if not isinstance(other, Vector3D):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other):
        """Provide the dot."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other):
        """Provide the cross."""
        return Vector3D(self.y * other.z - self.z * other.y,
                        self.z * other.x - self.x * other.z,
                        self.x * other.y - self.y * other.x)

    def magnitude(self):
        """Provide the magnitude."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self):
        """Normalize the vector."""
        mag = self.magnitude()
        if mag == 0:
            return Vector3D()
        return self / mag

    def truncate_length(self, max_length: float):
        """Return a copy whose length does not exceed ``max_length``."""
        mag = self.magnitude()
        if mag > max_length:
            return self * (max_length / mag)
        return Vector3D(self.x, self.y, self.z)

    def set_y_to_zero(self):
        """Return the projection on the horizontal (XZ) plane."""
        return Vector3D(self.x, 0, self.z)

    def parallel_component(self, unit_basis):
        """Component of this vector along ``unit_basis``."""
        return unit_basis * self.dot(unit_basis)

    def perpendicular_component(self, unit_basis):
        """Component of this vector orthogonal to ``unit_basis``."""
        return self - self.parallel_component(unit_basis)

    def distance(self, other):
        """Euclidean distance to ``other``."""
        return (self - other).magnitude()

    def copy(self):
        return Vector3D(self.x, self.y, self.z)

    def __repr__(self) -> str:
        """Return the string representation."""
        return f"Vector3D({self.x}, {self.y}, {self.z})"


ZERO = Vector3D(0, 0, 0)
UP = Vector3D(0, 1, 0)
FORWARD = Vector3D(0, 0, 1)
SIDE = Vector3D(-1, 0, 0)
