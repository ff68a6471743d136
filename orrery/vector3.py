"""
Immutable three-component vector used for planet positions.
"""
import math
from typing import NamedTuple


class Vector3(NamedTuple):
    """
    Cartesian position of a planet.

    Attributes:
        x: First component
        y: Second component
        z: Third component

    Note:
        - Components are plain Python floats, so the value owns no array storage
        - In the display frame y is the vertical (ecliptic pole) axis

    Examples:
        >>> v = Vector3(3.0, 4.0, 0.0)
        >>> v.magnitude()
        5.0
    """
    x: float
    y: float
    z: float

    def magnitude(self) -> float:
        """Euclidean norm of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def scaled(self, factor: float) -> 'Vector3':
        """Copy of the vector with every component multiplied by `factor`."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)
