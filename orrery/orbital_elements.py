"""
Orbital elements representation for the planets.
"""
from typing import NamedTuple


class OrbitalElements(NamedTuple):
    """
    Keplerian orbital elements of a planet at the J2000.0 epoch.

    These elements define a heliocentric elliptical orbit referred to the
    ecliptic. Angular quantities are stored in degrees, as tabulated; the
    position transform converts them to radians.

    Attributes:
        a: Semi-major axis (AU)
        e: Eccentricity (dimensionless, 0 ≤ e < 1)
        i: Inclination to the ecliptic (degrees)
        Omega: Longitude of the ascending node (degrees)
        omega: Argument of perihelion (degrees)
        M0: Mean anomaly at epoch (degrees)
        n: Mean motion (degrees/day)

    Note:
        - Angles may take any real value; they only enter through
          trigonometric functions.
        - The tuple is a JAX pytree, so it can be passed straight into
          jitted functions.
    """
    a: float  # semi-major axis (AU)
    e: float  # eccentricity
    i: float  # inclination (deg)
    Omega: float  # longitude of ascending node (deg)
    omega: float  # argument of perihelion (deg)
    M0: float  # mean anomaly at epoch (deg)
    n: float  # mean motion (deg/day)

    @property
    def period(self) -> float:
        """Sidereal period in days implied by the mean motion."""
        return 360.0 / self.n

    @property
    def perihelion(self) -> float:
        """Closest heliocentric distance (AU)."""
        return self.a * (1.0 - self.e)

    @property
    def aphelion(self) -> float:
        """Farthest heliocentric distance (AU)."""
        return self.a * (1.0 + self.e)
