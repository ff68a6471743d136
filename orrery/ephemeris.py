"""
Heliocentric positions of the planets from their orbital elements.

The transform runs: elapsed days since J2000.0 -> mean anomaly -> eccentric
anomaly (Kepler's equation) -> true anomaly and distance -> position in the
orbital plane -> rotation into the ecliptic frame. The display frame used by
visualization hosts is the ecliptic frame scaled by a fixed factor, with the
ecliptic pole as the vertical (y) axis.
"""
from typing import NamedTuple

import jax
import jax.numpy as jnp
from jax import jit

from .constants import J2000_JD, DISPLAY_SCALE, KEPLER_TOL, KEPLER_MAX_ITER
from .kepler import KeplerSolution, solve_kepler
from .orbital_elements import OrbitalElements
from .vector3 import Vector3


class EclipticState(NamedTuple):
    """
    Output of the position kernel.

    Attributes:
        r: Ecliptic position [x, y, z] in AU, shape (3,) or (n, 3)
        distance: Heliocentric distance in AU
        kepler: Kepler solution used for the position
    """
    r: jnp.ndarray
    distance: jnp.ndarray
    kepler: KeplerSolution


def mean_anomaly(elements: OrbitalElements, julian_date: float) -> jnp.ndarray:
    """
    Mean anomaly (radians) at the given Julian date.

    No modulo is applied; the value grows without bound away from the epoch.
    """
    days_since_epoch = julian_date - J2000_JD
    return jnp.deg2rad(elements.M0 + elements.n * days_since_epoch)


def true_anomaly(E, e):
    """True anomaly from eccentric anomaly via the half-angle tangent identity."""
    return 2.0 * jnp.arctan2(jnp.sqrt(1.0 + e) * jnp.tan(E / 2.0), jnp.sqrt(1.0 - e))


@jit
def _ecliptic_state(elements: OrbitalElements, julian_date: float,
                    tol: float, max_iter: int) -> EclipticState:
    e = elements.e

    M = mean_anomaly(elements, julian_date)
    sol = solve_kepler(M, e, tol, max_iter)
    E = sol.E

    nu = true_anomaly(E, e)

    # Distance from the Sun
    r_mag = elements.a * (1.0 - e * jnp.cos(E))

    # Position in orbital plane
    x_orb = r_mag * jnp.cos(nu)
    y_orb = r_mag * jnp.sin(nu)

    cos_Omega = jnp.cos(jnp.deg2rad(elements.Omega))
    sin_Omega = jnp.sin(jnp.deg2rad(elements.Omega))
    cos_w = jnp.cos(jnp.deg2rad(elements.omega))
    sin_w = jnp.sin(jnp.deg2rad(elements.omega))
    cos_i = jnp.cos(jnp.deg2rad(elements.i))
    sin_i = jnp.sin(jnp.deg2rad(elements.i))

    x = ((cos_Omega * cos_w - sin_Omega * sin_w * cos_i) * x_orb
         + (-cos_Omega * sin_w - sin_Omega * cos_w * cos_i) * y_orb)
    y = ((sin_Omega * cos_w + cos_Omega * sin_w * cos_i) * x_orb
         + (-sin_Omega * sin_w + cos_Omega * cos_w * cos_i) * y_orb)
    z = (sin_w * sin_i) * x_orb + (cos_w * sin_i) * y_orb

    return EclipticState(r=jnp.stack([x, y, z]), distance=r_mag, kepler=sol)


_ecliptic_state_vec = jax.vmap(_ecliptic_state, in_axes=(0, None, None, None))


def ecliptic_state(elements: OrbitalElements, julian_date: float,
                   tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> EclipticState:
    """
    Compute the heliocentric ecliptic state of one body at a Julian date.

    Args:
        elements: Orbital elements at J2000.0 (degrees, AU, deg/day)
        julian_date: Time as a Julian date; fractional and pre-epoch values allowed
        tol: Kepler solver tolerance (radians)
        max_iter: Kepler solver iteration cap

    Returns:
        EclipticState with the unscaled position in AU.
    """
    elements = OrbitalElements(*(jnp.asarray(v, dtype=float) for v in elements))
    return _ecliptic_state(elements, jnp.asarray(julian_date, dtype=float), tol, max_iter)


def elements_to_positions(elements: jnp.ndarray, julian_date: float,
                          tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> EclipticState:
    """
    Compute ecliptic states for several bodies at once.

    Parameters
    ----------
    elements : jnp.ndarray
        An (n, 7) array with one row of elements per body, in the field
        order of OrbitalElements:
        - semi-major axis (AU)
        - eccentricity (unitless)
        - inclination (degrees)
        - longitude of the ascending node (degrees)
        - argument of perihelion (degrees)
        - mean anomaly at J2000.0 (degrees)
        - mean motion (degrees/day)
    julian_date : float
        The time at which the positions are requested.

    Returns
    -------
    EclipticState
        r has shape (n, 3); distance and the Kepler fields have shape (n,).
    """
    elements = jnp.asarray(elements, dtype=float)
    batch = OrbitalElements(*(elements[:, k] for k in range(len(OrbitalElements._fields))))
    return _ecliptic_state_vec(batch, jnp.asarray(julian_date, dtype=float), tol, max_iter)


def ecliptic_position(elements: OrbitalElements, julian_date: float) -> Vector3:
    """Unscaled heliocentric ecliptic position in AU."""
    x, y, z = (float(c) for c in ecliptic_state(elements, julian_date).r)
    return Vector3(x, y, z)


def to_display_frame(r, scale: float = DISPLAY_SCALE) -> Vector3:
    """
    Map an ecliptic position to the display frame.

    The display frame is y-up: the ecliptic z axis becomes the vertical y
    axis, and every component is multiplied by `scale`.
    """
    x, y, z = (float(c) for c in r)
    return Vector3(x, z, y).scaled(scale)


def elements_to_position(elements: OrbitalElements, julian_date: float,
                         scale: float = DISPLAY_SCALE) -> Vector3:
    """
    Position of a body in the display frame at a Julian date.

    Examples:
        >>> from orrery import planets_data
        >>> pos = elements_to_position(planets_data['earth'].elements, 2451545.0)
        >>> 0.98 < pos.magnitude() / 2.0 < 1.02
        True
    """
    return to_display_frame(ecliptic_state(elements, julian_date).r, scale)
