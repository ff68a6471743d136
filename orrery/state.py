"""
Planet state records and the assembler that produces them.
"""
import logging
from typing import List, Mapping

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from orrery.constants import DISPLAY_SCALE, EARTH_YEAR_DAYS, KEPLER_TOL, KEPLER_MAX_ITER
from orrery.ephemeris import elements_to_positions, to_display_frame
from orrery.kepler import KeplerConvergenceError
from orrery.planets import Planet, planets_data
from orrery.vector3 import Vector3

logger = logging.getLogger(__name__)


def _to_camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(word.title() for word in rest)


class PlanetState(BaseModel):
    """
    Position and properties of one planet at one instant.

    Serializing with ``by_alias=True`` gives the camelCase record shape
    expected by visualization hosts (orbitRadius, axialTilt, ...).
    """
    model_config = ConfigDict(frozen=True, alias_generator=_to_camel, populate_by_name=True)

    name: str
    position: Vector3 = Field(..., description="Display-frame position (y-up, scene units)")
    radius: float
    color: str
    orbit_radius: float
    axial_tilt: float
    day_length: float
    year_length: float
    temperature: float
    moons: int = Field(..., ge=0)
    mass: float
    density: float
    orbit_speed: float = Field(..., description="Orbital angular rate relative to Earth's")
    distance_from_sun: float = Field(..., description="Heliocentric distance in AU")

    def to_dict(self) -> dict:
        """Plain dict in the host record shape, position as {x, y, z}."""
        data = self.model_dump(by_alias=True)
        data['position'] = self.position._asdict()
        return data


def _elements_table(planets: Mapping[str, Planet]) -> np.ndarray:
    return np.array([tuple(p.elements) for p in planets.values()], dtype=float)


def planet_positions(julian_date: float, *, planets: Mapping[str, Planet] = planets_data,
                     scale: float = DISPLAY_SCALE, strict: bool = False,
                     tol: float = KEPLER_TOL, max_iter: int = KEPLER_MAX_ITER) -> List[PlanetState]:
    """
    Compute the state of every planet at a Julian date.

    Args:
        julian_date: Time as a Julian date (fractional and pre-epoch values allowed)
        planets: Planet table to use (default: the built-in eight planets)
        scale: Scene units per AU of the display frame
        strict: Raise KeplerConvergenceError if any Kepler solve hit the iteration cap
        tol: Kepler solver tolerance (radians)
        max_iter: Kepler solver iteration cap

    Returns:
        One PlanetState per table row, in table order (Mercury to Neptune for
        the built-in table).

    Raises:
        KeplerConvergenceError: only when `strict` is set

    Note:
        Non-finite Julian dates are not rejected; they give non-finite positions.
    """
    rows = list(planets.values())
    if not rows:
        return []

    result = elements_to_positions(_elements_table(planets), julian_date, tol, max_iter)
    r = np.asarray(result.r)
    distance = np.asarray(result.distance)
    converged = np.asarray(result.kepler.converged)

    if not converged.all():
        unconverged = [p.name for p, ok in zip(rows, converged) if not ok]
        if strict:
            raise KeplerConvergenceError(
                f"Kepler's equation did not converge within {max_iter} iterations "
                f"at JD {julian_date} for: {', '.join(unconverged)}"
            )
        logger.debug("Kepler iteration cap reached at JD %s for %s; using best estimate",
                     julian_date, unconverged)

    states = []
    for k, planet in enumerate(rows):
        phys = planet.physical
        states.append(PlanetState(
            name=planet.name,
            position=to_display_frame(r[k], scale),
            radius=phys.radius,
            color=phys.color,
            orbit_radius=phys.orbit_radius,
            axial_tilt=phys.axial_tilt,
            day_length=phys.day_length,
            year_length=phys.year_length,
            temperature=phys.temperature,
            moons=phys.moons,
            mass=phys.mass,
            density=phys.density,
            orbit_speed=EARTH_YEAR_DAYS / phys.year_length,
            distance_from_sun=float(distance[k]),
        ))

    return states


def get_planet_state(name: str, julian_date: float, *, planets: Mapping[str, Planet] = planets_data,
                     scale: float = DISPLAY_SCALE, strict: bool = False) -> PlanetState:
    """
    State of a single planet, looked up by name (case-insensitive).

    Raises:
        KeyError: if the planet is not in the table
    """
    key = name.lower()
    if key not in planets:
        raise KeyError(f"Unknown planet '{name}'. Must be one of: {', '.join(planets)}")
    return planet_positions(julian_date, planets={key: planets[key]}, scale=scale, strict=strict)[0]
