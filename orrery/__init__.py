# Configure JAX to use double precision (64-bit floats) throughout the package
import jax
jax.config.update("jax_enable_x64", True)

from .orbital_elements import OrbitalElements
from .vector3 import Vector3

from .constants import (
    # Constants
    J2000_JD,
    UNIX_EPOCH_JD,
    DAY,
    DAYS_PER_YEAR,
    EARTH_YEAR_DAYS,
    DISPLAY_SCALE,
    KEPLER_TOL,
    KEPLER_MAX_ITER,
)

from .kepler import (
    # Kepler solver
    KeplerSolution,
    KeplerConvergenceError,
    solve_kepler,
    solve_kepler_vec,
    eccentric_anomaly,
)

from .ephemeris import (
    # Position transform
    EclipticState,
    mean_anomaly,
    true_anomaly,
    ecliptic_state,
    ecliptic_position,
    elements_to_positions,
    elements_to_position,
    to_display_frame,
)

from .planets import (
    # Planet table
    Planet,
    PhysicalProperties,
    load_planets_data,
    planets_data,
)

from .state import (
    # Assembler
    PlanetState,
    planet_positions,
    get_planet_state,
)

__all__ = [
    # Constants
    "J2000_JD",
    "UNIX_EPOCH_JD",
    "DAY",
    "DAYS_PER_YEAR",
    "EARTH_YEAR_DAYS",
    "DISPLAY_SCALE",
    "KEPLER_TOL",
    "KEPLER_MAX_ITER",

    # Named tuples
    "OrbitalElements",
    "Vector3",
    "KeplerSolution",
    "EclipticState",

    # Kepler solver
    "KeplerConvergenceError",
    "solve_kepler",
    "solve_kepler_vec",
    "eccentric_anomaly",

    # Position transform
    "mean_anomaly",
    "true_anomaly",
    "ecliptic_state",
    "ecliptic_position",
    "elements_to_positions",
    "elements_to_position",
    "to_display_frame",

    # Planets
    "Planet",
    "PhysicalProperties",
    "load_planets_data",
    "planets_data",

    # Planet states
    "PlanetState",
    "planet_positions",
    "get_planet_state",
]
