import csv
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import pydantic
from pydantic import ConfigDict, Field, field_validator

from orrery.orbital_elements import OrbitalElements
from orrery.vector3 import Vector3

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


class PhysicalProperties(pydantic.BaseModel):
    """
    Static display and physical data of a planet.

    These are pass-through values: they are looked up, never computed.

    Attributes:
        radius: Radius relative to Earth
        color: Display color as '#rrggbb'
        orbit_radius: Nominal orbit radius (AU, display units)
        axial_tilt: Obliquity (degrees)
        day_length: Rotation period (hours)
        year_length: Orbital period (Earth days)
        temperature: Mean temperature (K)
        moons: Number of known moons
        mass: Mass relative to Earth
        density: Mean density (g/cm^3)
    """
    model_config = ConfigDict(frozen=True)

    radius: float = Field(..., gt=0.0)
    color: str
    orbit_radius: float = Field(..., gt=0.0)
    axial_tilt: float
    day_length: float
    year_length: float = Field(..., gt=0.0)
    temperature: float
    moons: int = Field(..., ge=0)
    mass: float = Field(..., gt=0.0)
    density: float = Field(..., gt=0.0)

    @field_validator('color')
    @classmethod
    def validate_color(cls, v):
        if not _HEX_COLOR.match(v):
            raise ValueError(f"color must be a '#rrggbb' hex string, got {v!r}")
        return v


class Planet(pydantic.BaseModel):
    """
    One row of the planet table: orbital elements and physical data together.

    Attributes:
        id: Identifier, 1 (Mercury) to 8 (Neptune) for the built-in table
        name: Name of the planet (e.g., "Earth")
        elements: Orbital elements at J2000.0
        physical: Static physical properties
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0)
    name: str
    elements: OrbitalElements
    physical: PhysicalProperties

    @field_validator('elements')
    @classmethod
    def validate_elements(cls, v):
        if not v.a > 0.0:
            raise ValueError("semi-major axis must be positive")
        if not 0.0 <= v.e < 1.0:
            raise ValueError("eccentricity must satisfy 0 <= e < 1")
        if not v.n > 0.0:
            raise ValueError("mean motion must be positive")
        return v

    @property
    def key(self) -> str:
        return self.name.lower()

    def get_position(self, julian_date: float, frame: str = 'display',
                     scale: float | None = None) -> Vector3:
        """
        Get the heliocentric position of the planet at a Julian date.

        Args:
            julian_date: Time as a Julian date
            frame: Output frame. Options:
                - 'display': y-up frame scaled by `scale` (default)
                - 'ecliptic': ecliptic frame in AU, `scale` ignored
            scale: Scene units per AU for the display frame (default 2.0)

        Returns:
            Vector3 position

        Examples:
            >>> earth = planets_data['earth']
            >>> pos = earth.get_position(2451545.0)
            >>> pos_au = earth.get_position(2451545.0, frame='ecliptic')
        """
        from orrery.constants import DISPLAY_SCALE
        from orrery.ephemeris import ecliptic_state, to_display_frame

        state = ecliptic_state(self.elements, julian_date)
        if frame == 'display':
            return to_display_frame(state.r, DISPLAY_SCALE if scale is None else scale)
        elif frame == 'ecliptic':
            x, y, z = (float(c) for c in state.r)
            return Vector3(x, y, z)
        else:
            raise ValueError(f"Invalid frame '{frame}'. Must be one of: 'display', 'ecliptic'")

    def get_period(self, units: str = 'day') -> float:
        """
        Orbital period implied by the mean motion.

        Args:
            units: 'day' or 'days' (default), 'year' or 'years' (Julian years)

        Returns:
            Orbital period in the specified units
        """
        from orrery.constants import DAYS_PER_YEAR

        period_days = self.elements.period

        units_lower = units.lower()
        if units_lower in ('day', 'days', 'd'):
            return period_days
        elif units_lower in ('year', 'years'):
            return period_days / DAYS_PER_YEAR
        else:
            raise ValueError(f"Invalid units '{units}'. Must be one of: 'day', 'year'")

    def __repr__(self) -> str:
        return f"Planet(id={self.id}, name='{self.name}')"

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id})"


def _parse_planet_row(row: dict) -> Planet:
    elements = OrbitalElements(
        a=float(row['Semi-Major Axis (AU)']),
        e=float(row['Eccentricity ()']),
        i=float(row['Inclination (deg)']),
        Omega=float(row['Longitude of the Ascending Node (deg)']),
        omega=float(row['Argument of Perihelion (deg)']),
        M0=float(row['Mean Anomaly at J2000 (deg)']),
        n=float(row['Mean Motion (deg/day)']),
    )
    physical = PhysicalProperties(
        radius=float(row['Radius (Earth=1)']),
        color=row['Color'].strip(),
        orbit_radius=float(row['Orbit Radius (AU)']),
        axial_tilt=float(row['Axial Tilt (deg)']),
        day_length=float(row['Day Length (h)']),
        year_length=float(row['Year Length (d)']),
        temperature=float(row['Temperature (K)']),
        moons=int(row['Moons']),
        mass=float(row['Mass (Earth=1)']),
        density=float(row['Density (g/cm3)']),
    )
    return Planet(
        id=int(row['#Planet ID']),
        name=row['Name'].strip(),
        elements=elements,
        physical=physical,
    )


def load_planets_data(path: str | Path | None = None) -> Mapping[str, Planet]:
    """
    Load the planet table from a CSV file.

    Args:
        path: CSV file with the same columns as the bundled table.
              Defaults to the bundled eight-planet table.

    Returns:
        Read-only mapping from lower-case planet name to Planet, in file order.

    Raises:
        ValueError: if a required column is missing, a row is short, or two
            rows share a name
        pydantic.ValidationError: if a row holds invalid values
    """
    if path is None:
        path = Path(__file__).parent / 'data' / 'planets.csv'
    path = Path(path)

    planets = {}
    with open(path, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            # DictReader fills the fields of a short row with None
            empty = [name for name in reader.fieldnames if row.get(name) is None]
            if empty:
                raise ValueError(f"{path}:{line_no}: row is missing values for {', '.join(empty)}")
            try:
                planet = _parse_planet_row(row)
            except KeyError as exc:
                raise ValueError(f"{path}:{line_no}: missing column {exc}") from exc
            if planet.key in planets:
                raise ValueError(f"{path}:{line_no}: duplicate planet '{planet.name}'")
            planets[planet.key] = planet

    logger.debug("Loaded %d planets from %s", len(planets), path)
    return MappingProxyType(planets)


planets_data = load_planets_data()
