"""Tests for the planet table and its validation."""
import csv
import unittest
from pathlib import Path
import tempfile

from pydantic import ValidationError

from orrery.orbital_elements import OrbitalElements
from orrery.planets import Planet, PhysicalProperties, load_planets_data, planets_data

PLANET_NAMES = ['Mercury', 'Venus', 'Earth', 'Mars', 'Jupiter', 'Saturn', 'Uranus', 'Neptune']
BUNDLED_CSV = Path(__file__).parents[1] / 'data' / 'planets.csv'


def _physical(**overrides):
    values = dict(radius=1.0, color='#6b93d6', orbit_radius=1.0, axial_tilt=23.4, day_length=24.0,
                  year_length=365.25, temperature=288.0, moons=1, mass=1.0, density=5.514)
    values.update(overrides)
    return values


class TestPlanetTable(unittest.TestCase):

    def test_order_and_ids(self):
        self.assertEqual([p.name for p in planets_data.values()], PLANET_NAMES)
        self.assertEqual(list(planets_data), [name.lower() for name in PLANET_NAMES])
        self.assertEqual([p.id for p in planets_data.values()], list(range(1, 9)))

    def test_earth_row(self):
        earth = planets_data['earth']
        self.assertEqual(earth.elements, OrbitalElements(1.000001, 0.016709, 0.0, 0.0, 102.937, 100.464, 0.9856))
        self.assertEqual(earth.physical.year_length, 365.25)
        self.assertEqual(earth.physical.moons, 1)
        self.assertEqual(earth.physical.radius, 1.0)

    def test_colors_are_hex(self):
        for planet in planets_data.values():
            self.assertRegex(planet.physical.color, r'^#[0-9a-f]{6}$')

    def test_orbit_radius_increases_outward(self):
        radii = [p.physical.orbit_radius for p in planets_data.values()]
        self.assertEqual(radii, sorted(radii))

    def test_elements_are_closed_prograde_orbits(self):
        for planet in planets_data.values():
            el = planet.elements
            self.assertGreater(el.a, 0.0)
            self.assertTrue(0.0 <= el.e < 1.0)
            self.assertGreater(el.n, 0.0)

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            planets_data['pluto'] = planets_data['neptune']
        with self.assertRaises(ValidationError):
            planets_data['earth'].name = 'Terra'
        with self.assertRaises(ValidationError):
            planets_data['earth'].physical.moons = 2

    def test_get_period(self):
        mercury = planets_data['mercury']
        self.assertAlmostEqual(mercury.get_period(), 360.0 / 4.0923)
        self.assertAlmostEqual(mercury.get_period('year'), 360.0 / 4.0923 / 365.25)
        with self.assertRaises(ValueError):
            mercury.get_period('fortnight')

    def test_get_position_frames(self):
        mars = planets_data['mars']
        disp = mars.get_position(2451545.0)
        ecl = mars.get_position(2451545.0, frame='ecliptic')
        self.assertAlmostEqual(disp.x, 2.0 * ecl.x, places=14)
        self.assertAlmostEqual(disp.y, 2.0 * ecl.z, places=14)
        self.assertAlmostEqual(disp.z, 2.0 * ecl.y, places=14)
        unit = mars.get_position(2451545.0, scale=1.0)
        self.assertAlmostEqual(unit.magnitude(), ecl.magnitude(), places=14)
        with self.assertRaises(ValueError):
            mars.get_position(2451545.0, frame='galactic')


class TestPlanetValidation(unittest.TestCase):

    def _elements(self, **overrides):
        values = dict(a=1.0, e=0.1, i=0.0, Omega=0.0, omega=0.0, M0=0.0, n=1.0)
        values.update(overrides)
        return OrbitalElements(**values)

    def test_valid_planet(self):
        planet = Planet(id=9, name='Test', elements=self._elements(), physical=_physical())
        self.assertEqual(planet.key, 'test')
        self.assertEqual(str(planet), 'Test (ID: 9)')

    def test_eccentricity_must_be_elliptic(self):
        for e in (1.0, 1.5, -0.1):
            with self.assertRaises(ValidationError) as cm:
                Planet(id=9, name='Test', elements=self._elements(e=e), physical=_physical())
            self.assertIn("eccentricity must satisfy 0 <= e < 1", str(cm.exception))

    def test_semi_major_axis_and_mean_motion_positive(self):
        with self.assertRaises(ValidationError):
            Planet(id=9, name='Test', elements=self._elements(a=0.0), physical=_physical())
        with self.assertRaises(ValidationError):
            Planet(id=9, name='Test', elements=self._elements(n=-0.5), physical=_physical())

    def test_physical_validation(self):
        with self.assertRaises(ValidationError):
            PhysicalProperties(**_physical(color='blue'))
        with self.assertRaises(ValidationError):
            PhysicalProperties(**_physical(moons=-1))
        with self.assertRaises(ValidationError):
            PhysicalProperties(**_physical(year_length=0.0))


class TestLoadPlanetsData(unittest.TestCase):

    def setUp(self):
        with open(BUNDLED_CSV, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            self.fieldnames = reader.fieldnames
            self.rows = list(reader)
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, rows, fieldnames=None):
        path = Path(self.tmpdir.name) / 'planets.csv'
        fieldnames = fieldnames or self.fieldnames
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
            writer.writeheader()
            writer.writerows(rows)
        return path

    def test_load_subset(self):
        path = self._write(self.rows[2:4])
        planets = load_planets_data(path)
        self.assertEqual(list(planets), ['earth', 'mars'])
        self.assertEqual(planets['mars'], planets_data['mars'])

    def test_duplicate_name(self):
        path = self._write([self.rows[0], self.rows[0]])
        with self.assertRaises(ValueError) as cm:
            load_planets_data(path)
        self.assertIn("duplicate planet 'Mercury'", str(cm.exception))

    def test_missing_column(self):
        fieldnames = [name for name in self.fieldnames if name != 'Mean Motion (deg/day)']
        path = self._write(self.rows, fieldnames)
        with self.assertRaises(ValueError) as cm:
            load_planets_data(path)
        self.assertIn('Mean Motion (deg/day)', str(cm.exception))

    def test_short_row(self):
        """A row cut off before its last fields is reported with its line number."""
        path = Path(self.tmpdir.name) / 'short.csv'
        with open(BUNDLED_CSV, 'r', encoding='utf-8') as f:
            header, mercury = f.readline(), f.readline()
        truncated = ','.join(mercury.rstrip('\n').split(',')[:-3])
        path.write_text(header + truncated + '\n', encoding='utf-8')
        with self.assertRaises(ValueError) as cm:
            load_planets_data(path)
        self.assertIn(':2: row is missing values for', str(cm.exception))
        self.assertIn(self.fieldnames[-1], str(cm.exception))

    def test_invalid_row(self):
        rows = [dict(self.rows[0], **{'Eccentricity ()': '1.2'})]
        path = self._write(rows)
        with self.assertRaises(ValidationError):
            load_planets_data(path)


if __name__ == '__main__':
    unittest.main()
