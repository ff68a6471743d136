"""Tests for the python -m orrery command line."""
import json
import unittest
from contextlib import redirect_stdout
from io import StringIO

from orrery.__main__ import main
from orrery.constants import J2000_JD


def run_cli(*argv):
    output = StringIO()
    with redirect_stdout(output):
        main(list(argv))
    return output.getvalue()


class TestCLI(unittest.TestCase):

    def test_positions_table(self):
        result = run_cli('positions')
        self.assertIn("# JD 2451545.000000 (2000-01-01)", result)
        lines = [l for l in result.splitlines() if l and not l.startswith('#')]
        # Header plus one row per planet
        self.assertEqual(len(lines), 9)
        self.assertTrue(lines[1].startswith('Mercury'))
        self.assertTrue(lines[-1].startswith('Neptune'))

    def test_positions_json(self):
        payload = json.loads(run_cli('positions', '--jd', '2460310.5', '--format', 'json'))
        self.assertEqual(payload['julianDate'], 2460310.5)
        self.assertEqual(payload['date'], '2024-01-01')
        self.assertEqual(payload['scale'], 2.0)
        self.assertEqual(len(payload['planets']), 8)
        earth = payload['planets'][2]
        self.assertEqual(earth['name'], 'Earth')
        self.assertEqual(earth['orbitSpeed'], 1.0)
        self.assertEqual(set(earth['position']), {'x', 'y', 'z'})

    def test_positions_from_date_and_years(self):
        by_date = json.loads(run_cli('positions', '--date', '2000-01-01T12:00:00Z', '--format', 'json'))
        by_years = json.loads(run_cli('positions', '--years', '0', '--format', 'json'))
        self.assertEqual(by_date['julianDate'], J2000_JD)
        self.assertEqual(by_years['julianDate'], J2000_JD)
        self.assertEqual(by_date['planets'], by_years['planets'])

    def test_unscaled(self):
        scaled = json.loads(run_cli('positions', '--format', 'json'))
        unscaled = json.loads(run_cli('positions', '--unscaled', '--format', 'json'))
        self.assertEqual(unscaled['scale'], 1.0)
        for a, b in zip(scaled['planets'], unscaled['planets']):
            self.assertAlmostEqual(a['position']['x'], 2.0 * b['position']['x'], places=12)

    def test_elements(self):
        result = run_cli('elements')
        self.assertIn('Jupiter', result)
        self.assertIn('5.204267', result)

    def test_invalid_arguments(self):
        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit):
                main(['positions', '--date', 'yesterday'])
            with self.assertRaises(SystemExit):
                main(['positions', '--jd', '2451545.0', '--years', '1'])
            with self.assertRaises(SystemExit):
                main([])


if __name__ == '__main__':
    unittest.main()
