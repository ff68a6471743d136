"""
Physical, time and display constants for the orrery engine.

This module contains the constants shared by the Kepler solver, the position
transform and the planet state assembler.
"""

# Time constants
J2000_JD = 2451545.0  # Julian date of the J2000.0 epoch (2000 Jan 1 12:00 TT)
UNIX_EPOCH_JD = 2440587.5  # Julian date of 1970 Jan 1 00:00 UTC
DAY = 86400.0  # seconds per day
DAYS_PER_YEAR = 365.25  # Julian year in days
EARTH_YEAR_DAYS = 365.25  # reference for the relative orbit speed

# Display frame
DISPLAY_SCALE = 2.0  # scene units per AU

# Kepler solver defaults
KEPLER_TOL = 1e-12  # rad, stop once the Newton correction is smaller than this
KEPLER_MAX_ITER = 10
KEPLER_HIGH_ECC = 0.8  # start Newton from pi at or above this eccentricity
