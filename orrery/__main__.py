"""
Command-line interface for the orrery engine.

Usage:
    # Planet states at the J2000.0 epoch
    python -m orrery positions

    # At a calendar date, as JSON
    python -m orrery positions --date 2024-03-20T03:06 --format json

    # Print the orbital element table
    python -m orrery elements
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from orrery.constants import DISPLAY_SCALE, J2000_JD
from orrery.kepler import KeplerConvergenceError
from orrery.planets import load_planets_data, planets_data
from orrery.state import planet_positions
from orrery.time_utils import datetime_to_jd, jd_to_date_string, year_offset_to_jd


def iso_datetime(value):
    """Parse an ISO-8601 date or date-time; a trailing 'Z' means UTC."""
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected ISO-8601 (YYYY-MM-DD[THH:MM[:SS]])")


def _setup_positions_parser(subparsers):
    """
    Set up the positions subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured positions parser
    """
    positions_parser = subparsers.add_parser(
        'positions',
        help='Compute the state of every planet at one instant',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Julian date
  python -m orrery positions --jd 2460000.5

  # Ten years after J2000.0, unscaled ecliptic coordinates
  python -m orrery positions --years 10 --unscaled
"""
    )

    time_group = positions_parser.add_mutually_exclusive_group()
    time_group.add_argument(
        '--jd',
        type=float,
        help=f'Julian date (default: {J2000_JD}, the J2000.0 epoch)'
    )
    time_group.add_argument(
        '--date', '-d',
        type=iso_datetime,
        help='UTC calendar date, ISO-8601'
    )
    time_group.add_argument(
        '--years', '-y',
        type=float,
        help='Julian years after J2000.0 (negative for earlier)'
    )

    positions_parser.add_argument(
        '--format', '-f',
        choices=('table', 'json'),
        default='table',
        help='Output format (default: table)'
    )
    positions_parser.add_argument(
        '--unscaled',
        action='store_true',
        help=f'Report positions in AU instead of scene units (scale {DISPLAY_SCALE})'
    )
    positions_parser.add_argument(
        '--strict',
        action='store_true',
        help="Fail if Kepler's equation does not converge for some planet"
    )
    positions_parser.add_argument(
        '--planets-file',
        type=str,
        default=None,
        help='CSV planet table to use instead of the built-in one'
    )
    return positions_parser


def _setup_elements_parser(subparsers):
    elements_parser = subparsers.add_parser(
        'elements',
        help='Print the orbital element table',
    )
    elements_parser.add_argument(
        '--planets-file',
        type=str,
        default=None,
        help='CSV planet table to use instead of the built-in one'
    )
    return elements_parser


def _resolve_jd(args):
    if args.jd is not None:
        return args.jd
    if args.date is not None:
        return datetime_to_jd(args.date)
    if args.years is not None:
        return year_offset_to_jd(args.years)
    return J2000_JD


def _load_table(args):
    if args.planets_file is None:
        return planets_data
    return load_planets_data(args.planets_file)


def run_positions(args, stream=None):
    stream = stream or sys.stdout
    jd = _resolve_jd(args)
    scale = 1.0 if args.unscaled else DISPLAY_SCALE
    states = planet_positions(jd, planets=_load_table(args), scale=scale, strict=args.strict)

    if args.format == 'json':
        payload = {
            'julianDate': jd,
            'date': jd_to_date_string(jd),
            'scale': scale,
            'planets': [s.to_dict() for s in states],
        }
        json.dump(payload, stream, indent=2)
        stream.write('\n')
        return

    stream.write(f"# JD {jd:.6f} ({jd_to_date_string(jd)}), scale {scale:g} per AU, y-up\n")
    stream.write(f"{'Planet':<8} {'x':>12} {'y':>12} {'z':>12} {'r (AU)':>10} {'speed':>8}\n")
    for s in states:
        stream.write(
            f"{s.name:<8} {s.position.x:12.6f} {s.position.y:12.6f} {s.position.z:12.6f} "
            f"{s.distance_from_sun:10.6f} {s.orbit_speed:8.4f}\n"
        )


def run_elements(args, stream=None):
    stream = stream or sys.stdout
    stream.write(f"{'Planet':<8} {'a (AU)':>10} {'e':>9} {'i':>8} {'Omega':>9} "
                 f"{'omega':>9} {'M0':>9} {'n (deg/d)':>10} {'P (d)':>10}\n")
    for planet in _load_table(args).values():
        el = planet.elements
        stream.write(
            f"{planet.name:<8} {el.a:10.6f} {el.e:9.6f} {el.i:8.3f} {el.Omega:9.3f} "
            f"{el.omega:9.3f} {el.M0:9.3f} {el.n:10.4f} {el.period:10.2f}\n"
        )


def main(argv=None):
    """Main entry point for the orrery CLI."""
    parser = argparse.ArgumentParser(
        description="Orrery - heliocentric planet positions from Keplerian elements",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    # Create subparsers for different commands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.required = True

    # Set up subcommand parsers
    _setup_positions_parser(subparsers)
    _setup_elements_parser(subparsers)

    # Parse arguments
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    # Route to appropriate command handler
    try:
        if args.command == 'positions':
            run_positions(args)

        elif args.command == 'elements':
            run_elements(args)
    except KeplerConvergenceError as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == '__main__':
    main()
