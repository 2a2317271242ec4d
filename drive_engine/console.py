"""Interactive console front end for the fuel simulation engine.

Prompts for terrain and driving style (or takes them from the command
line), prints one telemetry line per tick with an optional real-time delay
between ticks, and finishes with the driving report.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from drive_engine import __version__
from drive_engine.config import load_presets
from drive_engine.core.configuration import (
    InvalidTerrainError,
    configure,
    require_terrain,
)
from drive_engine.core.preset import PresetTable
from drive_engine.core.report import DriveReport
from drive_engine.core.stepper import SimulationStepper
from drive_engine.core.telemetry import SampleRecord

logger = logging.getLogger(__name__)

DEFAULT_DELAY: float = 0.05  # seconds of wall-clock time between ticks

_RULE: str = "-" * 48


def format_sample(sample: SampleRecord) -> str:
    """Render one tick as a trace line."""
    return (
        f"[t={sample.t:.2f}s] "
        f"RPM={sample.rpm:.2f}, "
        f"Speed={sample.speed_kmph:.2f} km/h, "
        f"Torque={sample.torque:.2f} Nm, "
        f"Mileage={sample.mileage:.2f} km/l, "
        f"FuelLeft={sample.fuel_left:.2f} L, "
        f"RangeLeft={sample.range_left:.2f} km"
    )


def format_report(report: DriveReport) -> str:
    """Render the final driving report block."""
    lines = [
        "FINAL DRIVING REPORT",
        f"{'Terrain:':<20}{report.terrain}",
        f"{'Style:':<20}{report.style}",
        f"{'Total Time:':<20}{report.total_time:.2f} seconds",
        f"{'Total Distance:':<20}{report.total_distance_km:.2f} km",
        f"{'Fuel Consumed:':<20}{report.fuel_used:.2f} L",
        f"{'Average Speed:':<20}{report.avg_speed:.2f} km/h",
        f"{'Average RPM:':<20}{report.avg_rpm:.2f}",
        f"{'Average Torque:':<20}{report.avg_torque:.2f} Nm",
        f"{'Overall Mileage:':<20}{report.overall_mileage:.2f} km/l",
        f"{'Max Mileage:':<20}{report.max_mileage:.2f} km/l",
        f"{'Min Mileage:':<20}{report.min_mileage:.2f} km/l",
        f"{'Driver Behavior:':<20}{report.behavior}",
        _RULE,
    ]
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drive-fuel-sim",
        description="Simulate a drive until the tank runs dry and report "
        "fuel economy and driver behaviour.",
    )
    parser.add_argument("--terrain", help="hill, plain or downward")
    parser.add_argument("--style", help="conservative, moderate or aggressive")
    parser.add_argument("--seed", type=int, default=None, help="noise seed")
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY,
        help=f"seconds to pause between ticks (default {DEFAULT_DELAY})",
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="run as fast as possible",
    )
    parser.add_argument(
        "--presets",
        type=Path,
        default=None,
        help="YAML file with terrain and style presets",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="print only the final report",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _read_terrain(arg: str | None, presets: PresetTable) -> str:
    options = "/".join(presets.speed_limits)
    terrain = arg if arg is not None else input(f"Enter terrain type ({options}): ")
    terrain = terrain.strip()
    require_terrain(terrain, presets)
    return terrain


def _read_style(arg: str | None, presets: PresetTable) -> str:
    options = "/".join(presets.styles)
    style = arg if arg is not None else input(f"Enter driving style ({options}): ")
    return style.strip()


def main(argv: list[str] | None = None) -> int:
    """Run one interactive drive and return the process exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    presets = load_presets(args.presets)

    try:
        terrain = _read_terrain(args.terrain, presets)
        style = _read_style(args.style, presets)
        config = configure(terrain, style, presets)
    except InvalidTerrainError as exc:
        logger.debug("%s", exc)
        print("Invalid terrain. Exiting.", file=sys.stderr)
        return 1

    if config.style_fallback:
        print(f"Invalid style. Using '{config.style}'...")

    delay: float = 0.0 if args.no_delay else max(args.delay, 0.0)
    stepper = SimulationStepper(config, seed=args.seed)

    print(
        f"\nSimulation Start on {config.terrain} terrain "
        f"as a {config.style} driver...\n"
    )
    for sample in stepper:
        if not args.quiet:
            print(format_sample(sample))
        if delay > 0.0:
            time.sleep(delay)

    print()
    print(format_report(stepper.report()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
