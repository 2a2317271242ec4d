#!/usr/bin/env python
"""Batch run of every terrain/driving-style combination.

This script:

1. Loads the bundled terrain and style presets.
2. Runs one seeded drive per (terrain, style) pair with no real-time delay.
3. Saves the reports to ``results/style_sweep.json``.
4. Prints a summary table.

Usage
-----
::

    python scripts/run_style_sweep.py
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import asdict

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from drive_engine.config import load_presets  # noqa: E402
from drive_engine.core.configuration import configure  # noqa: E402
from drive_engine.core.report import DriveReport  # noqa: E402
from drive_engine.core.stepper import simulate  # noqa: E402

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

BASE_SEED: int = 2024
RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "style_sweep.json")


def run_sweep(base_seed: int = BASE_SEED) -> list[DriveReport]:
    """Simulate every terrain/style pair, one seed per pair."""
    presets = load_presets()
    reports: list[DriveReport] = []
    for i, terrain in enumerate(presets.speed_limits):
        for j, style in enumerate(presets.styles):
            seed = base_seed + i * len(presets.styles) + j
            reports.append(simulate(configure(terrain, style, presets), seed=seed))
    return reports


def main() -> None:
    """Run the sweep, save it and print a summary."""
    print("=" * 72)
    print("TERRAIN / DRIVING STYLE SWEEP")
    print("=" * 72)

    reports = run_sweep()

    os.makedirs(RESULTS_DIR, exist_ok=True)
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(
            {"base_seed": BASE_SEED, "reports": [asdict(r) for r in reports]},
            fh,
            indent=2,
            sort_keys=True,
        )
    print(f"Results saved to {OUTPUT_PATH}\n")

    print(
        f"  {'Terrain':<10} {'Style':<13} {'Time (s)':>9} {'Dist (km)':>10} "
        f"{'km/l':>6}  Behaviour"
    )
    for r in reports:
        print(
            f"  {r.terrain:<10} {r.style:<13} {r.total_time:9.1f} "
            f"{r.total_distance_km:10.3f} {r.overall_mileage:6.2f}  {r.behavior}"
        )


if __name__ == "__main__":
    main()
