"""End-of-drive summary and driver behaviour classification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from drive_engine.core.telemetry import SampleRecord

# Thresholds for the four behaviour checks.
ECO_MILEAGE_KMPL: float = 15.0
ECO_AVG_SPEED_KMPH: float = 60.0
ECO_AVG_RPM: float = 2500.0
ECO_AVG_TORQUE_NM: float = 80.0

ECO_FRIENDLY: str = "Eco-friendly Driver"
MODERATE: str = "Moderate Driver"
AGGRESSIVE: str = "Aggressive Driver"


@dataclass(frozen=True)
class DriveReport:
    """Aggregate statistics for a completed drive.

    Attributes:
        total_time: Simulated time of the last tick in seconds.
        total_distance_km: Distance covered in km.
        fuel_used: Fuel consumed in litres.
        avg_speed: Mean road speed in km/h.
        avg_rpm: Mean engine speed.
        avg_torque: Mean torque in N*m.
        overall_mileage: Distance over fuel for the whole drive, km/l.
        max_mileage: Highest instantaneous mileage seen, km/l.
        min_mileage: Lowest instantaneous mileage seen, km/l.
        behavior_score: Number of eco checks passed (0-4).
        behavior: Driver behaviour label.
        terrain: Terrain driven on, if known.
        style: Driving style used, if known.
    """

    total_time: float
    total_distance_km: float
    fuel_used: float
    avg_speed: float
    avg_rpm: float
    avg_torque: float
    overall_mileage: float
    max_mileage: float
    min_mileage: float
    behavior_score: int
    behavior: str
    terrain: str = ""
    style: str = ""


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def behavior_score(
    overall_mileage: float,
    avg_speed: float,
    avg_rpm: float,
    avg_torque: float,
) -> int:
    """Count how many of the four eco-driving checks pass."""
    checks = (
        overall_mileage >= ECO_MILEAGE_KMPL,
        avg_speed < ECO_AVG_SPEED_KMPH,
        avg_rpm < ECO_AVG_RPM,
        avg_torque < ECO_AVG_TORQUE_NM,
    )
    return sum(1 for passed in checks if passed)


def classify_behavior(score: int) -> str:
    """Map a behaviour score to its label."""
    if score >= 3:
        return ECO_FRIENDLY
    if score == 2:
        return MODERATE
    return AGGRESSIVE


def summarize(
    samples: Sequence[SampleRecord],
    total_distance_m: float,
    fuel_used: float,
    total_time: float,
    terrain: str = "",
    style: str = "",
) -> DriveReport:
    """Aggregate a drive's samples into a :class:`DriveReport`.

    An empty sample sequence yields zero means and zero max/min mileage.
    Overall mileage is zero when no fuel was used.

    Args:
        samples: Ordered per-tick telemetry.
        total_distance_m: Total distance covered in metres.
        fuel_used: Total fuel consumed in litres.
        total_time: Elapsed simulated time of the last tick in seconds.
        terrain: Optional terrain label carried into the report.
        style: Optional style label carried into the report.
    """
    mileages = [s.mileage for s in samples]
    avg_speed = _mean([s.speed_kmph for s in samples])
    avg_rpm = _mean([s.rpm for s in samples])
    avg_torque = _mean([s.torque for s in samples])

    total_distance_km = total_distance_m / 1000.0
    overall_mileage = total_distance_km / fuel_used if fuel_used > 0.0 else 0.0

    score = behavior_score(overall_mileage, avg_speed, avg_rpm, avg_torque)

    return DriveReport(
        total_time=total_time,
        total_distance_km=total_distance_km,
        fuel_used=fuel_used,
        avg_speed=avg_speed,
        avg_rpm=avg_rpm,
        avg_torque=avg_torque,
        overall_mileage=overall_mileage,
        max_mileage=max(mileages, default=0.0),
        min_mileage=min(mileages, default=0.0),
        behavior_score=score,
        behavior=classify_behavior(score),
        terrain=terrain,
        style=style,
    )
