"""Deterministic per-tick physics for the fuel simulation engine.

Every function here is pure: given the same inputs it returns the same
value and touches no simulation state.  Out-of-range results are clamped
rather than rejected so that a run degrades gracefully at the extremes
(engine idle, near-empty tank).
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TICK_SECONDS: float = 0.1  # simulated seconds per tick
FUEL_CAPACITY_L: float = 0.4  # litres in the tank at the start of a run
FUEL_RESERVE_L: float = 0.01  # run stops once remaining fuel drops to this
MAX_TORQUE_NM: float = 145.0
TORQUE_SATURATION_RPM: float = 5000.0  # torque is flat at MAX_TORQUE_NM above this
MIN_MILEAGE_KMPL: float = 5.0
MAX_MILEAGE_KMPL: float = 25.0
EFFICIENCY_EXPONENT: float = 1.2
KMPH_PER_MPS: float = 3.6


def clamp(value: float, lower: float, upper: float) -> float:
    """Return *value* limited to the closed interval [lower, upper]."""
    return max(lower, min(value, upper))


def throttle(t: float, max_throttle: float, ramp_time: float) -> float:
    """Throttle demand after *t* seconds of driving.

    An exponential ramp towards ``max_throttle``::

        throttle = max_throttle * (1 - exp(-t / ramp_time))

    Args:
        t: Elapsed simulated time in seconds (>= 0).
        max_throttle: Asymptotic throttle target in RPM units.
        ramp_time: Time constant of the ramp in seconds (> 0).

    Returns:
        Throttle demand in RPM units, in ``[0, max_throttle)``.

    Raises:
        ValueError: If t < 0 or ramp_time <= 0.
    """
    if t < 0.0:
        raise ValueError("t must be >= 0.")
    if ramp_time <= 0.0:
        raise ValueError("ramp_time must be > 0.")
    return max_throttle * (1.0 - math.exp(-t / ramp_time))


def engine_rpm(throttle_rpm: float, noise: float, max_rpm: float) -> float:
    """Engine speed from throttle demand plus noise, clamped to [0, max_rpm]."""
    return clamp(throttle_rpm + noise, 0.0, max_rpm)


def road_speed_kmph(
    rpm: float,
    max_rpm: float,
    speed_limit: float,
    speed_factor: float,
) -> float:
    """Road speed in km/h for a given engine speed.

    The RPM fraction of ``max_rpm`` is scaled by the terrain speed limit and
    the style's speed factor, then clamped to ``[0, speed_limit]``.
    """
    return clamp((rpm / max_rpm) * speed_limit * speed_factor, 0.0, speed_limit)


def torque_at(rpm: float) -> float:
    """Engine torque in N*m.

    Linear from 0 at idle to ``MAX_TORQUE_NM`` at ``TORQUE_SATURATION_RPM``,
    flat above that.
    """
    if rpm >= TORQUE_SATURATION_RPM:
        return MAX_TORQUE_NM
    return max(0.0, rpm / TORQUE_SATURATION_RPM * MAX_TORQUE_NM)


def dynamic_mileage(
    rpm: float,
    base_efficiency_rpm: float,
    mileage_efficiency_factor: float,
) -> float:
    """Engine-speed dependent fuel economy in km/l.

    The efficiency drop grows with RPM relative to ``base_efficiency_rpm``::

        drop    = (rpm / base_efficiency_rpm) ** 1.2
        mileage = clamp(mileage_efficiency_factor / drop, 5, 25)

    At zero RPM the drop is zero and the mileage takes the upper bound.
    """
    ratio: float = max(rpm, 0.0) / base_efficiency_rpm
    efficiency_drop: float = ratio**EFFICIENCY_EXPONENT
    if efficiency_drop <= 0.0:
        return MAX_MILEAGE_KMPL
    return clamp(
        mileage_efficiency_factor / efficiency_drop,
        MIN_MILEAGE_KMPL,
        MAX_MILEAGE_KMPL,
    )


def fuel_for_distance(distance_km: float, mileage_kmpl: float) -> float:
    """Litres of fuel burnt covering *distance_km* at *mileage_kmpl*."""
    return distance_km / mileage_kmpl


def instantaneous_mileage(
    total_distance_km: float,
    distance_km: float,
    fuel_used_l: float,
    previous: float,
) -> float:
    """Mileage over the current tick in km/l.

    Returns 0 until the vehicle has covered a metre, reuses *previous*
    when the tick burnt too little fuel to divide by safely.
    """
    if total_distance_km < 0.001:
        return 0.0
    if fuel_used_l > 0.0001:
        return distance_km / fuel_used_l
    return previous


def range_left(fuel_left_l: float, mileage_kmpl: float) -> float:
    """Distance in km the remaining fuel covers at *mileage_kmpl*."""
    return fuel_left_l * mileage_kmpl
