"""Per-tick telemetry record for the fuel simulation engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SampleRecord:
    """Vehicle telemetry for one tick.

    Attributes:
        t: Elapsed simulated time in seconds.
        rpm: Engine speed.
        speed_kmph: Road speed in km/h.
        torque: Engine torque in N*m.
        mileage: Instantaneous mileage in km/l.
        fuel_left: Fuel remaining after this tick in litres.
        range_left: Distance the remaining fuel covers at ``mileage``, in km.
    """

    t: float
    rpm: float
    speed_kmph: float
    torque: float
    mileage: float
    fuel_left: float
    range_left: float
