"""Tick-based drive simulator for the fuel simulation engine.

A :class:`SimulationStepper` advances a single vehicle by one fixed
``TICK_SECONDS`` increment per call to :meth:`SimulationStepper.step`,
deriving throttle, RPM, speed, torque, mileage and fuel burn from the
elapsed simulated time.  The only stochastic input is an integer RPM noise
term drawn from a per-stepper ``numpy.random.Generator``, so a run is fully
reproducible given its seed.

Per tick the sequence is:
    1. Select the active preset (terrain override or style preset).
    2. Ramp the throttle towards ``max_throttle``.
    3. Add integer noise in ``[-noise_range, 2 * noise_range)``.
    4. Clamp to get RPM, then derive road speed and torque.
    5. Accumulate distance and the fuel burnt at the RPM-dependent mileage.
    6. Record the sample and update the rolling mileage window.

The drive ends once the remaining fuel drops to ``FUEL_RESERVE_L``.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Callable, Iterator

import numpy as np
from numpy.random import Generator

from drive_engine.core import physics
from drive_engine.core.configuration import DriveConfig
from drive_engine.core.report import DriveReport, summarize
from drive_engine.core.telemetry import SampleRecord

logger = logging.getLogger(__name__)

MILEAGE_WINDOW: int = 10  # most recent instantaneous mileages retained


class SimulationState:
    """Mutable bookkeeping for one drive.

    Attributes:
        tick: Number of ticks completed.
        total_time: Elapsed time of the last completed tick in seconds.
        fuel_used: Cumulative fuel burnt in litres.
        total_distance_m: Cumulative distance in metres.
        last_mileage: Instantaneous mileage of the previous tick, km/l.
        mileage_window: Most recent ``MILEAGE_WINDOW`` instantaneous
            mileages, oldest first.
        samples: Every recorded :class:`SampleRecord`, in tick order.
    """

    __slots__ = (
        "tick",
        "total_time",
        "fuel_used",
        "total_distance_m",
        "last_mileage",
        "mileage_window",
        "samples",
    )

    def __init__(self) -> None:
        self.tick: int = 0
        self.total_time: float = 0.0
        self.fuel_used: float = 0.0
        self.total_distance_m: float = 0.0
        self.last_mileage: float = 0.0
        self.mileage_window: deque[float] = deque(maxlen=MILEAGE_WINDOW)
        self.samples: list[SampleRecord] = []


class SimulationStepper:
    """Stateful per-tick simulator for a single drive.

    Iterating over a stepper yields one :class:`SampleRecord` per tick until
    the tank reaches its reserve.
    """

    def __init__(
        self,
        config: DriveConfig,
        seed: int | None = None,
        rng: Generator | None = None,
        noisy: bool = True,
        fuel_capacity: float = physics.FUEL_CAPACITY_L,
    ) -> None:
        """Create a stepper at t = 0 with a full tank.

        Args:
            config: Resolved drive configuration.
            seed: Seed for the noise generator.  Ignored when *rng* is
                given.  ``None`` uses entropy from the OS.
            rng: Explicit noise generator to draw from.
            noisy: When False the RPM noise term is always zero.
            fuel_capacity: Starting fuel in litres.  Must exceed
                ``FUEL_RESERVE_L``.

        Raises:
            ValueError: If fuel_capacity <= FUEL_RESERVE_L.
        """
        if fuel_capacity <= physics.FUEL_RESERVE_L:
            raise ValueError(
                f"fuel_capacity must be > {physics.FUEL_RESERVE_L} L."
            )
        self.config: DriveConfig = config
        self.rng: Generator = rng if rng is not None else np.random.default_rng(seed)
        self.noisy: bool = noisy
        self.fuel_capacity: float = fuel_capacity
        self.state: SimulationState = SimulationState()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def fuel_left(self) -> float:
        return self.fuel_capacity - self.state.fuel_used

    @property
    def samples(self) -> list[SampleRecord]:
        return list(self.state.samples)

    @property
    def recent_mileage(self) -> tuple[float, ...]:
        """Instantaneous mileages of the last ``MILEAGE_WINDOW`` ticks."""
        return tuple(self.state.mileage_window)

    def is_exhausted(self) -> bool:
        """True once remaining fuel is at or below the reserve."""
        return self.fuel_left <= physics.FUEL_RESERVE_L

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _draw_noise(self, noise_range: int) -> int:
        if not self.noisy or noise_range == 0:
            return 0
        return int(self.rng.integers(-noise_range, 2 * noise_range))

    def step(self, t: float | None = None) -> SampleRecord:
        """Advance the drive by one tick and return its telemetry.

        The tick runs at elapsed time ``tick * TICK_SECONDS``, where
        ``tick`` is the number of ticks already completed.

        Args:
            t: Optional elapsed time the caller expects this tick to run
                at.  Must match the stepper's own clock.

        Raises:
            RuntimeError: If the tank has already reached its reserve.
            ValueError: If *t* does not match the next tick's time.
        """
        if self.is_exhausted():
            raise RuntimeError("Cannot step an exhausted simulation.")

        state = self.state
        tick_time: float = state.tick * physics.TICK_SECONDS
        if t is not None and not math.isclose(t, tick_time, abs_tol=1e-9):
            raise ValueError(
                f"t={t} does not match the next tick at t={tick_time:.1f} s."
            )
        t = tick_time
        # Re-resolved every tick: terrain overrides replace the style preset.
        preset = self.config.active_preset()

        throttle: float = physics.throttle(t, preset.max_throttle, preset.ramp_time)
        noise: int = self._draw_noise(preset.noise_range)
        rpm: float = physics.engine_rpm(throttle, noise, preset.max_rpm)

        kmph: float = physics.road_speed_kmph(
            rpm, preset.max_rpm, self.config.speed_limit, preset.speed_factor
        )
        speed_mps: float = kmph / physics.KMPH_PER_MPS
        torque: float = physics.torque_at(rpm)

        distance_m: float = speed_mps * physics.TICK_SECONDS
        state.total_distance_m += distance_m
        distance_km: float = distance_m / 1000.0

        mileage: float = physics.dynamic_mileage(
            rpm, preset.base_efficiency_rpm, preset.mileage_efficiency_factor
        )
        tick_fuel: float = physics.fuel_for_distance(distance_km, mileage)
        state.fuel_used += tick_fuel
        fuel_left: float = self.fuel_left

        inst_mileage: float = physics.instantaneous_mileage(
            state.total_distance_m / 1000.0,
            distance_km,
            tick_fuel,
            state.last_mileage,
        )
        state.last_mileage = inst_mileage
        state.mileage_window.append(inst_mileage)

        sample = SampleRecord(
            t=t,
            rpm=rpm,
            speed_kmph=kmph,
            torque=torque,
            mileage=inst_mileage,
            fuel_left=fuel_left,
            range_left=physics.range_left(fuel_left, inst_mileage),
        )
        state.samples.append(sample)
        state.total_time = t
        state.tick += 1

        logger.debug(
            "tick=%d t=%.1f throttle=%.1f noise=%d rpm=%.1f fuel_left=%.5f",
            state.tick,
            t,
            throttle,
            noise,
            rpm,
            fuel_left,
        )
        return sample

    def __iter__(self) -> Iterator[SampleRecord]:
        while not self.is_exhausted():
            yield self.step()

    def report(self) -> DriveReport:
        """Summarise the ticks recorded so far."""
        return summarize(
            self.state.samples,
            total_distance_m=self.state.total_distance_m,
            fuel_used=self.state.fuel_used,
            total_time=self.state.total_time,
            terrain=self.config.terrain,
            style=self.config.style,
        )


def simulate(
    config: DriveConfig,
    seed: int | None = None,
    noisy: bool = True,
    max_ticks: int | None = None,
    on_sample: Callable[[SampleRecord], None] | None = None,
) -> DriveReport:
    """Run a drive until the tank reaches its reserve.

    Args:
        config: Resolved drive configuration.
        seed: Seed for the noise generator.  ``None`` uses entropy from
            the OS.
        noisy: When False the RPM noise term is always zero.
        max_ticks: Optional hard limit on the number of ticks.
        on_sample: Callback invoked with every sample as it is produced.

    Returns:
        The :class:`DriveReport` for the drive.

    Raises:
        ValueError: If max_ticks < 1.
    """
    if max_ticks is not None and max_ticks < 1:
        raise ValueError("max_ticks must be >= 1.")

    stepper = SimulationStepper(config, seed=seed, noisy=noisy)
    logger.info(
        "Drive started on %s terrain as a %s driver (seed=%s)",
        config.terrain,
        config.style,
        seed,
    )

    for sample in stepper:
        if on_sample is not None:
            on_sample(sample)
        if max_ticks is not None and stepper.state.tick >= max_ticks:
            if not stepper.is_exhausted():
                logger.warning(
                    "Tick limit of %d reached before fuel ran out", max_ticks
                )
            break

    logger.info(
        "Drive finished after %d ticks: %.3f km on %.4f L",
        stepper.state.tick,
        stepper.state.total_distance_m / 1000.0,
        stepper.state.fuel_used,
    )
    return stepper.report()
