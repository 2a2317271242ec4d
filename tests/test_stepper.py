"""Tests for the tick-based drive simulator."""

import math

import numpy as np
import pytest

from drive_engine.core.configuration import configure
from drive_engine.core.physics import (
    FUEL_CAPACITY_L,
    FUEL_RESERVE_L,
    MAX_TORQUE_NM,
    TICK_SECONDS,
)
from drive_engine.core.report import DriveReport
from drive_engine.core.stepper import MILEAGE_WINDOW, SimulationStepper, simulate

_TERRAINS: list[str] = ["hill", "plain", "downward"]
_STYLES: list[str] = ["conservative", "moderate", "aggressive"]


def _run(terrain: str, style: str, seed: int = 7) -> SimulationStepper:
    stepper = SimulationStepper(configure(terrain, style), seed=seed)
    for _ in stepper:
        pass
    return stepper


# ---------------------------------------------------------------------------
# First tick and ramp
# ---------------------------------------------------------------------------


def test_first_tick_at_rest() -> None:
    """At t = 0 with no noise the vehicle is stationary."""
    stepper = SimulationStepper(configure("plain", "moderate"), noisy=False)
    sample = stepper.step()
    assert sample.t == 0.0
    assert sample.rpm == 0.0
    assert sample.speed_kmph == 0.0
    assert sample.torque == 0.0
    assert sample.mileage == 0.0
    assert sample.fuel_left == FUEL_CAPACITY_L


def test_rpm_follows_throttle_ramp_without_noise() -> None:
    """With noise disabled RPM rises strictly while below max_rpm."""
    stepper = SimulationStepper(configure("plain", "moderate"), noisy=False)
    rpms = [stepper.step().rpm for _ in range(500)]
    for earlier, later in zip(rpms, rpms[1:]):
        assert later > earlier
    assert rpms[10] == pytest.approx(2500.0 * (1.0 - math.exp(-1.0 / 20.0)))


def test_tick_times_are_exact_multiples() -> None:
    stepper = SimulationStepper(configure("plain", "moderate"), seed=1)
    times = [stepper.step().t for _ in range(100)]
    for k, t in enumerate(times):
        assert t == pytest.approx(k * TICK_SECONDS)


def test_override_applies_during_stepping() -> None:
    """hill + conservative ramps with the override's 2500 / 20 s preset."""
    stepper = SimulationStepper(configure("hill", "conservative"), noisy=False)
    samples = [stepper.step() for _ in range(11)]
    expected = 2500.0 * (1.0 - math.exp(-1.0 / 20.0))
    assert samples[10].rpm == pytest.approx(expected)


# ---------------------------------------------------------------------------
# Noise
# ---------------------------------------------------------------------------


def test_noise_range_is_asymmetric() -> None:
    """Noise is drawn from [-n, 2n)."""
    stepper = SimulationStepper(configure("plain", "moderate"), seed=3)
    draws = [stepper._draw_noise(200) for _ in range(5000)]
    assert min(draws) >= -200
    assert max(draws) <= 399
    assert min(draws) < 0 < max(draws)


def test_noise_disabled_or_zero_range() -> None:
    quiet = SimulationStepper(configure("plain", "moderate"), seed=3, noisy=False)
    assert quiet._draw_noise(200) == 0
    noisy = SimulationStepper(configure("plain", "moderate"), seed=3)
    assert noisy._draw_noise(0) == 0


def test_same_seed_same_trace() -> None:
    a = SimulationStepper(configure("plain", "aggressive"), seed=11)
    b = SimulationStepper(configure("plain", "aggressive"), seed=11)
    assert [a.step() for _ in range(200)] == [b.step() for _ in range(200)]


def test_injected_generator_matches_seed() -> None:
    a = SimulationStepper(configure("hill", "moderate"), seed=5)
    b = SimulationStepper(
        configure("hill", "moderate"), rng=np.random.default_rng(5)
    )
    assert [a.step() for _ in range(50)] == [b.step() for _ in range(50)]


# ---------------------------------------------------------------------------
# Bounds and termination over full drives
# ---------------------------------------------------------------------------


def test_samples_within_physical_bounds() -> None:
    """RPM, speed, torque and mileage stay in range for every pair."""
    for terrain in _TERRAINS:
        for style in _STYLES:
            stepper = _run(terrain, style)
            preset = stepper.config.active_preset()
            for s in stepper.samples:
                assert 0.0 <= s.rpm <= preset.max_rpm
                assert 0.0 <= s.speed_kmph <= stepper.config.speed_limit
                assert 0.0 <= s.torque <= MAX_TORQUE_NM
                assert 0.0 <= s.mileage <= 25.0 + 1e-9


def test_drive_stops_at_reserve_and_not_before() -> None:
    stepper = _run("plain", "moderate")
    samples = stepper.samples
    assert stepper.is_exhausted()
    assert samples[-1].fuel_left <= FUEL_RESERVE_L
    assert samples[-2].fuel_left > FUEL_RESERVE_L
    assert all(s.fuel_left > FUEL_RESERVE_L for s in samples[:-1])


def test_step_after_exhaustion_raises() -> None:
    stepper = _run("downward", "aggressive")
    with pytest.raises(RuntimeError, match="exhausted"):
        stepper.step()


def test_distance_and_fuel_accumulate() -> None:
    stepper = SimulationStepper(configure("plain", "moderate"), seed=2)
    samples = [stepper.step() for _ in range(300)]
    expected_m = sum(s.speed_kmph / 3.6 * TICK_SECONDS for s in samples)
    assert stepper.state.total_distance_m == pytest.approx(expected_m)
    assert stepper.fuel_left == pytest.approx(samples[-1].fuel_left)
    fuel_left = [s.fuel_left for s in samples]
    assert fuel_left == sorted(fuel_left, reverse=True)


def test_mileage_window_is_bounded() -> None:
    stepper = SimulationStepper(configure("plain", "moderate"), seed=4)
    samples = [stepper.step() for _ in range(25)]
    assert len(stepper.recent_mileage) == MILEAGE_WINDOW
    assert stepper.recent_mileage == tuple(s.mileage for s in samples[-10:])


def test_rejects_capacity_below_reserve() -> None:
    with pytest.raises(ValueError, match="fuel_capacity"):
        SimulationStepper(configure("plain", "moderate"), fuel_capacity=0.01)


# ---------------------------------------------------------------------------
# simulate()
# ---------------------------------------------------------------------------


def test_simulate_returns_report() -> None:
    report = simulate(configure("hill", "aggressive"), seed=9)
    assert isinstance(report, DriveReport)
    assert report.terrain == "hill"
    assert report.style == "aggressive"
    assert FUEL_CAPACITY_L - report.fuel_used <= FUEL_RESERVE_L
    assert report.total_distance_km > 0.0


def test_simulate_matches_manual_stepping() -> None:
    manual = _run("downward", "moderate", seed=21).report()
    assert simulate(configure("downward", "moderate"), seed=21) == manual


def test_simulate_tick_limit_and_callback() -> None:
    seen = []
    report = simulate(
        configure("plain", "moderate"), seed=1, max_ticks=5, on_sample=seen.append
    )
    assert len(seen) == 5
    assert report.total_time == pytest.approx(0.4)


def test_simulate_rejects_bad_tick_limit() -> None:
    with pytest.raises(ValueError, match="max_ticks"):
        simulate(configure("plain", "moderate"), max_ticks=0)


def test_step_accepts_matching_time() -> None:
    stepper = SimulationStepper(configure("plain", "moderate"), seed=1)
    assert stepper.step(0.0).t == 0.0
    assert stepper.step(0.1).t == pytest.approx(0.1)
    assert stepper.step().t == pytest.approx(0.2)


def test_step_rejects_mismatched_time() -> None:
    stepper = SimulationStepper(configure("plain", "moderate"), seed=1)
    stepper.step()
    with pytest.raises(ValueError, match="does not match the next tick"):
        stepper.step(5.0)
    assert stepper.state.tick == 1
