"""Core simulation modules for the fuel simulation engine."""

from drive_engine.core.configuration import (
    DriveConfig,
    InvalidTerrainError,
    configure,
)
from drive_engine.core.physics import (
    FUEL_CAPACITY_L,
    FUEL_RESERVE_L,
    MAX_TORQUE_NM,
    TICK_SECONDS,
)
from drive_engine.core.preset import PresetTable, StylePreset
from drive_engine.core.report import (
    DriveReport,
    behavior_score,
    classify_behavior,
    summarize,
)
from drive_engine.core.stepper import SimulationState, SimulationStepper, simulate
from drive_engine.core.telemetry import SampleRecord

__all__ = [
    "DriveConfig",
    "DriveReport",
    "FUEL_CAPACITY_L",
    "FUEL_RESERVE_L",
    "InvalidTerrainError",
    "MAX_TORQUE_NM",
    "PresetTable",
    "SampleRecord",
    "SimulationState",
    "SimulationStepper",
    "StylePreset",
    "TICK_SECONDS",
    "behavior_score",
    "classify_behavior",
    "configure",
    "simulate",
    "summarize",
]
