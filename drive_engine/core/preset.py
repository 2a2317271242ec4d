"""Driving style preset model for the fuel simulation engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StylePreset:
    """Immutable engine and efficiency parameters for one driving style.

    Attributes:
        max_rpm: Upper RPM clamp (> 0).
        max_throttle: Asymptotic throttle target in RPM units (> 0).
        ramp_time: Throttle ramp time constant in seconds (> 0).
        noise_range: Half-width of the additive integer RPM noise (>= 0).
        speed_factor: Multiplier mapping the RPM fraction to road speed (> 0).
        base_efficiency_rpm: RPM at which the efficiency drop equals 1.0 (> 0).
        mileage_efficiency_factor: Mileage in km/l at the base efficiency
            RPM, before clamping (> 0).
    """

    max_rpm: float
    max_throttle: float
    ramp_time: float
    noise_range: int
    speed_factor: float
    base_efficiency_rpm: float
    mileage_efficiency_factor: float

    def __post_init__(self) -> None:
        """Validate preset parameters."""
        if self.max_rpm <= 0.0:
            raise ValueError("max_rpm must be > 0.0.")
        if self.max_throttle <= 0.0:
            raise ValueError("max_throttle must be > 0.0.")
        if self.ramp_time <= 0.0:
            raise ValueError("ramp_time must be > 0.0.")
        if not isinstance(self.noise_range, int) or isinstance(self.noise_range, bool):
            raise ValueError("noise_range must be an integer.")
        if self.noise_range < 0:
            raise ValueError("noise_range must be >= 0.")
        if self.speed_factor <= 0.0:
            raise ValueError("speed_factor must be > 0.0.")
        if self.base_efficiency_rpm <= 0.0:
            raise ValueError("base_efficiency_rpm must be > 0.0.")
        if self.mileage_efficiency_factor <= 0.0:
            raise ValueError("mileage_efficiency_factor must be > 0.0.")


@dataclass(frozen=True)
class PresetTable:
    """All terrain and style parameters available to ``configure``.

    Attributes:
        speed_limits: Terrain name to speed limit in km/h.
        styles: Style name to its preset.
        default_style: Style used when an unknown style is requested.
        overrides: ``(terrain, style)`` to the preset that replaces the
            style preset for that combination.
    """

    speed_limits: dict[str, float]
    styles: dict[str, StylePreset]
    default_style: str
    overrides: dict[tuple[str, str], StylePreset] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.speed_limits:
            raise ValueError("speed_limits must not be empty.")
        if self.default_style not in self.styles:
            raise ValueError(
                f"default_style '{self.default_style}' is not a known style."
            )
