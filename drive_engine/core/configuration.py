"""Run configuration for the fuel simulation engine.

``configure`` resolves a (terrain, style) pair against a
:class:`PresetTable` into an immutable :class:`DriveConfig`.  The config is
rebuilt from scratch on every call, so an unknown style always receives the
complete default preset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from drive_engine.core.preset import PresetTable, StylePreset

logger = logging.getLogger(__name__)


class InvalidTerrainError(ValueError):
    """Raised when the requested terrain has no speed limit."""


@dataclass(frozen=True)
class DriveConfig:
    """Immutable parameters for one simulated drive.

    Attributes:
        terrain: Terrain name.
        style: Resolved driving style name.
        requested_style: Style name as requested by the caller.
        speed_limit: Terrain speed cap in km/h.
        preset: Parameters of the resolved style.
        override: Terrain-specific preset replacing ``preset`` on every
            tick, or ``None``.
    """

    terrain: str
    style: str
    requested_style: str
    speed_limit: float
    preset: StylePreset
    override: StylePreset | None = None

    @property
    def style_fallback(self) -> bool:
        """True when the requested style was unknown."""
        return self.style != self.requested_style

    def active_preset(self) -> StylePreset:
        """Parameters in force for a tick."""
        return self.override if self.override is not None else self.preset


def require_terrain(terrain: str, presets: PresetTable) -> float:
    """Return the speed limit for *terrain*.

    Raises:
        InvalidTerrainError: If *terrain* is not in the preset table.
    """
    if terrain not in presets.speed_limits:
        raise InvalidTerrainError(
            f"Invalid terrain '{terrain}'. "
            f"Expected one of: {', '.join(presets.speed_limits)}"
        )
    return presets.speed_limits[terrain]


def configure(
    terrain: str,
    style: str,
    presets: PresetTable | None = None,
) -> DriveConfig:
    """Build the configuration for a drive.

    Args:
        terrain: Terrain name, matched case-sensitively.
        style: Driving style name, matched case-sensitively.  Unknown
            styles fall back to ``presets.default_style``.
        presets: Preset table to resolve against.  Defaults to the bundled
            presets.

    Returns:
        A fully populated :class:`DriveConfig`.

    Raises:
        InvalidTerrainError: If *terrain* is not in the preset table.
    """
    if presets is None:
        from drive_engine.config import bundled_presets

        presets = bundled_presets()

    speed_limit = require_terrain(terrain, presets)

    resolved_style = style
    if style not in presets.styles:
        resolved_style = presets.default_style
        logger.warning(
            "Invalid style '%s'. Using '%s'.", style, presets.default_style
        )

    return DriveConfig(
        terrain=terrain,
        style=resolved_style,
        requested_style=style,
        speed_limit=speed_limit,
        preset=presets.styles[resolved_style],
        override=presets.overrides.get((terrain, resolved_style)),
    )
