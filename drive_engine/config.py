"""Preset loader for the fuel simulation engine."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import yaml

from drive_engine.core.preset import PresetTable, StylePreset

logger = logging.getLogger(__name__)

DATA_DIR: Path = Path(__file__).resolve().parent / "data"
PRESETS_PATH: Path = DATA_DIR / "driving_presets.yaml"

_PRESET_FIELDS: tuple[str, ...] = (
    "max_rpm",
    "max_throttle",
    "ramp_time",
    "noise_range",
    "speed_factor",
    "base_efficiency_rpm",
    "mileage_efficiency_factor",
)


def _build_preset(entry: dict, label: str) -> StylePreset:
    """Validate one preset mapping and convert it to a :class:`StylePreset`."""
    for name in _PRESET_FIELDS:
        if name not in entry:
            raise ValueError(f"{label} is missing required field '{name}'")
        val = entry[name]
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ValueError(
                f"{label}: '{name}' must be numeric, got {type(val).__name__}"
            )

    noise = entry["noise_range"]
    if isinstance(noise, float):
        if not noise.is_integer():
            raise ValueError(
                f"{label}: 'noise_range' must be an integer, got {noise}"
            )
        noise = int(noise)

    return StylePreset(
        max_rpm=float(entry["max_rpm"]),
        max_throttle=float(entry["max_throttle"]),
        ramp_time=float(entry["ramp_time"]),
        noise_range=noise,
        speed_factor=float(entry["speed_factor"]),
        base_efficiency_rpm=float(entry["base_efficiency_rpm"]),
        mileage_efficiency_factor=float(entry["mileage_efficiency_factor"]),
    )


def load_presets(path: Path | None = None) -> PresetTable:
    """Load terrain speed limits and driving style presets from YAML.

    Args:
        path: Optional override for the presets file path.

    Returns:
        A validated :class:`PresetTable`.

    Raises:
        FileNotFoundError: If the presets file does not exist.
        ValueError: If a section or field is missing, a value is not
            numeric, or an entry is out of range.
    """
    presets_path = Path(path) if path is not None else PRESETS_PATH
    if not presets_path.exists():
        raise FileNotFoundError(f"Presets file not found: {presets_path}")

    with open(presets_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"Presets file {presets_path} must contain a mapping")
    for section in ("terrains", "styles", "default_style"):
        if section not in data:
            raise ValueError(
                f"Presets file is missing required section '{section}'"
            )

    # --- Terrains ---
    speed_limits: dict[str, float] = {}
    for terrain, entry in data["terrains"].items():
        if not isinstance(entry, dict) or "speed_limit" not in entry:
            raise ValueError(
                f"Terrain '{terrain}' is missing required field 'speed_limit'"
            )
        limit = entry["speed_limit"]
        if isinstance(limit, bool) or not isinstance(limit, (int, float)):
            raise ValueError(
                f"Terrain '{terrain}': 'speed_limit' must be numeric, "
                f"got {type(limit).__name__}"
            )
        if limit <= 0.0:
            raise ValueError(
                f"Terrain '{terrain}': 'speed_limit' must be > 0, got {limit}"
            )
        speed_limits[str(terrain)] = float(limit)

    # --- Styles ---
    styles: dict[str, StylePreset] = {
        str(style): _build_preset(entry, f"Style '{style}'")
        for style, entry in data["styles"].items()
    }

    # --- Terrain/style overrides ---
    overrides: dict[tuple[str, str], StylePreset] = {}
    for idx, entry in enumerate(data.get("overrides") or []):
        terrain = entry.get("terrain")
        style = entry.get("style")
        label = f"Override {idx} ({terrain}/{style})"
        if terrain not in speed_limits:
            raise ValueError(f"{label}: unknown terrain '{terrain}'")
        if style not in styles:
            raise ValueError(f"{label}: unknown style '{style}'")
        overrides[(terrain, style)] = _build_preset(entry, label)

    table = PresetTable(
        speed_limits=speed_limits,
        styles=styles,
        default_style=str(data["default_style"]),
        overrides=overrides,
    )
    logger.debug(
        "Loaded %d terrains, %d styles and %d overrides from %s",
        len(speed_limits),
        len(styles),
        len(overrides),
        presets_path,
    )
    return table


@functools.lru_cache(maxsize=None)
def bundled_presets() -> PresetTable:
    """The bundled presets, parsed once per process."""
    return load_presets()
