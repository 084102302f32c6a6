#!/usr/bin/env python3
"""
Simulation configuration.

SimulationConfig is an immutable value owned by the UI side. The simulation
loop reads the current instance at the start of every tick and never mutates
it; changes arrive as whole replacements (see SimulationLoop.update_config).

Two named profiles reproduce the parameter sets of the mobile and web builds
of the toy. Both run through the same core; only constants differ.

JSON override files use the field names as keys, for example:
{
  "gravity_strength": 0.6,
  "min_distance": 12.0,
  "colors": ["#ffc72e", [0, 255, 255], "#ffffff"],
  "satellite_enabled": true
}
"""
import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .constants import (
    BODY_COUNT,
    COLOR_SEQUENCES,
    DEFAULT_BODY_COLORS,
    DEFAULT_CAMERA_ZOOM,
    DEFAULT_EASING,
    DEFAULT_ESCAPE_MULTIPLIER,
    DEFAULT_FORCE_CAP,
    DEFAULT_FORCE_SCALE,
    DEFAULT_GRAVITY_STRENGTH,
    DEFAULT_MIN_DISTANCE,
    DEFAULT_SPAWN_MARGIN,
    DEFAULT_TRAIL_CAPACITY,
    DEFAULT_VISIBLE_MARGIN,
    GRAVITY_RANGE_RANGE,
    GRAVITY_STRENGTH_RANGE,
    RESET_POLICIES,
    SATELLITE_COLOR_BLEND,
    SATELLITE_DAMPING_PER_STRENGTH,
    SATELLITE_FORCE_MULTIPLIER,
    SATELLITE_RESPONSE_AMPLIFICATION,
    SATELLITE_RESPONSE_FORCE_CAP,
    SATELLITE_RESPONSE_RANGE_FACTOR,
    SATELLITE_TRAIL_CAPACITY,
)
from .data_models import Color
from .vector_utils import clamp

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_rgb(color) -> bool:
    return (
        isinstance(color, tuple)
        and len(color) == 3
        and all(_is_int(c) and 0 <= c <= 255 for c in color)
    )


@dataclass(frozen=True)
class SimulationConfig:
    gravity_strength: float = DEFAULT_GRAVITY_STRENGTH
    min_distance: float = DEFAULT_MIN_DISTANCE
    force_cap: float = DEFAULT_FORCE_CAP
    force_scale: float = DEFAULT_FORCE_SCALE
    easing: float = DEFAULT_EASING
    trail_capacity: int = DEFAULT_TRAIL_CAPACITY
    spawn_margin: float = DEFAULT_SPAWN_MARGIN
    escape_multiplier: float = DEFAULT_ESCAPE_MULTIPLIER
    colors: Tuple[Color, Color, Color] = DEFAULT_BODY_COLORS
    satellite_enabled: bool = False
    reset_policy: str = "extent"
    visible_margin: float = DEFAULT_VISIBLE_MARGIN
    camera_zoom: float = DEFAULT_CAMERA_ZOOM
    # Satellite tuning
    satellite_trail_capacity: int = SATELLITE_TRAIL_CAPACITY
    response_range_factor: float = SATELLITE_RESPONSE_RANGE_FACTOR
    response_amplification: float = SATELLITE_RESPONSE_AMPLIFICATION
    response_force_cap: float = SATELLITE_RESPONSE_FORCE_CAP
    response_force_multiplier: float = SATELLITE_FORCE_MULTIPLIER
    damping_per_strength: float = SATELLITE_DAMPING_PER_STRENGTH
    color_blend: float = SATELLITE_COLOR_BLEND

    def __post_init__(self):
        if self.reset_policy not in RESET_POLICIES:
            raise ValueError(f"Unknown reset policy: {self.reset_policy!r}")
        for name in ("trail_capacity", "satellite_trail_capacity"):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ValueError(f"{name} must be an integer of at least 1, got {value!r}")
        if self.min_distance <= 0:
            raise ValueError("min_distance must be positive")
        if not 0.0 < self.easing < 1.0:
            raise ValueError("easing must lie strictly between 0 and 1")
        if len(self.colors) != BODY_COUNT:
            raise ValueError(f"Expected {BODY_COUNT} slot colours, got {len(self.colors)}")
        for color in self.colors:
            if not _is_rgb(color):
                raise ValueError(f"Slot colours must be (r, g, b) integers in 0..255, got {color!r}")

    @property
    def damping_rate(self) -> float:
        """Per-tick satellite velocity damping; stronger gravity damps more."""
        return self.gravity_strength * self.damping_per_strength

    def spawn_margin_px(self, width: float, height: float) -> float:
        return min(width, height) * self.spawn_margin

    def with_color(self, slot: int, color: Color) -> "SimulationConfig":
        colors = list(self.colors)
        colors[slot] = coerce_color(color)
        return dataclasses.replace(self, colors=tuple(colors))


PROFILES: Dict[str, SimulationConfig] = {
    "classic": SimulationConfig(),
    "web": SimulationConfig(
        gravity_strength=0.4,
        min_distance=10.0,
        force_cap=10000.0,
        force_scale=0.25,
    ),
}


def get_profile(name: str) -> SimulationConfig:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown profile: {name!r} (choose from {', '.join(sorted(PROFILES))})") from None


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------

def parse_hex_color(text: str) -> Color:
    """Parse '#rrggbb' (leading '#' optional) into an RGB tuple."""
    s = text.strip().lstrip("#")
    if len(s) != 6:
        raise ValueError(f"Not a #rrggbb colour: {text!r}")
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def format_hex_color(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def coerce_color(c) -> Color:
    if isinstance(c, str):
        return parse_hex_color(c)
    r, g, b = int(c[0]), int(c[1]), int(c[2])
    return (int(clamp(r, 0, 255)), int(clamp(g, 0, 255)), int(clamp(b, 0, 255)))


def next_cycle_color(slot: int, index: int) -> Tuple[int, Color]:
    """Advance slot's colour cycle; returns (new_index, colour)."""
    seq = COLOR_SEQUENCES[slot]
    new_index = (index + 1) % len(seq)
    return new_index, seq[new_index]


# ---------------------------------------------------------------------------
# Slider mappings (progress 0..100)
# ---------------------------------------------------------------------------

def _from_progress(progress: float, bounds: Tuple[float, float]) -> float:
    lo, hi = bounds
    return lo + (clamp(progress, 0.0, 100.0) / 100.0) * (hi - lo)


def _to_progress(value: float, bounds: Tuple[float, float]) -> float:
    lo, hi = bounds
    return clamp((value - lo) / (hi - lo) * 100.0, 0.0, 100.0)


def gravity_strength_from_slider(progress: float) -> float:
    return _from_progress(progress, GRAVITY_STRENGTH_RANGE)


def gravity_range_from_slider(progress: float) -> float:
    return _from_progress(progress, GRAVITY_RANGE_RANGE)


def slider_from_gravity_strength(value: float) -> float:
    return _to_progress(value, GRAVITY_STRENGTH_RANGE)


def slider_from_gravity_range(value: float) -> float:
    return _to_progress(value, GRAVITY_RANGE_RANGE)


# ---------------------------------------------------------------------------
# JSON overrides
# ---------------------------------------------------------------------------

_FIELD_NAMES = {f.name for f in dataclasses.fields(SimulationConfig)}


def config_from_dict(data: dict, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """Apply known keys from data onto base; unknown keys are ignored with a warning."""
    base = base or SimulationConfig()
    changes = {}
    for key, value in data.items():
        if key not in _FIELD_NAMES:
            logger.warning("Ignoring unknown config key %r", key)
            continue
        if key == "colors":
            value = tuple(coerce_color(c) for c in value)
        changes[key] = value
    return dataclasses.replace(base, **changes)


def load_config(path: str, base: Optional[SimulationConfig] = None) -> SimulationConfig:
    """
    Load a JSON override file on top of base.

    An unreadable or malformed file is logged and base is returned unchanged.
    """
    base = base or SimulationConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read config %s: %s", path, exc)
        return base
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object; using defaults", path)
        return base
    try:
        return config_from_dict(data, base)
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid config %s: %s", path, exc)
        return base

