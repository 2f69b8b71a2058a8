"""Deterministic accent colors — maps a workspace name + seed to a vibrant RGB.

The hash is a 32-bit signed ×31 accumulator over UTF-16 code units, so
the same name yields the same color on every platform and in every
implementation that follows the same recipe. Hue, saturation and
lightness each come from a different slice of the hash bits, bounded so
the result stays legible on light and dark titlebars.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000

# Saturation 60-90%, lightness 45-65%
SATURATION_BASE, SATURATION_SPAN = 60, 31
LIGHTNESS_BASE, LIGHTNESS_SPAN = 45, 21

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


@dataclass(frozen=True)
class ColorSpec:
    """An immutable 24-bit RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Channel {name}={value!r} is not an integer in [0, 255]")

    @property
    def hex(self) -> str:
        return format_hex(self)


def _to_int32(value: int) -> int:
    """Truncate to a signed 32-bit two's-complement integer."""
    value &= _INT32_MASK
    if value & _INT32_SIGN:
        value -= 1 << 32
    return value


def _code_units(text: str) -> list[int]:
    """Split text into UTF-16 code units (astral chars become surrogate pairs)."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def hash_string(text: str) -> int:
    """Hash a string to a non-negative int with 32-bit ×31 wraparound.

    Returns abs() of the signed 32-bit accumulator, so the result lies in
    [0, 2**31]; the upper bound is reached only when the accumulator ends
    at -2**31.
    """
    h = 0
    for unit in _code_units(text):
        h = _to_int32(h * 31 + unit)
    return abs(h)


def derive_hsl(hash_value: int) -> tuple[int, int, int]:
    """Split a hash into (hue, saturation%, lightness%)."""
    hue = hash_value % 360
    saturation = SATURATION_BASE + ((hash_value >> 8) % SATURATION_SPAN)
    lightness = LIGHTNESS_BASE + ((hash_value >> 16) % LIGHTNESS_SPAN)
    return hue, saturation, lightness


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _round_channel(value: float) -> int:
    # Round half up, not half to even
    return int(math.floor(value * 255 + 0.5))


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> ColorSpec:
    """Convert HSL (degrees, percent, percent) to an RGB ColorSpec."""
    h = hue / 360
    s = saturation / 100
    light = lightness / 100

    if s == 0:
        r = g = b = light
    else:
        q = light * (1 + s) if light < 0.5 else light + s - light * s
        p = 2 * light - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return ColorSpec(_round_channel(r), _round_channel(g), _round_channel(b))


def derive_color(identity: str, seed: str = "") -> ColorSpec:
    """Generate a vibrant color for a workspace identity.

    Args:
        identity: Workspace or project name.
        seed: Extra text appended to the identity; change it to pick a
            different color for the same workspace.

    Returns:
        The same ColorSpec for the same (identity, seed) on every run.
    """
    hue, saturation, lightness = derive_hsl(hash_string(identity + seed))
    return hsl_to_rgb(hue, saturation, lightness)


def format_hex(color: ColorSpec) -> str:
    """Render as '#rrggbb'."""
    return "#" + "".join(f"{channel:02x}" for channel in (color.r, color.g, color.b))


def parse_hex(text: str) -> ColorSpec:
    """Parse '#rrggbb' (any case) back into a ColorSpec."""
    match = _HEX_RE.match(text.strip())
    if not match:
        raise ValueError(f"Not a #RRGGBB color: {text!r}")
    return ColorSpec(*(int(part, 16) for part in match.groups()))
