# palette.py – step a starting color through HSL, HSV and Oklch
#   - index 0 is the starting color expressed in the model
#   - t = i / (n - 1) drives every axis linearly up to the full step
#   - hue offset is t * hue_step (0 when hue_fixed)
#   - saturation/chroma steps use a fixed window, then clamp to the model's domain
#   - lightness/value steps head toward the remaining headroom above the base

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from .colors import (
    Space,
    Triple,
    clamp_color,
    hsl_to_rgb,
    hsv_to_rgb,
    oklch_to_srgb,
    rgb_to_hsl,
    rgb_to_hsv,
)
from .errors import InvalidConfiguration
from .settings import MIN_COLOR_COUNT, PaletteSettings
from .util import clamp, lerp, wrap_turn

log = logging.getLogger(__name__)

# stepped Oklch chroma stops here (CSS oklch() maps 100% chroma to 0.4),
# unless the starting chroma is already above it
CHROMA_CEILING = 0.4

SATURATION_WINDOW = (0.0, 0.5)
CHROMA_WINDOW = (0.0, 0.35)
FIXED_CHROMA_WINDOW = (0.0, 0.25)

LIGHTNESS_FLOOR = 0.1
OKLCH_LIGHTNESS_FLOOR = 0.3

Axes = Tuple[float, float, float]  # (hue, saturation/chroma, lightness/value)


class Palettes(NamedTuple):
    hsl: List[Triple]
    hsv: List[Triple]
    oklch: List[Triple]


def _check_count(settings: PaletteSettings) -> int:
    n = settings.color_count
    if n < MIN_COLOR_COUNT:
        raise InvalidConfiguration(f"color_count must be ≥ {MIN_COLOR_COUNT}, got {n}")
    return n


def hue_offset(i: int, settings: PaletteSettings) -> float:
    if settings.hue_fixed:
        return 0.0
    t = i / (_check_count(settings) - 1)
    return t * settings.hue_step


# --- model bases ---------------------------------------------------------------


def _hsl_base(start: Triple) -> Axes:
    h, s, l = rgb_to_hsl(clamp_color(oklch_to_srgb(start)))
    return h, s, l


def _hsv_base(start: Triple) -> Axes:
    h, s, v = rgb_to_hsv(clamp_color(oklch_to_srgb(start)))
    return h, s, v


def _oklch_base(start: Triple) -> Axes:
    l, c, h = start
    return h, c, l


def _pack_hsl(h: float, s: float, l: float) -> Triple:
    return Triple((h, s, l), Space.HSL)


def _pack_hsv(h: float, s: float, v: float) -> Triple:
    return Triple((h, s, v), Space.HSV)


def _pack_oklch(h: float, c: float, l: float) -> Triple:
    return Triple((l, c, h), Space.OKLCH)


@dataclass(frozen=True)
class PaletteModel:
    name: str
    base: Callable[[Triple], Axes]
    pack: Callable[[float, float, float], Triple]
    to_srgb: Callable[[Triple], Triple]
    secondary_window: Tuple[float, float]
    secondary_ceiling: float
    tertiary_floor: float
    # None: settings.saturation is used verbatim
    fixed_secondary_window: Optional[Tuple[float, float]] = None

    def ranges(self, settings: PaletteSettings, base: Axes) -> Tuple[float, float]:
        _, _, tertiary_base = base
        secondary_range = lerp(*self.secondary_window, settings.saturation_step)
        tertiary_range = lerp(
            self.tertiary_floor, 1.0 - tertiary_base, settings.luminance_step
        )
        return secondary_range, tertiary_range

    def fixed_secondary(self, settings: PaletteSettings) -> float:
        if self.fixed_secondary_window is None:
            return settings.saturation
        return lerp(*self.fixed_secondary_window, settings.saturation)

    def steps(self, settings: PaletteSettings) -> List[Triple]:
        """Palette entries in the model's own coordinates."""
        n = _check_count(settings)
        base = self.base(settings.starting_color)
        hue_base, secondary_base, tertiary_base = base
        secondary_range, tertiary_range = self.ranges(settings, base)
        log.debug(
            "%s palette: base=(%.5f, %.5f, %.5f) ranges=(%.5f, %.5f) n=%d",
            self.name,
            hue_base,
            secondary_base,
            tertiary_base,
            secondary_range,
            tertiary_range,
            n,
        )

        # index 0 must reproduce the base, even past the ceiling
        ceiling = max(self.secondary_ceiling, secondary_base)

        out: List[Triple] = []
        for i in range(n):
            t = i / (n - 1)

            hue = wrap_turn(hue_base + hue_offset(i, settings))

            if settings.chroma_fixed:
                secondary = self.fixed_secondary(settings)
            else:
                secondary = clamp(secondary_base + t * secondary_range, 0.0, ceiling)

            if settings.luminance_fixed:
                tertiary = tertiary_base
            else:
                tertiary = tertiary_base + t * tertiary_range

            out.append(self.pack(hue, secondary, tertiary))
        return out

    def palette(self, settings: PaletteSettings) -> List[Triple]:
        return [self.to_srgb(c) for c in self.steps(settings)]


HSL = PaletteModel(
    name="hsl",
    base=_hsl_base,
    pack=_pack_hsl,
    to_srgb=hsl_to_rgb,
    secondary_window=SATURATION_WINDOW,
    secondary_ceiling=1.0,
    tertiary_floor=LIGHTNESS_FLOOR,
)
HSV = PaletteModel(
    name="hsv",
    base=_hsv_base,
    pack=_pack_hsv,
    to_srgb=hsv_to_rgb,
    secondary_window=SATURATION_WINDOW,
    secondary_ceiling=1.0,
    tertiary_floor=LIGHTNESS_FLOOR,
)
OKLCH = PaletteModel(
    name="oklch",
    base=_oklch_base,
    pack=_pack_oklch,
    to_srgb=oklch_to_srgb,
    secondary_window=CHROMA_WINDOW,
    secondary_ceiling=CHROMA_CEILING,
    tertiary_floor=OKLCH_LIGHTNESS_FLOOR,
    fixed_secondary_window=FIXED_CHROMA_WINDOW,
)

MODELS = {m.name: m for m in (HSL, HSV, OKLCH)}


def generate_hsl_palette(settings: PaletteSettings) -> List[Triple]:
    return HSL.palette(settings)


def generate_hsv_palette(settings: PaletteSettings) -> List[Triple]:
    return HSV.palette(settings)


def generate_oklch_palette(settings: PaletteSettings) -> List[Triple]:
    return OKLCH.palette(settings)


def generate_palettes(settings: PaletteSettings) -> Palettes:
    """HSL, HSV and Oklch palettes (normalized sRGB) for one set of settings."""
    _check_count(settings)
    return Palettes(
        hsl=HSL.palette(settings),
        hsv=HSV.palette(settings),
        oklch=OKLCH.palette(settings),
    )


def pick_evenly(palette: Sequence[Triple], k: int) -> List[Triple]:
    """k entries spread from the first to the last, e.g. for theme colors."""
    n = len(palette)
    if n == 0 or k < 1:
        raise InvalidConfiguration(f"cannot pick {k} colors from {n}")
    if k == 1:
        return [palette[0]]
    return [palette[math.floor(i / (k - 1) * (n - 1))] for i in range(k)]


__all__ = [
    "CHROMA_CEILING",
    "Palettes",
    "PaletteModel",
    "HSL",
    "HSV",
    "OKLCH",
    "MODELS",
    "hue_offset",
    "generate_hsl_palette",
    "generate_hsv_palette",
    "generate_oklch_palette",
    "generate_palettes",
    "pick_evenly",
]

if __name__ == "__main__":
    from .colors import quantize_color, rgb_to_hex
    from .settings import random_settings

    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    demo = generate_palettes(random_settings(seed=7))
    for name, colors in demo._asdict().items():
        print(name, [rgb_to_hex(quantize_color(c)) for c in colors])
