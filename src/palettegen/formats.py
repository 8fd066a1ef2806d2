# formats.py – text renderings of one normalized sRGB color, keyed by stable ids

from __future__ import annotations

import math
import re
from typing import Callable, Dict, Iterable, Mapping, NamedTuple, Sequence

from .colors import (
    ColorLike,
    Space,
    Triple,
    linear_srgb_to_oklab,
    oklab_to_oklch,
    quantize_color,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
    srgb_to_linear,
)
from .errors import UnknownFormatter

PRECISION = 5

_TRAILING_ZEROS = re.compile(r"(?<!\.)0+$")


class ColorViews(NamedTuple):
    rgb: Triple
    linear: Triple
    u8: Triple
    hex: str
    oklab: Triple
    oklch: Triple
    hsl: Triple
    hsv: Triple

    @property
    def bare_hex(self) -> str:
        return self.hex.lstrip("#")


def views(color: ColorLike) -> ColorViews:
    rgb = color if isinstance(color, Triple) else Triple(tuple(color), Space.SRGB)
    linear = srgb_to_linear(rgb)
    u8 = quantize_color(rgb)
    lab = linear_srgb_to_oklab(linear)
    return ColorViews(
        rgb=rgb,
        linear=linear,
        u8=u8,
        hex=rgb_to_hex(u8),
        oklab=lab,
        oklch=oklab_to_oklch(lab),
        hsl=rgb_to_hsl(rgb),
        hsv=rgb_to_hsv(rgb),
    )


def _num(n: float, suffix: str = "") -> str:
    if math.isnan(n) or n == 0.0:
        n = 0.0
    return _TRAILING_ZEROS.sub("", f"{n:.{PRECISION}f}") + suffix


def vec_to_string(values: Iterable[float], *, integral: bool = False, suffix: str = "") -> str:
    if integral:
        return ", ".join(str(int(v)) for v in values)
    return ", ".join(_num(float(v), suffix) for v in values)


Formatter = Callable[[ColorViews], str]

# insertion order is the display order; alpha variants last
FORMATTERS: Mapping[str, Formatter] = {
    "rgb8": lambda v: f"rgb({vec_to_string(v.u8, integral=True)})",
    "hex": lambda v: v.hex,
    "hex-bare": lambda v: v.bare_hex,
    "hex-quoted": lambda v: f'"{v.hex}"',
    "hex-0x": lambda v: f"0x{v.bare_hex}",
    "rgb": lambda v: f"rgb({vec_to_string(v.rgb)})",
    "vec3": lambda v: f"vec3({vec_to_string(v.linear)})",
    "vec3f": lambda v: f"vec3({vec_to_string(v.linear, suffix='f')})",
    "hsl": lambda v: f"hsl({vec_to_string(v.hsl)})",
    "hsv": lambda v: f"hsv({vec_to_string(v.hsv)})",
    "oklch": lambda v: f"oklch({vec_to_string(v.oklch)})",
    "oklab": lambda v: f"oklab({vec_to_string(v.oklab)})",
    "rgba8": lambda v: f"rgba({vec_to_string(v.u8, integral=True)}, 255)",
    "hexa": lambda v: f"{v.hex}ff",
    "hexa-bare": lambda v: f"{v.bare_hex}ff",
    "hexa-quoted": lambda v: f'"{v.hex}ff"',
    "hexa-0x": lambda v: f"0x{v.bare_hex}ff",
    "rgba": lambda v: f"rgba({vec_to_string(v.rgb)}, 1.0)",
    "vec4": lambda v: f"vec4({vec_to_string(v.linear)}, 1.0)",
    "vec4f": lambda v: f"vec4({vec_to_string(v.linear, suffix='f')}, 1.0f)",
}


def supported_formats() -> tuple[str, ...]:
    return tuple(FORMATTERS)


def _formatter(fmt: str) -> Formatter:
    try:
        return FORMATTERS[fmt]
    except KeyError:
        raise UnknownFormatter(fmt, supported_formats()) from None


def format_color(color: ColorLike, fmt: str = "hex") -> str:
    return _formatter(fmt)(views(color))


def color_formats(color: ColorLike) -> Dict[str, str]:
    v = views(color)
    return {name: fn(v) for name, fn in FORMATTERS.items()}


def format_palette(palette: Sequence[ColorLike], fmt: str = "hex") -> str:
    """Render a palette as a bracketed list, one indented entry per line."""
    fn = _formatter(fmt)
    lines = "".join(f"    {fn(views(c))},\n" for c in palette)
    return f"[\n{lines}]\n"


__all__ = [
    "PRECISION",
    "ColorViews",
    "FORMATTERS",
    "views",
    "vec_to_string",
    "supported_formats",
    "format_color",
    "color_formats",
    "format_palette",
]
