# colors.py – single-color conversions between sRGB, linear sRGB, Oklab,
# Oklch, HSL, HSV, 8-bit sRGB and hex.
#   - every hue is a turn (1.0 == 360°), wrapped into [0, 1)
#   - indeterminate hue (chroma/saturation within EPSILON of 0) is NO_HUE
#   - NaN hue on the way back is treated as NO_HUE, never propagated
#   - Oklab constants are Björn Ottosson's published 10-digit matrices

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidFormat
from .util import approx_equal, clamp, rad_to_turn, turn_to_rad, wrap_turn

NO_HUE = 0.0
EPSILON = 1e-7


class Space(str, Enum):
    # values follow ColorAide's space ids where one exists
    SRGB = "srgb"
    SRGB_LINEAR = "srgb-linear"
    SRGB_U8 = "srgb-u8"
    HSL = "hsl"
    HSV = "hsv"
    OKLAB = "oklab"
    OKLCH = "oklch"


@dataclass(frozen=True)
class Triple:
    """Three color components plus the space they are expressed in.

    Unpacks and indexes like a 3-tuple. Changing the space always goes
    through one of the conversion functions below.
    """

    coords: Tuple[float, float, float]
    space: Space

    def __post_init__(self) -> None:
        coords = tuple(self.coords)
        if len(coords) != 3:
            raise ValueError(f"expected 3 components, got {len(coords)}")
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "space", Space(self.space))

    def __iter__(self) -> Iterator[float]:
        return iter(self.coords)

    def __getitem__(self, i: int) -> float:
        return self.coords[i]

    def __len__(self) -> int:
        return 3

    def to_numpy(self) -> np.ndarray:
        return np.asarray(self.coords, dtype=np.float64)


ColorLike = Union[Triple, Sequence[float], np.ndarray]


def _coords(color: ColorLike, space: Space) -> Tuple[float, float, float]:
    if isinstance(color, Triple):
        if color.space is not space:
            raise TypeError(
                f"expected a {space.value} color, got {color.space.value}"
            )
        return color.coords
    x, y, z = color
    return float(x), float(y), float(z)


def _vec(color: ColorLike, space: Space) -> np.ndarray:
    return np.asarray(_coords(color, space), dtype=np.float64)


def _tag(v: Union[np.ndarray, Sequence[float]], space: Space) -> Triple:
    if isinstance(v, np.ndarray):
        v = v.tolist()
    return Triple(tuple(v), space)


def _div(n: float, d: float) -> float:
    # out-of-gamut input can zero a denominator that valid input never does
    return 0.0 if d == 0.0 else n / d


# --- 1) gamut clamp, 8-bit quantization, hex --------------------------------


def clamp_color(color: ColorLike) -> Triple:
    """Clamp every channel into [0, 1]; keeps the input's tag (sRGB if untagged)."""
    space = color.space if isinstance(color, Triple) else Space.SRGB
    return _tag(np.clip(_vec(color, space), 0.0, 1.0), space)


def normalize_color(rgb: ColorLike) -> Triple:
    return _tag(_vec(rgb, Space.SRGB_U8) / 255.0, Space.SRGB)


def quantize_color(rgb: ColorLike) -> Triple:
    # round half up (not numpy's half-to-even)
    v = np.nan_to_num(_vec(rgb, Space.SRGB), nan=0.0)
    u8 = np.floor(np.clip(v, 0.0, 1.0) * 255.0 + 0.5).astype(np.int64)
    return _tag(u8, Space.SRGB_U8)


_SHORT_HEX = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])\Z", re.IGNORECASE)
_LONG_HEX = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})\Z", re.IGNORECASE)


def hex_to_rgb(hex_str: str) -> Triple:
    """Parse '#RGB', 'RGB', '#RRGGBB' or 'RRGGBB' into an 8-bit sRGB triple."""
    if not isinstance(hex_str, str):
        raise InvalidFormat(f"invalid hex: {hex_str!r}")
    raw = _SHORT_HEX.sub(lambda m: "".join(ch * 2 for ch in m.groups()), hex_str)
    m = _LONG_HEX.match(raw)
    if m is None:
        raise InvalidFormat(f"invalid hex: {hex_str!r}")
    return Triple(tuple(int(g, 16) for g in m.groups()), Space.SRGB_U8)


def rgb_to_hex(rgb: ColorLike) -> str:
    r, g, b = (clamp(int(c), 0, 255) for c in _coords(rgb, Space.SRGB_U8))
    return f"#{r:02x}{g:02x}{b:02x}"


# --- 2) IEC 61966-2-1 companding ---------------------------------------------


def _uncompand(v: np.ndarray) -> np.ndarray:
    m = v > 0.04045
    out = np.empty_like(v)
    out[m] = ((v[m] + 0.055) / 1.055) ** 2.4
    out[~m] = v[~m] / 12.92
    return out


def _compand(v: np.ndarray) -> np.ndarray:
    m = v > 0.0031308
    out = np.empty_like(v)
    out[m] = 1.055 * np.power(v[m], 1 / 2.4) - 0.055
    out[~m] = v[~m] * 12.92
    return out


def srgb_to_linear(rgb: ColorLike) -> Triple:
    return _tag(_uncompand(_vec(rgb, Space.SRGB)), Space.SRGB_LINEAR)


def linear_to_srgb(rgb: ColorLike) -> Triple:
    return _tag(_compand(_vec(rgb, Space.SRGB_LINEAR)), Space.SRGB)


# --- 3) Oklab ----------------------------------------------------------------
# https://bottosson.github.io/posts/oklab/

_LRGB_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)
_LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)
_OKLAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)
_LMS_TO_LRGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)


def linear_srgb_to_oklab(rgb: ColorLike) -> Triple:
    lms = _LRGB_TO_LMS @ _vec(rgb, Space.SRGB_LINEAR)
    return _tag(_LMS_TO_OKLAB @ np.cbrt(lms), Space.OKLAB)


def oklab_to_linear_srgb(lab: ColorLike) -> Triple:
    lms = (_OKLAB_TO_LMS @ _vec(lab, Space.OKLAB)) ** 3
    return _tag(_LMS_TO_LRGB @ lms, Space.SRGB_LINEAR)


# --- 4) Oklab <-> Oklch (Cartesian <-> polar on the a/b plane) ----------------


def oklab_to_oklch(lab: ColorLike) -> Triple:
    l, a, b = _coords(lab, Space.OKLAB)
    c = math.hypot(a, b)
    h = NO_HUE if approx_equal(c, 0.0, EPSILON) else rad_to_turn(math.atan2(b, a))
    return Triple((l, c, wrap_turn(h)), Space.OKLCH)


def oklch_to_oklab(lch: ColorLike) -> Triple:
    l, c, h = _coords(lch, Space.OKLCH)
    rad = turn_to_rad(wrap_turn(h))
    return Triple((l, c * math.cos(rad), c * math.sin(rad)), Space.OKLAB)


def srgb_to_oklch(rgb: ColorLike) -> Triple:
    return oklab_to_oklch(linear_srgb_to_oklab(srgb_to_linear(rgb)))


def oklch_to_srgb(lch: ColorLike) -> Triple:
    return linear_to_srgb(oklab_to_linear_srgb(oklch_to_oklab(lch)))


# --- 5) HSL / HSV --------------------------------------------------------------


def _hue_min_max_chroma(rgb: ColorLike) -> Tuple[float, float, float, float]:
    r, g, b = _coords(rgb, Space.SRGB)
    lo, hi = min(r, g, b), max(r, g, b)
    chroma = hi - lo

    if approx_equal(chroma, 0.0, EPSILON):
        h = NO_HUE
    elif r == hi:
        h = (g - b) / chroma
    elif g == hi:
        h = 2.0 + (b - r) / chroma
    else:
        h = 4.0 + (r - g) / chroma
    return wrap_turn(h / 6.0), lo, hi, chroma


def rgb_to_hsl(rgb: ColorLike) -> Triple:
    h, lo, hi, chroma = _hue_min_max_chroma(rgb)
    l = (lo + hi) / 2.0
    if approx_equal(chroma, 0.0, EPSILON):
        s = 0.0
    elif l <= 0.5:
        s = _div(chroma, hi + lo)
    else:
        s = _div(chroma, 2.0 - hi - lo)
    return Triple((h, s, l), Space.HSL)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1 / 6:
        return p + (q - p) * 6.0 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6.0
    return p


def hsl_to_rgb(hsl: ColorLike) -> Triple:
    h, s, l = _coords(hsl, Space.HSL)
    h = wrap_turn(h)

    if approx_equal(s, 0.0, EPSILON):
        return Triple((l, l, l), Space.SRGB)

    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    return Triple(
        (
            _hue_to_channel(p, q, h + 1 / 3),
            _hue_to_channel(p, q, h),
            _hue_to_channel(p, q, h - 1 / 3),
        ),
        Space.SRGB,
    )


def rgb_to_hsv(rgb: ColorLike) -> Triple:
    h, _lo, hi, chroma = _hue_min_max_chroma(rgb)
    s = 0.0 if approx_equal(chroma, 0.0, EPSILON) else _div(chroma, hi)
    return Triple((h, s, hi), Space.HSV)


def hsv_to_rgb(hsv: ColorLike) -> Triple:
    h, s, v = _coords(hsv, Space.HSV)
    h = wrap_turn(h)

    if approx_equal(s, 0.0, EPSILON):
        return Triple((v, v, v), Space.SRGB)

    i = math.floor(h * 6.0)
    f = h * 6.0 - i
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)

    sector = (
        (v, t, p),
        (q, v, p),
        (p, v, t),
        (p, q, v),
        (t, p, v),
        (v, p, q),
    )[i % 6]
    return Triple(sector, Space.SRGB)


__all__ = [
    "NO_HUE",
    "EPSILON",
    "Space",
    "Triple",
    "ColorLike",
    "clamp_color",
    "normalize_color",
    "quantize_color",
    "hex_to_rgb",
    "rgb_to_hex",
    "srgb_to_linear",
    "linear_to_srgb",
    "linear_srgb_to_oklab",
    "oklab_to_linear_srgb",
    "oklab_to_oklch",
    "oklch_to_oklab",
    "srgb_to_oklch",
    "oklch_to_srgb",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_hsv",
    "hsv_to_rgb",
]
