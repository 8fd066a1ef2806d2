# parsing.py – turn user text into an Oklch starting color

from __future__ import annotations

import logging
import math
import string

from coloraide import Color

from .colors import (
    Space,
    Triple,
    hex_to_rgb,
    linear_srgb_to_oklab,
    normalize_color,
    oklab_to_oklch,
    srgb_to_oklch,
)
from .errors import InvalidFormat

log = logging.getLogger(__name__)


def _looks_like_hex(s: str) -> bool:
    raw = s.lstrip("#")
    return len(raw) in (3, 6) and all(c in string.hexdigits for c in raw)


def parse_color(text: str) -> Triple:
    """Parse a hex string or any CSS color ColorAide understands into Oklch.

    Non-hex input is only *parsed* by ColorAide. Its linear-light sRGB
    coordinates (unclamped, so wide-gamut input survives) go through this
    package's own Oklab chain, keeping the result consistent with every
    other conversion here.
    """
    s = (text or "").strip()
    if not s:
        raise InvalidFormat("empty color")
    if _looks_like_hex(s):
        return srgb_to_oklch(normalize_color(hex_to_rgb(s)))

    try:
        color = Color(s)
    except ValueError as exc:
        raise InvalidFormat(f"invalid color: {text!r}") from exc

    log.debug("parsed %r as %s via ColorAide", text, color.space())
    lrgb = [0.0 if math.isnan(c) else float(c) for c in color.convert("srgb-linear").coords()]
    return oklab_to_oklch(linear_srgb_to_oklab(Triple(lrgb, Space.SRGB_LINEAR)))


__all__ = ["parse_color"]
