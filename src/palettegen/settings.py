# settings.py

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .colors import ColorLike, Space, Triple, srgb_to_oklch
from .errors import InvalidConfiguration
from .util import wrap_turn

log = logging.getLogger(__name__)

MIN_COLOR_COUNT = 2


@dataclass(frozen=True)
class PaletteSettings:
    """Inputs for one palette generation call.

    starting_color is an Oklch triple (lightness, chroma, hue in turns);
    its hue is stored wrapped into [0, 1), NaN becoming 0.
    The steps are loosely in [-1, 1]; `saturation` is only read when
    chroma_fixed is set.
    """

    starting_color: ColorLike = (0.25, 0.05, 0.0)

    hue_step: float = 0.0
    saturation_step: float = 0.0
    luminance_step: float = 1.0

    color_count: int = 8

    hue_fixed: bool = False
    luminance_fixed: bool = False
    chroma_fixed: bool = True

    saturation: float = 0.25

    def __post_init__(self) -> None:
        start = self.starting_color
        if isinstance(start, Triple) and start.space is not Space.OKLCH:
            raise InvalidConfiguration(
                f"starting_color must be oklch, got {start.space.value}"
            )
        l, c, h = start
        object.__setattr__(
            self, "starting_color", Triple((l, c, wrap_turn(h)), Space.OKLCH)
        )

        n = self.color_count
        if isinstance(n, bool) or not isinstance(n, numbers.Integral):
            raise InvalidConfiguration(f"color_count must be an integer, got {n!r}")
        if n < MIN_COLOR_COUNT:
            raise InvalidConfiguration(
                f"color_count must be ≥ {MIN_COLOR_COUNT}, got {n}"
            )
        object.__setattr__(self, "color_count", int(n))


def random_settings(
    seed: Optional[int] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    color_count: int = 8,
    saturation_fixed: bool = True,
    luminance_fixed: bool = False,
) -> PaletteSettings:
    """Randomized first-load settings: a dark starting color and loose steps.

    Pass `seed` for reproducible output, or an existing `rng` to draw from.
    """
    rng = rng if rng is not None else np.random.default_rng(seed)

    rgb = rng.random(3) / 4.0
    monochromatic = bool(rng.integers(0, 2))
    settings = PaletteSettings(
        starting_color=srgb_to_oklch(rgb),
        hue_step=float(rng.uniform(-0.66, 0.66)),
        saturation_step=float(rng.uniform(0.0, 0.5)),
        luminance_step=float(rng.uniform(0.25, 1.0)),
        color_count=color_count,
        hue_fixed=monochromatic,
        luminance_fixed=luminance_fixed,
        chroma_fixed=not monochromatic and saturation_fixed,
        saturation=float(rng.random() / 2.0),
    )
    log.debug("random settings: %s", settings)
    return settings


__all__ = ["MIN_COLOR_COUNT", "PaletteSettings", "random_settings"]
