import colorsys
import math

import numpy as np
import pytest
from coloraide import Color

from palettegen.colors import (
    Space,
    Triple,
    clamp_color,
    hex_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    linear_srgb_to_oklab,
    linear_to_srgb,
    normalize_color,
    oklab_to_linear_srgb,
    oklab_to_oklch,
    oklch_to_oklab,
    oklch_to_srgb,
    quantize_color,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
    srgb_to_linear,
    srgb_to_oklch,
)
from palettegen.errors import InvalidFormat, PaletteError

SAMPLES = [
    (0.0, 0.0, 0.0),
    (1.0, 1.0, 1.0),
    (0.5, 0.5, 0.5),
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 1.0, 0.0),
    (0.0, 1.0, 1.0),
    (1.0, 0.0, 1.0),
    (0.2, 0.7, 0.1),
    (0.9, 0.1, 0.3),
    (0.05, 0.2, 0.9),
    (0.8, 0.7, 0.1),
    (0.001, 0.002, 0.0025),
] + [tuple(c) for c in np.random.default_rng(1234).random((24, 3))]

CHROMATIC = [c for c in SAMPLES if max(c) - min(c) > 1e-3]


def close(a, b, atol=1e-4):
    return np.allclose(np.asarray(tuple(a)), np.asarray(tuple(b)), atol=atol)


# --- round trips -------------------------------------------------------------


@pytest.mark.parametrize("rgb", SAMPLES)
def test_oklch_round_trip(rgb):
    assert close(oklch_to_srgb(srgb_to_oklch(rgb)), rgb)


@pytest.mark.parametrize("rgb", SAMPLES)
def test_hsl_round_trip(rgb):
    assert close(hsl_to_rgb(rgb_to_hsl(rgb)), rgb)


@pytest.mark.parametrize("rgb", SAMPLES)
def test_hsv_round_trip(rgb):
    assert close(hsv_to_rgb(rgb_to_hsv(rgb)), rgb)


def test_transfer_function_is_invertible():
    for v in np.linspace(0.0, 1.0, 101):
        rgb = (v, v / 2, 1.0 - v)
        assert close(linear_to_srgb(srgb_to_linear(rgb)), rgb, atol=1e-12)


def test_transfer_function_thresholds():
    lin = srgb_to_linear((0.04045, 0.0, 1.0))
    assert lin[0] == pytest.approx(0.04045 / 12.92)
    assert lin[1] == 0.0
    assert lin[2] == pytest.approx(1.0)

    enc = linear_to_srgb((0.0031308, 0.5, 1.0))
    assert enc[0] == pytest.approx(0.0031308 * 12.92)
    assert enc[1] == pytest.approx(1.055 * 0.5 ** (1 / 2.4) - 0.055)
    assert enc[2] == pytest.approx(1.0)


# --- against independent implementations ------------------------------------


@pytest.mark.parametrize("rgb", SAMPLES)
def test_oklab_matches_coloraide(rgb):
    ours = linear_srgb_to_oklab(srgb_to_linear(rgb))
    ref = Color("srgb", list(rgb)).convert("oklab").coords()
    assert close(ours, ref, atol=1e-3)


@pytest.mark.parametrize("rgb", CHROMATIC)
def test_oklch_hue_matches_coloraide(rgb):
    _, c, h = srgb_to_oklch(rgb)
    ref_h = Color("srgb", list(rgb)).convert("oklch")["hue"] / 360.0
    # compare on the circle
    d = abs(h - ref_h) % 1.0
    assert min(d, 1.0 - d) < 1e-3 or c < 0.02


@pytest.mark.parametrize("rgb", SAMPLES)
def test_hsl_matches_colorsys(rgb):
    h, l, s = colorsys.rgb_to_hls(*rgb)
    assert close(rgb_to_hsl(rgb), (h, s, l), atol=1e-9)


@pytest.mark.parametrize("rgb", SAMPLES)
def test_hsv_matches_colorsys(rgb):
    assert close(rgb_to_hsv(rgb), colorsys.rgb_to_hsv(*rgb), atol=1e-9)


# --- achromatic and degenerate hue ------------------------------------------


def test_achromatic_fixed_points():
    assert close(srgb_to_oklch((0.0, 0.0, 0.0)), (0.0, 0.0, 0.0), atol=1e-7)
    assert close(srgb_to_oklch((1.0, 1.0, 1.0)), (1.0, 0.0, 0.0), atol=1e-7)
    assert srgb_to_oklch((1.0, 1.0, 1.0))[2] == 0.0

    gray = (0.5, 0.5, 0.5)
    assert rgb_to_hsl(gray)[1] == 0.0
    assert rgb_to_hsv(gray)[1] == 0.0
    assert rgb_to_hsl(gray)[0] == 0.0


def test_black_and_white_hsl_saturation_is_zero():
    assert tuple(rgb_to_hsl((0.0, 0.0, 0.0))) == (0.0, 0.0, 0.0)
    assert tuple(rgb_to_hsl((1.0, 1.0, 1.0))) == (0.0, 0.0, 1.0)
    assert tuple(rgb_to_hsv((0.0, 0.0, 0.0))) == (0.0, 0.0, 0.0)


def test_nan_hue_is_treated_as_zero():
    nan = float("nan")
    assert tuple(hsl_to_rgb((nan, 0.6, 0.4))) == tuple(hsl_to_rgb((0.0, 0.6, 0.4)))
    assert tuple(hsv_to_rgb((nan, 0.6, 0.4))) == tuple(hsv_to_rgb((0.0, 0.6, 0.4)))
    lab = oklch_to_oklab((0.5, 0.1, nan))
    assert not any(math.isnan(x) for x in lab)
    assert close(lab, (0.5, 0.1, 0.0), atol=1e-12)


def test_zero_saturation_is_exactly_gray():
    for h in (0.0, 0.3, 0.999, 5.2):
        assert tuple(hsl_to_rgb((h, 0.0, 0.37))) == (0.37, 0.37, 0.37)
        assert tuple(hsv_to_rgb((h, 0.0, 0.37))) == (0.37, 0.37, 0.37)


@pytest.mark.parametrize("rgb", CHROMATIC)
def test_hue_is_periodic(rgb):
    l, c, h = srgb_to_oklch(rgb)
    assert close(oklch_to_srgb((l, c, h + 1.0)), oklch_to_srgb((l, c, h)), atol=1e-9)

    h, s, lum = rgb_to_hsl(rgb)
    assert close(hsl_to_rgb((h + 1.0, s, lum)), hsl_to_rgb((h, s, lum)), atol=1e-9)
    assert close(hsl_to_rgb((h - 1.0, s, lum)), hsl_to_rgb((h, s, lum)), atol=1e-9)

    h, s, v = rgb_to_hsv(rgb)
    assert close(hsv_to_rgb((h + 1.0, s, v)), hsv_to_rgb((h, s, v)), atol=1e-9)


def test_hues_are_wrapped_turns():
    for rgb in SAMPLES:
        for conv in (rgb_to_hsl, rgb_to_hsv):
            assert 0.0 <= conv(rgb)[0] < 1.0
        assert 0.0 <= srgb_to_oklch(rgb)[2] < 1.0
    # pure blue sits at two thirds of a turn
    assert rgb_to_hsl((0.0, 0.0, 1.0))[0] == pytest.approx(2 / 3)


def test_polar_conversion():
    lch = oklab_to_oklch((0.5, 0.0, -0.1))
    assert close(lch, (0.5, 0.1, 0.75), atol=1e-12)
    assert close(oklch_to_oklab(lch), (0.5, 0.0, -0.1), atol=1e-12)


def test_out_of_gamut_oklch_does_not_raise():
    rgb = oklch_to_srgb((0.9, 0.4, 0.7))
    assert not all(0.0 <= c <= 1.0 for c in rgb)
    assert all(0.0 <= c <= 1.0 for c in clamp_color(rgb))
    assert close(oklab_to_linear_srgb(linear_srgb_to_oklab((-0.1, 0.5, 1.2))), (-0.1, 0.5, 1.2))


# --- quantization and hex ---------------------------------------------------


def test_quantize_rounds_half_up_and_clamps():
    assert tuple(quantize_color((1.0, 0.0, 0.999))) == (255, 0, 255)
    assert tuple(quantize_color((0.5, -0.2, 1.7))) == (128, 0, 255)
    assert all(isinstance(c, int) for c in quantize_color((0.1, 0.2, 0.3)))


def test_normalize_divides_by_255():
    assert close(normalize_color((0, 51, 255)), (0.0, 0.2, 1.0), atol=1e-12)


@pytest.mark.parametrize("text", ["#03F", "03F", "#0033ff", "0033FF", "#0033Ff"])
def test_hex_to_rgb_accepts_all_forms(text):
    assert tuple(hex_to_rgb(text)) == (0, 51, 255)


@pytest.mark.parametrize(
    "text",
    [
        "", "#", "#12", "#1234", "#12345", "#1234567", "ggg", "#12345g", " #fff", None,
        "#0033ff\n", "#03F\n", "0033ff\n",
    ],
)
def test_hex_to_rgb_rejects_other_patterns(text):
    with pytest.raises(InvalidFormat):
        hex_to_rgb(text)


def test_invalid_format_is_a_value_error():
    with pytest.raises(ValueError):
        hex_to_rgb("nope")
    assert issubclass(InvalidFormat, PaletteError)


def test_rgb_to_hex():
    assert rgb_to_hex((0, 51, 255)) == "#0033ff"
    assert rgb_to_hex((0, 0, 0)) == "#000000"
    assert rgb_to_hex(hex_to_rgb("#ABC")) == "#aabbcc"


# --- space tags ---------------------------------------------------------------


def test_outputs_carry_their_space():
    rgb = (0.2, 0.4, 0.6)
    assert srgb_to_linear(rgb).space is Space.SRGB_LINEAR
    assert linear_srgb_to_oklab(srgb_to_linear(rgb)).space is Space.OKLAB
    assert srgb_to_oklch(rgb).space is Space.OKLCH
    assert oklch_to_srgb(srgb_to_oklch(rgb)).space is Space.SRGB
    assert rgb_to_hsl(rgb).space is Space.HSL
    assert rgb_to_hsv(rgb).space is Space.HSV
    assert quantize_color(rgb).space is Space.SRGB_U8
    assert hex_to_rgb("#fff").space is Space.SRGB_U8


def test_mismatched_tag_is_rejected():
    hsl = rgb_to_hsl((0.2, 0.4, 0.6))
    with pytest.raises(TypeError):
        hsv_to_rgb(hsl)
    with pytest.raises(TypeError):
        oklch_to_srgb(hsl)
    with pytest.raises(TypeError):
        rgb_to_hex(Triple((0.1, 0.2, 0.3), Space.SRGB))


def test_triple_behaves_like_a_tuple():
    t = Triple([0.1, 0.2, 0.3], "oklch")
    l, c, h = t
    assert (l, c, h) == (0.1, 0.2, 0.3)
    assert t[1] == 0.2 and len(t) == 3
    assert t.space is Space.OKLCH
    assert np.array_equal(t.to_numpy(), np.array([0.1, 0.2, 0.3]))
    with pytest.raises(ValueError):
        Triple((0.1, 0.2), Space.SRGB)


def test_clamp_color_keeps_tag():
    lab = Triple((1.2, -0.3, 0.4), Space.OKLAB)
    clamped = clamp_color(lab)
    assert clamped.space is Space.OKLAB
    assert tuple(clamped) == (1.0, 0.0, 0.4)
    assert clamp_color((2.0, 0.5, -1.0)).space is Space.SRGB
