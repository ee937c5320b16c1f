"""
colors 單元測試
clamp / 四捨五入 / 角度與漸層字串。
"""
import pytest

from figmakeys.colors import (
    InvalidArgumentError,
    MissingArgumentError,
    angle_between,
    clamp_and_scale,
    fixed,
    format_number,
    linear_gradient_string,
    paint_to_css,
    radial_gradient_string,
    rgb_string_alpha_merged,
    rgba_string,
    round_decimals,
    round_to,
    solid_color_string,
)


# ─── clamp_and_scale ────────────────────────────────────────────────────────

def test_clamp_and_scale_255():
    assert clamp_and_scale(0.5, 255) == 128


def test_clamp_and_scale_fraction_keeps_two_decimals():
    assert clamp_and_scale(0.5, 1) == 0.5
    assert clamp_and_scale(0.123, 1) == 0.12


def test_clamp_and_scale_rejects_scale_above_255():
    with pytest.raises(InvalidArgumentError):
        clamp_and_scale(0.5, 256)


def test_clamp_and_scale_clamps_out_of_range():
    assert clamp_and_scale(-1, 255) == 0
    assert clamp_and_scale(3, 255) == 255
    assert clamp_and_scale(None, 255) == 0


def test_clamp_and_scale_monotonic_integers():
    values = [clamp_and_scale(i / 100, 255) for i in range(101)]
    assert values == sorted(values)
    assert all(isinstance(v, int) and 0 <= v <= 255 for v in values)


# ─── round_to ───────────────────────────────────────────────────────────────

def test_round_to_decimals():
    assert round_to(1.234567, 3) == 1.235


def test_round_to_default_six_decimals():
    assert round_to(1.234567) == 1.234567
    assert round_to(1.23456789) == 1.234568


def test_round_decimals_one_place():
    assert round_decimals(18.75) == 18.8


def test_fixed_and_format_number():
    assert fixed(-69.99999999999999) == "-70.0"
    assert fixed(-0.01) == "0.0"
    assert format_number(1.0) == "1"
    assert format_number(0.5) == "0.5"


# ─── angle_between ──────────────────────────────────────────────────────────

def test_angle_between_diagonal():
    assert angle_between({"x": 0, "y": 0}, {"x": 1, "y": 1}) == 135


def test_angle_between_straight_down_is_180():
    assert angle_between({"x": 0.5, "y": 0}, {"x": 0.5, "y": 1}) == 180


def test_angle_between_missing_point():
    with pytest.raises(MissingArgumentError):
        angle_between({"x": 0, "y": 0}, None)
    with pytest.raises(MissingArgumentError):
        angle_between(None, {"x": 0, "y": 0})


# ─── linear_gradient_string ─────────────────────────────────────────────────

def test_linear_gradient_string():
    paint = {
        "type": "GRADIENT_LINEAR",
        "gradientHandlePositions": [{"x": 0, "y": 0}, {"x": 1, "y": 1}],
        "gradientStops": [
            {"color": {"r": 1, "g": 0, "b": 0, "a": 1}, "position": 0},
            {"color": {"r": 0, "g": 1, "b": 0, "a": 1}, "position": 50},
            {"color": {"r": 0, "g": 0, "b": 1, "a": 1}, "position": 100},
        ],
    }
    assert linear_gradient_string(paint) == (
        "linear-gradient(135deg, rgba(255, 0, 0, 1) 0%, rgba(0, 255, 0, 1) 100%, rgba(0, 0, 255, 1) 100%)"
    )


def test_linear_gradient_fractional_positions_and_stop_opacity():
    paint = {
        "gradientHandlePositions": [{"x": 0.5, "y": 0}, {"x": 0.5, "y": 1}],
        "gradientStops": [
            {"color": {"r": 0, "g": 0, "b": 0, "a": 1}, "position": 0.25, "opacity": 0.4},
            {"color": {"r": 1, "g": 1, "b": 1, "a": 0.5}, "position": 1},
        ],
    }
    assert linear_gradient_string(paint) == (
        "linear-gradient(180deg, rgba(0, 0, 0, 0.4) 25%, rgba(255, 255, 255, 0.5) 100%)"
    )


def test_linear_gradient_missing_paint():
    with pytest.raises(MissingArgumentError):
        linear_gradient_string(None)


def test_linear_gradient_missing_handles():
    with pytest.raises(MissingArgumentError):
        linear_gradient_string({"gradientStops": [{"color": {}, "position": 0}]})


def test_linear_gradient_missing_stops():
    paint = {"gradientHandlePositions": [{"x": 0, "y": 0}, {"x": 1, "y": 1}]}
    with pytest.raises(ValueError):
        linear_gradient_string(paint)
    with pytest.raises(ValueError):
        linear_gradient_string({**paint, "gradientStops": []})


# ─── radial_gradient_string ─────────────────────────────────────────────────

def test_radial_gradient_string():
    paint = {
        "type": "GRADIENT_RADIAL",
        "gradientHandlePositions": [
            {"x": 0.2, "y": 0.3},
            {"x": 0.5, "y": 0.6},
            {"x": 0.9, "y": 0.8},
        ],
        "gradientStops": [
            {"color": {"r": 255, "g": 0, "b": 0, "a": 1}, "position": 0},
            {"color": {"r": 0, "g": 255, "b": 0, "a": 0.5}, "position": 50},
            {"color": {"r": 0, "g": 0, "b": 255, "a": 0.2}, "position": 100},
        ],
    }
    assert radial_gradient_string(paint) == (
        "radial-gradient(-70.0% 30.0% at 20.0% 30.0%, "
        "rgba(255, 0, 0, 1) 0%, rgba(0, 255, 0, 0.5) 100%, rgba(0, 0, 255, 0.2) 100%)"
    )


def test_radial_gradient_missing_paint():
    with pytest.raises(MissingArgumentError):
        radial_gradient_string(None)


def test_radial_gradient_needs_three_handles():
    paint = {
        "gradientHandlePositions": [{"x": 0, "y": 0}, {"x": 1, "y": 1}],
        "gradientStops": [{"color": {"r": 1, "g": 1, "b": 1, "a": 1}, "position": 0}],
    }
    with pytest.raises(MissingArgumentError):
        radial_gradient_string(paint)


# ─── solid_color_string ─────────────────────────────────────────────────────

def test_solid_color_string_prefers_paint_opacity():
    paint = {"type": "SOLID", "color": {"r": 255, "g": 0, "b": 0, "a": 1}, "opacity": 0.5}
    assert solid_color_string(paint) == "rgba(255, 0, 0, 0.5)"


def test_solid_color_string_uses_color_alpha():
    paint = {"type": "SOLID", "color": {"r": 0, "g": 0.5, "b": 1, "a": 0.75}}
    assert solid_color_string(paint) == "rgba(0, 128, 255, 0.75)"


def test_solid_color_string_missing_paint():
    with pytest.raises(MissingArgumentError):
        solid_color_string(None)
    with pytest.raises(MissingArgumentError):
        solid_color_string({"type": "SOLID"})


def test_paint_to_css_dispatch():
    assert paint_to_css({"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}) == "rgba(255, 255, 255, 1)"
    with pytest.raises(InvalidArgumentError):
        paint_to_css({"type": "IMAGE"})


# ─── rgba helpers ───────────────────────────────────────────────────────────

def test_rgba_string_from_figma_color():
    color = {"r": 127 / 255, "g": 127 / 255, "b": 127 / 255, "a": 0.5}
    assert rgba_string(color) == "rgba(127, 127, 127, 0.5)"


def test_rgb_string_alpha_merged_on_white():
    assert rgb_string_alpha_merged({"r": 0, "g": 0, "b": 0, "a": 0.25}) == "rgb(191, 191, 191)"
    assert rgb_string_alpha_merged({"r": 1, "g": 0, "b": 0, "a": 1}) == "rgb(255, 0, 0)"
