"""
Color math — Figma paints to CSS color strings.

Figma stores color channels as 0-1 floats and gradient geometry as handle
positions in a Y-down unit square. Everything here is pure; bad input raises
immediately and the calling node parser decides what to do with it.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

MIN_VALUE = 0.0
MAX_VALUE = 1.0


class MissingArgumentError(ValueError):
    """A required paint, point or handle position is absent."""


class InvalidArgumentError(ValueError):
    """An argument is present but out of its allowed range."""


def _quantize(value: float, decimals: int) -> Decimal:
    # Half-up on the exact binary value, same digits as JS toFixed
    exp = Decimal(1).scaleb(-decimals)
    return (Decimal(value).quantize(exp, rounding=ROUND_HALF_UP) + 0).quantize(exp)


def format_number(value) -> str:
    """Render a number the way the CSS strings expect it: ``1`` not ``1.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def fixed(value: float, decimals: int = 1) -> str:
    """Fixed-point string with exactly ``decimals`` digits."""
    return str(_quantize(value, decimals))


def round_to(number: float, decimals: int = 6) -> float:
    return float(_quantize(number, decimals))


def clamp_and_scale(quantity: Optional[float] = 0.0, scale: float = 255):
    """Clamp ``quantity`` into [0, 1] and scale it.

    ``scale <= 1`` keeps the fraction (2 decimals), anything above returns the
    rounded integer ``quantity * scale``.
    """
    if scale < 0 or scale > 255:
        raise InvalidArgumentError("Scale value must be between 0 and 255")
    if quantity is None:
        quantity = 0.0
    quantity = min(max(quantity, MIN_VALUE), MAX_VALUE)
    if scale <= 1.0:
        return round_to(quantity, 2)
    return int(_quantize(quantity * scale, 0))


def angle_between(point1: Optional[dict], point2: Optional[dict]) -> float:
    """CSS gradient angle (0deg = up, clockwise) from ``point1`` towards ``point2``."""
    if not point1 or not point2:
        raise MissingArgumentError("Missing point1 and/or point2")
    radians = math.atan2(point2["y"] - point1["y"], point2["x"] - point1["x"])
    return round_to((radians * 180 / math.pi + 450) % 360, 2)


def _channels(color: Optional[dict], opacity: Optional[float]) -> tuple:
    color = color or {}
    r = clamp_and_scale(color.get("r"), 255)
    g = clamp_and_scale(color.get("g"), 255)
    b = clamp_and_scale(color.get("b"), 255)
    # opacity 0 falls back to the color alpha, same as a missing opacity
    a = clamp_and_scale(opacity if opacity else color.get("a"), 1)
    return r, g, b, a


def _rgba(r, g, b, a) -> str:
    return f"rgba({r}, {g}, {b}, {format_number(a)})"


def _stops(paint: dict) -> str:
    stops = paint.get("gradientStops")
    if not stops:
        raise ValueError("Paint has no gradient stops")
    parts = []
    for stop in stops:
        color = _rgba(*_channels(stop.get("color"), stop.get("opacity")))
        position = clamp_and_scale(float(stop.get("position") or 0), 100)
        parts.append(f"{color} {position}%")
    return ", ".join(parts)


def linear_gradient_string(paint: Optional[dict]) -> str:
    if not paint or not paint.get("gradientHandlePositions"):
        raise MissingArgumentError("Missing fills and gradientHandlePositions")
    handles = paint["gradientHandlePositions"]
    if len(handles) < 2:
        raise MissingArgumentError("Linear gradient needs two handle positions")
    stops = _stops(paint)
    degree = angle_between(handles[0], handles[1])
    prefix = f"{format_number(degree)}deg, " if degree else ""
    return f"linear-gradient({prefix}{stops})"


def radial_gradient_string(paint: Optional[dict]) -> str:
    if not paint or not paint.get("gradientHandlePositions"):
        raise MissingArgumentError("Missing fills and gradientHandlePositions")
    handles = paint["gradientHandlePositions"]
    if len(handles) < 3:
        raise MissingArgumentError("Radial gradient needs three handle positions")
    center, axis_y, axis_x = handles[0], handles[1], handles[2]
    width = fixed(center["x"] * 100 - axis_x["x"] * 100)
    height = fixed(axis_y["y"] * 100 - center["y"] * 100)
    position = f"{width}% {height}% at {fixed(center['x'] * 100)}% {fixed(center['y'] * 100)}%"
    return f"radial-gradient({position}, {_stops(paint)})"


def solid_color_string(paint: Optional[dict]) -> str:
    if not paint or paint.get("color") is None:
        raise MissingArgumentError("Missing fills")
    return _rgba(*_channels(paint["color"], paint.get("opacity")))


def paint_to_css(paint: dict) -> str:
    """Dispatch on the paint type."""
    paint_type = paint.get("type")
    if paint_type == "GRADIENT_LINEAR":
        return linear_gradient_string(paint)
    if paint_type in ("GRADIENT_RADIAL", "GRADIENT_DIAMOND"):
        return radial_gradient_string(paint)
    if paint_type == "SOLID":
        return solid_color_string(paint)
    raise InvalidArgumentError(f"Unsupported paint type '{paint_type}'")


def round_decimals(value: float, decimal_places: int = 1) -> float:
    return round_to(value, decimal_places)


def _to_rgb_value(value: float) -> int:
    return int(_quantize(value * 255, 0))


def rgba_string(color: dict) -> str:
    """``rgba(r, g, b, a)`` from a 0-1 Figma color, without clamping."""
    r, g, b = (_to_rgb_value(color.get(c, 0)) for c in ("r", "g", "b"))
    return _rgba(r, g, b, round_decimals(color.get("a", 1), 2))


def rgb_string_alpha_merged(color: dict) -> str:
    """Flatten the alpha channel as if the color sat on a white background."""
    alpha = color.get("a", 1)
    offset = (1 - alpha) * 255
    r, g, b = (int(_quantize(_to_rgb_value(color.get(c, 0)) * alpha + offset, 0)) for c in ("r", "g", "b"))
    return f"rgb({r}, {g}, {b})"
