# cellarena/utils/helpers.py
"""Utility functions and helpers."""

import math
from typing import Tuple

from cellarena.config.settings import (
    MASS_DISPLAY_DIVISOR,
    MIN_RENDER_RADIUS,
    RADIUS_FACTOR,
)


def mass_to_radius(mass: float, factor: float = RADIUS_FACTOR) -> float:
    """Calculate radius from mass; r^2 is proportional to mass."""
    return factor * math.sqrt(max(mass, 0.0))


def render_radius(mass: float, factor: float = RADIUS_FACTOR) -> float:
    """Radius used for drawing only, never for collisions."""
    return max(MIN_RENDER_RADIUS, mass_to_radius(mass, factor))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def dist2(ax: float, ay: float, bx: float, by: float) -> float:
    """Squared distance between two points."""
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy


def clamp_to_world(
    x: float, y: float, radius: float, width: float, height: float
) -> Tuple[float, float]:
    """Clamp position so a circle of ``radius`` stays inside the world.

    A circle wider than the world sits in the middle of that axis.
    """
    if 2 * radius >= width:
        x = width / 2
    else:
        x = clamp(x, radius, width - radius)
    if 2 * radius >= height:
        y = height / 2
    else:
        y = clamp(y, radius, height - radius)
    return x, y


def unit_vector(
    dx: float, dy: float, default: Tuple[float, float] = (1.0, 0.0)
) -> Tuple[float, float]:
    """Normalize (dx, dy); a near-zero vector gives ``default`` instead of NaN."""
    length = math.hypot(dx, dy)
    if length < 1e-9:
        return default
    return dx / length, dy / length


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b by factor t."""
    return a + (b - a) * t


def display_mass(mass: float) -> str:
    """Mass as shown in the UI, e.g. 100 -> '10.0'."""
    return f"{mass / MASS_DISPLAY_DIVISOR:.1f}"


def random_hsl(rng, saturation: int, lightness: int) -> str:
    return f"hsl({rng.randrange(0, 360)},{saturation}%,{lightness}%)"
