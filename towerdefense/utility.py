"""Shared helpers: randomness, vector math, targeting, colours and tile coordinates."""

from __future__ import annotations

import math
import random
from collections.abc import Hashable, Iterable, Sequence
from typing import Optional, Protocol, TypeVar

from pygame import Color
from pygame.math import Vector2

TILE_SIZE = 120.0

_rng = random.Random()


class Targetable(Protocol):
    """What targeting needs from an enemy."""

    health: int
    incoming_damage: int
    pixel_position: Vector2

    def is_dead(self) -> bool: ...


T = TypeVar("T", bound=Targetable)


def random_int(low: int, high: int) -> int:
    """Return a random integer in the closed range [low, high]."""
    return _rng.randint(low, high)


def random_float(low: float, high: float) -> float:
    """Return a random float between low and high."""
    return _rng.uniform(low, high)


def random_pitch(variation_percent: float) -> float:
    """Return a pitch around 1.0 varying by up to +/- variation_percent."""
    factor = _rng.uniform(-0.5, 0.5)
    return 1.0 + factor * 2.0 * variation_percent


def interpolate(previous: Sequence[float], current: Sequence[float], factor: float) -> Vector2:
    """Linearly blend two positions; factor 0 gives previous, 1 gives current."""
    return Vector2(previous) * (1.0 - factor) + Vector2(current) * factor


def normalize(vector: Sequence[float]) -> Vector2:
    """Return the unit vector in the same direction, or the zero vector."""
    v = Vector2(vector)
    length = math.hypot(v.x, v.y)
    if length != 0.0:
        return v / length
    return Vector2(0.0, 0.0)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def distance_squared(a: Sequence[float], b: Sequence[float]) -> float:
    """Squared Euclidean distance between two points."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    return dx * dx + dy * dy


def angle_to_vector(angle_degrees: float) -> Vector2:
    """Unit direction vector for an angle in degrees."""
    radians = math.radians(angle_degrees)
    return Vector2(math.cos(radians), math.sin(radians))


def predict_target_intercept(
    shooter_position: Sequence[float],
    target_position: Sequence[float],
    target_velocity: Sequence[float],
    projectile_speed: float,
) -> Optional[Vector2]:
    """Point where a projectile of the given speed meets a target moving at constant velocity.

    Returns None when no interception is possible.
    """
    shooter = Vector2(shooter_position)
    target = Vector2(target_position)
    velocity = Vector2(target_velocity)
    to_target = target - shooter

    a = velocity.dot(velocity) - projectile_speed * projectile_speed
    b = 2.0 * to_target.dot(velocity)
    c = to_target.dot(to_target)
    discriminant = b * b - 4.0 * a * c

    if discriminant < 0 or abs(a) < 1e-6:
        return None

    root = math.sqrt(discriminant)
    t1 = (-b - root) / (2.0 * a)
    t2 = (-b + root) / (2.0 * a)

    t = min(t1, t2)
    if t < 0.0:
        t = max(t1, t2)
    if t < 0.0:
        return None
    return target + velocity * t


def closest_enemy_in_range(
    origin: Sequence[float],
    enemies: Iterable[T],
    max_range: float,
    dont_overkill: bool = True,
) -> Optional[T]:
    """Nearest living enemy within max_range of origin, or None.

    With dont_overkill, enemies whose incoming damage already covers their
    health are ignored.
    """
    closest: Optional[T] = None
    closest_distance_sq = max_range * max_range

    for enemy in enemies:
        if enemy.is_dead():
            continue
        if dont_overkill and enemy.health - enemy.incoming_damage <= 0:
            continue
        distance_sq = distance_squared(origin, enemy.pixel_position)
        if distance_sq <= closest_distance_sq:
            closest_distance_sq = distance_sq
            closest = enemy
    return closest


def blend_colors(base: Color | Sequence[int], overlay: Color | Sequence[int]) -> Color:
    """Blend overlay onto base using the overlay's alpha; the result is opaque."""
    base = Color(base)
    overlay = Color(overlay)
    alpha = overlay.a / 255.0

    def channel(b: int, o: int) -> int:
        return int(b * (1.0 - alpha) + o * alpha)

    return Color(
        channel(base.r, overlay.r),
        channel(base.g, overlay.g),
        channel(base.b, overlay.b),
        255,
    )


def tile_to_pixel_position(col: int, row: int, center: bool = True) -> Vector2:
    """Pixel position of a tile's centre, or of its top-left corner."""
    offset = TILE_SIZE / 2.0 if center else 0.0
    return Vector2(col * TILE_SIZE + offset, row * TILE_SIZE + offset)


def pixel_to_tile_position(pixel_position: Sequence[float]) -> tuple[int, int]:
    """Tile coordinates containing a pixel position (truncated toward zero)."""
    return int(pixel_position[0] / TILE_SIZE), int(pixel_position[1] / TILE_SIZE)


class ReleaseTracker:
    """Detects the frame on which a held key or button is let go."""

    def __init__(self) -> None:
        self._pressed: dict[Hashable, bool] = {}

    def released(self, key: Hashable, is_pressed_now: bool) -> bool:
        """Record the current state and report whether the key was just released."""
        was_pressed = self._pressed.get(key, False)
        self._pressed[key] = is_pressed_now
        return was_pressed and not is_pressed_now


def remove_trailing_zeros(number: float) -> str:
    """Format with two decimals, dropping trailing zeros and a bare decimal point."""
    text = f"{number:.2f}".rstrip("0")
    if text.endswith("."):
        text = text[:-1]
    return text