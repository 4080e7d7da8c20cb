"""Particles that fly outward and fade when an enemy dies."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

import pygame
from pygame.math import Vector2

from towerdefense.utility import interpolate


def _draw_circle(surface: pygame.Surface, color: pygame.Color, center: Vector2, radius: float) -> None:
    if radius <= 0 or color.a == 0:
        return
    if color.a == 255:
        pygame.draw.circle(surface, color, (center.x, center.y), radius)
        return
    size = int(math.ceil(radius * 2)) + 2
    layer = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(layer, color, (size / 2, size / 2), radius)
    surface.blit(layer, (round(center.x - size / 2), round(center.y - size / 2)))


@dataclass
class DeathEffect:
    """One fading particle moving at constant velocity."""

    radius: float
    color: pygame.Color
    position_current: Vector2
    velocity: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    lifetime: float = 0.5
    timer: float = 0.0
    position_previous: Optional[Vector2] = None

    def __post_init__(self) -> None:
        self.color = pygame.Color(self.color)
        self.position_current = Vector2(self.position_current)
        self.velocity = Vector2(self.velocity)
        if self.position_previous is None:
            self.position_previous = Vector2(self.position_current)
        else:
            self.position_previous = Vector2(self.position_previous)

    def update(self, fixed_time_step: float) -> None:
        """Advance the particle and fade it toward transparent over its lifetime."""
        self.timer += fixed_time_step
        self.position_previous = Vector2(self.position_current)
        self.position_current += self.velocity * fixed_time_step

        alpha = 255.0 * (1.0 - self.timer / self.lifetime)
        self.color.a = int(min(max(alpha, 0.0), 255.0))

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        center = interpolate(self.position_previous, self.position_current, interpolation_factor)
        _draw_circle(surface, self.color, center, self.radius)

    def is_expired(self) -> bool:
        return self.timer >= self.lifetime