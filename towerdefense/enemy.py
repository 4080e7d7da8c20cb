"""Enemies that walk the path, take damage, get slowed and burst apart on death."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

import pygame
from pygame.math import Vector2

from towerdefense.death_effect import DeathEffect
from towerdefense.tile import TileType
from towerdefense.utility import (
    TILE_SIZE,
    angle_to_vector,
    blend_colors,
    interpolate,
    pixel_to_tile_position,
    random_float,
    random_int,
    tile_to_pixel_position,
)

_RIGHT = Vector2(1.0, 0.0)
_UP = Vector2(0.0, -1.0)
_DOWN = Vector2(0.0, 1.0)
_WALKABLE = frozenset({TileType.PATHABLE, TileType.END})


class _Field(Protocol):
    @property
    def size(self) -> tuple[int, int]: ...

    def tile_type_at(self, tile_position: tuple[int, int]) -> TileType: ...


class StatusEffectType(Enum):
    SLOW = auto()


@dataclass
class StatusEffect:
    """A timed effect on an enemy, such as a slow."""

    effect_type: StatusEffectType
    overlay_color: pygame.Color
    amount: float  # 0.5 means -50% speed
    duration: float  # seconds
    timer: float = 0.0


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


class Enemy:
    """A circle that follows the path from the start tile off the right edge."""

    BASE_SPEED = 60.0
    BASE_HEALTH = 5
    DEFAULT_COLOR = pygame.Color(71, 28, 28)
    FLASH_COLOR = pygame.Color(255, 255, 255)
    DAMAGE_FLASH_DURATION = 0.1

    def __init__(self, spawn_tile: tuple[int, int], speed: float, health: int) -> None:
        self.size = 15.0
        self.default_color = pygame.Color(self.DEFAULT_COLOR)
        self.current_color = pygame.Color(self.DEFAULT_COLOR)
        self.direction = Vector2(_RIGHT)
        self.base_speed = speed
        self.current_speed = speed
        self.damage_flash_timer = 0.0
        self.health = int(health)
        self.incoming_damage = 0
        self.status_effects: list[StatusEffect] = []
        self.death_effects: list[DeathEffect] = []
        self._reached_end = False
        self._running_death_effect = False

        position = tile_to_pixel_position(spawn_tile[0], spawn_tile[1])
        position.x -= self.size + TILE_SIZE
        self.position_current = position
        self.position_previous = Vector2(position)
        self._previous_tile = pixel_to_tile_position(position)

        raw_value = self.health * 0.6 + speed * 0.4
        self.worth = min(max(int(raw_value / 30.0), 1), 15)

    @property
    def pixel_position(self) -> Vector2:
        return self.position_current

    def velocity(self) -> Vector2:
        return self.direction * self.current_speed

    def is_dead(self) -> bool:
        """True once health is gone and the death burst has finished."""
        return self.health <= 0 and not self._running_death_effect

    def has_reached_end(self) -> bool:
        return self._reached_end

    def update(self, fixed_time_step: float, grid: _Field) -> None:
        """Steer along the path, tick effects and move one step."""
        current_tile = pixel_to_tile_position(self.position_current)
        if current_tile != self._previous_tile:
            center = tile_to_pixel_position(current_tile[0], current_tile[1])
            if self._is_past_center(center):
                self.position_current = Vector2(center)
                self._previous_tile = current_tile
                if self._is_walkable(grid, 1, 0):
                    self.direction = Vector2(_RIGHT)
                elif self.direction != _UP and self._is_walkable(grid, 0, 1):
                    self.direction = Vector2(_DOWN)
                elif self.direction != _DOWN and self._is_walkable(grid, 0, -1):
                    self.direction = Vector2(_UP)

        self.update_status_effects(fixed_time_step)
        self.reset_incoming_damage()

        if self.damage_flash_timer > 0.0:
            self.damage_flash_timer = max(self.damage_flash_timer - fixed_time_step, 0.0)

        for effect in self.death_effects:
            effect.update(fixed_time_step)
        self.death_effects = [e for e in self.death_effects if not e.is_expired()]
        if self._running_death_effect and not self.death_effects:
            self._running_death_effect = False

        self.position_previous = Vector2(self.position_current)
        self.position_current += self.direction * self.current_speed * fixed_time_step
        if self.position_current.x >= grid.size[0] * TILE_SIZE + self.size:
            self._reached_end = True

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        if self.damage_flash_timer > 0.0:
            t = self.damage_flash_timer / self.DAMAGE_FLASH_DURATION
            color = pygame.Color(self.FLASH_COLOR)
            color.a = int(min(max(255 * t, 0), 255))
        else:
            color = self.current_color

        for effect in self.death_effects:
            effect.render(surface, interpolation_factor)

        if not self._running_death_effect:
            center = interpolate(self.position_previous, self.position_current, interpolation_factor)
            _draw_circle(surface, color, center, self.size)

    def apply_status_effect(self, effect: StatusEffect) -> None:
        """Apply an effect, refreshing an existing one of the same type."""
        for existing in self.status_effects:
            if existing.effect_type is effect.effect_type:
                existing.amount = effect.amount
                existing.duration = effect.duration
                existing.timer = effect.timer
                return
        self.status_effects.append(dataclasses.replace(effect))

    def update_status_effects(self, fixed_time_step: float) -> None:
        """Tick effects, drop expired ones and recompute speed and tint."""
        slow_factor = 1.0
        overlay = self.default_color
        remaining = []
        for effect in self.status_effects:
            effect.timer += fixed_time_step
            if effect.timer >= effect.duration:
                continue
            if effect.effect_type is StatusEffectType.SLOW:
                overlay = effect.overlay_color
                slow_factor = min(slow_factor, 1.0 - effect.amount)
            remaining.append(effect)
        self.status_effects = remaining

        self.current_color = blend_colors(self.default_color, overlay)
        self.current_speed = self.base_speed * slow_factor

    def take_damage(self, damage: int) -> None:
        self.health -= damage
        if self.health <= 0:
            self.health = 0
            self._start_death_effect()
        self.damage_flash_timer = self.DAMAGE_FLASH_DURATION

    def add_incoming_damage(self, damage: int) -> None:
        self.incoming_damage += damage

    def reset_incoming_damage(self) -> None:
        self.incoming_damage = 0

    def _start_death_effect(self) -> None:
        self._running_death_effect = True
        for _ in range(random_int(4, 6)):
            radius = float(random_int(3, 6))
            angle = random_float(0.0, 360.0)
            speed = random_float(50.0, 100.0)
            self.death_effects.append(
                DeathEffect(
                    radius=radius,
                    color=pygame.Color(self.current_color),
                    position_current=Vector2(self.position_current),
                    velocity=angle_to_vector(angle) * speed,
                    lifetime=random_float(0.4, 0.6),
                )
            )

    def _is_past_center(self, center: Vector2) -> bool:
        d = self.direction
        p = self.position_current
        horizontal = d.x != 0 and ((d.x > 0 and p.x >= center.x) or (d.x < 0 and p.x <= center.x))
        vertical = d.y != 0 and ((d.y > 0 and p.y >= center.y) or (d.y < 0 and p.y <= center.y))
        return horizontal or vertical

    def _is_walkable(self, grid: _Field, dx: int, dy: int) -> bool:
        col, row = pixel_to_tile_position(self.position_current)
        return grid.tile_type_at((col + dx, row + dy)) in _WALKABLE