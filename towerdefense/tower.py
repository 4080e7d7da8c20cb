"""Shared behaviour of every tower: level table, upgrades, selling and drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import pygame
from pygame.math import Vector2

from towerdefense.enemy import Enemy
from towerdefense.sound import SoundManager
from towerdefense.tower_registry import LevelAttributes, TowerType, metadata_for
from towerdefense.utility import interpolate, pixel_to_tile_position, tile_to_pixel_position

RANGE_FILL_COLOR = pygame.Color(0, 0, 0, 15)
RANGE_OUTLINE_COLOR = pygame.Color(0, 0, 0, 50)
RANGE_OUTLINE_THICKNESS = 2
SELECTION_OUTLINE_COLOR = pygame.Color(255, 255, 255, 255)
SELECTION_OUTLINE_THICKNESS = 4
BODY_SIZES = (80, 60, 40)


@dataclass
class Bullet:
    """A projectile travelling in a straight line from its tower."""

    position_current: Vector2
    direction: Vector2
    radius: float
    color: pygame.Color
    position_previous: Optional[Vector2] = None
    has_hit_enemy: bool = False

    def __post_init__(self) -> None:
        self.position_current = Vector2(self.position_current)
        self.direction = Vector2(self.direction)
        self.color = pygame.Color(self.color)
        if self.position_previous is None:
            self.position_previous = Vector2(self.position_current)
        else:
            self.position_previous = Vector2(self.position_previous)


class Tower:
    """A tower standing on one tile, with up to three upgrade levels."""

    def __init__(
        self,
        tower_type: TowerType,
        color: pygame.Color | Sequence[int],
        color2: pygame.Color | Sequence[int],
        color3: pygame.Color | Sequence[int],
        tile_position: tuple[int, int],
    ) -> None:
        metadata = metadata_for(tower_type)
        self.tower_type = tower_type
        self.attributes: tuple[LevelAttributes, ...] = metadata.attributes
        self.colors = (pygame.Color(color), pygame.Color(color2), pygame.Color(color3))
        self.position = tile_to_pixel_position(tile_position[0], tile_position[1])
        self.is_selected = False
        self.time_since_last_shot = 0.0
        self.bullet_speed = 0.0
        self.bullet_color = pygame.Color(0, 0, 0)
        self.bullets: list[Bullet] = []
        self.level = 0
        self.marked_for_sale = False
        self.marked_for_upgrade = False
        self.range_circle_visible = False

    @property
    def name(self) -> str:
        return metadata_for(self.tower_type).name

    @property
    def max_level(self) -> int:
        return len(self.attributes) - 1

    @property
    def tile_position(self) -> tuple[int, int]:
        return pixel_to_tile_position(self.position)

    def current_attributes(self) -> LevelAttributes:
        """Stats for the tower's current level."""
        return self.attributes[self.level]

    def can_fire(self) -> bool:
        return self.time_since_last_shot >= self.current_attributes().fire_rate

    def update(self, fixed_time_step: float, enemies: list[Enemy], sound_manager: SoundManager) -> None:
        """Advance the reload timer; tower types add their attack on top."""
        self.time_since_last_shot += fixed_time_step

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        """Draw the range circle (when shown) and the tower body for its level."""
        if self.range_circle_visible:
            self._draw_circle(
                surface,
                RANGE_FILL_COLOR,
                self.position,
                self.current_attributes().range,
                RANGE_OUTLINE_COLOR,
                RANGE_OUTLINE_THICKNESS,
            )

        center = (round(self.position.x), round(self.position.y))
        if self.is_selected:
            outer = BODY_SIZES[0] + 2 * SELECTION_OUTLINE_THICKNESS
            outline = pygame.Rect(0, 0, outer, outer)
            outline.center = center
            pygame.draw.rect(surface, SELECTION_OUTLINE_COLOR, outline)

        for size, color in zip(BODY_SIZES[: self.level + 1], self.colors):
            rect = pygame.Rect(0, 0, size, size)
            rect.center = center
            pygame.draw.rect(surface, color, rect)

    def try_upgrade(self, gold: int) -> bool:
        """Raise the level if affordable; returns whether the upgrade happened."""
        if self.level >= self.max_level:
            return False
        if gold >= self.attributes[self.level + 1].buy_cost:
            self.level += 1
            self.marked_for_upgrade = False
            return True
        return False

    def mark_for_upgrade(self) -> None:
        self.marked_for_upgrade = True

    def mark_for_sale(self) -> None:
        self.marked_for_sale = True

    def _render_bullets(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        for bullet in self.bullets:
            center = interpolate(bullet.position_previous, bullet.position_current, interpolation_factor)
            self._draw_circle(surface, bullet.color, center, bullet.radius)

    @staticmethod
    def _draw_circle(
        surface: pygame.Surface,
        color: pygame.Color,
        center: Vector2,
        radius: float,
        outline_color: Optional[pygame.Color] = None,
        outline_thickness: int = 0,
    ) -> None:
        outer = radius + (outline_thickness if outline_color is not None else 0)
        if outer <= 0:
            return
        size = int(math.ceil(outer * 2)) + 2
        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        mid = (size / 2, size / 2)
        if outline_color is not None and outline_thickness > 0:
            pygame.draw.circle(layer, outline_color, mid, outer)
        if radius > 0:
            pygame.draw.circle(layer, color, mid, radius)
        surface.blit(layer, (round(center.x - size / 2), round(center.y - size / 2)))