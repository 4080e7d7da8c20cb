"""A tower that fires fast single-target bullets."""

from __future__ import annotations

from typing import Sequence

import pygame
from pygame.math import Vector2

from towerdefense.enemy import Enemy
from towerdefense.sound import SoundID, SoundManager
from towerdefense.tower import Bullet, Tower
from towerdefense.tower_registry import TowerType
from towerdefense.utility import (
    closest_enemy_in_range,
    distance,
    normalize,
    predict_target_intercept,
)

BULLET_RADIUS = 5.0


class BulletTower(Tower):
    """Shoots the nearest enemy, leading the shot toward where it will be."""

    def __init__(self, tile_position: tuple[int, int]) -> None:
        super().__init__(
            TowerType.BULLET,
            pygame.Color(8, 74, 44),
            pygame.Color(9, 83, 49),
            pygame.Color(10, 92, 54),
            tile_position,
        )
        self.bullet_speed = 900.0
        self.bullet_color = pygame.Color(5, 46, 27)

    def update(self, fixed_time_step: float, enemies: list[Enemy], sound_manager: SoundManager) -> None:
        super().update(fixed_time_step, enemies, sound_manager)
        stats = self.current_attributes()

        # Bullets that hit last frame are dropped now so they are drawn at impact once.
        self.bullets = [b for b in self.bullets if not b.has_hit_enemy]

        for bullet in self.bullets:
            bullet.position_previous = Vector2(bullet.position_current)
            bullet.position_current += bullet.direction * self.bullet_speed * fixed_time_step
            for enemy in enemies:
                if distance(bullet.position_current, enemy.pixel_position) <= enemy.size:
                    enemy.take_damage(stats.damage)
                    bullet.has_hit_enemy = True
                    sound_manager.play_sound(SoundID.ENEMY_HIT, 0.15)
                    break

        if not self.can_fire():
            return
        target = closest_enemy_in_range(self.position, enemies, stats.range)
        if target is None:
            return
        predicted = predict_target_intercept(
            self.position, target.pixel_position, target.velocity(), self.bullet_speed
        )
        self.fire_at(predicted if predicted is not None else target.pixel_position)
        sound_manager.play_sound(SoundID.BULLET_SHOOT, 0.15)
        target.add_incoming_damage(stats.damage)

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        super().render(surface, interpolation_factor)
        self._render_bullets(surface, interpolation_factor)

    def fire_at(self, target: Sequence[float]) -> None:
        """Launch a bullet from the tower toward target and restart the reload."""
        self.bullets.append(
            Bullet(
                position_current=Vector2(self.position),
                direction=normalize(Vector2(target) - self.position),
                radius=BULLET_RADIUS,
                color=self.bullet_color,
            )
        )
        self.time_since_last_shot = 0.0