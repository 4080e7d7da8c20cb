"""A tower that lobs slow shells which explode and damage everything nearby."""

from __future__ import annotations

from dataclasses import dataclass
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

SHELL_RADIUS = 8.0
EXPLOSION_DURATION = 0.3
EXPLOSION_COLOR = pygame.Color(255, 75, 51, 200)


@dataclass
class _Explosion:
    location: Vector2
    timer: float = 0.0
    radius: float = 0.0
    alpha: int = EXPLOSION_COLOR.a


class SplashTower(Tower):
    """Fires shells that burst on contact or at the edge of the tower's range."""

    def __init__(self, tile_position: tuple[int, int]) -> None:
        super().__init__(
            TowerType.SPLASH,
            pygame.Color(205, 65, 43),
            pygame.Color(225, 70, 47),
            pygame.Color(255, 75, 51),
            tile_position,
        )
        self.bullet_speed = 300.0
        self.bullet_color = pygame.Color(123, 37, 25)
        self.explosions: list[_Explosion] = []

    def update(self, fixed_time_step: float, enemies: list[Enemy], sound_manager: SoundManager) -> None:
        super().update(fixed_time_step, enemies, sound_manager)
        stats = self.current_attributes()

        self.bullets = [b for b in self.bullets if not b.has_hit_enemy]

        for bullet in self.bullets:
            bullet.position_previous = Vector2(bullet.position_current)
            bullet.position_current += bullet.direction * self.bullet_speed * fixed_time_step

            if distance(bullet.position_current, self.position) >= stats.range:
                self._burst(bullet, enemies, sound_manager)
                continue

            for enemy in enemies:
                if distance(bullet.position_current, enemy.pixel_position) <= enemy.size:
                    self._burst(bullet, enemies, sound_manager)
                    break

        if self.can_fire():
            target = closest_enemy_in_range(self.position, enemies, stats.range)
            if target is not None:
                predicted = predict_target_intercept(
                    self.position, target.pixel_position, target.velocity(), self.bullet_speed
                )
                self.fire_at(predicted if predicted is not None else target.pixel_position)
                sound_manager.play_sound(SoundID.SPLASH_SHOOT, 0.1)
                for enemy in enemies:
                    if distance(target.pixel_position, enemy.pixel_position) <= stats.splash_radius:
                        target.add_incoming_damage(stats.damage)

        remaining = []
        for explosion in self.explosions:
            explosion.timer += fixed_time_step
            t = explosion.timer / EXPLOSION_DURATION
            if t >= 1.0:
                continue
            explosion.radius = stats.splash_radius * t
            explosion.alpha = int((1.0 - t) * EXPLOSION_COLOR.a)
            remaining.append(explosion)
        self.explosions = remaining

    def _burst(self, bullet: Bullet, enemies: list[Enemy], sound_manager: SoundManager) -> None:
        self.explode_at(bullet.position_current, enemies)
        bullet.has_hit_enemy = True
        sound_manager.play_sound(SoundID.SPLASH_EXPLODE, 0.1)

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        super().render(surface, interpolation_factor)
        self._render_bullets(surface, interpolation_factor)
        for explosion in self.explosions:
            color = pygame.Color(EXPLOSION_COLOR.r, EXPLOSION_COLOR.g, EXPLOSION_COLOR.b, explosion.alpha)
            self._draw_circle(surface, color, explosion.location, explosion.radius)

    def fire_at(self, target: Sequence[float]) -> None:
        """Launch a shell toward target and restart the reload."""
        self.bullets.append(
            Bullet(
                position_current=Vector2(self.position),
                direction=normalize(Vector2(target) - self.position),
                radius=SHELL_RADIUS,
                color=self.bullet_color,
            )
        )
        self.time_since_last_shot = 0.0

    def explode_at(self, location: Sequence[float], enemies: list[Enemy]) -> None:
        """Damage every enemy within the splash radius and start an explosion effect."""
        location = Vector2(location)
        stats = self.current_attributes()
        for enemy in enemies:
            if distance(location, enemy.pixel_position) <= stats.splash_radius:
                enemy.take_damage(stats.damage)
        self.explosions.append(_Explosion(location))