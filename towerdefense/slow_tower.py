"""A tower that emits pulses slowing every enemy in range."""

from __future__ import annotations

from typing import Sequence

import pygame

from towerdefense.enemy import Enemy, StatusEffect, StatusEffectType
from towerdefense.sound import SoundID, SoundManager
from towerdefense.tower import Tower
from towerdefense.tower_registry import TowerType
from towerdefense.utility import distance

PULSE_DURATION = 0.3
EFFECT_OVERLAY_COLOR = pygame.Color(54, 139, 193, 123)


class SlowTower(Tower):
    """Pulses periodically while enemies are near, applying a slow to each."""

    def __init__(self, tile_position: tuple[int, int]) -> None:
        super().__init__(
            TowerType.SLOW,
            pygame.Color(8, 60, 86),
            pygame.Color(9, 66, 96),
            pygame.Color(10, 73, 106),
            tile_position,
        )
        self.is_pulsing = False
        self.pulse_timer = 0.0
        self.pulse_radius = 0.0
        self.pulse_alpha = EFFECT_OVERLAY_COLOR.a

    def _in_range(self, enemy: Enemy) -> bool:
        return distance(enemy.pixel_position, self.position) <= self.current_attributes().range

    def update(self, fixed_time_step: float, enemies: list[Enemy], sound_manager: SoundManager) -> None:
        super().update(fixed_time_step, enemies, sound_manager)
        stats = self.current_attributes()

        if any(self._in_range(enemy) for enemy in enemies) and self.can_fire():
            sound_manager.play_sound(SoundID.SLOW_PULSE, 0.1)
            self.fire_at(self.position)
            for enemy in enemies:
                if self._in_range(enemy):
                    enemy.apply_status_effect(
                        StatusEffect(
                            StatusEffectType.SLOW,
                            pygame.Color(EFFECT_OVERLAY_COLOR),
                            stats.slow_amount,
                            stats.slow_duration,
                        )
                    )

        if self.is_pulsing:
            self.pulse_timer += fixed_time_step
            t = self.pulse_timer / PULSE_DURATION
            self.pulse_radius = stats.range * t
            self.pulse_alpha = int(min(max((1.0 - t) * EFFECT_OVERLAY_COLOR.a, 0), 255))
            if self.pulse_timer >= PULSE_DURATION:
                self.is_pulsing = False

    def render(self, surface: pygame.Surface, interpolation_factor: float) -> None:
        if self.is_pulsing:
            color = pygame.Color(
                EFFECT_OVERLAY_COLOR.r, EFFECT_OVERLAY_COLOR.g, EFFECT_OVERLAY_COLOR.b, self.pulse_alpha
            )
            self._draw_circle(surface, color, self.position, self.pulse_radius)
        super().render(surface, interpolation_factor)

    def fire_at(self, target: Sequence[float]) -> None:
        """Start a new pulse; it always spreads from the tower itself."""
        self.time_since_last_shot = 0.0
        self.is_pulsing = True
        self.pulse_timer = 0.0
        self.pulse_radius = 0.0
        self.pulse_alpha = EFFECT_OVERLAY_COLOR.a