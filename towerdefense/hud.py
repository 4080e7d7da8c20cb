"""The heads-up display: lives, gold, wave and instructions."""

from __future__ import annotations

from typing import Sequence

import pygame
from pygame.math import Vector2

from towerdefense.button import (
    TEXT_COLOR,
    TEXT_OUTLINE_COLOR,
    TEXT_OUTLINE_THICKNESS,
    FontSource,
    _font,
    _render_text,
)

STAT_CHARACTER_SIZE = 48
INFO_CHARACTER_SIZE = 40
MARGIN = 40.0
INFO_TEXT = (
    "Right click a tile to choose a tower to buy.\n"
    "Right click a tower to see tower info menu.\n"
    "Destroy enemies before they reach the end!"
)


class HUD:
    """Shows the player's stats in the bottom-left and help text in the bottom-right."""

    def __init__(self, font: FontSource, window_size: Sequence[int]) -> None:
        self.font = font
        self.lives = 0
        self.gold = 0
        self.wave = 0
        self.lives_text = "Level: N/A"
        self.gold_text = "Gold: N/A"
        self.wave_text = "Wave: N/A"
        self.info_text = INFO_TEXT

        width, height = window_size
        lives_height = self._stat_surface(self.lives_text).get_height()
        gold_height = self._stat_surface(self.gold_text).get_height()
        wave_height = self._stat_surface(self.wave_text).get_height()
        info = self._info_surface()

        self.lives_position = Vector2(MARGIN, height - lives_height * 2.0)
        self.gold_position = Vector2(MARGIN, height - gold_height * 3.75)
        self.wave_position = Vector2(MARGIN, height - wave_height * 5.5)
        self.info_position = Vector2(
            width - info.get_width() - MARGIN, height - info.get_height() * 1.6
        )

    def _stat_surface(self, text: str) -> pygame.Surface:
        return _render_text(
            _font(self.font, STAT_CHARACTER_SIZE),
            text,
            TEXT_COLOR,
            TEXT_OUTLINE_COLOR,
            TEXT_OUTLINE_THICKNESS,
        )

    def _info_surface(self) -> pygame.Surface:
        return _render_text(_font(self.font, INFO_CHARACTER_SIZE), self.info_text, TEXT_COLOR)

    def update(self, fixed_time_step: float, lives: int, gold: int, wave: int) -> None:
        """Refresh the texts whose values changed."""
        if self.lives != lives:
            self.lives = lives
            self.lives_text = f"Lives: {lives}"
        if self.gold != gold:
            self.gold = gold
            self.gold_text = f"Gold: {gold}"
        if self.wave != wave:
            self.wave = wave
            self.wave_text = f"Wave: {wave}"

    def render(self, surface: pygame.Surface) -> None:
        for text, position in (
            (self.lives_text, self.lives_position),
            (self.gold_text, self.gold_position),
            (self.wave_text, self.wave_position),
        ):
            surface.blit(self._stat_surface(text), (round(position.x), round(position.y)))
        surface.blit(
            self._info_surface(), (round(self.info_position.x), round(self.info_position.y))
        )