"""Base class for the pop-up menus and the shared gold wallet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pygame
from pygame.math import Vector2

from towerdefense.button import (
    BACKGROUND_COLOR,
    BACKGROUND_OUTLINE_COLOR,
    BACKGROUND_OUTLINE_THICKNESS,
    TEXT_COLOR,
    TEXT_OUTLINE_COLOR,
    TEXT_OUTLINE_THICKNESS,
    FontSource,
    _bounds_contain,
    _draw_box,
    _font,
    _render_text,
)
from towerdefense.utility import tile_to_pixel_position

TITLE_CHARACTER_SIZE = 32
MENU_OFFSET_Y = 70.0


@dataclass
class Wallet:
    """The player's gold, shared between the game and the menus."""

    gold: int = 0


class Menu:
    """A panel with a background and a title that can be shown near a tile."""

    def __init__(self, font: FontSource, title: str, size: Sequence[float]) -> None:
        self.font = font
        self.title = title
        self.size = Vector2(size)
        self.padding = Vector2(20.0, 20.0)
        self.position = Vector2(0.0, 0.0)
        self.active = False
        self.hovered = False

    def _contains(self, point: Sequence[float]) -> bool:
        return _bounds_contain(self.position, self.size, BACKGROUND_OUTLINE_THICKNESS, point)

    def _title_surface(self) -> pygame.Surface:
        return _render_text(
            _font(self.font, TITLE_CHARACTER_SIZE),
            self.title,
            TEXT_COLOR,
            TEXT_OUTLINE_COLOR,
            TEXT_OUTLINE_THICKNESS,
        )

    def _draw_background(self, surface: pygame.Surface) -> None:
        _draw_box(
            surface,
            self.position,
            self.size,
            BACKGROUND_COLOR,
            BACKGROUND_OUTLINE_COLOR,
            BACKGROUND_OUTLINE_THICKNESS,
        )

    def process_input(self, mouse_position: Sequence[float], is_mouse_released: bool) -> None:
        if not self.active:
            return
        self.hovered = self._contains(mouse_position)

    def update(self, fixed_time_step: float) -> None:
        """Drop the hover state of a menu that is not shown."""
        if not self.active:
            self.hovered = False

    def render(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        self._draw_background(surface)
        origin = self.position + self.padding
        surface.blit(self._title_surface(), (round(origin.x), round(origin.y)))

    def place_near_tile(self, tile_position: Sequence[int], window_size: Sequence[int]) -> Vector2:
        """Put the menu just below a tile, kept inside the window; returns the new position."""
        position = tile_to_pixel_position(tile_position[0], tile_position[1])
        position += Vector2(-self.size.x / 2.0, MENU_OFFSET_Y)

        width, height = window_size
        if position.x + self.size.x > width:
            position.x = width - self.size.x
        elif position.x < 0:
            position.x = 0.0
        if position.y + self.size.y > height:
            position.y = height - self.size.y
        elif position.y < 0:
            position.y = 0.0

        self.position = position
        return Vector2(position)