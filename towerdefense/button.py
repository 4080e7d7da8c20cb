"""Clickable buttons and the colour theme shared by the user interface."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame
from pygame.math import Vector2

FontSource = Optional[Union[str, Path]]

TEXT_COLOR = pygame.Color(220, 223, 225)
TEXT_HOVER_COLOR = pygame.Color(240, 244, 249)
TEXT_OUTLINE_COLOR = pygame.Color(50, 53, 55)
TEXT_OUTLINE_THICKNESS = 2
BUTTON_COLOR = pygame.Color(130, 134, 136)
BUTTON_HOVER_COLOR = pygame.Color(150, 155, 158)
BUTTON_OUTLINE_COLOR = pygame.Color(110, 114, 116)
BUTTON_OUTLINE_HOVER_COLOR = pygame.Color(130, 134, 136)
BUTTON_OUTLINE_THICKNESS = 3
BACKGROUND_COLOR = pygame.Color(100, 103, 105)
BACKGROUND_OUTLINE_COLOR = pygame.Color(80, 83, 85)
BACKGROUND_OUTLINE_THICKNESS = 3

BUTTON_CHARACTER_SIZE = 24


@lru_cache(maxsize=None)
def _cached_font(path: Optional[str], size: int) -> pygame.font.Font:
    return pygame.font.Font(path, size)


def _font(source: FontSource, size: int) -> pygame.font.Font:
    """A font of the given size from a font file, or the default font for None."""
    if not pygame.font.get_init():
        pygame.font.init()
    return _cached_font(None if source is None else str(source), size)


def _render_text(
    font: pygame.font.Font,
    text: str,
    color: pygame.Color,
    outline_color: Optional[pygame.Color] = None,
    outline: int = 0,
) -> pygame.Surface:
    """Render possibly multi-line text, optionally with an outline, onto a transparent surface."""
    lines = text.split("\n")
    rendered = [font.render(line, True, color) for line in lines]
    line_height = font.get_linesize()
    width = max(1, max(s.get_width() for s in rendered) + 2 * outline)
    height = max(1, line_height * len(lines) + 2 * outline)
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    for index, (line, line_surface) in enumerate(zip(lines, rendered)):
        y = outline + index * line_height
        if outline_color is not None and outline > 0:
            shadow = font.render(line, True, outline_color)
            for dx in (-outline, 0, outline):
                for dy in (-outline, 0, outline):
                    if dx or dy:
                        surface.blit(shadow, (outline + dx, y + dy))
        surface.blit(line_surface, (outline, y))
    return surface


def _bounds_contain(position: Vector2, size: Vector2, outline: float, point: Sequence[float]) -> bool:
    """Whether point lies in the rectangle grown by its outline thickness."""
    x, y = point[0], point[1]
    left = position.x - outline
    top = position.y - outline
    return left <= x < left + size.x + 2 * outline and top <= y < top + size.y + 2 * outline


def _draw_box(
    surface: pygame.Surface,
    position: Vector2,
    size: Vector2,
    fill: pygame.Color,
    outline_color: pygame.Color,
    outline: float,
) -> None:
    if outline > 0:
        pygame.draw.rect(
            surface,
            outline_color,
            pygame.Rect(
                round(position.x - outline),
                round(position.y - outline),
                round(size.x + 2 * outline),
                round(size.y + 2 * outline),
            ),
        )
    pygame.draw.rect(
        surface,
        fill,
        pygame.Rect(round(position.x), round(position.y), round(size.x), round(size.y)),
    )


class Button:
    """A rectangular button that highlights on hover and reports clicks."""

    def __init__(self, font: FontSource, text: str, size: Sequence[float]) -> None:
        self.font = font
        self.text = text
        self.size = Vector2(size)
        self.position = Vector2(0.0, 0.0)
        self.active = True
        self.hovered = False
        self.clicked = False
        self._was_hovered_last_frame = False
        self._needs_color_update = False
        self._update_colors()

    def process_input(self, mouse_position: Sequence[float], is_mouse_released: bool) -> None:
        """Track hover and click; hover is tracked even while inactive."""
        self.hovered = _bounds_contain(
            self.position, self.size, BUTTON_OUTLINE_THICKNESS, mouse_position
        )
        self.clicked = False
        if not self.active:
            return
        if self._was_hovered_last_frame != self.hovered:
            self._needs_color_update = True
            self._was_hovered_last_frame = self.hovered
        if self.hovered and is_mouse_released:
            self.clicked = True

    def update(self, fixed_time_step: float) -> None:
        if self._needs_color_update:
            self._update_colors()
            self._needs_color_update = False

    def render(self, surface: pygame.Surface) -> None:
        _draw_box(
            surface,
            self.position,
            self.size,
            self.background_color,
            self.outline_color,
            BUTTON_OUTLINE_THICKNESS,
        )
        text_surface = _render_text(_font(self.font, BUTTON_CHARACTER_SIZE), self.text, self.text_color)
        center = self.position + self.size / 2.0
        surface.blit(
            text_surface,
            (
                round(center.x - text_surface.get_width() / 2.0),
                round(center.y - text_surface.get_height() / 1.5),
            ),
        )

    def set_active(self, active: bool) -> None:
        self.active = active
        self._needs_color_update = True

    def set_position(self, position: Sequence[float]) -> None:
        self.position = Vector2(position)

    def set_text(self, text: str) -> None:
        self.text = text

    def _update_colors(self) -> None:
        if not self.active:
            self.background_color = pygame.Color(BACKGROUND_COLOR)
            self.outline_color = pygame.Color(BACKGROUND_OUTLINE_COLOR)
            self.text_color = pygame.Color(BACKGROUND_OUTLINE_COLOR)
        elif self.hovered:
            self.background_color = pygame.Color(BUTTON_HOVER_COLOR)
            self.outline_color = pygame.Color(BUTTON_OUTLINE_HOVER_COLOR)
            self.text_color = pygame.Color(TEXT_HOVER_COLOR)
        else:
            self.background_color = pygame.Color(BUTTON_COLOR)
            self.outline_color = pygame.Color(BUTTON_OUTLINE_COLOR)
            self.text_color = pygame.Color(TEXT_COLOR)