"""The menu for choosing which tower to build on a selected tile."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import pygame
from pygame.math import Vector2

from towerdefense.button import (
    TEXT_OUTLINE_COLOR,
    TEXT_OUTLINE_THICKNESS,
    Button,
    FontSource,
    _font,
    _render_text,
)
from towerdefense.menu import Menu, Wallet
from towerdefense.tower_registry import TowerMetadata, TowerType, tower_metadata_registry
from towerdefense.utility import remove_trailing_zeros

NAME_CHARACTER_SIZE = 32
DESCRIPTION_CHARACTER_SIZE = 24
OPTION_BUTTON_SIZE = (150.0, 50.0)
OPTION_TEXT_COLOR = pygame.Color(255, 255, 255)


def describe_tower(metadata: TowerMetadata) -> str:
    """Build-menu description of a tower's first level."""
    first = metadata.attributes[0]
    lines = [f"Damage: {first.damage}", f"Range: {int(first.range)}"]
    if metadata.tower_type is TowerType.BULLET:
        lines.append(f"Fire Rate: {remove_trailing_zeros(first.fire_rate)}")
    elif metadata.tower_type is TowerType.SPLASH:
        lines.append(f"Fire Rate: {remove_trailing_zeros(first.fire_rate)}")
        lines.append(f"Radius: {remove_trailing_zeros(first.splash_radius)}")
    elif metadata.tower_type is TowerType.SLOW:
        lines.append(f"Pulse Rate: {remove_trailing_zeros(first.fire_rate)}")
        lines.append(f"Percent: {int(first.slow_amount * 100.0)}%")
        lines.append(f"Duration: {remove_trailing_zeros(first.slow_duration)}s")
    return "\n".join(lines)


@dataclass
class BuildOption:
    """One buildable tower shown in the menu."""

    tower_type: TowerType
    name: str
    description: str
    buy_cost: int
    button: Button
    name_position: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))
    description_position: Vector2 = field(default_factory=lambda: Vector2(0.0, 0.0))


class TowerBuildMenu(Menu):
    """Lists every tower type with its stats and a buy button."""

    def __init__(
        self, font: FontSource, title: str, size: Sequence[float], wallet: Wallet
    ) -> None:
        super().__init__(font, title, size)
        self.wallet = wallet
        self.selected_tile: Optional[tuple[int, int]] = None
        self.requested_tower_type: Optional[TowerType] = None
        self.options = [
            BuildOption(
                tower_type=metadata.tower_type,
                name=metadata.name,
                description=describe_tower(metadata),
                buy_cost=metadata.attributes[0].buy_cost,
                button=Button(font, f"{metadata.attributes[0].buy_cost}g", OPTION_BUTTON_SIZE),
            )
            for metadata in tower_metadata_registry()
        ]

    def _name_surface(self, option: BuildOption) -> pygame.Surface:
        return _render_text(
            _font(self.font, NAME_CHARACTER_SIZE),
            option.name,
            OPTION_TEXT_COLOR,
            TEXT_OUTLINE_COLOR,
            TEXT_OUTLINE_THICKNESS,
        )

    def _description_surface(self, option: BuildOption) -> pygame.Surface:
        return _render_text(
            _font(self.font, DESCRIPTION_CHARACTER_SIZE), option.description, OPTION_TEXT_COLOR
        )

    def _refresh_affordability(self) -> None:
        for option in self.options:
            option.button.set_active(self.wallet.gold >= option.buy_cost)

    def process_input(self, mouse_position: Sequence[float], is_mouse_released: bool) -> None:
        if not self.active:
            return
        self.hovered = self._contains(mouse_position)
        for option in self.options:
            option.button.process_input(mouse_position, is_mouse_released)
            if option.button.clicked and self.wallet.gold >= option.buy_cost:
                self.requested_tower_type = option.tower_type

    def update(self, fixed_time_step: float) -> None:
        if not self.active:
            return
        for option in self.options:
            option.button.set_active(self.wallet.gold >= option.buy_cost)
            option.button.update(fixed_time_step)

    def render(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        self._draw_background(surface)
        for option in self.options:
            surface.blit(
                self._name_surface(option),
                (round(option.name_position.x), round(option.name_position.y)),
            )
            surface.blit(
                self._description_surface(option),
                (round(option.description_position.x), round(option.description_position.y)),
            )
            option.button.render(surface)

    def set_selected_tile(self, tile_position: Sequence[int], window_size: Sequence[int]) -> None:
        """Open the menu for a tile and lay it out beneath that tile."""
        self.selected_tile = (int(tile_position[0]), int(tile_position[1]))
        self.active = True
        self._update_layout(window_size)
        self._refresh_affordability()

    def clear_tile_selection(self) -> None:
        self.selected_tile = None
        self.requested_tower_type = None
        self.active = False

    def _update_layout(self, window_size: Sequence[int]) -> None:
        if self.selected_tile is None:
            return
        self.place_near_tile(self.selected_tile, window_size)

        usable_width = self.size.x - 2 * self.padding.x
        slot_width = usable_width / len(self.options)

        for index, option in enumerate(self.options):
            slot_x = self.position.x + self.padding.x + index * slot_width
            name_width = self._name_surface(option).get_width()
            description_width = self._description_surface(option).get_width()

            option.name_position = Vector2(
                slot_x + (slot_width - name_width) / 2.0,
                self.position.y + self.padding.y,
            )
            option.description_position = Vector2(
                slot_x + (slot_width - description_width) / 2.0,
                self.position.y + self.padding.y * 1.75 + NAME_CHARACTER_SIZE,
            )
            button_y = self.position.y + self.size.y - self.padding.y - option.button.size.y
            option.button.set_position(
                (slot_x + (slot_width - option.button.size.x) / 2.0, button_y)
            )