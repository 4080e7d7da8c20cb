"""The menu that shows a built tower's stats and offers upgrade and sale."""

from __future__ import annotations

from typing import Optional, Sequence

import pygame
from pygame.math import Vector2

from towerdefense.button import TEXT_COLOR, Button, FontSource, _font, _render_text
from towerdefense.menu import Menu, Wallet
from towerdefense.tower import Tower
from towerdefense.tower_registry import TowerType
from towerdefense.utility import remove_trailing_zeros

INFO_CHARACTER_SIZE = 24
UPGRADE_BUTTON_SIZE = (130.0, 60.0)
SELL_BUTTON_SIZE = (90.0, 60.0)


def _number(value: float) -> str:
    """Format a number the way a default text stream does (six significant digits)."""
    return f"{value:g}"


def describe_tower_state(tower: Tower, preview_upgrade: bool) -> str:
    """Stats of the tower's current level, with the next level's values appended when previewing."""
    level = tower.level
    stats = tower.attributes[level]

    level_append = damage_append = range_append = fire_rate_append = ""
    splash_append = slow_amount_append = slow_duration_append = ""
    if preview_upgrade and level < tower.max_level:
        following = tower.attributes[level + 1]
        level_append = f" > {level + 2}"
        damage_append = f" > {following.damage}"
        range_append = f" > {int(following.range)}"
        fire_rate_append = f" > {remove_trailing_zeros(following.fire_rate)}"
        splash_append = f" > {remove_trailing_zeros(following.splash_radius)}"
        slow_amount_append = f" > {int(following.slow_amount * 100.0)}%"
        slow_duration_append = f" > {remove_trailing_zeros(following.slow_duration)}s"

    level_line = f"Level: {level + 1}{level_append}"
    range_line = f"Range: {int(stats.range)}{range_append}"

    if tower.tower_type is TowerType.BULLET:
        lines = [
            level_line,
            f"Damage: {stats.damage}{damage_append}",
            range_line,
            f"Fire Rate: {_number(stats.fire_rate)}{fire_rate_append}",
        ]
    elif tower.tower_type is TowerType.SPLASH:
        lines = [
            level_line,
            f"Damage: {stats.damage}{damage_append}",
            range_line,
            f"Fire Rate: {_number(stats.fire_rate)}{fire_rate_append}",
            f"Splash Radius: {_number(stats.splash_radius)}{splash_append}",
        ]
    elif tower.tower_type is TowerType.SLOW:
        lines = [
            level_line,
            range_line,
            f"Pulse Rate: {_number(stats.fire_rate)}{fire_rate_append}",
            f"Percent: {int(stats.slow_amount * 100.0)}%{slow_amount_append}",
            f"Duration: {_number(stats.slow_duration)}s{slow_duration_append}",
        ]
    else:
        lines = []
    return "\n".join(lines)


class TowerInfoMenu(Menu):
    """Shows the selected tower's stats with upgrade and sell buttons."""

    def __init__(
        self, font: FontSource, title: str, size: Sequence[float], wallet: Wallet
    ) -> None:
        super().__init__(font, title, size)
        self.wallet = wallet
        self.selected_tower: Optional[Tower] = None
        self.info_text = "N/A"
        self.info_position = Vector2(0.0, 0.0)
        self.title_position = Vector2(0.0, 0.0)
        self.upgrade_button = Button(font, "UPGRADE\n(N/Ag)", UPGRADE_BUTTON_SIZE)
        self.sell_button = Button(font, "SELL\n(N/Ag)", SELL_BUTTON_SIZE)
        self._was_upgrade_hovered_last_frame = False
        self._needs_text_update = False

    @property
    def is_tower_selected(self) -> bool:
        return self.selected_tower is not None

    def _at_max_level(self) -> bool:
        tower = self.selected_tower
        return tower is not None and tower.level >= tower.max_level

    def process_input(self, mouse_position: Sequence[float], is_mouse_released: bool) -> None:
        if not self.active:
            return

        if self.upgrade_button.active and self._at_max_level():
            self.upgrade_button.set_active(False)

        self.hovered = self._contains(mouse_position)

        # Hover over the upgrade button toggles the next-level preview.
        if self._was_upgrade_hovered_last_frame != self.upgrade_button.hovered:
            self._needs_text_update = True
            self._was_upgrade_hovered_last_frame = self.upgrade_button.hovered

        self.upgrade_button.process_input(mouse_position, is_mouse_released)
        self.sell_button.process_input(mouse_position, is_mouse_released)

        tower = self.selected_tower
        if self.upgrade_button.clicked and tower is not None and tower.level < tower.max_level:
            tower.mark_for_upgrade()
            self._needs_text_update = True
        if self.sell_button.clicked and self.selected_tower is not None:
            self.selected_tower.mark_for_sale()
            self.clear_tower_selection()

    def update(self, fixed_time_step: float) -> None:
        if not self.active or self.selected_tower is None:
            return
        if self._needs_text_update:
            self._update_info_text()
            self._needs_text_update = False

        tower = self.selected_tower
        affordable = (
            tower.level < tower.max_level
            and self.wallet.gold >= tower.attributes[tower.level + 1].buy_cost
        )
        self.upgrade_button.set_active(affordable)

        self.upgrade_button.update(fixed_time_step)
        self.sell_button.update(fixed_time_step)

    def render(self, surface: pygame.Surface) -> None:
        if not self.active:
            return
        self._draw_background(surface)
        surface.blit(
            self._title_surface(), (round(self.title_position.x), round(self.title_position.y))
        )
        surface.blit(
            self._info_surface(), (round(self.info_position.x), round(self.info_position.y))
        )
        self.upgrade_button.render(surface)
        self.sell_button.render(surface)

    def set_selected_tower(self, tower: Tower, window_size: Sequence[int]) -> None:
        """Open the menu for a tower and show its range."""
        self.active = True
        self.selected_tower = tower
        tower.range_circle_visible = True
        self.upgrade_button.set_active(tower.level < tower.max_level)
        self.title = tower.name
        self._update_info_text()
        self._update_layout(window_size)

    def clear_tower_selection(self) -> None:
        if self.selected_tower is not None:
            self.selected_tower.range_circle_visible = False
            self.selected_tower = None
        self.active = False

    def _info_surface(self) -> pygame.Surface:
        return _render_text(_font(self.font, INFO_CHARACTER_SIZE), self.info_text, TEXT_COLOR)

    def _update_info_text(self) -> None:
        tower = self.selected_tower
        if tower is None:
            return
        self.sell_button.set_text(f"SELL\n{tower.attributes[tower.level].sell_cost}g")
        if tower.level < tower.max_level:
            self.upgrade_button.set_text(
                f"UPGRADE\n{tower.attributes[tower.level + 1].buy_cost}g"
            )
        else:
            self.upgrade_button.set_text("UPGRADE\nN/A")
        self.info_text = describe_tower_state(tower, self.upgrade_button.hovered)

    def _update_layout(self, window_size: Sequence[int]) -> None:
        tower = self.selected_tower
        if tower is None:
            return
        self.place_near_tile(tower.tile_position, window_size)

        title = self._title_surface()
        self.title_position = Vector2(
            self.position.x + self.size.x / 2.0 - title.get_width() / 2.0,
            self.position.y + self.padding.y,
        )
        self.info_position = Vector2(
            self.position.x + self.padding.x,
            self.position.y + title.get_height() + self.padding.y * 2.0,
        )
        self.upgrade_button.set_position(
            (
                self.position.x + self.padding.x,
                self.position.y + self.size.y - self.upgrade_button.size.y - self.padding.y,
            )
        )
        self.sell_button.set_position(
            (
                self.position.x + self.size.x - self.sell_button.size.x - self.padding.x,
                self.position.y + self.size.y - self.sell_button.size.y - self.padding.y,
            )
        )