"""Owns the HUD and the two pop-up menus and routes input between them."""

from __future__ import annotations

from typing import Optional, Sequence

import pygame

from towerdefense.button import FontSource
from towerdefense.hud import HUD
from towerdefense.menu import Wallet
from towerdefense.tower import Tower
from towerdefense.tower_build_menu import TowerBuildMenu
from towerdefense.tower_info_menu import TowerInfoMenu
from towerdefense.tower_registry import TowerType

INFO_MENU_SIZE = (300.0, 300.0)
BUILD_MENU_SIZE = (620.0, 300.0)


class UIManager:
    """The whole in-game user interface; at most one menu is open at a time."""

    def __init__(self, font: FontSource, window_size: Sequence[int], wallet: Wallet) -> None:
        self.hud = HUD(font, window_size)
        self.tower_info_menu = TowerInfoMenu(font, "Tower Info", INFO_MENU_SIZE, wallet)
        self.tower_build_menu = TowerBuildMenu(
            font, "Choose a Tower to Build", BUILD_MENU_SIZE, wallet
        )

    def process_input(self, mouse_position: Sequence[float], is_mouse_released: bool) -> None:
        if self.tower_info_menu.active:
            self.tower_info_menu.process_input(mouse_position, is_mouse_released)
        elif self.tower_build_menu.active:
            self.tower_build_menu.process_input(mouse_position, is_mouse_released)

    def update(self, fixed_time_step: float, lives: int, gold: int, wave: int) -> None:
        self.hud.update(fixed_time_step, lives, gold, wave)
        if self.tower_info_menu.active:
            self.tower_info_menu.update(fixed_time_step)
        elif self.tower_build_menu.active:
            self.tower_build_menu.update(fixed_time_step)

    def render(self, surface: pygame.Surface) -> None:
        self.hud.render(surface)
        if self.tower_info_menu.active:
            self.tower_info_menu.render(surface)
        elif self.tower_build_menu.active:
            self.tower_build_menu.render(surface)

    def show_tower_info_menu(self, tower: Optional[Tower], window_size: Sequence[int]) -> None:
        """Open the info menu for a tower, or close it when given None."""
        if tower is not None:
            self.tower_info_menu.set_selected_tower(tower, window_size)
        else:
            self.tower_info_menu.clear_tower_selection()

    def show_tower_build_menu(
        self, selected_tile: Sequence[int], window_size: Sequence[int]
    ) -> None:
        self.tower_build_menu.clear_tile_selection()
        self.tower_build_menu.set_selected_tile(selected_tile, window_size)

    def dismiss_all_menus(self) -> None:
        self.tower_info_menu.clear_tower_selection()
        self.tower_build_menu.clear_tile_selection()

    def is_any_menu_hovered_over(self) -> bool:
        return (self.tower_info_menu.hovered and self.tower_info_menu.active) or (
            self.tower_build_menu.hovered and self.tower_build_menu.active
        )

    @property
    def selected_tile(self) -> Optional[tuple[int, int]]:
        """The tile the build menu was opened for, or None."""
        return self.tower_build_menu.selected_tile

    @property
    def requested_tower_type(self) -> Optional[TowerType]:
        """The tower type the player asked to build, or None."""
        return self.tower_build_menu.requested_tower_type