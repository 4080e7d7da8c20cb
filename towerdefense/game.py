"""The game loop: states, waves, towers, enemies, input and drawing."""

from __future__ import annotations

import argparse
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame
from pygame.math import Vector2

from towerdefense.bullet_tower import BulletTower
from towerdefense.button import _font, _render_text
from towerdefense.enemy import Enemy
from towerdefense.grid import Grid
from towerdefense.menu import Wallet
from towerdefense.slow_tower import SlowTower
from towerdefense.sound import SoundID, SoundManager
from towerdefense.splash_tower import SplashTower
from towerdefense.tile import TileType
from towerdefense.tower import Tower
from towerdefense.tower_registry import TowerType
from towerdefense.ui_manager import UIManager
from towerdefense.utility import ReleaseTracker, pixel_to_tile_position

WINDOW_SIZE = (1200, 1200)
WINDOW_TITLE = "Project 2 - Tower Defense Game"
FIXED_TIME_STEP = 1.0 / 60.0
FRAME_RATE_LIMIT = 60

GRID_COLS = 10
GRID_ROWS = 8

STARTING_LIVES = 5
STARTING_GOLD = 100

TIME_BETWEEN_WAVES = 10.0
TIME_BETWEEN_ENEMIES = 0.7
ENEMIES_PER_WAVE = 5
ENEMY_BASE_SPEED = 60.0
ENEMY_BASE_HEALTH = 5
WAVE_SPEED_BONUS = 0.15
SPAWN_INTERVAL_DECREMENT = 0.01

SOUND_CLEANUP_INTERVAL = 60

BACKGROUND_COLOR = pygame.Color(110, 115, 120)
SCREEN_TEXT_COLOR = pygame.Color(255, 255, 255)
SCREEN_TEXT_OUTLINE_COLOR = pygame.Color(50, 53, 55)
SCREEN_TEXT_OUTLINE = 2

FONT_FILE = Path("fonts") / "BRLNSR.TTF"
SOUND_DIR = Path("sounds")

_TOWER_CLASSES: dict[TowerType, type[Tower]] = {
    TowerType.BULLET: BulletTower,
    TowerType.SPLASH: SplashTower,
    TowerType.SLOW: SlowTower,
}


class GameState(Enum):
    MAIN_MENU = auto()
    GAMEPLAY = auto()
    GAME_OVER = auto()


def _check(flag) -> bool:
    """Read an enemy flag that may be exposed either as a method or as a value."""
    return bool(flag() if callable(flag) else flag)


class Game:
    """Owns every part of the game and runs the fixed-time-step loop."""

    def __init__(self, asset_dir: Optional[Union[str, Path]] = None) -> None:
        self.font: Optional[str] = None
        self.sound_manager = SoundManager()
        if asset_dir is not None:
            asset_dir = Path(asset_dir)
            font_path = asset_dir / FONT_FILE
            if not font_path.is_file():
                raise FileNotFoundError(f"font file not found: {font_path}")
            self.font = str(font_path)
            self.sound_manager.load_sounds(asset_dir / SOUND_DIR)

        self.is_running = True
        self.game_state = GameState.MAIN_MENU
        self.window: Optional[pygame.Surface] = None
        self.surface = pygame.Surface(WINDOW_SIZE)

        self.lives = STARTING_LIVES
        self.wallet = Wallet(STARTING_GOLD)
        self.grid = Grid(GRID_COLS, GRID_ROWS)
        self.towers: list[Tower] = []
        self.enemies: list[Enemy] = []
        self._reset_wave_state()
        self._update_count = 0

        self.ui = UIManager(self.font, WINDOW_SIZE, self.wallet)
        self.game_over_wave_text = "Reached wave: "

        self._keys = ReleaseTracker()
        self._mouse_buttons = ReleaseTracker()

    def _reset_wave_state(self) -> None:
        self.time_between_waves = TIME_BETWEEN_WAVES
        self.time_since_last_wave_ended = TIME_BETWEEN_WAVES
        self.time_between_enemies = TIME_BETWEEN_ENEMIES
        self.time_since_last_enemy_spawned = 0.0
        self.wave = 0
        self.enemies_per_wave = ENEMIES_PER_WAVE
        self.enemies_spawned_this_wave = 0
        self.waiting_for_first_enemy_in_wave = False

    def run(self) -> int:
        """Open the window and run until the player quits; returns the exit code."""
        pygame.display.init()
        self.window = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        accumulator = 0.0
        try:
            while self.is_running:
                accumulator += clock.tick(FRAME_RATE_LIMIT) / 1000.0
                self.process_input()
                while accumulator >= FIXED_TIME_STEP:
                    self.update(FIXED_TIME_STEP)
                    accumulator -= FIXED_TIME_STEP
                self.render(accumulator / FIXED_TIME_STEP)
        finally:
            self.window = None
            pygame.quit()
        return 0

    def process_input(self) -> None:
        """Poll window events, keys and mouse buttons and act on releases."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False

        keys = pygame.key.get_pressed()
        if self._keys.released(pygame.K_ESCAPE, bool(keys[pygame.K_ESCAPE])):
            self.is_running = False
        enter_released = self._keys.released(pygame.K_RETURN, bool(keys[pygame.K_RETURN]))

        if self.game_state is GameState.MAIN_MENU:
            if enter_released:
                self.switch_game_state(GameState.GAMEPLAY)
        elif self.game_state is GameState.GAMEPLAY:
            left, _middle, right = pygame.mouse.get_pressed()[:3]
            left_released = self._mouse_buttons.released("left", bool(left))
            right_released = self._mouse_buttons.released("right", bool(right))
            self._handle_gameplay_clicks(
                Vector2(pygame.mouse.get_pos()), left_released, right_released
            )
        elif self.game_state is GameState.GAME_OVER:
            if enter_released:
                self.switch_game_state(GameState.MAIN_MENU)

    def _clear_selection(self) -> None:
        self.ui.dismiss_all_menus()
        self.grid.deselect_all_tiles()
        self._deselect_all_towers()

    def _handle_gameplay_clicks(
        self, mouse_position: Vector2, left_released: bool, right_released: bool
    ) -> None:
        hovered_tile = pixel_to_tile_position(mouse_position)
        self.ui.process_input(mouse_position, left_released)

        if right_released and not self.ui.is_any_menu_hovered_over():
            tower = next(
                (t for t in self.towers if tuple(t.tile_position) == tuple(hovered_tile)), None
            )
            self._clear_selection()
            if tower is not None:
                self.ui.show_tower_info_menu(tower, WINDOW_SIZE)
                tower.is_selected = True
            elif self.grid.tile_type_at(hovered_tile) is TileType.BUILDABLE:
                self.ui.show_tower_build_menu(hovered_tile, WINDOW_SIZE)
                self.grid.select_tile(hovered_tile)

        if left_released and not self.ui.is_any_menu_hovered_over():
            self._clear_selection()

    def update(self, fixed_time_step: float) -> None:
        """Advance the simulation by one fixed step."""
        if self.game_state is not GameState.GAMEPLAY:
            return

        self.update_wave(fixed_time_step)

        for enemy in self.enemies:
            enemy.update(fixed_time_step, self.grid)
            if _check(enemy.has_reached_end):
                self.lives -= 1
                self.sound_manager.play_sound(SoundID.LIFE_LOST)
            if _check(enemy.is_dead):
                self.wallet.gold += enemy.worth

        for tower in self.towers:
            tower.update(fixed_time_step, self.enemies, self.sound_manager)
            if tower.marked_for_upgrade and tower.try_upgrade(self.wallet.gold):
                self.wallet.gold -= tower.attributes[tower.level].buy_cost
                self.sound_manager.play_sound(SoundID.TOWER_UPGRADE)
            if tower.marked_for_sale:
                self.wallet.gold += tower.attributes[tower.level].sell_cost
                self.sound_manager.play_sound(SoundID.BUTTON_CLICK)

        self.towers = [t for t in self.towers if not t.marked_for_sale]
        self.enemies = [
            e for e in self.enemies if not (_check(e.has_reached_end) or _check(e.is_dead))
        ]

        requested = self.ui.requested_tower_type
        selected = self.ui.selected_tile
        if requested is not None and selected is not None:
            self.place_tower(requested, selected)

        self.ui.update(fixed_time_step, self.lives, self.wallet.gold, self.wave)

        if self._update_count % SOUND_CLEANUP_INTERVAL == 0:
            self.sound_manager.cleanup_sounds()
        self._update_count += 1

        if self.lives <= 0:
            self.switch_game_state(GameState.GAME_OVER)

    def place_tower(self, tower_type: TowerType, tile_position: Sequence[int]) -> Tower:
        """Build a tower on a tile, pay for it and close the build menu."""
        tile = (int(tile_position[0]), int(tile_position[1]))
        tower = _TOWER_CLASSES[tower_type](tile)
        self.towers.append(tower)
        self.wallet.gold -= tower.attributes[0].buy_cost
        self.sound_manager.play_sound(SoundID.BUTTON_CLICK)
        self.ui.dismiss_all_menus()
        self.grid.deselect_all_tiles()
        return tower

    def _target(self) -> pygame.Surface:
        return self.window if self.window is not None else self.surface

    def _blit_centered(
        self, surface: pygame.Surface, text: str, size: int, center: Vector2
    ) -> pygame.Surface:
        rendered = _render_text(
            _font(self.font, size),
            text,
            SCREEN_TEXT_COLOR,
            SCREEN_TEXT_OUTLINE_COLOR,
            SCREEN_TEXT_OUTLINE,
        )
        surface.blit(
            rendered,
            (
                round(center.x - rendered.get_width() / 2.0),
                round(center.y - rendered.get_height() / 2.0),
            ),
        )
        return rendered

    def render(self, interpolation_factor: float) -> None:
        """Draw the current state to the window, or to the off-screen surface."""
        surface = self._target()
        surface.fill(BACKGROUND_COLOR)
        width, height = WINDOW_SIZE
        title_center = Vector2(width / 2.0, height / 2.0 - 100.0)
        start_center = Vector2(width / 2.0, height / 2.0 + 100.0)

        if self.game_state is GameState.MAIN_MENU:
            self._blit_centered(surface, "Tower Defense", 128, title_center)
            self._blit_centered(surface, "Press ENTER to start", 64, start_center)
            author_height = _render_text(_font(self.font, 32), "Luka Vukorepa 2025", SCREEN_TEXT_COLOR).get_height()
            self._blit_centered(
                surface,
                "Luka Vukorepa 2025",
                32,
                Vector2(width / 2.0, height - author_height * 2.0),
            )
        elif self.game_state is GameState.GAMEPLAY:
            self.grid.render(surface)
            for tower in self.towers:
                tower.render(surface, interpolation_factor)
            for enemy in self.enemies:
                enemy.render(surface, interpolation_factor)
            self.ui.render(surface)
        elif self.game_state is GameState.GAME_OVER:
            self._blit_centered(surface, "Game Over!", 104, title_center - Vector2(0.0, 50.0))
            self._blit_centered(
                surface, self.game_over_wave_text, 64, title_center + Vector2(0.0, 50.0)
            )
            self._blit_centered(surface, "Press ENTER to return to Main Menu", 64, start_center)

        if self.window is not None:
            pygame.display.flip()

    def _start_tile(self) -> tuple[int, int]:
        for row in range(GRID_ROWS):
            if self.grid.tile_type(0, row) is TileType.START:
                return (0, row)
        raise RuntimeError("the level has no start tile")

    def update_wave(self, fixed_time_step: float) -> None:
        """Start new waves after a pause and spawn their enemies one by one."""
        self.time_since_last_enemy_spawned += fixed_time_step

        if self.time_since_last_wave_ended < self.time_between_waves:
            self.time_since_last_wave_ended += fixed_time_step
            return

        if self.enemies_spawned_this_wave == 0 and not self.waiting_for_first_enemy_in_wave:
            self.sound_manager.play_sound(SoundID.NEW_WAVE)
            self.wave += 1
            self.time_between_enemies -= SPAWN_INTERVAL_DECREMENT
            self.enemies_per_wave += 1
            self.waiting_for_first_enemy_in_wave = True

        if (
            self.time_since_last_enemy_spawned >= self.time_between_enemies
            and self.enemies_spawned_this_wave < self.enemies_per_wave
        ):
            self.waiting_for_first_enemy_in_wave = False
            self.time_since_last_enemy_spawned = 0.0
            self.enemies_spawned_this_wave += 1
            self.enemies.append(
                Enemy(
                    self._start_tile(),
                    ENEMY_BASE_SPEED + self.wave * WAVE_SPEED_BONUS,
                    int(ENEMY_BASE_HEALTH + self.wave / 3.0),
                )
            )

        if self.enemies_spawned_this_wave >= self.enemies_per_wave:
            self.time_since_last_wave_ended = 0.0
            self.enemies_spawned_this_wave = 0

    def _deselect_all_towers(self) -> None:
        for tower in self.towers:
            tower.is_selected = False

    def reset_game(self) -> None:
        """Clear the field and restore starting lives, gold, waves and a new level."""
        self._clear_selection()
        self.towers.clear()
        self.enemies.clear()
        self._reset_wave_state()
        self.lives = STARTING_LIVES
        self.wallet.gold = STARTING_GOLD
        self.grid.generate_new_random_level(GRID_COLS, GRID_ROWS)

    def switch_game_state(self, new_state: GameState) -> None:
        """Change state; leaving gameplay records the wave reached and resets the game."""
        self.sound_manager.play_sound(SoundID.BUTTON_CLICK)
        if self.game_state is GameState.GAMEPLAY:
            self.game_over_wave_text = f"Reached wave: {self.wave}"
            self.reset_game()
        self.game_state = new_state


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="towerdefense", description="A tower defense game.")
    parser.add_argument(
        "--assets", default="assets", help="directory holding the fonts/ and sounds/ folders"
    )
    args = parser.parse_args(argv)
    return Game(args.assets).run()


if __name__ == "__main__":
    raise SystemExit(main())