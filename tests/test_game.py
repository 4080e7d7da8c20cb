import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from towerdefense.bullet_tower import BulletTower
from towerdefense.enemy import Enemy
from towerdefense.game import (
    ENEMIES_PER_WAVE,
    FIXED_TIME_STEP,
    STARTING_GOLD,
    STARTING_LIVES,
    TIME_BETWEEN_ENEMIES,
    TIME_BETWEEN_WAVES,
    Game,
    GameState,
    main,
)
from towerdefense.slow_tower import SlowTower
from towerdefense.tower_registry import TowerType, metadata_for


@pytest.fixture
def game():
    return Game()


@pytest.fixture
def playing(game):
    game.switch_game_state(GameState.GAMEPLAY)
    return game


def test_new_game_starts_in_main_menu(game):
    assert game.game_state is GameState.MAIN_MENU
    assert game.lives == 5
    assert game.wallet.gold == 100
    assert game.wave == 0
    assert game.towers == [] and game.enemies == []


def test_switch_to_gameplay(playing):
    assert playing.game_state is GameState.GAMEPLAY


def test_first_wave_starts_without_immediate_spawn(playing):
    playing.update_wave(FIXED_TIME_STEP)
    assert playing.wave == 1
    assert playing.enemies_per_wave == ENEMIES_PER_WAVE + 1
    assert playing.time_between_enemies < TIME_BETWEEN_ENEMIES
    assert playing.waiting_for_first_enemy_in_wave is True
    assert playing.enemies == []


def test_enemy_spawns_after_interval(playing):
    playing.update_wave(FIXED_TIME_STEP)
    playing.update_wave(1.0)
    assert len(playing.enemies) == 1
    assert playing.waiting_for_first_enemy_in_wave is False
    assert playing.enemies_spawned_this_wave == 1


def test_full_wave_then_pause(playing):
    for _ in range(ENEMIES_PER_WAVE + 2):
        playing.update_wave(1.0)
    assert len(playing.enemies) == playing.enemies_per_wave
    assert playing.wave == 1
    assert playing.enemies_spawned_this_wave == 0
    assert 0.0 < playing.time_since_last_wave_ended < TIME_BETWEEN_WAVES


def test_place_tower_charges_buy_cost(playing):
    tower = playing.place_tower(TowerType.BULLET, (0, 0))
    assert isinstance(tower, BulletTower)
    assert tuple(tower.tile_position) == (0, 0)
    assert playing.towers == [tower]
    cost = metadata_for(TowerType.BULLET).attributes[0].buy_cost
    assert playing.wallet.gold == STARTING_GOLD - cost


def test_requested_tower_is_built_on_update(playing):
    playing.ui.show_tower_build_menu((0, 0), (1200, 1200))
    playing.ui.tower_build_menu.requested_tower_type = TowerType.SLOW
    playing.update(FIXED_TIME_STEP)
    assert len(playing.towers) == 1
    assert isinstance(playing.towers[0], SlowTower)
    cost = metadata_for(TowerType.SLOW).attributes[0].buy_cost
    assert playing.wallet.gold == STARTING_GOLD - cost
    assert playing.ui.selected_tile is None
    assert playing.ui.tower_build_menu.active is False


def test_selling_tower_refunds_and_removes_it(playing):
    tower = playing.place_tower(TowerType.SPLASH, (0, 0))
    gold_after_buy = playing.wallet.gold
    tower.mark_for_sale()
    playing.update(FIXED_TIME_STEP)
    assert playing.towers == []
    sell = metadata_for(TowerType.SPLASH).attributes[0].sell_cost
    assert playing.wallet.gold == gold_after_buy + sell


def test_upgrade_charges_next_level_cost(playing):
    tower = playing.place_tower(TowerType.BULLET, (0, 0))
    playing.wallet.gold = 1000
    tower.mark_for_upgrade()
    playing.update(FIXED_TIME_STEP)
    assert tower.level == 1
    assert tower.marked_for_upgrade is False
    assert playing.wallet.gold == 1000 - tower.attributes[1].buy_cost


def test_unaffordable_upgrade_is_kept_pending(playing):
    tower = playing.place_tower(TowerType.BULLET, (0, 0))
    playing.wallet.gold = 0
    tower.mark_for_upgrade()
    playing.update(FIXED_TIME_STEP)
    assert tower.level == 0
    assert tower.marked_for_upgrade is True
    assert playing.wallet.gold == 0


def test_losing_all_lives_ends_game_and_resets(playing):
    playing.place_tower(TowerType.BULLET, (0, 0))
    playing.time_since_last_wave_ended = 0.0
    playing.wave = 3
    playing.lives = 0
    playing.update(FIXED_TIME_STEP)
    assert playing.game_state is GameState.GAME_OVER
    assert playing.game_over_wave_text == "Reached wave: 3"
    assert playing.lives == STARTING_LIVES
    assert playing.wallet.gold == STARTING_GOLD
    assert playing.wave == 0
    assert playing.towers == []


def test_game_over_returns_to_main_menu(playing):
    playing.switch_game_state(GameState.GAME_OVER)
    playing.switch_game_state(GameState.MAIN_MENU)
    assert playing.game_state is GameState.MAIN_MENU


def test_reset_game_restores_wave_timers(playing):
    for _ in range(3):
        playing.update_wave(1.0)
    playing.reset_game()
    assert playing.enemies == []
    assert playing.wave == 0
    assert playing.enemies_per_wave == ENEMIES_PER_WAVE
    assert playing.time_between_enemies == TIME_BETWEEN_ENEMIES
    assert playing.time_since_last_wave_ended == TIME_BETWEEN_WAVES
    assert playing.waiting_for_first_enemy_in_wave is False


def test_killed_enemy_pays_its_worth(playing):
    playing.time_since_last_wave_ended = 0.0
    enemy = Enemy((0, 1), 60.0, 1)
    worth = enemy.worth
    playing.enemies.append(enemy)
    enemy.take_damage(100)
    for _ in range(120):
        playing.update(FIXED_TIME_STEP)
        if not playing.enemies:
            break
    assert playing.enemies == []
    assert playing.wallet.gold == STARTING_GOLD + worth
    assert playing.lives == STARTING_LIVES


def test_render_main_menu_fills_background(game):
    game.render(0.0)
    assert game.surface.get_at((0, 0)) == pygame.Color(110, 115, 120)


def test_render_gameplay_draws_grid(playing):
    playing.render(0.0)
    assert playing.surface.get_at((0, 0)) != pygame.Color(110, 115, 120)
    assert playing.surface.get_size() == (1200, 1200)


def test_quit_event_stops_game(game):
    pygame.display.init()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    game.process_input()
    assert game.is_running is False


def test_main_with_missing_assets_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["--assets", str(tmp_path)])