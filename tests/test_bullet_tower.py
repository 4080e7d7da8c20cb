import pygame
import pytest
from pygame.math import Vector2

from towerdefense.bullet_tower import BulletTower
from towerdefense.enemy import Enemy
from towerdefense.sound import SoundID


class RecordingSound:
    def __init__(self):
        self.calls = []

    def play_sound(self, sound_id, pitch_variance=0.0, volume_multiplier=1.0):
        self.calls.append((sound_id, pitch_variance))


def enemy_at(position, health=10, speed=60.0):
    enemy = Enemy((0, 0), speed, health)
    enemy.position_current = Vector2(position)
    enemy.position_previous = Vector2(position)
    return enemy


def test_bullet_speed_constant():
    assert BulletTower((1, 1)).bullet_speed == 900.0


def test_no_enemies_no_shot():
    tower = BulletTower((2, 2))
    sounds = RecordingSound()
    tower.update(tower.current_attributes().fire_rate, [], sounds)
    assert tower.bullets == []
    assert sounds.calls == []


def test_fires_at_enemy_in_range():
    tower = BulletTower((2, 2))
    enemy = enemy_at(tower.position + Vector2(100, 0))
    sounds = RecordingSound()
    tower.update(tower.current_attributes().fire_rate, [enemy], sounds)
    assert len(tower.bullets) == 1
    assert sounds.calls == [(SoundID.BULLET_SHOOT, 0.15)]
    assert enemy.incoming_damage == tower.current_attributes().damage
    assert tower.time_since_last_shot == 0.0
    assert tower.bullets[0].direction.x > 0


def test_ignores_enemy_out_of_range():
    tower = BulletTower((2, 2))
    far = tower.current_attributes().range + 50
    enemy = enemy_at(tower.position + Vector2(far, 0))
    sounds = RecordingSound()
    tower.update(tower.current_attributes().fire_rate, [enemy], sounds)
    assert tower.bullets == []
    assert enemy.incoming_damage == 0


def test_fire_at_direction_is_unit():
    tower = BulletTower((2, 2))
    tower.fire_at(tower.position + Vector2(30, 40))
    assert tower.bullets[0].direction.length() == pytest.approx(1.0)
    assert tower.bullets[0].position_current == tower.position


def test_bullet_hits_and_is_removed_next_frame():
    tower = BulletTower((2, 2))
    enemy = enemy_at(tower.position + Vector2(50, 0))
    tower.fire_at(enemy.pixel_position)
    sounds = RecordingSound()
    tower.update(0.05, [enemy], sounds)
    assert enemy.health == 10 - tower.current_attributes().damage
    assert tower.bullets[0].has_hit_enemy is True
    assert (SoundID.ENEMY_HIT, 0.15) in sounds.calls
    tower.update(0.01, [enemy], sounds)
    assert tower.bullets == []


def test_render_draws_bullet():
    surface = pygame.Surface((400, 400))
    tower = BulletTower((1, 1))
    tower.fire_at(tower.position + Vector2(100, 0))
    tower.render(surface, 0.0)
    assert surface.get_at((int(tower.position.x), int(tower.position.y))) == tower.bullet_color