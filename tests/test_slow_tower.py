import pytest
from pygame.math import Vector2

from towerdefense.enemy import Enemy, StatusEffectType
from towerdefense.slow_tower import SlowTower
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


def charged_tower():
    tower = SlowTower((3, 3))
    tower.update(tower.current_attributes().fire_rate, [], RecordingSound())
    return tower


def test_pulse_slows_enemies_in_range():
    tower = charged_tower()
    stats = tower.current_attributes()
    near = enemy_at(tower.position + Vector2(100, 0))
    far = enemy_at(tower.position + Vector2(stats.range + 50, 0))
    sounds = RecordingSound()
    tower.update(0.01, [near, far], sounds)
    assert sounds.calls == [(SoundID.SLOW_PULSE, 0.1)]
    assert tower.is_pulsing is True
    assert tower.time_since_last_shot == 0.0
    assert [e.effect_type for e in near.status_effects] == [StatusEffectType.SLOW]
    assert near.status_effects[0].amount == stats.slow_amount
    assert near.status_effects[0].duration == stats.slow_duration
    assert far.status_effects == []


def test_no_pulse_without_enemies_in_range():
    tower = charged_tower()
    far = enemy_at(tower.position + Vector2(tower.current_attributes().range + 50, 0))
    sounds = RecordingSound()
    tower.update(0.01, [far], sounds)
    assert tower.is_pulsing is False
    assert sounds.calls == []


def test_no_pulse_before_reload():
    tower = SlowTower((3, 3))
    enemy = enemy_at(tower.position + Vector2(50, 0))
    tower.update(0.01, [enemy], RecordingSound())
    assert enemy.status_effects == []


def test_pulse_grows_and_ends():
    tower = charged_tower()
    enemy = enemy_at(tower.position + Vector2(50, 0))
    tower.update(0.01, [enemy], RecordingSound())
    first_radius = tower.pulse_radius
    tower.update(0.1, [], RecordingSound())
    assert tower.pulse_radius > first_radius
    assert tower.pulse_radius <= tower.current_attributes().range
    tower.update(0.25, [], RecordingSound())
    assert tower.is_pulsing is False


def test_fire_at_starts_pulse():
    tower = SlowTower((3, 3))
    tower.time_since_last_shot = 2.0
    tower.fire_at(tower.position)
    assert tower.is_pulsing is True
    assert tower.time_since_last_shot == 0.0
    assert tower.pulse_radius == 0.0


def test_slowed_enemy_moves_slower():
    tower = charged_tower()
    enemy = enemy_at(tower.position + Vector2(50, 0))
    tower.update(0.01, [enemy], RecordingSound())
    enemy.update_status_effects(0.0)
    expected = enemy.base_speed * (1.0 - tower.current_attributes().slow_amount)
    assert enemy.current_speed == pytest.approx(expected)