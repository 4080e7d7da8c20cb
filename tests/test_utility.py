import math
from dataclasses import dataclass, field

import pytest
from pygame import Color
from pygame.math import Vector2

from towerdefense.utility import (
    TILE_SIZE,
    ReleaseTracker,
    angle_to_vector,
    blend_colors,
    closest_enemy_in_range,
    distance,
    distance_squared,
    interpolate,
    normalize,
    pixel_to_tile_position,
    predict_target_intercept,
    random_float,
    random_int,
    random_pitch,
    remove_trailing_zeros,
    tile_to_pixel_position,
)


@dataclass
class FakeEnemy:
    pixel_position: Vector2
    health: int = 5
    incoming_damage: int = 0
    dead: bool = False

    def is_dead(self):
        return self.dead


def test_random_int_within_bounds():
    values = {random_int(3, 6) for _ in range(300)}
    assert values <= {3, 4, 5, 6}
    assert len(values) > 1


def test_random_float_within_bounds():
    for _ in range(200):
        value = random_float(0.4, 0.6)
        assert 0.4 <= value <= 0.6


def test_random_pitch_within_variation():
    for _ in range(200):
        pitch = random_pitch(0.15)
        assert 0.85 <= pitch <= 1.15


def test_random_pitch_without_variation_is_one():
    assert random_pitch(0.0) == 1.0


def test_interpolate_endpoints():
    previous = (10.0, -4.0)
    current = (30.0, 8.0)
    assert interpolate(previous, current, 0.0) == Vector2(previous)
    assert interpolate(previous, current, 1.0) == Vector2(current)


def test_interpolate_midpoint_is_equidistant():
    previous = (10.0, -4.0)
    current = (30.0, 8.0)
    mid = interpolate(previous, current, 0.5)
    assert distance(mid, previous) == pytest.approx(distance(mid, current))


def test_normalize_has_unit_length_and_same_direction():
    vector = (3.0, -7.0)
    unit = normalize(vector)
    assert unit.length() == pytest.approx(1.0)
    assert unit.cross(Vector2(vector)) == pytest.approx(0.0)
    assert unit.dot(Vector2(vector)) > 0


def test_normalize_zero_vector():
    assert normalize((0.0, 0.0)) == Vector2(0.0, 0.0)


def test_distance_known_triangle():
    assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)


@pytest.mark.parametrize("a,b", [((1.0, 2.0), (-4.0, 9.5)), ((0.0, 0.0), (12.0, -3.0))])
def test_distance_squared_matches_distance(a, b):
    assert distance_squared(a, b) == pytest.approx(distance(a, b) ** 2)


@pytest.mark.parametrize("angle", [0.0, 37.0, 90.0, 215.5, 360.0])
def test_angle_to_vector_is_unit(angle):
    assert angle_to_vector(angle).length() == pytest.approx(1.0)


def test_angle_to_vector_opposite_angles():
    forward = angle_to_vector(40.0)
    backward = angle_to_vector(220.0)
    assert (forward + backward).length() == pytest.approx(0.0, abs=1e-9)


def test_predict_stationary_target_is_target_position():
    result = predict_target_intercept((0.0, 0.0), (100.0, 50.0), (0.0, 0.0), 900.0)
    assert result == Vector2(100.0, 50.0)


def test_predict_moving_target_times_match():
    shooter = Vector2(0.0, 0.0)
    target = Vector2(200.0, 100.0)
    velocity = Vector2(0.0, 60.0)
    speed = 300.0
    result = predict_target_intercept(shooter, target, velocity, speed)
    assert result is not None
    projectile_time = result.distance_to(shooter) / speed
    target_time = result.distance_to(target) / velocity.length()
    assert projectile_time == pytest.approx(target_time)


def test_predict_equal_speed_is_none():
    assert predict_target_intercept((0.0, 0.0), (100.0, 0.0), (50.0, 0.0), 50.0) is None


def test_predict_target_escaping_is_none():
    assert predict_target_intercept((0.0, 0.0), (100.0, 0.0), (500.0, 0.0), 100.0) is None


def test_closest_enemy_picks_nearest():
    near = FakeEnemy(Vector2(10.0, 0.0))
    far = FakeEnemy(Vector2(50.0, 0.0))
    assert closest_enemy_in_range((0.0, 0.0), [far, near], 100.0) is near


def test_closest_enemy_out_of_range():
    enemies = [FakeEnemy(Vector2(500.0, 0.0))]
    assert closest_enemy_in_range((0.0, 0.0), enemies, 100.0) is None


def test_closest_enemy_skips_dead():
    dead = FakeEnemy(Vector2(5.0, 0.0), dead=True)
    alive = FakeEnemy(Vector2(40.0, 0.0))
    assert closest_enemy_in_range((0.0, 0.0), [dead, alive], 100.0) is alive


def test_closest_enemy_overkill_rule():
    doomed = FakeEnemy(Vector2(5.0, 0.0), health=2, incoming_damage=2)
    other = FakeEnemy(Vector2(40.0, 0.0))
    assert closest_enemy_in_range((0.0, 0.0), [doomed, other], 100.0) is other
    assert closest_enemy_in_range((0.0, 0.0), [doomed, other], 100.0, False) is doomed


def test_blend_transparent_overlay_keeps_base():
    base = Color(71, 28, 28)
    result = blend_colors(base, Color(54, 139, 193, 0))
    assert tuple(result) == (71, 28, 28, 255)


def test_blend_opaque_overlay_takes_overlay():
    result = blend_colors(Color(71, 28, 28), Color(54, 139, 193, 255))
    assert tuple(result) == (54, 139, 193, 255)


def test_blend_partial_is_between():
    base = Color(0, 200, 100)
    overlay = Color(200, 0, 100, 128)
    result = blend_colors(base, overlay)
    assert 0 <= result.r <= 200
    assert 0 <= result.g <= 200
    assert result.a == 255


@pytest.mark.parametrize("col,row", [(0, 0), (3, 5), (9, 7)])
@pytest.mark.parametrize("center", [True, False])
def test_tile_pixel_round_trip(col, row, center):
    assert pixel_to_tile_position(tile_to_pixel_position(col, row, center)) == (col, row)


def test_center_is_half_tile_from_corner():
    offset = tile_to_pixel_position(4, 2) - tile_to_pixel_position(4, 2, False)
    assert offset == Vector2(TILE_SIZE / 2.0, TILE_SIZE / 2.0)


def test_pixel_to_tile_truncates():
    assert pixel_to_tile_position((TILE_SIZE * 2 - 0.5, TILE_SIZE - 0.1)) == (1, 0)


def test_remove_trailing_zeros_pinned():
    assert remove_trailing_zeros(1.1) == "1.1"
    assert remove_trailing_zeros(4.0) == "4"


@pytest.mark.parametrize("number", [0.85, 1.75, 2.2, 60.0, 110.0, 3.5, 0.0])
def test_remove_trailing_zeros_round_trip(number):
    text = remove_trailing_zeros(number)
    assert float(text) == round(number, 2)
    assert not text.endswith(".")
    if "." in text:
        assert not text.endswith("0")


def test_release_tracker_reports_release_once():
    tracker = ReleaseTracker()
    assert tracker.released("enter", True) is False
    assert tracker.released("enter", False) is True
    assert tracker.released("enter", False) is False


def test_release_tracker_keys_are_independent():
    tracker = ReleaseTracker()
    tracker.released("left", True)
    assert tracker.released("right", False) is False
    assert tracker.released("left", False) is True