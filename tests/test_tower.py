import pygame
import pytest

from towerdefense.tower import Tower
from towerdefense.tower_registry import TowerType, metadata_for
from towerdefense.utility import tile_to_pixel_position

COLORS = ((8, 74, 44), (9, 83, 49), (10, 92, 54))


def make_tower(tower_type=TowerType.BULLET, tile=(1, 1)):
    return Tower(tower_type, *COLORS, tile)


def test_attributes_come_from_registry():
    tower = make_tower(TowerType.SPLASH)
    assert tower.attributes == metadata_for(TowerType.SPLASH).attributes
    assert tower.level == 0
    assert tower.current_attributes() == tower.attributes[0]


def test_position_is_tile_centre():
    tower = make_tower(tile=(2, 3))
    assert tower.position == tile_to_pixel_position(2, 3)
    assert tower.tile_position == (2, 3)


def test_name_and_max_level():
    tower = make_tower(TowerType.BULLET)
    assert tower.name == "Bullet"
    assert tower.max_level == len(tower.attributes) - 1


def test_unknown_type_raises():
    with pytest.raises(KeyError):
        Tower("nope", *COLORS, (0, 0))


def test_upgrade_needs_enough_gold():
    tower = make_tower()
    cost = tower.attributes[1].buy_cost
    assert tower.try_upgrade(cost - 1) is False
    assert tower.level == 0
    tower.mark_for_upgrade()
    assert tower.try_upgrade(cost) is True
    assert tower.level == 1
    assert tower.marked_for_upgrade is False


def test_upgrade_stops_at_max_level():
    tower = make_tower()
    while tower.level < tower.max_level:
        assert tower.try_upgrade(10**6)
    assert tower.try_upgrade(10**6) is False
    assert tower.level == tower.max_level


def test_can_fire_after_reload():
    tower = make_tower()
    assert tower.can_fire() is False
    tower.update(tower.current_attributes().fire_rate, [], None)
    assert tower.can_fire() is True


def test_mark_for_sale():
    tower = make_tower()
    assert tower.marked_for_sale is False
    tower.mark_for_sale()
    assert tower.marked_for_sale is True


def test_render_draws_body_for_level():
    surface = pygame.Surface((400, 400))
    tower = make_tower(tile=(1, 1))
    center = (int(tower.position.x), int(tower.position.y))
    tower.render(surface, 0.0)
    assert surface.get_at(center) == pygame.Color(*COLORS[0])
    tower.level = 2
    tower.render(surface, 0.0)
    assert surface.get_at(center) == pygame.Color(*COLORS[2])


def test_range_circle_darkens_only_inside():
    surface = pygame.Surface((1000, 1000))
    surface.fill((255, 255, 255))
    tower = make_tower(tile=(1, 1))
    tower.range_circle_visible = True
    tower.render(surface, 0.0)
    inside = surface.get_at((int(tower.position.x) + 200, int(tower.position.y)))
    outside = surface.get_at((990, 990))
    assert inside.r < 255
    assert outside == pygame.Color(255, 255, 255)