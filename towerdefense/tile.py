"""A single square cell of the playing field."""

from __future__ import annotations

from enum import Enum, auto

import pygame

from towerdefense.utility import random_int

PATH_COLOR = pygame.Color(155, 118, 83)
UNASSIGNED_COLOR = pygame.Color(255, 255, 255, 100)
SELECTION_OUTLINE_COLOR = pygame.Color(255, 255, 255, 255)
SELECTION_OUTLINE_THICKNESS = 4


class TileType(Enum):
    """What a tile is used for."""

    START = auto()
    END = auto()
    PATHABLE = auto()
    BUILDABLE = auto()
    TOWER = auto()
    UNASSIGNED = auto()


_PATH_TYPES = frozenset({TileType.START, TileType.END, TileType.PATHABLE})


def _grass_color() -> pygame.Color:
    return pygame.Color(
        random_int(157, 165),
        random_int(217, 229),
        random_int(77, 83),
    )


class Tile:
    """A grid cell with a type, a position in tile units and a drawable square."""

    def __init__(self, tile_type: TileType, x: int, y: int, size: float) -> None:
        self.tile_type = tile_type
        self.x = x
        self.y = y
        self.size = size
        self.is_selected = False
        self.rect = pygame.Rect(round(x * size), round(y * size), round(size), round(size))

        if tile_type in _PATH_TYPES:
            self.color = pygame.Color(PATH_COLOR)
        elif tile_type is TileType.BUILDABLE:
            self.color = _grass_color()
        else:
            self.color = pygame.Color(UNASSIGNED_COLOR)

    def render(self, surface: pygame.Surface) -> None:
        """Draw the tile, with a white outline around it when selected."""
        if self.is_selected:
            outline = self.rect.inflate(
                2 * SELECTION_OUTLINE_THICKNESS, 2 * SELECTION_OUTLINE_THICKNESS
            )
            pygame.draw.rect(surface, SELECTION_OUTLINE_COLOR, outline)
        pygame.draw.rect(surface, self.color, self.rect)

    def mark_as_tower(self) -> None:
        """Record that a tower now occupies this tile."""
        self.tile_type = TileType.TOWER