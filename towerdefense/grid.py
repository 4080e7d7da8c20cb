"""The playing field: a randomly generated grid of tiles with a winding path."""

from __future__ import annotations

from typing import Optional

import pygame

from towerdefense.tile import Tile, TileType
from towerdefense.utility import TILE_SIZE, random_int


class Grid:
    """A cols x rows field of tiles whose path runs from the left edge to the right."""

    TILE_SIZE = TILE_SIZE

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = cols
        self.rows = rows
        self.start_tile: tuple[int, int] = (0, 0)
        self._tiles: list[list[Tile]] = []
        self.generate_new_random_level(cols, rows)

    @property
    def size(self) -> tuple[int, int]:
        """Grid dimensions as (cols, rows)."""
        return self.cols, self.rows

    def render(self, surface: pygame.Surface) -> None:
        """Draw every tile, then the selected one again so its outline is on top."""
        selected: Optional[Tile] = None
        for row in self._tiles:
            for tile in row:
                tile.render(surface)
                if tile.is_selected:
                    selected = tile
        if selected is not None:
            selected.render(surface)

    def generate_new_random_level(self, cols: int, rows: int) -> None:
        """Replace the tiles with a new random level whose path touches every row."""
        if cols < 2 or rows < 3:
            raise ValueError(f"grid must be at least 2 columns by 3 rows, got {cols}x{rows}")
        while True:
            level, start, covers_all_rows = self._random_level(cols, rows)
            if covers_all_rows:
                break
        self.cols = cols
        self.rows = rows
        self._tiles = level
        self.start_tile = start

    @staticmethod
    def _random_level(
        cols: int, rows: int
    ) -> tuple[list[list[Tile]], tuple[int, int], bool]:
        level: list[list[Optional[Tile]]] = [[None] * cols for _ in range(rows)]
        # The first and last rows never carry the path, so they count as covered.
        has_path = [False] * rows
        has_path[0] = True
        has_path[-1] = True

        current_row = random_int(1, rows - 2)
        level[current_row][0] = Tile(TileType.START, 0, current_row, TILE_SIZE)
        start = (0, current_row)

        previous_direction = 0
        for col in range(1, cols):
            previous_row = current_row
            roll = random_int(0, 9)
            vertical_steps = random_int(1, rows)
            is_last = col == cols - 1

            direction = 0
            if not is_last:
                if roll < 5 and previous_direction != 1:
                    direction = -1
                elif roll > 4 and previous_direction != -1:
                    direction = 1
            previous_direction = direction

            for _ in range(vertical_steps):
                current_row = min(max(current_row + direction, 1), rows - 2)
                level[current_row][col] = Tile(TileType.PATHABLE, col, current_row, TILE_SIZE)
                has_path[current_row] = True

            if current_row != previous_row:
                step = 1 if current_row > previous_row else -1
                for row in range(previous_row, current_row, step):
                    level[row][col] = Tile(TileType.PATHABLE, col, row, TILE_SIZE)
                    has_path[row] = True

            if is_last:
                level[current_row][col] = Tile(TileType.END, col, current_row, TILE_SIZE)
            else:
                level[current_row][col] = Tile(TileType.PATHABLE, col, current_row, TILE_SIZE)
                has_path[current_row] = True

        tiles = [
            [
                tile if tile is not None else Tile(TileType.BUILDABLE, col, row, TILE_SIZE)
                for col, tile in enumerate(cells)
            ]
            for row, cells in enumerate(level)
        ]
        return tiles, start, all(has_path)

    def _in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def select_tile(self, tile_position: tuple[int, int]) -> None:
        """Make the given tile the only selected one; out-of-range positions are ignored."""
        col, row = tile_position
        if not self._in_bounds(col, row):
            return
        self.deselect_all_tiles()
        self._tiles[row][col].is_selected = True

    def deselect_all_tiles(self) -> None:
        for row in self._tiles:
            for tile in row:
                tile.is_selected = False

    def mark_tile_as_tower(self, tile_position: tuple[int, int]) -> None:
        """Mark a tile as holding a tower; out-of-range positions are ignored."""
        col, row = tile_position
        if not self._in_bounds(col, row):
            return
        self._tiles[row][col].mark_as_tower()

    def tile_type(self, col: int, row: int) -> TileType:
        """Type of the tile at (col, row), or UNASSIGNED outside the grid."""
        if not self._in_bounds(col, row):
            return TileType.UNASSIGNED
        return self._tiles[row][col].tile_type

    def tile_type_at(self, tile_position: tuple[int, int]) -> TileType:
        return self.tile_type(tile_position[0], tile_position[1])

    def selected_tile(self) -> Optional[tuple[int, int]]:
        """Position of the selected tile, or None if nothing is selected."""
        for row_index, row in enumerate(self._tiles):
            for col_index, tile in enumerate(row):
                if tile.is_selected:
                    return col_index, row_index
        return None