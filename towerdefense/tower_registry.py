"""Static description of every tower type and its per-level attributes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class TowerType(Enum):
    """The kinds of tower that can be built."""

    BULLET = 0
    SPLASH = 1
    SLOW = 2


@dataclass(frozen=True)
class LevelAttributes:
    """Stats of a tower at one upgrade level."""

    buy_cost: int
    sell_cost: int
    damage: int
    range: float
    fire_rate: float
    splash_radius: float = 0.0  # used by splash towers
    slow_amount: float = 0.0  # 0.5 means -50% speed
    slow_duration: float = 0.0  # seconds


@dataclass(frozen=True)
class TowerMetadata:
    """Name and level table of one tower type."""

    tower_type: TowerType
    name: str
    attributes: tuple[LevelAttributes, ...]


@lru_cache(maxsize=None)
def tower_metadata_registry() -> tuple[TowerMetadata, ...]:
    """All tower types, in build-menu order."""
    return (
        TowerMetadata(
            TowerType.BULLET,
            "Bullet",
            (
                LevelAttributes(20, 10, 2, 240.0, 1.1),
                LevelAttributes(75, 40, 4, 300.0, 1.0),
                LevelAttributes(150, 100, 6, 360.0, 0.85),
            ),
        ),
        TowerMetadata(
            TowerType.SPLASH,
            "Splash",
            (
                LevelAttributes(30, 15, 1, 160.0, 2.2, splash_radius=60.0),
                LevelAttributes(100, 55, 2, 200.0, 1.9, splash_radius=80.0),
                LevelAttributes(200, 130, 4, 240.0, 1.6, splash_radius=110.0),
            ),
        ),
        TowerMetadata(
            TowerType.SLOW,
            "Slow",
            (
                LevelAttributes(25, 15, 0, 280.0, 4.0, slow_amount=0.4, slow_duration=1.5),
                LevelAttributes(90, 50, 0, 340.0, 3.75, slow_amount=0.5, slow_duration=1.75),
                LevelAttributes(180, 125, 0, 400.0, 3.5, slow_amount=0.6, slow_duration=2.0),
            ),
        ),
    )


@lru_cache(maxsize=None)
def _by_type() -> dict[TowerType, TowerMetadata]:
    return {metadata.tower_type: metadata for metadata in tower_metadata_registry()}


def metadata_for(tower_type: TowerType) -> TowerMetadata:
    """Metadata of the given tower type; KeyError for anything else."""
    try:
        return _by_type()[tower_type]
    except (KeyError, TypeError):
        raise KeyError(f"unknown tower type: {tower_type!r}") from None