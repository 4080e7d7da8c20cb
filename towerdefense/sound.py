"""Loading and playing sound effects with optional random pitch variation."""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pygame

from towerdefense.utility import random_pitch

logger = logging.getLogger(__name__)


class SoundID(Enum):
    BULLET_SHOOT = auto()
    SPLASH_SHOOT = auto()
    SPLASH_EXPLODE = auto()
    SLOW_PULSE = auto()
    LIFE_LOST = auto()
    NEW_WAVE = auto()
    ENEMY_HIT = auto()
    ENEMY_DEATH = auto()
    TOWER_UPGRADE = auto()
    BUTTON_CLICK = auto()


SOUND_FILES: dict[SoundID, str] = {
    SoundID.BULLET_SHOOT: "bullet-shoot.wav",
    SoundID.SPLASH_SHOOT: "splash-shoot.wav",
    SoundID.SPLASH_EXPLODE: "splash-explosion.wav",
    SoundID.SLOW_PULSE: "slow-pulse.wav",
    SoundID.LIFE_LOST: "life-lost.wav",
    SoundID.NEW_WAVE: "new-wave.wav",
    SoundID.ENEMY_HIT: "enemy-hit.wav",
    SoundID.ENEMY_DEATH: "enemy-death.wav",
    SoundID.TOWER_UPGRADE: "tower-upgrade.wav",
    SoundID.BUTTON_CLICK: "button-click.wav",
}


def _with_pitch(sound: pygame.mixer.Sound, pitch: float) -> pygame.mixer.Sound:
    """Resample a sound so it plays back at the given pitch factor."""
    samples = pygame.sndarray.array(sound)
    count = samples.shape[0]
    new_count = max(1, int(round(count / pitch)))
    positions = np.linspace(0.0, count - 1, new_count)
    source = np.arange(count)
    if samples.ndim == 1:
        resampled = np.interp(positions, source, samples)
    else:
        resampled = np.stack(
            [np.interp(positions, source, samples[:, ch]) for ch in range(samples.shape[1])],
            axis=1,
        )
    return pygame.sndarray.make_sound(np.ascontiguousarray(resampled.astype(samples.dtype)))


class SoundManager:
    """Holds the loaded effects and the sounds currently playing."""

    def __init__(self, volume: float = 100.0) -> None:
        self.volume = volume
        self._buffers: dict[SoundID, pygame.mixer.Sound] = {}
        self._active: list[tuple[pygame.mixer.Sound, pygame.mixer.Channel]] = []

    @property
    def active_count(self) -> int:
        return len(self._active)

    def load_sounds(self, directory: Union[str, Path] = "assets/sounds") -> None:
        """Load every effect from the directory; missing files raise FileNotFoundError."""
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        directory = Path(directory)
        for sound_id, filename in SOUND_FILES.items():
            path = directory / filename
            if not path.is_file():
                raise FileNotFoundError(f"sound file not found: {path}")
            self._buffers[sound_id] = pygame.mixer.Sound(str(path))

    def play_sound(
        self,
        sound_id: SoundID,
        pitch_variance: float = 0.0,
        volume_multiplier: float = 1.0,
    ) -> Optional[pygame.mixer.Sound]:
        """Play an effect; pitch_variance 0.15 means +/- 15% pitch.

        Returns the sound that was started, or None if the effect is not loaded.
        """
        base = self._buffers.get(sound_id)
        if base is None:
            logger.error("sound %s has not been loaded", sound_id.name)
            return None

        if not 0.0 <= pitch_variance <= 1.0:
            logger.warning("pitch variance must be between 0 and 1; using 0")
            pitch_variance = 0.0

        if pitch_variance != 0.0:
            sound = _with_pitch(base, random_pitch(pitch_variance))
        else:
            sound = pygame.mixer.Sound(buffer=base.get_raw())

        sound.set_volume(min(max(self.volume * volume_multiplier / 100.0, 0.0), 1.0))
        channel = sound.play()
        if channel is not None:
            self._active.append((sound, channel))
        return sound

    def cleanup_sounds(self) -> None:
        """Forget sounds that have stopped playing."""
        self._active = [
            (sound, channel)
            for sound, channel in self._active
            if channel.get_busy() and channel.get_sound() is sound
        ]