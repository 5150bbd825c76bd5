#!/usr/bin/env python3
"""Label-keyed sound playback on the pygame mixer."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

logger = logging.getLogger(__name__)


class SoundPlayer:
    """Plays ``<sound_dir>/<label><ext>``; failures are logged, never raised."""

    def __init__(self, sound_dir: Path, extension: str = ".mp3") -> None:
        self.sound_dir = Path(sound_dir)
        self.extension = extension
        self.sounds: dict[str, pygame.mixer.Sound] = {}
        self.audio_ready = False

    def sound_path(self, label: str) -> Path:
        return self.sound_dir / f"{label}{self.extension}"

    def _init_audio(self) -> bool:
        if self.audio_ready:
            return True
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self.audio_ready = True
        except pygame.error as exc:
            logger.warning("Audio device unavailable: %s", exc)
            self.audio_ready = False
        return self.audio_ready

    def _load(self, label: str) -> pygame.mixer.Sound | None:
        if label in self.sounds:
            return self.sounds[label]
        path = self.sound_path(label)
        if not path.exists():
            logger.warning("Sound for %r not found: %s", label, path)
            return None
        try:
            sound = pygame.mixer.Sound(str(path))
        except (pygame.error, OSError) as exc:
            logger.warning("Could not load sound %s: %s", path, exc)
            return None
        self.sounds[label] = sound
        return sound

    def play(self, label: str) -> bool:
        if not self._init_audio():
            return False
        sound = self._load(label)
        if sound is None:
            return False
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Audio play failed for %r: %s", label, exc)
            return False
        return True

    def busy(self) -> bool:
        if not self.audio_ready:
            return False
        try:
            return bool(pygame.mixer.get_busy())
        except pygame.error:
            return False

    def stop(self) -> None:
        if not self.audio_ready:
            return
        try:
            pygame.mixer.stop()
        except pygame.error as exc:
            logger.warning("Audio stop failed: %s", exc)
