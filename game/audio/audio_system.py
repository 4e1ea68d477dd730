"""
Farm sound effects, driven by the core's feedback events.

Reads events only; the farm plays the same with sound off or broken.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
import logging

import pygame

from game.events import FeedbackEvent

logger = logging.getLogger(__name__)

# Canonical event type -> sound key mapping (flat contract).
# Files are located at: assets/audio/sfx/{sound_key}.wav or .ogg
AUDIO_EVENT_MAP = {
    "plant": "plant",
    "harvest": "harvest",
    "sell": "sell",
    "buy": "buy",
    "upgrade": "upgrade",
    "quest_claimed": "achieve",
    "achievement_unlocked": "achieve",
    "action_failed": "error",
}

# Sound cooldowns (milliseconds) to prevent spam from bulk actions
SOUND_COOLDOWNS_MS = {
    "plant": 80,
    "harvest": 80,
    "sell": 150,
    "buy": 150,
    "upgrade": 200,
    "achieve": 300,
    "error": 200,
}


class AudioSystem:
    """
    Feedback listener backed by pygame.mixer.

    One short sound per feedback event, rate-limited per sound key.
    A missing mixer or missing files turn it into a no-op.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.sfx_on = True
        self.music_on = True
        self._sfx_cache: Dict[str, Optional[pygame.mixer.Sound]] = {}
        self._cooldowns: Dict[str, float] = {}  # sound_key -> last_play_time_ms
        self._music_loaded = False
        self._master_volume: float = 0.8
        self._sfx_volume: float = 1.0
        self._music_volume: float = 0.4

        if not self.enabled:
            return

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=22050, size=-16, channels=2, buffer=512)
        except pygame.error as e:
            logger.info("audio disabled: %s", e)
            self.enabled = False
            return

        self._load_sfx()

    @staticmethod
    def _assets_dir() -> Path:
        """assets/audio under the project root."""
        return Path(__file__).resolve().parents[2] / "assets" / "audio"

    def _load_sfx(self):
        """Preload SFX files (flat structure, .wav preferred over .ogg)."""
        sfx_dir = self._assets_dir() / "sfx"
        for sound_key in sorted(set(AUDIO_EVENT_MAP.values())):
            wav_file = sfx_dir / f"{sound_key}.wav"
            ogg_file = sfx_dir / f"{sound_key}.ogg"
            sound_file = wav_file if wav_file.exists() else (ogg_file if ogg_file.exists() else None)
            if sound_file is None:
                # Missing file; play becomes a no-op
                self._sfx_cache[sound_key] = None
                continue
            try:
                self._sfx_cache[sound_key] = pygame.mixer.Sound(str(sound_file))
            except pygame.error:
                logger.debug("failed to load %s", sound_file)
                self._sfx_cache[sound_key] = None

    def on_event(self, event: FeedbackEvent):
        """EventBus listener."""
        self.emit_from_events([event.to_dict()])

    def emit_from_events(self, events: list[dict]):
        """
        Play sounds for a batch of event dicts (FeedbackEvent.to_dict shape).

        Unknown event types are skipped; a sound inside its cooldown is dropped.
        """
        if not self.enabled or not self.sfx_on or not events:
            return

        for event in events:
            sound_key = AUDIO_EVENT_MAP.get(event.get("type", ""))
            if not sound_key:
                continue

            now_ms = float(event.get("at_ms", 0))
            cooldown_ms = SOUND_COOLDOWNS_MS.get(sound_key, 0)
            last_play = self._cooldowns.get(sound_key)
            if last_play is not None and (now_ms - last_play) < cooldown_ms:
                continue

            self.play_sfx(sound_key)
            self._cooldowns[sound_key] = now_ms

    def play_sfx(self, sound_key: str, volume: float = 1.0):
        if not self.enabled:
            return
        sound = self._sfx_cache.get(sound_key)
        if sound is None:
            return
        try:
            final_volume = float(volume) * self._master_volume * self._sfx_volume
            sound.set_volume(max(0.0, min(1.0, final_volume)))
            sound.play()
        except pygame.error:
            # Playback failed; audio should never crash sim
            logger.debug("sfx %s failed to play", sound_key)

    def set_sfx(self, on: bool):
        self.sfx_on = bool(on)

    def set_music(self, on: bool):
        self.music_on = bool(on)
        if self.music_on:
            self.start_music()
        else:
            self.stop_music()

    def start_music(self, track_name: str = "farm_loop"):
        """Loop the background track (ambient/{track_name}.ogg or .wav) if present."""
        if not self.enabled or not self.music_on:
            return
        ambient_dir = self._assets_dir() / "ambient"
        track_file = ambient_dir / f"{track_name}.ogg"
        if not track_file.exists():
            track_file = ambient_dir / f"{track_name}.wav"
        if not track_file.exists():
            return
        try:
            pygame.mixer.music.load(str(track_file))
            pygame.mixer.music.set_volume(self._master_volume * self._music_volume)
            pygame.mixer.music.play(loops=-1)
            self._music_loaded = True
        except pygame.error:
            logger.debug("music track %s failed to play", track_file)

    def stop_music(self):
        if not self.enabled or not self._music_loaded:
            return
        try:
            pygame.mixer.music.stop()
        except pygame.error:
            pass

    def set_master_volume(self, volume_0_to_1: float):
        self._master_volume = max(0.0, min(1.0, float(volume_0_to_1)))

    def get_master_volume(self) -> float:
        return self._master_volume
