"""
Space Invaders audio backend - synthesised retro sound effects via pygame.mixer.

Every sound is generated with numpy at start-up; nothing is loaded from disk.
If the mixer cannot be initialised the backend stays silent.
"""

import logging
from typing import Dict, Optional

import numpy as np
import pygame

from ...core.audio_interface import AudioInterface, SoundEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
GAME_OVER_NOTES = [440, 392, 349, 330, 294]


class SpaceInvadersAudio(AudioInterface):
    """
    Plays a short synthesised effect for each game event.

    The bonus target gets a looping warbling tone between BONUS_LOOP_START
    and BONUS_LOOP_STOP. Invader steps are cached per pitch bucket.
    """

    def __init__(self, enabled: bool = True, volume: float = 0.3):
        self.volume = max(0.0, min(1.0, volume))
        self.sample_rate = SAMPLE_RATE
        self.channels = 2
        self._muted = False
        self._available = False
        self.sounds: Dict[SoundEvent, "pygame.mixer.Sound"] = {}
        self._step_sounds: Dict[int, "pygame.mixer.Sound"] = {}
        self._bonus_loop: Optional["pygame.mixer.Sound"] = None
        self._bonus_channel = None

        if enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        try:
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=2, buffer=512)
        except pygame.error as exc:
            logger.warning("Audio disabled, mixer unavailable: %s", exc)
            return

        # The mixer may open with a different rate or channel count than requested
        frequency, _, channels = pygame.mixer.get_init() or (SAMPLE_RATE, -16, 2)
        self.sample_rate = frequency
        self.channels = channels

        try:
            self._generate_sounds()
        except Exception:
            logger.warning("Audio disabled, could not build sounds", exc_info=True)
            self.sounds = {}
            self._bonus_loop = None
            return
        self._available = True

    @property
    def available(self) -> bool:
        return self._available

    @property
    def muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        if self._muted:
            self._stop_bonus_loop()
        return self._muted

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def _timeline(self, duration: float) -> np.ndarray:
        return np.linspace(0, duration, int(self.sample_rate * duration), endpoint=False)

    def _square(self, frequency, duration: float) -> np.ndarray:
        t = self._timeline(duration)
        return np.sign(np.sin(2 * np.pi * frequency * t))

    def _sawtooth(self, frequency, duration: float) -> np.ndarray:
        t = self._timeline(duration)
        return 2 * ((frequency * t) % 1) - 1

    def _sine(self, frequency, duration: float) -> np.ndarray:
        t = self._timeline(duration)
        return np.sin(2 * np.pi * frequency * t)

    def _sweep(self, start_hz: float, end_hz: float, duration: float) -> np.ndarray:
        """Exponential frequency ramp, integrated to a phase so it stays continuous."""
        t = self._timeline(duration)
        freqs = start_hz * (end_hz / start_hz) ** (t / duration)
        return np.cumsum(freqs) / self.sample_rate

    def _decay(self, wave: np.ndarray, gain: float) -> np.ndarray:
        """Exponential fade from gain down to ~1% over the sound's length."""
        envelope = gain * np.exp(np.linspace(0, np.log(0.01), len(wave)))
        return wave * envelope

    def _make_sound(self, wave: np.ndarray) -> "pygame.mixer.Sound":
        """Convert a mono float wave to a 16-bit pygame Sound in the mixer's channel layout."""
        samples = np.clip(wave * self.volume * 32767, -32767, 32767).astype(np.int16)
        if self.channels == 1:
            return pygame.sndarray.make_sound(samples)
        frames = np.ascontiguousarray(np.column_stack([samples] * self.channels))
        return pygame.sndarray.make_sound(frames)

    def _generate_sounds(self) -> None:
        # Player shot: sharp square "pew" sweeping 800 -> 100 Hz
        phase = self._sweep(800, 100, 0.1)
        shot = np.sign(np.sin(2 * np.pi * phase))
        self.sounds[SoundEvent.PLAYER_SHOT] = self._make_sound(self._decay(shot, 0.2))

        # Invader hit: sawtooth sweeping 300 -> 50 Hz
        phase = self._sweep(300, 50, 0.15)
        hit = 2 * (phase % 1) - 1
        self.sounds[SoundEvent.INVADER_HIT] = self._make_sound(self._decay(hit, 0.25))

        # Player hit: three falling sawtooth bursts, 50 ms apart
        burst_gap = int(0.05 * self.sample_rate)
        bursts = [self._decay(self._sawtooth(150 - i * 30, 0.2), 0.3) for i in range(3)]
        explosion = np.zeros(burst_gap * 2 + len(bursts[0]))
        for i, burst in enumerate(bursts):
            explosion[i * burst_gap:i * burst_gap + len(burst)] += burst
        self.sounds[SoundEvent.PLAYER_HIT] = self._make_sound(explosion / 3)

        # Bonus hit: sine sweeping 600 -> 100 Hz
        phase = self._sweep(600, 100, 0.3)
        self.sounds[SoundEvent.BONUS_HIT] = self._make_sound(self._decay(np.sin(2 * np.pi * phase), 0.3))

        # Game over: descending five-note jingle
        notes = [self._decay(self._sine(freq, 0.3), 0.2) for freq in GAME_OVER_NOTES]
        note_gap = int(0.2 * self.sample_rate)
        jingle = np.zeros(note_gap * (len(notes) - 1) + len(notes[0]))
        for i, note in enumerate(notes):
            jingle[i * note_gap:i * note_gap + len(note)] += note
        self.sounds[SoundEvent.GAME_OVER] = self._make_sound(jingle)

        # Bonus loop: 200 Hz sine warbling +-50 Hz at 6 Hz (one full LFO cycle loops cleanly)
        t = self._timeline(1.0)
        freqs = 200 + 50 * np.sin(2 * np.pi * 6 * t)
        phase = np.cumsum(freqs) / self.sample_rate
        self._bonus_loop = self._make_sound(np.sin(2 * np.pi * phase) * 0.1)

    def _step_sound(self, pitch: float) -> "pygame.mixer.Sound":
        """Short square blip at 100 Hz x pitch, cached in 10% buckets."""
        bucket = int(round(pitch * 10))
        if bucket not in self._step_sounds:
            wave = self._square(100 * bucket / 10, 0.1)
            self._step_sounds[bucket] = self._make_sound(self._decay(wave, 0.15))
        return self._step_sounds[bucket]

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def _stop_bonus_loop(self) -> None:
        if self._bonus_channel is not None:
            self._bonus_channel.stop()
            self._bonus_channel = None

    def handle(self, event: SoundEvent, pitch: float = 1.0) -> None:
        """Play the effect for an event."""
        if event == SoundEvent.BONUS_LOOP_STOP:
            self._stop_bonus_loop()
            return

        if not self._available or self._muted:
            return

        if event == SoundEvent.BONUS_LOOP_START:
            if self._bonus_channel is None and self._bonus_loop is not None:
                self._bonus_channel = self._bonus_loop.play(loops=-1)
        elif event == SoundEvent.INVADER_STEP:
            self._step_sound(pitch).play()
        elif event in self.sounds:
            self.sounds[event].play()
