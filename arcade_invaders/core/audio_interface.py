"""
Abstract audio interface for Arcade Invaders.

Games notify an audio collaborator of discrete events. Notifications are
fire-and-forget: nothing an audio backend returns is ever read.
"""

from abc import ABC, abstractmethod
from enum import Enum


class SoundEvent(str, Enum):
    """Discrete game events an audio backend may react to."""
    PLAYER_SHOT = "player_shot"
    INVADER_STEP = "invader_step"
    INVADER_HIT = "invader_hit"
    PLAYER_HIT = "player_hit"
    BONUS_LOOP_START = "bonus_loop_start"
    BONUS_LOOP_STOP = "bonus_loop_stop"
    BONUS_HIT = "bonus_hit"
    GAME_OVER = "game_over"


class AudioInterface(ABC):
    """Abstract audio backend."""

    @abstractmethod
    def handle(self, event: SoundEvent, pitch: float = 1.0) -> None:
        """
        React to a game event.

        Args:
            event: The event that happened this tick
            pitch: Pitch multiplier hint (only meaningful for INVADER_STEP)
        """
        pass

    def toggle_mute(self) -> bool:
        """
        Toggle muting.

        Returns:
            True if the backend is now muted
        """
        return True

    @property
    def muted(self) -> bool:
        return True


class NullAudio(AudioInterface):
    """Silent backend used when no audio device is wanted or available."""

    def handle(self, event: SoundEvent, pitch: float = 1.0) -> None:
        pass
