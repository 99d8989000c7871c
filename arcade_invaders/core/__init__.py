"""
Core abstractions for Arcade Invaders.

Provides the interfaces that games and their collaborators (renderers, audio
backends, input sources, clocks) must implement.
"""

from .game_interface import GameInterface, GameMetadata, GameState, InputSignals
from .renderer_interface import RendererInterface
from .audio_interface import AudioInterface, NullAudio, SoundEvent
from .clock import Clock, ManualClock, MonotonicClock

__all__ = [
    'GameInterface',
    'GameMetadata',
    'GameState',
    'InputSignals',
    'RendererInterface',
    'AudioInterface',
    'NullAudio',
    'SoundEvent',
    'Clock',
    'ManualClock',
    'MonotonicClock',
]
