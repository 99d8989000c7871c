"""
Space Invaders game module for Arcade Invaders.

This module auto-registers the Space Invaders game when imported.
"""

from ..registry import GameRegistry
from .game import SpaceInvadersGame
from .entities import InvaderVariant, ProjectileOwner
from .renderer import SpaceInvadersRenderer
from .audio import SpaceInvadersAudio
from .config import SpaceInvadersConfig

# Auto-register Space Invaders game when this module is imported
GameRegistry.register(
    game_class=SpaceInvadersGame,
    renderer_class=SpaceInvadersRenderer,
    audio_class=SpaceInvadersAudio,
    config_class=SpaceInvadersConfig,
)

__all__ = [
    "SpaceInvadersGame",
    "SpaceInvadersRenderer",
    "SpaceInvadersAudio",
    "SpaceInvadersConfig",
    "InvaderVariant",
    "ProjectileOwner",
]
