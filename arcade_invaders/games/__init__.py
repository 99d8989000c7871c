"""
Games module for Arcade Invaders.

Importing this module populates the GameRegistry.
"""

from .registry import GameRegistry, register_game

# Import game modules to trigger registration
# Each game's __init__.py calls GameRegistry.register()
from . import space_invaders

__all__ = [
    'GameRegistry',
    'register_game',
]
