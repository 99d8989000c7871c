# Arcade Invaders Source Package
"""
Arcade Invaders - Frame-driven arcade shooter simulation.

Modules:
- core: Abstract interfaces for games, renderers and audio, plus injectable clocks
- games: Game implementations (Space Invaders) and the game registry
- utils: Configuration loading and logging setup
"""

__version__ = "1.0.0"
