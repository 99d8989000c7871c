"""
Utilities: configuration loading and logging setup.
"""

from .config_loader import Config, load_config, load_game_config, save_config
from .logger import setup_logging

__all__ = [
    'Config',
    'load_config',
    'load_game_config',
    'save_config',
    'setup_logging',
]
