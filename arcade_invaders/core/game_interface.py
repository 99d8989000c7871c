"""
Abstract game interface for Arcade Invaders.

All games must implement GameInterface and provide GameMetadata.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


@dataclass
class GameMetadata:
    """Metadata describing a game."""

    name: str                           # Display name (e.g., "Space Invaders")
    id: str                             # Unique identifier (e.g., "space_invaders")
    description: str                    # Brief description for UI
    version: str = "1.0.0"              # Game version
    min_players: int = 1                # Minimum players
    max_players: int = 1                # Maximum players
    supports_human: bool = True         # Can humans play?


class GameState(str, Enum):
    """Overall session state."""
    START = "start"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class InputSignals:
    """
    Held/pressed state of every logical action for one tick.

    Produced by the input collaborator and consumed once per update.
    """
    move_left: bool = False
    move_right: bool = False
    fire: bool = False
    start: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "move_left": self.move_left,
            "move_right": self.move_right,
            "fire": self.fire,
            "start": self.start,
        }


class GameInterface(ABC):
    """
    Abstract base class for all games in Arcade Invaders.

    Games handle the core logic, rules, and state management.
    They never draw or play sounds themselves.
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        """
        Return metadata about this game.

        Returns:
            GameMetadata describing the game
        """
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """
        Reset the game and enter play.

        Returns:
            Game state dictionary after the reset
        """
        pass

    @abstractmethod
    def update(self, signals: InputSignals) -> Dict[str, Any]:
        """
        Execute one simulation tick with the given input signals.

        Args:
            signals: Logical action states for this tick

        Returns:
            Game state dictionary after the tick
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get the current game state for rendering.

        Returns:
            Dictionary containing all state needed for rendering
        """
        pass

    def get_score(self) -> int:
        """
        Get the current score.

        Returns:
            Current game score
        """
        return 0
