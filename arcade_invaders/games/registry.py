"""
Game registry for Arcade Invaders.

Central registry for discovering and instantiating games and their
collaborators. Games register themselves when their module is imported.
"""

from typing import Dict, Type, List, Optional, Any

from ..core.audio_interface import AudioInterface
from ..core.game_interface import GameInterface, GameMetadata
from ..core.renderer_interface import RendererInterface


class GameRegistry:
    """
    Central registry for all available games.

    Games register themselves using the @register_game decorator or by calling
    GameRegistry.register() directly in their __init__.py.
    """

    _games: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def register(
        cls,
        game_class: Type[GameInterface],
        renderer_class: Type[RendererInterface],
        audio_class: Optional[Type[AudioInterface]] = None,
        config_class: Optional[Type] = None
    ) -> None:
        """
        Register a game with the registry.

        Args:
            game_class: The game implementation class
            renderer_class: The renderer class
            audio_class: Optional audio backend class
            config_class: Optional game-specific config class
        """
        metadata = game_class.get_metadata()
        cls._games[metadata.id] = {
            'game_class': game_class,
            'renderer_class': renderer_class,
            'audio_class': audio_class,
            'config_class': config_class,
            'metadata': metadata
        }

    @classmethod
    def _require(cls, game_id: str) -> Dict[str, Any]:
        game_data = cls._games.get(game_id)
        if not game_data:
            raise ValueError(f"Unknown game: {game_id}")
        return game_data

    @classmethod
    def get_game(cls, game_id: str) -> Optional[Dict[str, Any]]:
        """
        Get game components by ID.

        Args:
            game_id: The game identifier

        Returns:
            Dictionary with game classes, or None if not found
        """
        return cls._games.get(game_id)

    @classmethod
    def list_games(cls) -> List[GameMetadata]:
        """List metadata for all registered games."""
        return [g['metadata'] for g in cls._games.values()]

    @classmethod
    def is_available(cls, game_id: str) -> bool:
        return game_id in cls._games

    @classmethod
    def create_game(cls, game_id: str, **kwargs) -> GameInterface:
        """
        Create a game instance.

        Args:
            game_id: The game identifier
            **kwargs: Arguments to pass to the game constructor

        Returns:
            Game instance

        Raises:
            ValueError: If game is not registered
        """
        return cls._require(game_id)['game_class'](**kwargs)

    @classmethod
    def create_renderer(cls, game_id: str, **kwargs) -> RendererInterface:
        """
        Create a renderer instance for a game.

        Raises:
            ValueError: If game is not registered
        """
        return cls._require(game_id)['renderer_class'](**kwargs)

    @classmethod
    def create_audio(cls, game_id: str, **kwargs) -> Optional[AudioInterface]:
        """
        Create the audio backend for a game, if it has one.

        Raises:
            ValueError: If game is not registered
        """
        audio_class = cls._require(game_id)['audio_class']
        if audio_class is None:
            return None
        return audio_class(**kwargs)

    @classmethod
    def get_config_class(cls, game_id: str) -> Optional[Type]:
        """
        Get the config class for a game.

        Args:
            game_id: The game identifier

        Returns:
            Config class or None
        """
        game_data = cls._games.get(game_id)
        if game_data:
            return game_data.get('config_class')
        return None

    @classmethod
    def get_metadata(cls, game_id: str) -> Optional[GameMetadata]:
        game_data = cls._games.get(game_id)
        if game_data:
            return game_data.get('metadata')
        return None

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (useful for testing)."""
        cls._games.clear()


def register_game(
    renderer_class: Type[RendererInterface],
    audio_class: Optional[Type[AudioInterface]] = None,
    config_class: Optional[Type] = None
):
    """
    Decorator to register a game class.

    Usage:
        @register_game(PongRenderer, PongAudio, PongConfig)
        class PongGame(GameInterface):
            ...
    """
    def decorator(game_class: Type[GameInterface]) -> Type[GameInterface]:
        GameRegistry.register(game_class, renderer_class, audio_class, config_class)
        return game_class
    return decorator
