"""
Configuration Loader - Load and validate configuration from YAML.

Supports hierarchical configuration:
- config/default.yaml - Global settings
- config/games/{game_id}.yaml - Per-game settings

Game-specific settings override defaults.
"""
import logging
import yaml
from pathlib import Path
from typing import Optional, Any, Dict
from dataclasses import dataclass, field, asdict
from copy import deepcopy

from ..games.registry import GameRegistry

logger = logging.getLogger(__name__)


@dataclass
class VisualizationConfig:
    """Window and frame pacing settings."""
    window_width: int = 800
    window_height: int = 600
    fps: int = 60
    title: str = "Space Invaders"


@dataclass
class AudioConfig:
    """Audio backend settings."""
    enabled: bool = True
    volume: float = 0.3
    start_muted: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: Optional[str] = "logs/invaders.log"


@dataclass
class Config:
    """Complete application configuration."""
    game: Any = field(default_factory=dict)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values() if f.init}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _build_game_section(game_data: Optional[Dict], game_id: Optional[str]) -> Any:
    """
    Build the game section with the config class the game registered.

    Games without a registered config class (or no game id) keep the raw dict.
    """
    config_class = GameRegistry.get_config_class(game_id) if game_id else None
    if config_class is None:
        return dict(game_data or {})
    return config_class.from_dict(game_data or {})


def _build_config(data: Dict, game_id: Optional[str] = None) -> Config:
    """Build a Config from raw (already merged) YAML data."""
    config = Config()
    config.game = _build_game_section(data.get('game'), game_id)

    if 'visualization' in data:
        config.visualization = _dict_to_dataclass(data['visualization'], VisualizationConfig)

    if 'audio' in data:
        config.audio = _dict_to_dataclass(data['audio'], AudioConfig)

    if 'logging' in data:
        config.logging = _dict_to_dataclass(data['logging'], LoggingConfig)

    return config


def load_config(config_path: Optional[str] = None, game_id: Optional[str] = None) -> Config:
    """
    Load configuration from a single YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)
        game_id: Game whose registered config class builds the game section
            (the section stays a plain dict if None)

    Returns:
        Config object with all settings

    Raises:
        ValueError: If the game config class rejects the game section
    """
    if config_path is None:
        config_path = str(_find_config_dir() / "default.yaml")

    if not Path(config_path).exists():
        logger.info("No config file found at %s, using defaults", config_path)
        return _build_config({}, game_id)

    return _build_config(_load_yaml_file(Path(config_path)), game_id)


def save_config(config: Config, config_path: str):
    """
    Save configuration to a YAML file.

    Args:
        config: Config object to save
        config_path: Path to save to
    """
    data = asdict(config)

    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_dir() -> Path:
    """Find the config directory."""
    possible_paths = [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
        Path.cwd() / "config",
    ]

    for path in possible_paths:
        if path.exists() and path.is_dir():
            return path

    # Fallback to project root config folder
    return Path(__file__).parent.parent.parent / "config"


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return data if data else {}


def load_game_config(game_id: str, config_dir: Optional[Path] = None) -> Config:
    """
    Load configuration for a specific game.

    Merges default settings with game-specific settings.
    Game settings override defaults.

    Args:
        game_id: The game identifier (e.g., "space_invaders")
        config_dir: Directory holding default.yaml and games/ (auto-detected if None)

    Returns:
        Config object with merged settings
    """
    config_dir = config_dir or _find_config_dir()

    default_data = _load_yaml_file(config_dir / "default.yaml")
    game_data = _load_yaml_file(config_dir / "games" / f"{game_id}.yaml")

    # Merge configs (game overrides default)
    merged_data = _deep_merge(default_data, game_data)

    if not merged_data:
        logger.info("No config found for game '%s', using defaults", game_id)

    return _build_config(merged_data, game_id)


def list_available_games(config_dir: Optional[Path] = None) -> list:
    """
    List all games that have configuration files.

    Returns:
        List of game IDs
    """
    games_dir = (config_dir or _find_config_dir()) / "games"

    if not games_dir.exists():
        return []

    return sorted(
        p.stem for p in games_dir.glob("*.yaml")
        if p.is_file()
    )
