"""
Tests for infrastructure components.

Covers the game registry, configuration loading, logging setup,
the clock helpers and the shared interfaces.
"""

import logging
from io import StringIO

import pytest


class TestGameRegistry:
    """Tests for GameRegistry."""

    def test_space_invaders_registered(self, mock_pygame_module):
        """Test Space Invaders is registered on import."""
        from arcade_invaders.games import GameRegistry

        assert GameRegistry.is_available("space_invaders")
        ids = [m.id for m in GameRegistry.list_games()]
        assert "space_invaders" in ids

    def test_create_game(self, mock_pygame_module):
        from arcade_invaders.games import GameRegistry
        from arcade_invaders.games.space_invaders import SpaceInvadersGame

        game = GameRegistry.create_game("space_invaders")

        assert isinstance(game, SpaceInvadersGame)
        assert game.get_state()["state"] == "start"

    def test_create_renderer_and_audio(self, mock_pygame_module):
        from arcade_invaders.games import GameRegistry
        from arcade_invaders.games.space_invaders import SpaceInvadersAudio, SpaceInvadersRenderer

        renderer = GameRegistry.create_renderer("space_invaders", width=800, height=600)
        audio = GameRegistry.create_audio("space_invaders", enabled=False)

        assert isinstance(renderer, SpaceInvadersRenderer)
        assert isinstance(audio, SpaceInvadersAudio)
        assert audio.available is False

    def test_config_class_and_metadata(self, mock_pygame_module):
        from arcade_invaders.games import GameRegistry
        from arcade_invaders.games.space_invaders import SpaceInvadersConfig

        assert GameRegistry.get_config_class("space_invaders") is SpaceInvadersConfig
        assert GameRegistry.get_metadata("space_invaders").name == "Space Invaders"
        assert GameRegistry.get_metadata("galaga") is None
        assert GameRegistry.get_game("galaga") is None

    @pytest.mark.parametrize("factory", ["create_game", "create_renderer", "create_audio"])
    def test_unknown_game_raises(self, mock_pygame_module, factory):
        from arcade_invaders.games import GameRegistry

        with pytest.raises(ValueError, match="Unknown game"):
            getattr(GameRegistry, factory)("galaga")

    def test_register_decorator(self, mock_pygame_module, monkeypatch):
        """Games can register themselves with the decorator."""
        from arcade_invaders.games import GameRegistry
        from arcade_invaders.games.registry import register_game
        from arcade_invaders.games.space_invaders import SpaceInvadersGame, SpaceInvadersRenderer
        from arcade_invaders.core import GameMetadata

        monkeypatch.setattr(GameRegistry, "_games", dict(GameRegistry._games))

        @register_game(SpaceInvadersRenderer)
        class TinyInvaders(SpaceInvadersGame):
            @classmethod
            def get_metadata(cls):
                return GameMetadata(name="Tiny Invaders", id="tiny_invaders", description="Smaller arena")

        assert GameRegistry.is_available("tiny_invaders")
        assert GameRegistry.create_audio("tiny_invaders") is None
        assert isinstance(GameRegistry.create_game("tiny_invaders"), TinyInvaders)


class TestSpaceInvadersConfig:
    """Tests for the game config dataclass."""

    def test_defaults(self):
        from arcade_invaders.games.space_invaders import SpaceInvadersConfig

        config = SpaceInvadersConfig()

        assert (config.width, config.height) == (800, 600)
        assert config.invader_rows == 5
        assert config.total_invaders == 55
        assert config.invader_speed_for_wave(3) == pytest.approx(0.9)

    @pytest.mark.parametrize("overrides", [
        {"width": 0},
        {"height": -10},
        {"width": 60},
        {"bonus_min_points": 400},
    ])
    def test_invalid_values_rejected(self, overrides):
        from arcade_invaders.games.space_invaders import SpaceInvadersConfig

        with pytest.raises(ValueError):
            SpaceInvadersConfig(**overrides)

    def test_from_dict_ignores_unknown_keys(self):
        from arcade_invaders.games.space_invaders import SpaceInvadersConfig

        config = SpaceInvadersConfig.from_dict({"width": 640, "lasers": "yes"})

        assert config.width == 640
        assert config.to_dict()["width"] == 640


class TestConfigLoader:
    """Tests for YAML configuration loading."""

    def test_missing_file_gives_defaults(self, tmp_path):
        from arcade_invaders.utils import load_config

        config = load_config(str(tmp_path / "nope.yaml"), game_id="space_invaders")

        assert config.game.width == 800
        assert config.audio.volume == pytest.approx(0.3)
        assert config.logging.level == "INFO"

    def test_load_single_file(self, tmp_path):
        from arcade_invaders.utils import load_config

        path = tmp_path / "custom.yaml"
        path.write_text(
            "game:\n  width: 640\n  seed: 9\n"
            "audio:\n  volume: 0.8\n  unknown: 1\n"
            "logging:\n  level: DEBUG\n"
        )

        config = load_config(str(path), game_id="space_invaders")

        assert config.game.width == 640
        assert config.game.seed == 9
        assert config.audio.volume == pytest.approx(0.8)
        assert config.logging.level == "DEBUG"

    def test_invalid_arena_in_file_raises(self, tmp_path):
        from arcade_invaders.utils import load_config

        path = tmp_path / "bad.yaml"
        path.write_text("game:\n  height: 0\n")

        with pytest.raises(ValueError):
            load_config(str(path), game_id="space_invaders")

    def test_game_file_overrides_defaults(self, tmp_path):
        from arcade_invaders.utils import load_game_config

        (tmp_path / "games").mkdir()
        (tmp_path / "default.yaml").write_text(
            "visualization:\n  fps: 30\n  title: Default\n"
        )
        (tmp_path / "games" / "space_invaders.yaml").write_text(
            "game:\n  start_lives: 5\nvisualization:\n  title: Invaders\n"
        )

        config = load_game_config("space_invaders", config_dir=tmp_path)

        assert config.game.start_lives == 5
        assert config.visualization.fps == 30
        assert config.visualization.title == "Invaders"

    def test_empty_config_dir_gives_defaults(self, tmp_path):
        from arcade_invaders.utils import load_game_config

        config = load_game_config("space_invaders", config_dir=tmp_path)

        assert config.game.total_invaders == 55

    def test_bundled_game_config(self):
        from arcade_invaders.utils import load_game_config

        config = load_game_config("space_invaders")

        assert config.game.enemy_fire_chance == pytest.approx(0.02)
        assert config.visualization.title == "Space Invaders"

    def test_save_creates_directories(self, tmp_path):
        from arcade_invaders.utils import load_config, save_config
        from arcade_invaders.games.space_invaders import SpaceInvadersConfig
        from arcade_invaders.utils.config_loader import Config

        config = Config(game=SpaceInvadersConfig(start_lives=4))
        path = tmp_path / "out" / "saved.yaml"

        save_config(config, str(path))

        assert path.exists()
        assert load_config(str(path), game_id="space_invaders").game.start_lives == 4

    def test_game_section_built_by_registered_config_class(self, tmp_path, monkeypatch):
        """The loader asks the registry which class builds the game section."""
        from dataclasses import dataclass

        from arcade_invaders.games import GameRegistry
        from arcade_invaders.utils import load_game_config

        @dataclass
        class TinyConfig:
            lives: int = 1

            @classmethod
            def from_dict(cls, data):
                return cls(**data)

        monkeypatch.setattr(GameRegistry, "get_config_class",
                            classmethod(lambda cls, game_id: TinyConfig))
        (tmp_path / "games").mkdir()
        (tmp_path / "games" / "tiny.yaml").write_text("game:\n  lives: 9\n")

        config = load_game_config("tiny", config_dir=tmp_path)

        assert config.game == TinyConfig(lives=9)

    def test_unregistered_game_keeps_raw_section(self, tmp_path):
        from arcade_invaders.utils import load_config, load_game_config

        (tmp_path / "games").mkdir()
        (tmp_path / "games" / "asteroids.yaml").write_text("game:\n  rocks: 12\n")
        path = tmp_path / "single.yaml"
        path.write_text("game:\n  width: 640\n")

        assert load_game_config("asteroids", config_dir=tmp_path).game == {"rocks": 12}
        assert load_config(str(path)).game == {"width": 640}

    def test_loader_has_no_game_specific_imports(self):
        import arcade_invaders.utils.config_loader as config_loader

        assert not any("space_invaders" in name for name in vars(config_loader))
        assert not hasattr(config_loader, "SpaceInvadersConfig")

    def test_list_available_games(self, tmp_path):
        from arcade_invaders.utils.config_loader import list_available_games

        (tmp_path / "games").mkdir()
        (tmp_path / "games" / "space_invaders.yaml").write_text("game: {}\n")
        (tmp_path / "games" / "asteroids.yaml").write_text("game: {}\n")

        assert list_available_games(tmp_path) == ["asteroids", "space_invaders"]
        assert list_available_games(tmp_path / "missing") == []

    def test_deep_merge(self):
        from arcade_invaders.utils.config_loader import _deep_merge

        base = {"a": {"x": 1, "y": 2}, "b": 1}
        merged = _deep_merge(base, {"a": {"y": 3}, "c": 4})

        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base["a"]["y"] == 2


class TestLogging:
    """Tests for logging setup."""

    def test_writes_log_file(self, tmp_path):
        from rich.console import Console
        from arcade_invaders.utils import setup_logging

        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging("DEBUG", str(log_file), console=Console(file=StringIO()))

        logging.getLogger("arcade_invaders.test").debug("hello from the test")
        for handler in logger.handlers:
            handler.flush()

        assert "hello from the test" in log_file.read_text()

    def test_console_output(self):
        from rich.console import Console
        from arcade_invaders.utils import setup_logging

        buffer = StringIO()
        setup_logging("INFO", console=Console(file=buffer, width=120))

        logging.getLogger("arcade_invaders.test").info("wave cleared")

        assert "wave cleared" in buffer.getvalue()

    def test_repeated_setup_replaces_handlers(self):
        from rich.console import Console
        from arcade_invaders.utils import setup_logging

        setup_logging("INFO", console=Console(file=StringIO()))
        logger = setup_logging("WARNING", console=Console(file=StringIO()))

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_unknown_level_raises(self):
        from arcade_invaders.utils import setup_logging

        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("LOUD")


class TestClock:
    """Tests for the injectable clocks."""

    def test_manual_clock(self):
        from arcade_invaders.core import ManualClock

        clock = ManualClock(start_ms=100)
        assert clock() == 100

        clock.advance(16.5)
        assert clock() == 116.5

    def test_manual_clock_rejects_going_backwards(self):
        from arcade_invaders.core import ManualClock

        with pytest.raises(ValueError):
            ManualClock().advance(-1)

    def test_monotonic_clock_never_decreases(self):
        from arcade_invaders.core import MonotonicClock

        clock = MonotonicClock()
        first = clock()
        second = clock()

        assert 0 <= first <= second


class TestInterfaces:
    """Tests for shared interface types."""

    def test_input_signals_default_to_released(self):
        from arcade_invaders.core import InputSignals

        assert InputSignals().to_dict() == {
            "move_left": False,
            "move_right": False,
            "fire": False,
            "start": False,
        }

    def test_null_audio_accepts_everything(self):
        from arcade_invaders.core import NullAudio, SoundEvent

        audio = NullAudio()
        for event in SoundEvent:
            audio.handle(event)

    def test_game_interface_is_abstract(self):
        from arcade_invaders.core import GameInterface

        with pytest.raises(TypeError):
            GameInterface()
