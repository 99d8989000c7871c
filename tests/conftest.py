"""
Pytest configuration and fixtures for Arcade Invaders tests.

This module sets up pygame mocking so the renderer and audio backend can be
tested without a display or sound device, and provides deterministic game
factories (seeded random source, manual clock, recording audio backend).
"""

import random
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


def create_mock_pygame():
    """Create a mock of the parts of pygame the project touches."""
    mock_pygame = MagicMock()

    # Basic initialization
    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None
    mock_pygame.error = type("error", (RuntimeError,), {})

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 800
    mock_surface.get_height.return_value = 600
    mock_pygame.display.set_mode.return_value = mock_surface

    # Fonts
    mock_font = MagicMock()
    mock_font.render.return_value = MagicMock()  # Returns a surface
    mock_font.size.return_value = (100, 30)  # (width, height)
    mock_pygame.font.Font.return_value = mock_font
    mock_pygame.font.SysFont.return_value = mock_font

    # Drawing
    mock_pygame.draw.rect.return_value = None

    # Audio
    mock_pygame.mixer.init.return_value = None
    mock_pygame.mixer.get_init.return_value = (22050, -16, 2)
    mock_pygame.sndarray.make_sound.return_value = MagicMock()

    # Events
    mock_pygame.event.get.return_value = []

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.KEYUP = 769
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_RETURN = 13
    mock_pygame.K_SPACE = 32
    mock_pygame.K_LEFT = 276
    mock_pygame.K_RIGHT = 275
    mock_pygame.K_a = 97
    mock_pygame.K_d = 100
    mock_pygame.K_m = 109

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16  # ~60fps
    mock_pygame.time.Clock.return_value = mock_clock
    mock_pygame.time.get_ticks.return_value = 0

    # Rect
    mock_pygame.Rect = MagicMock(side_effect=lambda *args: MagicMock(
        x=args[0] if args else 0,
        y=args[1] if len(args) > 1 else 0,
        width=args[2] if len(args) > 2 else 0,
        height=args[3] if len(args) > 3 else 0,
    ))

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame before any imports.

    This runs automatically for all tests and ensures pygame
    is mocked before the renderer and audio modules are imported.
    """
    mock_pygame = create_mock_pygame()

    # Store original module if it exists
    original_pygame = sys.modules.get('pygame')

    # Install mock
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    # Restore original (or remove mock)
    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


class RecordingAudio:
    """Audio backend that remembers every event it was handed."""

    def __init__(self):
        self.calls = []

    def handle(self, event, pitch=1.0):
        self.calls.append((event.value, pitch))

    @property
    def events(self):
        return [name for name, _ in self.calls]

    def toggle_mute(self):
        return False


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def recording_audio():
    return RecordingAudio()


@pytest.fixture
def make_game(mock_pygame_module):
    """
    Factory for deterministic games.

    Enemy fire and bonus spawns are disabled unless overridden, so tests
    only see what they set up themselves.
    """
    from arcade_invaders.core import ManualClock
    from arcade_invaders.games.space_invaders import SpaceInvadersConfig, SpaceInvadersGame

    def _make(seed: int = 1234, start: bool = True, rng=None, **overrides):
        settings = {"enemy_fire_chance": 0.0, "bonus_spawn_chance": 0.0}
        settings.update(overrides)
        game = SpaceInvadersGame(
            config=SpaceInvadersConfig(**settings),
            rng=rng if rng is not None else random.Random(seed),
            clock=ManualClock(),
            audio=RecordingAudio(),
        )
        if start:
            game.reset()
            game.audio.calls.clear()
        return game

    return _make


@pytest.fixture
def idle():
    """InputSignals with nothing held."""
    from arcade_invaders.core import InputSignals
    return InputSignals()


@pytest.fixture
def fixed_random():
    """Factory for random sources with a pinned random() value."""
    return FixedRandom
