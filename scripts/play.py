#!/usr/bin/env python3
"""
Human Play Mode - Play Space Invaders yourself.

Controls:
    Arrow Keys or A/D: Move the cannon
    Space: Fire
    Enter: Start / play again
    M: Toggle sound
    ESC: Quit

Usage:
    python scripts/play.py
    python scripts/play.py --seed 42 --mute
    python scripts/play.py --config config/games/space_invaders.yaml
"""
import sys
import argparse
import logging
from pathlib import Path
from typing import Iterable

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pygame

from arcade_invaders.core import InputSignals
from arcade_invaders.games import GameRegistry
from arcade_invaders.utils import load_config, load_game_config, setup_logging

GAME_ID = "space_invaders"

LEFT_KEYS = ("K_LEFT", "K_a")
RIGHT_KEYS = ("K_RIGHT", "K_d")

logger = logging.getLogger("arcade_invaders.play")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arcade Invaders - Play Space Invaders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Single YAML config file (default: config/default.yaml merged with the game file)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the game's random source"
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Start with sound muted"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured log level"
    )
    return parser.parse_args(argv)


def _any_held(pressed, key_names: Iterable[str]) -> bool:
    return any(pressed[getattr(pygame, name)] for name in key_names)


def read_input_signals(pressed, events: Iterable) -> InputSignals:
    """
    Map this frame's keyboard state to logical action signals.

    Movement and fire come from held keys; start comes from an Enter press
    event so holding Enter does not restart repeatedly.
    """
    start = any(
        event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN
        for event in events
    )
    return InputSignals(
        move_left=_any_held(pressed, LEFT_KEYS),
        move_right=_any_held(pressed, RIGHT_KEYS),
        fire=bool(pressed[pygame.K_SPACE]),
        start=start,
    )


def main(argv=None):
    """Main entry point for human play mode."""
    args = parse_args(argv)

    config = load_config(args.config, game_id=GAME_ID) if args.config else load_game_config(GAME_ID)
    if args.seed is not None:
        config.game.seed = args.seed

    setup_logging(args.log_level or config.logging.level, config.logging.log_file)

    pygame.init()
    vis = config.visualization
    screen = pygame.display.set_mode((vis.window_width, vis.window_height))
    pygame.display.set_caption(vis.title)

    audio = GameRegistry.create_audio(
        GAME_ID, enabled=config.audio.enabled, volume=config.audio.volume
    )
    if audio is not None and (args.mute or config.audio.start_muted):
        audio.toggle_mute()

    game = GameRegistry.create_game(
        GAME_ID,
        config=config.game,
        clock=pygame.time.get_ticks,
        audio=audio,
    )
    renderer = GameRegistry.create_renderer(GAME_ID, width=game.width, height=game.height)
    renderer.set_render_area(0, 0, vis.window_width, vis.window_height)

    logger.info("Window %dx%d at %d FPS", vis.window_width, vis.window_height, vis.fps)

    clock = pygame.time.Clock()
    running = True
    high_score = 0

    while running:
        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_m and audio is not None:
                    muted = audio.toggle_mute()
                    logger.info("Sound %s", "off" if muted else "on")

        signals = read_input_signals(pygame.key.get_pressed(), events)
        state = game.update(signals)

        if state["state"] == "gameOver" and state["score"] > high_score:
            high_score = state["score"]
            logger.info("New high score: %d", high_score)

        renderer.render(state, screen)
        pygame.display.flip()
        clock.tick(vis.fps)

    pygame.quit()
    logger.info("Session high score: %d", high_score)


if __name__ == "__main__":
    main()
