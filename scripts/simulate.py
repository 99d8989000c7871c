#!/usr/bin/env python3
"""
Headless Simulation - Run Space Invaders without a window.

Drives the game with a scripted random player on a manual clock, so a given
seed always produces the same run. Useful for soak testing the rules.

Usage:
    python scripts/simulate.py                        # Rich summary table
    python scripts/simulate.py --seed 7 --ticks 20000
    python scripts/simulate.py --runs 5 --json        # Machine-readable output
"""
import sys
import json
import argparse
import random
from collections import Counter
from pathlib import Path
from typing import Dict, Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rich.console import Console
from rich.table import Table

from arcade_invaders.core import GameState, InputSignals, ManualClock
from arcade_invaders.games.space_invaders import SpaceInvadersGame
from arcade_invaders.utils import load_game_config, setup_logging

FRAME_MS = 1000.0 / 60


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Arcade Invaders - Headless simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=0, help="Base seed (default: 0)")
    parser.add_argument("--ticks", type=int, default=36000, help="Max ticks per run (default: 36000)")
    parser.add_argument("--runs", type=int, default=1, help="Number of runs (default: 1)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Log level (default: WARNING)")
    return parser.parse_args(argv)


def scripted_signals(rng: random.Random) -> InputSignals:
    """A twitchy player: wanders left/right and fires most of the time."""
    roll = rng.random()
    return InputSignals(
        move_left=roll < 0.35,
        move_right=roll > 0.65,
        fire=rng.random() < 0.8,
    )


def simulate_run(seed: int, max_ticks: int) -> Dict[str, Any]:
    """Play one game from the start trigger until game over or max_ticks."""
    config = load_game_config("space_invaders").game
    clock = ManualClock()
    game = SpaceInvadersGame(config=config, rng=random.Random(seed), clock=clock)
    player_rng = random.Random(seed + 1)

    game.update(InputSignals(start=True))
    events: Counter = Counter()
    ticks = 0
    while ticks < max_ticks and game.state == GameState.PLAYING:
        clock.advance(FRAME_MS)
        state = game.update(scripted_signals(player_rng))
        events.update(state["events"])
        ticks += 1

    return {
        "seed": seed,
        "ticks": ticks,
        "state": game.state.value,
        "score": game.score,
        "wave": game.wave,
        "lives": game.lives,
        "events": dict(events),
    }


def print_table(results, console: Console) -> None:
    table = Table(title="Space Invaders - Headless Runs")
    table.add_column("Seed", justify="right")
    table.add_column("Ticks", justify="right")
    table.add_column("State")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Wave", justify="right")
    table.add_column("Lives", justify="right")
    table.add_column("Kills", justify="right")
    table.add_column("Bonus hits", justify="right")

    for r in results:
        table.add_row(
            str(r["seed"]),
            str(r["ticks"]),
            r["state"],
            str(r["score"]),
            str(r["wave"]),
            str(r["lives"]),
            str(r["events"].get("invader_hit", 0)),
            str(r["events"].get("bonus_hit", 0)),
        )
    console.print(table)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    results = [simulate_run(args.seed + i, args.ticks) for i in range(args.runs)]

    if args.json:
        print(json.dumps(results if args.runs > 1 else results[0]))
    else:
        print_table(results, Console())


if __name__ == "__main__":
    main()
