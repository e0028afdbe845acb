"""
Play the dodge game in an Arcade window

Usage:
    python -m dodge.play [--high-score-file PATH] [--seed N] [--verbose]

Controls: Left/Right or A/D to move, Enter/Space to start or continue,
Esc to pause.
"""

import argparse
import random

import arcade

from dodge.configs.game_config import STORAGE_CONFIG
from dodge.controls import InputSource
from dodge.engine import GameEngine
from dodge.storage import JsonHighScoreStore
from dodge.timing import PerfCounterClock
from dodge.window import ArcadeFrameScheduler, GameWindow


def build_game(high_score_file: str, seed=None, verbose: int = 0):
    """Wire engine, input, storage and window together"""
    input_source = InputSource()
    engine = GameEngine(
        clock=PerfCounterClock(),
        scheduler=ArcadeFrameScheduler(),
        store=JsonHighScoreStore(high_score_file, verbose=verbose),
        input_source=input_source,
        rng=random.Random(seed),
        verbose=verbose,
    )
    window = GameWindow(engine, input_source)
    return engine, window


def main():
    parser = argparse.ArgumentParser(description="Dodge falling bullets until the new year")
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=STORAGE_CONFIG["high_score_file"],
        help=f"Where the high score is kept (default: {STORAGE_CONFIG['high_score_file']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed bullet patterns for a repeatable run (default: unseeded)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print game events to the console",
    )

    args = parser.parse_args()

    engine, window = build_game(args.high_score_file, seed=args.seed, verbose=int(args.verbose))
    try:
        arcade.run()
    finally:
        engine.destroy()


if __name__ == "__main__":
    main()
