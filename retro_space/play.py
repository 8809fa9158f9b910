"""
Command-line entry point for Retro Space
"""

import argparse
import logging
import random
from typing import Optional

from .config import GAME_CONFIG
from .game import RetroSpaceGame


def run_headless(ticks: int, seed: Optional[int] = None, **game_kwargs):
    """
    Play with random input and no window, printing a summary.

    Input is a random walk over the keyboard keys with the fire key held, so
    the run exercises movement, firing, collisions and level progression.
    """
    config = dict(GAME_CONFIG)
    config.update(game_kwargs)
    game = RetroSpaceGame(seed=seed, **config)
    rng = random.Random(seed)

    game.start()
    game.controls.key_down("fire")
    directions = ["left", "right", "up", "down"]

    played = 0
    for _ in range(ticks):
        if played % 20 == 0:
            for name in directions:
                game.controls.key_up(name)
            game.controls.key_down(rng.choice(directions))
        if not game.tick():
            break
        played += 1

    print(f"\n{'='*60}")
    print(f"Headless run finished after {played} ticks")
    print(f"State: {game.state.value}")
    print(f"Score: {game.score}  Lives: {game.lives}  Level: {game.level}")
    print(f"Enemies on screen: {len(game.enemies)}  Spawn rate: {game.spawn_rate:.3f}")
    print(f"{'='*60}\n")
    return game


def main(argv=None):
    parser = argparse.ArgumentParser(description="Retro Space - 2D arcade shooter")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: none)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=GAME_CONFIG["width"],
        help=f"Playfield width (default: {GAME_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=GAME_CONFIG["height"],
        help=f"Playfield height (default: {GAME_CONFIG['height']})",
    )
    parser.add_argument(
        "--lives",
        type=int,
        default=GAME_CONFIG["lives"],
        help=f"Starting lives (default: {GAME_CONFIG['lives']})",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Frames per second for the window (default: 60)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window using random input",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=3600,
        help="Maximum ticks for --headless (default: 3600)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    overrides = {"width": args.width, "height": args.height, "lives": args.lives}

    if args.headless:
        run_headless(args.ticks, seed=args.seed, **overrides)
        return 0

    # needs a display
    from .window import play

    config = dict(GAME_CONFIG)
    config.update(overrides)
    play(RetroSpaceGame(seed=args.seed, **config), fps=args.fps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
