"""
Run the platformer in a window.

    python -m platformer [--assets DIR] [--level N] [--seed S] [--debug]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tilecore.core.config import SimulationConfig
from tilecore.core.game import Game, GameConfig
from tilecore.haptics.vibrator import Vibrator
from tilecore.resources.assets import AssetLoader, AssetLoadError, ResourceContext
from platformer.game_state import GameState


DEFAULT_ASSETS = Path(__file__).parent / "data"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="platformer", description="Run, jump, shoot, reach the goal.")
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSETS,
                        help="Directory holding manifest.json")
    parser.add_argument("--level", type=int, default=None,
                        help="Level to start on (wraps around)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for effect randomness")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    logger = logging.getLogger("platformer")

    state = GameState(SimulationConfig(random_seed=args.seed))

    game = Game(state, GameConfig(title="abb"), state.event_bus)

    vibrator = Vibrator()
    vibrator.init()

    try:
        state.load_resources(ResourceContext(AssetLoader(args.assets), vibrator))
    except AssetLoadError as e:
        logger.error(f"Failed to load resources: {e}")
        return 1

    if args.level is not None:
        state.load_level(args.level)

    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
