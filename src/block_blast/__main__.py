"""Command line entry point.

Run with: `python -m block_blast {play,demo,random}`

``demo`` needs neither pygame nor gymnasium: it plays a greedy game in the
terminal, printing the board after every placement.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .game import BlockBlastGame, GameConfig, MemoryHighScoreStore


LOGGER = logging.getLogger("block_blast")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="block_blast")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play with the mouse in a pygame window")
    play.add_argument("--highscore-file", type=Path, default=None)
    play.add_argument("--settle-ms", type=int, default=GameConfig.settle_delay_ms)

    demo = sub.add_parser("demo", help="Greedy self-play printed to the terminal")
    demo.add_argument("--moves", type=int, default=20)

    rnd = sub.add_parser("random", help="Random agent in the Gymnasium environment")
    rnd.add_argument("--steps", type=int, default=200)
    return p


def run_demo(moves: int, seed: Optional[int] = None) -> BlockBlastGame:
    """Always take the legal move that scores most, preferring the top-left."""
    game = BlockBlastGame(GameConfig(settle_delay_ms=0, random_seed=seed), high_scores=MemoryHighScoreStore())
    for _ in range(moves):
        actions = game.valid_actions()
        if not actions:
            break
        best = max(actions, key=lambda a: (_gain(game, *a), -a[1], -a[2]))
        result = game.commit_placement(*best)
        print(f"slot {best[0]} -> ({best[1]}, {best[2]})  +{result.points_awarded}  score {game.score}")
        print(game.board.render_ascii())
        print()
        if game.game_over:
            break
    LOGGER.info("Demo finished: %s", game.get_game_stats())
    return game


def _gain(game: BlockBlastGame, slot: int, row: int, col: int) -> int:
    board = game.board.copy()
    cells = board.place(game.pieces[slot], row, col)
    return game.rules.placement_score(cells) + game.rules.score_for_lines(board.detect_completed_lines())


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "play":
        from .visualization.play import run

        run(GameConfig(settle_delay_ms=args.settle_ms, random_seed=args.seed), highscore_file=args.highscore_file)
    elif args.command == "demo":
        run_demo(args.moves, seed=args.seed)
    elif args.command == "random":
        from .rl.random_agent import run_random

        run_random(args.steps, seed=args.seed)


if __name__ == "__main__":
    main()
