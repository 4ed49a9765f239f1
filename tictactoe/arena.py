"""Strategy-versus-strategy matches, used to sanity check the computer players."""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .ai import AIDifficulty, Strategy, get_strategy
from .config import load_settings
from .game import (
    O,
    X,
    GameResult,
    create_empty_board,
    get_game_result,
    opponent,
    render_board,
    set_cell,
)

__all__ = ["Arena", "ArenaResult", "main", "play_game"]

logger = logging.getLogger(__name__)


def play_game(x_strategy: Strategy, o_strategy: Strategy) -> GameResult:
    """Let two strategies play one game from an empty board."""
    board = create_empty_board()
    player = X
    result = get_game_result(board)
    while not result.is_decided:
        strategy = x_strategy if player == X else o_strategy
        move = strategy.get_move(board, player)
        board = set_cell(board, move, player)
        result = get_game_result(board)
        player = opponent(player)
    logger.debug("Final position:\n%s", render_board(board))
    return result


@dataclass
class ArenaResult:
    """Tally from the challenger's seat."""

    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws

    def _rate(self, count: int) -> float:
        return count / self.total if self.total else 0.0

    @property
    def win_rate(self) -> float:
        return self._rate(self.wins)

    @property
    def draw_rate(self) -> float:
        return self._rate(self.draws)

    def record(self, outcome: GameResult, challenger_mark: str) -> None:
        if outcome.is_draw:
            self.draws += 1
        elif outcome.winner == challenger_mark:
            self.wins += 1
        else:
            self.losses += 1

    def __str__(self) -> str:
        return (
            f"{self.total} games - wins: {self.wins} losses: {self.losses} "
            f"draws: {self.draws} (win rate {self.win_rate:.2%}, "
            f"draw rate {self.draw_rate:.2%})"
        )


@dataclass
class Arena:
    challenger: Strategy
    baseline: Strategy

    def play_matches(self, num_games: int = 100) -> ArenaResult:
        """Play ``num_games`` games; the challenger opens the even-numbered ones."""
        results = ArenaResult()
        for game_index in range(num_games):
            if game_index % 2 == 0:
                results.record(play_game(self.challenger, self.baseline), X)
            else:
                results.record(play_game(self.baseline, self.challenger), O)
        return results


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    levels = [level.value for level in AIDifficulty]
    parser = argparse.ArgumentParser(description="Pit two Tic-Tac-Toe AIs against each other")
    parser.add_argument("--challenger", choices=levels, default=AIDifficulty.GOD.value)
    parser.add_argument("--baseline", choices=levels, default=AIDifficulty.EASY.value)
    parser.add_argument("--games", type=int, default=100, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides the config file)")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides the config file)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML file (defaults to the packaged config.yaml)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    settings = load_settings(args.config)
    log_level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    seed = args.seed if args.seed is not None else settings.seed
    rng = np.random.default_rng(seed)
    arena = Arena(
        challenger=get_strategy(args.challenger, rng=rng),
        baseline=get_strategy(args.baseline, rng=rng),
    )
    result = arena.play_matches(args.games)
    print(f"{args.challenger} vs {args.baseline} over {result}")


if __name__ == "__main__":
    main()
