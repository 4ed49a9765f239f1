"""Computer opponents for Tic-Tac-Toe.

Three interchangeable strategies share the :class:`Strategy` contract: given a
board and the mark to play, return a position.  Strategies keep no state
between calls; randomness comes from an injected ``numpy`` generator so games
can be replayed under a fixed seed.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

import numpy as np

from .game import (
    BOARD_SIZE,
    Board,
    Player,
    Position,
    get_empty_cells,
    get_game_result,
    opponent,
    set_cell,
)

logger = logging.getLogger(__name__)

CENTER: Position = (1, 1)
WIN_SCORE = 10


class AIDifficulty(str, Enum):
    EASY = "easy"
    FUN = "fun"
    GOD = "god"


class NoMovesAvailableError(RuntimeError):
    """Raised when a strategy is asked to move on a board with no empty cells."""


def _require_moves(board: Board) -> List[Position]:
    moves = get_empty_cells(board)
    if not moves:
        raise NoMovesAvailableError("No valid moves available")
    return moves


def _random_choice(rng: np.random.Generator, moves: List[Position]) -> Position:
    return moves[int(rng.integers(len(moves)))]


def immediate_winning_move(board: Board, player: Player) -> Optional[Position]:
    for move in get_empty_cells(board):
        test_board = set_cell(board, move, player)
        if get_game_result(test_board).winner == player:
            return move
    return None


def block_opponent_move(board: Board, player: Player) -> Optional[Position]:
    return immediate_winning_move(board, opponent(player))


@dataclass
class SearchStats:
    """Counts positions visited by :func:`minimax`."""

    nodes: int = 0


def minimax(
    board: Board,
    ai_player: Player,
    depth: int,
    maximizing: bool,
    alpha: float = -math.inf,
    beta: float = math.inf,
    stats: Optional[SearchStats] = None,
    prune: bool = True,
) -> float:
    """Score ``board`` from ``ai_player``'s point of view.

    Wins are worth ``10 - depth`` and losses ``depth - 10`` so that the search
    prefers the quickest win and the slowest defeat.  Alpha-beta cutoffs only
    reduce the number of visited nodes; they never change the returned score.
    """
    if stats is not None:
        stats.nodes += 1

    result = get_game_result(board)
    if result.winner == ai_player:
        return WIN_SCORE - depth
    if result.winner is not None:
        return depth - WIN_SCORE
    if result.is_draw:
        return 0

    moves = get_empty_cells(board)
    if not moves:
        return 0

    if maximizing:
        best = -math.inf
        for move in moves:
            child = set_cell(board, move, ai_player)
            score = minimax(child, ai_player, depth + 1, False, alpha, beta, stats, prune)
            best = max(best, score)
            alpha = max(alpha, score)
            if prune and beta <= alpha:
                break
        return best

    best = math.inf
    other = opponent(ai_player)
    for move in moves:
        child = set_cell(board, move, other)
        score = minimax(child, ai_player, depth + 1, True, alpha, beta, stats, prune)
        best = min(best, score)
        beta = min(beta, score)
        if prune and beta <= alpha:
            break
    return best


class Strategy(ABC):
    """Common interface of every computer opponent."""

    name: str = ""
    difficulty: AIDifficulty

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    @abstractmethod
    def get_move(self, board: Board, player: Player) -> Position:
        """Return the position ``player`` should occupy on ``board``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EasyStrategy(Strategy):
    """Picks a uniformly random empty cell; never looks ahead."""

    name = "Easy AI"
    difficulty = AIDifficulty.EASY

    def get_move(self, board: Board, player: Player) -> Position:
        return _random_choice(self.rng, _require_moves(board))


class FunStrategy(Strategy):
    """Wins when it can, blocks when it must, otherwise plays randomly."""

    name = "Fun AI"
    difficulty = AIDifficulty.FUN

    def get_move(self, board: Board, player: Player) -> Position:
        moves = _require_moves(board)
        winning = immediate_winning_move(board, player)
        if winning is not None:
            return winning
        block = block_opponent_move(board, player)
        if block is not None:
            return block
        return _random_choice(self.rng, moves)


class GodStrategy(Strategy):
    """Perfect play through a full-depth minimax search.

    An empty board is answered with the centre without searching.  Among
    equally scored moves the first one in scan order wins.
    """

    name = "God AI"
    difficulty = AIDifficulty.GOD

    def __init__(self, rng: Optional[np.random.Generator] = None, prune: bool = True) -> None:
        super().__init__(rng)
        self.prune = prune

    def get_move(self, board: Board, player: Player) -> Position:
        return self.search(board, player)

    def search(
        self, board: Board, player: Player, stats: Optional[SearchStats] = None
    ) -> Position:
        moves = _require_moves(board)
        if len(moves) == BOARD_SIZE * BOARD_SIZE:
            return CENTER

        stats = stats if stats is not None else SearchStats()
        best_score = -math.inf
        best_move = moves[0]
        for move in moves:
            child = set_cell(board, move, player)
            score = minimax(
                child,
                player,
                depth=0,
                maximizing=False,
                stats=stats,
                prune=self.prune,
            )
            if score > best_score:
                best_score = score
                best_move = move

        logger.debug(
            "God AI evaluated %d positions for %s. Best move: %s (score: %s)",
            stats.nodes,
            player,
            best_move,
            best_score,
        )
        return best_move


_STRATEGIES = {
    AIDifficulty.EASY: EasyStrategy,
    AIDifficulty.FUN: FunStrategy,
    AIDifficulty.GOD: GodStrategy,
}


def get_strategy(
    difficulty: Union[AIDifficulty, str], rng: Optional[np.random.Generator] = None
) -> Strategy:
    """Resolve a difficulty level to a strategy instance."""
    try:
        level = AIDifficulty(difficulty)
    except ValueError:
        raise ValueError(f"Unknown difficulty: {difficulty!r}") from None
    return _STRATEGIES[level](rng=rng)


__all__ = [
    "AIDifficulty",
    "EasyStrategy",
    "FunStrategy",
    "GodStrategy",
    "NoMovesAvailableError",
    "SearchStats",
    "Strategy",
    "block_opponent_move",
    "get_strategy",
    "immediate_winning_move",
    "minimax",
]
