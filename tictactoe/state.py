"""Game state aggregate and the pure transition function that evolves it.

``game_reducer(state, action)`` is the only place a :class:`GameState` is
derived from another one.  It never mutates its input and returns the very
same object when an action is rejected, which lets callers detect no-ops with
an identity check.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from .ai import AIDifficulty
from .game import (
    EMPTY,
    O,
    X,
    Board,
    GameResult,
    Player,
    Position,
    create_empty_board,
    get_cell,
    get_game_result,
    opponent,
    set_cell,
)


class GamePhase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    FINISHED = "finished"


class GameMode(str, Enum):
    HUMAN_VS_HUMAN = "hvh"
    HUMAN_VS_COMPUTER = "hvc"
    COMPUTER_VS_COMPUTER = "cvc"


@dataclass(frozen=True)
class GameConfig:
    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    human_player: Player = X
    difficulty: AIDifficulty = AIDifficulty.FUN

    @classmethod
    def create(
        cls,
        mode: Union[GameMode, str] = GameMode.HUMAN_VS_HUMAN,
        human_player: Player = X,
        difficulty: Union[AIDifficulty, str] = AIDifficulty.FUN,
    ) -> "GameConfig":
        """Build a config from enum members or their string values."""
        if human_player not in (X, O):
            raise ValueError(f"human_player must be 'X' or 'O', got {human_player!r}")
        return cls(
            mode=GameMode(mode),
            human_player=human_player,
            difficulty=AIDifficulty(difficulty),
        )


@dataclass(frozen=True)
class GameState:
    board: Board = field(default_factory=create_empty_board)
    current_player: Player = X
    phase: GamePhase = GamePhase.SETUP
    mode: GameMode = GameMode.HUMAN_VS_HUMAN
    human_player: Player = X
    difficulty: AIDifficulty = AIDifficulty.FUN
    result: Optional[GameResult] = None

    @property
    def is_playing(self) -> bool:
        return self.phase == GamePhase.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    @property
    def is_computer_vs_computer(self) -> bool:
        return self.mode == GameMode.COMPUTER_VS_COMPUTER

    @property
    def is_human_turn(self) -> bool:
        return (
            self.is_playing
            and self.mode == GameMode.HUMAN_VS_COMPUTER
            and self.current_player == self.human_player
        )

    @property
    def is_ai_turn(self) -> bool:
        if not self.is_playing:
            return False
        if self.mode == GameMode.COMPUTER_VS_COMPUTER:
            return True
        return (
            self.mode == GameMode.HUMAN_VS_COMPUTER
            and self.current_player != self.human_player
        )


def create_initial_state() -> GameState:
    return GameState()


@dataclass(frozen=True)
class StartGame:
    config: GameConfig


@dataclass(frozen=True)
class MakeMove:
    position: Position


@dataclass(frozen=True)
class ResetGame:
    pass


Action = Union[StartGame, MakeMove, ResetGame]


def game_reducer(state: GameState, action: Action) -> GameState:
    """Apply ``action`` to ``state`` and return the resulting state.

    Legal phase transitions are setup -> playing (start), playing -> finished
    (decisive move) and any phase -> setup (reset).
    """
    if isinstance(action, StartGame):
        if state.phase != GamePhase.SETUP:
            return state
        config = action.config
        return GameState(
            board=create_empty_board(),
            current_player=X,
            phase=GamePhase.PLAYING,
            mode=config.mode,
            human_player=config.human_player,
            difficulty=config.difficulty,
            result=None,
        )

    if isinstance(action, MakeMove):
        if state.phase != GamePhase.PLAYING:
            return state
        if get_cell(state.board, action.position) != EMPTY:
            return state
        board = set_cell(state.board, action.position, state.current_player)
        result = get_game_result(board)
        if result.is_decided:
            return replace(state, board=board, phase=GamePhase.FINISHED, result=result)
        return replace(state, board=board, current_player=opponent(state.current_player))

    if isinstance(action, ResetGame):
        return create_initial_state()

    return state


__all__ = [
    "Action",
    "GameConfig",
    "GameMode",
    "GamePhase",
    "GameState",
    "MakeMove",
    "ResetGame",
    "StartGame",
    "create_initial_state",
    "game_reducer",
]
