"""Classic 3x3 Tic-Tac-Toe engine with computer opponents and a turn controller."""
from .ai import (
    AIDifficulty,
    EasyStrategy,
    FunStrategy,
    GodStrategy,
    NoMovesAvailableError,
    Strategy,
    get_strategy,
)
from .arena import Arena, ArenaResult, play_game
from .config import Settings, load_settings
from .controller import AI_MOVE_DELAY_MS, GameController
from .game import (
    EMPTY,
    O,
    X,
    GameResult,
    InvalidPositionError,
    Player,
    Position,
    board_from_rows,
    check_winner,
    clone_board,
    create_empty_board,
    get_cell,
    get_empty_cells,
    get_game_result,
    get_winning_line,
    is_board_full,
    is_draw,
    set_cell,
)
from .scheduler import DeferredTask, ManualScheduler, Scheduler, TkScheduler
from .state import GameConfig, GameMode, GamePhase, GameState, game_reducer
from .stats import PlayerStats, StatsTracker

__version__ = "1.0.0"
__all__ = [
    "AIDifficulty",
    "AI_MOVE_DELAY_MS",
    "Arena",
    "ArenaResult",
    "DeferredTask",
    "EMPTY",
    "EasyStrategy",
    "FunStrategy",
    "GameConfig",
    "GameController",
    "GameMode",
    "GamePhase",
    "GameResult",
    "GameState",
    "GodStrategy",
    "InvalidPositionError",
    "ManualScheduler",
    "NoMovesAvailableError",
    "O",
    "Player",
    "PlayerStats",
    "Position",
    "Scheduler",
    "Settings",
    "StatsTracker",
    "Strategy",
    "TkScheduler",
    "X",
    "board_from_rows",
    "check_winner",
    "clone_board",
    "create_empty_board",
    "game_reducer",
    "get_cell",
    "get_empty_cells",
    "get_game_result",
    "get_strategy",
    "get_winning_line",
    "is_board_full",
    "is_draw",
    "load_settings",
    "play_game",
    "set_cell",
]
