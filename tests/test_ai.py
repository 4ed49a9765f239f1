from __future__ import annotations

import numpy as np
import pytest

from tictactoe.ai import (
    AIDifficulty,
    EasyStrategy,
    FunStrategy,
    GodStrategy,
    NoMovesAvailableError,
    SearchStats,
    block_opponent_move,
    get_strategy,
    immediate_winning_move,
)
from tictactoe.arena import Arena, play_game
from tictactoe.game import (
    O,
    X,
    board_from_rows,
    create_empty_board,
    get_empty_cells,
    get_game_result,
    set_cell,
)

FULL_BOARD = ["XOX", "XOO", "OXX"]


def reachable_boards(count: int, seed: int, max_empty: int = 7):
    """Yield undecided boards reached by random play."""
    rng = np.random.default_rng(seed)
    produced = 0
    while produced < count:
        board = create_empty_board()
        player = X
        while not get_game_result(board).is_decided:
            moves = get_empty_cells(board)
            if len(moves) <= max_empty:
                yield board, player
                produced += 1
                if produced >= count:
                    return
            board = set_cell(board, moves[int(rng.integers(len(moves)))], player)
            player = O if player == X else X


@pytest.mark.parametrize("strategy_cls", [EasyStrategy, FunStrategy, GodStrategy])
def test_strategies_refuse_full_board(strategy_cls) -> None:
    strategy = strategy_cls(rng=np.random.default_rng(0))
    with pytest.raises(NoMovesAvailableError):
        strategy.get_move(board_from_rows(FULL_BOARD), X)


@pytest.mark.parametrize("strategy_cls", [EasyStrategy, FunStrategy, GodStrategy])
def test_strategies_return_an_empty_cell(strategy_cls) -> None:
    strategy = strategy_cls(rng=np.random.default_rng(1))
    board = board_from_rows(["XO.", ".X.", "O.."])
    assert strategy.get_move(board, O) in get_empty_cells(board)


def test_easy_is_reproducible_under_a_seed() -> None:
    board = board_from_rows(["X..", ".O.", "..."])
    first = EasyStrategy(rng=np.random.default_rng(42))
    second = EasyStrategy(rng=np.random.default_rng(42))
    moves_a = [first.get_move(board, X) for _ in range(20)]
    moves_b = [second.get_move(board, O) for _ in range(20)]
    assert moves_a == moves_b
    assert set(moves_a) <= set(get_empty_cells(board))


def test_easy_ignores_winning_opportunities_sometimes() -> None:
    board = board_from_rows(["XX.", "OO.", "..."])
    easy = EasyStrategy(rng=np.random.default_rng(5))
    moves = {easy.get_move(board, X) for _ in range(100)}
    assert moves == set(get_empty_cells(board))


def test_immediate_winning_move_and_block_helpers() -> None:
    board = board_from_rows(["OO.", "X..", "..X"])
    assert immediate_winning_move(board, O) == (0, 2)
    assert immediate_winning_move(board, X) is None
    assert block_opponent_move(board, X) == (0, 2)


def test_fun_takes_the_win() -> None:
    board = board_from_rows(["XX.", "OO.", "..."])
    assert FunStrategy(rng=np.random.default_rng(0)).get_move(board, X) == (0, 2)


def test_fun_prefers_winning_over_blocking() -> None:
    # X can win at (2, 2) while O threatens (0, 2), earlier in scan order.
    board = board_from_rows(["OO.", "...", "XX."])
    assert FunStrategy(rng=np.random.default_rng(0)).get_move(board, X) == (2, 2)


def test_fun_blocks_opponent() -> None:
    board = board_from_rows(["OO.", "X..", "..X"])
    assert FunStrategy(rng=np.random.default_rng(0)).get_move(board, X) == (0, 2)


def test_fun_picks_first_winning_cell_in_scan_order() -> None:
    # X wins at (0, 2) or (2, 0); the scan finds (0, 2) first.
    board = board_from_rows(["XX.", "XOO", ".O."])
    assert FunStrategy(rng=np.random.default_rng(0)).get_move(board, X) == (0, 2)


def test_god_opens_in_the_centre() -> None:
    stats = SearchStats()
    assert GodStrategy().search(create_empty_board(), X, stats=stats) == (1, 1)
    assert stats.nodes == 0
    assert GodStrategy().get_move(create_empty_board(), O) == (1, 1)


def test_god_takes_the_win() -> None:
    board = board_from_rows(["XX.", "OO.", "..."])
    assert GodStrategy().get_move(board, X) == (0, 2)


def test_god_blocks() -> None:
    board = board_from_rows(["OO.", "X..", "..X"])
    assert GodStrategy().get_move(board, X) == (0, 2)


def test_god_prefers_immediate_win_to_blocking() -> None:
    board = board_from_rows(["XX.", "OO.", "X.."])
    assert GodStrategy().get_move(board, O) == (1, 2)


def test_god_answers_corner_opening_with_centre() -> None:
    board = board_from_rows(["X..", "...", "..."])
    assert GodStrategy().get_move(board, O) == (1, 1)


def test_pruning_never_changes_the_chosen_move() -> None:
    pruned = GodStrategy(prune=True)
    exhaustive = GodStrategy(prune=False)
    for board, player in reachable_boards(count=25, seed=11, max_empty=7):
        pruned_stats = SearchStats()
        exhaustive_stats = SearchStats()
        assert pruned.search(board, player, pruned_stats) == exhaustive.search(
            board, player, exhaustive_stats
        )
        assert pruned_stats.nodes <= exhaustive_stats.nodes


def test_god_never_loses_as_x_against_random() -> None:
    god = GodStrategy()
    rng = np.random.default_rng(2024)
    for _ in range(50):
        result = play_game(god, EasyStrategy(rng=rng))
        assert result.winner != O


def test_god_never_loses_as_o_against_random() -> None:
    god = GodStrategy()
    rng = np.random.default_rng(1973)
    for _ in range(50):
        result = play_game(EasyStrategy(rng=rng), god)
        assert result.winner != X


def test_god_never_loses_against_fun() -> None:
    arena = Arena(challenger=GodStrategy(), baseline=FunStrategy(rng=np.random.default_rng(9)))
    result = arena.play_matches(20)
    assert result.losses == 0
    assert result.total == 20


def test_god_against_itself_always_draws() -> None:
    for _ in range(3):
        result = play_game(GodStrategy(), GodStrategy())
        assert result.is_draw
        assert result.winner is None


@pytest.mark.parametrize(
    "difficulty, expected",
    [
        (AIDifficulty.EASY, EasyStrategy),
        (AIDifficulty.FUN, FunStrategy),
        (AIDifficulty.GOD, GodStrategy),
        ("easy", EasyStrategy),
        ("god", GodStrategy),
    ],
)
def test_get_strategy_resolves_difficulty(difficulty, expected) -> None:
    strategy = get_strategy(difficulty)
    assert isinstance(strategy, expected)
    assert strategy.difficulty == AIDifficulty(difficulty)


def test_strategy_names() -> None:
    assert get_strategy("easy").name == "Easy AI"
    assert get_strategy("fun").name == "Fun AI"
    assert get_strategy("god").name == "God AI"


@pytest.mark.parametrize("difficulty", ["medium", "hard", "", None])
def test_get_strategy_rejects_unknown_difficulty(difficulty) -> None:
    with pytest.raises(ValueError):
        get_strategy(difficulty)


def test_get_strategy_shares_the_given_generator() -> None:
    rng = np.random.default_rng(0)
    assert get_strategy("fun", rng=rng).rng is rng
