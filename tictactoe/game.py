"""Board model and result evaluation for classic 3x3 Tic-Tac-Toe.

The board is a tuple of three rows, each a tuple of three cells.  A cell holds
``"X"``, ``"O"`` or :data:`EMPTY`.  Boards are immutable values: every update
helper returns a fresh board, so a board handed to one component can never
change underneath another.  Positions are ``(row, col)`` tuples with both
components in ``0..2``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

Player = str  # Either "X" or "O"
Position = Tuple[int, int]
Row = Tuple[str, ...]
Board = Tuple[Row, ...]

X: Player = "X"
O: Player = "O"
EMPTY = " "
BOARD_SIZE = 3

WIN_LINES: Tuple[Tuple[Position, Position, Position], ...] = (
    # Rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # Columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # Diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class InvalidPositionError(ValueError):
    """Raised when a position lies outside the 3x3 grid."""


@dataclass(frozen=True)
class GameResult:
    """Outcome of evaluating a board.

    ``winner`` and ``is_draw`` are mutually exclusive and ``winning_line`` is
    present exactly when ``winner`` is.
    """

    winner: Optional[Player] = None
    winning_line: Optional[Tuple[Position, ...]] = None
    is_draw: bool = False

    @property
    def is_decided(self) -> bool:
        return self.winner is not None or self.is_draw


def opponent(player: Player) -> Player:
    return O if player == X else X


def _check_position(position: Position) -> Tuple[int, int]:
    row, col = position
    if not 0 <= row < BOARD_SIZE or not 0 <= col < BOARD_SIZE:
        raise InvalidPositionError(f"position {position!r} is outside the board")
    return row, col


def create_empty_board() -> Board:
    return ((EMPTY,) * BOARD_SIZE,) * BOARD_SIZE


def get_cell(board: Board, position: Position) -> str:
    row, col = _check_position(position)
    return board[row][col]


def set_cell(board: Board, position: Position, value: str) -> Board:
    """Return a copy of ``board`` with ``value`` stored at ``position``.

    ``value`` may be a mark or :data:`EMPTY`.  Only the addressed row is
    rebuilt; the other rows are shared, which is safe because rows are tuples.
    """
    if value not in (X, O, EMPTY):
        raise ValueError(f"cell value must be 'X', 'O' or empty, got {value!r}")
    row, col = _check_position(position)
    old_row = board[row]
    new_row = old_row[:col] + (value,) + old_row[col + 1:]
    return board[:row] + (new_row,) + board[row + 1:]


def get_empty_cells(board: Board) -> List[Position]:
    """Return the empty positions in row-major scan order."""
    return [
        (row, col)
        for row in range(BOARD_SIZE)
        for col in range(BOARD_SIZE)
        if board[row][col] == EMPTY
    ]


def clone_board(board: Sequence[Sequence[str]]) -> Board:
    """Copy any 3x3 nested sequence (lists included) into an immutable board."""
    return tuple(tuple(row) for row in board)


def get_game_result(board: Board) -> GameResult:
    """Evaluate ``board`` in a single pass over the eight winning lines."""
    for line in WIN_LINES:
        (ar, ac), (br, bc), (cr, cc) = line
        mark = board[ar][ac]
        if mark != EMPTY and mark == board[br][bc] == board[cr][cc]:
            return GameResult(winner=mark, winning_line=line, is_draw=False)
    if not get_empty_cells(board):
        return GameResult(is_draw=True)
    return GameResult()


def check_winner(board: Board) -> Optional[Player]:
    return get_game_result(board).winner


def get_winning_line(board: Board) -> Optional[Tuple[Position, ...]]:
    return get_game_result(board).winning_line


def is_board_full(board: Board) -> bool:
    return not get_empty_cells(board)


def is_draw(board: Board) -> bool:
    return get_game_result(board).is_draw


def board_from_rows(rows: Sequence[str]) -> Board:
    """Build a board from three row strings such as ``"XO."``.

    ``.`` and spaces denote empty cells.
    """
    rows = list(rows)
    if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
        raise ValueError("a board needs exactly three rows of three cells")
    for row in rows:
        for char in row:
            if char not in (".", EMPTY, X, O):
                raise ValueError(f"unexpected board character {char!r}")
    return tuple(
        tuple(EMPTY if char == "." else char for char in row) for row in rows
    )


def render_board(board: Board) -> str:
    def cell_value(value: str) -> str:
        return value if value != EMPTY else "."

    return "\n".join(" ".join(cell_value(value) for value in row) for row in board)
