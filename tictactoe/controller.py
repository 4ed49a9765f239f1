"""Turn sequencing for human and computer seats.

:class:`GameController` owns the authoritative :class:`~tictactoe.state.GameState`.
Every change goes through :func:`~tictactoe.state.game_reducer`; whenever a
computer seat is to move, the controller computes the move right away and
applies it after ``delay_ms`` through a single :class:`DeferredTask`.  Any
accepted transition cancels that pending move before replacing the state, so
a stale computer move can never land on a board it was not computed for.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

import numpy as np

from .ai import get_strategy
from .game import Position
from .scheduler import DeferredTask, Scheduler
from .state import (
    Action,
    GameConfig,
    GamePhase,
    GameMode,
    GameState,
    MakeMove,
    ResetGame,
    StartGame,
    create_initial_state,
    game_reducer,
)
from .stats import StatsTracker

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

AI_MOVE_DELAY_MS = 500

Listener = Callable[[GameState], None]


class GameController:
    def __init__(
        self,
        scheduler: Scheduler,
        delay_ms: int = AI_MOVE_DELAY_MS,
        stats: Optional[StatsTracker] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        self.delay_ms = delay_ms
        self.stats = stats
        self.rng = rng if rng is not None else np.random.default_rng()
        self._state = create_initial_state()
        self._paused = False
        self._ai_task = DeferredTask(scheduler)
        self._scheduled: Optional[Tuple[GameState, Position]] = None
        self._listeners: List[Listener] = []

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        scheduler: Scheduler,
        stats: Optional[StatsTracker] = None,
    ) -> "GameController":
        if stats is None and settings.stats_path is not None:
            stats = StatsTracker(settings.stats_path)
        return cls(
            scheduler,
            delay_ms=settings.ai_delay_ms,
            stats=stats,
            rng=np.random.default_rng(settings.seed),
        )

    # ------------------------------------------------------------------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def is_finished(self) -> bool:
        return self._state.is_finished

    @property
    def is_computer_vs_computer(self) -> bool:
        return self._state.is_computer_vs_computer

    @property
    def is_human_turn(self) -> bool:
        return self._state.is_human_turn

    @property
    def is_ai_turn(self) -> bool:
        return self._state.is_ai_turn

    @property
    def has_pending_ai_move(self) -> bool:
        return self._ai_task.pending

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    def start(self, config: GameConfig) -> None:
        self._paused = False
        if self._state.phase != GamePhase.SETUP:
            self._dispatch(ResetGame())
        self._dispatch(StartGame(config))
        logger.debug(
            "Started %s game (human=%s, difficulty=%s)",
            config.mode.value,
            config.human_player,
            config.difficulty.value,
        )

    def move(self, position: Position) -> bool:
        """Place the current player's mark; returns False when ignored."""
        return self._dispatch(MakeMove(position))

    def human_move(self, position: Position) -> bool:
        if self.is_ai_turn:
            logger.debug("Ignoring human move %s during the computer's turn", position)
            return False
        return self.move(position)

    def reset(self) -> None:
        self._paused = False
        self._dispatch(ResetGame())

    def toggle_pause(self) -> None:
        self._paused = not self._paused
        if self._paused:
            if self.is_computer_vs_computer:
                self._cancel_ai_move()
        else:
            self._schedule_ai_move()
        logger.debug("Autoplay %s", "paused" if self._paused else "resumed")
        self._notify()

    # ------------------------------------------------------------------
    def _dispatch(self, action: Action) -> bool:
        previous = self._state
        state = game_reducer(previous, action)
        if state is previous:
            return False

        self._cancel_ai_move()
        self._state = state
        if state.is_finished and not previous.is_finished:
            self._report_finished(state)
        # Listeners may raise; the computer's next move must already be queued.
        self._schedule_ai_move()
        self._notify()
        return True

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)

    def _report_finished(self, state: GameState) -> None:
        result = state.result
        if result is None:
            return
        logger.debug(
            "Game finished: %s", f"{result.winner} wins" if result.winner else "draw"
        )
        if self.stats is not None and state.mode == GameMode.HUMAN_VS_COMPUTER:
            self.stats.record_result(result, state.human_player)

    def _compute_ai_move(self, state: GameState) -> Position:
        strategy = get_strategy(state.difficulty, rng=self.rng)
        move = strategy.get_move(state.board, state.current_player)
        logger.debug("%s plays %s for %s", strategy.name, move, state.current_player)
        return move

    def _schedule_ai_move(self) -> None:
        state = self._state
        if self._ai_task.pending or not state.is_ai_turn:
            return
        if self._paused and state.is_computer_vs_computer:
            return
        self._scheduled = (state, self._compute_ai_move(state))
        self._ai_task.schedule(self.delay_ms, self._apply_ai_move)

    def _cancel_ai_move(self) -> None:
        self._scheduled = None
        self._ai_task.cancel()

    def _apply_ai_move(self) -> None:
        if self._scheduled is None:
            return
        scheduled_state, move = self._scheduled
        self._scheduled = None
        state = self._state
        if state is not scheduled_state:
            if not state.is_ai_turn:
                return
            move = self._compute_ai_move(state)
        self._dispatch(MakeMove(move))


__all__ = ["AI_MOVE_DELAY_MS", "GameController", "Listener"]
