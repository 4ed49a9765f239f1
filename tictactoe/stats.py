"""Win/loss/draw tally kept from the human player's point of view."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

from .game import GameResult, Player

logger = logging.getLogger(__name__)


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass
class PlayerStats:
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws


class StatsTracker:
    """Records finished human-vs-computer games.

    When ``path`` is given the tally is read from that JSON file on creation
    and written back after every change.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self.stats = self._load()

    def record_result(self, result: GameResult, human_player: Player) -> PlayerStats:
        if result.is_draw:
            self.stats.draws += 1
        elif result.winner == human_player:
            self.stats.wins += 1
        elif result.winner is not None:
            self.stats.losses += 1
        else:
            raise ValueError("cannot record an undecided game")
        self._save()
        return self.stats

    def reset(self) -> None:
        self.stats = PlayerStats()
        self._save()

    def _load(self) -> PlayerStats:
        if self.path is None or not self.path.exists():
            return PlayerStats()
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            stats = PlayerStats(
                wins=data["wins"], losses=data["losses"], draws=data["draws"]
            )
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring unreadable stats file %s: %s", self.path, exc)
            return PlayerStats()
        counts = asdict(stats).values()
        if not all(_is_count(value) for value in counts):
            logger.warning("Ignoring stats file %s with invalid counts", self.path)
            return PlayerStats()
        return stats

    def _save(self) -> None:
        if self.path is None:
            return
        directory = os.path.dirname(self.path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(asdict(self.stats), fh)


__all__ = ["PlayerStats", "StatsTracker"]
