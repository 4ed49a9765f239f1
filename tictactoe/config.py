"""Engine settings loaded from YAML."""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .ai import AIDifficulty
from .game import O, X, Player
from .state import GameConfig, GameMode

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"


@dataclass(frozen=True)
class Settings:
    ai_delay_ms: int = 500
    default_mode: GameMode = GameMode.HUMAN_VS_HUMAN
    default_human_player: Player = X
    default_difficulty: AIDifficulty = AIDifficulty.FUN
    stats_path: Optional[Path] = None
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def default_config(self) -> GameConfig:
        return GameConfig.create(
            mode=self.default_mode,
            human_player=self.default_human_player,
            difficulty=self.default_difficulty,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        values = dict(data)
        if "ai_delay_ms" in values:
            values["ai_delay_ms"] = int(values["ai_delay_ms"])
            if values["ai_delay_ms"] < 0:
                raise ValueError("ai_delay_ms must be non-negative")
        if "default_mode" in values:
            values["default_mode"] = GameMode(values["default_mode"])
        if "default_difficulty" in values:
            values["default_difficulty"] = AIDifficulty(values["default_difficulty"])
        if values.get("default_human_player", X) not in (X, O):
            raise ValueError("default_human_player must be 'X' or 'O'")
        if values.get("stats_path") is not None:
            values["stats_path"] = Path(values["stats_path"])
        if values.get("seed") is not None:
            values["seed"] = int(values["seed"])
        if "log_level" in values:
            values["log_level"] = str(values["log_level"]).upper()
        return cls(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Read settings from ``path`` (the packaged ``config.yaml`` by default)."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping of settings")
    return Settings.from_dict(data)


__all__ = ["DEFAULT_CONFIG_PATH", "Settings", "load_settings"]
