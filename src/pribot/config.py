"""Runtime configuration.

Environment-first; CLI flags override these values where both exist.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .selector import Difficulty

DEFAULT_BOT_DELAY = 0.5


@dataclass(frozen=True)
class EngineConfig:
    difficulty: Difficulty = Difficulty.HARD
    seed: int | None = None
    bot_delay: float = DEFAULT_BOT_DELAY


def _env_seed() -> int | None:
    raw = os.getenv("PRIBOT_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PRIBOT_SEED must be an integer, got {raw!r}") from None


def _env_delay() -> float:
    raw = os.getenv("PRIBOT_BOT_DELAY")
    if raw is None or not raw.strip():
        return DEFAULT_BOT_DELAY
    try:
        delay = float(raw)
    except ValueError:
        raise ValueError(f"PRIBOT_BOT_DELAY must be a number, got {raw!r}") from None
    if delay < 0:
        raise ValueError(f"PRIBOT_BOT_DELAY must be >= 0, got {delay}")
    return delay


def load_config() -> EngineConfig:
    """Read PRIBOT_DIFFICULTY, PRIBOT_SEED and PRIBOT_BOT_DELAY."""
    raw_difficulty = os.getenv("PRIBOT_DIFFICULTY")
    difficulty = Difficulty.parse(raw_difficulty) if raw_difficulty else Difficulty.HARD
    return EngineConfig(difficulty=difficulty, seed=_env_seed(), bot_delay=_env_delay())
