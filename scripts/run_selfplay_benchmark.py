#!/usr/bin/env python3
from __future__ import annotations

import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from pribot.board import EMPTY_BOARD, Cell, apply, other
from pribot.outcome import Win, evaluate
from pribot.selector import Difficulty, clear_cache, make_rng, select_move


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    games: int = 200
    x: Difficulty = Difficulty.MEDIUM
    o: Difficulty = Difficulty.HARD
    seed: int = 0


def play_game(cfg: Config, rng) -> Cell:
    b = EMPTY_BOARD
    mark = Cell.X
    tiers = {Cell.X: cfg.x, Cell.O: cfg.o}
    while not evaluate(b).is_terminal:
        b = apply(b, select_move(b, mark, tiers[mark], rng), mark)
        mark = other(mark)
    out = evaluate(b)
    return out.mark if isinstance(out, Win) else Cell.EMPTY


def main() -> int:
    cfg = Config()
    cold_times: List[float] = []
    game_times: List[float] = []
    results = {Cell.X: 0, Cell.O: 0, Cell.EMPTY: 0}
    for r in range(cfg.repeats):
        clear_cache()
        t0 = time.perf_counter()
        select_move(EMPTY_BOARD, Cell.X, Difficulty.HARD, make_rng(cfg.seed))
        t1 = time.perf_counter()
        cold_times.append(t1 - t0)
        rng = make_rng(cfg.seed + r)
        t2 = time.perf_counter()
        for _ in range(cfg.games):
            results[play_game(cfg, rng)] += 1
        t3 = time.perf_counter()
        game_times.append((t3 - t2) / cfg.games)
    m_cold, h_cold = ci95(cold_times)
    m_game, h_game = ci95(game_times)
    print(f"hard move from empty board (cold cache): mean={m_cold:.4f}s ± {h_cold:.4f}s (95% CI)")
    print(f"{cfg.x.value} vs {cfg.o.value} game: mean={m_game * 1000:.3f}ms ± {h_game * 1000:.3f}ms (95% CI)")
    print(f"x_wins={results[Cell.X]} o_wins={results[Cell.O]} draws={results[Cell.EMPTY]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
