"""
Move selection: exhaustive minimax plus the three difficulty tiers.
Scoring, from the maximizing mark's perspective:
- Win for the maximizing mark scores 10 - depth (faster wins score higher).
- Win for the other mark scores depth - 10 (slower losses score higher).
- Draw scores 0.
The top-level search scores every empty cell in ascending index order and keeps
the first cell reaching the best score.
"""
from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Dict, Optional, Protocol

import numpy as np

from .board import MARKS, Board, Cell, as_board, empty_cells, other
from .errors import NoLegalMove
from .outcome import Win, evaluate

logger = logging.getLogger(__name__)

WIN_SCORE = 10
MEDIUM_OPTIMAL_PROBABILITY = 0.6


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: str) -> "Difficulty":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {choices})") from None


class RandomSource(Protocol):
    def random(self) -> float:
        ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


@lru_cache(maxsize=None)
def _score(board: Board, maximizing_mark: Cell, depth: int, maximizing: bool) -> int:
    out = evaluate(board)
    if isinstance(out, Win):
        return WIN_SCORE - depth if out.mark == maximizing_mark else depth - WIN_SCORE
    if out.is_terminal:
        return 0
    mark = maximizing_mark if maximizing else other(maximizing_mark)
    scores = []
    for i in empty_cells(board):
        child = list(board)
        child[i] = mark
        scores.append(_score(tuple(child), maximizing_mark, depth + 1, not maximizing))
    return max(scores) if maximizing else min(scores)


def clear_cache() -> None:
    _score.cache_clear()


def score(board: Board, maximizing_mark: Cell, depth: int = 0, maximizing: bool = True) -> int:
    """Minimax value of `board` for `maximizing_mark`, `depth` plies below the search root."""
    return _score(as_board(board), Cell(maximizing_mark), depth, maximizing)


def _as_mark(mark) -> Cell:
    if mark not in MARKS:
        raise ValueError(f"Not a player mark: {mark!r}")
    return Cell(mark)


def _check_playable(board: Board) -> None:
    out = evaluate(board)
    if out.is_terminal:
        raise NoLegalMove(f"Game is already over ({out})")
    if not empty_cells(board):
        raise NoLegalMove("Board is full")


def move_scores(board: Board, mark: Cell) -> Dict[int, int]:
    """Score of every legal move for `mark`, keyed by cell index in ascending order."""
    board = as_board(board)
    mark = _as_mark(mark)
    _check_playable(board)
    result: Dict[int, int] = {}
    for i in empty_cells(board):
        child = list(board)
        child[i] = mark
        result[i] = _score(tuple(child), mark, 1, False)
    return result


def best_move(board: Board, mark: Cell) -> int:
    best_idx: Optional[int] = None
    best_val: Optional[int] = None
    for i, val in move_scores(board, mark).items():
        if best_val is None or val > best_val:
            best_idx, best_val = i, val
    if best_idx is None:
        raise NoLegalMove("Board is full")
    return best_idx


def random_move(board: Board, rng: RandomSource) -> int:
    moves = empty_cells(board)
    if not moves:
        raise NoLegalMove("Board is full")
    return moves[int(rng.random() * len(moves))]


def select_move(board: Board, mark: Cell, difficulty: Difficulty, rng: RandomSource) -> int:
    board = as_board(board)
    mark = _as_mark(mark)
    _check_playable(board)
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.EASY:
        mv = random_move(board, rng)
    elif difficulty is Difficulty.MEDIUM:
        if rng.random() < MEDIUM_OPTIMAL_PROBABILITY:
            mv = best_move(board, mark)
        else:
            mv = random_move(board, rng)
    else:
        mv = best_move(board, mark)
    logger.debug("selected move=%d mark=%s difficulty=%s", mv, mark.name, difficulty.value)
    return mv
