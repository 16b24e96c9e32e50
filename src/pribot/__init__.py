"""pribot package.

Tic-tac-toe engine: board model, outcome evaluation and a minimax bot with
easy/medium/hard tiers, plus a caller-side session and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY_BOARD, LINES, Cell, apply
from .errors import IllegalMove, NoLegalMove
from .outcome import DRAW, IN_PROGRESS, Draw, InProgress, Win, evaluate
from .selector import Difficulty, make_rng, select_move

__all__ = [
    "Cell",
    "EMPTY_BOARD",
    "LINES",
    "apply",
    "evaluate",
    "select_move",
    "make_rng",
    "Difficulty",
    "InProgress",
    "Win",
    "Draw",
    "IN_PROGRESS",
    "DRAW",
    "IllegalMove",
    "NoLegalMove",
]
