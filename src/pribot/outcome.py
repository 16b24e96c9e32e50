"""
Outcome evaluation: winner/draw checks over the 8 fixed lines.
Notes:
- Lines are scanned in the fixed row, column, diagonal order, so a board with
  two complete lines (unreachable in play) still gets one deterministic answer.
- A full board with no complete line is a draw.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .board import LINES, Board, Cell, as_board


@dataclass(frozen=True)
class InProgress:
    is_terminal = False

    def __str__(self) -> str:
        return "in_progress"


@dataclass(frozen=True)
class Win:
    mark: Cell
    line: Tuple[int, int, int]
    is_terminal = True

    def __str__(self) -> str:
        return f"win({self.mark.name})"


@dataclass(frozen=True)
class Draw:
    is_terminal = True

    def __str__(self) -> str:
        return "draw"


Outcome = Union[InProgress, Win, Draw]

IN_PROGRESS = InProgress()
DRAW = Draw()


def winning_line(board: Board) -> Optional[Tuple[int, int, int]]:
    board = as_board(board)
    for line in LINES:
        a, b, c = line
        v = board[a]
        if v != Cell.EMPTY and v == board[b] and v == board[c]:
            return line
    return None


def evaluate(board: Board) -> Outcome:
    board = as_board(board)
    line = winning_line(board)
    if line is not None:
        return Win(Cell(board[line[0]]), line)
    if Cell.EMPTY not in board:
        return DRAW
    return IN_PROGRESS
