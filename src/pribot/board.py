"""
Board model: cells, board tuples, serialization and move application.
Notes:
- A board is a tuple of 9 cells: 0=empty, 1=X, 2=O. X always starts.
- Row of index i is i // 3, column is i % 3.
- Boards are values. `apply` returns a new tuple and never touches its input.
"""
import operator
from enum import IntEnum
from typing import Iterable, List, Tuple

from .errors import IllegalMove


class Cell(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    @property
    def symbol(self) -> str:
        return '.' if self is Cell.EMPTY else self.name


Board = Tuple[Cell, ...]

SIZE = 9
MARKS = (Cell.X, Cell.O)
EMPTY_BOARD: Board = tuple([Cell.EMPTY] * SIZE)

# rows, columns, diagonals; evaluation order depends on this ordering
LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

_CHAR_TO_CELL = {
    '0': Cell.EMPTY, '.': Cell.EMPTY, '-': Cell.EMPTY, '_': Cell.EMPTY,
    '1': Cell.X, 'X': Cell.X,
    '2': Cell.O, 'O': Cell.O,
}


def as_board(cells: Iterable) -> Board:
    """Normalize any 9-long sequence of 0/1/2 (or Cell, or None for empty) to a Board."""
    out = []
    for v in cells:
        if v is None:
            v = 0
        try:
            out.append(Cell(v))
        except ValueError:
            raise ValueError(f"Unknown cell value: {v!r}") from None
    if len(out) != SIZE:
        raise ValueError(f"Board must have {SIZE} cells, got {len(out)}")
    return tuple(out)


def other(mark: Cell) -> Cell:
    if mark == Cell.X:
        return Cell.O
    if mark == Cell.O:
        return Cell.X
    raise ValueError(f"Not a player mark: {mark!r}")


def empty_cells(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == Cell.EMPTY]


def apply(board: Board, index: int, mark: Cell) -> Board:
    try:
        index = operator.index(index)
    except TypeError:
        raise IllegalMove(index, "index must be an integer") from None
    if not 0 <= index < SIZE:
        raise IllegalMove(index, f"index out of range [0, {SIZE})")
    if mark not in MARKS:
        raise IllegalMove(index, f"{mark!r} is not a player mark")
    board = as_board(board)
    if board[index] != Cell.EMPTY:
        raise IllegalMove(index, f"cell already holds {board[index].name}")
    lst = list(board)
    lst[index] = Cell(mark)
    return tuple(lst)


def piece_counts(board: Board) -> Tuple[int, int]:
    return board.count(Cell.X), board.count(Cell.O)


def current_player(board: Board) -> Cell:
    x, o = piece_counts(board)
    return Cell.X if x == o else Cell.O


def is_valid_state(board: Board) -> bool:
    """True when the board is reachable by alternating play with X first."""
    x_count, o_count = piece_counts(board)
    if not (x_count == o_count or x_count == o_count + 1):
        return False

    def count_wins(p: Cell) -> int:
        return sum(1 for line in LINES if all(board[i] == p for i in line))

    x_wins, o_wins = count_wins(Cell.X), count_wins(Cell.O)
    if x_wins and o_wins:
        return False
    if x_wins and x_count != o_count + 1:
        return False
    if o_wins and x_count != o_count:
        return False
    return True


def serialize_board(board: Board) -> str:
    return ''.join(str(int(cell)) for cell in board)


def parse_board(raw: str) -> Board:
    """Parse 9 characters of 0/1/2 or X/O/. into a Board."""
    raw = raw.strip().upper()
    if len(raw) != SIZE or any(c not in _CHAR_TO_CELL for c in raw):
        raise ValueError("Invalid board string. Must be 9 chars of 0/1/2 or X/O/.")
    return tuple(_CHAR_TO_CELL[c] for c in raw)


def render_board(board: Board) -> str:
    rows = []
    for r in range(3):
        rows.append(' ' + ' | '.join(Cell(board[r * 3 + c]).symbol for c in range(3)))
    return '\n---+---+---\n'.join(rows)
