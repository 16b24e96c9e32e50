import pytest

from pribot.board import (
    EMPTY_BOARD,
    Cell,
    apply,
    as_board,
    current_player,
    empty_cells,
    is_valid_state,
    other,
    parse_board,
    render_board,
    serialize_board,
)
from pribot.errors import IllegalMove

X, O, E = Cell.X, Cell.O, Cell.EMPTY


def test_empty_board_has_nine_empty_cells():
    assert len(EMPTY_BOARD) == 9
    assert all(c == E for c in EMPTY_BOARD)
    assert empty_cells(EMPTY_BOARD) == list(range(9))


def test_apply_returns_new_board_and_leaves_input_untouched():
    before = EMPTY_BOARD
    after = apply(before, 4, X)
    assert before == EMPTY_BOARD
    assert after[4] == X
    assert [i for i, c in enumerate(after) if c != E] == [4]


def test_apply_does_not_mutate_list_input():
    board = [1, 0, 0, 0, 2, 0, 0, 0, 0]
    snapshot = list(board)
    out = apply(board, 8, X)
    assert board == snapshot
    assert isinstance(out, tuple)
    assert out[8] == X


@pytest.mark.parametrize("idx", [-1, 9, 100])
def test_apply_rejects_out_of_range(idx):
    with pytest.raises(IllegalMove) as exc:
        apply(EMPTY_BOARD, idx, X)
    assert exc.value.index == idx


def test_apply_rejects_non_integer_index():
    with pytest.raises(IllegalMove):
        apply(EMPTY_BOARD, "4", X)


def test_apply_rejects_occupied_cell():
    b = apply(EMPTY_BOARD, 0, X)
    with pytest.raises(IllegalMove, match="already holds X"):
        apply(b, 0, O)


def test_apply_rejects_empty_mark():
    with pytest.raises(IllegalMove):
        apply(EMPTY_BOARD, 0, E)


def test_illegal_move_is_a_value_error():
    with pytest.raises(ValueError):
        apply(EMPTY_BOARD, 9, X)


def test_as_board_accepts_none_for_empty():
    b = as_board([X, X, None, O, O, None, None, None, None])
    assert b == (X, X, E, O, O, E, E, E, E)


@pytest.mark.parametrize("bad", [[0] * 8, [0] * 10, [0] * 8 + [3]])
def test_as_board_rejects_malformed(bad):
    with pytest.raises(ValueError):
        as_board(bad)


def test_other_and_current_player():
    assert other(X) == O
    assert other(O) == X
    with pytest.raises(ValueError):
        other(E)
    assert current_player(EMPTY_BOARD) == X
    assert current_player(apply(EMPTY_BOARD, 0, X)) == O


def test_is_valid_state():
    assert is_valid_state(EMPTY_BOARD)
    assert is_valid_state((1, 1, 1, 2, 2, 0, 0, 0, 0))
    # counts off
    assert not is_valid_state((2, 0, 0, 0, 0, 0, 0, 0, 0))
    # both players have a line
    assert not is_valid_state((1, 1, 1, 2, 2, 2, 0, 0, 0))
    # O has a line but X already moved again
    assert not is_valid_state((2, 2, 2, 1, 1, 0, 1, 1, 0))


def test_parse_and_serialize():
    assert parse_board("XX.OO....") == (X, X, E, O, O, E, E, E, E)
    assert parse_board("110220000") == parse_board("xx-oo____")
    assert serialize_board(parse_board("XX.OO....")) == "110220000"
    for bad in ["abc", "0123456789", "11022000z"]:
        with pytest.raises(ValueError):
            parse_board(bad)


def test_render_board_shape():
    text = render_board(parse_board("X...O...."))
    lines = text.splitlines()
    assert len(lines) == 5
    assert lines[0].strip().startswith("X")
    assert "O" in lines[2]
