from collections import Counter

import pytest

from pribot.board import EMPTY_BOARD, Cell, apply, empty_cells, other, parse_board
from pribot.errors import NoLegalMove
from pribot.outcome import Draw, evaluate
from pribot.selector import (
    MEDIUM_OPTIMAL_PROBABILITY,
    Difficulty,
    best_move,
    make_rng,
    move_scores,
    score,
    select_move,
)

X, O = Cell.X, Cell.O


def test_takes_immediate_win_over_earlier_winning_cell():
    # O can win now at 5; playing 2 also wins, but only later
    b = parse_board("XX.OO....")
    assert select_move(b, O, Difficulty.HARD, make_rng(0)) == 5
    scores = move_scores(b, O)
    assert scores[5] == 9
    assert scores[2] < scores[5]


def test_blocks_row_completion():
    b = parse_board("XX..O....")
    assert select_move(b, O, Difficulty.HARD, make_rng(0)) == 2


def test_takes_win_for_x():
    b = parse_board("XX.OO....")
    assert best_move(b, X) == 2


def test_faster_win_scores_higher_than_slower():
    b = parse_board("XX.OO....")
    scores = move_scores(b, X)
    assert scores[2] == 9
    assert all(v < 9 for i, v in scores.items() if i != 2)


def test_score_of_terminal_boards():
    won = parse_board("XXXOO....")
    assert score(won, X, depth=0) == 10
    assert score(won, O, depth=3) == -7
    assert score(parse_board("XOXXOOOXX"), X) == 0


def test_empty_board_all_moves_draw_and_first_index_wins_tie():
    scores = move_scores(EMPTY_BOARD, X)
    assert list(scores) == list(range(9))
    assert set(scores.values()) == {0}
    assert best_move(EMPTY_BOARD, X) == 0


def test_hard_vs_hard_self_play_draws():
    b = EMPTY_BOARD
    mark = X
    rng = make_rng(0)
    while not evaluate(b).is_terminal:
        b = apply(b, select_move(b, mark, Difficulty.HARD, rng), mark)
        mark = other(mark)
    assert isinstance(evaluate(b), Draw)


def test_empty_board_as_o_then_optimal_x_draws():
    b = EMPTY_BOARD
    first = select_move(b, O, Difficulty.HARD, make_rng(0))
    assert 0 <= first <= 8
    b = apply(b, first, O)
    mark = X
    while not evaluate(b).is_terminal:
        b = apply(b, best_move(b, mark), mark)
        mark = other(mark)
    assert isinstance(evaluate(b), Draw)


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_single_empty_cell_is_returned_at_every_tier(difficulty, seq_rng):
    b = parse_board("XOXXOOOX.")
    assert evaluate(b).is_terminal is False
    for values in ([0.0], [0.99], [0.7, 0.3]):
        assert select_move(b, X, difficulty, seq_rng(values)) == 8


def test_easy_is_uniform_under_deterministic_source(seq_rng):
    n = 9
    rng = seq_rng([(k + 0.5) / n for k in range(n)])
    counts = Counter(select_move(EMPTY_BOARD, X, Difficulty.EASY, rng) for _ in range(n * 50))
    assert counts == {i: 50 for i in range(n)}


def test_easy_only_picks_empty_cells(seq_rng):
    b = parse_board("X...O...X")
    rng = seq_rng([0.0, 0.2, 0.4, 0.6, 0.8, 0.999])
    picks = {select_move(b, O, Difficulty.EASY, rng) for _ in range(12)}
    assert picks == set(empty_cells(b))
    assert rng.calls == 12


def test_easy_roughly_uniform_with_seeded_generator():
    rng = make_rng(1234)
    trials = 9000
    counts = Counter(select_move(EMPTY_BOARD, X, Difficulty.EASY, rng) for _ in range(trials))
    assert set(counts) == set(range(9))
    for c in counts.values():
        assert 0.85 * trials / 9 < c < 1.15 * trials / 9


def test_medium_optimal_branch_uses_one_draw(seq_rng):
    b = parse_board("XX..O....")
    rng = seq_rng([MEDIUM_OPTIMAL_PROBABILITY - 0.01, 0.0])
    assert select_move(b, O, Difficulty.MEDIUM, rng) == 2
    assert rng.calls == 1


def test_medium_random_branch_uses_two_draws(seq_rng):
    b = parse_board("XX..O....")
    # 0.6 is not below the threshold; the second draw picks the last empty cell
    rng = seq_rng([MEDIUM_OPTIMAL_PROBABILITY, 0.99])
    assert select_move(b, O, Difficulty.MEDIUM, rng) == 8
    assert rng.calls == 2


def test_hard_consumes_no_draws(seq_rng):
    rng = seq_rng([0.5])
    select_move(parse_board("X........"), O, Difficulty.HARD, rng)
    assert rng.calls == 0


def test_same_seed_same_moves():
    b = parse_board("X...O....")
    a = [select_move(b, X, Difficulty.MEDIUM, make_rng(7)) for _ in range(5)]
    c = [select_move(b, X, Difficulty.MEDIUM, make_rng(7)) for _ in range(5)]
    assert a == c


@pytest.mark.parametrize("raw", ["XXXOO....", "XOXXOOOXX"])
def test_no_legal_move_on_terminal_board(raw):
    with pytest.raises(NoLegalMove):
        select_move(parse_board(raw), O, Difficulty.EASY, make_rng(0))


def test_select_move_rejects_bad_mark():
    with pytest.raises(ValueError):
        select_move(EMPTY_BOARD, Cell.EMPTY, Difficulty.HARD, make_rng(0))


def test_difficulty_parse():
    assert Difficulty.parse("HARD") is Difficulty.HARD
    assert Difficulty.parse(" medium ") is Difficulty.MEDIUM
    with pytest.raises(ValueError, match="expected one of"):
        Difficulty.parse("impossible")


def test_select_move_accepts_difficulty_value_string():
    assert select_move(parse_board("XX..O...."), O, "hard", make_rng(0)) == 2
