from __future__ import annotations

import argparse
import csv
import logging
import sys
import time
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _ver
from typing import Optional

from .board import Cell, current_player, is_valid_state, parse_board, render_board, serialize_board
from .config import load_config
from .errors import EngineError
from .outcome import Win, evaluate
from .selector import Difficulty, make_rng, move_scores, best_move, select_move
from .session import GameSession, Mode, Phase

MARK_CHOICES = {"X": Cell.X, "O": Cell.O}
DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pribot", description="Tic-tac-toe engine with a minimax bot")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the bot's random source (default: PRIBOT_SEED or unseeded)",
    )

    p_eval = sub.add_parser("evaluate", help="Report the outcome of a board (9 chars, 0/1/2 or X/O/.)")
    p_eval.add_argument("--board", required=True, help="Board string, e.g., 110220000")

    p_move = sub.add_parser("move", help="Pick the bot's move for a board")
    p_move.add_argument("--board", help="Board string, e.g., 110220000 (omit with --stdin)")
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )
    p_move.add_argument(
        "--mark", choices=sorted(MARK_CHOICES), default=None, help="Mark to play (default: side to move)"
    )
    p_move.add_argument("--difficulty", choices=DIFFICULTY_CHOICES, default=None)

    p_an = sub.add_parser("analyze", help="Show minimax scores of every legal move for the side to move")
    p_an.add_argument("--board", required=True, help="Board string, e.g., 110220000")

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument("--mode", choices=[m.value for m in Mode], default=Mode.BOT.value)
    p_play.add_argument("--difficulty", choices=DIFFICULTY_CHOICES, default=None)
    p_play.add_argument(
        "--human", choices=sorted(MARK_CHOICES), default="X", help="Your mark in bot mode (X moves first)"
    )
    p_play.add_argument(
        "--delay", type=float, default=None, help="Seconds to pause before the bot moves"
    )

    p_self = sub.add_parser("selfplay", help="Play bot-vs-bot games from the empty board")
    p_self.add_argument("--games", type=int, default=100)
    p_self.add_argument("--x", dest="x_difficulty", choices=DIFFICULTY_CHOICES, default="hard")
    p_self.add_argument("--o", dest="o_difficulty", choices=DIFFICULTY_CHOICES, default="hard")

    return p


def _read_board(raw: str, require_valid: bool = True):
    b = parse_board(raw)
    if require_valid and not is_valid_state(b):
        raise ValueError("Board is not a valid reachable state.")
    return b


def _cmd_evaluate(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board, require_valid=False)
    out = evaluate(b)
    if isinstance(out, Win):
        logging.info("outcome=win winner=%s line=%s", out.mark.name, list(out.line))
    else:
        logging.info("outcome=%s winner=None line=None", out)
    return 0


def _cmd_move(ns: argparse.Namespace, cfg) -> int:
    difficulty = Difficulty(ns.difficulty) if ns.difficulty else cfg.difficulty
    rng = make_rng(ns.seed if ns.seed is not None else cfg.seed)
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["board", "move"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                b = _read_board(raw)
            except ValueError:
                continue
            if evaluate(b).is_terminal:
                continue
            mark = MARK_CHOICES[ns.mark] if ns.mark else current_player(b)
            w.writerow([serialize_board(b), select_move(b, mark, difficulty, rng)])
        return 0
    if not ns.board:
        raise ValueError("Either --board or --stdin is required.")
    b = _read_board(ns.board)
    mark = MARK_CHOICES[ns.mark] if ns.mark else current_player(b)
    mv = select_move(b, mark, difficulty, rng)
    logging.info("move=%d mark=%s difficulty=%s", mv, mark.name, difficulty.value)
    return 0


def _cmd_analyze(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    mark = current_player(b)
    scores = move_scores(b, mark)
    for idx, val in scores.items():
        logging.info("cell=%d row=%d col=%d score=%d", idx, idx // 3, idx % 3, val)
    logging.info("to_move=%s best=%d", mark.name, best_move(b, mark))
    return 0


def _prompt_index(session: GameSession) -> Optional[int]:
    while True:
        try:
            raw = input(f"{session.turn.name} to move, cell 0-8 (q to quit): ").strip().lower()
        except EOFError:
            return None
        if raw in ("q", "quit"):
            return None
        try:
            idx = int(raw)
        except ValueError:
            print("Enter a number from 0 to 8.")
            continue
        if idx in range(9) and session.board[idx] == Cell.EMPTY:
            return idx
        print("That cell is not available.")


def _cmd_play(ns: argparse.Namespace, cfg) -> int:
    delay = ns.delay if ns.delay is not None else cfg.bot_delay
    human = MARK_CHOICES[ns.human]
    session = GameSession(rng=make_rng(ns.seed if ns.seed is not None else cfg.seed))
    session.bot_mark = Cell.O if human == Cell.X else Cell.X
    session.choose_mode(Mode(ns.mode))
    if session.phase is Phase.CHOOSING_DIFFICULTY:
        session.choose_difficulty(Difficulty(ns.difficulty) if ns.difficulty else cfg.difficulty)

    while True:
        print(render_board(session.board))
        while session.phase is Phase.PLAYING:
            if session.bot_turn:
                time.sleep(delay)
                mv = session.bot_move()
                print(f"PriBot plays {mv}")
            else:
                idx = _prompt_index(session)
                if idx is None:
                    return 0
                session.play(idx)
            print(render_board(session.board))
        out = session.outcome
        if isinstance(out, Win):
            who = "PriBot" if session.mode is Mode.BOT and out.mark == session.bot_mark else f"Player {out.mark.name}"
            print(f"{who} wins! Line: {list(out.line)}")
        else:
            print("It's a draw!")
        try:
            again = input("Play again? [y/N] ").strip().lower()
        except EOFError:
            return 0
        if again not in ("y", "yes"):
            return 0
        session.reset()


def _cmd_selfplay(ns: argparse.Namespace, cfg) -> int:
    if ns.games < 1:
        raise ValueError(f"--games must be >= 1, got {ns.games}")
    rng = make_rng(ns.seed if ns.seed is not None else cfg.seed)
    tiers = {Cell.X: Difficulty(ns.x_difficulty), Cell.O: Difficulty(ns.o_difficulty)}
    tally = {"x_wins": 0, "o_wins": 0, "draws": 0}
    for _ in range(ns.games):
        session = GameSession(rng=rng)
        session.choose_mode(Mode.TWO_PLAYER)
        while session.phase is Phase.PLAYING:
            mark = session.turn
            session.play(select_move(session.board, mark, tiers[mark], rng))
        out = session.outcome
        if isinstance(out, Win):
            tally["x_wins" if out.mark == Cell.X else "o_wins"] += 1
        else:
            tally["draws"] += 1
    logging.info(
        "games=%d x=%s o=%s x_wins=%d o_wins=%d draws=%d",
        ns.games,
        ns.x_difficulty,
        ns.o_difficulty,
        tally["x_wins"],
        tally["o_wins"],
        tally["draws"],
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            print(_ver("pribot"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    try:
        cfg = load_config()
        if ns.cmd == "evaluate":
            return _cmd_evaluate(ns)
        if ns.cmd == "move":
            return _cmd_move(ns, cfg)
        if ns.cmd == "analyze":
            return _cmd_analyze(ns)
        if ns.cmd == "play":
            return _cmd_play(ns, cfg)
        if ns.cmd == "selfplay":
            return _cmd_selfplay(ns, cfg)
    except (EngineError, ValueError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
