"""
Caller-side game session: mode and difficulty menus, turns, reset.

The engine functions stay stateless; this is the state a front-end keeps
between calls. Flow:

    MENU --choose_mode(2p)--> PLAYING
    MENU --choose_mode(bot)--> CHOOSING_DIFFICULTY --choose_difficulty--> PLAYING
    CHOOSING_DIFFICULTY --back--> MENU
    PLAYING --terminal outcome--> FINISHED --reset--> PLAYING
    any --to_menu--> MENU
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .board import EMPTY_BOARD, Board, Cell, apply, other
from .errors import SessionError
from .outcome import IN_PROGRESS, Outcome, Win, evaluate
from .selector import Difficulty, RandomSource, make_rng, select_move

logger = logging.getLogger(__name__)


class Mode(Enum):
    TWO_PLAYER = "2p"
    BOT = "bot"


class Phase(Enum):
    MENU = "menu"
    CHOOSING_DIFFICULTY = "choosing_difficulty"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class GameSession:
    board: Board = EMPTY_BOARD
    turn: Cell = Cell.X
    outcome: Outcome = IN_PROGRESS
    mode: Optional[Mode] = None
    difficulty: Optional[Difficulty] = None
    phase: Phase = Phase.MENU
    bot_mark: Cell = Cell.O
    rng: RandomSource = field(default_factory=make_rng)

    def _require(self, *phases: Phase) -> None:
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise SessionError(f"Not allowed in phase {self.phase.value} (needs {allowed})")

    def _enter(self, phase: Phase) -> None:
        logger.debug("session phase %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def choose_mode(self, mode: Mode) -> None:
        self._require(Phase.MENU)
        self.mode = Mode(mode)
        if self.mode is Mode.BOT:
            self._enter(Phase.CHOOSING_DIFFICULTY)
        else:
            self._clear_board()
            self._enter(Phase.PLAYING)

    def choose_difficulty(self, difficulty: Difficulty) -> None:
        self._require(Phase.CHOOSING_DIFFICULTY)
        self.difficulty = Difficulty(difficulty)
        self._clear_board()
        self._enter(Phase.PLAYING)

    def back(self) -> None:
        self._require(Phase.CHOOSING_DIFFICULTY)
        self.mode = None
        self._enter(Phase.MENU)

    @property
    def bot_turn(self) -> bool:
        return self.phase is Phase.PLAYING and self.mode is Mode.BOT and self.turn == self.bot_mark

    @property
    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return self.outcome.line if isinstance(self.outcome, Win) else None

    def _place(self, index: int) -> Outcome:
        self.board = apply(self.board, index, self.turn)
        self.outcome = evaluate(self.board)
        if self.outcome.is_terminal:
            logger.debug("game over: %s", self.outcome)
            self._enter(Phase.FINISHED)
        else:
            self.turn = other(self.turn)
        return self.outcome

    def play(self, index: int) -> Outcome:
        """Place the current player's mark at `index` for a human player."""
        self._require(Phase.PLAYING)
        if self.bot_turn:
            raise SessionError("It is the bot's turn")
        return self._place(index)

    def bot_move(self) -> int:
        """Let the bot pick and play its move; returns the chosen index."""
        self._require(Phase.PLAYING)
        if not self.bot_turn:
            raise SessionError("It is not the bot's turn")
        if self.difficulty is None:
            raise SessionError("No difficulty selected")
        mv = select_move(self.board, self.bot_mark, self.difficulty, self.rng)
        self._place(mv)
        return mv

    def _clear_board(self) -> None:
        self.board = EMPTY_BOARD
        self.turn = Cell.X
        self.outcome = IN_PROGRESS

    def reset(self) -> None:
        """Start another game with the same mode and difficulty."""
        self._require(Phase.PLAYING, Phase.FINISHED)
        self._clear_board()
        self._enter(Phase.PLAYING)

    def to_menu(self) -> None:
        self._clear_board()
        self.mode = None
        self.difficulty = None
        self._enter(Phase.MENU)
