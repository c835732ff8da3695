from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from uuid import UUID, uuid4

from merge2048.best_scores import BestScoreStore
from merge2048.controls import InvalidDirection, parse_direction
from merge2048.countdown import Countdown
from merge2048.fsm import SessionFSM, SessionPhase, TerminalReason
from merge2048.grid import BOARD_SIZE, Board, Direction, copy_board, empty_board, is_game_over, slide, spawn_tile
from merge2048.history import HistoryStack
from merge2048.modes import Mode


logger = logging.getLogger(__name__)

INITIAL_TILES = 2


@dataclass(frozen=True, slots=True)
class MoveResult:
    moved: bool
    gained: int = 0
    spawned: tuple[int, int, int] | None = None


@dataclass(frozen=True, slots=True)
class SessionView:
    """Everything a renderer needs after an operation."""

    session_id: UUID
    mode: Mode
    board: Board
    score: int
    best_score: int
    phase: SessionPhase
    reason: TerminalReason | None
    time_remaining: int | None
    can_undo: bool

    @property
    def terminal(self) -> bool:
        return self.phase == SessionPhase.terminal


class Session:
    """One game under one mode.

    Contract:
      - built with `new_game`; a finished session is never restarted, the
        controller builds a new one instead.
      - every mutating call is a no-op once the session is terminal.
      - leaving the active state cancels the countdown.
    """

    def __init__(
        self,
        *,
        mode: Mode,
        store: BestScoreStore,
        rng: random.Random | None = None,
        size: int = BOARD_SIZE,
    ) -> None:
        self.session_id = uuid4()
        self.mode = mode
        self.store = store
        self.rng = rng or random.Random()
        self.board: Board = empty_board(size)
        self.score = 0
        self.history = HistoryStack()
        self.fsm = SessionFSM()
        self.best_score = store.load(mode.id)
        self.countdown = Countdown(mode.timer_seconds) if mode.timer_seconds else None

    @classmethod
    def new_game(
        cls,
        mode: Mode,
        store: BestScoreStore,
        *,
        rng: random.Random | None = None,
        size: int = BOARD_SIZE,
    ) -> "Session":
        session = cls(mode=mode, store=store, rng=rng, size=size)
        for _ in range(INITIAL_TILES):
            spawn_tile(session.board, mode, session.rng)
        logger.info("New %s session %s (best=%s)", mode.id.value, session.session_id, session.best_score)
        return session

    @property
    def terminal(self) -> bool:
        return self.fsm.is_terminal

    @property
    def reason(self) -> TerminalReason | None:
        return self.fsm.reason

    def move(self, direction: Direction | str) -> MoveResult:
        if self.terminal:
            return MoveResult(moved=False)

        try:
            d = parse_direction(direction)
        except InvalidDirection as e:
            logger.debug("Ignoring move: %s", e)
            return MoveResult(moved=False)

        outcome = slide(self.board, d, self.mode)
        if not outcome.moved:
            return MoveResult(moved=False)

        self.history.push(self.board, self.score)
        self.score += outcome.gained
        self.board = outcome.board
        spawned = spawn_tile(self.board, self.mode, self.rng)

        if self.score > self.best_score:
            self.best_score = self.score
            self.store.save(self.mode.id, self.best_score)

        # The board can only lock up on a move that fills it, but the scan is
        # a handful of comparisons so it runs after every accepted move.
        if is_game_over(self.board, self.mode):
            self._end(TerminalReason.no_moves)

        return MoveResult(moved=True, gained=outcome.gained, spawned=spawned)

    def undo(self) -> bool:
        if self.terminal:
            return False
        snapshot = self.history.pop()
        if snapshot is None:
            return False
        self.board = snapshot.board()
        self.score = snapshot.score
        return True

    def tick(self) -> bool:
        """One countdown second. Returns True if the session is terminal afterwards."""

        if self.terminal or self.countdown is None:
            return self.terminal
        if self.countdown.tick():
            self._end(TerminalReason.time_expired)
        return self.terminal

    def teardown(self) -> None:
        if self.countdown is not None:
            self.countdown.cancel()

    def _end(self, reason: TerminalReason) -> None:
        self.teardown()
        self.fsm.end(reason)
        logger.info("Session %s ended: %s (score=%s)", self.session_id, reason.value, self.score)

    def view(self) -> SessionView:
        return SessionView(
            session_id=self.session_id,
            mode=self.mode,
            board=copy_board(self.board),
            score=self.score,
            best_score=self.best_score,
            phase=self.fsm.phase,
            reason=self.reason,
            time_remaining=self.countdown.remaining if self.countdown is not None else None,
            can_undo=len(self.history) > 0 and not self.terminal,
        )
