from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field

from merge2048.fsm import SessionPhase, TerminalReason
from merge2048.grid import Direction
from merge2048.modes import Mode, ModeId
from merge2048.session import SessionView


class NewGameRequest(BaseModel):
    # Omitted -> restart under the current mode.
    mode: ModeId | None = None


class SwitchModeRequest(BaseModel):
    mode: ModeId


class MoveRequest(BaseModel):
    direction: Direction


class KeyRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=32)


class SwipeRequest(BaseModel):
    dx: float
    dy: float


class SpawnOptionOut(BaseModel):
    value: int
    prob: float


class ModeInfo(BaseModel):
    id: ModeId
    label: str
    description: str
    timer_seconds: int | None = None
    spawn: list[SpawnOptionOut]

    @classmethod
    def from_mode(cls, mode: Mode) -> "ModeInfo":
        return cls(
            id=mode.id,
            label=mode.label,
            description=mode.description,
            timer_seconds=mode.timer_seconds,
            spawn=[SpawnOptionOut(value=o.value, prob=o.prob) for o in mode.spawn],
        )


class ModeListResponse(BaseModel):
    modes: list[ModeInfo]


class SessionState(BaseModel):
    session_id: UUID
    mode: ModeId
    mode_label: str
    board: list[list[int]]
    score: int
    best_score: int
    phase: SessionPhase
    terminal: bool
    reason: TerminalReason | None = None
    time_remaining: int | None = None
    can_undo: bool = False

    @classmethod
    def from_view(cls, view: SessionView) -> "SessionState":
        return cls(
            session_id=view.session_id,
            mode=view.mode.id,
            mode_label=view.mode.label,
            board=view.board,
            score=view.score,
            best_score=view.best_score,
            phase=view.phase,
            terminal=view.terminal,
            reason=view.reason,
            time_remaining=view.time_remaining,
            can_undo=view.can_undo,
        )


class MoveResponse(BaseModel):
    moved: bool
    gained: int = 0
    state: SessionState


class UndoResponse(BaseModel):
    undone: bool
    state: SessionState


class BestScoreResponse(BaseModel):
    mode: ModeId
    best_score: int
