from __future__ import annotations

from enum import StrEnum

from statemachine import State, StateMachine


class SessionPhase(StrEnum):
    active = "active"
    terminal = "terminal"


class TerminalReason(StrEnum):
    no_moves = "no_moves"
    time_expired = "time_expired"


class SessionFSM(StateMachine):
    """Lifecycle of one game session: active -> terminal.

    Terminal is final; starting over means building a new session.
    The FSM only guards the transition, the session owns the game data.
    """

    active = State(SessionPhase.active.value, value=SessionPhase.active.value, initial=True)
    terminal = State(SessionPhase.terminal.value, value=SessionPhase.terminal.value, final=True)

    finish = active.to(terminal)

    def __init__(self) -> None:
        self.reason: TerminalReason | None = None
        super().__init__()

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase(str(self.current_state.value))

    @property
    def is_terminal(self) -> bool:
        return self.current_state == self.terminal

    def end(self, reason: TerminalReason) -> None:
        if self.is_terminal:
            return
        self.reason = reason
        self.finish()
