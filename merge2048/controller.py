from __future__ import annotations

import logging
import random
from collections.abc import Callable

from merge2048.best_scores import BestScoreStore
from merge2048.grid import Direction
from merge2048.modes import DEFAULT_MODE, ModeId, get_mode
from merge2048.session import MoveResult, Session, SessionView


logger = logging.getLogger(__name__)


class GameController:
    """Owns the single active session and replaces it on new game / mode switch."""

    def __init__(
        self,
        *,
        store: BestScoreStore,
        rng_factory: Callable[[], random.Random] = random.Random,
    ) -> None:
        self.store = store
        self.rng_factory = rng_factory
        self._session: Session | None = None

    @property
    def session(self) -> Session | None:
        return self._session

    def require_session(self) -> Session:
        if self._session is None:
            raise LookupError("No active session")
        return self._session

    def new_game(self, mode_id: ModeId | str | None = None) -> Session:
        """Start over; with no mode given, restart under the current (or default) mode."""

        if mode_id is None:
            mode = self._session.mode if self._session is not None else get_mode(DEFAULT_MODE)
        else:
            mode = get_mode(mode_id)

        if self._session is not None:
            self._session.teardown()

        self._session = Session.new_game(mode, self.store, rng=self.rng_factory())
        return self._session

    def switch_mode(self, mode_id: ModeId | str) -> Session:
        mode = get_mode(mode_id)
        logger.info("Switching mode to %s", mode.id.value)
        return self.new_game(mode.id)

    def move(self, direction: Direction | str) -> MoveResult:
        return self.require_session().move(direction)

    def undo(self) -> bool:
        return self.require_session().undo()

    def tick(self) -> bool:
        return self.require_session().tick()

    def view(self) -> SessionView:
        return self.require_session().view()

    def best_score_for(self, mode_id: ModeId | str) -> int:
        mode = get_mode(mode_id)
        if self._session is not None and self._session.mode.id == mode.id:
            return self._session.best_score
        return self.store.load(mode.id)


_CONTROLLER: GameController | None = None


def init_controller(*, store: BestScoreStore) -> GameController:
    """Create the process-wide controller once.

    Safe to call multiple times; subsequent calls return the existing instance.
    """

    global _CONTROLLER
    if _CONTROLLER is None:
        _CONTROLLER = GameController(store=store)
    return _CONTROLLER


def is_controller_initialized() -> bool:
    return _CONTROLLER is not None


def reset_controller_for_tests() -> None:
    global _CONTROLLER
    if _CONTROLLER is not None and _CONTROLLER.session is not None:
        _CONTROLLER.session.teardown()
    _CONTROLLER = None


def get_controller() -> GameController:
    if _CONTROLLER is None:
        raise RuntimeError("Controller not initialized. Call init_controller() at startup.")
    return _CONTROLLER
