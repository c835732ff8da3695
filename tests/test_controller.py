from __future__ import annotations

import random

import pytest

from merge2048.best_scores import RedisBestScoreStore
from merge2048.controller import GameController
from merge2048.grid import Direction
from merge2048.modes import ModeId


@pytest.fixture()
def controller(store: RedisBestScoreStore) -> GameController:
    seeds = iter(range(1000))
    return GameController(store=store, rng_factory=lambda: random.Random(next(seeds)))


def test_operations_need_a_session(controller: GameController) -> None:
    assert controller.session is None
    with pytest.raises(LookupError):
        controller.move(Direction.left)
    with pytest.raises(LookupError):
        controller.view()


def test_new_game_defaults_to_classic(controller: GameController) -> None:
    session = controller.new_game()
    assert session.mode.id == ModeId.classic
    assert controller.view().score == 0


def test_new_game_without_mode_restarts_current_mode(controller: GameController) -> None:
    first = controller.new_game(ModeId.prime)
    second = controller.new_game()

    assert second is not first
    assert second.session_id != first.session_id
    assert second.mode.id == ModeId.prime


def test_switch_mode_shows_that_modes_best(controller: GameController, store: RedisBestScoreStore) -> None:
    store.save(ModeId.classic, 64)
    store.save(ModeId.fibonacci, 34)

    controller.new_game(ModeId.classic)
    assert controller.view().best_score == 64

    controller.switch_mode("fibonacci")
    assert controller.view().mode.id == ModeId.fibonacci
    assert controller.view().best_score == 34
    assert controller.best_score_for(ModeId.classic) == 64


def test_switch_mode_cancels_previous_countdown(controller: GameController) -> None:
    timed = controller.new_game(ModeId.timed)
    assert timed.countdown is not None and timed.countdown.running

    controller.switch_mode(ModeId.classic)

    assert timed.countdown.cancelled is True
    # A stale tick against the torn-down session does nothing.
    timed.tick()
    assert timed.countdown.remaining == 120
    assert timed.terminal is False


def test_unknown_mode_keeps_current_session(controller: GameController) -> None:
    session = controller.new_game(ModeId.classic)
    with pytest.raises(ValueError):
        controller.switch_mode("hexagonal")
    assert controller.session is session


def test_move_and_undo_delegate_to_session(controller: GameController) -> None:
    session = controller.new_game(ModeId.classic)
    session.board = [[2, 2, 0, 0], [0] * 4, [0] * 4, [0] * 4]

    assert controller.move("left").moved is True
    assert controller.view().score == 4
    assert controller.undo() is True
    assert controller.view().score == 0
    assert controller.undo() is False


def test_tick_delegates_to_session(controller: GameController) -> None:
    session = controller.new_game(ModeId.timed)
    controller.tick()
    assert session.countdown is not None
    assert session.countdown.remaining == 119
