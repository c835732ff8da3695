from __future__ import annotations

from merge2048.best_scores import RedisBestScoreStore
from merge2048.controller import GameController, get_controller, init_controller, is_controller_initialized
from merge2048.infra.redis_client import create_redis


def init_controller_for_app() -> GameController:
    """Startup hook: bind the controller to the Redis-backed best-score store.

    Leaves an already initialized controller (e.g. one built by tests around fakeredis) alone.
    """

    if is_controller_initialized():
        return get_controller()
    return init_controller(store=RedisBestScoreStore(r=create_redis()))


def get_game_controller() -> GameController:
    return get_controller()
