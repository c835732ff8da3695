from __future__ import annotations

import random
from collections.abc import Generator

import fakeredis
import pytest

from merge2048.best_scores import RedisBestScoreStore
from merge2048.modes import Mode, ModeId, get_mode


@pytest.fixture()
def fake_redis() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def store(fake_redis: fakeredis.FakeRedis) -> RedisBestScoreStore:
    return RedisBestScoreStore(r=fake_redis, namespace="test")


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def classic() -> Mode:
    return get_mode(ModeId.classic)


@pytest.fixture()
def fibonacci() -> Mode:
    return get_mode(ModeId.fibonacci)


@pytest.fixture()
def prime() -> Mode:
    return get_mode(ModeId.prime)


@pytest.fixture()
def client_and_redis():
    """FastAPI TestClient whose controller persists best scores to fakeredis.

    The controller singleton is rebuilt per test so sessions never leak between tests.
    """

    from fastapi.testclient import TestClient

    from merge2048.api.routes import countdowns
    from merge2048.controller import init_controller, reset_controller_for_tests
    from merge2048.main import app

    r = fakeredis.FakeRedis(decode_responses=True)

    reset_controller_for_tests()
    init_controller(store=RedisBestScoreStore(r=r, namespace="variant"))
    with TestClient(app) as c:
        yield c, r
    countdowns.stop()
    reset_controller_for_tests()


@pytest.fixture()
def client(client_and_redis) -> Generator:
    c, _ = client_and_redis
    yield c
